"""
API routes for the feasibility analyzer.
"""

from fastapi import APIRouter

from pma_analyzer.api import calculations, exports

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
router.include_router(exports.router, prefix="/export", tags=["exports"])
