"""
PMA Feasibility Analyzer

NPV / IRR / payback go-no-go calculator for PMA parts development.
"""

__version__ = "0.1.0"
