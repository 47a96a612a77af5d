"""
Tests for calculation, export and page endpoints.
"""

import pytest

from pma_analyzer.api.schemas import FeasibilityInput

# Client fixture is provided by conftest.py


class TestFeasibilityEndpoint:
    """Test /api/calculate/feasibility."""

    def test_defaults_endpoint(self, client):
        response = client.get("/api/calculate/defaults")
        assert response.status_code == 200
        data = response.json()
        assert data["ramp_rates"] == [23, 35, 53, 55, 55]
        assert data["discount_rate"] == 10
        assert data["use_terminal_value"] is True

    def test_empty_body_uses_defaults(self, client):
        response = client.post("/api/calculate/feasibility", json={})
        assert response.status_code == 200
        data = response.json()
        assert data["nre"] == 22945
        assert len(data["cash_flows"]) == 6
        assert data["cash_flows"][0] == -22945
        assert data["status"] == "GREEN"
        assert data["pass_count"] == 3
        assert data["status_message"].startswith("All criteria passed")
        assert data["display"]["nre"] == "$22,945.00"
        assert data["display"]["payback_period"] == "2.83 years"
        assert [row["year"] for row in data["cash_flow_table"]][-1] == "5 (TV)"

    def test_inputs_echoed(self, client):
        payload = {"part_number": "PN-4471", "sell_price": 2000, "ramp_rates": [10, 20]}
        data = client.post("/api/calculate/feasibility", json=payload).json()
        assert data["inputs"]["part_number"] == "PN-4471"
        assert data["inputs"]["ramp_rates"] == [10, 20]
        assert data["cash_flows"][3:] == [0, 0, 0]

    def test_non_finite_results_serialize_as_null(self, client):
        """Zero margin: IRR has no root and payback is never reached."""
        response = client.post(
            "/api/calculate/feasibility", json={"sell_price": 1125, "unit_cost": 1125}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["irr"] is None
        assert data["payback_period"] is None
        assert data["display"]["irr"] == "—"
        assert data["display"]["payback_period"] == "No payback"
        assert data["status"] == "RED"

    def test_yellow_status(self, client):
        data = client.post(
            "/api/calculate/feasibility", json={"threshold_irr": 50}
        ).json()
        assert data["status"] == "YELLOW"
        assert data["pass_irr"] is False

    def test_too_many_ramp_rates_rejected(self, client):
        response = client.post(
            "/api/calculate/feasibility", json={"ramp_rates": [10, 20, 30, 40, 50, 60]}
        )
        assert response.status_code == 422

    def test_invalid_number_rejected(self, client):
        response = client.post("/api/calculate/feasibility", json={"pma_fee": "lots"})
        assert response.status_code == 422


class TestMetricEndpoints:
    """Test /api/calculate/npv, /irr and /payback."""

    def test_npv(self, client):
        response = client.post(
            "/api/calculate/npv", json={"rate": 0.0, "cash_flows": [-100, 60, 60]}
        )
        assert response.status_code == 200
        assert response.json()["npv"] == pytest.approx(20)

    def test_npv_with_terminal_value(self, client):
        response = client.post(
            "/api/calculate/npv",
            json={"rate": 0.0, "cash_flows": [-100, 60, 60], "terminal_value": 30},
        )
        assert response.json()["npv"] == pytest.approx(50)

    def test_npv_at_minus_100_percent_is_null(self, client):
        response = client.post(
            "/api/calculate/npv", json={"rate": -1.0, "cash_flows": [-100, 60, 60]}
        )
        assert response.status_code == 200
        assert response.json()["npv"] is None

    def test_irr(self, client):
        data = client.post("/api/calculate/irr", json={"cash_flows": [-100, 110]}).json()
        assert data["converged"] is True
        assert data["irr"] == pytest.approx(0.10, abs=1e-6)

    def test_irr_not_bracketed(self, client):
        data = client.post("/api/calculate/irr", json={"cash_flows": [100, 10]}).json()
        assert data["converged"] is False
        assert data["irr"] is None

    def test_irr_requires_two_flows(self, client):
        response = client.post("/api/calculate/irr", json={"cash_flows": [-100]})
        assert response.status_code == 422

    @pytest.mark.parametrize(
        "cash_flows,outcome,payback_period",
        [
            ([-100, 50, 50], "recovered", 2.0),
            ([-100, 10, 10], "not_recovered", None),
            ([0, 10, 10], "undefined", None),
        ],
    )
    def test_payback(self, client, cash_flows, outcome, payback_period):
        data = client.post("/api/calculate/payback", json={"cash_flows": cash_flows}).json()
        assert data["outcome"] == outcome
        assert data["payback_period"] == payback_period


class TestExportEndpoints:
    """Test /api/export/csv and /api/export/pdf."""

    def test_export_csv(self, client):
        response = client.post("/api/export/csv", json={"part_number": "PN-4471"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment" in response.headers["content-disposition"]
        assert ".csv" in response.headers["content-disposition"]
        assert "TOTAL NRE COST" in response.text
        assert "PN-4471" in response.text

    def test_export_pdf(self, client):
        response = client.post("/api/export/pdf", json={})
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF-")


class TestPages:
    """Test the HTML calculator page and its download links."""

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_home_page_defaults(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "GREEN" in response.text
        assert "$22,945.00" in response.text
        assert "5 (TV)" in response.text

    def test_home_page_with_query(self, client):
        response = client.get("/", params={"submitted": "1", "threshold_irr": "50"})
        assert response.status_code == 200
        assert "YELLOW" in response.text
        # Checkbox absent after submit means terminal value is off
        assert "5 (TV)" not in response.text

    def test_home_page_invalid_number_reads_as_zero(self, client):
        response = client.get("/", params={"sell_price": "abc"})
        assert response.status_code == 200
        assert "RED" in response.text

    def test_report_csv_link(self, client):
        response = client.get("/report.csv", params={"part_number": "PN-9"})
        assert response.status_code == 200
        assert "PN-9" in response.text

    def test_report_pdf_link(self, client):
        response = client.get("/report.pdf")
        assert response.status_code == 200
        assert response.content.startswith(b"%PDF-")


class TestFormParsing:
    """Test FeasibilityInput.from_form."""

    def test_empty_form_is_defaults(self):
        assert FeasibilityInput.from_form({}) == FeasibilityInput()

    def test_ramp_fields(self):
        inputs = FeasibilityInput.from_form({"rr1": "10", "rr3": "30"})
        assert inputs.ramp_rates == [10, 0, 30, 0, 0]

    def test_checkbox_only_read_after_submit(self):
        assert FeasibilityInput.from_form({}).use_terminal_value is True
        assert FeasibilityInput.from_form({"submitted": "1"}).use_terminal_value is False
        submitted = {"submitted": "1", "use_terminal_value": "1"}
        assert FeasibilityInput.from_form(submitted).use_terminal_value is True

    def test_blank_and_non_finite_numbers_are_zero(self):
        inputs = FeasibilityInput.from_form({"pma_fee": "", "der_fee": "nan", "labor_rate": "inf"})
        assert inputs.pma_fee == 0
        assert inputs.der_fee == 0
        assert inputs.labor_rate == 0

    def test_text_fields(self):
        inputs = FeasibilityInput.from_form({"partner": "Acme Aero"})
        assert inputs.partner == "Acme Aero"
