from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from dealmath.api.app import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestFlipRoute:
    def test_flip(self, client):
        resp = client.post("/api/v1/flip", json={
            "purchase_price": 200000,
            "arv": 300000,
            "renovation_costs": 40000,
            "holding_period_months": 6,
            "loan_type": "hardMoney",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert Decimal(data["cash_required"]) == Decimal("26000")
        assert Decimal(data["closing_costs"]["total"]) == Decimal("6000")
        assert data["is_hard_money"] is True
        assert data["validation"]["is_valid"] is True

    def test_unknown_loan_type_is_422_with_field(self, client):
        resp = client.post("/api/v1/flip", json={
            "purchase_price": 200000, "arv": 300000, "loan_type": "seller carry",
        })
        assert resp.status_code == 422
        assert resp.json()["field"] == "loan_type"


class TestBRRRRRoute:
    def test_infinite_return_serializes(self, client):
        resp = client.post("/api/v1/brrrr", json={
            "purchase_price": 150000,
            "down_payment_percent": 20,
            "renovation_costs": 30000,
            "monthly_rent": 3000,
            "arv": 300000,
            "refinance_ltv": 0.75,
        })
        assert resp.status_code == 200
        data = resp.json()
        coc = data["phase3"]["cash_on_cash_return"]
        assert coc == {"value": None, "is_infinite": True, "direction": "positive"}
        assert data["summary"]["is_infinite_return"] is True
        assert len(data["timeline"]) == 6

    def test_scenario_c(self, client):
        resp = client.post("/api/v1/brrrr", json={
            "purchase_price": 150000,
            "down_payment_percent": 20,
            "renovation_costs": 30000,
            "monthly_rent": 2200,
            "arv": 230000,
            "refinance_ltv": 0.75,
        })
        phase2 = resp.json()["phase2"]
        assert Decimal(phase2["refinance_amount"]) == Decimal("172500")
        assert Decimal(phase2["cash_returned"]) == Decimal("52500")


class TestRentalRoute:
    def test_rental(self, client):
        resp = client.post("/api/v1/rental", json={
            "purchase_price": 300000,
            "rent_per_unit": 2400,
            "down_payment_percent": 25,
            "interest_rate": 7,
            "loan_term_years": 30,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert Decimal(data["monthly_mortgage"]) == Decimal("1497")
        assert len(data["yearly_projections"]) == 5

    def test_unknown_strategy(self, client):
        resp = client.post("/api/v1/rental", json={"purchase_price": 300000, "strategy": "timeshare"})
        assert resp.status_code == 422
        assert resp.json()["field"] == "strategy"


class TestEstimateRoutes:
    def test_arv_from_comps(self, client):
        resp = client.post("/api/v1/arv", json={
            "subject_sqft": 1500,
            "purchase_price": 250000,
            "comparables": [
                {"sale_price": 300000, "sqft": 1500},
                {"sale_price": 310000, "sqft": 1550},
                {"sale_price": 290000, "sqft": 1450},
            ],
        })
        data = resp.json()
        assert data["method"] == "comparables"
        assert data["confidence"] == "high"
        assert Decimal(data["value"]) == Decimal("300000")

    def test_rehab(self, client):
        resp = client.post("/api/v1/rehab", json={
            "square_footage": 1500, "renovation_level": "moderate",
        })
        data = resp.json()
        assert data["level"] == "medium"
        assert Decimal(data["average"]) == Decimal("71250")
        assert len(data["line_items"]) == 7


class TestFinancingRoutes:
    def test_defaults(self, client):
        data = client.get("/api/v1/financing/house-hack").json()
        assert data["financing_type"] == "fha"
        assert Decimal(data["down_payment_percent"]) == Decimal("3.5")

    def test_unknown_strategy(self, client):
        resp = client.get("/api/v1/financing/timeshare")
        assert resp.status_code == 422

    def test_interest_rate_band(self, client):
        data = client.get(
            "/api/v1/interest-rate", params={"strategy": "rental", "units": 6}
        ).json()
        assert Decimal(data["min"]) <= Decimal(data["default"]) <= Decimal(data["max"])
        assert Decimal(data["default"]) == Decimal("8.0")
