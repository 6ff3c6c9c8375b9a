"""
HTTP tests for the split and balance endpoints.

Money comes back as JSON strings with two decimals.
"""

from fastapi.testclient import TestClient

from billsplit.core.config import Settings
from billsplit.main import create_app

PREFIX = "/api/v1"


class TestSystem:
    def test_root(self, client):
        res = client.get("/")
        assert res.status_code == 200
        assert "is live" in res.json()["message"]

    def test_health(self, client):
        res = client.get(f"{PREFIX}/system/health")
        assert res.status_code == 200
        assert res.json()["status"] == "ok"


class TestSplitEndpoint:
    def test_equal_split(self, client):
        res = client.post(
            f"{PREFIX}/splits/",
            json={
                "method": "equal",
                "total_amount": "100.00",
                "splits": [{"user_id": "a"}, {"user_id": "b"}, {"user_id": "c"}],
            },
        )
        assert res.status_code == 200
        body = res.json()
        assert body["method"] == "equal"
        assert body["total_amount"] == "100.00"
        assert body["splits"] == [
            {"user_id": "a", "amount": "33.34"},
            {"user_id": "b", "amount": "33.33"},
            {"user_id": "c", "amount": "33.33"},
        ]

    def test_percentage_split(self, client):
        res = client.post(
            f"{PREFIX}/splits/",
            json={
                "method": "percentage",
                "total_amount": 200,
                "splits": [
                    {"user_id": "a", "percentage": 50},
                    {"user_id": "b", "percentage": 50},
                ],
            },
        )
        assert res.status_code == 200
        assert [s["amount"] for s in res.json()["splits"]] == ["100.00", "100.00"]

    def test_percentage_split_reconciles_by_default(self, client):
        res = client.post(
            f"{PREFIX}/splits/",
            json={
                "method": "percentage",
                "total_amount": "0.05",
                "splits": [
                    {"user_id": "a", "percentage": 50},
                    {"user_id": "b", "percentage": 50},
                ],
            },
        )
        assert [s["amount"] for s in res.json()["splits"]] == ["0.02", "0.03"]

    def test_percentage_split_without_reconciling(self):
        client = TestClient(
            create_app(Settings(LOG_ENABLED=False, REDISTRIBUTE_PERCENTAGE_REMAINDER=False))
        )
        res = client.post(
            f"{PREFIX}/splits/",
            json={
                "method": "percentage",
                "total_amount": "0.05",
                "splits": [
                    {"user_id": "a", "percentage": 50},
                    {"user_id": "b", "percentage": 50},
                ],
            },
        )
        assert [s["amount"] for s in res.json()["splits"]] == ["0.03", "0.03"]

    def test_reconciled_percentage_split_has_no_negative_share(self, client):
        res = client.post(
            f"{PREFIX}/splits/",
            json={
                "method": "percentage",
                "total_amount": "1.00",
                "splits": [
                    {"user_id": "a", "percentage": "0.4"},
                    {"user_id": "b", "percentage": "33.6"},
                    {"user_id": "c", "percentage": "33.5"},
                    {"user_id": "d", "percentage": "32.5"},
                ],
            },
        )
        assert res.status_code == 200
        assert [s["amount"] for s in res.json()["splits"]] == ["0.00", "0.33", "0.34", "0.33"]

    def test_exact_amounts_finer_than_cents_are_a_422(self, client):
        res = client.post(
            f"{PREFIX}/splits/",
            json={
                "method": "exact",
                "total_amount": "100",
                "splits": [
                    {"user_id": "a", "amount": "33.335"},
                    {"user_id": "b", "amount": "33.335"},
                    {"user_id": "c", "amount": "33.33"},
                ],
            },
        )
        assert res.status_code == 422

    def test_bad_percentages_are_a_400(self, client):
        res = client.post(
            f"{PREFIX}/splits/",
            json={
                "method": "percentage",
                "total_amount": "100.00",
                "splits": [
                    {"user_id": "a", "percentage": 33},
                    {"user_id": "b", "percentage": 33},
                    {"user_id": "c", "percentage": 33},
                ],
            },
        )
        assert res.status_code == 400
        assert res.json()["detail"] == "percentages must sum to 100"

    def test_exact_split(self, client):
        res = client.post(
            f"{PREFIX}/splits/",
            json={
                "method": "exact",
                "total_amount": "60",
                "splits": [
                    {"user_id": "a", "amount": "25.50"},
                    {"user_id": "b", "amount": "34.50"},
                ],
            },
        )
        assert res.status_code == 200
        assert [s["amount"] for s in res.json()["splits"]] == ["25.50", "34.50"]

    def test_exact_split_mismatch(self, client):
        res = client.post(
            f"{PREFIX}/splits/",
            json={
                "method": "exact",
                "total_amount": "60",
                "splits": [{"user_id": "a", "amount": "25"}, {"user_id": "b", "amount": "25"}],
            },
        )
        assert res.status_code == 400

    def test_exact_split_missing_amount(self, client):
        res = client.post(
            f"{PREFIX}/splits/",
            json={"method": "exact", "total_amount": "60", "splits": [{"user_id": "a"}]},
        )
        assert res.status_code == 400
        assert "amount" in res.json()["detail"]

    def test_request_shape_errors_are_422(self, client):
        res = client.post(
            f"{PREFIX}/splits/",
            json={"method": "equal", "total_amount": "-1", "splits": [{"user_id": "a"}]},
        )
        assert res.status_code == 422

    def test_validate(self, client):
        ok = client.post(
            f"{PREFIX}/splits/validate",
            json={"total_amount": "100.00", "amounts": ["50.00", "50.00"]},
        )
        short = client.post(
            f"{PREFIX}/splits/validate",
            json={"total_amount": "100.00", "amounts": ["50.00", "49.00"]},
        )
        assert ok.json() == {"valid": True}
        assert short.json() == {"valid": False}


DINNER = {
    "amount": "100",
    "paid_by": "A",
    "description": "Dinner",
    "splits": [{"user_id": "A", "amount": "50"}, {"user_id": "B", "amount": "50"}],
}


class TestBalanceEndpoints:
    def test_net_balance(self, client):
        res = client.post(
            f"{PREFIX}/balances/net",
            json={"expenses": [DINNER], "user_a": "A", "user_b": "B"},
        )
        assert res.status_code == 200
        body = res.json()
        assert body["net_balance"] == "50.00"
        assert body["direction"] == "B owes A"
        assert body["details"] == [{"from_user": "B", "to_user": "A", "amount": "50.00"}]

    def test_net_balance_reversed(self, client):
        res = client.post(
            f"{PREFIX}/balances/net",
            json={"expenses": [DINNER], "user_a": "B", "user_b": "A"},
        )
        assert res.json()["net_balance"] == "-50.00"
        assert res.json()["net_amount"] == "50.00"

    def test_group_plan(self, client):
        res = client.post(f"{PREFIX}/balances/group", json={"expenses": [DINNER]})
        assert res.status_code == 200
        body = res.json()
        assert body["net"] == {"A": "50.00", "B": "-50.00"}
        assert body["settlements"] == [{"from_id": "B", "to_id": "A", "amount": "50.00"}]

    def test_group_plan_after_settlement(self, client):
        res = client.post(
            f"{PREFIX}/balances/group",
            json={
                "expenses": [DINNER],
                "settlements": [{"from_user": "B", "to_user": "A", "amount": "50"}],
            },
        )
        assert res.json() == {"net": {}, "settlements": []}

    def test_accuracy(self, client):
        res = client.post(f"{PREFIX}/balances/accuracy", json={"expenses": [DINNER]})
        assert res.json() == {
            "is_valid": True,
            "total_expenses": "100.00",
            "total_splits": "100.00",
            "discrepancy": "0.00",
        }
