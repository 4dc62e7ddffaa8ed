"""
Tests for the sale recording endpoints.
"""

from decimal import Decimal


def sale_payload(sale_id=1, total="150.00", cogs="90.00"):
    return {
        "sale_id": sale_id,
        "user_id": 7,
        "total": total,
        "cost_of_goods_sold": cogs,
        "payment_method": "cash",
    }


class TestRecordSale:

    def test_recorded_sale_returns_201(self, client):
        client.post("/accounting/accounts/seed")

        response = client.post("/accounting/sales", json=sale_payload())
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "recorded"
        assert data["journal_entry_id"] is not None

        entry = client.get(
            f"/accounting/journal-entries/{data['journal_entry_id']}"
        ).json()
        assert entry["description"] == "Sale #1 - cash"
        assert entry["reference_type"] == "sale"
        assert len(entry["lines"]) == 4

    def test_missing_chart_returns_202_needs_reconciliation(self, client):
        response = client.post("/accounting/sales", json=sale_payload())
        assert response.status_code == 202
        data = response.json()
        assert data["status"] == "needs_reconciliation"
        assert data["journal_entry_id"] is None
        assert "Required accounts not found" in data["error_message"]

        unreconciled = client.get("/accounting/sales/unreconciled").json()
        assert [p["sale_id"] for p in unreconciled] == [1]

    def test_retry_after_fix_records_sale(self, client):
        client.post("/accounting/sales", json=sale_payload())
        client.post("/accounting/accounts/seed")

        response = client.post("/accounting/sales", json=sale_payload())
        assert response.status_code == 201
        assert response.json()["status"] == "recorded"
        assert client.get("/accounting/sales/unreconciled").json() == []

    def test_duplicate_sale_posts_once(self, client):
        client.post("/accounting/accounts/seed")
        first = client.post("/accounting/sales", json=sale_payload()).json()
        second = client.post("/accounting/sales", json=sale_payload()).json()

        assert first["journal_entry_id"] == second["journal_entry_id"]
        assert len(client.get("/accounting/journal-entries").json()) == 1

    def test_sale_moves_cash_balance(self, client):
        client.post("/accounting/accounts/seed")
        client.post("/accounting/sales", json=sale_payload(total="150.00"))

        cash = client.get("/accounting/accounts").json()[0]
        balance = client.get(f"/accounting/accounts/{cash['id']}/balance").json()
        assert Decimal(balance["balance"]) == Decimal("150.00")

    def test_non_positive_total_returns_422(self, client):
        response = client.post("/accounting/sales", json=sale_payload(total="0"))
        assert response.status_code == 422
