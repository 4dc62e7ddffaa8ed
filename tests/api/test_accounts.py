"""
Tests for chart of accounts API endpoints.

These test the HTTP layer: status codes, response format and
error mapping. Business logic is tested in tests/services.
"""

from decimal import Decimal


class TestCreateAccount:

    def test_create_account_returns_201(self, client):
        response = client.post("/accounting/accounts", json={
            "code": "1000",
            "name": "Cash",
            "account_type": "asset",
        })
        assert response.status_code == 201

    def test_create_account_returns_data(self, client):
        data = client.post("/accounting/accounts", json={
            "code": "4000",
            "name": "Sales Revenue",
            "account_type": "revenue",
            "subtype": "retail",
        }).json()
        assert data["code"] == "4000"
        assert data["account_type"] == "revenue"
        assert data["normal_balance"] == "credit"
        assert data["is_active"] is True
        assert data["is_system"] is False

    def test_duplicate_code_returns_400(self, client):
        payload = {"code": "1000", "name": "Cash", "account_type": "asset"}
        client.post("/accounting/accounts", json=payload)
        response = client.post("/accounting/accounts", json=payload)
        assert response.status_code == 400
        assert "already exists" in response.json()["detail"]

    def test_unknown_type_returns_422(self, client):
        response = client.post("/accounting/accounts", json={
            "code": "1000", "name": "Cash", "account_type": "gold",
        })
        assert response.status_code == 422


class TestListAndGetAccounts:

    def test_seed_then_list(self, client):
        seeded = client.post("/accounting/accounts/seed").json()
        assert seeded["created"] == 17
        assert client.post("/accounting/accounts/seed").json()["created"] == 0

        accounts = client.get("/accounting/accounts").json()
        assert len(accounts) == 17
        assert accounts[0]["code"] == "1000"

    def test_filter_by_type(self, client):
        client.post("/accounting/accounts/seed")
        revenue = client.get(
            "/accounting/accounts", params={"account_type": "revenue"}
        ).json()
        assert [a["code"] for a in revenue] == ["4000", "4100"]

    def test_get_unknown_account_returns_404(self, client):
        assert client.get("/accounting/accounts/999").status_code == 404


class TestUpdateAccount:

    def test_patch_updates_name(self, client):
        account = client.post("/accounting/accounts", json={
            "code": "6000", "name": "Rent", "account_type": "expense",
        }).json()
        response = client.patch(
            f"/accounting/accounts/{account['id']}", json={"name": "Shop Rent"}
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Shop Rent"

    def test_patch_unknown_account_returns_404(self, client):
        response = client.patch("/accounting/accounts/999", json={"name": "X"})
        assert response.status_code == 404

    def test_deactivate_system_account_returns_400(self, client):
        client.post("/accounting/accounts/seed")
        cash = client.get("/accounting/accounts").json()[0]
        response = client.post(f"/accounting/accounts/{cash['id']}/deactivate")
        assert response.status_code == 400

    def test_change_system_account_code_returns_400(self, client):
        client.post("/accounting/accounts/seed")
        cash = client.get("/accounting/accounts").json()[0]

        response = client.patch(
            f"/accounting/accounts/{cash['id']}", json={"code": "1999"}
        )
        assert response.status_code == 400
        assert "cannot change its code" in response.json()["detail"]
        assert client.get(f"/accounting/accounts/{cash['id']}").json()["code"] == "1000"

    def test_parent_loop_returns_400(self, client):
        parent = client.post("/accounting/accounts", json={
            "code": "6000", "name": "Operating", "account_type": "expense",
        }).json()
        child = client.post("/accounting/accounts", json={
            "code": "6010", "name": "Rent", "account_type": "expense",
            "parent_account_id": parent["id"],
        }).json()

        response = client.patch(
            f"/accounting/accounts/{parent['id']}",
            json={"parent_account_id": child["id"]},
        )
        assert response.status_code == 400


class TestBalanceAndLedger:

    def _fund_cash(self, client, amount="500.00", entry_date=None):
        client.post("/accounting/accounts/seed")
        by_code = {a["code"]: a["id"] for a in client.get("/accounting/accounts").json()}
        payload = {
            "description": "Owner investment",
            "user_id": 1,
            "entries": [
                {"account_id": by_code["1000"], "debit": amount},
                {"account_id": by_code["3000"], "credit": amount},
            ],
        }
        if entry_date:
            payload["entry_date"] = entry_date
        response = client.post("/accounting/journal-entries", json=payload)
        assert response.status_code == 201
        return by_code

    def test_balance_after_posting(self, client):
        by_code = self._fund_cash(client)

        response = client.get(f"/accounting/accounts/{by_code['1000']}/balance")
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["balance"]) == Decimal("500.00")
        assert Decimal(data["debit_total"]) == Decimal("500.00")
        assert Decimal(data["credit_total"]) == Decimal("0")
        assert data["account_code"] == "1000"

    def test_balance_as_of_date(self, client):
        by_code = self._fund_cash(client, entry_date="2026-03-15T12:00:00")

        before = client.get(
            f"/accounting/accounts/{by_code['1000']}/balance",
            params={"as_of_date": "2026-03-14"},
        ).json()
        same_day = client.get(
            f"/accounting/accounts/{by_code['1000']}/balance",
            params={"as_of_date": "2026-03-15"},
        ).json()
        assert Decimal(before["balance"]) == Decimal("0")
        assert Decimal(same_day["balance"]) == Decimal("500.00")

    def test_nonexistent_account_balance_returns_404(self, client):
        response = client.get("/accounting/accounts/999/balance")
        assert response.status_code == 404

    def test_account_ledger(self, client):
        by_code = self._fund_cash(client)

        lines = client.get(f"/accounting/accounts/{by_code['1000']}/ledger").json()
        assert len(lines) == 1
        assert Decimal(lines[0]["debit"]) == Decimal("500.00")

    def test_ledger_of_unknown_account_returns_404(self, client):
        assert client.get("/accounting/accounts/999/ledger").status_code == 404
