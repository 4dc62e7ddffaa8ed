"""
Tests for financial statement endpoints.
"""

from decimal import Decimal

import pytest


@pytest.fixture
def accounts(client):
    client.post("/accounting/accounts/seed")
    return {a["code"]: a["id"] for a in client.get("/accounting/accounts").json()}


def post(client, accounts, entry_date, debit_code, credit_code, amount):
    response = client.post("/accounting/journal-entries", json={
        "description": f"{debit_code}/{credit_code}",
        "entry_date": entry_date,
        "user_id": 1,
        "entries": [
            {"account_id": accounts[debit_code], "debit": amount},
            {"account_id": accounts[credit_code], "credit": amount},
        ],
    })
    assert response.status_code == 201
    return response.json()


class TestProfitAndLoss:

    def test_only_entries_in_period_count(self, client, accounts):
        post(client, accounts, "2026-04-30T18:00:00", "1000", "4000", "50.00")
        post(client, accounts, "2026-05-10T10:00:00", "1000", "4000", "200.00")
        post(client, accounts, "2026-05-31T23:00:00", "6000", "1000", "80.00")

        response = client.get("/accounting/reports/profit-and-loss", params={
            "start_date": "2026-05-01", "end_date": "2026-05-31",
        })
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["revenue"]["total"]) == Decimal("200.00")
        assert Decimal(data["expenses"]["total"]) == Decimal("80.00")
        assert Decimal(data["net_income"]) == Decimal("120.00")

    def test_start_after_end_returns_400(self, client):
        response = client.get("/accounting/reports/profit-and-loss", params={
            "start_date": "2026-06-01", "end_date": "2026-05-01",
        })
        assert response.status_code == 400

    def test_missing_dates_returns_422(self, client):
        response = client.get("/accounting/reports/profit-and-loss")
        assert response.status_code == 422


class TestBalanceSheet:

    def test_balance_sheet_sections(self, client, accounts):
        post(client, accounts, "2026-01-02T09:00:00", "1000", "3000", "1000.00")
        post(client, accounts, "2026-01-03T09:00:00", "1200", "2000", "300.00")

        data = client.get("/accounting/reports/balance-sheet", params={
            "as_of_date": "2026-01-31",
        }).json()

        assert Decimal(data["assets"]["total"]) == Decimal("1300.00")
        assert Decimal(data["liabilities"]["total"]) == Decimal("300.00")
        assert Decimal(data["equity"]["total"]) == Decimal("1000.00")
        assert [line["code"] for line in data["assets"]["accounts"]] == [
            "1000", "1100", "1200", "1500"
        ]

    def test_void_entry_not_reported(self, client, accounts):
        entry = post(client, accounts, "2026-01-02T09:00:00", "1000", "3000", "1000.00")
        client.post(f"/accounting/journal-entries/{entry['id']}/void")

        data = client.get("/accounting/reports/balance-sheet", params={
            "as_of_date": "2026-01-31",
        }).json()
        assert Decimal(data["assets"]["total"]) == Decimal("0")


class TestCashFlow:

    def test_operating_is_net_income(self, client, accounts):
        post(client, accounts, "2026-05-10T10:00:00", "1000", "4000", "200.00")
        post(client, accounts, "2026-05-11T10:00:00", "5000", "1200", "90.00")

        data = client.get("/accounting/reports/cash-flow", params={
            "start_date": "2026-05-01", "end_date": "2026-05-31",
        }).json()

        operating = data["operating_activities"]
        assert operating["items"][0]["description"] == "Net Income"
        assert Decimal(operating["total"]) == Decimal("110.00")
        assert data["investing_activities"]["items"] == []
        assert data["financing_activities"]["items"] == []
        assert Decimal(data["net_cash_flow"]) == Decimal("110.00")
