"""
Tests for journal API endpoints.
"""

from decimal import Decimal

import pytest


@pytest.fixture
def accounts(client):
    client.post("/accounting/accounts/seed")
    return {a["code"]: a["id"] for a in client.get("/accounting/accounts").json()}


def entry_payload(accounts, debit="100.00", credit="100.00", **kwargs):
    payload = {
        "description": "Owner investment",
        "user_id": 1,
        "entries": [
            {"account_id": accounts["1000"], "debit": debit},
            {"account_id": accounts["3000"], "credit": credit},
        ],
    }
    payload.update(kwargs)
    return payload


class TestPostJournalEntry:

    def test_balanced_entry_returns_201(self, client, accounts):
        response = client.post(
            "/accounting/journal-entries", json=entry_payload(accounts)
        )
        assert response.status_code == 201
        data = response.json()
        assert data["entry_number"] == "JE-0001"
        assert data["status"] == "posted"
        assert len(data["lines"]) == 2

    def test_unbalanced_entry_returns_400_with_totals(self, client, accounts):
        response = client.post(
            "/accounting/journal-entries",
            json=entry_payload(accounts, debit="500.00", credit="300.00"),
        )
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert Decimal(detail["total_debits"]) == Decimal("500.00")
        assert Decimal(detail["total_credits"]) == Decimal("300.00")

        assert client.get("/accounting/journal-entries").json() == []

    def test_single_line_returns_400(self, client, accounts):
        payload = entry_payload(accounts)
        payload["entries"] = payload["entries"][:1]
        response = client.post("/accounting/journal-entries", json=payload)
        assert response.status_code == 400
        assert "at least 2 lines" in response.json()["detail"]

    def test_too_many_decimals_returns_422(self, client, accounts):
        response = client.post(
            "/accounting/journal-entries",
            json=entry_payload(accounts, debit="10.005", credit="10.005"),
        )
        assert response.status_code == 422

    def test_unknown_account_returns_400(self, client, accounts):
        payload = entry_payload(accounts)
        payload["entries"][1]["account_id"] = 999
        response = client.post("/accounting/journal-entries", json=payload)
        assert response.status_code == 400


class TestReadJournal:

    def test_get_entry_with_lines(self, client, accounts):
        created = client.post(
            "/accounting/journal-entries", json=entry_payload(accounts)
        ).json()

        response = client.get(f"/accounting/journal-entries/{created['id']}")
        assert response.status_code == 200
        assert [line["account_id"] for line in response.json()["lines"]] == [
            accounts["1000"], accounts["3000"]
        ]

    def test_get_unknown_entry_returns_404(self, client):
        assert client.get("/accounting/journal-entries/999").status_code == 404

    def test_list_with_date_range(self, client, accounts):
        client.post("/accounting/journal-entries", json=entry_payload(
            accounts, entry_date="2026-02-01T09:00:00", description="February"
        ))
        client.post("/accounting/journal-entries", json=entry_payload(
            accounts, entry_date="2026-03-01T09:00:00", description="March"
        ))

        entries = client.get("/accounting/journal-entries", params={
            "start_date": "2026-03-01", "end_date": "2026-03-31",
        }).json()
        assert [e["description"] for e in entries] == ["March"]


class TestVoidJournalEntry:

    def test_void_returns_void_status(self, client, accounts):
        created = client.post(
            "/accounting/journal-entries", json=entry_payload(accounts)
        ).json()

        response = client.post(f"/accounting/journal-entries/{created['id']}/void")
        assert response.status_code == 200
        assert response.json()["status"] == "void"

        balance = client.get(
            f"/accounting/accounts/{accounts['1000']}/balance"
        ).json()
        assert Decimal(balance["balance"]) == Decimal("0")

    def test_void_unknown_entry_returns_404(self, client):
        response = client.post("/accounting/journal-entries/999/void")
        assert response.status_code == 404

    def test_void_twice_returns_400(self, client, accounts):
        created = client.post(
            "/accounting/journal-entries", json=entry_payload(accounts)
        ).json()
        client.post(f"/accounting/journal-entries/{created['id']}/void")
        response = client.post(f"/accounting/journal-entries/{created['id']}/void")
        assert response.status_code == 400
