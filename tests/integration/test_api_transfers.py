# tests/integration/test_api_transfers.py
from datetime import date, timedelta
from decimal import Decimal

from fastapi.testclient import TestClient


def _issue(client: TestClient, shareholder_id: str, amount: int, **extra: object) -> None:
    body = {"to_shareholder_id": shareholder_id, "shares_amount": amount, "equity_type": "PURCHASED"}
    body.update(extra)
    response = client.post("/api/equity/issue-shares", json=body)
    assert response.status_code == 200, response.text


def _total_owned(client: TestClient) -> int:
    return sum(h["shares_owned"] for h in client.get("/api/equity/shareholders").json())


# ---------- add shareholder ----------


def _issue_unallocated(client: TestClient, amount: int) -> None:
    proposal = client.post("/api/equity/issuance", json={"shares_issued": amount}).json()
    client.post(f"/api/equity/issuance/{proposal['issuance']['id']}/approve")


def test_add_shareholder_allocates_issued_shares(client: TestClient) -> None:
    _issue_unallocated(client, 100)
    response = client.post(
        "/api/equity/shareholders",
        json={"shareholder_id": "angel-1", "shares_owned": 60, "acquisition_price": "0.50"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["shares_owned"] == 60
    assert data["equity_type"] == "PURCHASED"
    assert Decimal(data["investment_total"]) == Decimal("30")

    config = client.get("/api/equity/config").json()
    assert config["issued_shares"] == 100
    assert config["allocated_shares"] == 60


def test_add_shareholder_beyond_unallocated_returns_400(client: TestClient) -> None:
    _issue_unallocated(client, 100)
    client.post("/api/equity/shareholders", json={"shareholder_id": "angel-1", "shares_owned": 60})

    response = client.post("/api/equity/shareholders", json={"shareholder_id": "angel-2", "shares_owned": 50})
    assert response.status_code == 400
    assert "40" in response.json()["detail"]


def test_add_existing_shareholder_returns_400(client: TestClient) -> None:
    _issue_unallocated(client, 100)
    client.post("/api/equity/shareholders", json={"shareholder_id": "angel-1", "shares_owned": 10})
    response = client.post("/api/equity/shareholders", json={"shareholder_id": "angel-1", "shares_owned": 10})
    assert response.status_code == 400


def test_get_shareholder(client: TestClient) -> None:
    _issue(client, "founder-1", 10, shareholder_email="f@example.com")
    response = client.get("/api/equity/shareholders/founder-1")
    assert response.status_code == 200
    assert response.json()["shareholder_email"] == "f@example.com"
    assert client.get("/api/equity/shareholders/ghost").status_code == 404


# ---------- transfer ----------


def test_transfer_moves_shares_and_keeps_total(client: TestClient) -> None:
    _issue(client, "founder-1", 1000)
    before = _total_owned(client)

    response = client.post(
        "/api/equity/transfer",
        json={
            "from_shareholder_id": "founder-1",
            "to_shareholder_id": "cofounder-1",
            "shares_amount": 400,
            "price_per_share": "0.10",
            "to_shareholder_name": "Bruno",
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["from_new_balance"] == 600
    assert data["to_new_balance"] == 400
    assert data["transaction"]["transaction_type"] == "transfer"
    assert Decimal(data["transaction"]["total_value"]) == Decimal("40")

    assert _total_owned(client) == before
    assert client.get("/api/shares").json()["issued_shares"] == 1000


def test_transfer_recipient_inherits_vesting_schedule(client: TestClient) -> None:
    today = date.today()
    start, end = today - timedelta(days=30), today + timedelta(days=335)
    _issue(
        client,
        "employee-1",
        100,
        equity_type="GRANTED",
        vesting_start_date=start.isoformat(),
        vesting_end_date=end.isoformat(),
    )
    client.post(
        "/api/equity/transfer",
        json={"from_shareholder_id": "employee-1", "to_shareholder_id": "spouse-1", "shares_amount": 50},
    )
    recipient = client.get("/api/equity/shareholders/spouse-1").json()
    assert recipient["equity_type"] == "GRANTED"
    assert recipient["vesting_start_date"] == start.isoformat()
    assert recipient["vesting_end_date"] == end.isoformat()


def test_transfer_insufficient_shares_returns_400(client: TestClient) -> None:
    _issue(client, "founder-1", 10)
    response = client.post(
        "/api/equity/transfer",
        json={"from_shareholder_id": "founder-1", "to_shareholder_id": "x", "shares_amount": 11},
    )
    assert response.status_code == 400
    assert client.get("/api/equity/shareholders/founder-1").json()["shares_owned"] == 10
    assert client.get("/api/equity/shareholders/x").status_code == 404


def test_transfer_from_unknown_sender_returns_404(client: TestClient) -> None:
    response = client.post(
        "/api/equity/transfer",
        json={"from_shareholder_id": "ghost", "to_shareholder_id": "x", "shares_amount": 1},
    )
    assert response.status_code == 404


def test_transfer_to_self_returns_400(client: TestClient) -> None:
    _issue(client, "founder-1", 10)
    response = client.post(
        "/api/equity/transfer",
        json={"from_shareholder_id": "founder-1", "to_shareholder_id": "founder-1", "shares_amount": 1},
    )
    assert response.status_code == 400


# ---------- buyback ----------


def test_buyback_reduces_holding_and_issued(client: TestClient) -> None:
    _issue(client, "founder-1", 100)
    response = client.post(
        "/api/equity/buyback",
        json={"shareholder_id": "founder-1", "shares_amount": 30, "price_per_share": "2.00"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["new_balance"] == 70
    assert data["config"]["issued_shares"] == 70
    assert Decimal(data["total_value"]) == Decimal("60")
    assert data["transaction"]["transaction_type"] == "buyback"
    assert data["transaction"]["from_shareholder_id"] == "founder-1"


def test_buyback_defaults_to_current_share_price(client: TestClient) -> None:
    _issue(client, "founder-1", 100)
    response = client.post("/api/equity/buyback", json={"shareholder_id": "founder-1", "shares_amount": 10})
    assert response.status_code == 200
    # strategic value 200000 over 1000000 authorized shares
    assert Decimal(response.json()["transaction"]["price_per_share"]) == Decimal("0.2")
    assert Decimal(response.json()["total_value"]) == Decimal("2")


def test_buyback_more_than_owned_returns_400(client: TestClient) -> None:
    _issue(client, "founder-1", 10)
    response = client.post("/api/equity/buyback", json={"shareholder_id": "founder-1", "shares_amount": 11})
    assert response.status_code == 400
    assert client.get("/api/shares").json()["issued_shares"] == 10


def test_buyback_unknown_holder_returns_404(client: TestClient) -> None:
    response = client.post("/api/equity/buyback", json={"shareholder_id": "ghost", "shares_amount": 1})
    assert response.status_code == 404


def test_transactions_are_newest_first_and_limited(client: TestClient) -> None:
    _issue(client, "founder-1", 100)
    client.post(
        "/api/equity/transfer",
        json={"from_shareholder_id": "founder-1", "to_shareholder_id": "b", "shares_amount": 5},
    )
    client.post("/api/equity/buyback", json={"shareholder_id": "founder-1", "shares_amount": 5, "price_per_share": "1"})

    log = client.get("/api/equity/transactions").json()
    assert [t["transaction_type"] for t in log] == ["buyback", "transfer", "issuance"]

    limited = client.get("/api/equity/transactions", params={"limit": 1}).json()
    assert len(limited) == 1
    assert limited[0]["transaction_type"] == "buyback"
