# tests/integration/test_api_issuance.py
from datetime import date, timedelta
from decimal import Decimal

from fastapi.testclient import TestClient


def test_issue_shares_updates_config_holding_and_log(client: TestClient) -> None:
    response = client.post(
        "/api/equity/issue-shares",
        json={
            "to_shareholder_id": "investor-1",
            "shareholder_name": "Ana",
            "shares_amount": 1000,
            "purchase_price": "2.50",
            "equity_type": "PURCHASED",
            "reason": "Seed",
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["config"]["issued_shares"] == 1000
    assert data["shareholding"]["shares_owned"] == 1000
    assert Decimal(data["shareholding"]["investment_total"]) == Decimal("2500")
    assert data["transaction"]["transaction_type"] == "issuance"
    assert data["transaction"]["to_shareholder_id"] == "investor-1"
    assert Decimal(data["transaction"]["total_value"]) == Decimal("2500")

    log = client.get("/api/equity/transactions").json()
    assert len(log) == 1
    assert log[0]["reason"] == "Seed"


def test_issue_to_existing_holder_adds_shares(client: TestClient) -> None:
    body = {"to_shareholder_id": "investor-1", "shares_amount": 100, "equity_type": "PURCHASED"}
    client.post("/api/equity/issue-shares", json=body)
    response = client.post("/api/equity/issue-shares", json=body)
    assert response.status_code == 200
    assert response.json()["shareholding"]["shares_owned"] == 200
    assert len(client.get("/api/equity/shareholders").json()) == 1


def test_issue_beyond_authorized_returns_400_and_changes_nothing(client: TestClient) -> None:
    client.put("/api/shares", json={"authorized_shares": 100})
    response = client.post(
        "/api/equity/issue-shares",
        json={"to_shareholder_id": "investor-1", "shares_amount": 101, "equity_type": "PURCHASED"},
    )
    assert response.status_code == 400
    assert "100" in response.json()["detail"]
    assert client.get("/api/shares").json()["issued_shares"] == 0
    assert client.get("/api/equity/transactions").json() == []


def test_issue_non_positive_amount_returns_400(client: TestClient) -> None:
    response = client.post(
        "/api/equity/issue-shares",
        json={"to_shareholder_id": "investor-1", "shares_amount": 0, "equity_type": "PURCHASED"},
    )
    assert response.status_code == 400


def test_issue_unknown_equity_type_returns_422(client: TestClient) -> None:
    response = client.post(
        "/api/equity/issue-shares",
        json={"to_shareholder_id": "investor-1", "shares_amount": 10, "equity_type": "BORROWED"},
    )
    assert response.status_code == 422


def test_granted_without_end_date_returns_400(client: TestClient) -> None:
    response = client.post(
        "/api/equity/issue-shares",
        json={"to_shareholder_id": "employee-1", "shares_amount": 10, "equity_type": "GRANTED"},
    )
    assert response.status_code == 400
    assert "vesting_end_date" in response.json()["detail"]


def test_granted_end_before_start_returns_400(client: TestClient) -> None:
    today = date.today()
    response = client.post(
        "/api/equity/issue-shares",
        json={
            "to_shareholder_id": "employee-1",
            "shares_amount": 10,
            "equity_type": "GRANTED",
            "vesting_start_date": today.isoformat(),
            "vesting_end_date": (today - timedelta(days=1)).isoformat(),
        },
    )
    assert response.status_code == 400


def test_granted_start_defaults_to_today(client: TestClient) -> None:
    end = date.today() + timedelta(days=365)
    response = client.post(
        "/api/equity/issue-shares",
        json={
            "to_shareholder_id": "employee-1",
            "shares_amount": 10,
            "equity_type": "GRANTED",
            "vesting_end_date": end.isoformat(),
        },
    )
    assert response.status_code == 200
    holding = response.json()["shareholding"]
    assert holding["vesting_start_date"] == date.today().isoformat()
    assert holding["vesting_end_date"] == end.isoformat()


def test_vesting_percentage_out_of_range_returns_400(client: TestClient) -> None:
    response = client.post(
        "/api/equity/issue-shares",
        json={
            "to_shareholder_id": "investor-1",
            "shares_amount": 10,
            "equity_type": "PURCHASED",
            "vesting_percentage": "150",
        },
    )
    assert response.status_code == 400


# ---------- proposals ----------


def _propose(client: TestClient, shares: int, **extra: object) -> dict:
    response = client.post("/api/equity/issuance", json={"shares_issued": shares, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def test_proposal_reports_dilution_and_changes_nothing(client: TestClient) -> None:
    client.post(
        "/api/equity/issue-shares",
        json={"to_shareholder_id": "founder-1", "shares_amount": 100, "equity_type": "PURCHASED"},
    )
    result = _propose(client, 100)
    assert result["issuance"]["approval_status"] == "pending"
    assert result["issuance"]["previous_issued_shares"] == 100
    assert Decimal(result["issuance"]["dilution_percentage"]) == Decimal("50")
    assert "50" in result["dilution_warning"]
    assert result["new_issued_total"] == 200
    assert result["requires_confirmation"] is True
    assert client.get("/api/shares").json()["issued_shares"] == 100


def test_list_pending_proposals(client: TestClient) -> None:
    _propose(client, 10)
    _propose(client, 20)
    pending = client.get("/api/equity/issuance").json()
    assert sorted(p["shares_issued"] for p in pending) == [10, 20]
    assert client.get("/api/equity/issuance", params={"status": "executed"}).json() == []


def test_approve_proposal_executes_issuance(client: TestClient) -> None:
    proposal = _propose(
        client,
        300,
        recipient_id="investor-9",
        recipient_name="Fund IX",
        issued_at_price="1.00",
        equity_type="PURCHASED",
    )
    proposal_id = proposal["issuance"]["id"]

    response = client.post(f"/api/equity/issuance/{proposal_id}/approve")
    assert response.status_code == 200
    data = response.json()
    assert data["config"]["issued_shares"] == 300
    assert data["shareholding"]["shareholder_id"] == "investor-9"
    assert data["shareholding"]["shares_owned"] == 300

    executed = client.get("/api/equity/issuance", params={"status": "executed"}).json()
    assert [p["id"] for p in executed] == [proposal_id]
    assert executed[0]["decided_at"] is not None


def test_approve_twice_returns_400(client: TestClient) -> None:
    proposal_id = _propose(client, 10)["issuance"]["id"]
    assert client.post(f"/api/equity/issuance/{proposal_id}/approve").status_code == 200

    response = client.post(f"/api/equity/issuance/{proposal_id}/approve")
    assert response.status_code == 400
    assert "executed" in response.json()["detail"]
    assert client.get("/api/shares").json()["issued_shares"] == 10


def test_approve_beyond_remaining_capacity_returns_400(client: TestClient) -> None:
    client.put("/api/shares", json={"authorized_shares": 100})
    first = _propose(client, 80)["issuance"]["id"]
    second = _propose(client, 80)["issuance"]["id"]
    assert client.post(f"/api/equity/issuance/{first}/approve").status_code == 200

    response = client.post(f"/api/equity/issuance/{second}/approve")
    assert response.status_code == 400
    assert client.get("/api/shares").json()["issued_shares"] == 80


def test_reject_proposal(client: TestClient) -> None:
    proposal_id = _propose(client, 10)["issuance"]["id"]
    response = client.post(f"/api/equity/issuance/{proposal_id}/reject")
    assert response.status_code == 200
    assert response.json()["approval_status"] == "rejected"

    assert client.post(f"/api/equity/issuance/{proposal_id}/approve").status_code == 400
    assert client.get("/api/shares").json()["issued_shares"] == 0


def test_unknown_proposal_returns_404(client: TestClient) -> None:
    assert client.post("/api/equity/issuance/999/approve").status_code == 404
    assert client.post("/api/equity/issuance/999/reject").status_code == 404
