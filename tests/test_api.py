import io

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from handlers import dependencies
from main import create_app
from services.chart_service import ChartService
from tests.fakes import NOW, tx

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def client(transaction_service, savings_service, spending_limit_service, controller, clock):
    app = create_app(manage_database=False)
    app.dependency_overrides[dependencies.get_transaction_service] = lambda: transaction_service
    app.dependency_overrides[dependencies.get_savings_service] = lambda: savings_service
    app.dependency_overrides[dependencies.get_spending_limit_service] = lambda: spending_limit_service
    app.dependency_overrides[dependencies.get_refresh_controller] = lambda: controller
    app.dependency_overrides[dependencies.get_chart_service] = ChartService
    app.dependency_overrides[dependencies.get_clock] = lambda: clock
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def _create_transaction(client, **overrides):
    body = {"description": "Groceries", "amount": 250, "type": "expense", "category": "Food"}
    body.update(overrides)
    return client.post("/api/transactions", json=body)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_transaction_crud(client):
    response = _create_transaction(client)
    assert response.status_code == 201
    created = response.json()
    assert isinstance(created["id"], str)
    assert created["date"] == NOW.isoformat()

    response = client.put(f"/api/transactions/{created['id']}", json={"amount": 99.5})
    assert response.status_code == 200
    assert response.json()["amount"] == 99.5
    assert response.json()["description"] == "Groceries"

    assert client.get(f"/api/transactions/{created['id']}").json()["amount"] == 99.5

    response = client.delete(f"/api/transactions/{created['id']}")
    assert response.status_code == 204
    assert client.get("/api/transactions").json() == []


def test_transactions_are_listed_newest_first(client):
    _create_transaction(client, description="old", date="2024-06-01T10:00:00")
    _create_transaction(client, description="new", date="2024-06-10T10:00:00")
    _create_transaction(client, description="middle", date="2024-06-05T10:00:00")

    names = [t["description"] for t in client.get("/api/transactions").json()]
    assert names == ["new", "middle", "old"]

    filtered = client.get("/api/transactions", params={"startDate": "2024-06-05", "sort": "amountAsc"})
    assert [t["description"] for t in filtered.json()] == ["new", "middle"]


def test_validation_errors_are_400_with_message(client):
    response = _create_transaction(client, description="")
    assert response.status_code == 400
    assert response.json() == {"message": "Description is required"}

    response = _create_transaction(client, amount="not-a-number")
    assert response.status_code == 400
    assert "message" in response.json()


def test_unknown_and_malformed_ids_are_404(client):
    assert client.put("/api/transactions/12345", json={"amount": 1}).status_code == 404
    response = client.delete("/api/transactions/not-an-id")
    assert response.status_code == 404
    assert response.json() == {"message": "Transaction not found"}


def test_bulk_delete(client):
    first = _create_transaction(client).json()
    response = client.post("/api/transactions/bulk-delete", json={"ids": [first["id"], "777"]})
    assert response.status_code == 200
    assert response.json()["deleted"] == [first["id"]]
    assert response.json()["failed"][0]["id"] == "777"


def test_savings_plan_lifecycle(client):
    response = client.post("/api/savings-plans", json={"name": "Car", "targetAmount": 1000, "category": "Car"})
    assert response.status_code == 201
    plan = response.json()
    assert plan["currentAmount"] == 0
    assert plan["icon"] == "ti ti-car"

    response = client.post(f"/api/savings-plans/{plan['id']}/contributions", json={"amount": 300})
    assert response.status_code == 201
    assert response.json()["plan"]["currentAmount"] == 300
    assert response.json()["transaction"]["description"] == "Savings: Car"

    response = client.put(f"/api/savings-plans/{plan['id']}", json={"category": "House"})
    assert response.json()["iconBg"] == "bg-green-500"

    response = client.delete(f"/api/savings-plans/{plan['id']}")
    assert response.json() == {"message": "Savings plan deleted successfully"}
    assert client.delete(f"/api/savings-plans/{plan['id']}").status_code == 404


def test_savings_plan_validation(client):
    response = client.post("/api/savings-plans", json={"name": "Car", "targetAmount": 0})
    assert response.status_code == 400
    assert response.json() == {"message": "Target amount must be a positive number"}


def test_partial_contribution_is_reported(client, transaction_repo):
    plan = client.post("/api/savings-plans", json={"name": "Car", "targetAmount": 1000}).json()
    transaction_repo.fail_on_add = True

    response = client.post(f"/api/savings-plans/{plan['id']}/contributions", json={"amount": 50})

    assert response.status_code == 500
    body = response.json()
    assert body["completed"] == ["plan_updated"]
    assert body["failed"] == "companion_transaction"
    assert client.get(f"/api/savings-plans/{plan['id']}").json()["currentAmount"] == 50


def test_spending_limits(client):
    assert client.get("/api/spending-limits/weekly").json() == {
        "category": "Total", "limit": 5000.0, "period": "weekly",
    }
    assert client.get("/api/spending-limits/yearly").status_code == 400

    body = {"category": "Total", "limit": 4000, "period": "weekly"}
    assert client.post("/api/spending-limits", json=body).status_code == 201
    body["limit"] = 4500
    saved = client.post("/api/spending-limits", json=body).json()

    assert len(client.get("/api/spending-limits").json()) == 1
    assert client.get("/api/spending-limits/weekly").json()["limit"] == 4500

    response = client.post("/api/spending-limits", json={"category": "Total", "limit": 10})
    assert response.json() == {"message": "Category, limit, and period are required"}

    assert client.delete(f"/api/spending-limits/{saved['id']}").status_code == 204
    assert client.get("/api/spending-limits").json() == []


def test_balance_adjust(client):
    _create_transaction(client, type="income", amount=1000, category="Salary")

    response = client.post("/api/balance/adjust", json={"newBalance": 1500})
    assert response.status_code == 201
    adjustment = response.json()["transaction"]
    assert (adjustment["type"], adjustment["amount"], adjustment["category"]) == ("income", 500, "Adjustment")

    response = client.post("/api/balance/adjust", json={"newBalance": 1500})
    assert response.status_code == 200
    assert response.json() == {"message": "Balance already at requested value"}


def test_dashboard(client, spending_limit_service):
    spending_limit_service.set_limit({"category": "Total", "period": "weekly", "limit": 1000})
    _create_transaction(client, type="income", amount=2000, category="Salary")
    _create_transaction(client, amount=800)

    data = client.get("/api/dashboard", params={"period": "weekly", "chartPeriod": "daily"}).json()

    assert data["balance"]["balance"] == 1200
    assert data["spending"]["percentageUsed"] == 80
    assert data["spending"]["tier"] == "critical"
    assert data["spending"]["amountRemaining"] == 200
    assert data["income"]["savingsAmount"] == 1200
    assert data["analysis"]["period"] == "daily"
    assert client.get("/api/dashboard", params={"period": "yearly"}).status_code == 400


def test_search_endpoint(client):
    _create_transaction(client, description="Groceries")
    assert client.get("/api/search", params={"q": "g"}).json()["searching"] is False

    data = client.get("/api/search", params={"q": "groc"}).json()
    assert data["searching"] is True
    assert data["count"] == 1
    assert data["results"][0]["displayText"] == "Groceries (₹250)"

    tagged = client.get("/api/search", params={"q": "food"}, headers={"X-Client-Id": "tab-1"})
    assert tagged.status_code == 200
    assert tagged.json()["count"] == 1


def test_analysis_json_and_chart(client):
    _create_transaction(client, amount=120)

    data = client.get("/api/analysis/weekly").json()
    assert data["highestLabel"] == "Wed"
    assert data["total"] == 120

    response = client.get("/api/analysis/weekly/chart")
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(PNG_SIGNATURE)

    assert client.get("/api/analysis/hourly").status_code == 400


def test_savings_chart(client):
    assert client.get("/api/savings-plans/chart").status_code == 404
    client.post("/api/savings-plans", json={"name": "Car", "targetAmount": 1000})
    response = client.get("/api/savings-plans/chart")
    assert response.content.startswith(PNG_SIGNATURE)


def test_csv_export(client, transaction_repo):
    transaction_repo.add(tx("Rent", 1500, date=NOW))
    transaction_repo.add(tx("Salary", 3000, "income", "Salary", date=NOW))

    response = client.get("/api/export/transactions.csv", params={"sort": "amountAsc"})

    assert response.status_code == 200
    assert "attachment" in response.headers["content-disposition"]
    frame = pd.read_csv(io.BytesIO(response.content), encoding="utf-8-sig")
    assert list(frame["Description"]) == ["Rent", "Salary"]
    assert list(frame["Signed Amount"]) == [-1500, 3000]


def test_unexpected_errors_become_500(client, transaction_service):
    def explode():
        raise RuntimeError("boom")

    transaction_service.list_transactions = explode
    response = client.get("/api/transactions")
    assert response.status_code == 500
    assert response.json() == {"message": "Something went wrong. Please try again."}
