"""Integration tests for API endpoints"""

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient

AS_OF = date(2026, 10, 16)


def _days(n: int) -> str:
    return (AS_OF + timedelta(days=n)).isoformat()


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.get("/v1/forecast", params={"user_id": "metrics_user", "as_of": AS_OF.isoformat()})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "cashflow_forecast_total" in response.text


def test_income_lifecycle(client: TestClient):
    created = client.post(
        "/v1/incomes",
        json={"user_id": "u1", "client": "Acme Corp", "amount": 5000, "due_date": _days(5)},
    )
    assert created.status_code == 201
    income = created.json()
    assert income["status"] == "Outstanding"

    listed = client.get("/v1/incomes", params={"user_id": "u1"}).json()
    assert [i["id"] for i in listed] == [income["id"]]

    paid = client.post(f"/v1/incomes/{income['id']}/paid", params={"user_id": "u1"})
    assert paid.status_code == 200
    assert paid.json()["status"] == "Paid"

    assert client.delete(f"/v1/incomes/{income['id']}", params={"user_id": "u1"}).status_code == 204
    assert client.get("/v1/incomes", params={"user_id": "u1"}).json() == []


@pytest.mark.parametrize("amount", [0, -10])
def test_income_amount_must_be_positive(client: TestClient, amount):
    response = client.post(
        "/v1/incomes",
        json={"user_id": "u1", "client": "Acme", "amount": amount, "due_date": _days(1)},
    )
    assert response.status_code == 422


def test_income_not_found(client: TestClient):
    fake_uuid = "00000000-0000-0000-0000-000000000000"
    assert client.post(f"/v1/incomes/{fake_uuid}/paid", params={"user_id": "u1"}).status_code == 404
    assert client.delete(f"/v1/incomes/{fake_uuid}", params={"user_id": "u1"}).status_code == 404


def test_invalid_record_id(client: TestClient):
    response = client.delete("/v1/incomes/not-a-uuid", params={"user_id": "u1"})
    assert response.status_code == 400


def test_expense_lifecycle(client: TestClient):
    created = client.post(
        "/v1/expenses",
        json={
            "user_id": "u1",
            "vendor": "Office Depot",
            "amount": 250.5,
            "category": "Supplies",
            "date": _days(3),
            "description": "Printer ink",
        },
    )
    assert created.status_code == 201
    expense_id = created.json()["id"]

    detail = client.get(f"/v1/expenses/{expense_id}", params={"user_id": "u1"})
    assert detail.status_code == 200
    assert detail.json()["description"] == "Printer ink"

    assert client.delete(f"/v1/expenses/{expense_id}", params={"user_id": "u1"}).status_code == 204
    assert client.get(f"/v1/expenses/{expense_id}", params={"user_id": "u1"}).status_code == 404


def test_profile_created_on_first_access(client: TestClient):
    response = client.get("/v1/profile", params={"user_id": "fresh"})

    assert response.status_code == 200
    data = response.json()
    assert data["current_balance"] == 0
    assert data["salary_income"] == 0
    assert data["salary_frequency"] == "monthly"
    assert data["deductions"] == []
    assert data["loans"] == []


def test_update_profile_and_reset_salary(client: TestClient):
    response = client.put(
        "/v1/profile",
        json={
            "user_id": "u1",
            "name": "Maria",
            "current_balance": 12000,
            "salary_income": 30000,
            "salary_frequency": "fortnightly",
            "days_off_per_month": 2,
            "deductions": [{"name": "SSS", "amount": 1500}, {"name": "Philhealth", "amount": 500}],
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["salary"]["net_monthly"] == 28000
    assert data["salary"]["daily_income"] == 1400

    partial = client.put("/v1/profile", json={"user_id": "u1", "current_balance": 9000}).json()
    assert partial["name"] == "Maria"
    assert partial["salary_income"] == 30000
    assert partial["current_balance"] == 9000

    reset = client.post("/v1/profile/reset-salary", json={"user_id": "u1"}).json()
    assert reset["salary_income"] == 0
    assert reset["deductions"] == []
    assert reset["days_off_per_month"] == 0
    assert reset["current_balance"] == 9000


def test_negative_deduction_rejected(client: TestClient):
    response = client.put(
        "/v1/profile",
        json={"user_id": "u1", "deductions": [{"name": "SSS", "amount": -100}]},
    )
    assert response.status_code == 422


def test_loan_lifecycle(client: TestClient):
    created = client.post(
        "/v1/profile/loans",
        json={
            "user_id": "u1",
            "name": "Car loan",
            "amount": 2000,
            "payment_frequency": "quarterly",
            "next_payment_date": _days(3),
        },
    )
    assert created.status_code == 201
    loan_id = created.json()["id"]

    loans = client.get("/v1/profile", params={"user_id": "u1"}).json()["loans"]
    assert [loan["id"] for loan in loans] == [loan_id]

    assert client.delete(f"/v1/profile/loans/{loan_id}", params={"user_id": "u1"}).status_code == 204
    assert client.delete(f"/v1/profile/loans/{loan_id}", params={"user_id": "u1"}).status_code == 404


def test_forecast_endpoint(client: TestClient):
    """1000 balance, +5000 on day 5, -2000 on day 10"""
    client.put("/v1/profile", json={"user_id": "u1", "current_balance": 1000})
    client.post("/v1/incomes", json={"user_id": "u1", "client": "Acme", "amount": 5000, "due_date": _days(5)})
    client.post(
        "/v1/expenses",
        json={"user_id": "u1", "vendor": "Landlord", "amount": 2000, "category": "Rent", "date": _days(10)},
    )

    response = client.get("/v1/forecast", params={"user_id": "u1", "as_of": AS_OF.isoformat()})

    assert response.status_code == 200
    data = response.json()
    assert data["horizon_days"] == 30
    assert len(data["series"]) == 32
    assert data["series"][0] == {"date": AS_OF.isoformat(), "balance": 1000}
    balances = {point["date"]: point["balance"] for point in data["series"][1:]}
    assert balances[_days(5)] == 6000
    assert balances[_days(10)] == 4000
    assert data["shortfall_date"] is None
    assert data["salary_events"] == []


def test_forecast_reports_shortfall(client: TestClient):
    client.post(
        "/v1/expenses",
        json={"user_id": "u2", "vendor": "Utility", "amount": 100, "category": "Bills", "date": _days(1)},
    )

    data = client.get("/v1/forecast", params={"user_id": "u2", "as_of": AS_OF.isoformat()}).json()

    assert data["shortfall_date"] == _days(1)


def test_dashboard_endpoint(client: TestClient):
    client.put(
        "/v1/profile",
        json={"user_id": "u1", "current_balance": 5000, "salary_income": 20000, "salary_frequency": "monthly"},
    )
    client.post("/v1/incomes", json={"user_id": "u1", "client": "Acme", "amount": 1000, "due_date": _days(10)})
    client.post(
        "/v1/expenses",
        json={"user_id": "u1", "vendor": "Grocer", "amount": 300, "category": "Food", "date": _days(2)},
    )

    response = client.get("/v1/dashboard", params={"user_id": "u1", "as_of": AS_OF.isoformat()})

    assert response.status_code == 200
    data = response.json()
    assert data["currency"] == "PHP"
    assert data["current_balance"] == 5000
    assert data["upcoming_income_total"] == 21000
    assert data["upcoming_expense_total"] == 300
    assert data["projected_balance"] == 25700
    assert [item["projected"] for item in data["upcoming_incomes"]] == [False, True]
    assert data["expenses_by_category"] == [{"category": "Food", "amount": 300}]
    assert data["forecast"]["shortfall_date"] is None


def test_request_id_header_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-abc-123"})

    assert response.headers["X-Request-ID"] == "req-abc-123"


def test_single_record_endpoints_require_user_id(client: TestClient):
    income = client.post(
        "/v1/incomes",
        json={"user_id": "alice", "client": "Acme", "amount": 500, "due_date": _days(5)},
    ).json()

    assert client.post(f"/v1/incomes/{income['id']}/paid").status_code == 422


def test_records_of_another_user_are_not_found(client: TestClient):
    income = client.post(
        "/v1/incomes",
        json={"user_id": "alice", "client": "Acme", "amount": 500, "due_date": _days(5)},
    ).json()
    expense = client.post(
        "/v1/expenses",
        json={"user_id": "alice", "vendor": "Landlord", "amount": 900, "category": "Rent", "date": _days(3)},
    ).json()
    bob = {"user_id": "bob"}

    assert client.post(f"/v1/incomes/{income['id']}/paid", params=bob).status_code == 404
    assert client.delete(f"/v1/incomes/{income['id']}", params=bob).status_code == 404
    assert client.get(f"/v1/expenses/{expense['id']}", params=bob).status_code == 404
    assert client.delete(f"/v1/expenses/{expense['id']}", params=bob).status_code == 404

    incomes = client.get("/v1/incomes", params={"user_id": "alice"}).json()
    assert [(i["id"], i["status"]) for i in incomes] == [(income["id"], "Outstanding")]
    assert client.get(f"/v1/expenses/{expense['id']}", params={"user_id": "alice"}).status_code == 200


def test_incomes_listed_newest_first_within_the_same_second(client: TestClient):
    ids = [
        client.post(
            "/v1/incomes",
            json={"user_id": "u3", "client": f"Client {n}", "amount": 100 + n, "due_date": _days(n)},
        ).json()["id"]
        for n in range(1, 5)
    ]

    listed = client.get("/v1/incomes", params={"user_id": "u3"}).json()

    assert [i["id"] for i in listed] == list(reversed(ids))
