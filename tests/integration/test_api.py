"""Integration tests for API endpoints"""

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient


def _money(value) -> Decimal:
    return Decimal(str(value))


@pytest.fixture
def card_id(client: TestClient) -> int:
    response = client.post(
        "/v1/cards",
        json={
            "name": "Nubank",
            "last_four_digits": "1234",
            "card_type": "credit",
            "brand": "mastercard",
            "closing_day": 15,
        },
    )
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def supermarket_id(client: TestClient) -> int:
    response = client.post("/v1/establishments", json={"name": "Mercado Central", "category": "supermarket"})
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def pharmacy_id(client: TestClient) -> int:
    response = client.post("/v1/establishments", json={"name": "Drogaria Sao Paulo", "category": "pharmacy"})
    assert response.status_code == 201
    return response.json()["id"]


def _groceries(card_id: int, supermarket_id: int, **overrides) -> dict:
    body = {
        "description": "Monthly groceries",
        "amount": "100.00",
        "purchase_date": "2025-03-20",
        "payment_method": "credit_card",
        "establishment_id": supermarket_id,
        "card_id": card_id,
        "installment_count": 3,
    }
    body.update(overrides)
    return body


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "caderninho_expenses_created_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"


def test_card_crud(client: TestClient, card_id: int):
    assert client.get(f"/v1/cards/{card_id}").json()["closing_day"] == 15

    response = client.put(
        f"/v1/cards/{card_id}",
        json={
            "name": "Nubank Ultravioleta",
            "last_four_digits": "1234",
            "card_type": "credit",
            "brand": "mastercard",
            "closing_day": 5,
        },
    )
    assert response.status_code == 200
    assert response.json()["closing_day"] == 5

    assert client.delete(f"/v1/cards/{card_id}").status_code == 204
    assert client.get(f"/v1/cards/{card_id}").status_code == 404


def test_card_rejects_bad_digits(client: TestClient):
    response = client.post(
        "/v1/cards",
        json={"name": "Inter", "last_four_digits": "12a4", "card_type": "debit", "brand": "visa"},
    )
    assert response.status_code == 422


def test_establishments_filtered_by_category(client: TestClient, supermarket_id: int, pharmacy_id: int):
    response = client.get("/v1/establishments", params={"category": "pharmacy"})

    assert response.status_code == 200
    assert [e["id"] for e in response.json()] == [pharmacy_id]


def test_delete_referenced_establishment_conflicts(client: TestClient, pharmacy_id: int):
    client.post(
        "/v1/expenses",
        json={
            "description": "Medicine",
            "amount": "50.00",
            "purchase_date": "2025-06-05",
            "payment_method": "cash",
            "establishment_id": pharmacy_id,
        },
    )

    response = client.delete(f"/v1/establishments/{pharmacy_id}")

    assert response.status_code == 409
    assert client.get(f"/v1/establishments/{pharmacy_id}").status_code == 200
    [group] = client.get("/v1/statements/2025/6").json()["categories"]
    assert group["category"] == "pharmacy"
    assert group["transactions"][0]["establishment_name"] == "Drogaria Sao Paulo"


def test_delete_referenced_card_conflicts(client: TestClient, card_id: int, supermarket_id: int):
    client.post("/v1/expenses", json=_groceries(card_id, supermarket_id))

    response = client.delete(f"/v1/cards/{card_id}")

    assert response.status_code == 409
    assert client.get(f"/v1/cards/{card_id}").status_code == 200
    installments = client.get(f"/v1/cards/{card_id}/installments", params={"start": "2025-04-01", "end": "2025-06-30"})
    assert len(installments.json()) == 3


def test_delete_unreferenced_establishment(client: TestClient, pharmacy_id: int):
    assert client.delete(f"/v1/establishments/{pharmacy_id}").status_code == 204
    assert client.get(f"/v1/establishments/{pharmacy_id}").status_code == 404


def test_create_credit_card_expense(client: TestClient, card_id: int, supermarket_id: int):
    """POST /v1/expenses returns the generated installment schedule"""
    response = client.post("/v1/expenses", json=_groceries(card_id, supermarket_id))

    assert response.status_code == 201
    data = response.json()
    assert _money(data["expense"]["amount"]) == Decimal("100.00")
    installments = data["installments"]
    assert [i["label"] for i in installments] == ["1/3", "2/3", "3/3"]
    assert [i["due_date"] for i in installments] == ["2025-04-15", "2025-05-15", "2025-06-15"]
    assert [_money(i["amount"]) for i in installments] == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]
    assert "X-Request-ID" in response.headers

    listed = client.get(f"/v1/expenses/{data['expense']['id']}/installments")
    assert [i["id"] for i in listed.json()] == [i["id"] for i in installments]


def test_expense_validation_issues(client: TestClient, supermarket_id: int):
    response = client.post(
        "/v1/expenses",
        json=_groceries(None, supermarket_id),
    )

    assert response.status_code == 422
    assert {"field": "card_id", "code": "required"} in [
        {"field": i["field"], "code": i["code"]} for i in response.json()["detail"]
    ]


def test_installments_only_for_credit_card(client: TestClient, supermarket_id: int):
    response = client.post(
        "/v1/expenses",
        json=_groceries(None, supermarket_id, payment_method="pix"),
    )

    assert response.status_code == 422
    assert response.json()["detail"][0]["code"] == "credit_card_only"


def test_missing_closing_day_persists_nothing(client: TestClient, supermarket_id: int):
    card = client.post(
        "/v1/cards",
        json={"name": "Inter", "last_four_digits": "9876", "card_type": "credit", "brand": "visa"},
    ).json()

    response = client.post("/v1/expenses", json=_groceries(card["id"], supermarket_id))

    assert response.status_code == 422
    listed = client.get("/v1/expenses", params={"start": "2025-01-01", "end": "2025-12-31"})
    assert listed.json() == []


def test_unknown_establishment(client: TestClient, card_id: int):
    response = client.post("/v1/expenses", json=_groceries(card_id, 999))
    assert response.status_code == 422


def test_expense_not_found(client: TestClient):
    assert client.get("/v1/expenses/999").status_code == 404
    assert client.delete("/v1/expenses/999").status_code == 404


def test_list_expenses_rejects_inverted_period(client: TestClient):
    response = client.get("/v1/expenses", params={"start": "2025-03-31", "end": "2025-03-01"})
    assert response.status_code == 400


def test_card_installments_by_period(client: TestClient, card_id: int, supermarket_id: int):
    client.post("/v1/expenses", json=_groceries(card_id, supermarket_id))

    response = client.get(
        f"/v1/cards/{card_id}/installments",
        params={"start": "2025-05-01", "end": "2025-06-30"},
    )

    assert response.status_code == 200
    assert [i["label"] for i in response.json()] == ["2/3", "3/3"]
    missing = client.get("/v1/cards/999/installments", params={"start": "2025-05-01", "end": "2025-06-30"})
    assert missing.status_code == 404


def test_pay_installment(client: TestClient, card_id: int, supermarket_id: int):
    installments = client.post("/v1/expenses", json=_groceries(card_id, supermarket_id)).json()["installments"]

    response = client.post(f"/v1/installments/{installments[0]['id']}/pay", json={"paid_date": "2025-04-10"})

    assert response.status_code == 200
    assert response.json()["is_paid"] is True
    assert response.json()["paid_date"] == "2025-04-10"
    assert client.post("/v1/installments/999/pay").status_code == 404


def test_monthly_statement(client: TestClient, card_id: int, supermarket_id: int, pharmacy_id: int):
    """June 2025: last groceries installment plus a pix purchase at the pharmacy"""
    client.post("/v1/expenses", json=_groceries(card_id, supermarket_id))
    client.post(
        "/v1/expenses",
        json={
            "description": "Medicine",
            "amount": "50.00",
            "purchase_date": "2025-06-05",
            "payment_method": "pix",
            "establishment_id": pharmacy_id,
        },
    )
    client.post(
        "/v1/spending-limits",
        json={"category": "supermarket", "month": 6, "year": 2025, "limit_amount": "200.00"},
    )

    response = client.get("/v1/statements/2025/6")

    assert response.status_code == 200
    data = response.json()
    assert [c["category"] for c in data["categories"]] == ["pharmacy", "supermarket"]
    pharmacy, supermarket = data["categories"]
    assert pharmacy["monthly_limit"] is None
    assert pharmacy["category_label"] == "Pharmacy"
    assert _money(supermarket["total_spent"]) == Decimal("33.34")
    assert _money(supermarket["available_balance"]) == Decimal("166.66")
    assert _money(supermarket["percentage_used"]) == Decimal("16.67")
    assert supermarket["is_over_limit"] is False
    transaction = supermarket["transactions"][0]
    assert transaction["installment_label"] == "3/3"
    assert transaction["date"] == "2025-06-15"
    assert transaction["purchase_date"] == "2025-03-20"
    assert transaction["card_name"] == "Nubank"
    assert _money(data["total_expenses"]) == Decimal("83.34")
    assert _money(data["total_limits"]) == Decimal("200.00")
    assert _money(data["percentage_used"]) == Decimal("41.67")


def test_empty_statement(client: TestClient):
    data = client.get("/v1/statements/2025/2").json()

    assert data["categories"] == []
    assert _money(data["total_expenses"]) == Decimal("0")


@pytest.mark.parametrize("path", ["/v1/statements/2025/13", "/v1/statements/2025/0", "/v1/statements/1999/5"])
def test_statement_rejects_invalid_period(client: TestClient, path: str):
    assert client.get(path).status_code == 400


def test_spending_limit_duplicates(client: TestClient):
    body = {"category": "restaurant", "month": 12, "year": 2025, "limit_amount": "300.00"}
    created = client.post("/v1/spending-limits", json=body)
    assert created.status_code == 201

    assert client.post("/v1/spending-limits", json=body).status_code == 409

    copy = client.post(f"/v1/spending-limits/{created.json()['id']}/duplicate", json={"amount": "250.00"})
    assert copy.status_code == 201
    assert (copy.json()["month"], copy.json()["year"]) == (1, 2026)
    assert _money(copy.json()["limit_amount"]) == Decimal("250.00")

    listed = client.get("/v1/spending-limits", params={"year": 2026, "month": 1})
    assert [limit["category"] for limit in listed.json()] == ["restaurant"]


def test_inactive_limit_left_out_of_statement(client: TestClient):
    limit = client.post(
        "/v1/spending-limits",
        json={"category": "games", "month": 3, "year": 2025, "limit_amount": "100.00"},
    ).json()

    toggled = client.patch(f"/v1/spending-limits/{limit['id']}/active", json={"is_active": False})

    assert toggled.json()["is_active"] is False
    assert _money(client.get("/v1/statements/2025/3").json()["total_limits"]) == Decimal("0")


def test_spending_limit_not_found(client: TestClient):
    assert client.delete("/v1/spending-limits/999").status_code == 404


def test_import_invoice_skips_duplicates(client: TestClient, card_id: int):
    body = {
        "card_id": card_id,
        "lines": [
            {"purchase_date": "2025-03-02", "establishment_name": "PADARIA REAL", "amount": "12.50"},
            {"purchase_date": "2025-03-03", "establishment_name": "IFOOD *PEDIDO", "amount": "45.90"},
        ],
    }

    first = client.post("/v1/expenses/import-invoice", json=body)
    second = client.post("/v1/expenses/import-invoice", json=body)

    assert first.status_code == 201
    assert first.json()["created_count"] == 2
    assert second.json()["created_count"] == 0
    others = client.get("/v1/establishments", params={"category": "other"}).json()
    assert sorted(e["name"] for e in others) == ["IFOOD *PEDIDO", "PADARIA REAL"]


def test_monthly_entries_summary(client: TestClient):
    client.post(
        "/v1/monthly-entries",
        json={"entry_type": "salary", "description": "Salary", "amount": "5000.00", "operation": "income"},
    )
    client.post(
        "/v1/monthly-entries",
        json={
            "entry_type": "monthly_bill",
            "description": "Internet",
            "amount": "99.90",
            "operation": "expense",
            "month": 3,
            "year": 2025,
        },
    )

    response = client.get("/v1/monthly-entries/summary", params={"year": 2025, "month": 3})

    assert response.status_code == 200
    data = response.json()
    assert _money(data["total_income"]) == Decimal("5000.00")
    assert _money(data["total_outflow"]) == Decimal("99.90")
    assert _money(data["net"]) == Decimal("4900.10")
    assert data["entry_count"] == 2


def test_spending_limit_duplicate_past_last_year(client: TestClient):
    limit = client.post(
        "/v1/spending-limits",
        json={"category": "restaurant", "month": 12, "year": 2100, "limit_amount": "300.00"},
    ).json()

    response = client.post(f"/v1/spending-limits/{limit['id']}/duplicate", json={"amount": "250.00"})

    assert response.status_code == 400
