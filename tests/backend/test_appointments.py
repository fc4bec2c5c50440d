from decimal import Decimal

from fastapi.testclient import TestClient

from framebox.main import app
from framebox.models import AppointmentService, Transaction
from framebox.services.scheduling_service import SchedulingService


def appointment_payload(title="Ensaio da Ana", client_id=None, status="scheduled", services=(),
                        start_date="2025-01-10T14:00:00", end_date="2025-01-10T16:00:00"):
    return {
        "title": title,
        "client_id": client_id,
        "start_date": start_date,
        "end_date": end_date,
        "location": "Parque Ibirapuera",
        "status": status,
        "services": list(services),
    }


def test_completed_appointment_books_income(auth_client, make_client, make_service):
    ana = make_client("Ana Silva")
    service = make_service("Ensaio Individual", "350.00")

    response = auth_client.post("/api/v1/appointments", json=appointment_payload(
        client_id=ana["id"],
        status="completed",
        services=[{"service_id": service["id"], "quantity": 1}]
    ))

    assert response.status_code == 200
    body = response.json()
    assert Decimal(str(body["appointment"]["total_value"])) == Decimal("350.00")
    assert body["appointment"]["status"] == "completed"
    assert body["income_transaction_id"]

    income = auth_client.get(f"/api/v1/transactions/{body['income_transaction_id']}").json()
    assert income["type"] == "income"
    assert Decimal(str(income["amount"])) == Decimal("350.00")
    assert income["transaction_date"] == "2025-01-10"
    assert income["client_id"] == ana["id"]
    assert income["description"] == "Receita do agendamento: Ensaio da Ana - Ana Silva"


def test_scheduled_appointment_books_nothing(auth_client, make_service, db):
    service = make_service()

    response = auth_client.post("/api/v1/appointments", json=appointment_payload(
        services=[{"service_id": service["id"], "quantity": 2}]
    ))

    assert response.status_code == 200
    assert response.json()["income_transaction_id"] is None
    assert Decimal(str(response.json()["appointment"]["total_value"])) == Decimal("700.00")
    assert db.query(Transaction).count() == 0


def test_completed_without_client_has_short_description(auth_client, make_service):
    service = make_service()

    body = auth_client.post("/api/v1/appointments", json=appointment_payload(
        title="Book externo",
        status="completed",
        services=[{"service_id": service["id"], "quantity": 1}]
    )).json()

    income = auth_client.get(f"/api/v1/transactions/{body['income_transaction_id']}").json()
    assert income["description"] == "Receita do agendamento: Book externo"
    assert income["client_id"] is None


def test_zero_total_completion_saves_without_income(auth_client, make_service, db):
    service = make_service("Cortesia", "0.00")

    response = auth_client.post("/api/v1/appointments", json=appointment_payload(
        status="completed",
        services=[{"service_id": service["id"], "quantity": 1}]
    ))

    assert response.status_code == 200
    body = response.json()
    assert body["income_transaction_id"] is None
    assert body["appointment"]["status"] == "completed"
    assert len(body["appointment"]["services"]) == 1
    assert db.query(Transaction).count() == 0


def test_completion_without_line_items_books_nothing(auth_client, db):
    response = auth_client.post("/api/v1/appointments", json=appointment_payload(status="completed"))

    assert response.status_code == 200
    assert response.json()["income_transaction_id"] is None
    assert db.query(Transaction).count() == 0


def test_line_item_price_is_a_snapshot(auth_client, make_service):
    service = make_service("Ensaio Casal", "450.00")
    created = auth_client.post("/api/v1/appointments", json=appointment_payload(
        services=[{"service_id": service["id"], "quantity": 1}]
    )).json()["appointment"]

    auth_client.put(f"/api/v1/services/{service['id']}", json={"base_price": "600.00"})

    stored = auth_client.get(f"/api/v1/appointments/{created['id']}").json()
    assert Decimal(str(stored["services"][0]["price"])) == Decimal("450.00")


def test_submitted_price_overrides_base_price(auth_client, make_service):
    service = make_service("Ensaio Família", "550.00")

    body = auth_client.post("/api/v1/appointments", json=appointment_payload(
        services=[{"service_id": service["id"], "quantity": 2, "price": "500.00"}]
    )).json()

    line = body["appointment"]["services"][0]
    assert Decimal(str(line["price"])) == Decimal("500.00")
    assert Decimal(str(line["total"])) == Decimal("1000.00")


def test_edit_replaces_line_items(auth_client, make_service, db):
    first = make_service("Ensaio Individual", "350.00")
    second = make_service("Cobertura de Evento", "1200.00")
    created = auth_client.post("/api/v1/appointments", json=appointment_payload(
        services=[
            {"service_id": first["id"], "quantity": 1},
            {"service_id": second["id"], "quantity": 1},
        ]
    )).json()["appointment"]

    response = auth_client.put(f"/api/v1/appointments/{created['id']}", json=appointment_payload(
        title="Evento corporativo",
        services=[{"service_id": second["id"], "quantity": 2}]
    ))

    assert response.status_code == 200
    updated = response.json()["appointment"]
    assert updated["title"] == "Evento corporativo"
    assert len(updated["services"]) == 1
    assert Decimal(str(updated["total_value"])) == Decimal("2400.00")
    assert db.query(AppointmentService).count() == 1


def test_delete_removes_line_items(auth_client, make_service, db):
    service = make_service()
    created = auth_client.post("/api/v1/appointments", json=appointment_payload(
        services=[{"service_id": service["id"], "quantity": 1}, {"service_id": service["id"], "quantity": 3}]
    )).json()["appointment"]

    response = auth_client.delete(f"/api/v1/appointments/{created['id']}")

    assert response.status_code == 200
    assert auth_client.get(f"/api/v1/appointments/{created['id']}").status_code == 404
    assert db.query(AppointmentService).count() == 0


def test_failed_save_leaves_stored_appointment_untouched(auth_client, make_service, monkeypatch):
    service = make_service()
    created = auth_client.post("/api/v1/appointments", json=appointment_payload(
        title="Primeira versão",
        services=[{"service_id": service["id"], "quantity": 1}]
    )).json()["appointment"]

    def broken_line_items(self, appointment, appointment_data, catalog):
        raise RuntimeError("line items could not be written")

    monkeypatch.setattr(SchedulingService, "_add_line_items", broken_line_items)
    failing = TestClient(app, raise_server_exceptions=False)
    failing.headers.update(auth_client.headers)

    response = failing.put(f"/api/v1/appointments/{created['id']}", json=appointment_payload(
        title="Changed",
        services=[{"service_id": service["id"], "quantity": 5}]
    ))
    assert response.status_code == 500

    monkeypatch.undo()
    stored = auth_client.get(f"/api/v1/appointments/{created['id']}").json()
    assert stored["title"] == "Primeira versão"
    assert len(stored["services"]) == 1
    assert stored["services"][0]["quantity"] == 1


def test_unknown_service_is_rejected(auth_client):
    response = auth_client.post("/api/v1/appointments", json=appointment_payload(
        services=[{"service_id": "00000000-0000-0000-0000-000000000000", "quantity": 1}]
    ))

    assert response.status_code == 400
    assert auth_client.get("/api/v1/appointments").json() == []


def test_unknown_client_is_rejected(auth_client):
    response = auth_client.post("/api/v1/appointments", json=appointment_payload(
        client_id="00000000-0000-0000-0000-000000000000"
    ))

    assert response.status_code == 400


def test_editing_missing_appointment_is_404(auth_client):
    response = auth_client.put(
        "/api/v1/appointments/00000000-0000-0000-0000-000000000000",
        json=appointment_payload()
    )

    assert response.status_code == 404


def test_quantity_must_be_positive(auth_client, make_service):
    service = make_service()

    response = auth_client.post("/api/v1/appointments", json=appointment_payload(
        services=[{"service_id": service["id"], "quantity": 0}]
    ))

    assert response.status_code == 422


def test_list_filters_by_status_soonest_first(auth_client):
    auth_client.post("/api/v1/appointments", json=appointment_payload(
        title="Mais tarde", start_date="2025-02-01T09:00:00", end_date="2025-02-01T10:00:00"
    ))
    auth_client.post("/api/v1/appointments", json=appointment_payload(
        title="Mais cedo", start_date="2025-01-05T09:00:00", end_date="2025-01-05T10:00:00"
    ))
    auth_client.post("/api/v1/appointments", json=appointment_payload(title="Cancelado", status="cancelled"))

    scheduled = auth_client.get("/api/v1/appointments", params={"status": "scheduled"}).json()

    assert [item["title"] for item in scheduled] == ["Mais cedo", "Mais tarde"]


def test_calculate_total_treats_missing_values_as_zero():
    items = [
        AppointmentService(price=Decimal("350.00"), quantity=2),
        AppointmentService(price=None, quantity=1),
        AppointmentService(price=Decimal("99.90"), quantity=None),
    ]

    assert SchedulingService.calculate_total(items) == Decimal("700.00")
