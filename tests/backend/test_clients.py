from decimal import Decimal

from framebox.models import Client


def test_search_is_case_insensitive_substring(auth_client, make_client):
    make_client("Ana Silva", email="ana@exemplo.com")
    make_client("Carlos Souza", phone="11 99999-0000")

    names = [item["name"] for item in auth_client.get("/api/v1/clients", params={"search": "ana"}).json()]

    assert names == ["Ana Silva"]


def test_search_matches_email_and_phone(auth_client, make_client):
    make_client("Ana Silva", email="ana@exemplo.com")
    make_client("Carlos Souza", phone="11 99999-0000")

    by_email = auth_client.get("/api/v1/clients", params={"search": "EXEMPLO"}).json()
    by_phone = auth_client.get("/api/v1/clients", params={"search": "99999"}).json()

    assert [item["name"] for item in by_email] == ["Ana Silva"]
    assert [item["name"] for item in by_phone] == ["Carlos Souza"]


def test_search_folds_accented_letters(auth_client, make_client):
    make_client("Érica Gonçalves")
    make_client("Erico Prado")

    lower = auth_client.get("/api/v1/clients", params={"search": "érica"}).json()
    upper = auth_client.get("/api/v1/clients", params={"search": "GONÇALVES"}).json()

    assert [item["name"] for item in lower] == ["Érica Gonçalves"]
    assert [item["name"] for item in upper] == ["Érica Gonçalves"]


def test_search_wildcards_match_literally(auth_client, make_client):
    make_client("Ana Silva")
    make_client("Estúdio 100% Foto")

    percent = auth_client.get("/api/v1/clients", params={"search": "%"}).json()
    underscore = auth_client.get("/api/v1/clients", params={"search": "_"}).json()

    assert [item["name"] for item in percent] == ["Estúdio 100% Foto"]
    assert underscore == []


def test_list_without_limit_returns_every_client(auth_client, db):
    db.add_all([Client(name=f"Cliente {number:03d}") for number in range(101)])
    db.commit()

    assert len(auth_client.get("/api/v1/clients").json()) == 101
    assert len(auth_client.get("/api/v1/clients", params={"limit": 10}).json()) == 10


def test_blank_search_lists_everyone(auth_client, make_client):
    make_client("Ana Silva")
    make_client("Carlos Souza")

    assert len(auth_client.get("/api/v1/clients", params={"search": ""}).json()) == 2


def test_invalid_email_is_rejected(auth_client):
    response = auth_client.post("/api/v1/clients", json={"name": "Ana", "email": "nao-e-email"})

    assert response.status_code == 422


def test_blank_optional_fields_are_stored_as_null(auth_client):
    created = auth_client.post("/api/v1/clients", json={"name": "Ana", "email": "", "phone": " "}).json()

    assert created["email"] is None
    assert created["phone"] is None


def test_update_keeps_name_when_left_blank(auth_client, make_client):
    ana = make_client("Ana Silva")

    updated = auth_client.put(f"/api/v1/clients/{ana['id']}", json={"name": "", "notes": "Prefere manhãs"}).json()

    assert updated["name"] == "Ana Silva"
    assert updated["notes"] == "Prefere manhãs"


def test_missing_client_is_404(auth_client):
    response = auth_client.get("/api/v1/clients/00000000-0000-0000-0000-000000000000")

    assert response.status_code == 404


def test_service_defaults(auth_client):
    created = auth_client.post("/api/v1/services", json={"name": "Retrato corporativo"}).json()

    assert Decimal(str(created["base_price"])) == Decimal("0.00")
    assert created["duration_hours"] == 1


def test_service_search_matches_description(auth_client, make_service):
    make_service("Ensaio Individual", "350.00", description="Sessão com 30 fotos editadas")
    make_service("Cobertura de Evento", "1200.00", description="Cobertura completa")

    found = auth_client.get("/api/v1/services", params={"search": "fotos"}).json()

    assert [item["name"] for item in found] == ["Ensaio Individual"]


def test_negative_base_price_is_rejected(auth_client):
    response = auth_client.post("/api/v1/services", json={"name": "X", "base_price": "-1"})

    assert response.status_code == 422


def test_service_search_folds_accented_letters(auth_client, make_service):
    make_service("Ensaio Família", "550.00")
    make_service("Ensaio Casal", "450.00")

    found = auth_client.get("/api/v1/services", params={"search": "FAMÍLIA"}).json()

    assert [item["name"] for item in found] == ["Ensaio Família"]
