from datetime import timedelta

from framebox.core.security import HashedCredentialVerifier, create_access_token, get_password_hash

ADMIN_EMAIL = "studio@framebox.test"
ADMIN_PASSWORD = "retratos-2025"


def test_login_returns_bearer_token(client):
    response = client.post("/api/v1/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"
    assert response.json()["access_token"]


def test_login_email_is_case_insensitive(client):
    response = client.post("/api/v1/auth/login", json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_PASSWORD})

    assert response.status_code == 200


def test_wrong_password_is_401(client):
    response = client.post("/api/v1/auth/login", json={"email": ADMIN_EMAIL, "password": "errada"})

    assert response.status_code == 401


def test_me_returns_session(auth_client):
    body = auth_client.get("/api/v1/auth/me").json()

    assert body["email"] == ADMIN_EMAIL
    assert body["authenticated"] is True
    assert body["expires_at"]


def test_protected_routes_need_a_token(client):
    for path in ("/api/v1/clients", "/api/v1/services", "/api/v1/transactions",
                 "/api/v1/categories", "/api/v1/appointments"):
        assert client.get(path).status_code == 401


def test_expired_token_is_rejected(client):
    token = create_access_token({"sub": ADMIN_EMAIL}, expires_delta=timedelta(minutes=-5))

    response = client.get("/api/v1/clients", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_verifier_without_hash_refuses_everyone():
    verifier = HashedCredentialVerifier(ADMIN_EMAIL, None)

    assert verifier.verify(ADMIN_EMAIL, ADMIN_PASSWORD) is False


def test_verifier_checks_email():
    verifier = HashedCredentialVerifier(ADMIN_EMAIL, get_password_hash(ADMIN_PASSWORD))

    assert verifier.verify("outra@framebox.test", ADMIN_PASSWORD) is False
    assert verifier.verify(f"  {ADMIN_EMAIL} ", ADMIN_PASSWORD) is True


def test_health_is_public(client):
    assert client.get("/health").json()["status"] == "healthy"
