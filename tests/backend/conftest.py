import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from framebox.core.database import create_db_engine, get_db, get_session_factory, init_db
from framebox.core.security import HashedCredentialVerifier, get_credential_verifier, get_password_hash
from framebox.main import app

ADMIN_EMAIL = "studio@framebox.test"
ADMIN_PASSWORD = "retratos-2025"


@pytest.fixture
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'framebox.db'}")
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """API client wired to a throwaway SQLite file"""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    verifier = HashedCredentialVerifier(ADMIN_EMAIL, get_password_hash(ADMIN_PASSWORD))

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_credential_verifier] = lambda: verifier
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client):
    response = client.post("/api/v1/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    client.headers.update({"Authorization": f"Bearer {response.json()['access_token']}"})
    return client


@pytest.fixture
def make_client(auth_client):
    def _make(name="Ana Silva", **fields):
        response = auth_client.post("/api/v1/clients", json={"name": name, **fields})
        assert response.status_code == 200, response.text
        return response.json()
    return _make


@pytest.fixture
def make_service(auth_client):
    def _make(name="Ensaio Individual", base_price="350.00", **fields):
        response = auth_client.post("/api/v1/services", json={"name": name, "base_price": base_price, **fields})
        assert response.status_code == 200, response.text
        return response.json()
    return _make


@pytest.fixture
def make_transaction(auth_client):
    def _make(type="income", amount="100.00", transaction_date="2025-01-10", description=None, **fields):
        payload = {
            "type": type,
            "amount": amount,
            "description": description or f"{type} {amount}",
            "transaction_date": transaction_date,
            **fields,
        }
        response = auth_client.post("/api/v1/transactions", json=payload)
        assert response.status_code == 200, response.text
        return response.json()
    return _make
