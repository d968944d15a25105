import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient

from keeptrack.database import Database
from keeptrack.main import create_app


DEFAULT_PASSWORD = "Secret123"


@pytest.fixture
def database():
    database = Database("sqlite://")
    database.init_db()
    yield database
    database.dispose()


@pytest.fixture
def db(database, client):
    # Depends on client so the session closes before the app's lifespan
    # shutdown disposes the shared Database.
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def app(database):
    return create_app(database)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def register(client):
    """
    Registers a user and returns (user, headers) for bearer requests.
    """
    def _register(email="alice@example.com", name="Alice", password=DEFAULT_PASSWORD):
        response = client.post("/api/auth/register", json={
            "name": name,
            "email": email,
            "password": password,
        })
        assert response.status_code == 201, response.text
        data = response.json()
        return data["user"], {"Authorization": f"Bearer {data['token']}"}

    return _register


@pytest.fixture
def make_asset(client):
    def _make_asset(headers, name="Car", description=None):
        response = client.post("/api/assets", json={"name": name, "description": description}, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["asset"]

    return _make_asset


@pytest.fixture
def make_record(client):
    def _make_record(headers, asset_id, **fields):
        payload = {"asset_id": asset_id, "service_type": "Oil change", "service_date": "2024-01-10"}
        payload.update(fields)
        response = client.post("/api/maintenance-records", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["record"]

    return _make_record
