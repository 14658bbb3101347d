# tests/conftest.py
"""
Shared fixtures: in-memory sqlite, seeded reference data, API client.
"""
import os

# settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-for-testing"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from denonce import models, seed
from denonce.database import Base, build_engine
from denonce.dependency import get_db
from denonce.main import app

SUPER_ADMIN = ("admin@denonce.tg", "admin123")
ADMIN = ("moderateur@denonce.tg", "admin456")


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    seed.seed(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory, db):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def failsafe_client(client):
    """Client that returns 500 responses instead of re-raising server errors."""
    return TestClient(app, raise_server_exceptions=False)


def login(client, email, password):
    resp = client.post("/api/admin/login", json={"email": email, "mot_de_passe": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


@pytest.fixture
def super_headers(client):
    return {"Authorization": f"Bearer {login(client, *SUPER_ADMIN)}"}


@pytest.fixture
def admin_headers(client):
    return {"Authorization": f"Bearer {login(client, *ADMIN)}"}


@pytest.fixture
def categorie(db):
    return db.query(models.Categorie).filter(models.Categorie.nom == "Corruption").one()


@pytest.fixture
def statut_examen(db):
    return db.query(models.Statut).filter(models.Statut.nom == "En cours d'examen").one()


@pytest.fixture
def signalement(client, categorie):
    resp = client.post("/api/declarations", json={
        "titre": "Pot-de-vin au guichet",
        "description": "Un agent exige de l'argent pour délivrer un document.",
        "categorie_id": categorie.id,
        "lieu": "Mairie de Lomé",
    })
    assert resp.status_code == 200, resp.text
    return resp.json()
