import os
import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

# bcrypt rapide pour les tests, à fixer AVANT d'importer app.core.config
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Créer engine SQLite pour tests AVANT d'importer app
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"
test_engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# PATCH: remplacer le engine et SessionLocal du core.database AVANT d'importer app
import app.core.database
app.core.database.engine = test_engine
app.core.database.SessionLocal = TestingSessionLocal

# Maintenant importer app (qui utilisera notre engine SQLite)
from app.core.database import Base, get_db
from app.main import app as api

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

# Override la dépendance
api.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB et les sessions avant/après chaque test"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    api.state.sessions.clear()
    yield
    api.state.sessions.clear()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def make_client():
    """Un TestClient par utilisateur simulé (chacun a son propre cookie jar)"""
    def _make():
        return TestClient(api)
    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = TestingSessionLocal()
    yield db
    db.close()


def register(client, username="alice", password="secret123"):
    return client.post("/api/register", json={"username": username, "password": password})


@pytest.fixture
def alice(make_client):
    """Client connecté en tant qu'alice"""
    c = make_client()
    assert register(c, "alice", "secret123").status_code == 201
    return c


@pytest.fixture
def bob(make_client):
    """Client connecté en tant que bob"""
    c = make_client()
    assert register(c, "bob", "hunter22").status_code == 201
    return c
