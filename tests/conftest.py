import base64

import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings
from db import Database


@pytest.fixture
def settings(tmp_path):
    return Settings(_env_file=None, db_path=tmp_path / "data" / "sbs.db")


@pytest.fixture
def database(settings):
    """A freshly seeded database in a temp directory"""
    database = Database(settings.db_path)
    database.init()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(settings, database):
    with TestClient(create_app(settings, database)) as c:
        yield c


def basic_auth(username, password):
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def admin_headers():
    return basic_auth("admin", "sbs2569")
