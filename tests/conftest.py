"""
Shared fixtures: a fresh SQLite database per test, seeded with a few states,
and a TestClient bound to an app configured with a known token.
"""
import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.db.schema import metadata
from catalog.db.seed import load_states
from catalog.main import create_app

TOKEN = "test-token"

STATES = [
    {"uf": "SP", "name": "São Paulo"},
    {"uf": "RJ", "name": "Rio de Janeiro"},
    {"uf": "MG", "name": "Minas Gerais"},
]


@pytest.fixture()
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'test.sqlite'}"


@pytest.fixture()
def app(db_url):
    app = create_app(Settings(database_url=db_url, api_token=TOKEN))
    engine = app.state.engine
    metadata.create_all(engine)
    load_states(engine, STATES)
    yield app
    engine.dispose()


@pytest.fixture()
def engine(app):
    return app.state.engine


@pytest.fixture()
def client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def auth():
    return {"Authorization": f"Bearer {TOKEN}"}


@pytest.fixture()
def create_city(client, auth):
    def _create(name, state_uf):
        resp = client.post("/api/cidades", json={"name": name, "state_uf": state_uf}, headers=auth)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _create
