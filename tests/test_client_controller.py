"""
Tests for catalog/client/controller.py and catalog/client/cli.py, run against
the real app through TestClient.
"""
import pytest
from fastapi.testclient import TestClient

from catalog.client.cli import _build_parser, run
from catalog.client.controller import CatalogController, filter_cities
from catalog.client.http import ApiClient
from catalog.client.session import Session, TokenStore

from conftest import TOKEN


@pytest.fixture()
def notes():
    return []


@pytest.fixture()
def token_store(tmp_path):
    store = TokenStore(tmp_path / "token.json")
    store.save(TOKEN)
    return store


@pytest.fixture()
def api(app, token_store):
    session = Session(token_store, prompt=lambda _text: TOKEN)
    return ApiClient("", session, http_client=TestClient(app))


@pytest.fixture()
def controller(api, notes):
    return CatalogController(api, notify=notes.append)


class TestFilterCities:
    CITIES = [
        {"id": 1, "name": "Campinas", "state_uf": "SP"},
        {"id": 2, "name": "Niterói", "state_uf": "RJ"},
        {"id": 3, "name": "Sorocaba", "state_uf": "SP"},
    ]

    def test_empty_query_returns_all(self):
        assert filter_cities(self.CITIES, "  ") == self.CITIES

    def test_matches_name_case_insensitive(self):
        assert [c["id"] for c in filter_cities(self.CITIES, "CAMP")] == [1]

    def test_matches_uf(self):
        assert [c["id"] for c in filter_cities(self.CITIES, "sp")] == [1, 3]

    def test_no_match(self):
        assert filter_cities(self.CITIES, "xyz") == []


class TestController:
    def test_load_states_is_cached(self, controller):
        states = controller.load_states()
        assert {s["uf"] for s in states} == {"SP", "RJ", "MG"}
        assert controller.load_states() is states

    def test_add_city_reloads_cache(self, controller, notes):
        assert controller.load_cities() == []
        assert controller.add_city(" Campinas ", "sp")
        assert notes == ["City added!"]
        assert [c["name"] for c in controller.cache.cities] == ["Campinas"]
        assert controller.cache.invalidations == 1

    def test_add_requires_uf_before_request(self, controller, notes):
        assert not controller.add_city("Campinas", "")
        assert notes == ["Select the state (UF)"]
        assert controller.cache.invalidations == 0

    def test_add_requires_name(self, controller, notes):
        assert not controller.add_city("  ", "SP")
        assert notes == ["Enter the city name"]

    def test_server_error_is_surfaced(self, controller, notes):
        assert not controller.add_city("Atlantis", "ZZ")
        assert notes == ["State UF does not exist"]

    def test_duplicate_is_surfaced(self, controller, notes):
        controller.add_city("Campinas", "SP")
        assert not controller.add_city("Campinas", "SP")
        assert notes[-1] == "City already exists in this state"

    def test_edit_city(self, controller, notes):
        controller.add_city("Campinas", "SP")
        city = controller.filter_cities("campinas")[0]
        assert controller.edit_city(city["id"], "Paraty", "rj")
        assert notes[-1] == "City updated!"
        assert controller.filter_cities("paraty")[0]["state_uf"] == "RJ"

    def test_remove_needs_confirmation(self, controller, notes):
        controller.add_city("Campinas", "SP")
        city = controller.filter_cities()[0]
        assert not controller.remove_city(city["id"], confirm=lambda _q: False)
        assert controller.filter_cities() != []

        assert controller.remove_city(city["id"], confirm=lambda _q: True)
        assert notes[-1] == "City removed!"
        assert controller.filter_cities() == []

    def test_mutation_invalidates_even_on_failure(self, controller):
        controller.load_cities()
        controller.remove_city(999, confirm=lambda _q: True)
        assert controller.cache.invalidations == 1

    def test_stale_token_is_refreshed(self, controller, token_store, notes):
        token_store.save("stale")
        assert controller.add_city("Campinas", "SP")
        assert token_store.load() == TOKEN


class TestCli:
    def test_states(self, controller, capsys):
        args = _build_parser().parse_args(["states"])
        assert run(args, controller) == 0
        assert "SP - São Paulo" in capsys.readouterr().out

    def test_add_and_search(self, controller, capsys):
        assert run(_build_parser().parse_args(["add", "Campinas", "SP"]), controller) == 0
        assert run(_build_parser().parse_args(["cities", "--search", "camp"]), controller) == 0
        assert "Campinas" in capsys.readouterr().out

    def test_failed_mutation_exit_code(self, controller):
        assert run(_build_parser().parse_args(["add", "Atlantis", "ZZ"]), controller) == 1

    def test_remove_with_yes(self, controller, notes):
        controller.add_city("Campinas", "SP")
        city_id = controller.filter_cities()[0]["id"]
        assert run(_build_parser().parse_args(["remove", str(city_id), "--yes"]), controller) == 0
        assert controller.filter_cities() == []
