# catalog/client/controller.py
"""
UI controller for the catalog client.

Owns a local cache of states and cities, filters cities for display, and runs
the add/edit/remove actions. Every mutation invalidates the city cache and
reloads it. Errors are reported through `notify`, never dropped.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from catalog.client.http import ApiClient, ApiError
from catalog.client.session import TokenRequired

City = Dict[str, Any]
State = Dict[str, Any]

CITY_FETCH_LIMIT = 1000  # the server clamps this to its own maximum


@dataclass
class CityCache:
    states: Optional[List[State]] = None
    cities: Optional[List[City]] = None
    invalidations: int = field(default=0)

    def invalidate_cities(self) -> None:
        self.cities = None
        self.invalidations += 1


def filter_cities(cities: List[City], query: str) -> List[City]:
    """Case-insensitive substring match on city name or UF."""
    q = (query or "").strip().lower()
    if not q:
        return list(cities)
    return [
        c for c in cities
        if q in str(c.get("name", "")).lower() or q in str(c.get("state_uf", "")).lower()
    ]


class CatalogController:
    def __init__(self, api: ApiClient, notify: Callable[[str], None], cache: Optional[CityCache] = None):
        self.api = api
        self.notify = notify
        self.cache = cache or CityCache()

    def load_states(self) -> List[State]:
        if self.cache.states is None:
            self.cache.states = self.api.get("/estados") or []
        return self.cache.states

    def load_cities(self) -> List[City]:
        if self.cache.cities is None:
            self.cache.cities = self.api.get(f"/cidades?limit={CITY_FETCH_LIMIT}") or []
        return self.cache.cities

    def filter_cities(self, query: str = "") -> List[City]:
        return filter_cities(self.load_cities(), query)

    def _mutate(self, action: Callable[[], Any], success: str, failure: str) -> bool:
        self.cache.invalidate_cities()
        try:
            action()
            self.load_cities()
        except (ApiError, TokenRequired) as e:
            self.notify(str(e) or failure)
            return False
        self.notify(success)
        return True

    def add_city(self, name: str, state_uf: str) -> bool:
        name = (name or "").strip()
        state_uf = (state_uf or "").strip().upper()
        if not state_uf:
            self.notify("Select the state (UF)")
            return False
        if not name:
            self.notify("Enter the city name")
            return False
        return self._mutate(
            lambda: self.api.post("/cidades", {"name": name, "state_uf": state_uf}),
            "City added!",
            "Error adding city",
        )

    def edit_city(self, city_id: int, name: str, state_uf: str) -> bool:
        body = {"name": (name or "").strip(), "state_uf": (state_uf or "").strip().upper()}
        return self._mutate(
            lambda: self.api.put(f"/cidades/{city_id}", body),
            "City updated!",
            "Error updating city",
        )

    def remove_city(self, city_id: int, confirm: Callable[[str], bool]) -> bool:
        if not confirm("Remove this city?"):
            return False
        return self._mutate(
            lambda: self.api.delete(f"/cidades/{city_id}"),
            "City removed!",
            "Error removing city",
        )
