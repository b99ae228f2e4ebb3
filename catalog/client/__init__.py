"""
Python client for the catalog API: session, request pipeline, UI controller.
"""

from .controller import CatalogController, CityCache, filter_cities
from .http import ApiClient, ApiError
from .session import Session, TokenRequired, TokenStore

__all__ = [
    "ApiClient",
    "ApiError",
    "CatalogController",
    "CityCache",
    "Session",
    "TokenRequired",
    "TokenStore",
    "filter_cities",
]
