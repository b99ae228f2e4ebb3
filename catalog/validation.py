# catalog/validation.py
"""
Normalization and validation of raw request fields.

Normalizers never raise: text becomes a stripped string, UFs are uppercased,
and ids that are not base-10 integers come back as None. Validators raise
InvalidInput and have no side effects.
"""

import re
from typing import Any, Optional, Tuple

from catalog.errors import InvalidInput

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 100
MAX_LIMIT = 100

# ids and offsets are bound as signed 64-bit integers
MAX_DB_INT = 2**63 - 1

_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_UF_RE = re.compile(r"^[A-Z]{2}$")


# ---- Normalizer ----

def normalize_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def normalize_uf(value: Any) -> str:
    return normalize_text(value).upper()


def parse_int(value: Any) -> Optional[int]:
    """Parse a base-10 integer; None means "not an integer"."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = normalize_text(value)
    if not _INT_RE.match(text):
        return None
    return int(text)


def parse_id(value: Any) -> Optional[int]:
    return parse_int(value)


# ---- Validator ----

def validate_page(page: Any = None, limit: Any = None) -> Tuple[int, int]:
    """
    Resolve (page, limit) for list endpoints.

    Non-numeric input falls back to the defaults; numbers are clamped so that
    page >= 1 and 1 <= limit <= MAX_LIMIT.
    """
    parsed_page = parse_int(page)
    parsed_limit = parse_int(limit)

    page_value = DEFAULT_PAGE if parsed_page is None else max(1, parsed_page)
    if parsed_limit is None:
        limit_value = DEFAULT_LIMIT
    else:
        limit_value = min(MAX_LIMIT, max(1, parsed_limit))
    return page_value, limit_value


def page_offset(page: int, limit: int) -> int:
    return min((page - 1) * limit, MAX_DB_INT)


def id_in_range(value: int) -> bool:
    """False for ids no row can have: they do not fit the id column."""
    return -MAX_DB_INT - 1 <= value <= MAX_DB_INT


def validate_id(value: Any) -> int:
    city_id = parse_id(value)
    if city_id is None:
        raise InvalidInput("invalid id")
    return city_id


def is_valid_uf(uf: str) -> bool:
    return bool(_UF_RE.match(uf))


def validate_uf(value: Any) -> str:
    uf = normalize_uf(value)
    if not is_valid_uf(uf):
        raise InvalidInput("invalid UF")
    return uf


def validate_city_payload(body: Any) -> Tuple[str, str]:
    """Return the normalized (name, state_uf) pair of a City write."""
    if not isinstance(body, dict):
        body = {}

    name = normalize_text(body.get("name"))
    state_uf = normalize_uf(body.get("state_uf"))

    if not name or not state_uf:
        raise InvalidInput("name and state_uf are required")
    if not is_valid_uf(state_uf):
        raise InvalidInput("state_uf must be a two-letter UF")
    return name, state_uf
