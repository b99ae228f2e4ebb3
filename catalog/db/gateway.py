# catalog/db/gateway.py
"""
Persistence gateway: every SQL statement the API runs lives here.

Reads return plain dicts (or None). Writes return a WriteResult whose outcome
says what happened, so callers never look at driver error codes. Any other
database failure is raised as StoreFailure.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from catalog.db.references import WriteOutcome, explain_integrity_error, state_exists
from catalog.db.schema import cities, states
from catalog.errors import StoreFailure
from catalog.validation import id_in_range

Row = Dict[str, Any]


@dataclass
class WriteResult:
    outcome: WriteOutcome
    row: Optional[Row] = None

    @property
    def ok(self) -> bool:
        return self.outcome in (
            WriteOutcome.INSERTED,
            WriteOutcome.UPDATED,
            WriteOutcome.DELETED,
        )


@contextmanager
def _store_errors(message: str) -> Iterator[None]:
    try:
        yield
    except StoreFailure:
        raise
    except SQLAlchemyError as exc:
        raise StoreFailure(message) from exc


# ---- States ----

def list_states(engine: Engine) -> List[Row]:
    with _store_errors("Error listing states"), engine.connect() as conn:
        stmt = (
            select(states.c.id, states.c.name, states.c.uf)
            .order_by(states.c.name)
        )
        return [dict(row) for row in conn.execute(stmt).mappings().all()]


def get_state(engine: Engine, uf: str) -> Optional[Row]:
    with _store_errors("Error fetching state"), engine.connect() as conn:
        stmt = (
            select(states.c.id, states.c.name, states.c.uf)
            .where(states.c.uf == uf)
        )
        row = conn.execute(stmt).mappings().first()
    return dict(row) if row is not None else None


# ---- Cities ----

def list_cities(engine: Engine, limit: int, offset: int) -> List[Row]:
    with _store_errors("Error listing cities"), engine.connect() as conn:
        stmt = (
            select(cities.c.id, cities.c.name, cities.c.state_uf)
            .order_by(cities.c.name, cities.c.id)
            .limit(limit)
            .offset(offset)
        )
        return [dict(row) for row in conn.execute(stmt).mappings().all()]


def get_city(engine: Engine, city_id: int) -> Optional[Row]:
    if not id_in_range(city_id):
        return None
    with _store_errors("Error fetching city"), engine.connect() as conn:
        stmt = (
            select(cities.c.id, cities.c.name, cities.c.state_uf)
            .where(cities.c.id == city_id)
        )
        row = conn.execute(stmt).mappings().first()
    return dict(row) if row is not None else None


def _explain_failed_write(engine: Engine, exc: IntegrityError, state_uf: str, message: str) -> WriteResult:
    with _store_errors(message), engine.connect() as conn:
        outcome = explain_integrity_error(conn, exc, state_uf)
    if outcome is None:
        raise StoreFailure(message) from exc
    return WriteResult(outcome)


def insert_city(engine: Engine, name: str, state_uf: str) -> WriteResult:
    message = "Error creating city"
    try:
        with _store_errors(message), engine.begin() as conn:
            result = conn.execute(insert(cities).values(name=name, state_uf=state_uf))
            city_id = result.inserted_primary_key[0]
    except StoreFailure as failure:
        if isinstance(failure.__cause__, IntegrityError):
            return _explain_failed_write(engine, failure.__cause__, state_uf, message)
        raise

    return WriteResult(
        WriteOutcome.INSERTED,
        {"id": city_id, "name": name, "state_uf": state_uf},
    )


def update_city(engine: Engine, city_id: int, name: str, state_uf: str) -> WriteResult:
    """
    Full-field update. A missing id with an unknown UF reports the UF problem
    first, matching the error priority of creates. Ids outside the column
    range are reported missing without running the update.
    """
    message = "Error updating city"
    if not id_in_range(city_id):
        with _store_errors(message), engine.connect() as conn:
            known_uf = state_exists(conn, state_uf)
        return WriteResult(WriteOutcome.NOT_FOUND if known_uf else WriteOutcome.REFERENCE_VIOLATION)

    try:
        with _store_errors(message), engine.begin() as conn:
            stmt = (
                update(cities)
                .where(cities.c.id == city_id)
                .values(name=name, state_uf=state_uf)
            )
            affected = conn.execute(stmt).rowcount
            if not affected and not state_exists(conn, state_uf):
                return WriteResult(WriteOutcome.REFERENCE_VIOLATION)
    except StoreFailure as failure:
        if isinstance(failure.__cause__, IntegrityError):
            return _explain_failed_write(engine, failure.__cause__, state_uf, message)
        raise

    if not affected:
        return WriteResult(WriteOutcome.NOT_FOUND)
    return WriteResult(
        WriteOutcome.UPDATED,
        {"id": city_id, "name": name, "state_uf": state_uf},
    )


def delete_city(engine: Engine, city_id: int) -> WriteResult:
    if not id_in_range(city_id):
        return WriteResult(WriteOutcome.NOT_FOUND)
    with _store_errors("Error deleting city"), engine.begin() as conn:
        affected = conn.execute(delete(cities).where(cities.c.id == city_id)).rowcount

    if not affected:
        return WriteResult(WriteOutcome.NOT_FOUND)
    return WriteResult(WriteOutcome.DELETED)
