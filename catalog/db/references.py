# catalog/db/references.py
"""
Referential checks between cities and states.

The foreign key on cities.state_uf is what actually keeps a City from pointing
at a missing State. The helpers here answer "does this UF exist?" and tell a
failed write apart: reference violation or duplicate (name, state_uf).
"""

from enum import Enum
from typing import Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError

from catalog.db.schema import states


class WriteOutcome(str, Enum):
    INSERTED = "inserted"
    UPDATED = "updated"
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"
    REFERENCE_VIOLATION = "reference_violation"


# MySQL errno / PostgreSQL SQLSTATE for the two constraints cities can break.
_MYSQL_DUPLICATE = 1062
_MYSQL_FOREIGN_KEY = {1216, 1452}
_PG_UNIQUE = "23505"
_PG_FOREIGN_KEY = "23503"


def state_exists(conn: Connection, uf: str) -> bool:
    stmt = select(states.c.uf).where(states.c.uf == uf)
    return conn.execute(stmt).first() is not None


def _classify_driver_error(orig) -> Optional[WriteOutcome]:
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == _PG_UNIQUE:
        return WriteOutcome.DUPLICATE
    if code == _PG_FOREIGN_KEY:
        return WriteOutcome.REFERENCE_VIOLATION

    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int):
        if args[0] == _MYSQL_DUPLICATE:
            return WriteOutcome.DUPLICATE
        if args[0] in _MYSQL_FOREIGN_KEY:
            return WriteOutcome.REFERENCE_VIOLATION

    # sqlite3 only reports the constraint kind in the message
    message = str(orig).upper()
    if "UNIQUE CONSTRAINT FAILED" in message:
        return WriteOutcome.DUPLICATE
    if "FOREIGN KEY CONSTRAINT FAILED" in message:
        return WriteOutcome.REFERENCE_VIOLATION
    return None


def explain_integrity_error(
    conn: Connection, exc: IntegrityError, state_uf: str
) -> Optional[WriteOutcome]:
    """
    Map a constraint failure on a City write to DUPLICATE or
    REFERENCE_VIOLATION. Returns None when it is neither.
    """
    outcome = _classify_driver_error(exc.orig)
    if outcome is not None:
        return outcome
    if not state_exists(conn, state_uf):
        return WriteOutcome.REFERENCE_VIOLATION
    return None
