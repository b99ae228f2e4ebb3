# catalog/db/seed.py
"""
Load the states reference table from a CSV file.

States are read-only through the API, so this is the only way they get into
the database. Loading is idempotent: rows are upserted by UF.
"""

import csv
import logging
from pathlib import Path
from typing import Dict, List, Tuple

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Connection, Engine

from catalog.db.schema import states
from catalog.validation import is_valid_uf, normalize_text, normalize_uf

logger = logging.getLogger(__name__)

STATES_CSV = Path(__file__).resolve().parents[2] / "data" / "states.csv"


def parse_states_csv(file_path: Path = STATES_CSV) -> Tuple[List[Dict[str, str]], Dict]:
    states_by_uf: Dict[str, Dict[str, str]] = {}
    n_rows = 0
    n_errors = 0
    error_examples = []

    with open(file_path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)

        for row in reader:
            n_rows += 1
            uf = normalize_uf(row.get("uf"))
            name = normalize_text(row.get("name"))

            if not is_valid_uf(uf) or not name:
                n_errors += 1
                if len(error_examples) < 5:
                    error_examples.append({"row_number": n_rows, "row": dict(row)})
                continue

            # later rows win for a repeated UF
            states_by_uf[uf] = {"uf": uf, "name": name}

    stats = {
        "n_rows": n_rows,
        "n_states": len(states_by_uf),
        "n_errors": n_errors,
        "error_examples": error_examples,
    }
    return list(states_by_uf.values()), stats


def upsert_state(conn: Connection, state_row: Dict[str, str]) -> None:
    """
    Insert or rename a state by UF.

    state_row: {"uf": "SP", "name": "São Paulo"}
    """
    dialect = conn.dialect.name
    if dialect == "sqlite":
        stmt = sqlite_insert(states).values(**state_row)
    elif dialect == "postgresql":
        stmt = pg_insert(states).values(**state_row)
    else:
        raise NotImplementedError(f"upsert is not supported on {dialect}")

    stmt = stmt.on_conflict_do_update(
        index_elements=[states.c.uf],
        set_={"name": stmt.excluded.name},
    )
    conn.execute(stmt)


def load_states(engine: Engine, states_list: List[Dict[str, str]]) -> int:
    with engine.begin() as conn:
        for state in states_list:
            upsert_state(conn, state)
    logger.info("Loaded %s states", len(states_list))
    return len(states_list)
