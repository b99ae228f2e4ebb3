# catalog/db/engine.py

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine

from catalog.config import DEFAULT_DB_URL


def _enable_sqlite_foreign_keys(dbapi_conn, _record) -> None:
    # SQLite ships with foreign key enforcement off, per connection.
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_url: str = DEFAULT_DB_URL) -> Engine:
    # echo=True if you want to see SQL printed in the terminal
    engine = create_engine(db_url, future=True, pool_pre_ping=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def check_connection(engine: Engine) -> None:
    """Round-trip a trivial query; raises if the database is unreachable."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def request_engine(request) -> Engine:
    """Engine created at startup and stored on the FastAPI app state."""
    return request.app.state.engine
