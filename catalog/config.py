# catalog/config.py
"""
Runtime settings read from environment variables.

Every value has a default so the server starts without configuration, except
API_TOKEN: when it is missing every /api request answers 500.

    DATABASE_URL   SQLAlchemy URL (default: sqlite:///db.sqlite)
    API_TOKEN      static bearer token expected on /api requests
    HOST / PORT    bind address for `python -m catalog.main`
    LOG_LEVEL      logging level name (default: INFO)
    CORS_ORIGINS   comma-separated origins, or * (default)
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_DB_URL = "sqlite:///db.sqlite"  # file in project root


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _split_origins(raw: str) -> List[str]:
    if raw.strip() == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass
class Settings:
    database_url: str = DEFAULT_DB_URL
    api_token: Optional[str] = None
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        token = os.environ.get("API_TOKEN", "").strip()
        return cls(
            database_url=os.environ.get("DATABASE_URL", "").strip() or DEFAULT_DB_URL,
            api_token=token or None,
            host=os.environ.get("HOST", "").strip() or "127.0.0.1",
            port=_env_int("PORT", 3000),
            log_level=os.environ.get("LOG_LEVEL", "").strip().upper() or "INFO",
            cors_origins=_split_origins(os.environ.get("CORS_ORIGINS", "*")),
        )
