# catalog/client/session.py
"""
Client session: the bearer token and where it is persisted.

The token lives in a small JSON file under a fixed key so it survives between
runs, the way the browser front end keeps it in localStorage.
"""

import json
import logging
import os
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)

TOKEN_KEY = "api_token"
DEFAULT_TOKEN_FILE = Path.home() / ".config" / "catalog" / "token.json"

Prompt = Callable[[str], Optional[str]]


class TokenRequired(RuntimeError):
    """Raised when a token is needed and none was provided."""


def default_token_file() -> Path:
    raw = os.environ.get("CATALOG_TOKEN_FILE", "").strip()
    return Path(raw) if raw else DEFAULT_TOKEN_FILE


class TokenStore:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else default_token_file()

    def load(self) -> str:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return ""
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable token file %s: %s", self.path, e)
            return ""
        if not isinstance(data, dict):
            return ""
        return str(data.get(TOKEN_KEY) or "")

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({TOKEN_KEY: token}), encoding="utf-8")


class Session:
    """
    Token context handed to ApiClient.

    `prompt` asks the user for a token (e.g. getpass.getpass); it may return
    None or "" when the user gives up.
    """

    PROMPT_TEXT = "Enter your API_TOKEN (Bearer): "

    def __init__(self, store: TokenStore, prompt: Prompt):
        self.store = store
        self.prompt = prompt

    @property
    def token(self) -> str:
        return self.store.load().strip()

    def ensure_token(self) -> str:
        token = self.token
        if not token:
            token = self.refresh_token()
        return token

    def refresh_token(self) -> str:
        token = (self.prompt(self.PROMPT_TEXT) or "").strip()
        if not token:
            raise TokenRequired("API_TOKEN not provided")
        self.store.save(token)
        return token
