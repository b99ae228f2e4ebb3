# catalog/client/http.py
"""
HTTP request pipeline for the catalog API.

Every call carries `Authorization: Bearer <token>` from the Session. A 401 on
the first attempt asks the Session for a new token and replays the same
request once; a second 401 is returned to the caller as an ApiError.
"""

from typing import Any, Optional

import httpx

from catalog.client.session import Session

API_PREFIX = "/api"


class ApiError(RuntimeError):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


def _parse_body(resp: httpx.Response) -> Any:
    if resp.status_code == 204:
        return None
    content_type = resp.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            return resp.json()
        except ValueError:
            return None
    try:
        return resp.text
    except (UnicodeDecodeError, LookupError):
        return ""


def _error_message(status_code: int, data: Any) -> str:
    if isinstance(data, dict):
        for key in ("message", "error", "detail"):
            if data.get(key):
                return str(data[key])
    return f"HTTP {status_code}"


class ApiClient:
    def __init__(
        self,
        base_url: str,
        session: Session,
        *,
        timeout_s: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self.session = session
        self._http = http_client or httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout_s,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def request(self, method: str, path: str, json: Any = None, *, retried: bool = False) -> Any:
        headers = {"Authorization": f"Bearer {self.session.token}"}
        kwargs = {}
        if json is not None:
            kwargs["json"] = json

        resp = self._http.request(method, API_PREFIX + path, headers=headers, **kwargs)
        data = _parse_body(resp)

        if resp.status_code >= 400:
            if resp.status_code == 401 and not retried:
                self.session.refresh_token()
                return self.request(method, path, json, retried=True)
            raise ApiError(resp.status_code, _error_message(resp.status_code, data))
        return data

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, body: Any) -> Any:
        return self.request("POST", path, body)

    def put(self, path: str, body: Any) -> Any:
        return self.request("PUT", path, body)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
