from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from flask import Flask, current_app

from nestmart.app.common.errors import MalformedResponseError, UnavailableError
from nestmart.app.common.request_context import REQUEST_ID_HEADER, current_request_id

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class AuthResult:
    ok: bool
    message: Optional[str] = None
    token: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": self.ok, "message": self.message}


class AuthClient:
    """Thin pass-through to the remote auth API.

    The token it hands back is opaque to us; we only store it in a cookie.
    A non-2xx reply with a JSON body is a failed attempt, not an error.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self._base_url = base_url.rstrip("/") if base_url else None
        if timeout is None and base_url:
            timeout = DEFAULT_TIMEOUT
        self._timeout = timeout
        self.session = session or requests.Session()

    def init_app(self, app: Flask) -> None:
        app.extensions["nestmart.auth"] = self

    @property
    def base_url(self) -> str:
        if self._base_url is not None:
            return self._base_url
        return current_app.config["AUTH_API_URL"].rstrip("/")

    @property
    def timeout(self) -> float:
        if self._timeout is not None:
            return self._timeout
        return current_app.config["HTTP_TIMEOUT"]

    def _post(self, path: str, payload: Dict[str, Any]) -> AuthResult:
        url = f"{self.base_url}{path}"
        headers = {"Accept": "application/json"}
        rid = current_request_id()
        if rid:
            headers[REQUEST_ID_HEADER] = rid

        try:
            response = self.session.post(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("auth request failed url=%s error=%s", url, exc)
            raise UnavailableError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            data = response.json()
        except ValueError as exc:
            if response.status_code >= 500:
                raise UnavailableError(f"Request to {url} returned {response.status_code}",
                                       status=response.status_code, url=url) from exc
            raise MalformedResponseError(f"Response from {url} is not JSON") from exc

        if not isinstance(data, dict):
            raise MalformedResponseError(f"Response from {url} is not an object")

        message = data.get("message")
        if 200 <= response.status_code < 300:
            return AuthResult(ok=True, message=message, token=data.get("token"))

        if response.status_code >= 500:
            logger.warning("auth request returned status=%s url=%s", response.status_code, url)
            raise UnavailableError(f"Request to {url} returned {response.status_code}",
                                   status=response.status_code, url=url)
        return AuthResult(ok=False, message=message or "Request was rejected")

    def login(self, email: str, password: str) -> AuthResult:
        return self._post("/auth/login", {"email": email, "password": password})

    def register(self, name: str, email: str, password: str) -> AuthResult:
        return self._post("/auth/register", {"name": name, "email": email, "password": password})
