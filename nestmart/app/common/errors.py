from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ApiError(Exception):
    """Raise to return a consistent JSON error response."""

    status_code: int
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self, request_id: str | None = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details or {},
                "request_id": request_id,
            }
        }
        return payload


def abort_json(status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> None:
    """Convenience wrapper."""
    raise ApiError(status_code=status_code, code=code, message=message, details=details)


class CatalogError(Exception):
    """Base for failures talking to a remote collaborator."""


class UnavailableError(CatalogError):
    """Transport failure or a non-2xx reply."""

    def __init__(self, message: str, status: int | None = None, url: str | None = None):
        super().__init__(message)
        self.status = status
        self.url = url

    @property
    def not_found(self) -> bool:
        return self.status == 404


class MalformedResponseError(CatalogError):
    """Reply body could not be parsed into the expected shape."""


def catalog_error_to_api(err: CatalogError) -> ApiError:
    if isinstance(err, UnavailableError):
        if err.not_found:
            return ApiError(404, "not_found", "Resource not found")
        return ApiError(502, "upstream_unavailable", "Upstream service unavailable", {"status": err.status})
    return ApiError(502, "upstream_malformed", "Upstream service returned an unexpected response")
