"""Auth token cookie handling.

The auth API hands back an opaque token. We keep it in a cookie so pages
can tell a signed-in visitor apart, but never decode or validate it.
"""

from flask import Response, current_app, request


def current_token() -> str | None:
    return request.cookies.get(current_app.config["AUTH_COOKIE_NAME"]) or None


def set_auth_cookie(response: Response, token: str) -> Response:
    response.set_cookie(
        current_app.config["AUTH_COOKIE_NAME"],
        token,
        max_age=current_app.config["AUTH_COOKIE_MAX_AGE"],
        httponly=True,
        samesite="Lax",
    )
    return response


def clear_auth_cookie(response: Response) -> Response:
    response.delete_cookie(current_app.config["AUTH_COOKIE_NAME"])
    return response
