from flask import Blueprint, jsonify

from nestmart.app.common.auth import clear_auth_cookie, set_auth_cookie
from nestmart.app.common.validation import get_json, require_fields
from nestmart.app.extensions import auth_api

bp = Blueprint("auth", __name__)


# POST /api/auth/login
@bp.post("/auth/login")
def login():
    data = get_json()
    require_fields(data, ["email", "password"])

    email = str(data["email"]).strip().lower()
    result = auth_api.login(email, str(data["password"]))
    if not result.ok:
        return jsonify(result.to_dict()), 401

    response = jsonify(result.to_dict())
    if result.token:
        set_auth_cookie(response, result.token)
    return response, 200


# POST /api/auth/register
@bp.post("/auth/register")
def register():
    data = get_json()
    require_fields(data, ["name", "email", "password"])

    result = auth_api.register(
        str(data["name"]).strip(),
        str(data["email"]).strip().lower(),
        str(data["password"]),
    )
    return result.to_dict(), 201 if result.ok else 400


# POST /api/auth/logout
@bp.post("/auth/logout")
def logout():
    return clear_auth_cookie(jsonify({"ok": True})), 200
