from __future__ import annotations

import logging
from datetime import datetime

from flask import Flask, g, jsonify, render_template, request
from werkzeug.exceptions import HTTPException

from nestmart.app.config import Config
from nestmart.app.extensions import auth_api, catalog, cors
from nestmart.app.common.auth import current_token
from nestmart.app.common.errors import ApiError, CatalogError, catalog_error_to_api
from nestmart.app.common.request_context import REQUEST_ID_HEADER, init_request_id
from nestmart.app.api.register import register_api_blueprints
from nestmart.app.ui import ui_bp


def _wants_json() -> bool:
    return request.path == "/api" or request.path.startswith("/api/")


def create_app(config_object: type[Config] = Config) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object)
    app.json.sort_keys = False

    # Basic logging (enough for perf debugging)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    # Extensions
    cors.init_app(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS") or "*"}})
    catalog.init_app(app)
    auth_api.init_app(app)

    # Request id
    @app.before_request
    def _before_request():
        init_request_id()

    @app.after_request
    def _after_request(response):
        rid = getattr(g, "request_id", None)
        if rid:
            response.headers[REQUEST_ID_HEADER] = rid
        return response

    @app.context_processor
    def inject_nav():
        return {
            "nav_logged_in": current_token() is not None,
            "current_year": datetime.utcnow().year,
        }

    # Health endpoint
    @app.get("/health")
    def health():
        return {"status": "ok"}, 200

    # Register API blueprints
    register_api_blueprints(app)

    # Storefront pages
    app.register_blueprint(ui_bp)

    # Error handlers
    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        return jsonify(err.to_dict(getattr(g, "request_id", None))), err.status_code

    @app.errorhandler(CatalogError)
    def handle_catalog_error(err: CatalogError):
        app.logger.warning("collaborator error on %s: %s", request.path, err)
        api_err = catalog_error_to_api(err)
        if _wants_json():
            return handle_api_error(api_err)
        if api_err.status_code == 404:
            return render_template("errors/404.html"), 404
        return render_template("errors/502.html"), 502

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        if not _wants_json():
            if err.code == 404:
                return render_template("errors/404.html"), 404
            return err.get_response()

        # Normalize Werkzeug errors into our JSON shape
        payload = {
            "error": {
                "code": "http_error",
                "message": err.description,
                "details": {"name": err.name},
                "request_id": getattr(g, "request_id", None),
            }
        }
        return jsonify(payload), err.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        app.logger.exception("Unhandled exception")
        if not _wants_json():
            return render_template("errors/500.html"), 500

        payload = {
            "error": {
                "code": "internal_error",
                "message": "Internal server error",
                "details": {},
                "request_id": getattr(g, "request_id", None),
            }
        }
        return jsonify(payload), 500

    return app
