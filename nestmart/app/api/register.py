from flask import Flask

from nestmart.modules.auth.routes import bp as auth_bp
from nestmart.modules.catalog.routes import bp as catalog_bp
from nestmart.modules.cart.routes import bp as cart_bp


def register_api_blueprints(app: Flask) -> None:
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(catalog_bp, url_prefix="/api")
    app.register_blueprint(cart_bp, url_prefix="/api")

    # Root API document
    @app.get("/api")
    def api_index():
        return {
            "name": "Nestmart API",
            "version": "0.1.0",
            "endpoints": {
                "auth": ["/auth/login", "/auth/register", "/auth/logout"],
                "catalog": ["/products", "/products/categories", "/products/<id>"],
                "cart": ["/cart"],
            },
        }, 200
