"""Server-rendered storefront pages.

Each page builds its own collection views for the request; nothing about
paging survives between requests except what is in the URL.
"""

import logging

from flask import Blueprint, abort, current_app, flash, make_response, redirect, render_template, request, url_for

from nestmart.app.common.auth import clear_auth_cookie, set_auth_cookie
from nestmart.app.common.errors import CatalogError, UnavailableError
from nestmart.app.extensions import auth_api, catalog
from nestmart.modules.cart.views import cart_view
from nestmart.modules.catalog.views import best_sellers_view, catalog_view, popular_view, related_view

logger = logging.getLogger(__name__)

ui_bp = Blueprint("ui", __name__)


def _category_options():
    try:
        return catalog.list_categories()
    except CatalogError as exc:
        logger.warning("category list unavailable: %s", exc)
        return []


@ui_bp.get("/")
def home():
    return render_template(
        "pages/home.html",
        categories=_category_options(),
        popular=popular_view(),
        best_sellers=best_sellers_view(),
    )


@ui_bp.get("/shop")
def shop_page():
    view, selector = catalog_view(request.args)
    try:
        categories = selector.options()
    except CatalogError as exc:
        logger.warning("category list unavailable: %s", exc)
        categories = []
    return render_template(
        "pages/shop.html",
        view=view,
        pager=view.paginator,
        categories=categories,
        limit_choices=current_app.config["LIMIT_CHOICES"],
    )


@ui_bp.get("/shop/<int:product_id>")
def product_page(product_id: int):
    try:
        product = catalog.fetch_product(product_id)
    except UnavailableError as exc:
        if exc.not_found:
            abort(404)
        raise
    return render_template("pages/product.html", product=product, related=related_view(product))


@ui_bp.get("/cart")
def cart_page():
    view, source = cart_view(request.args)
    return render_template("pages/cart.html", view=view, pager=view.paginator, cart=source.cart)


@ui_bp.get("/about")
def about_page():
    return render_template("pages/about.html")


@ui_bp.get("/login")
def login_page():
    return render_template("pages/login.html")


@ui_bp.post("/login")
def login_post():
    email = (request.form.get("email") or "").strip().lower()
    password = request.form.get("password") or ""
    if not email or not password:
        flash("Email and password are required.", "error")
        return redirect(url_for("ui.login_page"))

    try:
        result = auth_api.login(email, password)
    except CatalogError as exc:
        logger.warning("login failed: %s", exc)
        flash("Login service is unavailable, please try again.", "error")
        return redirect(url_for("ui.login_page"))

    if not result.ok or not result.token:
        flash(result.message or "Invalid email or password.", "error")
        return redirect(url_for("ui.login_page"))

    flash(result.message or "Login successful!", "success")
    return set_auth_cookie(redirect(url_for("ui.home")), result.token)


@ui_bp.get("/registration")
def register_page():
    return render_template("pages/register.html")


@ui_bp.post("/registration")
def register_post():
    name = (request.form.get("name") or "").strip()
    email = (request.form.get("email") or "").strip().lower()
    password = request.form.get("password") or ""
    if not name or not email or not password:
        flash("Name, email and password are required.", "error")
        return redirect(url_for("ui.register_page"))

    try:
        result = auth_api.register(name, email, password)
    except CatalogError as exc:
        logger.warning("registration failed: %s", exc)
        flash("Registration service is unavailable, please try again.", "error")
        return redirect(url_for("ui.register_page"))

    if not result.ok:
        flash(result.message or "Registration failed.", "error")
        return redirect(url_for("ui.register_page"))

    flash(result.message or "Account created, please log in.", "success")
    return redirect(url_for("ui.login_page"))


@ui_bp.post("/logout")
def logout():
    flash("Logged out.", "success")
    return clear_auth_cookie(make_response(redirect(url_for("ui.home"))))
