from __future__ import annotations

from flask import Blueprint, request

from nestmart.modules.cart.views import cart_view
from nestmart.modules.catalog.routes import page_response

bp = Blueprint("cart", __name__)


@bp.get("/cart")
def get_cart():
    """GET /api/cart - The demo cart, its lines paged with ?limit=&skip=."""
    view, source = cart_view(request.args)
    payload = page_response(view)
    cart = source.cart
    payload["summary"] = {
        "cart_id": cart.id,
        "total": cart.total,
        "discounted_total": cart.discounted_total,
        "discount": cart.discount,
        "total_products": cart.total_products,
        "total_quantity": cart.total_quantity,
    }
    return payload, 200
