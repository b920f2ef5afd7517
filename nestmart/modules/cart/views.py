from __future__ import annotations

from typing import Any, Mapping, Optional

from flask import current_app

from nestmart.app.collection_view import CollectionView
from nestmart.app.common.pagination import Paginator
from nestmart.app.extensions import catalog
from nestmart.app.models import Cart, Page, QueryState
from nestmart.app.render import cart_line_cell


class CartSource:
    """Fetches the remote cart on each page request and keeps the last copy for totals."""

    def __init__(self, cart_id: int):
        self.cart_id = cart_id
        self.cart: Optional[Cart] = None

    def __call__(self, query: QueryState) -> Page:
        self.cart = catalog.fetch_cart(self.cart_id)
        return self.cart.page(query)


def cart_view(args: Mapping[str, Any]) -> tuple[CollectionView, CartSource]:
    cfg = current_app.config
    source = CartSource(cfg["CART_ID"])
    paginator = Paginator.from_args(args, cfg["CART_LIMIT"], cfg["MAX_LIMIT"])
    view = CollectionView(
        source,
        paginator,
        cell=cart_line_cell,
        empty_message="Your cart is empty.",
        error_message="Unable to load your cart right now.",
    )
    return view.refresh(), source
