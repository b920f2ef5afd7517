from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import current_app

from nestmart.app.categories import CategorySelector
from nestmart.app.collection_view import CollectionView
from nestmart.app.common.errors import CatalogError
from nestmart.app.common.pagination import Paginator
from nestmart.app.extensions import catalog
from nestmart.app.models import Page, Product

logger = logging.getLogger(__name__)


def catalog_view(args: Mapping[str, Any]) -> tuple[CollectionView, CategorySelector]:
    """Main shop grid driven by ``?limit=&skip=&category=``."""
    cfg = current_app.config
    selector = CategorySelector(catalog)
    paginator = Paginator.from_args(args, cfg["DEFAULT_LIMIT"], cfg["MAX_LIMIT"])
    view = CollectionView(catalog.fetch_page, paginator)

    if paginator.category:
        try:
            selector.select(paginator, paginator.category)
        except CatalogError as exc:
            # No category list to check against; the grid fetch will report
            # the outage in its own error cell.
            logger.warning("category list unavailable: %s", exc)

    return view.refresh(), selector


def popular_view() -> CollectionView:
    paginator = Paginator(limit=current_app.config["POPULAR_LIMIT"])
    return CollectionView(catalog.fetch_page, paginator).refresh()


def best_sellers_view() -> CollectionView:
    cfg = current_app.config
    paginator = Paginator(limit=cfg["RELATED_LIMIT"] * 2, skip=cfg["BEST_SELL_SKIP"])
    return CollectionView(catalog.fetch_page, paginator).refresh()


def related_view(product: Product) -> CollectionView:
    """Other products from the same category, capped at RELATED_LIMIT."""
    cfg = current_app.config
    paginator = Paginator(limit=cfg["RELATED_LIMIT"] + 1, category=product.category)

    def fetch(query):
        page = catalog.fetch_page(query)
        items = [item for item in page.items if item.id != product.id][:cfg["RELATED_LIMIT"]]
        return Page(items=items, total=page.total, skip=page.skip, limit=page.limit)

    return CollectionView(fetch, paginator, empty_message="No related products.").refresh()
