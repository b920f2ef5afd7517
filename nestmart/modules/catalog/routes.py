from __future__ import annotations

from flask import Blueprint, request

from nestmart.app.collection_view import CollectionView
from nestmart.app.common.errors import catalog_error_to_api
from nestmart.app.extensions import catalog
from nestmart.modules.catalog.views import catalog_view

bp = Blueprint("catalog", __name__)


def page_response(view: CollectionView):
    """Shared JSON shape for any paged collection."""
    if view.error is not None:
        raise catalog_error_to_api(view.error)
    return {
        "items": [item.to_dict() for item in view.page.items],
        "pagination": view.paginator.to_dict(),
    }


@bp.get("/products")
def list_products():
    """GET /api/products - One page of the catalog.

    Query params:
      - limit, skip
      - category: category slug, filtered by the remote catalog
    """
    view, _ = catalog_view(request.args)
    return page_response(view), 200


@bp.get("/products/categories")
def list_categories():
    return {"categories": [{"slug": c.slug, "name": c.name} for c in catalog.list_categories()]}, 200


@bp.get("/products/<int:product_id>")
def get_product(product_id: int):
    """GET /api/products/<id> - Retrieve product details."""
    return catalog.fetch_product(product_id).to_dict(), 200
