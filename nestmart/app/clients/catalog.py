"""HTTP client for the remote product catalog (DummyJSON-shaped API).

One call issues exactly one GET. There is no retry and no caching; every
failure is reported as either ``UnavailableError`` (could not get a 2xx
reply) or ``MalformedResponseError`` (got one, but not the shape we need).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from flask import Flask, current_app

from nestmart.app.common.errors import MalformedResponseError, UnavailableError
from nestmart.app.common.request_context import REQUEST_ID_HEADER, current_request_id
from nestmart.app.models import Cart, CartLine, Category, Item, Page, Product, QueryState

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class CatalogClient:
    """Catalog calls for whichever app is current.

    A client built with an explicit ``base_url``/``timeout`` uses those;
    the shared instance in ``extensions`` reads them from the active app's
    config on every call, so several apps can share it.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self._base_url = base_url.rstrip("/") if base_url else None
        if timeout is None and base_url:
            timeout = DEFAULT_TIMEOUT
        self._timeout = timeout
        self.session = session or requests.Session()

    def init_app(self, app: Flask) -> None:
        app.extensions["nestmart.catalog"] = self

    @property
    def base_url(self) -> str:
        if self._base_url is not None:
            return self._base_url
        return current_app.config["CATALOG_API_URL"].rstrip("/")

    @property
    def timeout(self) -> float:
        if self._timeout is not None:
            return self._timeout
        return current_app.config["HTTP_TIMEOUT"]

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        headers = {"Accept": "application/json"}
        rid = current_request_id()
        if rid:
            headers[REQUEST_ID_HEADER] = rid

        try:
            response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("catalog request failed url=%s error=%s", url, exc)
            raise UnavailableError(f"Request to {url} failed: {exc}", url=url) from exc

        if not 200 <= response.status_code < 300:
            logger.warning("catalog request returned status=%s url=%s", response.status_code, url)
            raise UnavailableError(
                f"Request to {url} returned {response.status_code}",
                status=response.status_code,
                url=url,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(f"Response from {url} is not JSON") from exc

    def fetch_page(self, query: QueryState) -> Page:
        if query.category:
            path = f"/products/category/{quote(query.category, safe='')}"
        else:
            path = "/products"
        data = self._get(path, params=query.params())
        return parse_page(data, query)

    def list_categories(self) -> List[Category]:
        data = self._get("/products/categories")
        if not isinstance(data, list):
            raise MalformedResponseError("Categories response is not a list")
        return [parse_category(entry) for entry in data]

    def fetch_product(self, product_id: int) -> Product:
        data = self._get(f"/products/{int(product_id)}")
        if not isinstance(data, dict) or "id" not in data:
            raise MalformedResponseError("Product response has no id")
        try:
            return Product.from_json(data)
        except (AttributeError, TypeError, ValueError) as exc:
            raise MalformedResponseError(f"Bad product payload: {exc}") from exc

    def fetch_cart(self, cart_id: int) -> Cart:
        data = self._get(f"/carts/{int(cart_id)}")
        if not isinstance(data, dict) or not isinstance(data.get("products"), list):
            raise MalformedResponseError("Cart response has no products")
        try:
            lines = [
                CartLine(
                    id=int(p["id"]),
                    title=str(p.get("title") or ""),
                    price=float(p.get("price") or 0),
                    quantity=int(p.get("quantity") or 0),
                    total=float(p.get("total") or 0),
                    discounted_total=float(p.get("discountedTotal") or p.get("total") or 0),
                    thumbnail=p.get("thumbnail"),
                )
                for p in data["products"]
            ]
            return Cart(
                id=int(data.get("id", cart_id)),
                lines=lines,
                total=float(data.get("total") or 0),
                discounted_total=float(data.get("discountedTotal") or 0),
                total_products=int(data.get("totalProducts") or len(lines)),
                total_quantity=int(data.get("totalQuantity") or sum(line.quantity for line in lines)),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise MalformedResponseError(f"Bad cart payload: {exc}") from exc


def parse_page(data: Any, query: QueryState) -> Page:
    """Turn a ``{products, total, skip, limit}`` body into a Page.

    ``skip``/``limit`` fall back to the query values when the reply omits
    them; ``products`` and ``total`` are required.
    """
    if not isinstance(data, dict):
        raise MalformedResponseError("Page response is not an object")
    if "products" not in data or "total" not in data:
        raise MalformedResponseError("Page response is missing 'products' or 'total'")

    products = data["products"]
    total = data["total"]
    if not isinstance(products, list):
        raise MalformedResponseError("'products' is not a list")
    if isinstance(total, bool) or not isinstance(total, int) or total < 0:
        raise MalformedResponseError("'total' is not a non-negative integer")

    try:
        items = [Item.from_json(p) for p in products]
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise MalformedResponseError(f"Bad product entry: {exc}") from exc

    ids = [item.id for item in items]
    if len(set(ids)) != len(ids):
        raise MalformedResponseError("Duplicate product ids in page")

    # DummyJSON echoes limit=0 when it returns everything; keep ours then.
    limit = data.get("limit") or query.limit
    skip = data.get("skip", query.skip)
    try:
        return Page(items=items, total=total, skip=int(skip), limit=max(int(limit), len(items), 1))
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(f"Bad paging metadata: {exc}") from exc


def parse_category(entry: Any) -> Category:
    if isinstance(entry, str):
        return Category(slug=entry, name=entry.replace("-", " ").title())
    if isinstance(entry, dict) and entry.get("slug"):
        return Category(slug=str(entry["slug"]), name=str(entry.get("name") or entry["slug"]))
    raise MalformedResponseError(f"Unrecognised category entry: {entry!r}")
