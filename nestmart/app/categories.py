from __future__ import annotations

from typing import FrozenSet, List, Optional

from nestmart.app.clients.catalog import CatalogClient
from nestmart.app.common.pagination import Paginator
from nestmart.app.models import Category


class CategorySelector:
    """Category filter for one view session.

    The category list is fetched at most once per selector. Selecting a
    category only changes the query; narrowing always happens server-side.
    """

    def __init__(self, client: CatalogClient):
        self.client = client
        self._options: Optional[List[Category]] = None

    def options(self) -> List[Category]:
        if self._options is None:
            self._options = self.client.list_categories()
        return self._options

    def list_categories(self) -> FrozenSet[str]:
        return frozenset(c.slug for c in self.options())

    def select(self, paginator: Paginator, slug: Optional[str]) -> bool:
        slug = (slug or "").strip() or None
        if slug is not None and slug not in self.list_categories():
            slug = None
        return paginator.set_category(slug)
