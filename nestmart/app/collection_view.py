"""A paged collection as seen by one view session.

``CollectionView`` glues a ``Paginator`` to a fetch function and a cell
factory. Every fetch is stamped with a ticket from a monotonically
increasing counter; a result is only applied if its ticket is still the
latest one issued, so a slow early request can never overwrite the
result of a later one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from nestmart.app.common.errors import CatalogError
from nestmart.app.common.pagination import Paginator
from nestmart.app.models import Page, QueryState
from nestmart.app.render import Cell, product_cell, render_error, render_page

logger = logging.getLogger(__name__)

Fetch = Callable[[QueryState], Page]


@dataclass(frozen=True)
class Ticket:
    seq: int
    query: QueryState


class CollectionView:
    def __init__(
        self,
        fetch: Fetch,
        paginator: Paginator,
        cell: Callable = product_cell,
        empty_message: str = "No products found.",
        error_message: str = "Unable to load products right now.",
    ):
        self.fetch = fetch
        self.paginator = paginator
        self.cell = cell
        self.empty_message = empty_message
        self.error_message = error_message

        self.page: Optional[Page] = None
        self.error: Optional[CatalogError] = None
        self.cells: List[Cell] = []
        self._seq = 0

    @property
    def has_next(self) -> bool:
        return self.error is None and self.paginator.has_next

    @property
    def has_prev(self) -> bool:
        return self.error is None and self.paginator.has_prev

    def issue(self) -> Ticket:
        self._seq += 1
        return Ticket(seq=self._seq, query=self.paginator.state)

    def _is_stale(self, ticket: Ticket) -> bool:
        if ticket.seq != self._seq:
            logger.debug("discarding stale result seq=%s latest=%s", ticket.seq, self._seq)
            return True
        return False

    def resolve(self, ticket: Ticket, page: Page) -> bool:
        if self._is_stale(ticket):
            return False
        self.paginator.observe(page.total)
        self.page = page
        self.error = None
        self.cells = render_page(page, self.cell, self.empty_message)
        return True

    def reject(self, ticket: Ticket, error: CatalogError) -> bool:
        if self._is_stale(ticket):
            return False
        self.page = None
        self.error = error
        self.cells = render_error(self.error_message)
        return True

    def _load(self) -> None:
        ticket = self.issue()
        try:
            page = self.fetch(ticket.query)
        except CatalogError as exc:
            self.reject(ticket, exc)
            return
        self.resolve(ticket, page)

    def refresh(self) -> "CollectionView":
        before = self.paginator.state
        self._load()
        # A stale offset was clamped against the real total; show that page instead.
        if self.error is None and self.paginator.state != before:
            self._load()
        return self

    def next(self) -> bool:
        return self._changed(self.paginator.next())

    def prev(self) -> bool:
        return self._changed(self.paginator.prev())

    def set_limit(self, limit: int) -> bool:
        return self._changed(self.paginator.set_limit(limit))

    def set_category(self, category: Optional[str]) -> bool:
        return self._changed(self.paginator.set_category(category))

    def _changed(self, changed: bool) -> bool:
        if changed:
            self.refresh()
        return changed
