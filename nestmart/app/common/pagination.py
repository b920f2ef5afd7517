"""Limit/skip pagination state shared by every paged surface.

The catalog grid, the cart lines and the related-products strip all page
through a collection the same way, so they all drive one ``Paginator``.
State is an immutable ``QueryState`` that gets replaced on each change;
every operation reports whether it actually changed anything so callers
know when a re-fetch is due. Nothing here raises: navigation past either
end is a no-op that shows up as ``has_next``/``has_prev`` being False.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Mapping, Optional

from nestmart.app.models import QueryState


def _parse_int(raw: Any, default: int) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


class Paginator:
    def __init__(self, limit: int, skip: int = 0, category: Optional[str] = None, total: int = 0):
        if limit <= 0:
            raise ValueError("limit must be > 0")
        self.total = 0
        self.state = QueryState(limit=limit, skip=self._align(max(0, skip), limit), category=category or None)
        # total=0 means "not fetched yet"; keep the requested offset until then.
        if total > 0:
            self.observe(total)

    @classmethod
    def from_args(
        cls,
        args: Mapping[str, Any],
        default_limit: int,
        max_limit: int,
    ) -> "Paginator":
        """Build from URL query parameters, ignoring anything malformed."""
        limit = _parse_int(args.get("limit"), default_limit)
        if limit <= 0:
            limit = default_limit
        limit = min(limit, max_limit)
        skip = max(0, _parse_int(args.get("skip"), 0))
        category = (args.get("category") or "").strip() or None
        return cls(limit=limit, skip=skip, category=category)

    @staticmethod
    def _align(skip: int, limit: int) -> int:
        return skip - skip % limit

    @property
    def limit(self) -> int:
        return self.state.limit

    @property
    def skip(self) -> int:
        return self.state.skip

    @property
    def category(self) -> Optional[str]:
        return self.state.category

    @property
    def has_next(self) -> bool:
        return self.skip + self.limit < self.total

    @property
    def has_prev(self) -> bool:
        return self.skip > 0

    @property
    def next_skip(self) -> int:
        return self.skip + self.limit if self.has_next else self.skip

    @property
    def prev_skip(self) -> int:
        return max(0, self.skip - self.limit)

    @property
    def remaining(self) -> int:
        """Items after the current page."""
        return max(0, self.total - self.skip - self.limit)

    def _set(self, **changes) -> bool:
        new_state = replace(self.state, **changes)
        if new_state == self.state:
            return False
        self.state = new_state
        return True

    def set_limit(self, new_limit: int) -> bool:
        if new_limit <= 0:
            return False
        return self._set(limit=new_limit, skip=0)

    def next(self) -> bool:
        if not self.has_next:
            return False
        return self._set(skip=self.skip + self.limit)

    def prev(self) -> bool:
        return self._set(skip=self.prev_skip)

    def set_category(self, category: Optional[str]) -> bool:
        category = (category or "").strip() or None
        return self._set(category=category, skip=0)

    def observe(self, total: int) -> bool:
        """Record the collection size reported by the last fetch.

        If the current offset now points past the end (stale URL, shrunk
        collection) it is pulled back to the start of the last page.
        """
        self.total = max(0, total)
        if self.total == 0:
            return self._set(skip=0)
        if self.skip >= self.total:
            return self._set(skip=self._align(self.total - 1, self.limit))
        return False

    def link_args(self, **changes) -> Dict[str, Any]:
        state = replace(self.state, **changes)
        args: Dict[str, Any] = {"limit": state.limit, "skip": state.skip}
        if state.category:
            args["category"] = state.category
        return args

    def to_dict(self) -> Dict[str, Any]:
        return {
            "limit": self.limit,
            "skip": self.skip,
            "total": self.total,
            "category": self.category,
            "has_next": self.has_next,
            "has_prev": self.has_prev,
            "next_skip": self.next_skip,
            "prev_skip": self.prev_skip,
        }
