"""Project fetched pages into display cells for the templates.

Pure functions only: same page in, same cells out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from nestmart.app.models import CartLine, Item, Page

PLACEHOLDER_IMAGE = "/static/product.svg"


@dataclass(frozen=True)
class ProductCell:
    id: int
    title: str
    href: str
    price_label: str
    old_price_label: Optional[str]
    discount_label: Optional[str]
    image: str
    category: Optional[str]
    rating: float
    availability: Optional[str]
    kind: str = "product"


@dataclass(frozen=True)
class CartLineCell:
    id: int
    title: str
    href: str
    image: str
    unit_price_label: str
    quantity: int
    subtotal_label: str
    kind: str = "cart_line"


@dataclass(frozen=True)
class EmptyCell:
    message: str
    kind: str = "empty"


@dataclass(frozen=True)
class ErrorCell:
    message: str
    kind: str = "error"


Cell = Union[ProductCell, CartLineCell, EmptyCell, ErrorCell]


def money(value: float) -> str:
    return f"${value:,.2f}"


def product_cell(item: Item) -> ProductCell:
    old_price = None
    discount = None
    if 0 < item.discount_percentage < 100:
        old_price = money(item.price / (1 - item.discount_percentage / 100))
        discount = f"{item.discount_percentage:g}% Off"
    return ProductCell(
        id=item.id,
        title=item.title,
        href=f"/shop/{item.id}",
        price_label=money(item.price),
        old_price_label=old_price,
        discount_label=discount,
        image=item.thumbnail or PLACEHOLDER_IMAGE,
        category=item.category,
        rating=item.rating,
        availability=item.availability_status,
    )


def cart_line_cell(line: CartLine) -> CartLineCell:
    return CartLineCell(
        id=line.id,
        title=line.title,
        href=f"/shop/{line.id}",
        image=line.thumbnail or PLACEHOLDER_IMAGE,
        unit_price_label=money(line.price),
        quantity=line.quantity,
        subtotal_label=money(line.price * line.quantity),
    )


def render_page(
    page: Page,
    cell: Callable[[object], Cell] = product_cell,
    empty_message: str = "No products found.",
) -> List[Cell]:
    if page.is_empty:
        return [EmptyCell(empty_message)]
    return [cell(item) for item in page.items]


def render_error(message: str = "Unable to load products right now.") -> List[Cell]:
    return [ErrorCell(message)]
