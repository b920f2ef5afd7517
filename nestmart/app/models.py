from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence


@dataclass(frozen=True)
class QueryState:
    limit: int
    skip: int = 0
    category: Optional[str] = None

    def params(self) -> Dict[str, int]:
        return {"limit": self.limit, "skip": self.skip}


@dataclass(frozen=True)
class Item:
    id: int
    title: str
    price: float
    thumbnail: Optional[str] = None
    category: Optional[str] = None
    rating: float = 0.0
    discount_percentage: float = 0.0
    availability_status: Optional[str] = None
    brand: Optional[str] = None
    stock: Optional[int] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Item":
        return cls(**_item_fields(data))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "price": self.price,
            "thumbnail": self.thumbnail,
            "category": self.category,
            "rating": self.rating,
            "discount_percentage": self.discount_percentage,
            "availability_status": self.availability_status,
            "brand": self.brand,
            "stock": self.stock,
        }


@dataclass(frozen=True)
class Review:
    rating: int
    comment: str
    reviewer_name: Optional[str] = None
    reviewer_email: Optional[str] = None
    date: Optional[str] = None


@dataclass(frozen=True)
class Product(Item):
    description: str = ""
    images: Sequence[str] = ()
    sku: Optional[str] = None
    tags: Sequence[str] = ()
    weight: Optional[float] = None
    shipping_information: Optional[str] = None
    return_policy: Optional[str] = None
    warranty_information: Optional[str] = None
    reviews: Sequence[Review] = ()

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Product":
        reviews = tuple(
            Review(
                rating=int(r.get("rating") or 0),
                comment=r.get("comment") or "",
                reviewer_name=r.get("reviewerName"),
                reviewer_email=r.get("reviewerEmail"),
                date=r.get("date"),
            )
            for r in data.get("reviews") or []
        )
        return cls(
            **_item_fields(data),
            description=data.get("description") or "",
            images=tuple(data.get("images") or ()),
            sku=data.get("sku"),
            tags=tuple(data.get("tags") or ()),
            weight=data.get("weight"),
            shipping_information=data.get("shippingInformation"),
            return_policy=data.get("returnPolicy"),
            warranty_information=data.get("warrantyInformation"),
            reviews=reviews,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload.update({
            "description": self.description,
            "images": list(self.images),
            "sku": self.sku,
            "tags": list(self.tags),
            "weight": self.weight,
            "shipping_information": self.shipping_information,
            "return_policy": self.return_policy,
            "warranty_information": self.warranty_information,
            "reviews": [
                {
                    "rating": r.rating,
                    "comment": r.comment,
                    "reviewer_name": r.reviewer_name,
                    "reviewer_email": r.reviewer_email,
                    "date": r.date,
                }
                for r in self.reviews
            ],
        })
        return payload


@dataclass(frozen=True)
class Category:
    slug: str
    name: str


@dataclass(frozen=True)
class Page:
    """One fetched batch of items plus the paging metadata it was fetched with."""

    items: Sequence[Any]
    total: int
    skip: int
    limit: int

    def __post_init__(self):
        if self.limit <= 0:
            raise ValueError("limit must be > 0")
        if self.total < 0 or self.skip < 0:
            raise ValueError("total and skip must be >= 0")
        if len(self.items) > self.limit:
            raise ValueError("page holds more items than its limit")

    @property
    def is_empty(self) -> bool:
        return len(self.items) == 0


@dataclass(frozen=True)
class CartLine:
    id: int
    title: str
    price: float
    quantity: int
    total: float
    discounted_total: float
    thumbnail: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "price": self.price,
            "quantity": self.quantity,
            "total": self.total,
            "discounted_total": self.discounted_total,
            "thumbnail": self.thumbnail,
        }


@dataclass(frozen=True)
class Cart:
    id: int
    lines: List[CartLine] = field(default_factory=list)
    total: float = 0.0
    discounted_total: float = 0.0
    total_products: int = 0
    total_quantity: int = 0

    @property
    def discount(self) -> float:
        return round(self.total - self.discounted_total, 2)

    def page(self, query: QueryState) -> Page:
        """Slice the cart lines the same way the catalog pages its items."""
        lines = self.lines[query.skip:query.skip + query.limit]
        return Page(items=lines, total=len(self.lines), skip=query.skip, limit=query.limit)


def _item_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": int(data["id"]),
        "title": str(data.get("title") or ""),
        "price": float(data.get("price") or 0),
        "thumbnail": data.get("thumbnail"),
        "category": data.get("category"),
        "rating": float(data.get("rating") or 0),
        "discount_percentage": float(data.get("discountPercentage") or 0),
        "availability_status": data.get("availabilityStatus"),
        "brand": data.get("brand"),
        "stock": data.get("stock"),
    }
