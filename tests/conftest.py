import os
import sys
import pytest
import requests

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from nestmart.app.config import Config
from nestmart.app.extensions import auth_api, catalog
from nestmart.app.factory import create_app

CATALOG_URL = "http://catalog.test"
AUTH_URL = "http://auth.test/api"
CATEGORIES = ["beauty", "fragrances", "groceries"]


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    CATALOG_API_URL = CATALOG_URL
    AUTH_API_URL = AUTH_URL
    DEFAULT_LIMIT = 25
    MAX_LIMIT = 100
    CART_ID = 5
    CART_LIMIT = 10


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self.text is not None:
            raise ValueError("not json")
        return self._payload


def make_product(i):
    return {
        "id": i,
        "title": f"Product {i}",
        "description": f"Description of product {i}",
        "category": CATEGORIES[(i - 1) % len(CATEGORIES)],
        "price": 9.0 + i,
        "discountPercentage": 10.0,
        "rating": 4.5,
        "stock": 20,
        "tags": ["demo"],
        "brand": "Acme",
        "sku": f"SKU-{i}",
        "weight": 2,
        "warrantyInformation": "1 year",
        "shippingInformation": "Ships in 1 week",
        "availabilityStatus": "In Stock",
        "reviews": [
            {"rating": 5, "comment": "Great!", "date": "2024-05-23", "reviewerName": "Ann", "reviewerEmail": "ann@example.com"}
        ],
        "returnPolicy": "30 days return policy",
        "images": [f"https://cdn.example.com/{i}/1.png"],
        "thumbnail": f"https://cdn.example.com/{i}/thumb.png",
    }


class FakeCatalog:
    """Stands in for requests.Session against a DummyJSON-shaped catalog."""

    def __init__(self, total=57, cart_lines=12):
        self.products = [make_product(i) for i in range(1, total + 1)]
        self.cart_lines = cart_lines
        self.calls = []
        self.overrides = {}
        self.down = False

    def respond(self, path, response):
        self.overrides[path] = response

    def _slice(self, products, params):
        limit = int(params.get("limit", 30))
        skip = int(params.get("skip", 0))
        chunk = products[skip:skip + limit]
        return FakeResponse(200, {"products": chunk, "total": len(products), "skip": skip, "limit": len(chunk)})

    def get(self, url, params=None, headers=None, timeout=None):
        params = dict(params or {})
        self.calls.append({"url": url, "params": params, "headers": dict(headers or {})})
        if self.down:
            raise requests.ConnectionError("catalog is down")

        path = url[len(CATALOG_URL):]
        if path in self.overrides:
            override = self.overrides[path]
            if isinstance(override, Exception):
                raise override
            return override

        if path == "/products":
            return self._slice(self.products, params)
        if path == "/products/categories":
            return FakeResponse(200, [
                {"slug": c, "name": c.title(), "url": f"{CATALOG_URL}/products/category/{c}"} for c in CATEGORIES
            ])
        if path.startswith("/products/category/"):
            slug = path.rsplit("/", 1)[1]
            return self._slice([p for p in self.products if p["category"] == slug], params)
        if path.startswith("/products/"):
            pid = int(path.rsplit("/", 1)[1])
            for p in self.products:
                if p["id"] == pid:
                    return FakeResponse(200, p)
            return FakeResponse(404, {"message": f"Product with id '{pid}' not found"})
        if path == "/carts/5":
            lines = [
                {
                    "id": p["id"],
                    "title": p["title"],
                    "price": p["price"],
                    "quantity": 2,
                    "total": p["price"] * 2,
                    "discountPercentage": 10.0,
                    "discountedTotal": round(p["price"] * 2 * 0.9, 2),
                    "thumbnail": p["thumbnail"],
                }
                for p in self.products[:self.cart_lines]
            ]
            total = sum(line["total"] for line in lines)
            return FakeResponse(200, {
                "id": 5,
                "products": lines,
                "total": total,
                "discountedTotal": round(total * 0.9, 2),
                "userId": 1,
                "totalProducts": len(lines),
                "totalQuantity": 2 * len(lines),
            })
        return FakeResponse(404, {"message": "not found"})


class FakeAuth:
    """Stands in for requests.Session against the remote auth API."""

    def __init__(self):
        self.users = {"user@example.com": "Password123!"}
        self.calls = []
        self.down = False

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": dict(headers or {})})
        if self.down:
            raise requests.ConnectionError("auth is down")

        path = url[len(AUTH_URL):]
        if path == "/auth/login":
            if self.users.get(json["email"]) == json["password"]:
                return FakeResponse(200, {"message": "Login successful", "token": "tok-123"})
            return FakeResponse(401, {"message": "Invalid credentials"})
        if path == "/auth/register":
            if json["email"] in self.users:
                return FakeResponse(400, {"message": "User already exists"})
            self.users[json["email"]] = json["password"]
            return FakeResponse(201, {"message": "User registered successfully"})
        return FakeResponse(404, {"message": "not found"})


@pytest.fixture()
def fake_catalog():
    return FakeCatalog()


@pytest.fixture()
def fake_auth():
    return FakeAuth()


@pytest.fixture()
def app(monkeypatch, fake_catalog, fake_auth):
    app = create_app(TestConfig)
    monkeypatch.setattr(catalog, "session", fake_catalog)
    monkeypatch.setattr(auth_api, "session", fake_auth)
    return app


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client
