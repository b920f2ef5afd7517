from conftest import FakeResponse


# CAT-001: first page of the catalog
def test_list_products_first_page(client):
    r = client.get("/api/products")
    assert r.status_code == 200
    assert len(r.json["items"]) == 25
    assert r.json["pagination"] == {
        "limit": 25,
        "skip": 0,
        "total": 57,
        "category": None,
        "has_next": True,
        "has_prev": False,
        "next_skip": 25,
        "prev_skip": 0,
    }


# CAT-002: last page has no next
def test_list_products_last_page(client):
    r = client.get("/api/products?limit=25&skip=50")
    assert len(r.json["items"]) == 7
    assert r.json["pagination"]["has_next"] is False
    assert r.json["pagination"]["has_prev"] is True


# CAT-003: category filter goes to the remote catalog
def test_list_products_by_category(client, fake_catalog):
    r = client.get("/api/products?category=beauty&limit=10")
    assert r.json["pagination"]["total"] == 19
    assert r.json["pagination"]["category"] == "beauty"
    assert {item["category"] for item in r.json["items"]} == {"beauty"}
    assert any(call["url"].endswith("/products/category/beauty") for call in fake_catalog.calls)


# CAT-004: unknown category is ignored
def test_list_products_unknown_category(client):
    r = client.get("/api/products?category=spaceships")
    assert r.json["pagination"]["category"] is None
    assert r.json["pagination"]["total"] == 57


# CAT-005: stale offset from a URL is pulled back to the last page
def test_list_products_past_end(client):
    r = client.get("/api/products?skip=500")
    assert r.json["pagination"]["skip"] == 50
    assert len(r.json["items"]) == 7


# CAT-006: catalog outage
def test_list_products_upstream_down(client, fake_catalog):
    fake_catalog.down = True
    r = client.get("/api/products", headers={"X-Request-ID": "req-1"})
    assert r.status_code == 502
    assert r.json["error"]["code"] == "upstream_unavailable"
    assert r.json["error"]["request_id"] == "req-1"


# CAT-007: response without a total
def test_list_products_upstream_malformed(client, fake_catalog):
    fake_catalog.respond("/products", FakeResponse(200, {"products": []}))
    r = client.get("/api/products")
    assert r.status_code == 502
    assert r.json["error"]["code"] == "upstream_malformed"


def test_list_categories(client):
    r = client.get("/api/products/categories")
    assert r.status_code == 200
    assert [c["slug"] for c in r.json["categories"]] == ["beauty", "fragrances", "groceries"]


def test_get_product(client):
    r = client.get("/api/products/4")
    assert r.status_code == 200
    assert r.json["title"] == "Product 4"
    assert r.json["reviews"][0]["comment"] == "Great!"


def test_get_product_not_found(client):
    r = client.get("/api/products/999")
    assert r.status_code == 404
    assert r.json["error"]["code"] == "not_found"


# CAT-008: product with an unreadable review list
def test_get_product_upstream_malformed(client, fake_catalog):
    product = dict(fake_catalog.products[0], reviews=["not a review"])
    fake_catalog.respond("/products/1", FakeResponse(200, product))
    r = client.get("/api/products/1")
    assert r.status_code == 502
    assert r.json["error"]["code"] == "upstream_malformed"


def test_request_id_forwarded(client, fake_catalog):
    client.get("/api/products", headers={"X-Request-ID": "trace-me"})
    assert fake_catalog.calls[0]["headers"]["X-Request-ID"] == "trace-me"


# --- pages ---

def test_shop_page(client):
    r = client.get("/shop")
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert "We found <strong>57</strong> items for you!" in body
    assert "Product 1<" in body
    assert "limit=25&amp;skip=25" in body
    assert "Next (32 left)" in body
    assert '<span class="disabled" aria-disabled="true">Prev</span>' in body


def test_shop_page_last_page(client):
    body = client.get("/shop?limit=25&skip=50").get_data(as_text=True)
    assert "No more products" in body
    assert "limit=25&amp;skip=25" in body
    assert "Product 57<" in body


def test_shop_page_keeps_category_in_links(client):
    body = client.get("/shop?category=groceries&limit=5").get_data(as_text=True)
    assert "category=groceries" in body
    assert "We found <strong>19</strong>" in body


def test_shop_page_upstream_down(client, fake_catalog):
    fake_catalog.down = True
    r = client.get("/shop")
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert "Unable to load products right now." in body
    assert "No more products" in body
    assert 'rel="next"' not in body


def test_shop_page_empty_category(client, fake_catalog):
    fake_catalog.respond("/products/category/beauty", FakeResponse(200, {"products": [], "total": 0, "skip": 0, "limit": 0}))
    body = client.get("/shop?category=beauty").get_data(as_text=True)
    assert "No products found." in body


def test_product_page(client):
    r = client.get("/shop/2")
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert "<h1>Product 2</h1>" in body
    assert "Related Products" in body
    assert "Ships in 1 week" in body


def test_product_page_related_excludes_itself(client):
    body = client.get("/shop/2").get_data(as_text=True)
    assert 'href="/shop/5"' in body
    assert 'href="/shop/2"' not in body


def test_product_page_not_found(client):
    r = client.get("/shop/999")
    assert r.status_code == 404
    assert b"Page not found" in r.data


def test_product_page_upstream_down(client, fake_catalog):
    fake_catalog.down = True
    r = client.get("/shop/2")
    assert r.status_code == 502


def test_home_page(client):
    r = client.get("/")
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert "Popular Products" in body
    assert "Product 20<" in body
    assert "Product 31<" in body
    assert "category=beauty" in body


def test_about_page(client):
    assert client.get("/about").status_code == 200
