from nestmart.app.extensions import catalog
from nestmart.app.factory import create_app

from conftest import CATALOG_URL, TestConfig


class OtherConfig(TestConfig):
    CATALOG_API_URL = "http://other.test"
    HTTP_TIMEOUT = 2.0


# SMOKE-001: health check
def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json["status"] == "ok"


# SMOKE-002: API index
def test_api_index(client):
    r = client.get("/api")
    assert r.status_code == 200
    assert "endpoints" in r.json


# SMOKE-003: request id is echoed
def test_request_id_echoed(client):
    r = client.get("/health", headers={"X-Request-ID": "req-42"})
    assert r.headers["X-Request-ID"] == "req-42"


def test_request_id_generated(client):
    r = client.get("/health")
    assert r.headers.get("X-Request-ID")


# SMOKE-004: unknown API route
def test_unknown_api_route_is_json(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert r.json["error"]["code"] == "http_error"


# SMOKE-005: unknown page
def test_unknown_page_renders_html(client):
    r = client.get("/nope")
    assert r.status_code == 404
    assert b"Page not found" in r.data


# SMOKE-006: JSON keys are not sorted
def test_json_keeps_insertion_order(app):
    assert app.json.sort_keys is False


# SMOKE-007: each app keeps its own collaborator settings
def test_apps_keep_their_own_catalog_settings(app):
    other = create_app(OtherConfig)
    with app.app_context():
        assert catalog.base_url == CATALOG_URL
        assert catalog.timeout == TestConfig.HTTP_TIMEOUT
    with other.app_context():
        assert other.extensions["nestmart.catalog"].base_url == "http://other.test"
        assert catalog.timeout == 2.0


def test_second_app_does_not_repoint_first(app, client, fake_catalog):
    create_app(OtherConfig)
    r = client.get("/api/products")
    assert r.status_code == 200
    assert fake_catalog.calls[0]["url"] == f"{CATALOG_URL}/products"
