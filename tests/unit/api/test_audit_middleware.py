"""Tests for the request audit middleware."""

import pytest

from src.coffee_shop.api.http.middleware.audit import build_audit_record
from src.coffee_shop.core.exceptions import WriteError


def audit_documents(audit_collection) -> list[dict]:
    return list(audit_collection.find({}, {"_id": 0}))


class TestBuildAuditRecord:
    def test_captures_request_metadata(self, request_factory):
        request = request_factory(
            {"host": "coffee.example:8080"}, method="POST", path="/buy"
        )

        record = build_audit_record(request)

        assert record.path == "/buy"
        assert record.method == "POST"
        assert record.host == "coffee.example:8080"
        assert record.remote_address == "203.0.113.7:51234"

    def test_missing_client_and_host(self, request_factory):
        record = build_audit_record(request_factory({}, client=None))

        assert record.host == ""
        assert record.remote_address == ""


class TestRequestAuditMiddleware:
    @pytest.mark.parametrize(
        ("method", "path", "kwargs", "expected_status"),
        [
            ("GET", "/coffees", {}, 200),
            ("POST", "/buy", {"json": "nonexistent-id"}, 404),
            ("POST", "/buy", {"content": "{"}, 400),
            ("POST", "/coffees", {"json": {"name": "Latte", "price": 350}}, 200),
            ("GET", "/unknown", {}, 404),
            ("PUT", "/import", {}, 405),
            ("GET", "/health", {}, 200),
        ],
    )
    def test_every_request_is_recorded_once(
        self, client, audit_collection, method, path, kwargs, expected_status
    ):
        response = client.request(method, path, **kwargs)

        assert response.status_code == expected_status
        [document] = audit_documents(audit_collection)
        assert document["path"] == path
        assert document["method"] == method
        assert document["host"] == "testserver"
        assert document["remoteAddress"].startswith("testclient:")
        assert "timestamp" in document

    def test_failed_handler_is_still_recorded(
        self, client, audit_collection, monkeypatch
    ):
        repository = client.app.state.app_dependencies.coffee_repository

        def fail(_coffee):
            raise WriteError("disk full")

        monkeypatch.setattr(repository, "insert_one", fail)

        response = client.post("/coffees", json={"name": "Latte", "price": 350})

        assert response.status_code == 500
        assert [d["path"] for d in audit_documents(audit_collection)] == ["/coffees"]

    def test_records_accumulate_in_request_order(self, client, audit_collection):
        client.get("/coffees")
        client.post("/import")
        client.get("/coffees")

        assert [(d["method"], d["path"]) for d in audit_documents(audit_collection)] == [
            ("GET", "/coffees"),
            ("POST", "/import"),
            ("GET", "/coffees"),
        ]

    def test_audit_failure_never_fails_the_request(
        self, client, catalog_collection, monkeypatch
    ):
        repository = client.app.state.app_dependencies.audit_repository

        def fail(_record):
            raise WriteError("audit collection unavailable")

        monkeypatch.setattr(repository, "insert", fail)
        catalog_collection.insert_one({"name": "Mocha", "price": 400})

        response = client.get("/coffees")

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Mocha"]

    def test_unexpected_audit_error_is_swallowed(self, client, monkeypatch):
        repository = client.app.state.app_dependencies.audit_repository

        def fail(_record):
            raise RuntimeError("boom")

        monkeypatch.setattr(repository, "insert", fail)

        assert client.post("/import").status_code == 200

    def test_audit_disabled_records_nothing(self, client_factory, audit_collection):
        client = client_factory(audit_enabled=False)

        client.get("/coffees")
        client.post("/buy", json="nonexistent-id")

        assert audit_documents(audit_collection) == []

    def test_audit_does_not_touch_catalog(self, client, catalog_collection):
        client.get("/coffees")

        assert catalog_collection.count_documents({}) == 0
