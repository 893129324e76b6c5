"""Tests for the admin gate on moderation routes."""
import pytest

from app.auth import SharedSecretCheck, get_admin_check
from app.main import app
from tests.conftest import ADMIN_HEADERS, submit_event

ADMIN_ROUTES = [
    ("get", "/api/events/pending"),
    ("put", "/api/events/{id}/approve"),
    ("delete", "/api/events/{id}/reject"),
]


@pytest.mark.parametrize("method,path", ADMIN_ROUTES)
def test_missing_header_forbidden(client, method, path):
    event_id = submit_event(client)
    resp = getattr(client, method)(path.format(id=event_id))
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Unauthorized: Admin password required"


@pytest.mark.parametrize("method,path", ADMIN_ROUTES)
def test_wrong_secret_forbidden(client, method, path):
    event_id = submit_event(client)
    resp = getattr(client, method)(path.format(id=event_id), headers={"x-admin-secret": "guess"})
    assert resp.status_code == 403


def test_forbidden_request_leaves_event_pending(client):
    event_id = submit_event(client)
    client.put(f"/api/events/{event_id}/approve", headers={"x-admin-secret": "guess"})

    resp = client.get("/api/events")
    assert resp.json() == []


def test_public_routes_need_no_header(client):
    assert client.get("/api/events").status_code == 200
    assert client.post("/api/events", json={"name": "Open 5K", "date": "2025-04-06"}).status_code == 200


def test_check_can_be_replaced(client):
    """A different AdminCheck plugs in without touching the routes."""

    class AllowAll:
        def is_admin(self, request):
            return True

    app.dependency_overrides[get_admin_check] = lambda: AllowAll()
    assert client.get("/api/events/pending").status_code == 200


@pytest.mark.parametrize("method,path", ADMIN_ROUTES)
def test_unconfigured_secret_refuses_admin_routes(client, method, path):
    event_id = submit_event(client)
    app.dependency_overrides[get_admin_check] = lambda: SharedSecretCheck("")

    resp = getattr(client, method)(path.format(id=event_id), headers={"x-admin-secret": ""})
    assert resp.status_code == 403
    resp = getattr(client, method)(path.format(id=event_id), headers=ADMIN_HEADERS)
    assert resp.status_code == 403


class TestSharedSecretCheck:

    class _Request:
        def __init__(self, headers):
            self.headers = headers

    def test_matching_secret(self):
        check = SharedSecretCheck("s3cret")
        assert check.is_admin(self._Request({"x-admin-secret": "s3cret"})) is True

    def test_mismatch(self):
        check = SharedSecretCheck("s3cret")
        assert check.is_admin(self._Request({"x-admin-secret": "S3CRET"})) is False

    def test_missing_header(self):
        check = SharedSecretCheck("s3cret")
        assert check.is_admin(self._Request({})) is False

    def test_unconfigured_secret_refuses_everyone(self):
        check = SharedSecretCheck("")
        assert check.is_admin(self._Request({"x-admin-secret": ""})) is False
        assert check.is_admin(self._Request({"x-admin-secret": "anything"})) is False
