"""
Tests for the HTTP API

Drives the FastAPI app end to end against an in-memory database.
"""

import inspect
from datetime import datetime

import pytest
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

ALICE = {"name": "alice", "email": "alice@x.com", "password": "pass123"}


def signup_and_login(client: TestClient, user: dict = ALICE) -> dict:
    """Register a user and return the Authorization header for a new session."""
    assert client.post("/signup", json=user).status_code == 201
    response = client.post("/login", json={"email": user["email"], "password": user["password"]})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()}"}


class TestServiceEndpoints:
    """Tests for root and health endpoints."""

    def test_root(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"status": "healthy"}


class TestRouteHandlers:
    """Handlers that hash passwords or hit the store run in the threadpool."""

    def test_store_handlers_are_sync(self, debug_client: TestClient):
        store_paths = {
            "/signup", "/login", "/income", "/outcome", "/balance",
            "/status", "/deleteallusers", "/compare", "/sessions",
        }

        handlers = [
            route.endpoint
            for route in debug_client.app.routes
            if isinstance(route, APIRoute) and route.path in store_paths
        ]

        assert len(handlers) == 10
        assert not any(inspect.iscoroutinefunction(handler) for handler in handlers)


class TestSignupAndLogin:
    """Tests for POST /signup and POST /login."""

    def test_signup_created(self, client: TestClient):
        response = client.post("/signup", json=ALICE)

        assert response.status_code == 201
        assert response.content == b""

    def test_duplicate_name_conflict(self, client: TestClient):
        client.post("/signup", json=ALICE)

        response = client.post("/signup", json={**ALICE, "email": "other@x.com"})

        assert response.status_code == 409
        assert response.json()["error"] == "duplicate_name"

    def test_duplicate_email_conflict(self, client: TestClient):
        client.post("/signup", json=ALICE)

        response = client.post("/signup", json={**ALICE, "name": "alice2"})

        assert response.status_code == 409
        assert response.json()["error"] == "duplicate_email"

    def test_signup_validation(self, client: TestClient):
        response = client.post("/signup", json={"name": "al", "email": "al@x.org", "password": "pass123"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert len(body["messages"]) == 2

    def test_signup_non_object_body(self, client: TestClient):
        response = client.post("/signup", json=["alice"])

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_login_returns_token(self, client: TestClient):
        client.post("/signup", json=ALICE)

        response = client.post("/login", json={"email": "alice@x.com", "password": "pass123"})

        assert response.status_code == 200
        assert isinstance(response.json(), str)
        assert response.json()

    def test_login_unknown_email(self, client: TestClient):
        response = client.post("/login", json={"email": "ghost@x.com", "password": "pass123"})

        assert response.status_code == 404

    def test_login_wrong_password(self, client: TestClient):
        client.post("/signup", json=ALICE)

        response = client.post("/login", json={"email": "alice@x.com", "password": "wrong123"})

        assert response.status_code == 401
        assert response.json()["error"] == "invalid_credentials"


class TestLedgerEndpoints:
    """Tests for PUT /income, PUT /outcome and GET /balance."""

    def test_full_flow(self, client: TestClient):
        headers = signup_and_login(client)

        response = client.put("/income", json={"amount": 100, "description": "salary"}, headers=headers)
        assert response.status_code == 201

        response = client.get("/balance", headers=headers)
        assert response.status_code == 200
        assert response.json() == {
            "name": "alice",
            "incomes": [
                {"amount": 100, "description": "salary", "date": datetime.now().strftime("%d/%m")},
            ],
            "outcomes": [],
            "total": 100,
        }

    def test_outcome_reduces_total(self, client: TestClient):
        headers = signup_and_login(client)

        client.put("/income", json={"amount": 300, "description": "salary"}, headers=headers)
        response = client.put("/outcome", json={"amount": 75, "description": "groceries"}, headers=headers)
        assert response.status_code == 201

        body = client.get("/balance", headers=headers).json()
        assert [t["description"] for t in body["outcomes"]] == ["groceries"]
        assert body["total"] == 225

    def test_balance_hides_credentials(self, client: TestClient):
        headers = signup_and_login(client)

        body = client.get("/balance", headers=headers).json()

        assert "password" not in body
        assert "password_hash" not in body
        assert "email" not in body

    @pytest.mark.parametrize("path", ["/income", "/outcome"])
    def test_record_without_token(self, client: TestClient, path: str):
        response = client.put(path, json={"amount": 100, "description": "salary"})

        assert response.status_code == 401
        assert response.json()["error"] == "unauthenticated"

    def test_record_with_unknown_token(self, client: TestClient):
        response = client.put(
            "/income",
            json={"amount": 100, "description": "salary"},
            headers={"Authorization": "Bearer made-up"},
        )

        assert response.status_code == 401

    def test_record_invalid_amount(self, client: TestClient):
        headers = signup_and_login(client)

        response = client.put("/income", json={"amount": 12.5, "description": "salary"}, headers=headers)

        assert response.status_code == 400
        assert client.get("/balance", headers=headers).json()["incomes"] == []

    def test_record_amount_out_of_range(self, client: TestClient):
        headers = signup_and_login(client)

        response = client.put("/income", json={"amount": 2**64, "description": "salary"}, headers=headers)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert client.get("/balance", headers=headers).json()["incomes"] == []

    def test_record_boolean_amount(self, client: TestClient):
        headers = signup_and_login(client)

        response = client.put("/outcome", json={"amount": True, "description": "rent"}, headers=headers)

        assert response.status_code == 400
        assert client.get("/balance", headers=headers).json()["outcomes"] == []

    def test_balance_without_token(self, client: TestClient):
        response = client.get("/balance")

        assert response.status_code == 401

    def test_balance_with_unknown_token(self, client: TestClient):
        response = client.get("/balance", headers={"Authorization": "Bearer made-up"})

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestDebugEndpoints:
    """Tests for the legacy listing/maintenance endpoints."""

    @pytest.mark.parametrize(
        "method,path",
        [("POST", "/status"), ("DELETE", "/deleteallusers"), ("GET", "/compare"), ("POST", "/sessions")],
    )
    def test_not_mounted_by_default(self, client: TestClient, method: str, path: str):
        assert client.request(method, path).status_code == 404

    def test_user_listing_not_mounted_by_default(self, client: TestClient):
        assert client.get("/signup").status_code == 405

    def test_user_listing_is_redacted(self, debug_client: TestClient):
        headers = signup_and_login(debug_client)
        debug_client.put("/income", json={"amount": 100, "description": "salary"}, headers=headers)

        for response in (debug_client.get("/signup"), debug_client.post("/status")):
            assert response.status_code == 200
            users = response.json()
            assert len(users) == 1
            assert users[0]["name"] == "alice"
            assert users[0]["incomes"][0]["amount"] == 100
            assert "password" not in users[0]
            assert "password_hash" not in users[0]

    def test_compare(self, debug_client: TestClient):
        debug_client.post("/signup", json=ALICE)

        match = debug_client.request("GET", "/compare", json={"email": "alice@x.com", "password": "pass123"})
        mismatch = debug_client.request("GET", "/compare", json={"email": "alice@x.com", "password": "nope"})
        missing = debug_client.request("GET", "/compare", json={"email": "ghost@x.com", "password": "nope"})

        assert match.json() is True
        assert mismatch.json() is False
        assert missing.status_code == 404

    def test_sessions_listing(self, debug_client: TestClient):
        signup_and_login(debug_client)

        sessions = debug_client.post("/sessions").json()

        assert len(sessions) == 1
        assert sessions[0]["user"] == "alice"
        assert set(sessions[0]) == {"token", "userId", "user"}

    def test_delete_all_users(self, debug_client: TestClient):
        headers = signup_and_login(debug_client)

        response = debug_client.delete("/deleteallusers")

        assert response.status_code == 200
        assert response.json() == []
        assert debug_client.get("/balance", headers=headers).status_code == 404
