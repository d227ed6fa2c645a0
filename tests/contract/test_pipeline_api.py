"""Contract tests for the request pipeline: logging, error translation and system routes."""

import logging

import pytest
from fastapi.testclient import TestClient

from user_directory.api.app import create_app
from user_directory.lib.config import APIConfig
from user_directory.services.user_store import UserStore, seed_users


class ExplodingStore(UserStore):
    """Store whose reads and writes fail unexpectedly."""

    def page(self, skip, take):
        raise RuntimeError("storage exploded: secret internals")

    def add(self, name, email):
        raise RuntimeError("storage exploded: secret internals")

    def update(self, user_id, name, email):
        raise RuntimeError("storage exploded: secret internals")


@pytest.fixture
def exploding_client(test_config):
    return TestClient(create_app(test_config, ExplodingStore(seed_users())))


@pytest.mark.contract
def test_uncaught_fault_hits_backstop(exploding_client, auth_headers):
    response = exploding_client.post("/users", json={"name": "Al", "email": "al@x.com"}, headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {
        "message": "An unexpected error occurred. Please try again later.",
        "statusCode": 500,
    }
    assert "secret internals" not in response.text


@pytest.mark.contract
def test_handler_caught_fault_returns_problem(exploding_client, auth_headers):
    response = exploding_client.get("/users", headers=auth_headers)

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/problem+json")
    body = response.json()
    assert body["status"] == 500
    assert body["detail"] == "An unexpected error occurred."
    assert "secret internals" not in response.text


@pytest.mark.contract
def test_update_fault_returns_problem(exploding_client, auth_headers):
    response = exploding_client.put(
        "/users/1",
        json={"name": "John", "email": "john@example.com"},
        headers=auth_headers,
    )
    assert response.status_code == 500
    assert response.json()["detail"] == "An unexpected error occurred."


@pytest.mark.contract
def test_backstop_logs_fault(exploding_client, auth_headers, caplog):
    caplog.set_level(logging.INFO)

    exploding_client.post("/users", json={"name": "Al", "email": "al@x.com"}, headers=auth_headers)

    errors = [record for record in caplog.records if record.levelno == logging.ERROR]
    assert any("Unhandled exception occurred." in record.getMessage() for record in errors)
    assert "Outgoing Response: 500" in caplog.messages


@pytest.mark.contract
def test_requests_are_logged(client, caplog):
    caplog.set_level(logging.INFO)

    client.get("/users/1")
    client.get("/users/404")

    assert "Incoming Request: GET /users/1" in caplog.messages
    assert "Outgoing Response: 200" in caplog.messages
    assert "Incoming Request: GET /users/404" in caplog.messages
    assert "Outgoing Response: 404" in caplog.messages
    assert "User with ID 404 not found." in caplog.messages


@pytest.mark.contract
def test_unauthorized_requests_are_logged(client, caplog):
    caplog.set_level(logging.INFO)

    client.delete("/users/1")

    assert "Incoming Request: DELETE /users/1" in caplog.messages
    assert "Outgoing Response: 401" in caplog.messages


@pytest.mark.contract
def test_unknown_route(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


@pytest.mark.contract
def test_error_route(client):
    response = client.get("/error")
    assert response.status_code == 500
    assert response.json()["detail"] == "An unexpected error occurred."


@pytest.mark.contract
def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["user_count"] == 2


@pytest.mark.contract
def test_docs_hidden_outside_debug(client):
    assert client.get("/docs").status_code == 404
    assert client.get("/openapi.json").status_code == 404


@pytest.mark.contract
def test_docs_available_in_debug(test_config):
    config = test_config.model_copy(update={"api": APIConfig(debug=True)})
    debug_client = TestClient(create_app(config, UserStore(seed_users())))

    assert debug_client.get("/docs").status_code == 200
    schema = debug_client.get("/openapi.json").json()
    assert "/users" in schema["paths"]
    assert "/users/{user_id}" in schema["paths"]


@pytest.mark.contract
def test_unseeded_directory_starts_empty(test_config, auth_headers):
    config = test_config.model_copy(update={"directory": test_config.directory.model_copy(update={"seed_demo_users": False})})
    empty_client = TestClient(create_app(config))

    assert empty_client.get("/users", headers=auth_headers).json() == []

    response = empty_client.post("/users", json={"name": "First", "email": "first@example.com"}, headers=auth_headers)
    assert response.json()["id"] == 1
