"""Pytest configuration and fixtures for the blog API tests."""

import pytest

from blog_api import create_app

ALICE = "alice@example.com"
BOB = "bob@example.com"


@pytest.fixture
def app():
    """Fresh app with its own in-memory store per test."""
    app = create_app("testing")
    yield app
    app.extensions["storage"].dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Issue a session cookie for `claim` on the shared test client.

    Usage:
        def test_something(client, login):
            login("alice@example.com")
            response = client.get("/all_Blogs/alice@example.com")
    """
    def _login(claim):
        response = client.post("/jwt", json=claim)
        assert response.status_code == 200
        return response

    return _login


@pytest.fixture
def add_blog(client):
    def _add(**fields):
        response = client.post("/addBlog", json=fields)
        assert response.status_code == 200
        return response.get_json()["insertedId"]

    return _add
