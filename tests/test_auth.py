"""Tests for session issuance, logout, the token gate and ownership checks."""

import logging
from datetime import timedelta

import pytest

from blog_api import create_app
from blog_api.config import ProductionConfig, DEFAULT_JWT_SECRET
from models import DBStorage
from utils.security import create_session_token

from .conftest import ALICE, BOB
from .test_security import _flip_signature_char


def _set_cookie_headers(response):
    return [h for h in response.headers.getlist("Set-Cookie") if h.startswith("token=")]


class TestIssueToken:

    def test_sets_http_only_strict_cookie(self, client):
        response = client.post("/jwt", json=ALICE)
        assert response.status_code == 200
        assert response.get_json() == {"success": True}

        [header] = _set_cookie_headers(response)
        assert "HttpOnly" in header
        assert "SameSite=Strict" in header
        assert "Secure" not in header
        assert client.get_cookie("token") is not None

    @pytest.mark.parametrize("body", [None, 42, "", {}, []])
    def test_rejects_bad_claims(self, client, body):
        if body is None:
            response = client.post("/jwt")
        else:
            response = client.post("/jwt", json=body)
        assert response.status_code == 400
        assert client.get_cookie("token") is None

    def test_production_cookie_is_cross_site(self, monkeypatch):
        monkeypatch.setattr(ProductionConfig, "JWT_SECRET", "production-secret-with-enough-length")
        storage = DBStorage("sqlite://")
        storage.reload()
        app = create_app("production", storage=storage)

        response = app.test_client().post("/jwt", json=ALICE)
        [header] = _set_cookie_headers(response)
        assert "Secure" in header
        assert "SameSite=None" in header
        assert "HttpOnly" in header
        storage.dispose()

    def test_production_requires_secret(self, monkeypatch):
        monkeypatch.setattr(ProductionConfig, "JWT_SECRET", DEFAULT_JWT_SECRET)
        storage = DBStorage("sqlite://")
        storage.reload()
        with pytest.raises(RuntimeError, match="JWT_SECRET"):
            create_app("production", storage=storage)
        storage.dispose()


class TestLogout:

    def test_clears_cookie(self, client, login):
        login(ALICE)
        response = client.get("/logout")
        assert response.status_code == 200
        assert response.get_json() == {"success": True}

        [header] = _set_cookie_headers(response)
        assert "Max-Age=0" in header
        assert "HttpOnly" in header
        assert client.get_cookie("token") is None
        assert client.get(f"/all_Blogs/{ALICE}").status_code == 401

    def test_without_token(self, client):
        response = client.get("/logout")
        assert response.status_code == 200
        assert response.get_json() == {"success": True}
        assert _set_cookie_headers(response)

    def test_with_invalid_token(self, client):
        client.set_cookie("token", "garbage")
        response = client.get("/logout")
        assert response.status_code == 200
        assert client.get_cookie("token") is None


class TestTokenGate:

    def test_missing_token(self, client):
        response = client.get(f"/all_Blogs/{ALICE}")
        assert response.status_code == 401
        assert response.get_json()["message"] == "Unauthorized access"

    def test_expired_token(self, app, client):
        with app.app_context():
            token = create_session_token(ALICE, expires_in=timedelta(seconds=-10))
        client.set_cookie("token", token)
        response = client.get(f"/all_Blogs/{ALICE}")
        assert response.status_code == 401
        assert response.get_json()["message"] == "Unauthorized access"

    def test_tampered_token_is_logged(self, client, login, caplog):
        login(ALICE)
        client.set_cookie("token", _flip_signature_char(client.get_cookie("token").value))
        with caplog.at_level(logging.WARNING, logger="utils.decorators"):
            response = client.get(f"/all_Blogs/{ALICE}")
        assert response.status_code == 401
        assert "Session token rejected" in caplog.text

    def test_update_requires_token(self, client):
        response = client.put("/update/0b6d1f7e-7f1c-4a57-9d2e-3c1d1b0a9e11", json={"title": "x"})
        assert response.status_code == 401

    def test_optional_gate_lets_anonymous_and_invalid_tokens_through(self, client):
        assert client.get("/allBlogs").status_code == 200
        client.set_cookie("token", "garbage")
        assert client.get("/allBlogs").status_code == 200
        assert client.get("/getComments").status_code == 200


class TestOwnership:

    def test_scenario_email_scope(self, client, login, add_blog):
        add_blog(title="alice one", email=ALICE, name="Alice")
        add_blog(title="bob one", email=BOB, name="Bob")
        login(ALICE)

        response = client.get(f"/all_Blogs/{ALICE}")
        assert response.status_code == 200
        assert [b["title"] for b in response.get_json()] == ["alice one"]

        response = client.get(f"/all_Blogs/{BOB}")
        assert response.status_code == 403
        assert response.get_json()["message"] == "forbidden access"

    def test_identity_must_match_exactly(self, client, login):
        login(ALICE)
        assert client.get("/all_Blogs/Alice@example.com").status_code == 403
        assert client.get("/all_Blogs/alice@example.co").status_code == 403

    def test_object_identity_compares_named_fields(self, client, login, add_blog):
        add_blog(title="by name", email=ALICE, name="Alice")
        login({"email": ALICE, "name": "Alice"})

        assert client.get(f"/all_Blogs/{ALICE}").status_code == 200
        response = client.get("/allBlog/Alice")
        assert response.status_code == 200
        assert [b["title"] for b in response.get_json()] == ["by name"]
        assert client.get("/allBlog/Bob").status_code == 403

    def test_object_identity_without_field_is_forbidden(self, client, login):
        login({"email": ALICE})
        assert client.get("/allBlog/Alice").status_code == 403

    def test_no_match_is_empty_list(self, client, login):
        login(ALICE)
        response = client.get(f"/all_Blogs/{ALICE}")
        assert response.status_code == 200
        assert response.get_json() == []
