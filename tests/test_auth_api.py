"""API tests for /api/auth: cookie session login, logout and /me."""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.database import SessionLocal, session_factory_for
from app.core.store import EntityStore, StoreError
from app.main import create_app
from app.models import User
from app.services.account_schema import describe_account_model
from tests.support import add_user, make_client, make_session_factory


class TestAuthApi(unittest.TestCase):
    def setUp(self) -> None:
        describe_account_model.cache_clear()
        self.factory = make_session_factory()
        self.admin_id = add_user(
            self.factory, email="admin@local", name="Admin", role="ADMIN", password="changeme"
        )
        self.client = make_client(self.factory)

    def test_login_sets_cookie_and_returns_sanitized_user(self) -> None:
        r = self.client.post("/api/auth/login", json={"email": "admin@local", "password": "changeme"})
        self.assertEqual(r.status_code, 200)
        self.assertIn("tv.sid", r.cookies)
        user = r.json()["user"]
        self.assertEqual(user["id"], self.admin_id)
        self.assertEqual(user["email"], "admin@local")
        self.assertEqual(user["role"], "ADMIN")
        self.assertNotIn("passwordHash", user)
        self.assertNotIn("password_hash", user)

    def test_login_accepts_identity_and_username_keys(self) -> None:
        for key in ("identity", "username"):
            r = self.client.post("/api/auth/login", json={key: "admin@local", "password": "changeme"})
            self.assertEqual(r.status_code, 200, key)

    def test_me_after_login(self) -> None:
        self.client.post("/api/auth/login", json={"email": "admin@local", "password": "changeme"})
        r = self.client.get("/api/auth/me")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["user"]["id"], self.admin_id)

    def test_me_without_session(self) -> None:
        r = self.client.get("/api/auth/me")
        self.assertEqual(r.status_code, 401)
        self.assertEqual(r.json()["detail"], "Not authenticated")

    def test_unknown_identity_and_wrong_password_are_indistinguishable(self) -> None:
        unknown = self.client.post(
            "/api/auth/login", json={"email": "ghost@local", "password": "changeme"}
        )
        wrong = self.client.post(
            "/api/auth/login", json={"email": "admin@local", "password": "nope"}
        )
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.json(), wrong.json())
        self.assertEqual(unknown.json()["detail"], "Invalid credentials")

    def test_missing_fields(self) -> None:
        self.assertEqual(self.client.post("/api/auth/login", json={}).status_code, 400)
        r = self.client.post("/api/auth/login", json={"email": "admin@local"})
        self.assertEqual(r.status_code, 400)

    def test_null_fields_are_missing_not_invalid(self) -> None:
        for body in (
            {"email": None, "password": "changeme"},
            {"email": "admin@local", "password": None},
            {"identity": None, "password": None},
        ):
            r = self.client.post("/api/auth/login", json=body)
            self.assertEqual(r.status_code, 400, body)

    def test_logout_then_me(self) -> None:
        self.client.post("/api/auth/login", json={"email": "admin@local", "password": "changeme"})
        r = self.client.post("/api/auth/logout")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"ok": True})
        self.assertEqual(self.client.get("/api/auth/me").status_code, 401)

    def test_logout_expires_cookie_once_with_session_flags(self) -> None:
        self.client.post("/api/auth/login", json={"email": "admin@local", "password": "changeme"})
        r = self.client.post("/api/auth/logout")
        cookies = [h for h in r.headers.get_list("set-cookie") if h.startswith("tv.sid=")]
        self.assertEqual(len(cookies), 1)
        self.assertIn("samesite=lax", cookies[0].lower())
        self.assertIn("1970", cookies[0])

    def test_logout_without_session_succeeds(self) -> None:
        r = self.client.post("/api/auth/logout")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"ok": True})

    def test_legacy_plaintext_flag(self) -> None:
        with self.factory() as db:
            db.add(User(email="old@local", password_hash="hunter2", role="EDITOR"))
            db.commit()
        r = self.client.post("/api/auth/login", json={"email": "old@local", "password": "hunter2"})
        self.assertEqual(r.status_code, 401)

        legacy = make_client(self.factory, LEGACY_PLAINTEXT_PASSWORDS=True)
        r = legacy.post("/api/auth/login", json={"email": "old@local", "password": "hunter2"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["user"]["role"], "EDITOR")

    def test_store_failure_on_me_is_generic_500(self) -> None:
        self.client.post("/api/auth/login", json={"email": "admin@local", "password": "changeme"})
        with patch.object(EntityStore, "get", side_effect=StoreError("connection reset")):
            with self.assertLogs("app.main", level="ERROR"):
                r = self.client.get("/api/auth/me")
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {"detail": "Internal Server Error"})

    def test_store_failure_on_login_lookup_is_uniform_401(self) -> None:
        wrong = self.client.post("/api/auth/login", json={"email": "admin@local", "password": "nope"})
        with patch.object(EntityStore, "find_unique", side_effect=StoreError("connection reset")):
            r = self.client.post(
                "/api/auth/login", json={"email": "admin@local", "password": "changeme"}
            )
        self.assertEqual(r.status_code, 401)
        self.assertEqual(r.json(), wrong.json())


class TestSeedOnBoot(unittest.TestCase):
    def setUp(self) -> None:
        describe_account_model.cache_clear()
        self.factory = make_session_factory()

    def test_startup_seeds_into_the_app_session_factory(self) -> None:
        settings = Settings(SEED_ON_BOOT=True, ADMIN_EMAIL="chief@local", ADMIN_PASSWORD="boot-pass")
        with TestClient(create_app(settings, session_factory=self.factory)) as client:
            r = client.post("/api/auth/login", json={"email": "chief@local", "password": "boot-pass"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["user"]["role"], "ADMIN")

    def test_factory_for_another_url_gets_its_own_engine(self) -> None:
        self.assertIs(session_factory_for(Settings().DATABASE_URL), SessionLocal)
        other = session_factory_for("sqlite://")
        self.assertIsNot(other, SessionLocal)
        self.assertEqual(str(other.kw["bind"].url), "sqlite://")


class TestOpenAdmin(unittest.TestCase):
    def setUp(self) -> None:
        describe_account_model.cache_clear()
        self.factory = make_session_factory()

    def test_sessionless_request_becomes_admin(self) -> None:
        admin_id = add_user(self.factory, username="admin", role="ADMIN")
        client = make_client(self.factory, ADMIN_OPEN=True, ADMIN_EMAIL="admin@local")
        r = client.get("/api/auth/me")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["user"]["id"], admin_id)

    def test_missing_admin_account_stays_anonymous(self) -> None:
        client = make_client(self.factory, ADMIN_OPEN=True)
        with self.assertLogs("app.services.open_admin", level="ERROR"):
            r = client.get("/api/auth/me")
        self.assertEqual(r.status_code, 401)

    def test_flag_off_requires_login(self) -> None:
        add_user(self.factory, email="admin@local", role="ADMIN")
        client = make_client(self.factory)
        self.assertEqual(client.get("/api/auth/me").status_code, 401)


if __name__ == "__main__":
    unittest.main()
