"""Unit tests for app.services.bootstrap: adaptive admin upsert and the startup hook."""

import unittest
from unittest.mock import patch

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import DeclarativeBase

from app.core.config import Settings
from app.core.store import EntityStore, StoreError
from app.models import Base, User
from app.services.account_schema import describe_account_model
from app.services.auth_session import InvalidCredentialsError, SessionAuthenticator
from app.services.bootstrap import (
    BootstrapOutcome,
    bootstrap_admin,
    build_admin_payloads,
    run_seed_on_boot,
)
from tests.support import make_session_factory


class LegacyBase(DeclarativeBase):
    pass


class Account(LegacyBase):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    username = Column(String(255), unique=True, nullable=False)
    password = Column(String(255), nullable=False)


class EmailAndRequiredUsernameBase(DeclarativeBase):
    pass


class Operator(EmailAndRequiredUsernameBase):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String(255), unique=True)
    username = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)


class NoAccountBase(DeclarativeBase):
    pass


class Page(NoAccountBase):
    __tablename__ = "pages"

    id = Column(Integer, primary_key=True)


class TestBootstrapAdmin(unittest.TestCase):
    def setUp(self) -> None:
        describe_account_model.cache_clear()
        self.db = make_session_factory()()
        self.store = EntityStore(self.db)

    def tearDown(self) -> None:
        self.db.close()

    def _login(self, identity: str, password: str) -> dict:
        session: dict = {}
        SessionAuthenticator(self.store, describe_account_model(Base)).login(
            session, identity, password
        )
        return session

    def test_created_then_updated_and_login_works_each_time(self) -> None:
        outcome = bootstrap_admin(self.store, Base, "admin@local", "changeme")
        self.assertEqual(outcome, BootstrapOutcome.CREATED)
        self.assertEqual(self._login("admin@local", "changeme")["role"], "ADMIN")

        outcome = bootstrap_admin(self.store, Base, "admin@local", "rotated")
        self.assertEqual(outcome, BootstrapOutcome.UPDATED)
        self.assertEqual(self.db.query(User).count(), 1)
        self._login("admin@local", "rotated")
        with self.assertRaises(InvalidCredentialsError):
            self._login("admin@local", "changeme")

    def test_created_row_shape(self) -> None:
        bootstrap_admin(self.store, Base, "admin@local", "changeme")
        admin = self.db.query(User).one()
        self.assertEqual(admin.email, "admin@local")
        self.assertIsNone(admin.username)
        self.assertEqual(admin.name, "Admin")
        self.assertEqual(admin.role, "ADMIN")
        self.assertTrue(admin.is_active)
        self.assertTrue(admin.password_hash.startswith("$2"))

    def test_rerun_resets_role_and_activation(self) -> None:
        bootstrap_admin(self.store, Base, "admin@local", "changeme")
        admin = self.db.query(User).one()
        admin.role = "VIEWER"
        admin.is_active = False
        self.db.commit()

        bootstrap_admin(self.store, Base, "admin@local", "changeme")
        self.db.refresh(admin)
        self.assertEqual(admin.role, "ADMIN")
        self.assertTrue(admin.is_active)

    def test_username_only_schema(self) -> None:
        db = make_session_factory(LegacyBase)()
        store = EntityStore(db)
        try:
            outcome = bootstrap_admin(store, LegacyBase, "admin@local", "changeme")
            self.assertEqual(outcome, BootstrapOutcome.CREATED)
            account = db.query(Account).one()
            self.assertEqual(account.username, "admin")
            self.assertTrue(account.password.startswith("$2"))

            session: dict = {}
            auth = SessionAuthenticator(store, describe_account_model(LegacyBase))
            auth.login(session, "admin@local", "changeme")
            self.assertEqual(session, {"userId": account.id, "role": "admin"})

            self.assertEqual(
                bootstrap_admin(store, LegacyBase, "admin@local", "changeme"),
                BootstrapOutcome.UPDATED,
            )
        finally:
            db.close()

    def test_required_username_is_filled_on_create(self) -> None:
        descriptor = describe_account_model(EmailAndRequiredUsernameBase)
        key_field, key_value, create, update = build_admin_payloads(
            descriptor, "admin@local", "$2b$hash"
        )
        self.assertEqual((key_field, key_value), ("email", "admin@local"))
        self.assertEqual(create["username"], "admin")
        self.assertNotIn("username", update)
        self.assertEqual(update, {"password_hash": "$2b$hash"})

    def test_no_account_model_is_skipped(self) -> None:
        self.assertEqual(
            bootstrap_admin(self.store, NoAccountBase, "admin@local", "changeme"),
            BootstrapOutcome.SKIPPED,
        )


class TestRunSeedOnBoot(unittest.TestCase):
    def setUp(self) -> None:
        describe_account_model.cache_clear()
        self.factory = make_session_factory()

    def test_flag_off_does_nothing(self) -> None:
        outcome = run_seed_on_boot(Settings(SEED_ON_BOOT=False), session_factory=self.factory)
        self.assertEqual(outcome, BootstrapOutcome.SKIPPED)
        with self.factory() as db:
            self.assertEqual(db.query(User).count(), 0)

    def test_flag_on_uses_configured_admin(self) -> None:
        settings = Settings(
            SEED_ON_BOOT=True,
            ADMIN_EMAIL="chief@news.com",
            ADMIN_PASSWORD="boot-pass",
        )
        self.assertEqual(
            run_seed_on_boot(settings, session_factory=self.factory),
            BootstrapOutcome.CREATED,
        )
        self.assertEqual(
            run_seed_on_boot(settings, session_factory=self.factory),
            BootstrapOutcome.UPDATED,
        )
        with self.factory() as db:
            self.assertEqual(db.query(User).one().email, "chief@news.com")

    def test_store_failure_is_logged_not_raised(self) -> None:
        with patch.object(EntityStore, "upsert", side_effect=StoreError("db down")):
            with self.assertLogs("app.services.bootstrap", level="ERROR"):
                outcome = run_seed_on_boot(
                    Settings(SEED_ON_BOOT=True), session_factory=self.factory
                )
        self.assertEqual(outcome, BootstrapOutcome.SKIPPED)


if __name__ == "__main__":
    unittest.main()
