"""
Create or reset the default admin account. Run from project root:
  python -m app.scripts.bootstrap_admin [IDENTITY] [PASSWORD]
Example:
  python -m app.scripts.bootstrap_admin admin@local your-secure-password

IDENTITY and PASSWORD default to ADMIN_EMAIL / ADMIN_PASSWORD. Works with any
account schema the identity core recognizes; an existing account gets its
password, role and activation flags reset.
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import session_scope
from app.core.store import EntityStore, StoreError
from app.models import Base
from app.services.bootstrap import BootstrapOutcome, bootstrap_admin

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Create or reset the Timely Voice admin account.")
    parser.add_argument("identity", nargs="?", default=settings.ADMIN_EMAIL, help="Email or username")
    parser.add_argument(
        "password",
        nargs="?",
        default=settings.ADMIN_PASSWORD.get_secret_value(),
        help="Password (stored as a bcrypt hash)",
    )
    args = parser.parse_args()

    identity = args.identity.strip()
    if not identity or not args.password:
        print("Identity and password must be non-empty.", file=sys.stderr)
        return 1

    with session_scope() as db:
        try:
            outcome = bootstrap_admin(EntityStore(db), Base, identity, args.password)
        except StoreError as e:
            logger.exception("Admin bootstrap failed: %s", e.message)
            return 1

    if outcome is BootstrapOutcome.SKIPPED:
        print("No usable account model found; nothing written.", file=sys.stderr)
        return 1
    print(f"Admin '{identity}' {outcome.value}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
