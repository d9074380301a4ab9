from __future__ import annotations

"""
First deploy / new environment, idempotent:

1) Alembic upgrade head
2) Ensure the site owner login from BOOTSTRAP_ADMIN_EMAIL / BOOTSTRAP_ADMIN_PASSWORD
   (superadmin; sub-admins are added later from the dashboard)
3) Ensure the site_content row exists (first read seeds the default catalog)

Run on Heroku:
    heroku run --app <your-app> python -m scripts.bootstrap_admin
"""

import sys
from pathlib import Path
from alembic import command
from alembic.config import Config

# Ensure repo root on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from miledesigns.core.settings import settings
from miledesigns.db.session import SessionLocal
from miledesigns.services.content_store import ContentStore
from miledesigns.services.identity import IdentityError, find_user_by_email, provision_user


def _alembic_upgrade_head() -> None:
    cfg = Config((ROOT / "alembic.ini").as_posix())
    command.upgrade(cfg, "head")
    print("🔼 Alembic upgrade head OK")


def _ensure_admin(email: str, password: str) -> None:
    with SessionLocal.begin() as db:
        user = find_user_by_email(db, email)
        if user:
            user.is_superadmin = True
            user.is_active = True
            print(f"[OK] Admin already exists: {user.email}")
            return
        user = provision_user(db, email=email, password=password, full_name="Site owner", is_superadmin=True)
        print(f"[OK] Admin created: {user.email}")


def run() -> None:
    email = settings.BOOTSTRAP_ADMIN_EMAIL
    password = settings.BOOTSTRAP_ADMIN_PASSWORD
    if not email or not password:
        sys.exit("BOOTSTRAP_ADMIN_EMAIL and BOOTSTRAP_ADMIN_PASSWORD must be set")

    _alembic_upgrade_head()
    try:
        _ensure_admin(email, password)
    except IdentityError as e:
        sys.exit(f"[ERR] {e}")

    content = ContentStore(SessionLocal).get_all_content()
    print(f"[OK] Site content ready ({len(content['projects'])} projects)")


if __name__ == "__main__":
    run()
