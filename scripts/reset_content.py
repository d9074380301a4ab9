# scripts/reset_content.py
# Overwrite the site_content row with the built-in default catalog.
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from miledesigns.core.settings import settings
from miledesigns.db.session import SessionLocal
from miledesigns.services.content_store import ContentStore, StoreError


def run() -> None:
    store = ContentStore(SessionLocal)
    try:
        data = store.reset()
    except StoreError as e:
        sys.exit(f"[ERR] {e}")
    print(f"[OK] Row {settings.SITE_CONTENT_ROW_ID!r} reset to defaults ({len(data['projects'])} projects)")


if __name__ == "__main__":
    run()
