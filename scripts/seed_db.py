from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.corporate_hub.corporate_hub.database.bootstrap import DEMO_ACCOUNTS, apply_seed_sql, ensure_demo_accounts
from src.corporate_hub.corporate_hub.database.connection import DBConfig

logger = logging.getLogger("corporate_hub.scripts.seed_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    db = DBConfig.from_dict(dict(settings.DB_CONFIG))

    apply_seed_sql(db, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_accounts(db)

    logger.info("OK: seeded %s", db.describe())
    for acc in DEMO_ACCOUNTS:
        logger.info("  %-10s %s / %s", acc["role"], acc["email"], acc["password"])


if __name__ == "__main__":
    main()
