from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.corporate_hub.corporate_hub.database.bootstrap import apply_schema, list_tables
from src.corporate_hub.corporate_hub.database.connection import DBConfig

logger = logging.getLogger("corporate_hub.scripts.init_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    db = DBConfig.from_dict(dict(settings.DB_CONFIG))

    apply_schema(db, schema_path=REPO_ROOT / "database" / "schema.sql")
    logger.info("OK: schema.sql applied -> %s (tables=%d)", db.describe(), len(list_tables(db)))


if __name__ == "__main__":
    main()
