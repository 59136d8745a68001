"""Seed script — populate the database with the ObotZap demo user and companies.

Run: python -m scripts.seed_demo

Reads DATABASE_URL and SEED_RANDOM_SEED from the environment (or a .env file).
"""

from __future__ import annotations

import logging
import sys

from dotenv import load_dotenv

# Load environment before the modules that read it at import time
load_dotenv()

from ledger.database import get_engine, get_session, init_db  # noqa: E402
from seeders.database_seeder import DatabaseSeeder  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)-30s | %(levelname)-7s | %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> int:
    engine = None
    try:
        engine = get_engine()
        init_db(engine)
        logger.info("Database initialized: %s", engine.url.render_as_string(hide_password=True))

        with get_session(engine) as session:
            DatabaseSeeder().run(session)
    except Exception:
        logger.exception("Seeding failed; nothing was committed")
        return 1
    finally:
        if engine is not None:
            engine.dispose()

    logger.info("Demo data seeded.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
