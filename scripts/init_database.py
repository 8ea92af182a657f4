import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
from moviedb.core.db import build_engine, close_db, engine
from moviedb.core.logging import setup_logging
from moviedb.core.settings import settings
from moviedb.database.init_db import init_db

logger = logging.getLogger("init_database")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create the movie catalog tables and seed the genre list."
    )
    parser.add_argument(
        "database",
        nargs="?",
        help="SQLite file to initialize (defaults to DATABASE_URL)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    if args.database:
        target = build_engine(f"sqlite:///{args.database}", echo=settings.DATABASE_ECHO)
    else:
        target = engine

    try:
        seeded = init_db(target)
        logger.info(f"Database ready at {target.url} ({seeded} genres seeded)")
    finally:
        if target is engine:
            close_db()
        else:
            target.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
