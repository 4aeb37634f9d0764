#!/usr/bin/env python3
"""Apply or roll back schema migrations, reporting failures to Logfire.

Usage:
    python scripts/run_migrations.py              # upgrade to head
    python scripts/run_migrations.py --downgrade base
"""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config

from usermgmt.config import Settings
from usermgmt.util.logging import setup_logging
from usermgmt.util.observability import configure_logfire


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("revision", nargs="?", default="head")
    parser.add_argument("--downgrade", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Migrate the configured database to the requested revision."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)
    direction = "downgrade" if args.downgrade else "upgrade"

    with logfire.span("migrations", direction=direction, revision=args.revision):
        try:
            if args.downgrade:
                command.downgrade(alembic_cfg, args.revision)
            else:
                command.upgrade(alembic_cfg, args.revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=args.revision,
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The container must not start against a half-migrated schema
            raise

    logfire.info("Database migrated", direction=direction, revision=args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
