"""
Timestampr CLI.

Updates every NOT NULL TIMESTAMP column in the configured schema to
``TIMESTAMP NULL``, the fix for columns left with an invalid default value
after the MySQL 5.6 changes.

Usage:
    timestampr            # port from DB_PORT, else 3306
    timestampr 3307       # explicit port

Connection settings are read from a ``.env`` file in the current directory
(DB_HOST, DB_USERNAME, DB_PASSWORD, DB_DATABASE, optional DB_PORT).

Exit codes:
    0  All affected tables were updated
    1  Missing .env, missing credentials, invalid port, connection failure,
       or no tables needing an update
"""

import argparse
import sys
from typing import List, Optional

from timestampr import __version__
from timestampr.cli.reporting import ConsoleReporter
from timestampr.config.settings import (
    build_database_config,
    locate_env_file,
    read_environment,
)
from timestampr.exceptions import NothingToUpdateError, TimestamprError
from timestampr.runner import MigrationRunner
from timestampr.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timestampr",
        description=(
            "Updates timestamp columns with invalid default values based on "
            "the MySQL 5.6 changes."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
This command will update all timestamp columns that have an invalid default
value in your database. Settings are read from .env in the current directory.

Examples:
  timestampr
  timestampr 3307
        """,
    )
    parser.add_argument(
        "port",
        nargs="?",
        default=None,
        help="Port for database connection (default: DB_PORT or 3306)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the migration.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for any expected failure)
    """
    args = build_parser().parse_args(argv)
    reporter = ConsoleReporter()

    try:
        env_file = locate_env_file()
        reporter.status("Found .env file")

        environment = read_environment(env_file)
        configure_logging(environment.LOG_LEVEL)

        config = build_database_config(environment, port_override=args.port)
        stats = MigrationRunner(config, reporter).run()

    except NothingToUpdateError as e:
        reporter.status(str(e))
        return e.exit_code

    except TimestamprError as e:
        logger.info("cli.aborted", error_type=type(e).__name__, error=str(e))
        reporter.error(str(e))
        return e.exit_code

    reporter.summary(stats)
    return 0


if __name__ == "__main__":
    sys.exit(main())
