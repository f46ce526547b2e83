"""Entry point for appdb - loads the application database and serves it."""

from __future__ import annotations

import argparse
import json
import sys

from appdb import __app_name__, __version__
from appdb.core.appdb import AppDB, load
from appdb.core.config import Config
from appdb.core.errors import AppDBError
from appdb.core.logger import get_log_path, get_logger, setup_logging

_log = get_logger("main")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="Application database via .desktop files.",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--list", action="store_true", help="print name and Exec of each application and exit")
    output.add_argument("--json", action="store_true", help="print all applications as JSON and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="mirror the log to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def print_list(db: AppDB) -> None:
    for entry in db:
        print(f"{entry.name}\t{entry.exec or ''}")


def print_json(db: AppDB) -> None:
    json.dump([entry.to_dict() for entry in db], sys.stdout, indent=2)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config = Config()
    setup_logging(config.get("log_level"), verbose=args.verbose)
    if args.verbose:
        print(f"Logging to {get_log_path()}", file=sys.stderr)

    try:
        db = load(max_keys=config.get("max_keys"))
    except AppDBError as e:
        _log.error("Loading of appdb failed: %s", e)
        return 1

    with db:
        if args.list:
            print_list(db)
            return 0
        if args.json:
            print_json(db)
            return 0

        from appdb.app import AppDBDaemon

        app = AppDBDaemon(sys.argv[:1], db, config)
        if not app.acquire_lock():
            _log.error("%s is already running.", __app_name__)
            return 1
        if not app.connect_bus():
            _log.error("Failed to connect to D-Bus")
            return 1
        return app.run()


if __name__ == "__main__":
    sys.exit(main())
