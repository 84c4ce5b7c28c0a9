"""Command-line tool for inspecting and comparing configuration databases."""

from __future__ import annotations

import argparse
import copy
import glob
import json
import os
import sys
from enum import IntEnum
from typing import Any, Optional, Sequence

from . import fsutil, jsondb
from .comparator import DBComparator, compare_files
from .jsondb import DatabaseKind, JsonDB
from .logger import LogLevel, get_logger

LOG_FILE = "/var/log/configd.log"
DUMPED_DB = "/tmp/configd_TIMESTAMP_before_reason.json"
DUMP_PATTERN = "/tmp/configd_*"

_SUMMARY = "configd-tool for debugging and verifying configd internal"
_EPILOG = """Examples:

Print files locations
$ configd-tool --print

Clean all files which are generated by configd
$ configd-tool --clean

Dump in-memory unified database
$ configd-tool --dump > /tmp/configd_unified_now.json

Get difference between 2 database files
$ configd-tool --diff A.json B.json

Search full name key-value pair containing input key (regular expression) from json file
$ configd-tool --search=settings db.json

Get config from json file
$ configd-tool --get-config=tv.rmm.ttxMode db.json
"""


class ExitStatus(IntEnum):
    """Process exit codes."""

    SUCCESS = 1
    TIMEOUT = 2
    UNKNOWN_ERROR = 3
    INVALID_ARGUMENTS = 4


class _OptionError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise _OptionError(message)


def _build_parser() -> _Parser:
    parser = _Parser(
        prog="configd-tool",
        description=_SUMMARY,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--print", dest="print_", action="store_true",
                        help="print internal information")
    parser.add_argument("--clean", action="store_true", help="clean up all files")
    parser.add_argument("--dump", action="store_true", help="dump Config")
    parser.add_argument("--diff", action="store_true",
                        help="Get differences between two database json files")
    parser.add_argument("--search",
                        help="Search config by regular expression from file database")
    parser.add_argument("--get-config", dest="get_config", metavar="CONFIG_FULLNAME",
                        help="Get config value from file database")
    parser.add_argument("files", nargs="*")
    return parser


def print_files() -> None:
    """Print where the tool's files live."""
    print(f"Log file - {LOG_FILE}")
    print(f"Main DB - {jsondb.FILENAME_MAIN_DB}")
    print(f"Factory DB - {jsondb.FILENAME_FACTORY_DB}")
    print(f"Debug DB - {jsondb.FILENAME_DEBUG_DB}")
    print(f"Dumped DB - {DUMPED_DB}")


def delete_files() -> None:
    """Delete the database files and any dumped databases."""
    for label, filename in (
        ("MainDB", jsondb.FILENAME_MAIN_DB),
        ("FactoryDB", jsondb.FILENAME_FACTORY_DB),
        ("DebugDB", jsondb.FILENAME_DEBUG_DB),
    ):
        if fsutil.delete_file(filename):
            print(f"{label} {filename} deleted")
    for dumped in glob.glob(DUMP_PATTERN):
        try:
            os.remove(dumped)
        except OSError:
            pass


def _dump() -> dict[str, Any]:
    unified = jsondb.instance(DatabaseKind.UNIFIED)
    unified.copy_from(jsondb.instance(DatabaseKind.MAIN))
    unified.merge(jsondb.instance(DatabaseKind.FACTORY))
    return copy.deepcopy(unified.database)


def _run(options: argparse.Namespace) -> tuple[dict[str, Any], Optional[str]]:
    files = options.files
    if options.print_:
        print_files()
        return {}, None
    if options.clean:
        delete_files()
        return {}, None
    if options.diff and len(files) == 2:
        comparator = DBComparator()
        comparator.set_base(files[0])
        try:
            return compare_files(files[0], files[1]), None
        except ValueError:
            return {}, "failed to load input files"
    if options.dump:
        return _dump(), None
    if options.search is not None and len(files) == 1:
        db = JsonDB()
        db.load(files[0])
        try:
            found = db.search_key(options.search)
        except ValueError:
            return {}, "Cannot search from database"
        if not found:
            return {}, "Cannot search from database"
        return found, None
    if options.get_config is not None and len(files) == 1:
        comparator = DBComparator()
        comparator.set_base(files[0])
        try:
            config = comparator.get_config(options.get_config)
        except (KeyError, ValueError):
            return {}, "Cannot find config"
        if not config:
            return {}, "Cannot find config"
        return config, None
    return {}, "Invalid Parameter"


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the tool and print its JSON result; returns the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    status = ExitStatus.SUCCESS
    try:
        options = _build_parser().parse_intermixed_args(args)
    except _OptionError as exc:
        print(f"Option parsing error: {exc}", file=sys.stderr)
        result: dict[str, Any] = {"returnValue": False, "errorText": str(exc)}
        status = ExitStatus.INVALID_ARGUMENTS
    else:
        get_logger().level = LogLevel.ERROR
        result, error_text = _run(options)
        if error_text is not None:
            result["returnValue"] = False
            result["errorText"] = error_text
        else:
            result["returnValue"] = True
    print(json.dumps(result, indent=4, ensure_ascii=False))
    return int(status)


if __name__ == "__main__":
    sys.exit(main())