"""Two-level JSON configuration database: categories holding named configs."""

from __future__ import annotations

import copy
import json
import os
import re
import tempfile
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from . import fsutil
from .logger import MSGID_CONFIGUREDATA, get_logger

INSTALL_LOCALSTATEDIR = "/var/lib/configd"

FILENAME_MAIN_DB = INSTALL_LOCALSTATEDIR + "/configd_db.json"
FILENAME_FACTORY_DB = INSTALL_LOCALSTATEDIR + "/configd_factory_db.json"
FILENAME_DEBUG_DB = INSTALL_LOCALSTATEDIR + "/configd_debug_db.json"
FILENAME_PERMISSION_DB = INSTALL_LOCALSTATEDIR + "/configd_permissions_db.json"

CATEGORYNAME_CONFIGD = "com.webos.service.config"
FULLNAME_SELECTION = CATEGORYNAME_CONFIGD + ".selection"
FULLNAME_LAYERS = CATEGORYNAME_CONFIGD + ".layers"
FULLNAME_USER = CATEGORYNAME_CONFIGD + ".usrDefined"
FULLNAME_REASON = CATEGORYNAME_CONFIGD + ".dumpReason"
FULLNAME_LAYERSVERSION = CATEGORYNAME_CONFIGD + ".layersVersion"

FULLNAME_DEBUG_LOAD = CATEGORYNAME_CONFIGD + ".load"
FULLNAME_DEBUG_RECONFIGURE = CATEGORYNAME_CONFIGD + ".reconfigure"
FULLNAME_DEBUG_SETCONFIGS = CATEGORYNAME_CONFIGD + ".setconfigs"
FULLNAME_DEBUG_PREPROCESS = CATEGORYNAME_CONFIGD + ".preprocess"
FULLNAME_DEBUG_POSTPROCESS = CATEGORYNAME_CONFIGD + ".postprocess"

_WHITESPACE = re.compile(r"[ \t\n\v\f\r]")


def split_full_name(full_name: str) -> tuple[str, str]:
    """Split "category.config" at the last dot, ignoring all whitespace."""
    trimmed = _WHITESPACE.sub("", full_name)
    category, dot, config = trimmed.rpartition(".")
    if not dot:
        get_logger().debug(' "." character not Found in key %s', full_name)
        raise ValueError(f"no '.' in config name {full_name!r}")
    return category, config


def full_db_names(category_name: str, category: Any) -> dict[str, Any]:
    """Map every config of a category to its full "category.config" name."""
    if not category_name or not isinstance(category, Mapping):
        get_logger().debug("Input parameters are not valid")
        raise ValueError("a category name and an object of configs are required")
    result: dict[str, Any] = {}
    for config_name, value in category.items():
        if not config_name:
            get_logger().debug(
                "encountered invalid key when iterating %s category", category_name
            )
            continue
        result[f"{category_name}.{config_name}"] = copy.deepcopy(value)
    return result


class JsonDB:
    """A named database of categories, optionally backed by a JSON file."""

    def __init__(self, name: str = "Unknown Database") -> None:
        self.name = name
        self._database: dict[str, Any] = {}
        self._filename = ""
        self._updated = False

    @property
    def database(self) -> dict[str, Any]:
        """The live database contents."""
        return self._database

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def is_updated(self) -> bool:
        """True when the contents changed since the last load or flush."""
        return self._updated

    def load(self, filename: Union[str, os.PathLike]) -> None:
        """Replace the contents with a JSON file; an unreadable file gives an empty database."""
        filename = str(filename)
        logger = get_logger()
        if not filename:
            logger.error(MSGID_CONFIGUREDATA, "Failed to load database (%s)", filename)
            raise ValueError("database file name is empty")

        try:
            with open(filename, encoding="utf-8") as stream:
                loaded = json.load(stream)
        except (OSError, ValueError):
            loaded = None
        self._database = loaded if isinstance(loaded, dict) else {}

        if self._filename and self._filename != filename:
            logger.warning(
                MSGID_CONFIGUREDATA, "'%s' : Load another database file", self.name
            )
        self._filename = filename
        if self._updated:
            logger.warning(
                MSGID_CONFIGUREDATA,
                "'%s' : Database is modified but not saved before loading",
                self.name,
            )
        self._updated = False

    def copy_from(self, other: "JsonDB") -> None:
        """Take a deep copy of another database's contents (not its file name)."""
        if self._database == other._database:
            get_logger().warning(
                MSGID_CONFIGUREDATA,
                "Failed to copy JsonDB because those are same values",
            )
            return
        self._database = copy.deepcopy(other._database)
        self._updated = True

    def merge(self, database: Union["JsonDB", Mapping[str, Any]]) -> None:
        """Insert every config of another database or category mapping."""
        source = database.database if isinstance(database, JsonDB) else database
        for category_name, category in source.items():
            if not isinstance(category, Mapping):
                continue
            for config_name, value in category.items():
                try:
                    self.insert_config(category_name, config_name, value)
                except TypeError:
                    get_logger().debug(
                        'Failed to insert "%s" key under "%s" to configDB',
                        config_name,
                        category_name,
                    )

    def clear(self) -> None:
        """Delete the backing file and empty the database."""
        if not fsutil.delete_file(self._filename):
            get_logger().debug("Unable to delete file (%s)", self._filename)
        self._database = {}
        self._updated = True

    def flush(self) -> bool:
        """Write pending changes to the file atomically; False if that is impossible."""
        logger = get_logger()
        if not self._updated:
            logger.debug("Database is not updated")
            return True
        if not self._filename:
            logger.debug("In memory database")
            return False

        data = json.dumps(self._database, indent=4, ensure_ascii=False)
        directory = os.path.dirname(self._filename) or "."
        try:
            os.makedirs(directory, mode=0o755, exist_ok=True)
        except OSError as exc:
            logger.error(
                MSGID_CONFIGUREDATA, "Failed to mkdir %s: %s", directory, exc.strerror
            )
            return False

        try:
            self._write_atomically(directory, data)
        except OSError as exc:
            logger.error(
                MSGID_CONFIGUREDATA,
                "Failed to write content into %s: %s",
                self._filename,
                exc.strerror or str(exc),
            )
            return False
        self._updated = False
        return True

    def _write_atomically(self, directory: str, data: str) -> None:
        base = os.path.basename(self._filename)
        fd, temp_path = tempfile.mkstemp(prefix=f".{base}.", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as stream:
                stream.write(data)
                stream.flush()
                os.fsync(stream.fileno())
            os.replace(temp_path, self._filename)
        except BaseException:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

    def insert(self, full_name: str, value: Any) -> bool:
        """Store a value under "category.config"; True if the database changed."""
        try:
            category_name, config_name = split_full_name(full_name)
        except ValueError:
            get_logger().error(
                MSGID_CONFIGUREDATA, "Failed to split fullName (%s)", full_name
            )
            raise
        return self.insert_config(category_name, config_name, value)

    def insert_config(self, category_name: str, config_name: str, value: Any) -> bool:
        """Store a value under a category and config; True if the database changed."""
        category = self._database.setdefault(category_name, {})
        if not isinstance(category, dict):
            raise TypeError(f"category {category_name!r} is not an object")

        logger = get_logger()
        if config_name in category:
            if category[config_name] == value:
                logger.verbose(
                    "'%s' : '%s' - Ignore insert operation because of same value",
                    category_name,
                    config_name,
                )
                return False
            logger.verbose(
                "'%s' : '%s'\n%s==========>\n%s",
                category_name,
                config_name,
                json.dumps(category[config_name], indent=4),
                json.dumps(value, indent=4),
            )
        category[config_name] = value
        self._updated = True
        return True

    def remove(self, full_name: str) -> bool:
        """Remove "category.config"; True if it was present."""
        try:
            category_name, config_name = split_full_name(full_name)
        except ValueError:
            get_logger().error(
                MSGID_CONFIGUREDATA, "Failed to split fullName (%s)", full_name
            )
            raise
        return self.remove_config(category_name, config_name)

    def remove_config(self, category_name: str, config_name: str) -> bool:
        """Remove one config, dropping its category once empty; True if it was present."""
        category = self._database.get(category_name)
        if not isinstance(category, dict) or config_name not in category:
            get_logger().debug("%s.%s is not in database", category_name, config_name)
            return False
        del category[config_name]
        self._updated = True
        if not category:
            del self._database[category_name]
        return True

    def fetch(self, full_name: str) -> dict[str, Any]:
        """Look up "category.config" (or "category.*"); KeyError if absent."""
        try:
            category_name, config_name = split_full_name(full_name)
        except ValueError:
            get_logger().debug(
                'Failed to get category/config name from "%s"', full_name
            )
            raise
        if category_name not in self._database:
            get_logger().debug("%s category does not exist in DB", category_name)
            raise KeyError(full_name)
        return self.fetch_config(category_name, config_name)

    def fetch_config(self, category_name: str, config_name: str) -> dict[str, Any]:
        """Copies of matching values keyed by full name; "*" selects the whole category."""
        if category_name not in self._database:
            get_logger().debug("%s category does not exist", category_name)
            raise KeyError(category_name)
        category = self._database[category_name]
        if config_name == "*":
            return full_db_names(category_name, category)
        if not isinstance(category, dict) or config_name not in category:
            get_logger().debug("%s config does not exist", config_name)
            raise KeyError(f"{category_name}.{config_name}")
        return {f"{category_name}.{config_name}": copy.deepcopy(category[config_name])}

    def search_key(self, pattern: str) -> dict[str, Any]:
        """Copies of all configs whose full name matches a regular expression."""
        if not pattern:
            raise ValueError("search pattern is empty")
        try:
            regex = re.compile(pattern)
        except re.error as exc:
            get_logger().debug("regex_search failed: %s", str(exc))
            raise ValueError(f"invalid regular expression {pattern!r}: {exc}") from exc

        result: dict[str, Any] = {}
        for category_name, category in self._database.items():
            if not isinstance(category, Mapping):
                continue
            for config_name, value in category.items():
                full_name = f"{category_name}.{config_name}"
                if regex.search(full_name):
                    result[full_name] = copy.deepcopy(value)
        return result

    def set_filename(self, filename: Union[str, os.PathLike]) -> None:
        """Point the database at another file, marking it as needing a flush."""
        filename = str(filename)
        if self._filename == filename:
            return
        self._filename = filename
        self._updated = True

    def is_equal_database(self, other: "JsonDB") -> bool:
        return self._database == other._database

    def is_equal_filename(self, other: "JsonDB") -> bool:
        return self._filename == other._filename

    def print_debug(self) -> None:
        """Print the contents as indented JSON."""
        print(json.dumps(self._database, indent=4, ensure_ascii=False))


class DatabaseKind(Enum):
    """The shared databases, with their display name and backing file."""

    MAIN = ("Main Database", FILENAME_MAIN_DB)
    FAKE_FACTORY = ("FakeFactory Database", None)
    VOLATILE = ("Volatile Database", None)
    FACTORY = ("Factory Database", FILENAME_FACTORY_DB)
    PERMISSION = ("Permission Database", FILENAME_PERMISSION_DB)
    DEBUG = ("Debug Database", FILENAME_DEBUG_DB)
    UNIFIED = ("Unified Database", None)

    def __init__(self, display_name: str, default_file: Optional[str]) -> None:
        self.display_name = display_name
        self.default_file = default_file


_instances: dict[DatabaseKind, JsonDB] = {}
_instances_lock = threading.Lock()


def instance(kind: DatabaseKind) -> JsonDB:
    """The shared database of a kind, loading its file on first use."""
    with _instances_lock:
        db = _instances.get(kind)
        if db is None:
            db = JsonDB(kind.display_name)
            _instances[kind] = db
    if kind.default_file is not None and not db.filename:
        db.load(kind.default_file)
    return db