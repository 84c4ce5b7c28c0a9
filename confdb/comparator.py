"""Comparison of configuration database files and message logs."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Iterator, Union

from .jsondb import JsonDB

PathLike = Union[str, os.PathLike]


def _load_json(path: PathLike) -> Any:
    try:
        with open(path, encoding="utf-8") as stream:
            content = json.load(stream)
    except (OSError, ValueError) as exc:
        raise ValueError(f"failed to load {os.fspath(path)!s}") from exc
    if content is None:
        raise ValueError(f"failed to load {os.fspath(path)!s}")
    return content


def _categories(document: Any) -> Iterator[tuple[str, dict]]:
    if not isinstance(document, dict):
        return
    for name, configs in document.items():
        if isinstance(configs, dict):
            yield name, configs


def _has_config(document: Any, category: str, config: str) -> bool:
    if not isinstance(document, dict):
        return False
    configs = document.get(category)
    return isinstance(configs, dict) and config in configs


def diff_array(a: Any, b: Any) -> dict[str, list]:
    """Elements only in b ("addedElement") and only in a ("removedElement")."""
    if not isinstance(a, list) or not isinstance(b, list):
        return {}
    removed = [item for item in a if item not in b]
    added = [item for item in b if item not in a]
    result: dict[str, list] = {}
    if added:
        result["addedElement"] = added
    if removed:
        result["removedElement"] = removed
    return result


def diff_object(a: Any, b: Any) -> dict[str, Any]:
    """Keys added in b, values of keys removed from a, and the last changed pair."""
    if not isinstance(a, dict) or not isinstance(b, dict):
        return {}
    removed: list = []
    changed: dict[str, Any] = {}
    for key, value in a.items():
        if key not in b:
            removed.append(value)
        elif b[key] != value:
            changed["before"] = value
            changed["after"] = b[key]
    added = [key for key in b if key not in a]

    result: dict[str, Any] = {}
    if added:
        result["addedElement"] = added
    if removed:
        result["removedElement"] = removed
    if changed:
        result["changedObject"] = changed
    return result


def compare_files(path_a: PathLike, path_b: PathLike) -> dict[str, Any]:
    """Differences between two database files; ValueError if either cannot be read."""
    content_a = _load_json(path_a)
    content_b = _load_json(path_b)
    if content_a == content_b:
        return {"isDifferent": False}

    removed_keys: list[str] = []
    added_keys: list[str] = []
    changed_keys: list[dict[str, Any]] = []

    for category_name, configs in _categories(content_a):
        for config_name, before in configs.items():
            full_name = f"{category_name}.{config_name}"
            if not _has_config(content_b, category_name, config_name):
                removed_keys.append(full_name)
                continue
            after = content_b[category_name][config_name]
            if before == after:
                continue
            if isinstance(before, list) and isinstance(after, list):
                difference = diff_array(before, after)
            elif isinstance(before, dict) and isinstance(after, dict):
                difference = diff_object(before, after)
            else:
                difference = {"before": before, "after": after}
            if difference:
                changed_keys.append({full_name: difference})

    for category_name, configs in _categories(content_b):
        for config_name in configs:
            if not _has_config(content_a, category_name, config_name):
                added_keys.append(f"{category_name}.{config_name}")

    result: dict[str, Any] = {}
    if removed_keys:
        result["removedKeys"] = removed_keys
    if added_keys:
        result["addedKeys"] = added_keys
    if changed_keys:
        result["changedKeys"] = changed_keys
    result["isDifferent"] = True
    return result


class DBComparator:
    """Holds a base database to query and compare other databases against."""

    def __init__(self) -> None:
        self._base = JsonDB()

    @property
    def base(self) -> str:
        """File name of the base database."""
        return self._base.filename

    def set_base(self, filename: PathLike) -> None:
        """Load the base database from a file."""
        self._base.load(filename)

    def get_config(self, full_name: str) -> dict[str, Any]:
        """Look up a config in the base database; KeyError if it is absent."""
        return self._base.fetch(full_name)

    def is_equal(self, filename: PathLike) -> bool:
        """Tell whether a database file holds the same contents as the base."""
        other = JsonDB()
        other.load(filename)
        return self._base.is_equal_database(other)


def convert_file(filename: PathLike) -> list[Any]:
    """Parse a file holding one JSON message per line."""
    path = Path(filename)
    if not path.exists():
        raise FileNotFoundError(os.fspath(filename))
    messages: list[Any] = []
    for number, line in enumerate(path.read_text(encoding="utf-8").splitlines(), 1):
        try:
            message = json.loads(line)
        except ValueError as exc:
            raise ValueError(f"{path}:{number}: invalid message") from exc
        if message is None:
            raise ValueError(f"{path}:{number}: invalid message")
        messages.append(message)
    return messages


class LS2Comparator:
    """Two message logs loaded side by side."""

    def __init__(self, a: PathLike = "", b: PathLike = "") -> None:
        self.filename_a = ""
        self.filename_b = ""
        self.messages_a: list[Any] | None = None
        self.messages_b: list[Any] | None = None
        if not a or not b:
            return
        try:
            self.messages_a = convert_file(a)
            self.messages_b = convert_file(b)
        except (OSError, ValueError):
            return
        self.filename_a = os.fspath(a)
        self.filename_b = os.fspath(b)

    def is_equal(self) -> bool:
        """Message logs are always reported as equal."""
        return True

    def is_loaded(self, filename: PathLike) -> bool:
        """Tell whether the file is one of the two loaded logs."""
        name = os.fspath(filename)
        return bool(name) and name in (self.filename_a, self.filename_b)