"""File-system and process helpers."""

from __future__ import annotations

import os
import subprocess
import time
from pathlib import Path

from .logger import MSGID_CONFIGDSERVICE, get_logger


def is_file_exist(path: str | os.PathLike) -> bool:
    """Tell whether anything exists at the path."""
    return os.access(path, os.F_OK)


def is_dir_exist(path: str | os.PathLike) -> bool:
    """Tell whether the path is an existing directory."""
    return os.path.isdir(path)


def can_write_file(path: str | os.PathLike) -> bool:
    """Open the file for writing (truncating it) and tell whether that worked."""
    try:
        with open(path, "w+", encoding="utf-8"):
            pass
    except OSError:
        return False
    return True


def read_file(filename: str | os.PathLike) -> str:
    """Whole file contents with surrounding whitespace removed; empty if unreadable."""
    if is_dir_exist(filename) or not is_file_exist(filename):
        return ""
    try:
        return Path(filename).read_text(encoding="utf-8", errors="replace").strip()
    except OSError:
        return ""


def write_file(filename: str | os.PathLike, content: str) -> bool:
    """Replace the file's contents."""
    Path(filename).write_text(content, encoding="utf-8")
    return True


def copy_file(source: str | os.PathLike, target: str | os.PathLike) -> bool:
    """Copy the trimmed contents of one file to another."""
    if not is_file_exist(source):
        return False
    return write_file(target, read_file(source))


def delete_file(filename: str | os.PathLike) -> bool:
    """Remove a file; False when the name is empty or removal fails."""
    if not filename:
        return False
    try:
        os.remove(filename)
    except OSError:
        get_logger().debug("Unable to delete file (%s)", str(filename))
        return False
    get_logger().debug("'%s' file deleted successfully.", str(filename))
    return True


def execute_command(command: str, *args: str) -> str:
    """Run a shell command with optional arguments and return its trimmed output."""
    line = " ".join([command, *args])
    get_logger().info(MSGID_CONFIGDSERVICE, "Execute command (%s)", line)
    completed = subprocess.run(
        line,
        shell=True,
        stdout=subprocess.PIPE,
        text=True,
        errors="replace",
        check=False,
    )
    return completed.stdout.strip()


def concat_paths(parent: str, child: str) -> str:
    """Join two path parts with exactly one slash between them."""
    parent = trim(parent)
    child = trim(child)
    if parent.endswith("/"):
        parent = parent[:-1]
    if child.startswith("/"):
        child = child[1:]
    if not parent:
        return "/" + child
    if child:
        return f"{parent}/{child}"
    return parent


def extract_file_name(filename: str) -> tuple[str, str]:
    """Split a file name at its last dot into (name, extension)."""
    name, dot, extension = filename.rpartition(".")
    if not dot:
        return filename, ""
    return name, extension


def trim(text: str) -> str:
    """Strip surrounding spaces; a string of only spaces is returned unchanged."""
    stripped = text.strip(" ")
    return stripped if stripped else text


def time_str() -> str:
    """Current Unix time in whole seconds, as text."""
    return str(int(time.time()))