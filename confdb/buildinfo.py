"""Reader for the build information file of "key = value" lines."""

from __future__ import annotations

from pathlib import Path

DEFAULT_BUILDINFO_PATH = "/etc/buildinfo"


class BuildInfo:
    """Key/value pairs read from a build information file."""

    def __init__(self, path: str | Path = DEFAULT_BUILDINFO_PATH) -> None:
        self._values: dict[str, str] = {}
        try:
            text = Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError:
            return
        for line in text.splitlines():
            fields = line.split()
            if len(fields) >= 3 and fields[1] == "=":
                self._values[fields[0].strip(" ")] = fields[2].strip(" ")

    def get(self, key: str) -> str:
        """The value for a key, or an empty string when it is absent."""
        return self._values.get(key, "")