"""Flat ``name=value`` settings files."""

from __future__ import annotations

import os
from typing import Iterator


class IniFile:
    """Ordered ``name=value`` settings read from and written to UTF-8 text."""

    def __init__(self) -> None:
        self._settings: dict[str, str] = {}

    @staticmethod
    def _parse_line(line: str) -> tuple[str, str] | None:
        text = line.lstrip("=")
        name, sep, rest = text.partition("=")
        if not sep or not name:
            return None
        value = rest.lstrip("\r\n")
        for end, char in enumerate(value):
            if char in "\r\n":
                value = value[:end]
                break
        if not value:
            return None
        return name, value

    def read(self, path: str | os.PathLike[str]) -> None:
        """Add the settings found in ``path``; the first of duplicate names wins."""
        with open(path, encoding="utf-8") as handle:
            for line in handle:
                parsed = self._parse_line(line)
                if parsed is not None:
                    name, value = parsed
                    self._settings.setdefault(name, value)

    def write(self, path: str | os.PathLike[str]) -> None:
        """Write every setting as ``name=value`` lines."""
        with open(path, "w", encoding="utf-8", newline="") as handle:
            for name, value in self._settings.items():
                handle.write(f"{name}={value}\n")

    def get(self, name: str, default: str | None = None) -> str | None:
        """Value of ``name``, or ``default`` if it is not set."""
        return self._settings.get(name, default)

    def set(self, name: str, value: str) -> None:
        """Replace the value of ``name`` or append a new setting."""
        self._settings[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self._settings

    def __iter__(self) -> Iterator[str]:
        return iter(self._settings)

    def __len__(self) -> int:
        return len(self._settings)