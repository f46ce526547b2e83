"""Application database - .desktop entries from all XDG data directories.

Directories are scanned in XDG precedence order:
  1. $XDG_DATA_HOME (default: $HOME/.local/share)
  2. each element of $XDG_DATA_DIRS, left to right
     (default: /usr/local/share/:/usr/share/)

An application name found in an earlier directory hides the same name in
later ones.
"""

from __future__ import annotations

import logging
import os
from typing import Iterator

from appdb.core.config import DEFAULT_DATA_DIRS, DEFAULT_DATA_HOME_SUFFIX, MAX_KEYS
from appdb.core.desktop_parser import DesktopEntry
from appdb.core.errors import MissingHomeError
from appdb.core.logger import get_logger
from appdb.core.scanner import scan_directory
from appdb.core.textutil import xdg_var_or_default

_log = get_logger("appdb")


class AppDB:
    """Ordered collection of DesktopEntry objects with unique names.

    Built once by ``load()`` and read-only afterwards. The owner releases it
    with ``release()`` or by using it as a context manager.
    """

    def __init__(self) -> None:
        self._entries: list[DesktopEntry] = []
        self._by_name: dict[str, DesktopEntry] = {}
        self._released = False

    def add(self, entry: DesktopEntry) -> bool:
        """Append ``entry`` unless its name is already present."""
        if self._released:
            raise RuntimeError("appdb has been released")
        if entry.name in self._by_name:
            return False
        self._entries.append(entry)
        self._by_name[entry.name] = entry
        return True

    def get(self, name: str) -> DesktopEntry | None:
        return self._by_name.get(name)

    def names(self) -> list[str]:
        return [e.name for e in self._entries]

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Drop all entries. Calling it again does nothing."""
        if self._released:
            return
        self._entries.clear()
        self._by_name.clear()
        self._released = True

    def __iter__(self) -> Iterator[DesktopEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __enter__(self) -> "AppDB":
        return self

    def __exit__(self, *exc) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self._released else f"{len(self._entries)} entries"
        return f"<AppDB {state}>"


def resolve_data_home(log: logging.Logger = _log) -> str:
    """Return $XDG_DATA_HOME, defaulting to $HOME/.local/share."""
    home_dir = os.environ.get("HOME")
    if home_dir is None:
        log.error("HOME environment variable is not set.")
        raise MissingHomeError()
    return xdg_var_or_default("XDG_DATA_HOME", home_dir + DEFAULT_DATA_HOME_SUFFIX)


def resolve_data_dirs(log: logging.Logger = _log) -> list[str]:
    """Return the base directories to scan, most important first."""
    directories = [resolve_data_home(log)]
    for directory in xdg_var_or_default("XDG_DATA_DIRS", DEFAULT_DATA_DIRS).split(":"):
        if not directory:
            log.debug("Skipping empty XDG_DATA_DIRS element")
            continue
        directories.append(directory)
    return directories


def load(log: logging.Logger = _log, max_keys: int = MAX_KEYS) -> AppDB:
    """Scan all XDG data directories and return the populated AppDB.

    Raises an AppDBError subclass on failure; nothing scanned before the
    failure is kept.
    """
    db = AppDB()
    try:
        for directory in resolve_data_dirs(log):
            scan_directory(db, directory, max_keys, log)
    except BaseException:
        db.release()
        raise

    log.debug("appdb loaded with %d applications", len(db))
    return db


def release(db: AppDB) -> None:
    """Free an AppDB returned by load()."""
    db.release()
