"""Scans the applications/ subdirectory of one XDG data directory."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from appdb.core.config import APPLICATIONS_SUBDIR, DESKTOP_SUFFIX, MAX_KEYS
from appdb.core.desktop_parser import load_desktop_file
from appdb.core.errors import DirectoryScanError
from appdb.core.logger import get_logger
from appdb.core.textutil import has_suffix

if TYPE_CHECKING:
    from appdb.core.appdb import AppDB

_log = get_logger("scanner")


def applications_dir(base_directory: str) -> str:
    return os.path.join(base_directory, APPLICATIONS_SUBDIR)


def scan_directory(
    db: AppDB,
    base_directory: str,
    max_keys: int = MAX_KEYS,
    log: logging.Logger = _log,
) -> int:
    """Add the applications found under ``<base_directory>/applications`` to ``db``.

    Only regular files ending in ``.desktop`` are read, in directory listing
    order. Entries whose name is already in ``db`` are dropped, so earlier
    directories win. A missing directory contributes nothing.

    Returns the number of entries added. A file that cannot be read raises
    DesktopFileReadError, a listing that fails part way DirectoryScanError.
    """
    directory = applications_dir(base_directory)
    added = 0

    try:
        listing = os.scandir(directory)
    except OSError as e:
        log.debug("Skipping '%s': %s", directory, e.strerror or e)
        return 0

    try:
        with listing:
            for dentry in listing:
                if not dentry.is_file(follow_symlinks=False):
                    continue
                if not has_suffix(dentry.name, DESKTOP_SUFFIX):
                    continue

                entry = load_desktop_file(dentry.path, max_keys, log)
                if entry is None:
                    continue

                # first found entries have priority (XDG Base Directory Specification)
                if entry.name in db:
                    log.debug("Ignoring '%s' from '%s', already found", entry.name, dentry.path)
                    continue

                log.info("Application '%s' found", entry.name)
                db.add(entry)
                added += 1
    except OSError as e:
        log.error("Failed to scan '%s': %s", directory, e)
        raise DirectoryScanError(directory, e) from e

    return added
