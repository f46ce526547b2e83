""".desktop file parser - extracts app metadata (name, icon, exec, terminal).

Parsing happens in two steps: ``parse_desktop_data`` turns the text of one
file into raw key/value pairs of its ``[Desktop Entry]`` group, then
``map_desktop_entry`` picks the recognised keys into a ``DesktopEntry``.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import NamedTuple, Sequence

from appdb.core.config import MAX_KEYS
from appdb.core.errors import DesktopFileReadError
from appdb.core.logger import get_logger
from appdb.core.textutil import strip_leading, strip_trailing

_log = get_logger("desktop_parser")

GROUP_HEADER = "[Desktop Entry]"

KeyValue = tuple[str, str]


@dataclass
class DesktopEntry:
    """Parsed fields from a .desktop file. Only ``name`` is mandatory."""
    name: str
    generic_name: str | None = None
    comment: str | None = None
    icon: str | None = None
    exec: str | None = None
    path: str | None = None
    terminal: bool = False

    def to_dict(self) -> dict[str, str | bool | None]:
        return asdict(self)


class FieldKind(Enum):
    STRING = "string"
    BOOL = "bool"


class FieldSpec(NamedTuple):
    key: str
    attr: str
    kind: FieldKind


FIELD_MAP: tuple[FieldSpec, ...] = (
    FieldSpec("Name", "name", FieldKind.STRING),
    FieldSpec("GenericName", "generic_name", FieldKind.STRING),
    FieldSpec("Comment", "comment", FieldKind.STRING),
    FieldSpec("Icon", "icon", FieldKind.STRING),
    FieldSpec("Exec", "exec", FieldKind.STRING),
    FieldSpec("Path", "path", FieldKind.STRING),
    FieldSpec("Terminal", "terminal", FieldKind.BOOL),
)


def parse_desktop_data(
    data: str,
    max_keys: int = MAX_KEYS,
    log: logging.Logger = _log,
) -> list[KeyValue] | None:
    """Split the text of a .desktop file into ordered (key, value) pairs.

    Returns None when the file does not start with a ``[Desktop Entry]``
    group or holds ``max_keys`` or more keys. Parsing stops quietly at the
    first line without ``=``, which is where the next group begins.
    """
    pairs: list[KeyValue] = []
    group_found = False

    for line in data.split("\n"):
        # comments and empty lines
        if not line or line.startswith("#"):
            continue

        if not group_found:
            if line != GROUP_HEADER:
                return None
            group_found = True
            continue

        key, sep, value = line.partition("=")
        if not sep:
            break

        if len(pairs) + 1 >= max_keys:
            log.error("failed to parse desktop entry with more than %d keys", max_keys)
            return None

        pairs.append((strip_trailing(key), strip_leading(value)))

    if not group_found:
        return None
    return pairs


def find_key(pairs: Sequence[KeyValue], key: str) -> str | None:
    """Return the value of the first pair with ``key``, or None."""
    for k, v in pairs:
        if k == key:
            return v
    return None


def map_desktop_entry(
    pairs: Sequence[KeyValue],
    log: logging.Logger = _log,
) -> DesktopEntry | None:
    """Build a DesktopEntry from parsed pairs, or None if it is not an application."""
    if find_key(pairs, "Type") != "Application":
        return None

    name = find_key(pairs, "Name")
    if not name:
        return None

    xlash = find_key(pairs, "X-LASH")
    if xlash is not None:
        log.debug("Application '%s' has X-LASH=%s", name, xlash)

    entry = DesktopEntry(name=name)
    for spec in FIELD_MAP:
        value = find_key(pairs, spec.key)
        if value is None:
            assert spec.key != "Name", "Name is required and was checked above"
            continue

        if spec.kind is FieldKind.STRING:
            setattr(entry, spec.attr, value)
        elif spec.kind is FieldKind.BOOL:
            if value == "true":
                setattr(entry, spec.attr, True)
            elif value == "false":
                setattr(entry, spec.attr, False)
            else:
                log.warning("Ignoring %s:%s bool with wrong value '%s'", name, spec.key, value)
        else:
            raise AssertionError(f"unknown field kind {spec.kind!r}")

    return entry


def load_desktop_file(
    path: str | Path,
    max_keys: int = MAX_KEYS,
    log: logging.Logger = _log,
) -> DesktopEntry | None:
    """Read, parse and map one .desktop file.

    Returns None for files that are not usable applications. Raises
    DesktopFileReadError if the file cannot be read.
    """
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        log.error("Failed to read '%s': %s", path, e)
        raise DesktopFileReadError(str(path), e) from e

    pairs = parse_desktop_data(raw.decode("utf-8", errors="replace"), max_keys, log)
    if pairs is None:
        return None
    return map_desktop_entry(pairs, log)
