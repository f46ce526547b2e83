from __future__ import annotations

import logging
from pathlib import Path

import pytest


def write_desktop(base: Path, filename: str, body: str) -> Path:
    """Write ``body`` to ``<base>/applications/<filename>``."""
    apps = base / "applications"
    apps.mkdir(parents=True, exist_ok=True)
    path = apps / filename
    path.write_text(body, encoding="utf-8")
    return path


def app_body(name: str, **extra: str) -> str:
    lines = ["[Desktop Entry]", "Type=Application", f"Name={name}"]
    lines += [f"{k}={v}" for k, v in extra.items()]
    return "\n".join(lines) + "\n"


class FailingListing:
    """Stands in for os.scandir() when the filesystem errors mid-listing."""

    def __enter__(self) -> "FailingListing":
        return self

    def __exit__(self, *exc) -> bool:
        return False

    def __iter__(self):
        raise OSError(5, "Input/output error")


@pytest.fixture()
def xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> dict[str, Path]:
    """Isolated HOME plus two data-dirs, mirroring /usr/local/share and /usr/share."""
    home = tmp_path / "home"
    local_share = tmp_path / "usr-local-share"
    usr_share = tmp_path / "usr-share"
    for d in (home, local_share, usr_share):
        d.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    monkeypatch.setenv("XDG_DATA_DIRS", f"{local_share}:{usr_share}")

    return {
        "home": home,
        "data_home": home / ".local" / "share",
        "local_share": local_share,
        "usr_share": usr_share,
    }


@pytest.fixture()
def isolated_logging(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Send the appdb log file into tmp_path and drop handlers afterwards."""
    import sys

    from appdb.core import config, logger

    monkeypatch.setattr(logger, "LOG_FILE", tmp_path / "log" / "appdb.log")
    monkeypatch.setattr(config, "SETTINGS_FILE", tmp_path / "settings.json")
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    root = logging.getLogger("appdb")
    yield tmp_path / "log" / "appdb.log"
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
