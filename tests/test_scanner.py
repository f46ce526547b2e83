from __future__ import annotations

import os
from pathlib import Path

import pytest

from appdb.core import desktop_parser
from appdb.core.appdb import AppDB
from appdb.core.errors import AppDBError, DesktopFileReadError, DirectoryScanError
from appdb.core.scanner import scan_directory
from tests.conftest import FailingListing, app_body, write_desktop


def test_missing_applications_dir(tmp_path: Path) -> None:
    db = AppDB()
    assert scan_directory(db, str(tmp_path / "nowhere")) == 0
    assert len(db) == 0


def test_collects_only_desktop_files(tmp_path: Path) -> None:
    write_desktop(tmp_path, "foo.desktop", app_body("Foo"))
    write_desktop(tmp_path, "bar.desktop~", app_body("Backup"))
    write_desktop(tmp_path, "baz.Desktop", app_body("Upper"))
    write_desktop(tmp_path, ".desktop", app_body("Bare"))
    write_desktop(tmp_path, "mime.list", "[Default Applications]\n")

    db = AppDB()
    assert scan_directory(db, str(tmp_path)) == 1
    assert db.names() == ["Foo"]


def test_skips_directories_and_symlinks(tmp_path: Path) -> None:
    target = write_desktop(tmp_path, "real.desktop", app_body("Real"))
    (tmp_path / "applications" / "nested.desktop").mkdir()
    write_desktop(tmp_path / "applications" / "nested.desktop", "inner.desktop", app_body("Inner"))
    os.symlink(target, tmp_path / "applications" / "link.desktop")

    db = AppDB()
    scan_directory(db, str(tmp_path))
    assert db.names() == ["Real"]


def test_rejected_files_do_not_stop_scan(tmp_path: Path) -> None:
    write_desktop(tmp_path, "link.desktop", "[Desktop Entry]\nType=Link\nName=Web\n")
    write_desktop(tmp_path, "noheader.desktop", "Type=Application\nName=Nope\n")
    write_desktop(tmp_path, "noname.desktop", "[Desktop Entry]\nType=Application\n")
    write_desktop(tmp_path, "ok.desktop", app_body("Ok", Terminal="maybe"))

    db = AppDB()
    assert scan_directory(db, str(tmp_path)) == 1
    assert db.get("Ok").terminal is False


def test_too_many_keys_skips_only_that_file(tmp_path: Path) -> None:
    write_desktop(tmp_path, "huge.desktop", app_body("Huge", **{f"X-K{i}": str(i) for i in range(10)}))
    write_desktop(tmp_path, "small.desktop", app_body("Small"))

    db = AppDB()
    scan_directory(db, str(tmp_path), max_keys=5)
    assert db.names() == ["Small"]


def test_duplicate_names_first_wins(tmp_path: Path) -> None:
    write_desktop(tmp_path, "a.desktop", app_body("Same", Comment="a"))
    write_desktop(tmp_path, "b.desktop", app_body("Same", Comment="b"))

    db = AppDB()
    assert scan_directory(db, str(tmp_path)) == 1
    assert len(db) == 1


def test_existing_names_take_precedence(tmp_path: Path) -> None:
    write_desktop(tmp_path, "a.desktop", app_body("Foo", Comment="later"))

    db = AppDB()
    db.add(desktop_parser.DesktopEntry(name="Foo"))
    assert scan_directory(db, str(tmp_path)) == 0
    assert db.get("Foo").comment is None


def test_read_error_propagates(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_desktop(tmp_path, "a.desktop", app_body("Foo"))

    def broken_open(*args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(desktop_parser, "open", broken_open, raising=False)

    with pytest.raises(DesktopFileReadError):
        scan_directory(AppDB(), str(tmp_path))


def test_listing_error_raises_scan_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_desktop(tmp_path, "a.desktop", app_body("Foo"))
    monkeypatch.setattr("appdb.core.scanner.os.scandir", lambda path: FailingListing())

    with pytest.raises(DirectoryScanError) as excinfo:
        scan_directory(AppDB(), str(tmp_path))
    assert isinstance(excinfo.value, AppDBError)
    assert excinfo.value.path.endswith("applications")
    assert excinfo.value.reason.errno == 5
