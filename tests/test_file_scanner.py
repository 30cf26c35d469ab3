"""Tests for the library scanner."""

import tempfile
from pathlib import Path

import pytest

from resolve_libpatch.config import LIBRARY_PREFIXES
from resolve_libpatch.errors import FileOperationError
from resolve_libpatch.utils.file_scanner import is_library, match_libraries, scan_libraries


def test_is_library_known_prefixes():
    assert is_library("libglib-2.0.so.0", LIBRARY_PREFIXES)
    assert is_library("libgio-2.0.so.0.6800.4", LIBRARY_PREFIXES)
    assert is_library("libgmodule-2.0.so", LIBRARY_PREFIXES)
    assert is_library("libgobject-2.0.so.0", LIBRARY_PREFIXES)


def test_is_library_prefix_alone_matches():
    assert is_library("libglib", LIBRARY_PREFIXES)


def test_is_library_rejects_others():
    assert not is_library("libavcodec.so.58", LIBRARY_PREFIXES)
    assert not is_library("unrelated.so", LIBRARY_PREFIXES)
    assert not is_library("_disabled", LIBRARY_PREFIXES)
    assert not is_library("xlibglib.so", LIBRARY_PREFIXES)


def test_is_library_case_sensitive():
    assert not is_library("LibGlib-2.0.so.0", LIBRARY_PREFIXES)
    assert not is_library("LIBGIO.so", LIBRARY_PREFIXES)


def test_match_libraries_filters_and_sorts():
    names = ["unrelated.so", "libgobject-2.0.so.0", "libgio-2.0.so.0", "libQt5Core.so.5"]
    assert match_libraries(names, LIBRARY_PREFIXES) == ["libgio-2.0.so.0", "libgobject-2.0.so.0"]


def test_match_libraries_empty():
    assert match_libraries([], LIBRARY_PREFIXES) == []
    assert match_libraries(["a.so", "b.so"], LIBRARY_PREFIXES) == []


def test_scan_with_injected_lister():
    listed = []

    def fake_lister(directory):
        listed.append(directory)
        return ["libglib-2.0.so.0", "libc.so.6", "libgmodule-2.0.so.0"]

    paths = scan_libraries(Path("/opt/resolve/libs"), LIBRARY_PREFIXES, fake_lister)
    assert listed == [Path("/opt/resolve/libs")]
    assert paths == [
        Path("/opt/resolve/libs/libglib-2.0.so.0"),
        Path("/opt/resolve/libs/libgmodule-2.0.so.0"),
    ]


def test_scan_missing_directory_is_empty():
    def missing(directory):
        raise FileNotFoundError(directory)

    assert scan_libraries(Path("/nowhere"), LIBRARY_PREFIXES, missing) == []


def test_scan_finds_libraries_on_disk():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "libglib-2.0.so.0").write_text("glib")
        (root / "unrelated.so").write_text("other")
        (root / "libgio-2.0.so").symlink_to(root / "libglib-2.0.so.0")

        names = [p.name for p in scan_libraries(root, LIBRARY_PREFIXES)]
        assert names == ["libgio-2.0.so", "libglib-2.0.so.0"]


def test_scan_is_not_recursive():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "_disabled").mkdir()
        (root / "_disabled" / "libglib-2.0.so.0").write_text("glib")

        assert scan_libraries(root, LIBRARY_PREFIXES) == []


def test_scan_nonexistent_path_on_disk():
    with tempfile.TemporaryDirectory() as tmpdir:
        assert scan_libraries(Path(tmpdir) / "missing", LIBRARY_PREFIXES) == []


def test_scan_unreadable_directory_raises():
    def denied(directory):
        raise PermissionError(13, "Permission denied", str(directory))

    with pytest.raises(FileOperationError) as excinfo:
        scan_libraries(Path("/opt/resolve/libs"), LIBRARY_PREFIXES, denied)
    assert excinfo.value.details == "Permission denied"
