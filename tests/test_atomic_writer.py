from __future__ import annotations

import gzip
import os
import stat
from pathlib import Path
from typing import BinaryIO

import pytest

from adapters.atomic_writer import bytes_producer, overwrite_or_warn, text_producer
from core.errors import ExportWriteError


def _leftovers(directory: Path) -> list[str]:
    return sorted(p.name for p in directory.iterdir() if p.name.endswith(".tmp"))


def test_writes_new_file(tmp_path: Path) -> None:
    path = tmp_path / "out" / "plan.xml"

    assert overwrite_or_warn(path, text_producer("<plan />\n")) is True

    assert path.read_text(encoding="utf-8") == "<plan />\n"
    assert _leftovers(path.parent) == []


def test_producer_failure_keeps_original(tmp_path: Path) -> None:
    path = tmp_path / "plan.xml"
    path.write_bytes(b"original")

    def failing(sink: BinaryIO) -> bool:
        sink.write(b"partial")
        return False

    assert overwrite_or_warn(path, failing) is False
    assert path.read_bytes() == b"original"
    assert _leftovers(tmp_path) == []


def test_producer_failure_leaves_no_file(tmp_path: Path) -> None:
    path = tmp_path / "new.xml"
    assert overwrite_or_warn(path, lambda sink: False) is False
    assert not path.exists()


def test_io_error_is_reported_with_cause(tmp_path: Path) -> None:
    path = tmp_path / "plan.xml"
    path.write_bytes(b"original")

    def broken(sink: BinaryIO) -> bool:
        sink.write(b"half")
        raise OSError("disk full")

    with pytest.raises(ExportWriteError) as excinfo:
        overwrite_or_warn(path, broken)

    assert "disk full" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, OSError)
    assert excinfo.value.path == path
    assert path.read_bytes() == b"original"
    assert _leftovers(tmp_path) == []


def test_other_errors_propagate_and_keep_original(tmp_path: Path) -> None:
    path = tmp_path / "plan.xml"
    path.write_bytes(b"original")

    def buggy(sink: BinaryIO) -> bool:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        overwrite_or_warn(path, buggy)
    assert path.read_bytes() == b"original"
    assert _leftovers(tmp_path) == []


def test_declined_overwrite_never_calls_producer(tmp_path: Path) -> None:
    path = tmp_path / "plan.emp"
    path.write_bytes(b"original")
    calls: list[str] = []

    def producer(sink: BinaryIO) -> bool:
        calls.append("called")
        return True

    assert overwrite_or_warn(path, producer, confirm=lambda p: False) is False
    assert calls == []
    assert path.read_bytes() == b"original"


def test_confirm_only_asked_when_destination_exists(tmp_path: Path) -> None:
    asked: list[Path] = []

    def confirm(p: Path) -> bool:
        asked.append(p)
        return True

    path = tmp_path / "plan.xml"
    overwrite_or_warn(path, text_producer("one"), confirm=confirm)
    assert asked == []

    overwrite_or_warn(path, text_producer("two"), confirm=confirm)
    assert asked == [path]
    assert path.read_text(encoding="utf-8") == "two"


def test_compressed_text_is_a_complete_gzip_stream(tmp_path: Path) -> None:
    path = tmp_path / "plan.emp"
    content = "<plan name=\"Ünïcode\" />\n"

    overwrite_or_warn(path, text_producer(content, compress=True))

    assert gzip.decompress(path.read_bytes()).decode("utf-8") == content


def test_bytes_producer(tmp_path: Path) -> None:
    path = tmp_path / "shot.png"
    overwrite_or_warn(path, bytes_producer(b"\x89PNG\r\n\x1a\nrest"))
    assert path.read_bytes() == b"\x89PNG\r\n\x1a\nrest"


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_overwrite_keeps_destination_mode(tmp_path: Path) -> None:
    path = tmp_path / "plan.xml"
    path.write_bytes(b"old")
    path.chmod(0o644)

    overwrite_or_warn(path, bytes_producer(b"new"))

    assert stat.S_IMODE(path.stat().st_mode) == 0o644
    assert path.read_bytes() == b"new"


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_new_file_follows_umask(tmp_path: Path) -> None:
    path = tmp_path / "plan.xml"
    umask = os.umask(0o022)
    try:
        overwrite_or_warn(path, bytes_producer(b"new"))
    finally:
        os.umask(umask)

    assert stat.S_IMODE(path.stat().st_mode) == 0o644
