from __future__ import annotations

import io
from pathlib import Path

import pytest
from conftest import make_atoms, two_frame_text, write_text

from readcon.codecs.con import parse_text, parse_whole, serialize_frame, write_frames
from readcon.core.errors import UnknownSymbolError
from readcon.core.model import Frame
from readcon.io.writer import FrameWriter, open_writer


def _frames() -> list[Frame]:
    return parse_text(two_frame_text())


def _bad_frame() -> Frame:
    return Frame(
        prebox_header=("bad", "frame"),
        cell=(1, 1, 1),
        angles=(90, 90, 90),
        postbox_header=("", ""),
        atoms=make_atoms([{"atomic_number": 200, "mass": 1.0}]),
    )


def test_write_then_read_roundtrip(tmp_path: Path) -> None:
    frames = _frames()
    out = tmp_path / "out.con"
    with open_writer(out) as writer:
        writer.append(frames)
        assert writer.frames_written == 2

    assert parse_whole(out) == frames


def test_scenario_water_species_order_survives_write(tmp_path: Path) -> None:
    water = _frames()[0]
    out = tmp_path / "water.con"
    write_frames(out, [water])

    lines = out.read_text(encoding="utf-8").splitlines()
    symbol_lines = [lines[9], lines[13]]
    assert symbol_lines == ["H", "O"]

    (back,) = parse_whole(out)
    assert [a.atomic_number for a in back.atoms] == [1, 1, 8]
    assert back.atoms == water.atoms


def test_open_truncates_even_without_append(tmp_path: Path) -> None:
    out = write_text(tmp_path / "existing.con", two_frame_text())
    with FrameWriter(out):
        pass
    assert out.exists()
    assert out.read_text(encoding="utf-8") == ""


def test_append_empty_writes_nothing(tmp_path: Path) -> None:
    out = tmp_path / "empty.con"
    with FrameWriter(out) as writer:
        writer.append([])
        assert writer.frames_written == 0
    assert out.read_bytes() == b""
    assert parse_whole(out) == []


def test_append_empty_performs_no_stream_io() -> None:
    class NoWrite(io.StringIO):
        def write(self, s: str) -> int:  # pragma: no cover (must not be called)
            raise AssertionError("write() called")

    stream = NoWrite()
    writer = FrameWriter(stream)
    writer.append([])
    writer.append(iter(()))


def test_sequential_appends_concatenate(tmp_path: Path) -> None:
    f1, f2 = _frames()
    out = tmp_path / "seq.con"
    with FrameWriter(out) as writer:
        writer.append_frame(f1)
        writer.append([f2, f1])
    assert parse_whole(out) == [f1, f2, f1]


def test_failed_append_keeps_earlier_frames(tmp_path: Path) -> None:
    f1, f2 = _frames()
    out = tmp_path / "partial.con"
    with FrameWriter(out) as writer:
        with pytest.raises(UnknownSymbolError):
            writer.append([f1, _bad_frame(), f2])
        assert writer.frames_written == 1

    # The frame before the failure is on disk; nothing of the bad frame is.
    assert out.read_text(encoding="utf-8") == serialize_frame(f1)
    assert parse_whole(out) == [f1]


def test_write_to_stream_is_flushed_not_closed() -> None:
    stream = io.StringIO()
    with FrameWriter(stream) as writer:
        writer.append(_frames())
    assert not stream.closed
    assert parse_text(stream.getvalue()) == _frames()


def test_closed_writer_rejects_appends(tmp_path: Path) -> None:
    writer = FrameWriter(tmp_path / "c.con")
    writer.close()
    writer.close()
    assert writer.closed
    with pytest.raises(ValueError, match="closed"):
        writer.append([])


def test_creates_parent_directories(tmp_path: Path) -> None:
    out = tmp_path / "nested" / "dir" / "out.con"
    assert write_frames(out, _frames()) == 2
    assert len(parse_whole(out)) == 2


def test_unwritable_destination_raises_os_error(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        FrameWriter(tmp_path)


def test_append_rejects_single_frame_and_non_frames(tmp_path: Path) -> None:
    with FrameWriter(io.StringIO()) as writer:
        with pytest.raises(TypeError, match="append_frame"):
            writer.append(_frames()[0])  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            writer.append(["not a frame"])  # type: ignore[list-item]
