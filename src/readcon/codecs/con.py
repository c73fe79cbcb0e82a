"""CON codec (import + export).

Single-frame helpers work on in-memory text:

- `parse_frame_text(text)`: exactly one frame -> `Frame`
- `serialize_frame(frame)`: `Frame` -> text (grouped by species)

File-level helpers read/write whole trajectories and are thin wrappers over
`readcon.io.FrameIterator` / `readcon.io.FrameWriter`:

- `read_con(path)` / `parse_whole(path)`
- `write_con(path, frames)` / `write_frames(path, frames)`

Round-trip guarantee: ``parse_frame_text(serialize_frame(f)) == f`` for every
frame whose species are contiguous (always the case for parsed frames). Floats
are written in shortest round-trip form, so values come back exactly.
"""

from __future__ import annotations

import io
import os
from typing import Iterable, Union

from readcon.codecs._con_grammar import LineCursor
from readcon.codecs._con_parser import parse_frame
from readcon.codecs._con_writer import format_frame
from readcon.core.errors import MalformedHeader, TruncatedFrame
from readcon.core.model import Frame
from readcon.io.iterator import FrameIterator
from readcon.io.writer import FrameWriter

PathLike = Union[str, "os.PathLike[str]"]


# ----------------------------
# Public API
# ----------------------------


def parse_frame_text(text: str) -> Frame:
    """Parse text holding exactly one CON frame.

    Raises:
        TruncatedFrame: if the text is empty or ends partway through the frame.
        MalformedHeader: if non-blank content follows the frame.
        FormatError: any other parse failure (with the offending line number).
    """
    if not isinstance(text, str):
        raise TypeError(f"parse_frame_text: expected str, got {type(text).__name__}")

    cursor = LineCursor(io.StringIO(text))
    if cursor.at_end():
        raise TruncatedFrame("no frame found in input", line=1)
    frame = parse_frame(cursor)
    if not cursor.at_end():
        raise MalformedHeader("unexpected content after the end of the frame", line=cursor.lineno + 1)
    return frame


def serialize_frame(frame: Frame) -> str:
    """Serialize one frame to CON text (newline-terminated).

    Raises:
        UnknownSymbolError: if an atomic number has no element symbol.
        ValueError: if atoms of one species carry different masses.
    """
    if not isinstance(frame, Frame):
        raise TypeError(f"serialize_frame: expected Frame, got {type(frame).__name__}")
    return format_frame(frame)


def serialize_frames(frames: Iterable[Frame]) -> str:
    return "".join(serialize_frame(f) for f in frames)


def parse_text(text: str) -> list[Frame]:
    """Parse every frame in an in-memory CON document."""
    return list(FrameIterator.from_text(text))


def parse_whole(path: PathLike, *, encoding: str = "utf-8") -> list[Frame]:
    """Read every frame of a CON file.

    Raises:
        OSError: if the file cannot be opened or read.
        FormatError: on the first malformed frame (no frames are returned).
    """
    with FrameIterator(path, encoding=encoding) as it:
        return list(it)


def write_frames(path: PathLike, frames: Iterable[Frame], *, encoding: str = "utf-8") -> int:
    """Write frames to ``path`` (truncating it). Returns the number of frames written."""
    with FrameWriter(path, encoding=encoding) as writer:
        writer.append(frames)
        return writer.frames_written


read_con = parse_whole
write_con = write_frames
