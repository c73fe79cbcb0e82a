"""Sequential CON frame writer.

Opening a `FrameWriter` on a path creates (or truncates) the file right away,
whether or not any frame is ever appended. Frames are appended in order; each
frame is fully serialized before any of its text is written, but a failure
partway through a multi-frame `append` leaves the frames already written on
the destination (there is no rollback).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Iterable, TextIO, Union

from readcon.codecs._con_writer import format_frame
from readcon.core.model import Frame

logger = logging.getLogger(__name__)

Destination = Union[str, "os.PathLike[str]", TextIO]


class FrameWriter:
    """Append CON frames to a file or text stream.

    Args:
        destination: A file path (created/truncated immediately; parent
            directories are created), or an open text stream, which is
            flushed but not closed by the writer.
        encoding: Text encoding used when ``destination`` is a path.

    Raises:
        OSError: if the path cannot be opened for writing.
    """

    def __init__(self, destination: Destination, *, encoding: str = "utf-8"):
        if isinstance(destination, (str, os.PathLike)):
            path = Path(destination)
            path.parent.mkdir(parents=True, exist_ok=True)
            # newline="" prevents Python from translating newlines on write
            self._stream: Any = path.open("w", encoding=encoding, newline="")
            self._owns_stream = True
            self.name = str(path)
        elif hasattr(destination, "write"):
            self._stream = destination
            self._owns_stream = False
            self.name = str(getattr(destination, "name", "<stream>"))
        else:
            raise TypeError(f"FrameWriter: expected a path or text stream, got {type(destination).__name__}")

        self._closed = False
        self.frames_written = 0
        logger.debug("opened CON destination %s", self.name)

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError(f"FrameWriter: {self.name} is closed")

    def append(self, frames: Iterable[Frame]) -> None:
        """Serialize and write ``frames`` in order.

        An empty iterable writes nothing.

        Raises:
            UnknownSymbolError: if a frame holds an atomic number with no symbol.
            OSError: on write failure.
            ValueError: if the writer is closed.
        """
        self._check_open()
        if isinstance(frames, Frame):
            raise TypeError("FrameWriter.append: expected an iterable of frames; use append_frame() for one")
        n = 0
        for frame in frames:
            if not isinstance(frame, Frame):
                raise TypeError(f"FrameWriter.append: expected Frame, got {type(frame).__name__}")
            self._stream.write(format_frame(frame))
            self.frames_written += 1
            n += 1
        if n:
            logger.debug("%s: wrote %d frame(s) (%d total)", self.name, n, self.frames_written)

    def append_frame(self, frame: Frame) -> None:
        self.append((frame,))

    def flush(self) -> None:
        self._check_open()
        self._stream.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._stream.flush()
        finally:
            if self._owns_stream:
                self._stream.close()
        logger.debug("closed CON destination %s (%d frame(s))", self.name, self.frames_written)

    def __enter__(self) -> "FrameWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def open_writer(destination: Destination, *, encoding: str = "utf-8") -> FrameWriter:
    """Open a CON file (or wrap a text stream) for writing frames."""
    return FrameWriter(destination, encoding=encoding)
