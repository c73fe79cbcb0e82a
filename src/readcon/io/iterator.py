"""Streaming, frame-by-frame reader for CON trajectories.

`FrameIterator` pulls lines lazily from its source, so arbitrarily long
trajectories are never loaded wholesale. Besides normal iteration it offers
`forward()`, which skips a frame by reading only its species header and then
discarding the right number of raw lines.

Terminal conditions are sticky:

- end of input: every later `next()` raises `StopIteration` and every later
  `forward()` returns False;
- a malformed frame: the error is latched and re-raised by every later
  `next()`/`forward()` (the cursor can no longer be trusted to sit on a frame
  boundary).
"""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import Any, Iterator, Optional, TextIO, Union

from readcon.codecs._con_grammar import LineCursor
from readcon.codecs._con_parser import parse_frame, skip_frame
from readcon.core.errors import ConError
from readcon.core.model import Frame

logger = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", TextIO]


class FrameIterator(Iterator[Frame]):
    """Sequential cursor over the frames of a CON stream.

    Args:
        source: A file path, or an open text stream. Streams passed in are
            not closed by the iterator.
        encoding: Text encoding used when ``source`` is a path.

    Raises:
        OSError: if ``source`` is a path that cannot be opened.
    """

    def __init__(self, source: Source, *, encoding: str = "utf-8"):
        if isinstance(source, (str, os.PathLike)):
            path = Path(source)
            self._stream: Any = path.open("r", encoding=encoding)
            self._owns_stream = True
            self.name = str(path)
        elif hasattr(source, "read"):
            self._stream = source
            self._owns_stream = False
            self.name = str(getattr(source, "name", "<stream>"))
        else:
            raise TypeError(f"FrameIterator: expected a path or text stream, got {type(source).__name__}")

        self._cursor = LineCursor(self._stream)
        self._error: Optional[ConError] = None
        self._exhausted = False
        self._closed = False
        self.frames_read = 0
        self.frames_skipped = 0
        logger.debug("opened CON source %s", self.name)

    @classmethod
    def from_text(cls, text: str) -> "FrameIterator":
        """Iterate over the frames of an in-memory CON document."""
        if not isinstance(text, str):
            raise TypeError(f"FrameIterator.from_text: expected str, got {type(text).__name__}")
        return cls(io.StringIO(text))

    # ---- state ----

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def exhausted(self) -> bool:
        """True once no further frames can be produced (end of input, error or close)."""
        return self._exhausted or self._error is not None

    @property
    def error(self) -> Optional[ConError]:
        """The latched parse error, if any."""
        return self._error

    def _latch(self, exc: ConError) -> None:
        self._error = exc
        logger.debug("%s: iteration stopped after %d frame(s): %s", self.name, self.frames_read + self.frames_skipped, exc)

    def _at_end(self) -> bool:
        if self._exhausted:
            return True
        if self._cursor.at_end():
            self._exhausted = True
            logger.debug(
                "%s: end of input (%d read, %d skipped)", self.name, self.frames_read, self.frames_skipped
            )
            return True
        return False

    # ---- iteration ----

    def __iter__(self) -> "FrameIterator":
        return self

    def __next__(self) -> Frame:
        if self._error is not None:
            raise self._error
        if self._at_end():
            raise StopIteration
        try:
            frame = parse_frame(self._cursor)
        except ConError as e:
            self._latch(e)
            raise
        self.frames_read += 1
        return frame

    def forward(self) -> bool:
        """Skip the next frame without building its atoms.

        Returns:
            True if a frame was skipped, False if no frame was left.

        Raises:
            FormatError: if the frame's species header is malformed or the
                input ends partway through the frame (latched, like `next`).
        """
        if self._error is not None:
            raise self._error
        if self._at_end():
            return False
        try:
            skip_frame(self._cursor)
        except ConError as e:
            self._latch(e)
            raise
        self.frames_skipped += 1
        return True

    def skip(self, n: int) -> int:
        """Forward over up to ``n`` frames; returns how many were skipped."""
        if n < 0:
            raise ValueError(f"skip: n must be non-negative, got {n}")
        skipped = 0
        while skipped < n and self.forward():
            skipped += 1
        return skipped

    # ---- resource handling ----

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._exhausted = True
        if self._owns_stream:
            self._stream.close()
        logger.debug("closed CON source %s", self.name)

    def __enter__(self) -> "FrameIterator":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def open_iterator(source: Source, *, encoding: str = "utf-8") -> FrameIterator:
    """Open a CON file (or wrap a text stream) for frame-by-frame reading."""
    return FrameIterator(source, encoding=encoding)
