"""readcon I/O: streaming frame reader and sequential frame writer."""

from __future__ import annotations

from .iterator import FrameIterator, open_iterator
from .writer import FrameWriter, open_writer

__all__ = [
    "FrameIterator",
    "FrameWriter",
    "open_iterator",
    "open_writer",
]
