"""readcon: reader/writer for CON atomistic-structure files.

A CON file is a concatenation of frames; each frame holds a simulation cell,
four free-text header lines and a list of atoms grouped by species.
"""

from __future__ import annotations

from readcon.codecs.con import (
    parse_frame_text,
    parse_whole,
    read_con,
    serialize_frame,
    write_con,
    write_frames,
)
from readcon.core import (
    Atom,
    ConError,
    FormatError,
    Frame,
    MalformedHeader,
    MalformedNumber,
    SpeciesCountMismatch,
    TruncatedFrame,
    UnknownSymbolError,
    atomic_number_to_symbol,
    symbol_to_atomic_number,
)
from readcon.io import FrameIterator, FrameWriter, open_iterator, open_writer

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Atom",
    "Frame",
    "FrameIterator",
    "FrameWriter",
    "open_iterator",
    "open_writer",
    "parse_whole",
    "read_con",
    "write_frames",
    "write_con",
    "parse_frame_text",
    "serialize_frame",
    "atomic_number_to_symbol",
    "symbol_to_atomic_number",
    "ConError",
    "FormatError",
    "MalformedHeader",
    "MalformedNumber",
    "SpeciesCountMismatch",
    "TruncatedFrame",
    "UnknownSymbolError",
]
