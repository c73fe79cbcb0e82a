"""readcon core: data model, symbol table, species grouping and errors.

This package is intentionally standalone and must not import codecs/io/cli
to avoid circular dependencies.
"""

from __future__ import annotations

from .elements import atomic_number_to_symbol, is_known_symbol, symbol_table, symbol_to_atomic_number
from .errors import (
    ConError,
    FormatError,
    MalformedHeader,
    MalformedNumber,
    SpeciesCountMismatch,
    TruncatedFrame,
    UnknownSymbolError,
)
from .model import Atom, AtomSite, Frame, FrameSnapshot, HeaderCopy, SpeciesBlock
from .species import flatten, group, is_species_contiguous, species_counts

__all__ = [
    "Atom",
    "AtomSite",
    "Frame",
    "FrameSnapshot",
    "HeaderCopy",
    "SpeciesBlock",
    "flatten",
    "group",
    "is_species_contiguous",
    "species_counts",
    "atomic_number_to_symbol",
    "is_known_symbol",
    "symbol_table",
    "symbol_to_atomic_number",
    "ConError",
    "FormatError",
    "MalformedHeader",
    "MalformedNumber",
    "SpeciesCountMismatch",
    "TruncatedFrame",
    "UnknownSymbolError",
]
