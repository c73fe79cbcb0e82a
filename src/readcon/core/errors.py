"""Error taxonomy for the CON codec.

All parse-time failures derive from `FormatError` and carry the 1-based line
number (within the stream being read) where the problem was detected. Symbol
lookups fail with `UnknownSymbolError`. I/O failures are plain `OSError`s and
are never wrapped.

Messages are deterministic so tests can assert on them.
"""

from __future__ import annotations

from typing import Optional, Union


class ConError(Exception):
    """Base class for every error raised by readcon."""


class FormatError(ConError, ValueError):
    """A frame could not be parsed."""

    def __init__(self, message: str, *, line: Optional[int] = None):
        self.message = message
        self.line = line
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


class TruncatedFrame(FormatError):
    """End of input was reached partway through a frame."""


class MalformedHeader(FormatError):
    """A structural line has the wrong number of fields."""


class MalformedNumber(FormatError):
    """A field that must be numeric could not be parsed."""


class SpeciesCountMismatch(FormatError):
    """Declared per-species counts disagree with the atom lines present."""


class UnknownSymbolError(ConError, ValueError):
    """An element symbol or atomic number has no entry in the symbol table."""

    def __init__(self, symbol: Union[str, int], *, line: Optional[int] = None):
        self.symbol = symbol
        self.line = line
        if isinstance(symbol, str):
            msg = f"unknown element symbol {symbol!r}"
        else:
            msg = f"no element symbol for atomic number {symbol!r}"
        if line is not None:
            msg = f"line {line}: {msg}"
        super().__init__(msg)
