"""Internal line-level helpers for the CON codec.

Private module: a line cursor with line numbers and lookahead, plus stateless
field tokenizers/formatters. Public API is in `con.py`.
"""

from __future__ import annotations

import re
from collections import deque
from typing import Iterable, Iterator, Optional

from readcon.core.errors import MalformedHeader, MalformedNumber

_FLOAT_RE = re.compile(r"^[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)$", re.IGNORECASE)
_INT_RE = re.compile(r"^[+-]?\d+$")


# ----------------------------
# Line cursor
# ----------------------------


def _strip_terminator(raw: str) -> str:
    if raw.endswith("\n"):
        raw = raw[:-1]
    if raw.endswith("\r"):
        raw = raw[:-1]
    return raw


class LineCursor:
    """Sequential reader over text lines with 1-based line numbers.

    Lines are pulled lazily from the underlying iterable. Lookahead lines are
    buffered and handed out again in order, so peeking never loses input.
    """

    def __init__(self, lines: Iterable[str]):
        self._source: Iterator[str] = iter(lines)
        self._pending: deque[tuple[int, str]] = deque()
        self._pulled = 0
        self.lineno = 0

    def _pull(self) -> Optional[tuple[int, str]]:
        if self._pending:
            return self._pending.popleft()
        raw = next(self._source, None)
        if raw is None:
            return None
        self._pulled += 1
        return (self._pulled, _strip_terminator(raw))

    def read(self) -> Optional[str]:
        """Return the next line without its terminator, or None at end of input."""
        item = self._pull()
        if item is None:
            return None
        self.lineno = item[0]
        return item[1]

    def at_end(self) -> bool:
        """True if only whitespace-only lines (or nothing) remain."""
        seen: list[tuple[int, str]] = []
        try:
            while True:
                item = self._pull()
                if item is None:
                    return True
                seen.append(item)
                if item[1].strip():
                    return False
        finally:
            self._pending.extendleft(reversed(seen))


# ----------------------------
# Field tokenizers
# ----------------------------


def split_fields(line: str, n: int, *, lineno: int, what: str) -> list[str]:
    toks = line.split()
    if len(toks) != n:
        raise MalformedHeader(f"{what}: expected {n} field(s), got {len(toks)}: {line!r}", line=lineno)
    return toks


def parse_float(token: str, *, lineno: int, what: str) -> float:
    if not _FLOAT_RE.match(token):
        raise MalformedNumber(f"{what}: not a real number: {token!r}", line=lineno)
    return float(token)


def parse_int(token: str, *, lineno: int, what: str) -> int:
    if not _INT_RE.match(token):
        raise MalformedNumber(f"{what}: not an integer: {token!r}", line=lineno)
    return int(token)


def parse_floats(line: str, n: int, *, lineno: int, what: str) -> list[float]:
    return [parse_float(t, lineno=lineno, what=what) for t in split_fields(line, n, lineno=lineno, what=what)]


def parse_ints(line: str, n: int, *, lineno: int, what: str) -> list[int]:
    return [parse_int(t, lineno=lineno, what=what) for t in split_fields(line, n, lineno=lineno, what=what)]


def parse_fixed_flag(token: str, *, lineno: int) -> bool:
    """Parse the constraint column: ``0``/``1`` (``0.0``/``1.0`` also accepted)."""
    if token == "0":
        return False
    if token == "1":
        return True
    if _FLOAT_RE.match(token):
        value = float(token)
        if value == 0.0:
            return False
        if value == 1.0:
            return True
    raise MalformedNumber(f"fixed flag: expected 0 or 1, got {token!r}", line=lineno)


# ----------------------------
# Formatting
# ----------------------------


def format_float(x: float) -> str:
    """Shortest text that parses back to exactly the same float."""
    return repr(float(x))


def format_row(values: Iterable[object]) -> str:
    parts: list[str] = []
    for v in values:
        if isinstance(v, bool):
            parts.append("1" if v else "0")
        elif isinstance(v, float):
            parts.append(format_float(v))
        else:
            parts.append(str(v))
    return " ".join(parts)
