"""Internal parsing helpers for the CON codec.

Private module for parsing logic; public API is in `con.py`.

One frame is laid out as:

    line 1-2   free text (prebox header)
    line 3     a b c                  (cell lengths)
    line 4     alpha beta gamma       (cell angles, degrees)
    line 5-6   free text (postbox header)
    line 7     K                      (number of species)
    line 8     n_1 ... n_K            (atoms per species)
    line 9     m_1 ... m_K            (mass per species)
    then K times:
        symbol
        count aux                     (aux is ignored)
        count lines of: x y z atom_id fixed_flag

Frames follow each other with no separator.
"""

from __future__ import annotations

from dataclasses import dataclass

from readcon.codecs._con_grammar import (
    LineCursor,
    parse_fixed_flag,
    parse_float,
    parse_floats,
    parse_int,
    parse_ints,
    split_fields,
)
from readcon.core.elements import symbol_to_atomic_number
from readcon.core.errors import (
    MalformedHeader,
    SpeciesCountMismatch,
    TruncatedFrame,
    UnknownSymbolError,
)
from readcon.core.model import AtomSite, Frame, SpeciesBlock

_LEADING_TEXT_LINES = 6


@dataclass(frozen=True)
class _SpeciesHeader:
    """Lines 7-9 of a frame: species count, per-species counts and masses."""

    natm_types: int
    natms_per_type: tuple[int, ...]
    masses_per_type: tuple[float, ...]


def _require_line(cursor: LineCursor, what: str) -> str:
    line = cursor.read()
    if line is None:
        raise TruncatedFrame(f"unexpected end of input while reading {what}", line=cursor.lineno + 1)
    return line


def _parse_species_count(cursor: LineCursor) -> int:
    line = _require_line(cursor, "species count")
    (k,) = parse_ints(line, 1, lineno=cursor.lineno, what="species count")
    if k < 0:
        raise MalformedHeader(f"species count: must be non-negative, got {k}", line=cursor.lineno)
    return k


def _parse_counts(cursor: LineCursor, k: int) -> tuple[int, ...]:
    line = _require_line(cursor, "atoms per species")
    counts = parse_ints(line, k, lineno=cursor.lineno, what="atoms per species")
    for c in counts:
        if c < 0:
            raise MalformedHeader(f"atoms per species: counts must be non-negative, got {c}", line=cursor.lineno)
    return tuple(counts)


def _parse_species_header(cursor: LineCursor) -> _SpeciesHeader:
    k = _parse_species_count(cursor)
    counts = _parse_counts(cursor, k)
    line = _require_line(cursor, "mass per species")
    masses = parse_floats(line, k, lineno=cursor.lineno, what="mass per species")
    return _SpeciesHeader(natm_types=k, natms_per_type=counts, masses_per_type=tuple(masses))


def _parse_block_count(line: str, *, lineno: int, declared: int, species_index: int) -> int:
    """Parse the `count aux` line opening a species block.

    Older writers emit a label such as ``Coordinates of Component 1`` here; the
    declared count from line 8 is used for those.
    """
    toks = line.split()
    if toks and toks[0].lower() == "coordinates":
        return declared
    if len(toks) != 2:
        raise MalformedHeader(
            f"species {species_index + 1} count line: expected 2 fields (count, aux), got {len(toks)}: {line!r}",
            line=lineno,
        )
    count = parse_int(toks[0], lineno=lineno, what=f"species {species_index + 1} count")
    if count != declared:
        raise SpeciesCountMismatch(
            f"species {species_index + 1}: block declares {count} atom(s) but the header declares {declared}",
            line=lineno,
        )
    return count


def _parse_atom_line(line: str, *, lineno: int) -> AtomSite:
    toks = split_fields(line, 5, lineno=lineno, what="atom line (x y z atom_id fixed)")
    x = parse_float(toks[0], lineno=lineno, what="x")
    y = parse_float(toks[1], lineno=lineno, what="y")
    z = parse_float(toks[2], lineno=lineno, what="z")
    atom_id = parse_int(toks[3], lineno=lineno, what="atom_id")
    if atom_id < 0:
        raise MalformedHeader(f"atom_id: must be non-negative, got {atom_id}", line=lineno)
    is_fixed = parse_fixed_flag(toks[4], lineno=lineno)
    return AtomSite(x=x, y=y, z=z, atom_id=atom_id, is_fixed=is_fixed)


def parse_frame(cursor: LineCursor) -> Frame:
    """Consume exactly one frame from ``cursor`` and build a `Frame`.

    The caller is responsible for checking `LineCursor.at_end()` first; here,
    running out of input anywhere is a `TruncatedFrame`.
    """
    pre = (_require_line(cursor, "prebox header"), _require_line(cursor, "prebox header"))

    line = _require_line(cursor, "cell lengths")
    cell = parse_floats(line, 3, lineno=cursor.lineno, what="cell lengths")
    if any(v < 0 for v in cell):
        raise MalformedHeader(f"cell lengths: must be non-negative, got {cell}", line=cursor.lineno)

    line = _require_line(cursor, "cell angles")
    angles = parse_floats(line, 3, lineno=cursor.lineno, what="cell angles")

    post = (_require_line(cursor, "postbox header"), _require_line(cursor, "postbox header"))

    header = _parse_species_header(cursor)

    blocks: list[SpeciesBlock] = []
    seen: set[int] = set()
    consumed = 0
    for i in range(header.natm_types):
        line = _require_line(cursor, f"species {i + 1} symbol")
        (symbol,) = split_fields(line, 1, lineno=cursor.lineno, what=f"species {i + 1} symbol")
        try:
            atomic_number = symbol_to_atomic_number(symbol)
        except UnknownSymbolError:
            raise UnknownSymbolError(symbol, line=cursor.lineno) from None

        # One block per species; a repeat could not be written back unchanged.
        if atomic_number in seen:
            raise MalformedHeader(f"species {symbol!r} appears in more than one block", line=cursor.lineno)
        seen.add(atomic_number)
        mass = header.masses_per_type[i]

        line = _require_line(cursor, f"species {i + 1} count line")
        count = _parse_block_count(
            line,
            lineno=cursor.lineno,
            declared=header.natms_per_type[i],
            species_index=i,
        )

        sites: list[AtomSite] = []
        for _ in range(count):
            line = _require_line(cursor, f"species {i + 1} atom line")
            sites.append(_parse_atom_line(line, lineno=cursor.lineno))
        consumed += len(sites)
        blocks.append(SpeciesBlock(atomic_number=atomic_number, mass=mass, sites=tuple(sites)))

    # Holds whenever every block count matched line 8; kept as the frame-level check.
    expected = sum(header.natms_per_type)
    if consumed != expected:
        raise SpeciesCountMismatch(
            f"header declares {expected} atom(s) in total but {consumed} atom line(s) were read",
            line=cursor.lineno,
        )

    return Frame.from_species_blocks(
        prebox_header=pre,
        cell=cell,
        angles=angles,
        postbox_header=post,
        blocks=blocks,
    )


def skip_frame(cursor: LineCursor) -> None:
    """Advance ``cursor`` past one frame, parsing only the species header.

    Lines 1-6, 9, the per-species symbol/count lines and every atom line are
    consumed without being tokenized.
    """
    for _ in range(_LEADING_TEXT_LINES):
        _require_line(cursor, "frame header")
    k = _parse_species_count(cursor)
    counts = _parse_counts(cursor, k)
    _require_line(cursor, "mass per species")

    remaining = 2 * k + sum(counts)
    for _ in range(remaining):
        _require_line(cursor, "frame body")
