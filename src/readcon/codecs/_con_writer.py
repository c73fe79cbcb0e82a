"""Internal writer helpers for the CON codec.

This module contains the export/formatting logic for CON frames. Atoms are
regrouped by species (first-occurrence order) before being written, since the
file grammar only expresses one contiguous block per species.

This is a private module; public API is in `con.py`.
"""

from __future__ import annotations

from readcon.codecs._con_grammar import format_row
from readcon.core.elements import atomic_number_to_symbol
from readcon.core.model import Frame, SpeciesBlock
from readcon.core.species import group


def _format_species_block(block: SpeciesBlock, *, symbol: str, index: int) -> list[str]:
    """Format one species block: symbol line, ``count aux`` line, atom lines.

    The auxiliary field is the 1-based component index.
    """
    lines: list[str] = [symbol, f"{block.count} {index}"]
    for site in block.sites:
        lines.append(format_row((site.x, site.y, site.z, site.atom_id, site.is_fixed)))
    return lines


def format_frame_lines(frame: Frame) -> list[str]:
    """Format a frame as text lines (no terminators).

    Raises:
        UnknownSymbolError: if an atomic number has no element symbol.
    """
    blocks = group(frame.atoms)
    # Resolve every symbol before formatting so failures leave nothing half-built.
    symbols = [atomic_number_to_symbol(b.atomic_number) for b in blocks]

    lines: list[str] = [
        frame.prebox_header[0],
        frame.prebox_header[1],
        format_row(frame.cell),
        format_row(frame.angles),
        frame.postbox_header[0],
        frame.postbox_header[1],
        str(len(blocks)),
        format_row(b.count for b in blocks),
        format_row(b.mass for b in blocks),
    ]
    for i, (block, symbol) in enumerate(zip(blocks, symbols)):
        lines.extend(_format_species_block(block, symbol=symbol, index=i + 1))
    return lines


def format_frame(frame: Frame) -> str:
    return "\n".join(format_frame_lines(frame)) + "\n"
