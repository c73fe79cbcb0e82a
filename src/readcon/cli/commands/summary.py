"""`readcon summary` command.

Reads every frame of a CON file and prints a short summary of the last one:
cell, angles, species with counts and masses, and the total atom count.

Malformed input:
- default: stop at the first malformed frame, print a note on stderr and
  summarize the frames read before it (exit code 1 if there were none)
- `--strict`: the first malformed frame is a hard error (exit code 2)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from readcon.core.elements import atomic_number_to_symbol
from readcon.core.errors import ConError
from readcon.core.model import Frame
from readcon.io.iterator import FrameIterator

logger = logging.getLogger(__name__)


def _fmt_triple(values: tuple[float, float, float]) -> str:
    return " ".join(f"{v:.6f}" for v in values)


def summarize_frame(frame: Frame) -> list[str]:
    """Summary lines for one frame (used for the last frame of a file)."""
    blocks = frame.species_blocks
    species = ", ".join(
        f"{atomic_number_to_symbol(b.atomic_number)} x{b.count} (mass {b.mass:g})" for b in blocks
    )
    lines = [
        f"cell: {_fmt_triple(frame.cell)}",
        f"angles: {_fmt_triple(frame.angles)}",
        f"species: {len(blocks)}",
        f"  {species}" if species else "  (none)",
        f"atoms: {frame.num_atoms}",
    ]
    if frame.atoms:
        last = frame.atoms[-1]
        lines.append(
            f"last atom: id={last.atom_id} Z={last.atomic_number} "
            f"pos=({last.x:.6f}, {last.y:.6f}, {last.z:.6f}) fixed={int(last.is_fixed)}"
        )
    return lines


def register(app: typer.Typer) -> None:
    @app.command("summary")
    def summary(
        con_path: str = typer.Argument(..., help="Path to a CON file."),
        strict: bool = typer.Option(False, "--strict", help="Fail on the first malformed frame."),
    ) -> None:
        """Summarize the frames of a CON file."""
        p = Path(con_path)
        logger.info("Reading %s", p)

        count = 0
        last: Optional[Frame] = None
        try:
            with FrameIterator(p) as it:
                try:
                    for frame in it:
                        count += 1
                        last = frame
                except ConError as e:
                    if strict:
                        raise typer.BadParameter(f"{p}: {e}") from e
                    typer.echo(f"note: stopped at a malformed frame: {e}", err=True)
        except OSError as e:
            raise typer.BadParameter(f"cannot read {p}: {e}") from e

        if last is None:
            typer.echo(f"error: no valid frames found in {p}", err=True)
            raise typer.Exit(code=1)

        logger.info("Parsed %d frame(s)", count)
        typer.echo(f"frames: {count}")
        for line in summarize_frame(last):
            typer.echo(line)
