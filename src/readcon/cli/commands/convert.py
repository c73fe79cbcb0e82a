"""`readcon convert` command.

Rewrites a CON file, optionally thinning the trajectory:

- `--skip N`: drop the first N frames
- `--every K`: then keep every K-th frame

Dropped frames are stepped over with `FrameIterator.forward()`, so their atom
lines are never parsed. Output frames are normalized (species regrouped,
floats in shortest round-trip form).
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from readcon.core.errors import ConError
from readcon.io.iterator import FrameIterator
from readcon.io.writer import FrameWriter

logger = logging.getLogger(__name__)


def register(app: typer.Typer) -> None:
    @app.command("convert")
    def convert(
        in_path: str = typer.Argument(..., help="Input CON file."),
        out_path: str = typer.Argument(..., help="Output CON file (overwritten)."),
        skip: int = typer.Option(0, "--skip", min=0, help="Number of leading frames to drop."),
        every: int = typer.Option(1, "--every", min=1, help="Keep every N-th frame after --skip."),
    ) -> None:
        """Read frames from IN_PATH and write the selected ones to OUT_PATH."""
        src = Path(in_path)
        dst = Path(out_path)
        if src.exists() and dst.exists() and dst.samefile(src):
            raise typer.BadParameter(f"output path is the input file: {dst}")
        logger.info("Converting %s -> %s (skip=%d, every=%d)", src, dst, skip, every)

        try:
            with FrameIterator(src) as it, FrameWriter(dst) as writer:
                it.skip(skip)
                while True:
                    frame = next(it, None)
                    if frame is None:
                        break
                    writer.append_frame(frame)
                    if every > 1 and it.skip(every - 1) < every - 1:
                        break
                written = writer.frames_written
                skipped = it.frames_skipped
        except ConError as e:
            raise typer.BadParameter(f"{src}: {e}") from e
        except OSError as e:
            raise typer.BadParameter(str(e)) from e

        logger.info("Wrote %d frame(s), skipped %d", written, skipped)
        typer.echo(str(dst))
