"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import readcon` to fail.

To keep the suite robust, we ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Sequence


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared Test Helpers for CON Tests
# =============================================================================


def make_frame_lines(
    species: Sequence[tuple[str, float, Sequence[tuple[float, float, float, int, int]]]],
    *,
    cell: Sequence[float] = (10.0, 10.0, 10.0),
    angles: Sequence[float] = (90.0, 90.0, 90.0),
    prebox: Sequence[str] = ("Random Number Seed", "Time"),
    postbox: Sequence[str] = ("0 0", "218 0 1"),
) -> list[str]:
    """Build the text lines of one CON frame.

    ``species`` is a list of ``(symbol, mass, [(x, y, z, atom_id, fixed), ...])``.
    """
    lines: list[str] = [
        prebox[0],
        prebox[1],
        " ".join(str(v) for v in cell),
        " ".join(str(v) for v in angles),
        postbox[0],
        postbox[1],
        str(len(species)),
        " ".join(str(len(atoms)) for _, _, atoms in species),
        " ".join(str(mass) for _, mass, _ in species),
    ]
    for i, (symbol, _, atoms) in enumerate(species):
        lines.append(symbol)
        lines.append(f"{len(atoms)} {i + 1}")
        for x, y, z, atom_id, fixed in atoms:
            lines.append(f"{x} {y} {z} {atom_id} {fixed}")
    return lines


def water_frame_lines() -> list[str]:
    """Frame 1 of the two-frame fixture: H2O in a 10 A cubic box (16 lines)."""
    return make_frame_lines(
        [
            ("H", 1.008, [(0.0, 0.0, 0.0, 0, 0), (0.757, 0.586, 0.0, 1, 0)]),
            ("O", 15.999, [(0.0, 0.0, 0.1, 2, 1)]),
        ]
    )


def copper_frame_lines() -> list[str]:
    """Frame 2 of the two-frame fixture: two Cu atoms and one H (16 lines)."""
    return make_frame_lines(
        [
            ("Cu", 63.546, [(0.0, 0.0, 0.0, 0, 1), (1.805, 1.805, 0.0, 1, 1)]),
            ("H", 1.008, [(0.9025, 0.9025, 1.5, 2, 0)]),
        ],
        cell=(3.61, 3.61, 12.5),
        angles=(90.0, 90.0, 120.0),
        prebox=("Cu(100) slab", "step 10"),
        postbox=("", "  indented  "),
    )


def make_con_text(*frames: list[str], trailing: str = "") -> str:
    out: list[str] = []
    for f in frames:
        out.extend(f)
    return "\n".join(out) + "\n" + trailing


def two_frame_text() -> str:
    return make_con_text(water_frame_lines(), copper_frame_lines())


def write_text(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def make_atoms(rows: list[dict[str, Any]]) -> tuple[Any, ...]:
    """Build `Atom`s from row dicts (defaults: mass by species, not fixed)."""
    from readcon.core.model import Atom

    return tuple(
        Atom(
            atomic_number=r["atomic_number"],
            x=r.get("x", 0.0),
            y=r.get("y", 0.0),
            z=r.get("z", 0.0),
            atom_id=r.get("atom_id", i),
            mass=r.get("mass", float(r["atomic_number"])),
            is_fixed=r.get("is_fixed", False),
        )
        for i, r in enumerate(rows)
    )
