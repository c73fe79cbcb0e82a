"""Core data model for CON frames.

- `Atom`: one atom as exposed to callers (species data attached).
- `AtomSite` / `SpeciesBlock`: the grouped, on-disk view of a frame's atoms.
- `Frame`: one immutable snapshot (headers, cell, angles, ordered atoms).

All values are frozen dataclasses. Operations that "modify" a frame return a
new `Frame`.

This module must not import codecs/io/cli.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import cached_property
from typing import TYPE_CHECKING, Any, Iterable, NamedTuple, Sequence

if TYPE_CHECKING:  # pragma: no cover
    import numpy as np
    import pandas as pd


HEADER_SECTIONS = ("pre", "post")


def _as_int(value: Any, *, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{where}: expected int, got {type(value).__name__}")
    return int(value)


def _as_triple(value: Any, *, where: str) -> tuple[float, float, float]:
    items = tuple(value)
    if len(items) != 3:
        raise ValueError(f"{where}: expected 3 values, got {len(items)}")
    return (float(items[0]), float(items[1]), float(items[2]))


def _as_header_pair(value: Any, *, where: str) -> tuple[str, str]:
    if isinstance(value, str):
        raise ValueError(f"{where}: expected a pair of strings, got str")
    items = tuple(value)
    if len(items) != 2:
        raise ValueError(f"{where}: expected 2 lines, got {len(items)}")
    for i, s in enumerate(items):
        if not isinstance(s, str):
            raise ValueError(f"{where}[{i}]: expected str, got {type(s).__name__}")
        if "\n" in s or "\r" in s:
            raise ValueError(f"{where}[{i}]: header lines must not contain newlines")
    return (items[0], items[1])


@dataclass(frozen=True)
class Atom:
    atomic_number: int
    x: float
    y: float
    z: float
    atom_id: int
    mass: float
    is_fixed: bool = False

    def __post_init__(self) -> None:
        n = _as_int(self.atomic_number, where="Atom.atomic_number")
        if n <= 0:
            raise ValueError(f"Atom.atomic_number: must be positive, got {n}")
        aid = _as_int(self.atom_id, where="Atom.atom_id")
        if aid < 0:
            raise ValueError(f"Atom.atom_id: must be non-negative, got {aid}")
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))
        object.__setattr__(self, "mass", float(self.mass))
        object.__setattr__(self, "is_fixed", bool(self.is_fixed))

    @property
    def position(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class AtomSite:
    """One atom line of a species block: position, id and constraint flag."""

    x: float
    y: float
    z: float
    atom_id: int
    is_fixed: bool = False

    def __post_init__(self) -> None:
        aid = _as_int(self.atom_id, where="AtomSite.atom_id")
        if aid < 0:
            raise ValueError(f"AtomSite.atom_id: must be non-negative, got {aid}")
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))
        object.__setattr__(self, "is_fixed", bool(self.is_fixed))


@dataclass(frozen=True)
class SpeciesBlock:
    """A contiguous run of atoms sharing one atomic number and mass."""

    atomic_number: int
    mass: float
    sites: tuple[AtomSite, ...] = ()

    def __post_init__(self) -> None:
        n = _as_int(self.atomic_number, where="SpeciesBlock.atomic_number")
        if n <= 0:
            raise ValueError(f"SpeciesBlock.atomic_number: must be positive, got {n}")
        object.__setattr__(self, "mass", float(self.mass))
        sites = tuple(self.sites)
        for i, s in enumerate(sites):
            if not isinstance(s, AtomSite):
                raise ValueError(f"SpeciesBlock.sites[{i}]: expected AtomSite, got {type(s).__name__}")
        object.__setattr__(self, "sites", sites)

    @property
    def count(self) -> int:
        return len(self.sites)


class HeaderCopy(NamedTuple):
    """Outcome of a bounded header-line copy."""

    written: int
    truncated: bool


@dataclass(frozen=True)
class FrameSnapshot:
    """Flat, read-only array view of a frame.

    Every array has its writeable flag cleared; copy before modifying.
    """

    cell: "np.ndarray"
    angles: "np.ndarray"
    atomic_numbers: "np.ndarray"
    positions: "np.ndarray"
    atom_ids: "np.ndarray"
    masses: "np.ndarray"
    is_fixed: "np.ndarray"

    @property
    def num_atoms(self) -> int:
        return int(self.atomic_numbers.shape[0])


@dataclass(frozen=True)
class Frame:
    """One simulation snapshot.

    Attributes:
        prebox_header: Two free-text lines preceding the cell, kept verbatim.
        cell: Box lengths ``(a, b, c)``; non-negative.
        angles: Box angles ``(alpha, beta, gamma)`` in degrees.
        postbox_header: Two free-text lines following the angles, kept verbatim.
        atoms: Ordered atoms. Order defines species grouping on write.

    Raises:
        ValueError: on malformed fields, or if two atoms of the same species
            carry different masses.
    """

    prebox_header: tuple[str, str]
    cell: tuple[float, float, float]
    angles: tuple[float, float, float]
    postbox_header: tuple[str, str]
    atoms: tuple[Atom, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "prebox_header", _as_header_pair(self.prebox_header, where="Frame.prebox_header"))
        object.__setattr__(self, "postbox_header", _as_header_pair(self.postbox_header, where="Frame.postbox_header"))
        cell = _as_triple(self.cell, where="Frame.cell")
        if any(v < 0 for v in cell):
            raise ValueError(f"Frame.cell: box lengths must be non-negative, got {cell}")
        object.__setattr__(self, "cell", cell)
        object.__setattr__(self, "angles", _as_triple(self.angles, where="Frame.angles"))

        atoms = tuple(self.atoms)
        masses: dict[int, float] = {}
        for i, atom in enumerate(atoms):
            if not isinstance(atom, Atom):
                raise ValueError(f"Frame.atoms[{i}]: expected Atom, got {type(atom).__name__}")
            seen = masses.setdefault(atom.atomic_number, atom.mass)
            if seen != atom.mass:
                raise ValueError(
                    f"Frame.atoms[{i}]: mass {atom.mass!r} differs from mass {seen!r} "
                    f"already declared for atomic number {atom.atomic_number}"
                )
        object.__setattr__(self, "atoms", atoms)

    # ---- construction helpers ----

    @classmethod
    def from_species_blocks(
        cls,
        *,
        prebox_header: Sequence[str],
        cell: Iterable[float],
        angles: Iterable[float],
        postbox_header: Sequence[str],
        blocks: Iterable[SpeciesBlock],
    ) -> "Frame":
        """Build a frame from grouped species blocks (see `readcon.core.species.flatten`)."""
        from readcon.core.species import flatten

        return cls(
            prebox_header=tuple(prebox_header),
            cell=tuple(cell),
            angles=tuple(angles),
            postbox_header=tuple(postbox_header),
            atoms=flatten(blocks),
        )

    def renumbered(self) -> "Frame":
        """Return a copy whose atom ids run 0..N-1 in frame order."""
        atoms = tuple(replace(a, atom_id=i) for i, a in enumerate(self.atoms))
        return replace(self, atoms=atoms)

    # ---- header access ----

    def header_line(self, section: str, index: int) -> str:
        """Return header line ``index`` (0 or 1) of ``section`` ("pre" or "post")."""
        if section == "pre":
            lines = self.prebox_header
        elif section == "post":
            lines = self.postbox_header
        else:
            raise ValueError(f"header_line: section must be one of {HEADER_SECTIONS}, got {section!r}")
        if isinstance(index, bool) or index not in (0, 1):
            raise ValueError(f"header_line: index must be 0 or 1, got {index!r}")
        return lines[index]

    def copy_header_line(self, section: str, index: int, buffer: Any) -> HeaderCopy:
        """Copy a header line into a caller-owned, fixed-capacity byte buffer.

        The line is UTF-8 encoded. At most ``len(buffer) - 1`` bytes are copied,
        never splitting a multi-byte character, followed by a NUL terminator.

        Args:
            section: "pre" or "post".
            index: 0 or 1.
            buffer: A writable bytes-like object (eg ``bytearray``).

        Returns:
            ``HeaderCopy(written, truncated)``; ``written`` excludes the terminator.

        Raises:
            ValueError: if the buffer has zero capacity, or section/index are invalid.
        """
        data = self.header_line(section, index).encode("utf-8")
        view = memoryview(buffer).cast("B")
        capacity = len(view)
        if capacity == 0:
            raise ValueError("copy_header_line: buffer must hold at least the terminator")
        n = min(len(data), capacity - 1)
        # Back off to a character boundary (continuation bytes are 0b10xxxxxx).
        while 0 < n < len(data) and (data[n] & 0xC0) == 0x80:
            n -= 1
        view[:n] = data[:n]
        view[n] = 0
        return HeaderCopy(written=n, truncated=n < len(data))

    # ---- derived views ----

    @property
    def num_atoms(self) -> int:
        return len(self.atoms)

    @property
    def species_blocks(self) -> tuple[SpeciesBlock, ...]:
        from readcon.core.species import group

        return group(self.atoms)

    @property
    def natms_per_type(self) -> tuple[int, ...]:
        return tuple(b.count for b in self.species_blocks)

    @property
    def masses_per_type(self) -> tuple[float, ...]:
        return tuple(b.mass for b in self.species_blocks)

    @cached_property
    def snapshot(self) -> FrameSnapshot:
        """Cached array projection of this frame (computed on first access)."""
        import numpy as np

        def _frozen(arr: "np.ndarray") -> "np.ndarray":
            arr.setflags(write=False)
            return arr

        n = len(self.atoms)
        positions = np.array([a.position for a in self.atoms], dtype=np.float64).reshape(n, 3)
        return FrameSnapshot(
            cell=_frozen(np.array(self.cell, dtype=np.float64)),
            angles=_frozen(np.array(self.angles, dtype=np.float64)),
            atomic_numbers=_frozen(np.array([a.atomic_number for a in self.atoms], dtype=np.int64)),
            positions=_frozen(positions),
            atom_ids=_frozen(np.array([a.atom_id for a in self.atoms], dtype=np.int64)),
            masses=_frozen(np.array([a.mass for a in self.atoms], dtype=np.float64)),
            is_fixed=_frozen(np.array([a.is_fixed for a in self.atoms], dtype=bool)),
        )

    def to_dataframe(self) -> "pd.DataFrame":
        """Return a new DataFrame with one row per atom, in frame order."""
        import pandas as pd

        from readcon.core.elements import atomic_number_to_symbol

        snap = self.snapshot
        return pd.DataFrame(
            {
                "atomic_number": snap.atomic_numbers.copy(),
                "symbol": [atomic_number_to_symbol(int(n)) for n in snap.atomic_numbers],
                "x": snap.positions[:, 0].copy(),
                "y": snap.positions[:, 1].copy(),
                "z": snap.positions[:, 2].copy(),
                "atom_id": snap.atom_ids.copy(),
                "mass": snap.masses.copy(),
                "is_fixed": snap.is_fixed.copy(),
            },
            columns=DATAFRAME_COLUMNS,
        )


DATAFRAME_COLUMNS: list[str] = ["atomic_number", "symbol", "x", "y", "z", "atom_id", "mass", "is_fixed"]
