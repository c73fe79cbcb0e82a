"""Conversion between grouped species blocks and flat atom sequences.

On disk, a CON frame stores its atoms grouped by species: one block per
species, each block declaring an atomic number and a mass once. Callers see a
flat, ordered atom sequence with the species data attached to every atom.

- `flatten(blocks)` concatenates blocks in order.
- `group(atoms)` is its inverse: stable grouping by first occurrence. Atoms of
  a species that reappears after another species are gathered into the block
  opened by its first occurrence (the file grammar only expresses contiguous
  species runs).

For blocks produced by a parse, ``group(flatten(B)) == B``. For atom sequences
whose species are contiguous, ``flatten(group(A)) == A``.
"""

from __future__ import annotations

from typing import Iterable

from readcon.core.model import Atom, AtomSite, SpeciesBlock


def flatten(blocks: Iterable[SpeciesBlock]) -> tuple[Atom, ...]:
    atoms: list[Atom] = []
    for block in blocks:
        for site in block.sites:
            atoms.append(
                Atom(
                    atomic_number=block.atomic_number,
                    x=site.x,
                    y=site.y,
                    z=site.z,
                    atom_id=site.atom_id,
                    mass=block.mass,
                    is_fixed=site.is_fixed,
                )
            )
    return tuple(atoms)


def group(atoms: Iterable[Atom]) -> tuple[SpeciesBlock, ...]:
    """Group atoms into species blocks in order of first occurrence.

    Raises:
        ValueError: if two atoms of one species carry different masses.
    """
    order: list[int] = []
    masses: dict[int, float] = {}
    sites: dict[int, list[AtomSite]] = {}

    for i, atom in enumerate(atoms):
        z = atom.atomic_number
        if z not in sites:
            order.append(z)
            masses[z] = atom.mass
            sites[z] = []
        elif masses[z] != atom.mass:
            raise ValueError(
                f"group: atoms[{i}] has mass {atom.mass!r} but atomic number {z} "
                f"was first seen with mass {masses[z]!r}"
            )
        sites[z].append(AtomSite(x=atom.x, y=atom.y, z=atom.z, atom_id=atom.atom_id, is_fixed=atom.is_fixed))

    return tuple(SpeciesBlock(atomic_number=z, mass=masses[z], sites=tuple(sites[z])) for z in order)


def species_counts(atoms: Iterable[Atom]) -> tuple[int, ...]:
    """Per-species atom counts, in the block order `group` would produce."""
    return tuple(block.count for block in group(atoms))


def is_species_contiguous(atoms: Iterable[Atom]) -> bool:
    """True if every species' atoms form a single contiguous run."""
    seen: set[int] = set()
    prev: int | None = None
    for atom in atoms:
        z = atom.atomic_number
        if z != prev:
            if z in seen:
                return False
            seen.add(z)
            prev = z
    return True
