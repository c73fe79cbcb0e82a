"""Element symbol table.

A fixed, case-sensitive catalogue of the 118 standard element symbols. The
lookup tables are built on first use and handed out as read-only mappings, so
the table is safe to query from any number of threads.
"""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from readcon.core.errors import UnknownSymbolError

# Index + 1 == atomic number.
_SYMBOLS: tuple[str, ...] = (
    "H", "He",
    "Li", "Be", "B", "C", "N", "O", "F", "Ne",
    "Na", "Mg", "Al", "Si", "P", "S", "Cl", "Ar",
    "K", "Ca", "Sc", "Ti", "V", "Cr", "Mn", "Fe", "Co", "Ni", "Cu", "Zn",
    "Ga", "Ge", "As", "Se", "Br", "Kr",
    "Rb", "Sr", "Y", "Zr", "Nb", "Mo", "Tc", "Ru", "Rh", "Pd", "Ag", "Cd",
    "In", "Sn", "Sb", "Te", "I", "Xe",
    "Cs", "Ba",
    "La", "Ce", "Pr", "Nd", "Pm", "Sm", "Eu", "Gd", "Tb", "Dy", "Ho", "Er", "Tm", "Yb", "Lu",
    "Hf", "Ta", "W", "Re", "Os", "Ir", "Pt", "Au", "Hg",
    "Tl", "Pb", "Bi", "Po", "At", "Rn",
    "Fr", "Ra",
    "Ac", "Th", "Pa", "U", "Np", "Pu", "Am", "Cm", "Bk", "Cf", "Es", "Fm", "Md", "No", "Lr",
    "Rf", "Db", "Sg", "Bh", "Hs", "Mt", "Ds", "Rg", "Cn",
    "Nh", "Fl", "Mc", "Lv", "Ts", "Og",
)


@lru_cache(maxsize=None)
def _tables() -> tuple[Mapping[str, int], Mapping[int, str]]:
    by_symbol = {sym: i + 1 for i, sym in enumerate(_SYMBOLS)}
    by_number = {i + 1: sym for i, sym in enumerate(_SYMBOLS)}
    return MappingProxyType(by_symbol), MappingProxyType(by_number)


def symbol_table() -> Mapping[str, int]:
    """Read-only symbol -> atomic number mapping."""
    return _tables()[0]


def symbol_to_atomic_number(symbol: str) -> int:
    """Resolve an element symbol (exact, case-sensitive) to its atomic number.

    Raises:
        UnknownSymbolError: if the symbol is not a standard element symbol.
    """
    try:
        return _tables()[0][symbol]
    except (KeyError, TypeError):
        raise UnknownSymbolError(symbol) from None


def atomic_number_to_symbol(atomic_number: int) -> str:
    """Resolve an atomic number to its canonical element symbol.

    Raises:
        UnknownSymbolError: if no element has that atomic number.
    """
    if isinstance(atomic_number, bool):
        raise UnknownSymbolError(atomic_number)
    try:
        return _tables()[1][atomic_number]
    except (KeyError, TypeError):
        raise UnknownSymbolError(atomic_number) from None


def is_known_symbol(symbol: str) -> bool:
    return isinstance(symbol, str) and symbol in _tables()[0]
