"""Codecs for reading/writing the CON atomistic-structure format.

The public entry points live in `readcon.codecs.con`; `_con_*` modules are
private helpers.
"""

from __future__ import annotations

__all__: list[str] = []
