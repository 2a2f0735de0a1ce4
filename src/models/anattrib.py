from __future__ import annotations

from dataclasses import dataclass

from models.symbol import Symbol


@dataclass(frozen=True)
class Anattrib:
    """Analyzer attributes for a single file offset."""

    address: int
    symbol: Symbol | None = None
