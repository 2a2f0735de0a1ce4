"""Read-only queries the navigation engine makes against a disassembly project."""

from __future__ import annotations

from typing import Protocol

from models.anattrib import Anattrib
from models.symbol import Symbol


class ProjectView(Protocol):
    @property
    def file_data_length(self) -> int: ...

    def find_label_offset_by_name(self, label: str) -> int: ...

    def find_best_non_unique_label(self, label: str, offset: int) -> Symbol | None: ...

    def address_to_offset(self, src_offset: int, address: int, ignore_isolation: bool = False) -> int: ...

    def get_anattrib(self, offset: int) -> Anattrib: ...
