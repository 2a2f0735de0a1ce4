from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TargetDisplay:
    offset_text: str = ""
    address_text: str = ""
    label_text: str = ""

    def is_empty(self) -> bool:
        return not (self.offset_text or self.address_text or self.label_text)
