from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from services.number_formatter import NumberFormatter

# Separates a non-unique label from the tag that keeps it unique in the symbol table.
UNIQUE_TAG_CHAR = "§"
UNCERTAIN_CHAR = "?"


class LabelAnnotation(Enum):
    NONE = "none"
    UNCERTAIN = "uncertain"
    GENERATED = "generated"


@dataclass(frozen=True)
class Symbol:
    label: str
    value: int
    non_unique: bool = False
    annotation: LabelAnnotation = LabelAnnotation.NONE

    @classmethod
    def non_unique_at(
        cls,
        label: str,
        offset: int,
        value: int,
        annotation: LabelAnnotation = LabelAnnotation.NONE,
    ) -> "Symbol":
        """Build a non-unique symbol whose label is tagged with its declaring offset."""
        return cls(f"{label}{UNIQUE_TAG_CHAR}{offset:06X}", value, True, annotation)

    @property
    def label_without_tag(self) -> str:
        if not self.non_unique:
            return self.label
        return self.label.split(UNIQUE_TAG_CHAR, 1)[0]

    def generate_display_label(self, formatter: "NumberFormatter") -> str:
        text = self.label_without_tag
        if self.non_unique:
            text = formatter.non_unique_label_prefix + text
        if self.annotation is LabelAnnotation.UNCERTAIN:
            text += UNCERTAIN_CHAR
        return text
