from __future__ import annotations

from typing import Iterable

from models.anattrib import Anattrib
from models.symbol import LabelAnnotation, Symbol
from services.address_map import AddressMap


class DisasmProject:
    """In-memory disassembly project: file data, address map and labels."""

    def __init__(
        self,
        file_data: bytes,
        address_map: AddressMap | None = None,
        labels: Iterable[tuple[int, Symbol]] = (),
        *,
        cpu: tuple[int, int] | None = None,
        name: str = "",
    ) -> None:
        self.file_data = bytes(file_data)
        self.address_map = address_map or AddressMap(len(self.file_data))
        if self.address_map.file_length != len(self.file_data):
            raise ValueError("Address map length does not match file data length")
        # capstone (arch, mode) pair; None when the CPU is unknown
        self.cpu = cpu
        self.name = name
        self._labels_by_offset: dict[int, Symbol] = {}
        self._offsets_by_label: dict[str, int] = {}
        for offset, symbol in labels:
            self.set_label(offset, symbol)

    @property
    def file_data_length(self) -> int:
        return len(self.file_data)

    @property
    def labels(self) -> dict[int, Symbol]:
        return dict(self._labels_by_offset)

    def label_at(self, offset: int) -> Symbol | None:
        return self._labels_by_offset.get(offset)

    def set_label(self, offset: int, symbol: Symbol) -> None:
        if not 0 <= offset < self.file_data_length:
            raise ValueError(f"Label offset +{offset:06x} is outside the file")
        existing = self._offsets_by_label.get(symbol.label)
        if existing is not None and existing != offset:
            raise ValueError(f"Label {symbol.label!r} already defined at +{existing:06x}")
        previous = self._labels_by_offset.get(offset)
        if previous is not None:
            del self._offsets_by_label[previous.label]
        self._labels_by_offset[offset] = symbol
        self._offsets_by_label[symbol.label] = offset

    def add_label(
        self,
        offset: int,
        label: str,
        *,
        non_unique: bool = False,
        annotation: LabelAnnotation = LabelAnnotation.NONE,
    ) -> Symbol:
        address = self.address_map.offset_to_address(offset)
        if non_unique:
            symbol = Symbol.non_unique_at(label, offset, address, annotation)
        else:
            symbol = Symbol(label, address, annotation=annotation)
        self.set_label(offset, symbol)
        return symbol

    def find_label_offset_by_name(self, label: str) -> int:
        return self._offsets_by_label.get(label, -1)

    def find_best_non_unique_label(self, label: str, offset: int) -> Symbol | None:
        """Return the declaration of non-unique ``label`` nearest to ``offset``.

        Ties go to the declaration at the lower offset.
        """
        best: tuple[int, int] | None = None
        best_symbol: Symbol | None = None
        for label_offset, symbol in self._labels_by_offset.items():
            if not symbol.non_unique or symbol.label_without_tag != label:
                continue
            key = (abs(label_offset - offset), label_offset)
            if best is None or key < best:
                best = key
                best_symbol = symbol
        return best_symbol

    def address_to_offset(self, src_offset: int, address: int, ignore_isolation: bool = False) -> int:
        return self.address_map.address_to_offset(src_offset, address, ignore_isolation)

    def get_anattrib(self, offset: int) -> Anattrib:
        if not 0 <= offset < self.file_data_length:
            raise IndexError(f"Offset +{offset:06x} is outside the file")
        return Anattrib(
            address=self.address_map.offset_to_address(offset),
            symbol=self._labels_by_offset.get(offset),
        )
