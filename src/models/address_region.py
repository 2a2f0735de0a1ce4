from __future__ import annotations

from dataclasses import dataclass

NON_ADDR = -1


@dataclass(frozen=True)
class AddressRegion:
    offset: int
    length: int
    address: int
    disallow_inward: bool = False
    disallow_outward: bool = False
    name: str = ""

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def is_addressable(self) -> bool:
        return self.address != NON_ADDR

    def contains_offset(self, offset: int) -> bool:
        return self.offset <= offset < self.end

    def contains_region(self, other: "AddressRegion") -> bool:
        return self.offset <= other.offset and other.end <= self.end
