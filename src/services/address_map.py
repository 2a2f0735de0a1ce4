"""Offset/address mapping with nested, optionally isolated, regions."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterable

from models.address_region import NON_ADDR, AddressRegion

logger = logging.getLogger(__name__)


@dataclass
class _RegionNode:
    region: AddressRegion
    parent: "_RegionNode | None" = None
    children: list["_RegionNode"] = field(default_factory=list)


class AddressMap:
    """Maps file offsets to addresses and back.

    Regions nest strictly: a region either contains another completely or does
    not overlap it at all. A child region overrides its parent's mapping for the
    bytes it covers. Several regions may share an address range (banked memory),
    so reverse lookups are made relative to a source offset.
    """

    def __init__(self, file_length: int, regions: Iterable[AddressRegion] = ()) -> None:
        if file_length < 0:
            raise ValueError(f"Invalid file length: {file_length}")
        self.file_length = file_length
        self._roots: list[_RegionNode] = []
        ordered = sorted(regions, key=lambda region: (region.offset, -region.length))
        for region in ordered:
            self._insert(region)

    @property
    def regions(self) -> list[AddressRegion]:
        collected: list[AddressRegion] = []
        stack = list(reversed(self._roots))
        while stack:
            node = stack.pop()
            collected.append(node.region)
            stack.extend(reversed(node.children))
        return collected

    def _insert(self, region: AddressRegion) -> None:
        if region.length <= 0:
            raise ValueError(f"Region at +{region.offset:06x} has invalid length {region.length}")
        if region.offset < 0 or region.end > self.file_length:
            raise ValueError(
                f"Region +{region.offset:06x}..+{region.end:06x} falls outside file of length {self.file_length}"
            )
        siblings = self._roots
        parent: _RegionNode | None = None
        while True:
            container = None
            for node in siblings:
                if node.region.offset == region.offset and node.region.length == region.length:
                    raise ValueError(f"Duplicate region at +{region.offset:06x}")
                if node.region.contains_region(region):
                    container = node
                    break
                if node.region.offset < region.end and region.offset < node.region.end:
                    raise ValueError(
                        f"Region +{region.offset:06x}..+{region.end:06x} partially overlaps "
                        f"+{node.region.offset:06x}..+{node.region.end:06x}"
                    )
            if container is None:
                break
            parent = container
            siblings = container.children
        siblings.append(_RegionNode(region, parent))

    def _innermost(self, offset: int) -> _RegionNode | None:
        found: _RegionNode | None = None
        siblings = self._roots
        while True:
            match = next((node for node in siblings if node.region.contains_offset(offset)), None)
            if match is None:
                return found
            found = match
            siblings = match.children

    def offset_to_address(self, offset: int) -> int:
        node = self._innermost(offset)
        if node is None or not node.region.is_addressable:
            return NON_ADDR
        return node.region.address + (offset - node.region.offset)

    def address_to_offset(self, src_offset: int, address: int, ignore_isolation: bool = False) -> int:
        """Find the file offset of ``address`` as seen from ``src_offset``.

        The region holding ``src_offset`` and its descendants are searched first,
        then each enclosing region, then the remaining top-level regions. Leaving a
        region marked ``disallow_outward`` or entering one marked
        ``disallow_inward`` ends that path unless ``ignore_isolation`` is set.
        Returns -1 when nothing maps the address.
        """
        node = self._innermost(src_offset)
        came_from: _RegionNode | None = None
        while node is not None:
            found = self._search_down(node, address, ignore_isolation, skip=came_from, entering=False)
            if found >= 0:
                return found
            if node.region.disallow_outward and not ignore_isolation:
                logger.debug("Address $%x blocked by outward isolation of %r", address, node.region.name)
                return -1
            came_from = node
            node = node.parent

        for root in self._roots:
            if root is came_from:
                continue
            found = self._search_down(root, address, ignore_isolation, skip=None, entering=True)
            if found >= 0:
                return found
        return -1

    def _search_down(
        self,
        node: _RegionNode,
        address: int,
        ignore_isolation: bool,
        *,
        skip: _RegionNode | None,
        entering: bool,
    ) -> int:
        if entering and node.region.disallow_inward and not ignore_isolation:
            return -1
        found = self._match_own(node, address)
        if found >= 0:
            return found
        for child in node.children:
            if child is skip:
                continue
            found = self._search_down(child, address, ignore_isolation, skip=None, entering=True)
            if found >= 0:
                return found
        return -1

    def _match_own(self, node: _RegionNode, address: int) -> int:
        region = node.region
        if not region.is_addressable:
            return -1
        if not (region.address <= address < region.address + region.length):
            return -1
        offset = region.offset + (address - region.address)
        if any(child.region.contains_offset(offset) for child in node.children):
            return -1
        return offset
