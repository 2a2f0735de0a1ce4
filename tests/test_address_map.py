import unittest

from models.address_region import NON_ADDR, AddressRegion
from services.address_map import AddressMap


class TestAddressMapLayout(unittest.TestCase):
    def test_rejects_partial_overlap(self) -> None:
        with self.assertRaises(ValueError):
            AddressMap(0x100, [AddressRegion(0x00, 0x80, 0x1000), AddressRegion(0x40, 0x80, 0x2000)])

    def test_rejects_regions_outside_file(self) -> None:
        with self.assertRaises(ValueError):
            AddressMap(0x100, [AddressRegion(0x80, 0x100, 0x1000)])
        with self.assertRaises(ValueError):
            AddressMap(0x100, [AddressRegion(0x00, 0, 0x1000)])

    def test_rejects_duplicate_region(self) -> None:
        with self.assertRaises(ValueError):
            AddressMap(0x100, [AddressRegion(0x00, 0x80, 0x1000), AddressRegion(0x00, 0x80, 0x2000)])

    def test_regions_listed_in_file_order(self) -> None:
        inner = AddressRegion(0x20, 0x10, 0x5000)
        outer = AddressRegion(0x00, 0x80, 0x1000)
        tail = AddressRegion(0x80, 0x80, 0x2000)
        address_map = AddressMap(0x100, [tail, inner, outer])
        self.assertEqual(address_map.regions, [outer, inner, tail])


class TestAddressMapLookups(unittest.TestCase):
    def setUp(self) -> None:
        # outer +00..+7F at $1000 with a nested +20..+2F at $5000
        self.address_map = AddressMap(
            0x100,
            [
                AddressRegion(0x00, 0x80, 0x1000, name="outer"),
                AddressRegion(0x20, 0x10, 0x5000, name="inner"),
                AddressRegion(0x80, 0x40, 0x1000, name="bank"),
                AddressRegion(0xC0, 0x20, NON_ADDR, name="data"),
            ],
        )

    def test_offset_to_address_uses_innermost_region(self) -> None:
        self.assertEqual(self.address_map.offset_to_address(0x10), 0x1010)
        self.assertEqual(self.address_map.offset_to_address(0x24), 0x5004)
        self.assertEqual(self.address_map.offset_to_address(0x30), 0x1030)
        self.assertEqual(self.address_map.offset_to_address(0xC4), NON_ADDR)
        self.assertEqual(self.address_map.offset_to_address(0xF0), NON_ADDR)

    def test_child_hides_parent_bytes(self) -> None:
        # $1024 would be +24 in outer, but +24 belongs to inner; the bank still has it.
        self.assertEqual(self.address_map.address_to_offset(0x10, 0x1024), 0xA4)
        self.assertEqual(self.address_map.address_to_offset(0x10, 0x5004), 0x24)

    def test_anchor_selects_bank(self) -> None:
        self.assertEqual(self.address_map.address_to_offset(0x10, 0x1010), 0x10)
        self.assertEqual(self.address_map.address_to_offset(0x90, 0x1010), 0x90)

    def test_parent_reached_from_child(self) -> None:
        self.assertEqual(self.address_map.address_to_offset(0x24, 0x1010), 0x10)

    def test_unmapped_address(self) -> None:
        self.assertEqual(self.address_map.address_to_offset(0x10, 0x9000), -1)
        self.assertEqual(self.address_map.address_to_offset(0x10, 0x9000, True), -1)

    def test_anchor_outside_every_region(self) -> None:
        self.assertEqual(self.address_map.address_to_offset(0xF0, 0x1010), 0x10)
        self.assertEqual(self.address_map.address_to_offset(-1, 0x5000), 0x20)


class TestAddressMapIsolation(unittest.TestCase):
    def setUp(self) -> None:
        self.address_map = AddressMap(
            0x100,
            [
                AddressRegion(0x00, 0x80, 0x1000, name="main"),
                AddressRegion(0x40, 0x20, 0x6000, disallow_outward=True, name="sealed"),
                AddressRegion(0x80, 0x40, 0x3000, disallow_inward=True, name="private"),
            ],
        )

    def test_outward_isolation_blocks_parent(self) -> None:
        self.assertEqual(self.address_map.address_to_offset(0x44, 0x1010), -1)
        self.assertEqual(self.address_map.address_to_offset(0x44, 0x1010, ignore_isolation=True), 0x10)

    def test_outward_isolation_still_sees_own_bytes(self) -> None:
        self.assertEqual(self.address_map.address_to_offset(0x44, 0x6010), 0x50)

    def test_parent_can_enter_outward_isolated_child(self) -> None:
        self.assertEqual(self.address_map.address_to_offset(0x10, 0x6010), 0x50)

    def test_inward_isolation_blocks_entry(self) -> None:
        self.assertEqual(self.address_map.address_to_offset(0x10, 0x3010), -1)
        self.assertEqual(self.address_map.address_to_offset(0x10, 0x3010, ignore_isolation=True), 0x90)

    def test_inward_isolation_allows_lookups_from_inside(self) -> None:
        self.assertEqual(self.address_map.address_to_offset(0x88, 0x3010), 0x90)
        self.assertEqual(self.address_map.address_to_offset(0x88, 0x1010), 0x10)


if __name__ == "__main__":
    unittest.main()
