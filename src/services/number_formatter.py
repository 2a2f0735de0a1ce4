from __future__ import annotations


class NumberFormatter:
    """Renders offsets and addresses the way the disassembly listing shows them."""

    def __init__(self, *, upper_hex_digits: bool = True, non_unique_label_prefix: str = ":") -> None:
        self.upper_hex_digits = upper_hex_digits
        self.non_unique_label_prefix = non_unique_label_prefix

    def format_hex_value(self, value: int, digits: int) -> str:
        text = f"{value:0{digits}x}"
        return text.upper() if self.upper_hex_digits else text

    def format_offset24(self, offset: int) -> str:
        return "+" + self.format_hex_value(offset, 6)

    def format_address(self, address: int, show_bank: bool) -> str:
        if address > 0xFFFFFF:
            # Too wide for the bank/address form.
            return self.format_hex_value(address, 8)
        if not show_bank:
            return self.format_hex_value(address & 0xFFFF, 4)
        bank = (address >> 16) & 0xFF
        return self.format_hex_value(bank, 2) + "/" + self.format_hex_value(address & 0xFFFF, 4)
