from __future__ import annotations

BANK_SEPARATOR = "/"


def parse_address(text: str, max_value: int) -> int | None:
    """Parse a hexadecimal address such as ``1234``, ``$1234``, ``0x1234`` or ``12/3456``.

    Returns None when the text is not an address below ``max_value``.
    """
    raw = (text or "").strip()
    if raw.startswith("$"):
        raw = raw[1:]
    elif raw.lower().startswith("0x"):
        raw = raw[2:]
    if not raw:
        return None

    if BANK_SEPARATOR in raw:
        bank_text, _, addr_text = raw.partition(BANK_SEPARATOR)
        bank = parse_hex(bank_text)
        low = parse_hex(addr_text)
        if bank is None or low is None or bank > 0xFF or low > 0xFFFF:
            return None
        value = (bank << 16) | low
    else:
        value = parse_hex(raw)
        if value is None:
            return None

    if value >= max_value:
        return None
    return value


def parse_hex(text: str) -> int | None:
    if not text or not all(ch in "0123456789abcdefABCDEF" for ch in text):
        return None
    return int(text, 16)
