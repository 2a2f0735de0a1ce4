from __future__ import annotations

from functools import lru_cache

import capstone

from services.disasm_project import DisasmProject

DEFAULT_PREVIEW_BYTES = 16
UNKNOWN_CPU_TEXT = "<unknown cpu>"
UNDECODABLE_TEXT = "<unable to disassemble>"


@lru_cache(maxsize=8)
def _disassembler(arch: int, mode: int) -> capstone.Cs:
    md = capstone.Cs(arch, mode)
    md.detail = False
    return md


def preview_instruction(project: DisasmProject, offset: int, *, max_bytes: int = DEFAULT_PREVIEW_BYTES) -> str:
    """Disassemble the instruction starting at ``offset``; empty for offsets outside the file."""
    if not 0 <= offset < project.file_data_length:
        return ""
    if project.cpu is None:
        return UNKNOWN_CPU_TEXT
    arch, mode = project.cpu
    data = project.file_data[offset : offset + max(max_bytes, 1)]
    address = project.address_map.offset_to_address(offset)
    if address < 0:
        address = offset
    instruction = next(_disassembler(arch, mode).disasm(data, address), None)
    if instruction is None:
        return UNDECODABLE_TEXT
    return f"{instruction.mnemonic} {instruction.op_str}".strip()
