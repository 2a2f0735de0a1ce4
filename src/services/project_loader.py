"""Build a navigable project from an executable on disk."""

from __future__ import annotations

import logging
from pathlib import Path

import capstone
import lief

from models.address_region import AddressRegion
from models.symbol import Symbol
from services.address_map import AddressMap
from services.disasm_project import DisasmProject
from services.label_syntax import trim_and_validate_label
from services.target_resolver import MAX_ADDRESS

logger = logging.getLogger(__name__)


def load_binary_project(path: Path | str, *, non_unique_prefix: str = ":") -> DisasmProject:
    binary_path = Path(path)
    if not binary_path.exists():
        raise FileNotFoundError(f"Binary not found: {binary_path}")
    binary = lief.parse(str(binary_path))
    if binary is None:
        raise ValueError(f"Unable to parse {binary_path} with LIEF")

    data = binary_path.read_bytes()
    address_map = AddressMap(len(data), _section_regions(binary, len(data)))
    project = DisasmProject(data, address_map, cpu=_capstone_cpu(binary), name=binary_path.name)
    imported = _import_symbols(project, binary, non_unique_prefix)
    logger.debug(
        "Loaded %s: %d bytes, %d regions, %d labels",
        binary_path.name,
        len(data),
        len(address_map.regions),
        imported,
    )
    return project


def _section_regions(binary: lief.Binary, file_length: int) -> list[AddressRegion]:
    candidates: list[AddressRegion] = []
    for section in binary.sections:
        name = getattr(section, "name", "") or ""
        try:
            offset = int(section.offset)
            size = int(section.size)
            address = int(section.virtual_address)
        except (TypeError, ValueError):
            continue
        if size <= 0 or address <= 0:
            continue
        if "NOBITS" in str(getattr(section, "type", "")):
            continue
        if offset <= 0 or offset + size > file_length:
            logger.debug("Skipping section %s: not backed by file data", name)
            continue
        if address + size > MAX_ADDRESS:
            logger.debug("Skipping section %s: address $%x is beyond the 24-bit address space", name, address)
            continue
        candidates.append(AddressRegion(offset, size, address, name=name))

    regions: list[AddressRegion] = []
    end = 0
    for region in sorted(candidates, key=lambda item: (item.offset, -item.length)):
        if region.offset < end:
            logger.debug("Skipping section %s: overlaps previous section", region.name)
            continue
        regions.append(region)
        end = region.end
    return regions


def _import_symbols(project: DisasmProject, binary: lief.Binary, non_unique_prefix: str) -> int:
    imported = 0
    for entry in binary.symbols:
        name = getattr(entry, "name", "") or ""
        try:
            value = int(entry.value)
        except (TypeError, ValueError):
            continue
        if not name or value <= 0:
            continue
        check = trim_and_validate_label(name, non_unique_prefix)
        if not check.is_valid or check.trimmed_name != name:
            continue
        if project.find_label_offset_by_name(name) >= 0:
            continue
        offset = project.address_to_offset(-1, value, True)
        if offset < 0 or project.label_at(offset) is not None:
            continue
        project.set_label(offset, Symbol(name, value))
        imported += 1
    return imported


def _capstone_cpu(binary: lief.Binary) -> tuple[int, int] | None:
    if isinstance(binary, lief.ELF.Binary):
        machine = getattr(binary.header, "machine_type", None)
        for arch_names, cpu in _ELF_CPUS:
            if machine is not None and cpu[0] is not None and any(machine == getattr(lief.ELF.ARCH, arch_name, None) for arch_name in arch_names):
                return cpu
    logger.debug("No disassembler configuration for %s", type(binary).__name__)
    return None


# Enum member names differ between lief and capstone releases.
_CS_ARCH_AARCH64 = getattr(capstone, "CS_ARCH_AARCH64", getattr(capstone, "CS_ARCH_ARM64", None))
_ELF_CPUS: list[tuple[tuple[str, ...], tuple[int, int]]] = [
    (("X86_64", "x86_64"), (capstone.CS_ARCH_X86, capstone.CS_MODE_64)),
    (("I386", "X86", "i386"), (capstone.CS_ARCH_X86, capstone.CS_MODE_32)),
    (("AARCH64",), (_CS_ARCH_AARCH64, capstone.CS_MODE_ARM)),
]
