import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for path in (str(SRC), str(ROOT)):
    if path not in sys.path:
        sys.path.insert(0, path)

from models.address_region import AddressRegion  # noqa: E402
from models.symbol import LabelAnnotation  # noqa: E402
from services.address_map import AddressMap  # noqa: E402
from services.disasm_project import DisasmProject  # noqa: E402
from services.number_formatter import NumberFormatter  # noqa: E402

FILE_LENGTH = 0x400

# +000000..+0001FF  $F000  main code
# +000200..+0002FF  $8000  overlay, cannot resolve outward
# +000300..+00037F  $F000  alternate bank over main
# +000380..+0003FF  $12/3400  high bank, cannot be entered from outside
SAMPLE_REGIONS = [
    AddressRegion(0x000, 0x200, 0xF000, name="main"),
    AddressRegion(0x200, 0x100, 0x8000, disallow_outward=True, name="overlay"),
    AddressRegion(0x300, 0x080, 0xF000, name="bank"),
    AddressRegion(0x380, 0x080, 0x123400, disallow_inward=True, name="high"),
]


def build_sample_project() -> DisasmProject:
    data = bytearray(b"\x90" * FILE_LENGTH)
    data[0x10:0x15] = b"\xb8\x01\x00\x00\x00"
    project = DisasmProject(
        bytes(data),
        AddressMap(FILE_LENGTH, SAMPLE_REGIONS),
        cpu=_x86_32_cpu(),
        name="sample.bin",
    )
    project.add_label(0x10, "START")
    project.add_label(0x20, "LOOP", non_unique=True)
    project.add_label(0x50, "LOOP", non_unique=True)
    project.add_label(0x60, "F010")
    project.add_label(0x70, "MAYBE", annotation=LabelAnnotation.UNCERTAIN)
    project.add_label(0x210, "OVERLAY_ENTRY")
    project.add_label(0x390, "FAR_DATA")
    return project


def _x86_32_cpu():
    import capstone

    return capstone.CS_ARCH_X86, capstone.CS_MODE_32


@pytest.fixture
def sample_project() -> DisasmProject:
    return build_sample_project()


@pytest.fixture
def formatter() -> NumberFormatter:
    return NumberFormatter()
