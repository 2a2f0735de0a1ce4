from services.disasm_project import DisasmProject
from services.instruction_preview import UNDECODABLE_TEXT, UNKNOWN_CPU_TEXT, preview_instruction


def test_preview_uses_mapped_address(sample_project) -> None:
    assert preview_instruction(sample_project, 0x10) == "mov eax, 1"
    assert preview_instruction(sample_project, 0x20) == "nop"


def test_preview_outside_file_is_empty(sample_project) -> None:
    assert preview_instruction(sample_project, -1) == ""
    assert preview_instruction(sample_project, sample_project.file_data_length) == ""


def test_preview_truncated_instruction(sample_project) -> None:
    assert preview_instruction(sample_project, 0x10, max_bytes=2) == UNDECODABLE_TEXT


def test_preview_without_cpu() -> None:
    project = DisasmProject(b"\x90" * 4)

    assert preview_instruction(project, 0) == UNKNOWN_CPU_TEXT
