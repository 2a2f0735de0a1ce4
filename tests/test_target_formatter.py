import pytest

from models.address_region import AddressRegion
from models.target_display import TargetDisplay
from services.address_map import AddressMap
from services.disasm_project import DisasmProject
from services.number_formatter import NumberFormatter
from services.target_formatter import format_target
from services.target_resolver import NO_TARGET, resolve


def test_unresolved_target_has_empty_fields(sample_project, formatter) -> None:
    display = format_target(NO_TARGET, sample_project, formatter)

    assert display == TargetDisplay("", "", "")
    assert display.is_empty()


def test_out_of_range_offset_has_empty_fields(sample_project, formatter) -> None:
    assert format_target(sample_project.file_data_length, sample_project, formatter).is_empty()


def test_formats_unique_label_target(sample_project, formatter) -> None:
    display = format_target(0x10, sample_project, formatter)

    assert display.offset_text == "+000010"
    assert display.address_text == "$F010"
    assert display.label_text == "START"


def test_offset_without_label(sample_project, formatter) -> None:
    display = format_target(0x11, sample_project, formatter)

    assert display.offset_text == "+000011"
    assert display.address_text == "$F011"
    assert display.label_text == ""


def test_wide_address_shows_bank(sample_project, formatter) -> None:
    display = format_target(0x390, sample_project, formatter)

    assert display.address_text == "$12/3410"
    assert display.label_text == "FAR_DATA"


def test_non_unique_and_uncertain_labels_use_display_form(sample_project, formatter) -> None:
    assert format_target(0x50, sample_project, formatter).label_text == ":LOOP"
    assert format_target(0x70, sample_project, formatter).label_text == "MAYBE?"


def test_lowercase_formatter(sample_project) -> None:
    display = format_target(0x2AB, sample_project, NumberFormatter(upper_hex_digits=False))

    assert display.offset_text == "+0002ab"
    assert display.address_text == "$80ab"


def test_unmapped_offset_reports_non_addressable() -> None:
    project = DisasmProject(b"\x00" * 0x20, AddressMap(0x20, [AddressRegion(0x10, 0x10, 0x2000)]))

    display = format_target(0x04, project, NumberFormatter())

    assert display.offset_text == "+000004"
    assert display.address_text == "NA"


@pytest.mark.parametrize("text, anchor", [("START", 0), (":LOOP", 0x22), (":LOOP", 0x4E), ("F010", 0), ("FAR_DATA", 0)])
def test_formatting_resolved_label_reproduces_label(sample_project, formatter, text, anchor) -> None:
    offset = resolve(text, anchor, sample_project)

    assert format_target(offset, sample_project, formatter).label_text == text


def test_address_too_wide_for_bank_form_is_shown_in_full() -> None:
    project = DisasmProject(b"\x00" * 0x10, AddressMap(0x10, [AddressRegion(0x00, 0x10, 0x100001000)]))

    display = format_target(0x04, project, NumberFormatter())

    assert display.address_text == "$100001004"
