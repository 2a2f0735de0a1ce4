from __future__ import annotations

from models.address_region import NON_ADDR
from models.project_view import ProjectView
from models.target_display import TargetDisplay
from services.number_formatter import NumberFormatter
from services.target_resolver import NO_TARGET

ADDRESS_PREFIX = "$"
NON_ADDR_TEXT = "NA"


def format_target(offset: int, project: ProjectView, formatter: NumberFormatter) -> TargetDisplay:
    """Describe a resolved offset; all fields are empty for ``NO_TARGET``."""
    if offset == NO_TARGET or not 0 <= offset < project.file_data_length:
        return TargetDisplay()

    attrib = project.get_anattrib(offset)
    if attrib.address == NON_ADDR:
        address_text = NON_ADDR_TEXT
    else:
        address_text = ADDRESS_PREFIX + formatter.format_address(attrib.address, attrib.address > 0xFFFF)
    label_text = attrib.symbol.generate_display_label(formatter) if attrib.symbol is not None else ""
    return TargetDisplay(
        offset_text=formatter.format_offset24(offset),
        address_text=address_text,
        label_text=label_text,
    )
