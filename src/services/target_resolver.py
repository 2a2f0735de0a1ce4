"""Turn free-form "go to" input into a file offset.

Input is tried as, in order: a ``+``-prefixed hexadecimal file offset, a label,
and a numeric address. Anything that does not resolve yields ``NO_TARGET``;
malformed input is never an error.
"""

from __future__ import annotations

from enum import Enum
import logging
from typing import NamedTuple

from models.project_view import ProjectView
from services.address_parser import parse_address, parse_hex
from services.label_syntax import trim_and_validate_label

logger = logging.getLogger(__name__)

NO_TARGET = -1
MAX_ADDRESS = 1 << 24
OFFSET_PREFIX = "+"
DEFAULT_NON_UNIQUE_PREFIX = ":"


class ResolveOutcome(Enum):
    EMPTY = "empty"
    OFFSET = "offset"
    BAD_OFFSET = "bad-offset"
    LABEL = "label"
    LABEL_NOT_FOUND = "label-not-found"
    ADDRESS = "address"
    ADDRESS_BROKE_ISOLATION = "address-broke-isolation"
    NOT_ADDRESS = "not-address"
    ADDRESS_NOT_MAPPED = "address-not-mapped"


class Resolution(NamedTuple):
    offset: int
    outcome: ResolveOutcome

    @property
    def is_resolved(self) -> bool:
        return self.offset != NO_TARGET


def resolve_target(
    raw: str,
    anchor_offset: int,
    project: ProjectView,
    *,
    non_unique_prefix: str = DEFAULT_NON_UNIQUE_PREFIX,
) -> Resolution:
    text = (raw or "").strip()
    if not text:
        return Resolution(NO_TARGET, ResolveOutcome.EMPTY)

    if text.startswith(OFFSET_PREFIX):
        # A leading '+' can only be an offset.
        result = _resolve_offset(text[len(OFFSET_PREFIX):], project)
    else:
        label_result = _resolve_label(text, anchor_offset, project, non_unique_prefix)
        if label_result is not None and label_result.is_resolved:
            result = label_result
        else:
            result = _resolve_address(text, anchor_offset, project)
            if label_result is not None and result.outcome is ResolveOutcome.NOT_ADDRESS:
                result = label_result

    logger.debug("Resolved %r from +%06x: %s -> %d", text, anchor_offset, result.outcome.value, result.offset)
    return result


def resolve(
    raw: str,
    anchor_offset: int,
    project: ProjectView,
    *,
    non_unique_prefix: str = DEFAULT_NON_UNIQUE_PREFIX,
) -> int:
    """Return the file offset ``raw`` refers to, or ``NO_TARGET``."""
    return resolve_target(raw, anchor_offset, project, non_unique_prefix=non_unique_prefix).offset


def is_acceptable(
    raw: str,
    anchor_offset: int,
    project: ProjectView,
    *,
    non_unique_prefix: str = DEFAULT_NON_UNIQUE_PREFIX,
) -> bool:
    return resolve(raw, anchor_offset, project, non_unique_prefix=non_unique_prefix) != NO_TARGET


def _resolve_offset(text: str, project: ProjectView) -> Resolution:
    if text[:2].lower() == "0x":
        text = text[2:]
    offset = parse_hex(text)
    if offset is None:
        return Resolution(NO_TARGET, ResolveOutcome.BAD_OFFSET)
    if 0 <= offset < project.file_data_length:
        return Resolution(offset, ResolveOutcome.OFFSET)
    return Resolution(NO_TARGET, ResolveOutcome.BAD_OFFSET)


def _resolve_label(text: str, anchor_offset: int, project: ProjectView, non_unique_prefix: str) -> Resolution | None:
    check = trim_and_validate_label(text, non_unique_prefix)
    if not check.is_valid:
        return None

    offset = NO_TARGET
    if check.has_non_unique_prefix:
        symbol = project.find_best_non_unique_label(check.trimmed_name, anchor_offset)
        if symbol is not None:
            offset = project.find_label_offset_by_name(symbol.label)
    else:
        offset = project.find_label_offset_by_name(check.trimmed_name)

    if offset >= 0:
        return Resolution(offset, ResolveOutcome.LABEL)
    return Resolution(NO_TARGET, ResolveOutcome.LABEL_NOT_FOUND)


def _resolve_address(text: str, anchor_offset: int, project: ProjectView) -> Resolution:
    address = parse_address(text, MAX_ADDRESS)
    if address is None:
        return Resolution(NO_TARGET, ResolveOutcome.NOT_ADDRESS)

    # The anchor keeps us in the current segment when address ranges overlap.
    offset = project.address_to_offset(anchor_offset, address)
    if offset >= 0:
        return Resolution(offset, ResolveOutcome.ADDRESS)

    # Without this, a selection inside a region that disallows outward
    # resolution could not reach most addresses.
    offset = project.address_to_offset(anchor_offset, address, True)
    if offset >= 0:
        return Resolution(offset, ResolveOutcome.ADDRESS_BROKE_ISOLATION)
    return Resolution(NO_TARGET, ResolveOutcome.ADDRESS_NOT_MAPPED)
