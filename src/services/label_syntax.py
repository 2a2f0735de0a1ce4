from __future__ import annotations

import re
from typing import NamedTuple

from models.symbol import UNCERTAIN_CHAR, LabelAnnotation

MIN_LABEL_LEN = 2
MAX_LABEL_LEN = 32

FIRST_CHAR_PATTERN = re.compile(r"[A-Za-z_]")
LABEL_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class LabelCheck(NamedTuple):
    trimmed_name: str
    is_valid: bool
    is_len_valid: bool
    is_first_char_valid: bool
    has_non_unique_prefix: bool
    annotation: LabelAnnotation


def trim_and_validate_label(label: str, non_unique_prefix: str) -> LabelCheck:
    """Strip annotation and non-unique prefix characters, then check label syntax.

    A trailing ``?`` marks the label as uncertain. A leading ``non_unique_prefix``
    character is only honored when something follows it.
    """
    text = (label or "").strip()
    annotation = LabelAnnotation.NONE
    if len(text) >= 2 and text.endswith(UNCERTAIN_CHAR):
        annotation = LabelAnnotation.UNCERTAIN
        text = text[:-1]

    has_prefix = False
    if non_unique_prefix and len(text) >= 2 and text.startswith(non_unique_prefix):
        has_prefix = True
        text = text[len(non_unique_prefix):]

    is_len_valid = MIN_LABEL_LEN <= len(text) <= MAX_LABEL_LEN
    is_first_char_valid = bool(text) and FIRST_CHAR_PATTERN.fullmatch(text[0]) is not None
    is_valid = is_len_valid and LABEL_PATTERN.fullmatch(text) is not None
    return LabelCheck(text, is_valid, is_len_valid, is_first_char_valid, has_prefix, annotation)
