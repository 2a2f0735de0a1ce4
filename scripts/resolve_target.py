"""Resolve a "go to" target against a binary from the command line."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from config_manager import ConfigManager
from services.address_parser import parse_hex
from services.instruction_preview import preview_instruction
from services.number_formatter import NumberFormatter
from services.project_loader import load_binary_project
from services.target_formatter import format_target
from services.target_resolver import resolve_target


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resolve an offset, label or address inside a binary")
    parser.add_argument("binary", help="Path to the binary to navigate")
    parser.add_argument("target", help="Label, address ($1234, 12/3456) or +offset to resolve")
    parser.add_argument(
        "--anchor",
        default="0",
        help="File offset (hex) the navigation starts from; picks between non-unique labels and banks",
    )
    parser.add_argument("--config", default=None, help="Settings file (defaults to src/config/goto_settings.json)")
    parser.add_argument("--verbose", action="store_true", help="Log resolution details")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    anchor = parse_hex(args.anchor.lstrip("+"))
    if anchor is None:
        parser.error(f"Invalid anchor offset: {args.anchor}")

    config = ConfigManager(path=Path(args.config) if args.config else None).load()
    formatter = NumberFormatter(
        upper_hex_digits=config.upper_hex_digits,
        non_unique_label_prefix=config.non_unique_label_prefix,
    )
    try:
        project = load_binary_project(args.binary, non_unique_prefix=config.non_unique_label_prefix)
    except Exception as exc:  # pragma: no cover - CLI feedback path
        parser.error(str(exc))

    resolution = resolve_target(
        args.target,
        anchor,
        project,
        non_unique_prefix=config.non_unique_label_prefix,
    )
    if not resolution.is_resolved:
        print(f"Unable to resolve {args.target!r} ({resolution.outcome.value})")
        return 1

    display = format_target(resolution.offset, project, formatter)
    print(f"Offset:      {display.offset_text}")
    print(f"Address:     {display.address_text}")
    print(f"Label:       {display.label_text}")
    print(f"Instruction: {preview_instruction(project, resolution.offset, max_bytes=config.max_preview_bytes)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
