"""Lightweight persistence for user-configurable settings."""

from __future__ import annotations

from dataclasses import asdict, dataclass
import json
from pathlib import Path
from typing import Any

CONFIG_PATH = Path(__file__).resolve().parent / "config" / "goto_settings.json"


@dataclass
class AppConfig:
    non_unique_label_prefix: str = ":"
    upper_hex_digits: bool = True
    last_binary_path: str = ""
    max_preview_bytes: int = 16


class ConfigManager:
    def __init__(self, path: Path | None = None) -> None:
        self.path = path or CONFIG_PATH
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> AppConfig:
        if not self.path.exists():
            return self._save_default()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            return self._save_default()
        if not isinstance(data, dict):
            return self._save_default()

        merged: dict[str, Any] = asdict(AppConfig())
        merged.update({k: v for k, v in data.items() if k in merged})
        config = AppConfig(**merged)
        # The prefix must be a single character that cannot start a label.
        prefix = config.non_unique_label_prefix
        if not isinstance(prefix, str) or len(prefix) != 1 or prefix.isalnum() or prefix in "_+$":
            config.non_unique_label_prefix = AppConfig.non_unique_label_prefix
        if not isinstance(config.max_preview_bytes, int) or config.max_preview_bytes <= 0:
            config.max_preview_bytes = AppConfig.max_preview_bytes
        config.upper_hex_digits = bool(config.upper_hex_digits)
        return config

    def save(self, config: AppConfig) -> None:
        self.path.write_text(json.dumps(asdict(config), indent=2), encoding="utf-8")

    def _save_default(self) -> AppConfig:
        config = AppConfig()
        self.save(config)
        return config
