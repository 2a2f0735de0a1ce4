#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path


def main() -> int:
    root = Path(__file__).resolve().parent
    src_dir = root / "src"
    sys.path.insert(0, str(src_dir))

    # Import after sys.path adjustment so `controllers`, `services`, etc. resolve.
    from PySide6.QtWidgets import QApplication

    import app as gui_app  # type: ignore

    qt_app = QApplication(sys.argv)
    window = gui_app.App()
    if len(sys.argv) > 1:
        window.load_binary(sys.argv[1])
    window.show()
    return int(qt_app.exec())


if __name__ == "__main__":
    raise SystemExit(main())
