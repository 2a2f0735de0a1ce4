from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QApplication,
    QDialog,
    QDialogButtonBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from config_manager import AppConfig, ConfigManager
from controllers.goto_controller import GotoController
from services.disasm_project import DisasmProject
from services.instruction_preview import preview_instruction
from services.number_formatter import NumberFormatter
from services.project_loader import load_binary_project
from services.target_resolver import NO_TARGET


def _monospace_label(parent: QWidget) -> QLabel:
    label = QLabel("", parent)
    font = QFont("Monospace")
    font.setStyleHint(QFont.TypeWriter)
    label.setFont(font)
    label.setTextInteractionFlags(Qt.TextSelectableByMouse)
    return label


class GotoDialog(QDialog):
    target_changed = Signal(int)

    def __init__(
        self,
        parent: QWidget | None,
        project: DisasmProject,
        initial_offset: int,
        formatter: NumberFormatter,
        *,
        max_preview_bytes: int = 16,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Go To")
        self.setModal(True)
        self._project = project
        self._max_preview_bytes = max_preview_bytes
        self.controller = GotoController(project, initial_offset, formatter)

        layout = QVBoxLayout(self)
        layout.addWidget(
            QLabel("Enter a label, an address, or a file offset prefixed with '+':", self)
        )
        self.target_input = QLineEdit(self)
        layout.addWidget(self.target_input)

        form = QFormLayout()
        self.offset_value = _monospace_label(self)
        self.address_value = _monospace_label(self)
        self.label_value = _monospace_label(self)
        self.instruction_value = _monospace_label(self)
        form.addRow("Offset:", self.offset_value)
        form.addRow("Address:", self.address_value)
        form.addRow("Label:", self.label_value)
        form.addRow("Instruction:", self.instruction_value)
        layout.addLayout(form)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Cancel, self)
        self.go_button = QPushButton("Go", self)
        self.go_button.setDefault(True)
        self.buttons.addButton(self.go_button, QDialogButtonBox.AcceptRole)
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        layout.addWidget(self.buttons)

        self.target_input.textChanged.connect(self._handle_text_changed)
        self._update_display()
        self.target_input.setFocus()
        self.resize(420, 220)

    def target_offset(self) -> int:
        return self.controller.target_offset

    def is_valid(self) -> bool:
        return self.controller.is_valid

    def accept(self) -> None:  # type: ignore[override]
        # Enter in the line edit triggers the default button even when disabled.
        if not self.controller.is_valid:
            return
        super().accept()

    def _handle_text_changed(self, text: str) -> None:
        self.controller.process_input(text)
        self._update_display()
        self.target_changed.emit(self.controller.target_offset)

    def _update_display(self) -> None:
        display = self.controller.display
        self.offset_value.setText(display.offset_text)
        self.address_value.setText(display.address_text)
        self.label_value.setText(display.label_text)
        instruction = ""
        if self.controller.target_offset != NO_TARGET:
            instruction = preview_instruction(
                self._project,
                self.controller.target_offset,
                max_bytes=self._max_preview_bytes,
            )
        self.instruction_value.setText(instruction)
        self.go_button.setEnabled(self.controller.is_valid)


class App(QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Disassembly Navigator")
        self.config_manager = ConfigManager()
        self.config: AppConfig = self.config_manager.load()
        self.formatter = NumberFormatter(
            upper_hex_digits=self.config.upper_hex_digits,
            non_unique_label_prefix=self.config.non_unique_label_prefix,
        )
        self.project: DisasmProject | None = None
        self.current_offset = 0

        central = QWidget(self)
        layout = QVBoxLayout(central)
        row = QHBoxLayout()
        self.open_button = QPushButton("Open Binary...", central)
        self.open_button.clicked.connect(self._prompt_open_binary)
        self.goto_button = QPushButton("Go To...", central)
        self.goto_button.setEnabled(False)
        self.goto_button.clicked.connect(self.open_goto_dialog)
        self.position_label = QLabel("No project loaded", central)
        row.addWidget(self.open_button)
        row.addWidget(self.goto_button)
        row.addWidget(self.position_label, 1)
        layout.addLayout(row)
        self.console = QPlainTextEdit(central)
        self.console.setReadOnly(True)
        layout.addWidget(self.console)
        self.setCentralWidget(central)
        self.resize(760, 420)

        if self.config.last_binary_path and Path(self.config.last_binary_path).exists():
            self.load_binary(self.config.last_binary_path)

    def load_binary(self, path: str | Path) -> bool:
        try:
            project = load_binary_project(path, non_unique_prefix=self.config.non_unique_label_prefix)
        except (OSError, ValueError) as exc:
            self._append_console(f"Unable to load {path}: {exc}")
            return False
        self.set_project(project)
        self.config.last_binary_path = str(path)
        self.config_manager.save(self.config)
        self._append_console(
            f"Loaded {project.name}: {project.file_data_length} bytes, {len(project.labels)} labels"
        )
        return True

    def set_project(self, project: DisasmProject, offset: int = 0) -> None:
        self.project = project
        self.goto_button.setEnabled(True)
        self.move_to(offset)

    def move_to(self, offset: int) -> None:
        self.current_offset = offset
        if self.project is None:
            return
        anattrib = None
        if 0 <= offset < self.project.file_data_length:
            anattrib = self.project.get_anattrib(offset)
        text = self.formatter.format_offset24(offset)
        if anattrib is not None and anattrib.address >= 0:
            text += "  $" + self.formatter.format_address(anattrib.address, anattrib.address > 0xFFFF)
        self.position_label.setText(text)

    def create_goto_dialog(self) -> GotoDialog:
        if self.project is None:
            raise RuntimeError("No project loaded; open a binary first")
        return GotoDialog(
            self,
            self.project,
            self.current_offset,
            self.formatter,
            max_preview_bytes=self.config.max_preview_bytes,
        )

    def open_goto_dialog(self) -> None:
        if self.project is None:
            return
        dialog = self.create_goto_dialog()
        if dialog.exec() == QDialog.Accepted and dialog.target_offset() != NO_TARGET:
            self.move_to(dialog.target_offset())
            self._append_console(f"Moved to {self.formatter.format_offset24(dialog.target_offset())}")

    def _prompt_open_binary(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Open Binary", self.config.last_binary_path)
        if not path:
            return
        if not self.load_binary(path):
            QMessageBox.critical(self, "Open failed", f"Unable to load {path}")

    def _append_console(self, text: str) -> None:
        self.console.appendPlainText(text)


if __name__ == "__main__":
    app = QApplication(sys.argv)
    window = App()
    window.show()
    sys.exit(app.exec())
