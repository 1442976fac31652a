"""
Qt GUI for the secure password generator.

The window only reads its controls into a GenerationConfig, renders the
GeneratedPassword, and renders ClipboardEvents on the status line.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from qiskit.exceptions import QiskitError
from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QFont
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QComboBox,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from .clipboard import QtClipboard
from .config import CLIPBOARD_CLEAR_SECONDS, DEFAULT_CONFIG, config_from_options
from .errors import ConfigurationError
from .generator import GeneratedPassword, generate
from .guard import ClipboardEvent, ClipboardEventKind, ClipboardGuard
from .random_source import RandomSource, make_source
from .scheduler import QtScheduler

logger = logging.getLogger(__name__)

STATUS_COLORS = {
    ClipboardEventKind.SUCCESS: "#2e7d32",
    ClipboardEventKind.CLEARED: "#2e7d32",
    ClipboardEventKind.COUNTDOWN_TICK: "#ef6c00",
    ClipboardEventKind.WARNING: "#ef6c00",
    ClipboardEventKind.FAILURE: "#c62828",
}


class GeneratorWindow(QMainWindow):
    """
    Generator window: options + password display + clipboard status.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Secure Password Generator")

        self._sources: dict[str, RandomSource] = {}
        self._result: Optional[GeneratedPassword] = None

        self.guard = ClipboardGuard(QtClipboard(), QtScheduler(self))
        self.guard.subscribe(self._on_clipboard_event)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(16)
        layout.addWidget(self._build_config_group())
        layout.addWidget(self._build_password_group())
        layout.addWidget(self._build_status_label())
        self.setCentralWidget(central)

        self._connect_option_signals()

    # -- groups --

    def _build_config_group(self) -> QGroupBox:
        group = QGroupBox("Options")
        layout = QVBoxLayout()

        length_row = QHBoxLayout()
        length_row.addWidget(QLabel("Password length"))
        self.length_spin = QSpinBox()
        self.length_spin.setRange(4, 128)
        self.length_spin.setValue(DEFAULT_CONFIG.length)
        length_row.addWidget(self.length_spin)
        layout.addLayout(length_row)

        self.uppercase_check = QCheckBox("Uppercase (A-Z)")
        self.lowercase_check = QCheckBox("Lowercase (a-z)")
        self.digits_check = QCheckBox("Numbers (0-9)")
        self.symbols_check = QCheckBox("Symbols (!@#$...)")
        for check in self._class_checks():
            check.setChecked(True)
            layout.addWidget(check)

        self.avoid_ambiguous_check = QCheckBox("Avoid similar characters (0 O 1 l I)")
        layout.addWidget(self.avoid_ambiguous_check)

        exclude_row = QHBoxLayout()
        exclude_row.addWidget(QLabel("Exclude characters"))
        self.exclude_edit = QLineEdit()
        self.exclude_edit.setPlaceholderText("e.g. {}[]")
        exclude_row.addWidget(self.exclude_edit, 1)
        layout.addLayout(exclude_row)

        self.auto_clear_check = QCheckBox(
            f"Auto-clear clipboard after {CLIPBOARD_CLEAR_SECONDS} seconds"
        )
        self.auto_clear_check.setChecked(True)
        layout.addWidget(self.auto_clear_check)

        source_row = QHBoxLayout()
        source_row.addWidget(QLabel("Random source"))
        self.source_combo = QComboBox()
        self.source_combo.addItem("System (secrets)", "system")
        self.source_combo.addItem("Quantum simulator", "quantum")
        source_row.addWidget(self.source_combo, 1)
        layout.addLayout(source_row)

        group.setLayout(layout)
        return group

    def _build_password_group(self) -> QGroupBox:
        group = QGroupBox("Password")
        layout = QVBoxLayout()

        self.password_field = QLineEdit()
        self.password_field.setReadOnly(True)
        pw_font = QFont("Consolas")
        pw_font.setPointSize(14)
        self.password_field.setFont(pw_font)
        self.password_field.setPlaceholderText("Click Generate to create a password...")
        layout.addWidget(self.password_field)

        buttons_row = QHBoxLayout()
        self.generate_button = QPushButton("Generate")
        self.generate_button.clicked.connect(self.generate_password)
        self.copy_button = QPushButton("Copy to Clipboard")
        self.copy_button.setEnabled(False)
        self.copy_button.clicked.connect(self.copy_to_clipboard)
        buttons_row.addWidget(self.generate_button)
        buttons_row.addWidget(self.copy_button)
        layout.addLayout(buttons_row)

        self.strength_bar = QProgressBar()
        self.strength_bar.setRange(0, 100)
        self.strength_bar.setTextVisible(False)
        self.strength_label = QLabel("Password Strength: –")
        self.entropy_label = QLabel("Entropy: –")
        layout.addWidget(self.strength_bar)
        layout.addWidget(self.strength_label)
        layout.addWidget(self.entropy_label)

        group.setLayout(layout)
        return group

    def _build_status_label(self) -> QLabel:
        self.status_label = QLabel("")
        self.status_label.setAlignment(Qt.AlignCenter)
        return self.status_label

    def _class_checks(self) -> tuple[QCheckBox, ...]:
        return (
            self.uppercase_check,
            self.lowercase_check,
            self.digits_check,
            self.symbols_check,
        )

    def _connect_option_signals(self) -> None:
        # Options only regenerate once a password is on screen.
        for check in (*self._class_checks(), self.avoid_ambiguous_check):
            check.toggled.connect(self._regenerate_if_shown)
        self.exclude_edit.editingFinished.connect(self._regenerate_if_shown)
        self.length_spin.valueChanged.connect(self._regenerate_if_shown)
        self.source_combo.currentIndexChanged.connect(self._regenerate_if_shown)

    # -- actions --

    def _current_source(self) -> RandomSource:
        name = self.source_combo.currentData()
        if name not in self._sources:
            self._sources[name] = make_source(name)
        return self._sources[name]

    def _regenerate_if_shown(self, *_signal_args) -> None:
        if self._result is not None:
            self.generate_password()

    def generate_password(self) -> None:
        try:
            config = config_from_options(
                length=self.length_spin.value(),
                uppercase=self.uppercase_check.isChecked(),
                lowercase=self.lowercase_check.isChecked(),
                digits=self.digits_check.isChecked(),
                symbols=self.symbols_check.isChecked(),
                avoid_ambiguous=self.avoid_ambiguous_check.isChecked(),
                exclude=self.exclude_edit.text(),
            )
            result = generate(config, self._current_source())
        except ConfigurationError as exc:
            # Keep the previous password on screen.
            logger.warning("Password not generated: %s", exc)
            self._show_status(str(exc), ClipboardEventKind.FAILURE)
            return
        except (ValueError, QiskitError) as exc:
            # Raised by the quantum source (simulator limits or run errors).
            logger.warning("Random source failed: %s", exc)
            self._show_status(
                f"Random source failed: {exc}", ClipboardEventKind.FAILURE
            )
            return

        self._result = result
        self.password_field.setText(result.text)
        self.copy_button.setEnabled(True)

        strength = result.strength
        self.strength_bar.setValue(strength.percent)
        self.strength_label.setText(f"Password Strength: {strength.label}")
        self.entropy_label.setText(f"Entropy: {round(result.entropy_bits)} bits")

    def copy_to_clipboard(self) -> None:
        if self._result is None:
            return
        self.guard.copy(self._result.text, auto_clear=self.auto_clear_check.isChecked())

    # -- status line --

    def _on_clipboard_event(self, event: ClipboardEvent) -> None:
        self._show_status(event.message, event.kind)

    def _show_status(self, message: str, kind: ClipboardEventKind) -> None:
        color = STATUS_COLORS.get(kind)
        self.status_label.setStyleSheet(f"color: {color};" if color else "")
        self.status_label.setText(message)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        self.guard.close()
        super().closeEvent(event)


def main() -> int:
    """
    Entry point for the `spgen-gui` console script and `run_spgen_gui.py`.
    """
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
    app = QApplication.instance() or QApplication(sys.argv)
    window = GeneratorWindow()
    window.resize(480, 560)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
