"""
System clipboard access.
"""

from __future__ import annotations

from typing import Protocol

from PySide6.QtGui import QGuiApplication

from .errors import ClipboardWriteError


class Clipboard(Protocol):
    def write(self, text: str) -> None:
        """
        Replace the clipboard content with `text`.

        Raises:
            ClipboardWriteError: If the platform refuses the write.
        """
        ...


class QtClipboard:
    """
    Clipboard backed by QGuiApplication.clipboard().

    Writing an empty string clears the clipboard. Requires a
    QGuiApplication (or QApplication) instance.
    """

    def write(self, text: str) -> None:
        clipboard = QGuiApplication.clipboard()
        if clipboard is None:
            raise ClipboardWriteError("No clipboard available; is a QGuiApplication running?")
        try:
            if text:
                clipboard.setText(text)
            else:
                clipboard.clear()
        except Exception as exc:  # noqa: BLE001
            # Windows clipboard can be temporarily locked by other apps
            raise ClipboardWriteError(
                "Could not write to the clipboard; another application may be using it."
            ) from exc
