"""
Clipboard access for the vault view.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from PyQt5.QtCore import QTimer
from PyQt5.QtWidgets import QApplication

logger = logging.getLogger(__name__)


class Clipboard(ABC):
    """Something the view can write a string to."""

    @abstractmethod
    def set_text(self, text: str, clear_after_ms: Optional[int] = None) -> None:
        """
        Put ``text`` on the clipboard.

        Args:
            text: The text to copy
            clear_after_ms: If given, clear the clipboard after this many
                milliseconds, unless its content has changed meanwhile
        """


class QtClipboard(Clipboard):
    """System clipboard through Qt. Requires a running QApplication."""

    def __init__(self):
        self._pending_text: Optional[str] = None
        self.clipboard_timer: Optional[QTimer] = None

    def _clipboard(self):
        if QApplication.instance() is None:
            raise RuntimeError("No QApplication is running")
        return QApplication.clipboard()

    def set_text(self, text: str, clear_after_ms: Optional[int] = None) -> None:
        clipboard = self._clipboard()
        clipboard.setText(text)

        if self.clipboard_timer is not None:
            self.clipboard_timer.stop()
            self.clipboard_timer = None
        self._pending_text = None

        if clear_after_ms:
            self._pending_text = text
            self.clipboard_timer = QTimer()
            self.clipboard_timer.setSingleShot(True)
            self.clipboard_timer.timeout.connect(self.clear_clipboard)
            self.clipboard_timer.start(clear_after_ms)
            logger.debug(f"Clipboard will be cleared in {clear_after_ms} ms")

    def clear_clipboard(self) -> None:
        """Clear the clipboard if it still holds the text we put there."""
        pending, self._pending_text = self._pending_text, None
        self.clipboard_timer = None
        if pending is None:
            return
        clipboard = self._clipboard()
        if clipboard.text() == pending:
            clipboard.clear()
            logger.info("Clipboard cleared")
