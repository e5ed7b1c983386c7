"""Tests for QtClipboard. Qt objects are mocked so no display is needed."""

from unittest.mock import MagicMock, patch

import pytest

from passvault.clipboard import QtClipboard


@pytest.fixture
def qt():
    with patch("passvault.clipboard.QApplication") as app, \
            patch("passvault.clipboard.QTimer") as timer:
        app.instance.return_value = MagicMock()
        system_clipboard = MagicMock()
        app.clipboard.return_value = system_clipboard
        yield app, timer, system_clipboard


class TestQtClipboard:

    def test_set_text(self, qt):
        _, timer, system_clipboard = qt
        QtClipboard().set_text("hello")
        system_clipboard.setText.assert_called_once_with("hello")
        timer.assert_not_called()

    def test_no_application(self, qt):
        app, _, system_clipboard = qt
        app.instance.return_value = None
        with pytest.raises(RuntimeError, match="No QApplication"):
            QtClipboard().set_text("hello")
        system_clipboard.setText.assert_not_called()

    def test_auto_clear_scheduled(self, qt):
        _, timer, _ = qt
        clipboard = QtClipboard()
        clipboard.set_text("secret", clear_after_ms=30000)
        timer.return_value.setSingleShot.assert_called_once_with(True)
        timer.return_value.start.assert_called_once_with(30000)
        timer.return_value.timeout.connect.assert_called_once_with(clipboard.clear_clipboard)

    def test_clear_when_content_unchanged(self, qt):
        _, _, system_clipboard = qt
        clipboard = QtClipboard()
        clipboard.set_text("secret", clear_after_ms=1000)
        system_clipboard.text.return_value = "secret"

        clipboard.clear_clipboard()

        system_clipboard.clear.assert_called_once()

    def test_no_clear_when_user_copied_something_else(self, qt):
        _, _, system_clipboard = qt
        clipboard = QtClipboard()
        clipboard.set_text("secret", clear_after_ms=1000)
        system_clipboard.text.return_value = "something else"

        clipboard.clear_clipboard()

        system_clipboard.clear.assert_not_called()

    def test_new_copy_cancels_pending_clear(self, qt):
        _, timer, system_clipboard = qt
        clipboard = QtClipboard()
        clipboard.set_text("secret", clear_after_ms=1000)
        first_timer = clipboard.clipboard_timer

        clipboard.set_text("plain")

        first_timer.stop.assert_called_once()
        system_clipboard.text.return_value = "plain"
        clipboard.clear_clipboard()
        system_clipboard.clear.assert_not_called()
