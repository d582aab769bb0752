"""Clipboard access via pyperclip."""

from __future__ import annotations

import logging

import pyperclip
from pyperclip import PyperclipException

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str) -> tuple[bool, str]:
    """Copy text, handling headless systems without a clipboard.

    Returns:
        (True, "") on success
        (False, error_message) on failure
    """
    try:
        pyperclip.copy(text)
        return True, ""
    except PyperclipException as e:
        logger.debug("Clipboard unavailable: %s", e)
        return False, "Clipboard not available (no X11/Wayland or pbcopy)"
