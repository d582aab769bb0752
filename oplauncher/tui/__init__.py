"""
oplauncher TUI: keyboard launcher for 1Password items.

Run with:
    oplauncher tui
"""

from __future__ import annotations


def check_textual() -> bool:
    """Check if Textual is installed and available."""
    try:
        import textual  # noqa: F401

        return True
    except ImportError:
        return False
