"""
OpLauncherApp: the Textual application for the oplauncher TUI.

Pushes SearchScreen on startup; everything else is a screen on top of it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from textual.app import App
from textual.binding import Binding

from oplauncher.config import Config, get_config
from oplauncher.op.client import OpClient
from oplauncher.tui.screens import SearchScreen

logger = logging.getLogger(__name__)

CSS_PATH = Path(__file__).parent / "theme.tcss"


class OpLauncherApp(App):
    """Keyboard launcher for 1Password items."""

    TITLE = "oplauncher"
    CSS_PATH = CSS_PATH

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        client: OpClient | None = None,
        settings: Config | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.settings = settings or get_config()
        self.client = client or OpClient.from_config(self.settings)

    def on_mount(self) -> None:
        logger.info("Starting TUI with op at %s", self.client.op_path)
        self.push_screen(
            SearchScreen(
                self.client,
                generator=self.settings.generator,
                default_vault=self.settings.default_vault,
                account=self.settings.account,
            )
        )
