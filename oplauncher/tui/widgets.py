"""
Custom Textual widgets for the oplauncher TUI.

item_prompt: the OptionList row for one item (icon, title, vault, category).
StatusBar: bottom bar with item count, cache age and loading state.
ErrorPanel: inline error with remediation steps and a retry hint.
"""

from __future__ import annotations

from rich.text import Text
from textual.content import Content
from textual.widgets import Static

from oplauncher.display import category_icon, category_label, format_date
from oplauncher.errors import OpError
from oplauncher.search import SearchResult


def item_prompt(result: SearchResult) -> Text:
    """Build the list row for a search result. User text is never parsed as markup."""
    item = result.item
    row = Text.assemble(
        f"{category_icon(item.category)} ",
        (item.title or "(untitled)", "bold"),
        ("  " + item.vault.name, "dim"),
    )
    tail = [category_label(item.category)] if item.category else []
    if item.updated_at:
        tail.append(format_date(item.updated_at))
    if result.matched_fields:
        tail.append("matched: " + ", ".join(result.matched_fields))
    if tail:
        row.append("  " + " · ".join(tail), style="italic dim")
    return row


class StatusBar(Static):
    """Bottom status bar: item count, cache age, loading indicator."""

    DEFAULT_CSS = """
    StatusBar {
        dock: bottom;
        height: 1;
        background: $surface;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        self._busy = False
        self._total = 0
        self._shown = 0
        self._cache_age: float | None = None
        self._signed_in: bool | None = None
        super().__init__(
            Content.from_markup(self._format()),
            name=name,
            id=id,
            classes=classes,
        )

    def _format(self) -> str:
        parts = []
        if self._signed_in is False:
            parts.append("[red]●[/red] signed out")
        elif self._busy:
            parts.append("[yellow]●[/yellow] loading...")
        else:
            parts.append("[green]●[/green] ready")

        if self._shown != self._total:
            parts.append(f"{self._shown}/{self._total} items")
        else:
            parts.append(f"{self._total} items")

        if self._cache_age is not None:
            parts.append(f"cached {int(self._cache_age // 60)}m ago")

        return " | ".join(parts)

    @property
    def is_loading(self) -> bool:
        return self._busy

    def _update_text(self) -> None:
        self.update(Content.from_markup(self._format()))

    def set_loading(self, loading: bool) -> None:
        self._busy = loading
        self._update_text()

    def set_counts(self, shown: int, total: int) -> None:
        self._shown = shown
        self._total = total
        self._update_text()

    def set_cache_age(self, age: float | None) -> None:
        self._cache_age = age
        self._update_text()

    def set_signed_in(self, signed_in: bool | None) -> None:
        self._signed_in = signed_in
        self._update_text()


class ErrorPanel(Static):
    """Inline error panel shown in place of a list that failed to load."""

    DEFAULT_CSS = """
    ErrorPanel {
        margin: 1 2;
        padding: 1 2;
        border: solid $error;
        height: auto;
        display: none;
    }
    ErrorPanel.visible {
        display: block;
    }
    """

    def __init__(
        self,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        self._op_error: OpError | None = None
        super().__init__("", name=name, id=id, classes=classes)

    @property
    def error(self) -> OpError | None:
        return self._op_error

    def _format(self) -> str:
        if self._op_error is None:
            return ""
        lines = [self._op_error.title, "", self._op_error.message, "", "Solutions:"]
        lines += [f"  {n}. {step}" for n, step in enumerate(self._op_error.remediation, 1)]
        lines += ["", "Press ctrl+r to retry."]
        return "\n".join(lines)

    def show_error(self, error: OpError) -> None:
        self._op_error = error
        self.update(Text(self._format()))
        self.add_class("visible")

    def clear_error(self) -> None:
        self._op_error = None
        self.update("")
        self.remove_class("visible")
