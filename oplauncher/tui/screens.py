"""
Screens for the oplauncher TUI.

SearchScreen is the launcher itself: search box, ranked results, row actions.
The others are pushed on top of it: item details, password generator, login
create/edit form, vault browser, and setup/status.
"""

from __future__ import annotations

import logging
import webbrowser
from typing import Any

from rich.text import Text
from textual import on, work
from textual.app import ComposeResult, SuspendNotSupported
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.screen import Screen
from textual.validation import Number
from textual.widgets import (
    Button,
    Checkbox,
    Footer,
    Header,
    Input,
    Label,
    Markdown,
    OptionList,
    Select,
    Static,
    TextArea,
)
from textual.widgets.option_list import Option

from oplauncher import cache as cache_keys
from oplauncher.clipboard import copy_to_clipboard
from oplauncher.config import GeneratorDefaults
from oplauncher.display import category_icon, category_label, format_date, mask_password
from oplauncher.errors import INSTALL_GUIDE_URL, ErrorKind, OpError
from oplauncher.op.client import OpClient
from oplauncher.op.commands import (
    MAX_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH,
    LoginRequest,
    PasswordOptions,
)
from oplauncher.op.models import Item, Vault
from oplauncher.op.prerequisites import interactive_signin
from oplauncher.search import SearchResult, rank
from oplauncher.tui.widgets import ErrorPanel, StatusBar, item_prompt

logger = logging.getLogger(__name__)

BACK = Binding("escape", "app.pop_screen", "Back", show=True)


def _notify_error(screen: Screen, error: OpError) -> None:
    screen.notify(error.message, title=error.title, severity="error")


class SearchScreen(Screen):
    """Search box over all items with copy/open/edit row actions."""

    BINDINGS = [
        Binding("ctrl+u", "copy_username", "Username", priority=True),
        Binding("ctrl+t", "copy_otp", "OTP", priority=True),
        Binding("ctrl+d", "details", "Details", priority=True),
        Binding("ctrl+e", "edit", "Edit", priority=True),
        Binding("ctrl+o", "open_url", "Open URL", priority=True),
        Binding("ctrl+r", "refresh", "Refresh", priority=True),
        Binding("ctrl+g", "generate", "Generate", priority=True),
        Binding("ctrl+n", "new_login", "New", priority=True),
        Binding("ctrl+l", "vaults", "Vaults", priority=True),
        Binding("ctrl+s", "setup", "Status", priority=True),
    ]

    def __init__(
        self,
        client: OpClient,
        *,
        generator: GeneratorDefaults | None = None,
        default_vault: str = "",
        account: str = "",
    ) -> None:
        super().__init__()
        self.client = client
        self.generator = generator or GeneratorDefaults()
        self.default_vault = default_vault
        self.account = account
        self._items: list[Item] = []
        self._results: list[SearchResult] = []
        self._search_text = ""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(placeholder="Search 1Password items... (/help for commands)", id="search-input")
        yield ErrorPanel(id="error-panel")
        yield OptionList(id="results")
        yield Static("No items found. Try a different search term.", id="empty-view")
        yield StatusBar(id="status-bar")
        yield Footer()

    @property
    def status_bar(self) -> StatusBar:
        return self.query_one("#status-bar", StatusBar)

    @property
    def results(self) -> list[SearchResult]:
        return self._results

    @property
    def selected_item(self) -> Item | None:
        index = self.query_one("#results", OptionList).highlighted
        if index is None or index >= len(self._results):
            return None
        return self._results[index].item

    def on_mount(self) -> None:
        self.query_one("#empty-view").display = False
        self.query_one("#search-input", Input).focus()
        self.load_items()

    @work(exclusive=True, group="items")
    async def load_items(self) -> None:
        """Show the cached list at once, then always re-fetch from op."""
        panel = self.query_one("#error-panel", ErrorPanel)
        panel.clear_error()
        self.status_bar.set_loading(True)

        cached = self.client.cached_items()
        if cached is not None:
            self.set_items(cached)

        try:
            items = await self.client.list_items()
        except OpError as e:
            logger.warning("Loading items failed: %s (%s)", e.message, e.kind)
            self.status_bar.set_loading(False)
            if e.kind is ErrorKind.AUTH_REQUIRED:
                self.status_bar.set_signed_in(False)
            panel.show_error(e)
            return

        self.status_bar.set_signed_in(True)
        self.status_bar.set_loading(False)
        self.set_items(items)

    def set_items(self, items: list[Item]) -> None:
        self._items = items
        self.apply_filter()

    def apply_filter(self) -> None:
        self._results = rank(self._items, self._search_text)
        option_list = self.query_one("#results", OptionList)
        option_list.clear_options()
        option_list.add_options([Option(item_prompt(r)) for r in self._results])
        if self._results:
            option_list.highlighted = 0

        self.query_one("#empty-view").display = not self._results and not self.status_bar.is_loading
        self.status_bar.set_counts(len(self._results), len(self._items))
        self.status_bar.set_cache_age(self.client.cache.age(cache_keys.ITEMS))

    @on(Input.Changed, "#search-input")
    def on_search_changed(self, event: Input.Changed) -> None:
        if event.value.startswith("/"):
            return
        self._search_text = event.value
        self.apply_filter()

    @on(Input.Submitted, "#search-input")
    async def on_search_submitted(self, event: Input.Submitted) -> None:
        text = event.value.strip()
        if text.startswith("/"):
            from oplauncher.tui.commands import handle_command

            handled, output = await handle_command(self, text)
            if handled:
                event.input.value = ""
                if output:
                    self.notify(output)
                return
        self.action_copy_password()

    @on(OptionList.OptionSelected, "#results")
    def on_result_selected(self, event: OptionList.OptionSelected) -> None:
        self.action_copy_password()

    async def on_key(self, event) -> None:
        """Up/down in the search box move the result highlight."""
        search = self.query_one("#search-input", Input)
        if not search.has_focus or event.key not in ("up", "down"):
            return
        option_list = self.query_one("#results", OptionList)
        if event.key == "down":
            option_list.action_cursor_down()
        else:
            option_list.action_cursor_up()
        event.prevent_default()
        event.stop()

    # ── Row actions ──

    def _require_item(self) -> Item | None:
        item = self.selected_item
        if item is None:
            self.notify("No item selected", severity="warning")
        return item

    @work(group="row-action")
    async def copy_field(self, item: Item, which: str) -> None:
        """Fetch password/username/otp for an item and copy it."""
        label = {"password": "Password", "username": "Username", "otp": "OTP"}[which]
        try:
            if which == "password":
                value = await self.client.get_password(item.id)
            elif which == "username":
                value = item.username or await self.client.get_username(item.id)
            else:
                otp = await self.client.get_otp(item)
                if otp is None:
                    self.notify(
                        "This item does not have an OTP field", title="No OTP", severity="warning"
                    )
                    return
                value = otp
        except OpError as e:
            _notify_error(self, e)
            return

        ok, err = copy_to_clipboard(value)
        if ok:
            self.notify(f"{label} for {item.title} copied to clipboard", title=f"{label} copied")
        else:
            self.notify(err, title="Copy failed", severity="error")

    def action_copy_password(self) -> None:
        item = self._require_item()
        if item:
            self.copy_field(item, "password")

    def action_copy_username(self) -> None:
        item = self._require_item()
        if item:
            self.copy_field(item, "username")

    def action_copy_otp(self) -> None:
        item = self._require_item()
        if item:
            self.copy_field(item, "otp")

    def action_details(self) -> None:
        item = self._require_item()
        if item:
            self.app.push_screen(ItemDetailScreen(self.client, item))

    def action_edit(self) -> None:
        item = self._require_item()
        if item:
            self.app.push_screen(LoginFormScreen(self.client, item=item), self._after_save)

    def action_open_url(self) -> None:
        item = self._require_item()
        if item is None:
            return
        url = item.primary_url
        if not url:
            self.notify(f"{item.title} has no URL", severity="warning")
            return
        webbrowser.open(url)
        self.notify(f"Opened {url}")

    def action_refresh(self) -> None:
        self.load_items()

    def action_generate(self) -> None:
        self.app.push_screen(GeneratePasswordScreen(self.client, self.generator))

    def action_new_login(self) -> None:
        self.app.push_screen(
            LoginFormScreen(self.client, default_vault=self.default_vault), self._after_save
        )

    def action_vaults(self) -> None:
        self.app.push_screen(VaultsScreen(self.client))

    def action_setup(self) -> None:
        self.app.push_screen(SetupScreen(self.client, account=self.account), self._after_setup)

    def _after_save(self, item: Item | None) -> None:
        if item is not None:
            self.load_items()

    def _after_setup(self, signed_in: bool | None) -> None:
        if signed_in:
            self.load_items()


def item_markdown(item: Item) -> str:
    """Render an item as markdown. Concealed values are masked."""
    lines = [f"# {category_icon(item.category)} {item.title}", ""]
    lines.append(f"**Category:** {category_label(item.category)}  ")
    lines.append(f"**Vault:** {item.vault.name or item.vault.id}")
    lines.append("")

    if item.urls:
        lines += ["## URLs", ""]
        lines += [f"- {u.href}" + (f" ({u.label})" if u.label else "") for u in item.urls]
        lines.append("")

    shown = [f for f in item.fields if f.value and (f.purpose or "").upper() != "NOTES"]
    if shown:
        lines += ["## Fields", "", "| Field | Value |", "|---|---|"]
        for f in shown:
            secret = f.concealed or f.type.upper() == "OTP"
            value = mask_password(f.value or "") if secret else f.value
            section = f"{f.section.label} / " if f.section and f.section.label else ""
            lines.append(f"| {section}{f.label} | {value} |")
        lines.append("")

    if item.notes:
        lines += ["## Notes", "", item.notes, ""]

    lines += ["---", ""]
    if item.created_at:
        lines.append(f"Created: {format_date(item.created_at)}  ")
    if item.updated_at:
        lines.append(f"Updated: {format_date(item.updated_at)}  ")
    if item.last_edited_by:
        lines.append(f"Last edited by: {item.last_edited_by}")
    return "\n".join(lines)


class ItemDetailScreen(Screen):
    """Full item view, fetched with `op item get`."""

    BINDINGS = [BACK]

    def __init__(self, client: OpClient, item: Item) -> None:
        super().__init__()
        self.client = client
        self.item = item

    def compose(self) -> ComposeResult:
        yield Header()
        yield VerticalScroll(Markdown(item_markdown(self.item), id="detail"))
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = self.item.title
        self.load_detail()

    @work(exclusive=True)
    async def load_detail(self) -> None:
        try:
            self.item = await self.client.get_item(self.item.id)
        except OpError as e:
            _notify_error(self, e)
            return
        await self.query_one("#detail", Markdown).update(item_markdown(self.item))


class GeneratePasswordScreen(Screen):
    """Password generator form. op does the generating."""

    BINDINGS = [
        BACK,
        Binding("ctrl+g", "generate", "Generate", priority=True),
        Binding("ctrl+y", "copy", "Copy", priority=True),
    ]

    def __init__(self, client: OpClient, defaults: GeneratorDefaults | None = None) -> None:
        super().__init__()
        self.client = client
        self.defaults = defaults or GeneratorDefaults()
        self.generated = ""
        self.length_error = ""

    def compose(self) -> ComposeResult:
        d = self.defaults
        yield Header()
        with VerticalScroll(id="generator-form"):
            yield Label(f"Length ({MIN_PASSWORD_LENGTH}-{MAX_PASSWORD_LENGTH})")
            yield Input(
                value=str(d.length),
                type="integer",
                id="length",
                validators=[Number(minimum=MIN_PASSWORD_LENGTH, maximum=MAX_PASSWORD_LENGTH)],
            )
            yield Static("", id="length-error")
            yield Checkbox("Uppercase letters (A-Z)", d.uppercase, id="uppercase")
            yield Checkbox("Lowercase letters (a-z)", d.lowercase, id="lowercase")
            yield Checkbox("Digits (0-9)", d.digits, id="digits")
            yield Checkbox("Symbols", d.symbols, id="symbols")
            yield Checkbox("Exclude ambiguous characters", d.exclude_ambiguous, id="exclude_ambiguous")
            with Horizontal(id="generator-buttons"):
                yield Button("Generate", id="generate", variant="primary")
                yield Button("Copy", id="copy")
            yield Static("", id="generated")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = "Generate Password"

    def options(self) -> PasswordOptions:
        raw = self.query_one("#length", Input).value.strip()
        try:
            length = int(raw)
        except ValueError:
            raise OpError(ErrorKind.CONFIGURATION, "Length must be a whole number") from None
        return PasswordOptions(
            length=length,
            uppercase=self.query_one("#uppercase", Checkbox).value,
            lowercase=self.query_one("#lowercase", Checkbox).value,
            digits=self.query_one("#digits", Checkbox).value,
            symbols=self.query_one("#symbols", Checkbox).value,
            exclude_ambiguous=self.query_one("#exclude_ambiguous", Checkbox).value,
        )

    @on(Input.Changed, "#length")
    def on_length_changed(self, event: Input.Changed) -> None:
        try:
            PasswordOptions(length=int(event.value.strip())).validate()
        except ValueError:
            self.length_error = "Length must be a whole number"
        except OpError as e:
            self.length_error = e.message
        else:
            self.length_error = ""
        self.query_one("#length-error", Static).update(Text(self.length_error, style="red"))

    def action_generate(self) -> None:
        self.generate()

    def action_copy(self) -> None:
        if not self.generated:
            self.notify("Generate a password first", severity="warning")
            return
        ok, err = copy_to_clipboard(self.generated)
        if ok:
            self.notify("Password copied to clipboard", title="Copied")
        else:
            self.notify(err, title="Copy failed", severity="error")

    @on(Button.Pressed, "#generate")
    def on_generate_pressed(self) -> None:
        self.generate()

    @on(Button.Pressed, "#copy")
    def on_copy_pressed(self) -> None:
        self.action_copy()

    @work(exclusive=True)
    async def generate(self) -> None:
        try:
            password = await self.client.generate_password(self.options())
        except OpError as e:
            _notify_error(self, e)
            return
        self.generated = password
        self.query_one("#generated", Static).update(Text(password, style="bold"))


class LoginFormScreen(Screen):
    """Create a login, or edit one when `item` is given. Dismisses with the saved Item."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
        Binding("ctrl+s", "save", "Save", priority=True),
    ]

    FIELDS = ("title", "username", "password", "url", "notes")

    def __init__(
        self,
        client: OpClient,
        *,
        item: Item | None = None,
        default_vault: str = "",
    ) -> None:
        super().__init__()
        self.client = client
        self.item = item
        self.default_vault = default_vault
        self._original: dict[str, str] = {}

    @property
    def editing(self) -> bool:
        return self.item is not None

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="login-form"):
            yield Label("Title")
            yield Input(placeholder="Example.com", id="title")
            if not self.editing:
                yield Label("Vault")
                yield Select([], prompt="Vault", id="vault")
            yield Label("Username")
            yield Input(placeholder="user@example.com", id="username")
            yield Label("Password")
            yield Input(placeholder="Password", password=True, id="password")
            yield Label("URL")
            yield Input(placeholder="https://example.com", id="url")
            yield Label("Notes")
            yield TextArea(id="notes")
            yield Button(
                "Save Changes" if self.editing else "Create Login Item",
                id="save",
                variant="primary",
            )
        yield Footer()

    def on_mount(self) -> None:
        if self.item is not None:
            self.sub_title = f"Edit {self.item.title}"
            self.load_item()
        else:
            self.sub_title = "New Login Item"
            self.load_vaults()
        self.query_one("#title", Input).focus()

    @work(exclusive=True, group="form-load")
    async def load_vaults(self) -> None:
        try:
            vaults = self.client.cached_vaults() or await self.client.list_vaults()
        except OpError as e:
            self.notify(e.message, title="Failed to load vaults", severity="error")
            return
        select = self.query_one("#vault", Select)
        select.set_options([(v.name or v.id, v.id) for v in vaults])
        chosen = next(
            (v for v in vaults if self.default_vault in (v.id, v.name)),
            vaults[0] if vaults else None,
        )
        if chosen is not None:
            select.value = chosen.id

    @work(exclusive=True, group="form-load")
    async def load_item(self) -> None:
        assert self.item is not None
        try:
            full = await self.client.get_item(self.item.id)
        except OpError as e:
            _notify_error(self, e)
            full = self.item
        password = full.field_by_purpose("password")
        self._original = {
            "title": full.title,
            "username": full.username or "",
            "password": (password.value or "") if password else "",
            "url": full.primary_url or "",
            "notes": full.notes or "",
        }
        for name in ("title", "username", "password", "url"):
            self.query_one(f"#{name}", Input).value = self._original[name]
        self.query_one("#notes", TextArea).text = self._original["notes"]

    def values(self) -> dict[str, str]:
        values = {name: self.query_one(f"#{name}", Input).value for name in self.FIELDS[:-1]}
        values["notes"] = self.query_one("#notes", TextArea).text
        for name in ("title", "username", "url"):
            values[name] = values[name].strip()
        return values

    def build_request(self) -> LoginRequest | None:
        """Request from the form. Empty and (when editing) unchanged fields are omitted."""
        values = self.values()
        if self.editing:
            changed: dict[str, Any] = {
                k: v for k, v in values.items() if v and v != self._original.get(k, "")
            }
            return LoginRequest(**changed) if changed else None

        vault = self.query_one("#vault", Select).value
        return LoginRequest(
            title=values["title"] or None,
            username=values["username"] or None,
            password=values["password"] or None,
            url=values["url"] or None,
            notes=values["notes"] or None,
            vault=vault if isinstance(vault, str) else None,
        )

    def action_cancel(self) -> None:
        self.dismiss(None)

    def action_save(self) -> None:
        self.save()

    @on(Button.Pressed, "#save")
    def on_save_pressed(self) -> None:
        self.save()

    @work(exclusive=True, group="form-save")
    async def save(self) -> None:
        request = self.build_request()
        if request is None:
            self.notify("Nothing changed", severity="warning")
            return
        try:
            if self.item is not None:
                saved = await self.client.edit_login(self.item.id, request)
            else:
                saved = await self.client.create_login(request)
        except OpError as e:
            _notify_error(self, e)
            return
        self.notify(f"{saved.title} saved", title="Item updated" if self.editing else "Item created")
        self.dismiss(saved)


class VaultsScreen(Screen):
    """List vaults; enter drills into one vault's items."""

    BINDINGS = [BACK, Binding("ctrl+r", "refresh", "Refresh", priority=True)]

    def __init__(self, client: OpClient) -> None:
        super().__init__()
        self.client = client
        self.vaults: list[Vault] = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield ErrorPanel(id="error-panel")
        yield OptionList(id="vaults")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = "Vaults"
        self.load_vaults()

    def action_refresh(self) -> None:
        self.load_vaults()

    def show_vaults(self, vaults: list[Vault]) -> None:
        self.vaults = vaults
        option_list = self.query_one("#vaults", OptionList)
        option_list.clear_options()
        for vault in vaults:
            count = f"  {vault.item_count} items" if vault.item_count is not None else ""
            option_list.add_option(
                Option(Text.assemble(("\U0001f5c4 " + (vault.name or vault.id), "bold"), (count, "dim")))
            )
        if vaults:
            option_list.highlighted = 0

    @work(exclusive=True)
    async def load_vaults(self) -> None:
        panel = self.query_one("#error-panel", ErrorPanel)
        panel.clear_error()
        cached = self.client.cached_vaults()
        if cached is not None:
            self.show_vaults(cached)
        try:
            vaults = await self.client.list_vaults()
        except OpError as e:
            panel.show_error(e)
            return
        self.show_vaults(vaults)

    @on(OptionList.OptionSelected, "#vaults")
    def on_vault_selected(self, event: OptionList.OptionSelected) -> None:
        vault = self.vaults[event.option_index]
        self.app.push_screen(VaultItemsScreen(self.client, vault))


class VaultItemsScreen(Screen):
    """Items of a single vault (`op item list --vault`)."""

    BINDINGS = [BACK, Binding("ctrl+r", "refresh", "Refresh", priority=True)]

    def __init__(self, client: OpClient, vault: Vault) -> None:
        super().__init__()
        self.client = client
        self.vault = vault
        self.items: list[Item] = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield ErrorPanel(id="error-panel")
        yield OptionList(id="vault-items")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = self.vault.name or self.vault.id
        self.load_items()

    def action_refresh(self) -> None:
        self.load_items()

    @work(exclusive=True)
    async def load_items(self) -> None:
        panel = self.query_one("#error-panel", ErrorPanel)
        panel.clear_error()
        try:
            self.items = await self.client.list_items(self.vault.id)
        except OpError as e:
            panel.show_error(e)
            return
        option_list = self.query_one("#vault-items", OptionList)
        option_list.clear_options()
        option_list.add_options([Option(item_prompt(SearchResult(item=i))) for i in self.items])
        if self.items:
            option_list.highlighted = 0

    @on(OptionList.OptionSelected, "#vault-items")
    def on_item_selected(self, event: OptionList.OptionSelected) -> None:
        self.app.push_screen(ItemDetailScreen(self.client, self.items[event.option_index]))


def setup_markdown(installed: bool, signed_in: bool, checking: bool = False) -> str:
    if checking:
        return "# Checking setup...\n\nPlease wait a moment."
    if not installed:
        return (
            "# 1Password CLI not installed\n\n"
            "1. Open the installation guide below\n"
            "2. Install the `op` command-line tool\n"
            "3. Come back here and refresh\n\n"
            f"Guide: {INSTALL_GUIDE_URL}"
        )
    if not signed_in:
        return (
            "# CLI installed, not signed in\n\n"
            "1. Open and unlock the 1Password app with CLI integration enabled "
            "(Settings > Developer), then refresh\n"
            "2. Or choose **Sign In** to run `op signin` in this terminal\n\n"
            "Status is re-checked automatically every few seconds."
        )
    return (
        "# All set\n\n"
        "- **Search**: type to filter, enter copies the password\n"
        "- **Generate**: ctrl+g\n"
        "- **Vaults**: ctrl+l"
    )


class SetupScreen(Screen):
    """Is op installed? Signed in? Dismisses with the signed-in state."""

    BINDINGS = [
        Binding("escape", "close", "Back", show=True),
        Binding("ctrl+r", "refresh", "Refresh", priority=True),
    ]

    POLL_SECONDS = 5.0

    def __init__(self, client: OpClient, account: str = "") -> None:
        super().__init__()
        self.client = client
        self.account = account
        self.installed = False
        self.signed_in = False
        self._poll = None
        self._checking = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield VerticalScroll(Markdown(setup_markdown(False, False, checking=True), id="setup-status"))
        with Horizontal(id="setup-buttons"):
            yield Button("Open Installation Guide", id="install")
            yield Button("Sign In", id="signin", variant="primary")
            yield Button("Refresh Status", id="refresh")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = "Setup"
        self.check_status()

    def poll_status(self) -> None:
        if not self._checking:
            self.check_status()

    @work(exclusive=True)
    async def check_status(self) -> None:
        self._checking = True
        try:
            self.installed = await self.client.is_installed()
            self.signed_in = await self.client.is_signed_in() if self.installed else False
        finally:
            self._checking = False
        await self.query_one("#setup-status", Markdown).update(
            setup_markdown(self.installed, self.signed_in)
        )
        self.query_one("#install").display = not self.installed
        self.query_one("#signin").display = self.installed and not self.signed_in

        if self.installed and not self.signed_in and self._poll is None:
            self._poll = self.set_interval(self.POLL_SECONDS, self.poll_status)
        elif self.signed_in and self._poll is not None:
            self._poll.stop()
            self._poll = None
            self.notify("You're all set to use oplauncher", title="Signed in")

    def action_refresh(self) -> None:
        self.check_status()

    def action_close(self) -> None:
        self.dismiss(self.signed_in)

    @on(Button.Pressed, "#install")
    def on_install_pressed(self) -> None:
        webbrowser.open(INSTALL_GUIDE_URL)

    @on(Button.Pressed, "#refresh")
    def on_refresh_pressed(self) -> None:
        self.check_status()

    @on(Button.Pressed, "#signin")
    def on_signin_pressed(self) -> None:
        try:
            with self.app.suspend():
                ok = interactive_signin(self.client.op_path, self.account)
        except SuspendNotSupported:
            self.notify(
                "Run 'oplauncher signin' in a terminal, then refresh",
                title="Cannot open sign-in here",
                severity="warning",
            )
            return
        self.client.signed_out()
        if not ok:
            self.notify("op signin did not complete", severity="warning")
        self.check_status()
