"""
OpClient: the API the CLI and TUI use to talk to 1Password.

Wires a ProcessInvoker (with its SessionCache) to a SnapshotCache and turns
raw op output into records.

Usage:
    client = OpClient.from_config(get_config())
    items = await client.list_items()
    password = await client.get_password(items[0].id)
"""

from __future__ import annotations

import logging
from typing import Any

from oplauncher import cache as cache_keys
from oplauncher.cache import SnapshotCache
from oplauncher.config import Config
from oplauncher.errors import ErrorKind, OpError
from oplauncher.op import commands
from oplauncher.op.commands import LoginRequest, PasswordOptions
from oplauncher.op.invoker import ProcessInvoker
from oplauncher.op.models import (
    Item,
    Vault,
    parse_item,
    parse_items,
    parse_object,
    parse_vaults,
)
from oplauncher.op.prerequisites import find_op

logger = logging.getLogger(__name__)

OTP_FALLBACK_LABEL = "one-time password"


class OpClient:
    """High-level 1Password operations over the op CLI."""

    def __init__(
        self,
        invoker: ProcessInvoker,
        cache: SnapshotCache | None = None,
        *,
        reveal_concealed: bool = True,
    ) -> None:
        self.invoker = invoker
        self.cache = cache if cache is not None else SnapshotCache()
        self.reveal_concealed = reveal_concealed

    @classmethod
    def from_config(cls, config: Config) -> OpClient:
        op_path = find_op(config.op_path) or config.op_path or "op"
        invoker = ProcessInvoker(op_path, account=config.account)
        return cls(invoker, reveal_concealed=config.reveal_concealed)

    @property
    def op_path(self) -> str:
        return self.invoker.op_path

    # ── Setup checks ──

    async def version(self) -> str | None:
        """Return the op version, or None when op cannot run."""
        try:
            return await self.invoker.run_bare(commands.version())
        except OpError as e:
            logger.debug("op --version failed: %s", e)
            return None

    async def is_installed(self) -> bool:
        return await self.version() is not None

    async def whoami(self) -> dict[str, Any] | None:
        """Return the signed-in account, or None when not signed in."""
        try:
            return parse_object(await self.invoker.run(commands.whoami()))
        except OpError as e:
            if e.kind in (ErrorKind.AUTH_REQUIRED, ErrorKind.APP_UNREACHABLE):
                return None
            raise

    async def is_signed_in(self) -> bool:
        try:
            return await self.whoami() is not None
        except OpError:
            return False

    def signed_out(self) -> None:
        """Forget the session so the next call resolves a new one."""
        self.invoker.session.invalidate()

    # ── Lists (read-through cache) ──

    def cached_items(self) -> list[Item] | None:
        return self.cache.get(cache_keys.ITEMS)

    def cached_vaults(self) -> list[Vault] | None:
        return self.cache.get(cache_keys.VAULTS)

    async def list_items(self, vault: str | None = None) -> list[Item]:
        """Fetch items from op. The unscoped list overwrites the item cache."""
        items = parse_items(await self.invoker.run(commands.list_items(vault)))
        if vault is None:
            self.cache.set(cache_keys.ITEMS, items)
        return items

    async def list_vaults(self) -> list[Vault]:
        vaults = parse_vaults(await self.invoker.run(commands.list_vaults()))
        self.cache.set(cache_keys.VAULTS, vaults)
        return vaults

    # ── Single items and fields ──

    async def get_item(self, item_id: str) -> Item:
        return parse_item(await self.invoker.run(commands.get_item(item_id)))

    async def get_field(self, item_id: str, label: str) -> str:
        """Read one field value. Raises OpError(NOT_FOUND) when it has no value."""
        args = commands.get_field(item_id, label, reveal=self.reveal_concealed)
        value = await self.invoker.run(args)
        if not value:
            raise OpError(ErrorKind.NOT_FOUND, f"Field {label!r} not found on item {item_id}")
        return value

    async def get_password(self, item_id: str) -> str:
        return await self.get_field(item_id, "password")

    async def get_username(self, item_id: str) -> str:
        return await self.get_field(item_id, "username")

    async def get_otp(self, item: Item) -> str | None:
        """OTP from the item's own fields, else a field lookup. None if absent."""
        field = item.otp_field()
        if field is not None:
            if field.totp:
                return field.totp
            if field.value and not field.value.startswith("otpauth:"):
                return field.value
        try:
            return await self.get_field(item.id, OTP_FALLBACK_LABEL)
        except OpError as e:
            if e.kind is ErrorKind.NOT_FOUND:
                return None
            raise

    # ── Mutations ──

    async def generate_password(self, options: PasswordOptions) -> str:
        args = commands.generate_password(options)
        password = await self.invoker.run(args)
        if not password:
            raise OpError(ErrorKind.PARSE_FAILURE, "op returned an empty password")
        return password

    async def create_login(self, request: LoginRequest) -> Item:
        item = parse_item(await self.invoker.run(commands.create_login(request)))
        self.cache.invalidate()
        logger.info("Created item %s in vault %s", item.id, item.vault.name or item.vault.id)
        return item

    async def edit_login(self, item_id: str, request: LoginRequest) -> Item:
        item = parse_item(await self.invoker.run(commands.edit_login(item_id, request)))
        self.cache.invalidate()
        logger.info("Edited item %s", item.id)
        return item
