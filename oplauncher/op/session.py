"""
Session handle cache: one active `op` session per process.

The token comes from `op signin --raw`; the variable name comes from
`op account list`. Nothing is written to disk, so a fresh process always
resolves again.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any

from oplauncher.errors import OpError
from oplauncher.op import commands

logger = logging.getLogger(__name__)

SESSION_ENV_PREFIX = "OP_SESSION_"
DEFAULT_ACCOUNT_ID = "default"

Fetch = Callable[[Sequence[str]], Awaitable[str]]


@dataclass(frozen=True)
class SessionHandle:
    """An authenticated session: env var name + token."""

    name: str
    token: str

    def as_env(self) -> dict[str, str]:
        return {self.name: self.token}

    def __repr__(self) -> str:
        return f"SessionHandle(name={self.name!r}, token=<{len(self.token)} chars>)"


def is_raw_token(output: str) -> bool:
    """A raw token is one bare word; export syntax like `$env:X="..."` is not."""
    token = output.strip()
    return bool(token) and len(token.split()) == 1 and "=" not in token


def _pick_account(accounts: list[dict[str, Any]], wanted: str) -> dict[str, Any] | None:
    if not accounts:
        return None
    if wanted:
        for account in accounts:
            keys = ("shorthand", "email", "url", "user_uuid", "account_uuid")
            if wanted in (str(account.get(k, "")) for k in keys):
                return account
    return accounts[0]


class SessionCache:
    """Single-slot memo of the current SessionHandle."""

    def __init__(self, fetch: Fetch, account: str = "") -> None:
        self._fetch = fetch
        self.account = account
        self._handle: SessionHandle | None = None

    @property
    def handle(self) -> SessionHandle | None:
        return self._handle

    async def resolve(self) -> SessionHandle | None:
        """Return the cached handle, or request a fresh one. None if unavailable."""
        if self._handle is not None:
            return self._handle

        try:
            output = await self._fetch(commands.signin_raw(self.account))
        except OpError as e:
            logger.info("No session from op signin --raw (%s)", e.kind)
            return None

        if not is_raw_token(output):
            logger.info("op signin --raw returned no usable token")
            return None

        account_id = await self._account_id()
        self._handle = SessionHandle(name=f"{SESSION_ENV_PREFIX}{account_id}", token=output.strip())
        logger.debug("Resolved session %s", self._handle.name)
        return self._handle

    async def _account_id(self) -> str:
        try:
            output = await self._fetch(commands.account_list())
            accounts = json.loads(output) if output.strip() else []
        except (OpError, json.JSONDecodeError) as e:
            logger.debug("Account lookup failed, using default session name: %s", e)
            return DEFAULT_ACCOUNT_ID

        if not isinstance(accounts, list):
            return DEFAULT_ACCOUNT_ID
        account = _pick_account([a for a in accounts if isinstance(a, dict)], self.account)
        if account is None:
            return DEFAULT_ACCOUNT_ID
        return str(account.get("user_uuid") or account.get("shorthand") or DEFAULT_ACCOUNT_ID)

    def invalidate(self) -> None:
        """Drop the cached handle unconditionally."""
        if self._handle is not None:
            logger.debug("Invalidating session %s", self._handle.name)
        self._handle = None
