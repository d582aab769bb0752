"""
Process invoker: run the `op` binary and classify its failures.

Arguments are always passed as a vector to create_subprocess_exec; there is
no shell in between. Output is captured separately for stdout and stderr,
and every call is bounded by a hard timeout.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
from collections.abc import Sequence

from oplauncher.errors import ErrorKind, OpError
from oplauncher.op.session import SessionCache

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

# Lower-cased stderr substrings, checked in this order
_AUTH_MARKERS = ("not signed in", "authentication", "sign in required")
_APP_MARKERS = ("make sure it is running",)
_NOT_FOUND_MARKERS = ("isn't a field", "isn't an item", "no item found")

SIGN_IN_HINT = (
    "Please sign in to the 1Password CLI. Make sure the 1Password app is open "
    "and unlocked with CLI integration enabled, or run 'op signin'."
)


def tokenize(command: str) -> list[str]:
    """Split on whitespace, keeping double-quoted spans together (quotes dropped)."""
    args: list[str] = []
    current: list[str] = []
    in_quotes = False
    quoted = False
    for char in command:
        if char == '"':
            in_quotes = not in_quotes
            quoted = True
        elif char.isspace() and not in_quotes:
            if current or quoted:
                args.append("".join(current))
            current = []
            quoted = False
        else:
            current.append(char)
    if current or quoted:
        args.append("".join(current))
    return args


def classify(stderr: str) -> ErrorKind:
    """Map the stderr of a failed op call to an ErrorKind."""
    text = stderr.lower()
    if any(m in text for m in _AUTH_MARKERS):
        return ErrorKind.AUTH_REQUIRED
    if ("cannot connect to" in text and "app" in text) or any(m in text for m in _APP_MARKERS):
        return ErrorKind.APP_UNREACHABLE
    if any(m in text for m in _NOT_FOUND_MARKERS):
        return ErrorKind.NOT_FOUND
    return ErrorKind.COMMAND_FAILED


class ProcessInvoker:
    """Spawn `op` with a session, a timeout and one auth retry."""

    def __init__(
        self,
        op_path: str = "op",
        *,
        session: SessionCache | None = None,
        account: str = "",
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.op_path = op_path
        self.timeout = timeout
        self.session = session if session is not None else SessionCache(self.run_bare, account)

    async def run(self, args: Sequence[str], *, retry_auth: bool = True) -> str:
        """Run op with the current session. Returns trimmed stdout."""
        handle = await self.session.resolve()
        env = dict(os.environ)
        if handle is not None:
            env.update(handle.as_env())

        try:
            return await self._exec(args, env)
        except OpError as e:
            if e.kind is not ErrorKind.AUTH_REQUIRED:
                raise
            if not retry_auth:
                raise OpError(
                    ErrorKind.AUTH_REQUIRED, SIGN_IN_HINT, stderr=e.stderr, exit_code=e.exit_code
                ) from e
            logger.info("op reported auth required; refreshing session and retrying once")
            self.session.invalidate()
            return await self.run(args, retry_auth=False)

    async def run_command(self, command: str) -> str:
        """Run a command given as one string, e.g. 'item get "My Login" --fields password'."""
        return await self.run(tokenize(command))

    async def run_bare(self, args: Sequence[str]) -> str:
        """Run op without a session and without retry (used to obtain a session)."""
        return await self._exec(args, dict(os.environ))

    async def _exec(self, args: Sequence[str], env: dict[str, str]) -> str:
        verb = " ".join(args[:2])
        try:
            proc = await asyncio.create_subprocess_exec(
                self.op_path,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
            )
        except FileNotFoundError as e:
            raise OpError(
                ErrorKind.CONFIGURATION, f"1Password CLI not found at {self.op_path!r}"
            ) from e
        except OSError as e:
            raise OpError(ErrorKind.COMMAND_FAILED, f"Failed to execute op: {e}") from e

        try:
            async with asyncio.timeout(self.timeout):
                raw_out, raw_err = await proc.communicate()
        except TimeoutError:
            logger.warning("op %s timed out after %ss", verb, self.timeout)
            raise OpError(
                ErrorKind.TIMEOUT, f"Command timed out after {self.timeout:g} seconds"
            ) from None
        finally:
            # Timeout or cancellation: never leave the child running
            if proc.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await asyncio.shield(proc.wait())

        stdout = raw_out.decode(errors="replace")
        stderr = raw_err.decode(errors="replace").strip()

        if proc.returncode != 0:
            kind = classify(stderr)
            logger.debug("op %s exited %s (%s)", verb, proc.returncode, kind)
            raise OpError(
                kind,
                stderr or f"Command failed with exit code {proc.returncode}",
                stderr=stderr,
                exit_code=proc.returncode,
            )

        if stderr:
            logger.warning("op %s stderr: %s", verb, stderr)
        return stdout.strip()
