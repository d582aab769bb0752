"""
Error taxonomy for 1Password CLI invocations.

Every failure surfaced to the CLI or TUI is an OpError carrying one ErrorKind.
The kind decides propagation: CONFIGURATION and APP_UNREACHABLE need the user
to act, AUTH_REQUIRED is retried once by the invoker, the rest propagate.
"""

from __future__ import annotations

from enum import StrEnum

INSTALL_GUIDE_URL = "https://developer.1password.com/docs/cli/get-started"


class ErrorKind(StrEnum):
    CONFIGURATION = "configuration"
    AUTH_REQUIRED = "auth_required"
    APP_UNREACHABLE = "app_unreachable"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    COMMAND_FAILED = "command_failed"
    PARSE_FAILURE = "parse_failure"


_TITLES: dict[ErrorKind, str] = {
    ErrorKind.CONFIGURATION: "Configuration error",
    ErrorKind.AUTH_REQUIRED: "Not signed in",
    ErrorKind.APP_UNREACHABLE: "1Password app unreachable",
    ErrorKind.NOT_FOUND: "Not found",
    ErrorKind.TIMEOUT: "Timed out",
    ErrorKind.COMMAND_FAILED: "Command failed",
    ErrorKind.PARSE_FAILURE: "Unexpected output",
}

_REMEDIATION: dict[ErrorKind, list[str]] = {
    ErrorKind.CONFIGURATION: [
        f"Install the 1Password CLI: {INSTALL_GUIDE_URL}",
        "Or point OPLAUNCHER_OP_PATH at the op binary",
    ],
    ErrorKind.AUTH_REQUIRED: [
        "Make sure the 1Password app is open and unlocked",
        "Enable CLI integration (Settings > Developer)",
        "Or run 'op signin' in a terminal",
    ],
    ErrorKind.APP_UNREACHABLE: [
        "Start the 1Password desktop app and unlock it",
        "Enable CLI integration (Settings > Developer)",
    ],
    ErrorKind.NOT_FOUND: ["Refresh the item list and try again"],
    ErrorKind.TIMEOUT: ["Check that op is not waiting for a prompt, then retry"],
    ErrorKind.COMMAND_FAILED: ["Retry, or run the op command in a terminal for details"],
    ErrorKind.PARSE_FAILURE: ["Update the 1Password CLI to a current version"],
}


class OpError(Exception):
    """A classified failure talking to the 1Password CLI."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        stderr: str = "",
        exit_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.stderr = stderr
        self.exit_code = exit_code

    @property
    def title(self) -> str:
        return _TITLES[self.kind]

    @property
    def remediation(self) -> list[str]:
        return list(_REMEDIATION[self.kind])

    @property
    def retryable(self) -> bool:
        """Whether retrying without user action can help."""
        return self.kind not in (ErrorKind.CONFIGURATION, ErrorKind.APP_UNREACHABLE)

    def __repr__(self) -> str:
        return f"OpError({self.kind.value!r}, {self.message!r})"
