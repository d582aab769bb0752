"""
Argument-vector builders for the 1Password CLI.

Pure functions: they validate a request and return the argv that follows the
`op` binary. Nothing here spawns a process. Values are never joined into a
shell string, so titles or notes containing quotes and spaces stay one token.
"""

from __future__ import annotations

from dataclasses import dataclass

from oplauncher.errors import ErrorKind, OpError

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128

JSON = ["--format", "json"]


@dataclass(frozen=True)
class PasswordOptions:
    """Password generator settings. `op` is the only source of randomness."""

    length: int = 20
    uppercase: bool = True
    lowercase: bool = True
    digits: bool = True
    symbols: bool = True
    exclude_ambiguous: bool = False

    def validate(self) -> None:
        if not MIN_PASSWORD_LENGTH <= self.length <= MAX_PASSWORD_LENGTH:
            raise OpError(
                ErrorKind.CONFIGURATION,
                f"Password length must be between {MIN_PASSWORD_LENGTH} "
                f"and {MAX_PASSWORD_LENGTH}, got {self.length}",
            )
        if not (self.uppercase or self.lowercase or self.digits or self.symbols):
            raise OpError(
                ErrorKind.CONFIGURATION, "Select at least one character set"
            )


@dataclass(frozen=True)
class LoginRequest:
    """Fields for creating or editing a login. None or "" means "leave alone"."""

    title: str | None = None
    username: str | None = None
    password: str | None = None
    url: str | None = None
    notes: str | None = None
    vault: str | None = None


def _require(value: str, what: str) -> str:
    if not value or not value.strip():
        raise OpError(ErrorKind.CONFIGURATION, f"{what} is required")
    return value


def _optional_flags(pairs: list[tuple[str, str | None]]) -> list[str]:
    args: list[str] = []
    for flag, value in pairs:
        if value:
            args.extend([flag, value])
    return args


def version() -> list[str]:
    return ["--version"]


def whoami() -> list[str]:
    return ["whoami", *JSON]


def signin_raw(account: str = "") -> list[str]:
    return ["signin", "--raw", *_optional_flags([("--account", account)])]


def account_list() -> list[str]:
    return ["account", "list", *JSON]


def list_vaults() -> list[str]:
    return ["vault", "list", *JSON]


def list_items(vault: str | None = None) -> list[str]:
    return ["item", "list", *_optional_flags([("--vault", vault)]), *JSON]


def get_item(item_id: str) -> list[str]:
    return ["item", "get", _require(item_id, "Item id"), *JSON]


def get_field(item_id: str, field: str, *, reveal: bool = False) -> list[str]:
    args = ["item", "get", _require(item_id, "Item id"), "--fields", _require(field, "Field")]
    if reveal:
        args.append("--reveal")
    return args


def generate_password(options: PasswordOptions) -> list[str]:
    options.validate()
    args = ["item", "generate", "--category", "password", "--length", str(options.length)]
    if not options.uppercase:
        args.append("--no-uppercase")
    if not options.lowercase:
        args.append("--no-lowercase")
    if not options.digits:
        args.append("--no-digits")
    if not options.symbols:
        args.append("--no-symbols")
    if options.exclude_ambiguous:
        args.append("--no-ambiguous")
    return args


def _login_flags(req: LoginRequest) -> list[str]:
    return _optional_flags(
        [
            ("--vault", req.vault),
            ("--username", req.username),
            ("--password", req.password),
            ("--url", req.url),
            ("--notes", req.notes),
        ]
    )


def create_login(req: LoginRequest) -> list[str]:
    title = _require(req.title or "", "Title")
    return ["item", "create", "Login", "--title", title, *_login_flags(req), *JSON]


def edit_login(item_id: str, req: LoginRequest) -> list[str]:
    args = ["item", "edit", _require(item_id, "Item id")]
    args += _optional_flags([("--title", req.title)])
    return [*args, *_login_flags(req), *JSON]
