"""
oplauncher CLI: entry point for all operations.

Usage:
    oplauncher                     # Launch the TUI
    oplauncher tui                 # Launch the TUI
    oplauncher status              # Is op installed? Signed in?
    oplauncher search github       # Ranked item search
    oplauncher get <item> --copy   # Copy an item's password
    oplauncher generate -l 24      # Generate a password
    oplauncher create --title X    # Create a login
    oplauncher edit <item> ...     # Edit a login
    oplauncher vaults              # List vaults
    oplauncher version             # Show version
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Coroutine
from typing import Any

from oplauncher.errors import OpError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="oplauncher",
        description="Search, copy, generate and edit 1Password items from the terminal.",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("tui", help="Launch the terminal launcher (default)")
    subparsers.add_parser("status", help="Check CLI installation and sign-in")

    signin_parser = subparsers.add_parser("signin", help="Sign in to 1Password interactively")
    signin_parser.add_argument("--account", help="Account shorthand, email or id")

    # search
    search_parser = subparsers.add_parser("search", help="Search items")
    search_parser.add_argument("query", nargs="*", help="Search text")
    search_parser.add_argument("--vault", help="Only search one vault")
    search_parser.add_argument("--limit", type=int, default=20, help="Max results")

    # get
    get_parser = subparsers.add_parser("get", help="Read a field from an item")
    get_parser.add_argument("item", help="Item id or title")
    get_parser.add_argument(
        "--field", default="password", help="password, username, otp or a field label"
    )
    get_parser.add_argument("--copy", action="store_true", help="Copy instead of printing")

    # generate
    gen_parser = subparsers.add_parser("generate", help="Generate a password")
    gen_parser.add_argument("-l", "--length", type=int, help="Length (8-128)")
    gen_parser.add_argument("--no-uppercase", action="store_true")
    gen_parser.add_argument("--no-lowercase", action="store_true")
    gen_parser.add_argument("--no-digits", action="store_true")
    gen_parser.add_argument("--no-symbols", action="store_true")
    gen_parser.add_argument(
        "--exclude-ambiguous", action="store_true", help="Skip look-alike characters"
    )
    gen_parser.add_argument("--copy", action="store_true", help="Copy instead of printing")

    # create / edit
    create_parser = subparsers.add_parser("create", help="Create a login item")
    create_parser.add_argument("--title", required=True)
    edit_parser = subparsers.add_parser("edit", help="Edit a login item")
    edit_parser.add_argument("item", help="Item id or title")
    edit_parser.add_argument("--title")
    for p in (create_parser, edit_parser):
        p.add_argument("--username")
        p.add_argument("--password")
        p.add_argument("--url")
        p.add_argument("--notes")
        p.add_argument("--vault")

    # vaults
    vaults_parser = subparsers.add_parser("vaults", help="List vaults")
    vaults_parser.add_argument("--items", metavar="VAULT", help="List items in one vault")

    # version
    subparsers.add_parser("version", help="Show version")

    args = parser.parse_args(argv)

    if args.version or args.command == "version":
        from oplauncher import __version__

        print(f"oplauncher {__version__}")
        return 0

    if args.command in (None, "tui"):
        return _cmd_tui(args)

    _setup_logging(verbose=args.verbose)

    if args.command == "status":
        return _cmd_status()
    elif args.command == "signin":
        return _cmd_signin(args)
    elif args.command == "search":
        return _run(_cmd_search(args))
    elif args.command == "get":
        return _run(_cmd_get(args))
    elif args.command == "generate":
        return _run(_cmd_generate(args))
    elif args.command == "create":
        return _run(_cmd_create(args))
    elif args.command == "edit":
        return _run(_cmd_edit(args))
    elif args.command == "vaults":
        return _run(_cmd_vaults(args))
    else:
        parser.print_help()
        return 0


def _setup_logging(verbose: bool = False, to_file: bool = False) -> None:
    from oplauncher.config import get_config

    cfg = get_config()
    level = logging.DEBUG if verbose else getattr(logging, cfg.log_level, logging.WARNING)
    log_file = cfg.tui_log_file if to_file else cfg.log_file
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        filename=str(log_file) if log_file else None,
    )


def _client():
    from oplauncher.config import get_config
    from oplauncher.op.client import OpClient

    return OpClient.from_config(get_config())


def _run(coro: Coroutine[Any, Any, int]) -> int:
    """Run a command coroutine, mapping OpError to exit code 1."""
    try:
        return asyncio.run(coro)
    except OpError as e:
        print(f"Error ({e.kind.value}): {e.message}")
        for step in e.remediation:
            print(f"  - {step}")
        return 1


async def _resolve_item(client, ref: str):
    """Find an item by id or exact title (case-insensitive)."""
    from oplauncher.errors import ErrorKind

    items = client.cached_items() or await client.list_items()
    for item in items:
        if item.id == ref:
            return item
    wanted = ref.lower()
    matches = [i for i in items if i.title.lower() == wanted]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise OpError(ErrorKind.CONFIGURATION, f"{len(matches)} items are titled {ref!r}; use an id")
    raise OpError(ErrorKind.NOT_FOUND, f"No item with id or title {ref!r}")


def _emit(value: str, copy: bool, what: str) -> int:
    if not copy:
        print(value)
        return 0
    from oplauncher.clipboard import copy_to_clipboard

    ok, err = copy_to_clipboard(value)
    if ok:
        print(f"{what} copied to clipboard.")
        return 0
    print(f"Error: {err}")
    return 1


def _cmd_tui(args: argparse.Namespace) -> int:
    from oplauncher.tui import check_textual

    if not check_textual():
        print("Error: textual is required. Install with: pip install oplauncher")
        return 1

    _setup_logging(verbose=getattr(args, "verbose", False), to_file=True)

    from oplauncher.config import get_config
    from oplauncher.tui.app import OpLauncherApp

    OpLauncherApp(client=_client(), settings=get_config()).run()
    return 0


def _cmd_status() -> int:
    from oplauncher import __version__
    from oplauncher.config import get_config
    from oplauncher.op.prerequisites import check_op

    print(f"oplauncher v{__version__}")
    print()

    op = check_op(get_config().op_path)
    print(f"  {op.name}: {op.path or 'not found'}")
    if not op.ok:
        print("                 NOT INSTALLED")
        print(f"                 {op.hint}")
        return 1
    print(f"                 {op.version}")
    return _run(_signin_status())


async def _signin_status() -> int:
    account = await _client().whoami()
    if account is None:
        print("  Signed in:     no, run 'oplauncher signin' or unlock the 1Password app")
        return 1
    print(f"  Signed in:     {account.get('email') or account.get('user_uuid', 'yes')}")
    if account.get("url"):
        print(f"  Account:       {account['url']}")
    return 0


def _cmd_signin(args: argparse.Namespace) -> int:
    from oplauncher.config import get_config
    from oplauncher.op.prerequisites import find_op, interactive_signin

    cfg = get_config()
    op_path = find_op(cfg.op_path)
    if op_path is None:
        print("Error: 1Password CLI not found.")
        return 1
    if interactive_signin(op_path, args.account or cfg.account):
        print("Signed in.")
        return 0
    print("Sign-in failed.")
    return 1


async def _cmd_search(args: argparse.Namespace) -> int:
    from oplauncher.display import category_icon
    from oplauncher.search import rank

    client = _client()
    items = await client.list_items(args.vault)
    results = rank(items, " ".join(args.query))
    if not results:
        print("No items found.")
        return 0
    for result in results[: args.limit]:
        item = result.item
        score = f"{result.score:>3}  " if result.score is not None else ""
        print(f"{score}{category_icon(item.category)} {item.title:<40} {item.vault.name:<20} {item.id}")
    return 0


async def _cmd_get(args: argparse.Namespace) -> int:
    from oplauncher.errors import ErrorKind

    client = _client()
    item = await _resolve_item(client, args.item)
    field = args.field.lower()
    if field == "otp":
        value = await client.get_otp(item)
        if value is None:
            raise OpError(ErrorKind.NOT_FOUND, f"{item.title} has no one-time password")
    else:
        value = await client.get_field(item.id, args.field)
    return _emit(value, args.copy, args.field.capitalize())


async def _cmd_generate(args: argparse.Namespace) -> int:
    from oplauncher.config import get_config
    from oplauncher.op.commands import PasswordOptions

    defaults = get_config().generator
    options = PasswordOptions(
        length=args.length if args.length is not None else defaults.length,
        uppercase=defaults.uppercase and not args.no_uppercase,
        lowercase=defaults.lowercase and not args.no_lowercase,
        digits=defaults.digits and not args.no_digits,
        symbols=defaults.symbols and not args.no_symbols,
        exclude_ambiguous=defaults.exclude_ambiguous or args.exclude_ambiguous,
    )
    password = await _client().generate_password(options)
    return _emit(password, args.copy, "Password")


def _login_request(args: argparse.Namespace):
    from oplauncher.op.commands import LoginRequest

    return LoginRequest(
        title=args.title,
        username=args.username,
        password=args.password,
        url=args.url,
        notes=args.notes,
        vault=args.vault,
    )


async def _cmd_create(args: argparse.Namespace) -> int:
    from oplauncher.config import get_config

    if not args.vault:
        args.vault = get_config().default_vault or None
    item = await _client().create_login(_login_request(args))
    print(f"Created {item.title} ({item.id}) in {item.vault.name or item.vault.id}")
    return 0


async def _cmd_edit(args: argparse.Namespace) -> int:
    client = _client()
    item = await _resolve_item(client, args.item)
    updated = await client.edit_login(item.id, _login_request(args))
    print(f"Updated {updated.title} ({updated.id})")
    return 0


async def _cmd_vaults(args: argparse.Namespace) -> int:
    from oplauncher.display import category_icon

    client = _client()
    if args.items:
        items = await client.list_items(args.items)
        for item in items:
            print(f"{category_icon(item.category)} {item.title:<40} {item.id}")
        print(f"\n{len(items)} item(s)")
        return 0

    vaults = await client.list_vaults()
    for vault in vaults:
        count = f"{vault.item_count} items" if vault.item_count is not None else ""
        print(f"{vault.name:<30} {vault.type:<16} {count:<12} {vault.id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
