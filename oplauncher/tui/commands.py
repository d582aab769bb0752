"""
Slash command registry for the search box.

Typing /generate, /vaults, /status, etc. into the search box runs the command
instead of searching. Returns (handled: bool, output: str | None).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from oplauncher.tui.screens import SearchScreen

# Command registry: name → (handler_name, description)
COMMANDS: dict[str, tuple[str, str]] = {
    "/refresh": ("cmd_refresh", "Reload items from 1Password"),
    "/generate": ("cmd_generate", "Open the password generator"),
    "/new": ("cmd_new", "Create a new login item"),
    "/vaults": ("cmd_vaults", "Browse vaults"),
    "/status": ("cmd_status", "CLI installation and sign-in status"),
    "/help": ("cmd_help", "Show available commands"),
    "/quit": ("cmd_quit", "Exit"),
    "/exit": ("cmd_quit", "Exit"),
}


async def handle_command(screen: SearchScreen, text: str) -> tuple[bool, str | None]:
    """Try to handle text as a slash command.

    Returns (True, output) if handled, (False, None) if not a command.
    """
    parts = text.strip().split(None, 1)
    if not parts or not parts[0].startswith("/"):
        return False, None

    cmd = parts[0].lower()
    args = parts[1] if len(parts) > 1 else ""

    if cmd not in COMMANDS:
        return True, f"Unknown command: {cmd}. Type /help for available commands."

    handler_name, _ = COMMANDS[cmd]
    output = await globals()[handler_name](screen, args)
    return True, output


async def cmd_refresh(screen: SearchScreen, args: str) -> str:
    screen.load_items()
    return "Refreshing items..."


async def cmd_generate(screen: SearchScreen, args: str) -> str | None:
    screen.action_generate()
    return None


async def cmd_new(screen: SearchScreen, args: str) -> str | None:
    screen.action_new_login()
    return None


async def cmd_vaults(screen: SearchScreen, args: str) -> str | None:
    screen.action_vaults()
    return None


async def cmd_status(screen: SearchScreen, args: str) -> str | None:
    screen.action_setup()
    return None


async def cmd_help(screen: SearchScreen, args: str) -> str:
    """Show available commands."""
    lines = ["Available commands:"]
    for cmd, (_, desc) in sorted(COMMANDS.items()):
        if cmd == "/exit":
            continue  # alias
        lines.append(f"  {cmd:<10} {desc}")
    return "\n".join(lines)


async def cmd_quit(screen: SearchScreen, args: str) -> str:
    screen.app.exit()
    return ""
