"""Locate the 1Password CLI and hand sign-in over to an interactive terminal."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

from oplauncher.errors import INSTALL_GUIDE_URL

logger = logging.getLogger(__name__)

OP_BINARY = "op.exe" if sys.platform == "win32" else "op"


@dataclass
class PrereqResult:
    name: str
    found: bool
    version: str
    path: str
    hint: str

    @property
    def ok(self) -> bool:
        return self.found


def _candidate_paths() -> list[Path]:
    home = Path.home()
    candidates = [
        Path("/usr/local/bin") / OP_BINARY,
        Path("/opt/homebrew/bin") / OP_BINARY,
        Path("/usr/bin") / OP_BINARY,
        home / ".local" / "bin" / OP_BINARY,
        home / "bin" / OP_BINARY,
    ]
    # winget drops op.exe into a per-package directory
    local_app_data = os.environ.get("LOCALAPPDATA")
    if local_app_data:
        winget = Path(local_app_data) / "Microsoft" / "WinGet" / "Packages"
        if winget.is_dir():
            for entry in sorted(winget.iterdir()):
                name = entry.name.lower()
                if entry.is_dir() and ("1password" in name or "agilebits" in name):
                    candidates.append(entry / OP_BINARY)
    return candidates


def find_op(configured: str = "") -> str | None:
    """Find the op executable: configured path, then PATH, then common locations."""
    if configured:
        return configured if Path(configured).exists() or shutil.which(configured) else None

    on_path = shutil.which("op")
    if on_path:
        return on_path

    for path in _candidate_paths():
        if path.exists() and os.access(path, os.X_OK):
            return str(path)
    return None


def check_op(configured: str = "") -> PrereqResult:
    """Check that the 1Password CLI is installed and report its version."""
    path = find_op(configured)
    if not path:
        return PrereqResult(
            name="1Password CLI",
            found=False,
            version="",
            path="",
            hint=INSTALL_GUIDE_URL,
        )

    try:
        result = subprocess.run(
            [path, "--version"], capture_output=True, text=True, timeout=5
        )
        version = result.stdout.strip()
        return PrereqResult(
            name="1Password CLI",
            found=result.returncode == 0,
            version=version,
            path=path,
            hint="" if result.returncode == 0 else result.stderr.strip(),
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("op --version failed: %s", e)
        return PrereqResult(
            name="1Password CLI",
            found=False,
            version="",
            path=path,
            hint="Failed to detect 1Password CLI version",
        )


def interactive_signin(op_path: str, account: str = "") -> bool:
    """Run `op signin` attached to the current terminal. Returns True on success.

    The caller must own the terminal (CLI, or a suspended TUI).
    """
    cmd = [op_path, "signin"]
    if account:
        cmd += ["--account", account]
    try:
        return subprocess.run(cmd).returncode == 0
    except OSError as e:
        logger.warning("Could not start op signin: %s", e)
        return False
