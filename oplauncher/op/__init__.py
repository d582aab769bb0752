"""
1Password CLI integration: process invocation, sessions, commands, records.

Public API:
    OpClient               → facade used by the CLI and TUI
    ProcessInvoker         → spawn `op` with timeout, classification, auth retry
    SessionCache           → single-slot session handle memo
"""

from __future__ import annotations

from oplauncher.op.client import OpClient
from oplauncher.op.invoker import ProcessInvoker, tokenize
from oplauncher.op.session import SessionCache, SessionHandle

__all__ = ["OpClient", "ProcessInvoker", "SessionCache", "SessionHandle", "tokenize"]
