"""Test fixtures for the op integration layer."""

from __future__ import annotations

import json
import stat
import sys
from pathlib import Path

import pytest

FAKE_OP = '''
import json, os, sys, time
from pathlib import Path

args = sys.argv[1:]
log = os.environ.get("FAKE_OP_LOG")
if log:
    session = {k: v for k, v in os.environ.items() if k.startswith("OP_SESSION_")}
    with open(log, "a") as f:
        f.write(json.dumps({"args": args, "session": session}) + "\\n")

if args[:2] == ["signin", "--raw"]:
    print(os.environ.get("FAKE_OP_TOKEN", "tok-1"))
    sys.exit(0)
if args[:2] == ["account", "list"]:
    print(json.dumps([{"shorthand": "my", "email": "me@example.com", "user_uuid": "USER1"}]))
    sys.exit(0)

mode = os.environ.get("FAKE_OP_MODE", "echo")
if mode == "sleep":
    time.sleep(30)
elif mode == "auth":
    sys.stderr.write("[ERROR] You are not signed in. Please run op signin\\n")
    sys.exit(1)
elif mode == "auth-once":
    marker = Path(os.environ["FAKE_OP_STATE"])
    if not marker.exists():
        marker.write_text("seen")
        sys.stderr.write("[ERROR] authentication required\\n")
        sys.exit(1)
elif mode == "app":
    sys.stderr.write("[ERROR] cannot connect to 1Password app, make sure it is running\\n")
    sys.exit(1)
elif mode == "fail":
    sys.stderr.write("[ERROR] something broke\\n")
    sys.exit(3)
elif mode == "silent-fail":
    sys.exit(2)
elif mode == "warn":
    sys.stderr.write("[WARN] update available\\n")

print("  " + json.dumps(args) + "  ")
'''


@pytest.fixture
def fake_op(tmp_path: Path, monkeypatch) -> Path:
    """An executable stand-in for the op binary, driven by FAKE_OP_* env vars."""
    script = tmp_path / "op"
    script.write_text(f"#!{sys.executable}\n{FAKE_OP}")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    monkeypatch.setenv("FAKE_OP_LOG", str(tmp_path / "calls.jsonl"))
    monkeypatch.setenv("FAKE_OP_STATE", str(tmp_path / "state"))
    monkeypatch.delenv("FAKE_OP_MODE", raising=False)
    return script


@pytest.fixture
def op_calls(tmp_path: Path):
    """Read back the calls the fake op recorded."""

    def read() -> list[dict]:
        log = tmp_path / "calls.jsonl"
        if not log.exists():
            return []
        return [json.loads(line) for line in log.read_text().splitlines()]

    return read


@pytest.fixture
def item_json() -> dict:
    return {
        "id": "abc123",
        "title": "GitHub",
        "vault": {"id": "v1", "name": "Private"},
        "category": "LOGIN",
        "last_edited_by": "USER1",
        "created_at": "2024-01-15T10:30:00Z",
        "updated_at": "2024-03-02T08:00:00Z",
        "urls": [{"href": "https://github.com", "primary": True}],
        "fields": [
            {"id": "username", "type": "STRING", "purpose": "USERNAME", "label": "username", "value": "octocat"},
            {"id": "password", "type": "CONCEALED", "purpose": "PASSWORD", "label": "password", "value": "hunter2"},
            {"id": "notesPlain", "type": "STRING", "purpose": "NOTES", "label": "notesPlain", "value": "2FA on"},
            {"id": "totp", "type": "OTP", "label": "one-time password", "value": "otpauth://totp/x", "totp": "123456"},
        ],
    }
