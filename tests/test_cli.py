"""Tests for oplauncher.cli: command line interface."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from oplauncher.cli import main
from oplauncher.errors import ErrorKind, OpError
from oplauncher.op.client import OpClient
from oplauncher.op.commands import LoginRequest
from oplauncher.op.invoker import ProcessInvoker
from oplauncher.op.models import Item, Vault
from oplauncher.op.prerequisites import PrereqResult


def _item(item_id: str, title: str) -> Item:
    return Item.model_validate(
        {
            "id": item_id,
            "title": title,
            "category": "LOGIN",
            "vault": {"id": "v1", "name": "Private"},
            "urls": [{"href": f"https://{title.lower()}.com"}],
        }
    )


@pytest.fixture(autouse=True)
def _config(fresh_config):
    yield


@pytest.fixture
def client():
    c = MagicMock(spec=OpClient)
    c.op_path = "/usr/bin/op"
    c.cached_items.return_value = None
    c.list_items = AsyncMock(
        return_value=[_item("gh1", "GitHub"), _item("gl1", "GitLab"), _item("bk1", "Bank")]
    )
    c.list_vaults = AsyncMock(
        return_value=[Vault(id="v1", name="Private", type="PERSONAL", item_count=3)]
    )
    c.get_field = AsyncMock(return_value="hunter2")
    c.get_otp = AsyncMock(return_value="123456")
    c.whoami = AsyncMock(return_value={"email": "me@example.com", "url": "my.1password.com"})
    c.create_login = AsyncMock(return_value=_item("new1", "Example"))
    c.edit_login = AsyncMock(return_value=_item("gh1", "GitHub"))
    with patch("oplauncher.cli._client", return_value=c):
        yield c


@pytest.fixture
def invoker():
    """A real OpClient over a mocked invoker, for commands that validate input."""
    inv = MagicMock(spec=ProcessInvoker)
    inv.op_path = "/usr/bin/op"
    inv.run = AsyncMock(return_value="Generated-Pass-1")
    with patch("oplauncher.cli._client", return_value=OpClient(inv)):
        yield inv


class TestVersion:
    def test_version(self, capsys):
        assert main(["version"]) == 0
        out = capsys.readouterr().out
        assert "oplauncher" in out
        assert "0.1.0" in out

    def test_version_flag(self, capsys):
        assert main(["--version"]) == 0
        assert "oplauncher" in capsys.readouterr().out


class TestStatus:
    def test_not_installed(self, capsys, client):
        missing = PrereqResult(
            name="1Password CLI", found=False, version="", path="", hint="install it"
        )
        with patch("oplauncher.op.prerequisites.check_op", return_value=missing):
            assert main(["status"]) == 1
        out = capsys.readouterr().out
        assert "NOT INSTALLED" in out
        client.whoami.assert_not_awaited()

    def test_signed_in(self, capsys, client):
        found = PrereqResult(
            name="1Password CLI", found=True, version="2.30.0", path="/usr/bin/op", hint=""
        )
        with patch("oplauncher.op.prerequisites.check_op", return_value=found):
            assert main(["status"]) == 0
        out = capsys.readouterr().out
        assert "2.30.0" in out
        assert "me@example.com" in out

    def test_signed_out(self, capsys, client):
        client.whoami.return_value = None
        found = PrereqResult(
            name="1Password CLI", found=True, version="2.30.0", path="/usr/bin/op", hint=""
        )
        with patch("oplauncher.op.prerequisites.check_op", return_value=found):
            assert main(["status"]) == 1
        assert "oplauncher signin" in capsys.readouterr().out

    def test_binary_check_runs_outside_event_loop(self, capsys, client):
        found = PrereqResult(
            name="1Password CLI", found=True, version="2.30.0", path="/usr/bin/op", hint=""
        )

        def check(op_path):
            with pytest.raises(RuntimeError):
                asyncio.get_running_loop()
            return found

        with patch("oplauncher.op.prerequisites.check_op", side_effect=check):
            assert main(["status"]) == 0
        client.whoami.assert_awaited_once()


class TestSearch:
    def test_ranked(self, capsys, client):
        assert main(["search", "git"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert "GitHub" in lines[0]
        assert "GitLab" in lines[1]

    def test_no_results(self, capsys, client):
        assert main(["search", "zzz"]) == 0
        assert "No items found" in capsys.readouterr().out

    def test_vault_scope(self, client):
        main(["search", "git", "--vault", "Private"])
        client.list_items.assert_awaited_once_with("Private")

    def test_op_error_exit_code(self, capsys, client):
        client.list_items.side_effect = OpError(ErrorKind.APP_UNREACHABLE, "cannot connect")
        assert main(["search", "git"]) == 1
        out = capsys.readouterr().out
        assert "Error (app_unreachable): cannot connect" in out
        assert "Start the 1Password desktop app" in out


class TestGet:
    def test_password_by_title(self, capsys, client):
        assert main(["get", "github"]) == 0
        assert capsys.readouterr().out.strip() == "hunter2"
        client.get_field.assert_awaited_once_with("gh1", "password")

    def test_by_id(self, client):
        main(["get", "gl1", "--field", "username"])
        client.get_field.assert_awaited_once_with("gl1", "username")

    def test_copy(self, capsys, client):
        with patch("oplauncher.clipboard.copy_to_clipboard", return_value=(True, "")) as copy:
            assert main(["get", "GitHub", "--copy"]) == 0
        copy.assert_called_once_with("hunter2")
        assert "copied" in capsys.readouterr().out

    def test_copy_unavailable(self, capsys, client):
        with patch(
            "oplauncher.clipboard.copy_to_clipboard", return_value=(False, "no clipboard")
        ):
            assert main(["get", "GitHub", "--copy"]) == 1

    def test_otp(self, capsys, client):
        assert main(["get", "GitHub", "--field", "otp"]) == 0
        assert "123456" in capsys.readouterr().out

    def test_otp_missing(self, capsys, client):
        client.get_otp.return_value = None
        assert main(["get", "GitHub", "--field", "otp"]) == 1
        assert "not_found" in capsys.readouterr().out

    def test_unknown_item(self, capsys, client):
        assert main(["get", "nothing"]) == 1
        assert "not_found" in capsys.readouterr().out

    def test_ambiguous_title(self, capsys, client):
        client.list_items.return_value = [_item("a", "Dup"), _item("b", "Dup")]
        assert main(["get", "dup"]) == 1
        assert "use an id" in capsys.readouterr().out


class TestGenerate:
    def test_defaults(self, capsys, invoker):
        assert main(["generate"]) == 0
        assert capsys.readouterr().out.strip() == "Generated-Pass-1"
        args = invoker.run.await_args.args[0]
        assert args[:6] == ["item", "generate", "--category", "password", "--length", "20"]

    def test_flags(self, invoker):
        main(["generate", "-l", "12", "--no-symbols", "--exclude-ambiguous"])
        args = invoker.run.await_args.args[0]
        assert "12" in args
        assert "--no-symbols" in args
        assert "--no-ambiguous" in args

    @pytest.mark.parametrize("length", ["7", "129"])
    def test_length_out_of_range(self, capsys, invoker, length):
        assert main(["generate", "--length", length]) == 1
        assert "between 8 and 128" in capsys.readouterr().out
        invoker.run.assert_not_awaited()

    def test_no_character_sets(self, capsys, invoker):
        rc = main(
            ["generate", "--no-uppercase", "--no-lowercase", "--no-digits", "--no-symbols"]
        )
        assert rc == 1
        invoker.run.assert_not_awaited()

    def test_length_from_env(self, monkeypatch, invoker):
        from oplauncher.config import reset_config

        monkeypatch.setenv("OPLAUNCHER_PASSWORD_LENGTH", "30")
        reset_config()
        main(["generate"])
        assert "30" in invoker.run.await_args.args[0]


class TestCreateEdit:
    def test_create(self, capsys, client):
        assert main(["create", "--title", "Example", "--username", "me"]) == 0
        client.create_login.assert_awaited_once_with(LoginRequest(title="Example", username="me"))
        assert "Created Example" in capsys.readouterr().out

    def test_create_uses_default_vault(self, monkeypatch, client):
        from oplauncher.config import reset_config

        monkeypatch.setenv("OPLAUNCHER_DEFAULT_VAULT", "Shared")
        reset_config()
        main(["create", "--title", "Example"])
        client.create_login.assert_awaited_once_with(LoginRequest(title="Example", vault="Shared"))

    def test_edit(self, capsys, client):
        assert main(["edit", "GitHub", "--password", "new"]) == 0
        client.edit_login.assert_awaited_once_with("gh1", LoginRequest(password="new"))
        assert "Updated GitHub" in capsys.readouterr().out


class TestVaults:
    def test_list(self, capsys, client):
        assert main(["vaults"]) == 0
        out = capsys.readouterr().out
        assert "Private" in out
        assert "3 items" in out

    def test_items_in_vault(self, capsys, client):
        assert main(["vaults", "--items", "Private"]) == 0
        client.list_items.assert_awaited_once_with("Private")
        assert "3 item(s)" in capsys.readouterr().out


class TestSignin:
    def test_success(self, capsys):
        with (
            patch("oplauncher.op.prerequisites.find_op", return_value="/usr/bin/op"),
            patch("oplauncher.op.prerequisites.interactive_signin", return_value=True) as signin,
        ):
            assert main(["signin", "--account", "work"]) == 0
        signin.assert_called_once_with("/usr/bin/op", "work")

    def test_missing_op(self, capsys):
        with patch("oplauncher.op.prerequisites.find_op", return_value=None):
            assert main(["signin"]) == 1
        assert "not found" in capsys.readouterr().out


class TestTui:
    def test_launches_app(self, client, monkeypatch, tmp_path):
        from oplauncher.config import reset_config

        monkeypatch.setenv("OPLAUNCHER_LOG_FILE", str(tmp_path / "tui.log"))
        reset_config()
        with patch("oplauncher.tui.app.OpLauncherApp") as app_cls:
            assert main([]) == 0
        app_cls.assert_called_once()
        assert app_cls.call_args.kwargs["client"] is client
        app_cls.return_value.run.assert_called_once()
