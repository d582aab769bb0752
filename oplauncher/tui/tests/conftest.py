"""Test fixtures for the oplauncher TUI."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from oplauncher.cache import SnapshotCache
from oplauncher.config import Config
from oplauncher.op.client import OpClient
from oplauncher.op.models import Item, Vault
from oplauncher.tui.app import OpLauncherApp


def _make_item(item_id: str, title: str, url: str = "", **extra) -> Item:
    data = {
        "id": item_id,
        "title": title,
        "vault": {"id": "v1", "name": "Private"},
        "category": "LOGIN",
        "urls": [{"href": url, "primary": True}] if url else [],
        "fields": [
            {"id": "username", "label": "username", "purpose": "USERNAME", "value": "octocat"},
            {
                "id": "password",
                "label": "password",
                "purpose": "PASSWORD",
                "type": "CONCEALED",
                "value": "hunter2",
            },
        ],
    }
    data.update(extra)
    return Item.model_validate(data)


@pytest.fixture
def make_item():
    return _make_item


@pytest.fixture
def items() -> list[Item]:
    return [
        _make_item("gh1", "GitHub", "https://github.com"),
        _make_item("bb1", "Bitbucket", "https://bitbucket.org/git"),
        _make_item("gl1", "GitLab", "https://gitlab.com"),
        _make_item("ex1", "Example Bank", "https://bank.example"),
    ]


@pytest.fixture
def vaults() -> list[Vault]:
    return [
        Vault(id="v1", name="Private", type="PERSONAL", item_count=4),
        Vault(id="v2", name="Shared", type="USER_CREATED", item_count=0),
    ]


@pytest.fixture
def mock_client(items, vaults):
    """A mocked OpClient for TUI tests."""
    by_id = {i.id: i for i in items}

    async def get_item(item_id):
        return by_id[item_id]

    client = MagicMock(spec=OpClient)
    client.op_path = "/usr/local/bin/op"
    client.cache = SnapshotCache()
    client.cached_items.return_value = None
    client.cached_vaults.return_value = None
    client.list_items = AsyncMock(return_value=items)
    client.list_vaults = AsyncMock(return_value=vaults)
    client.get_item = AsyncMock(side_effect=get_item)
    client.get_password = AsyncMock(return_value="hunter2")
    client.get_username = AsyncMock(return_value="octocat")
    client.get_otp = AsyncMock(return_value="123456")
    client.generate_password = AsyncMock(return_value="Gen-Pass-123!")
    client.create_login = AsyncMock(return_value=items[0])
    client.edit_login = AsyncMock(return_value=items[0])
    client.is_installed = AsyncMock(return_value=True)
    client.is_signed_in = AsyncMock(return_value=True)
    return client


@pytest.fixture
def app(mock_client) -> OpLauncherApp:
    return OpLauncherApp(client=mock_client, settings=Config())
