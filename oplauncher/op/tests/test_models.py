"""Tests for op record models and parsing."""

from __future__ import annotations

import json

import pytest

from oplauncher.errors import ErrorKind, OpError
from oplauncher.op.models import Item, parse_item, parse_items, parse_object, parse_vaults


class TestParseItems:
    def test_empty_output(self):
        assert parse_items("") == []
        assert parse_items("  \n") == []

    def test_list(self, item_json):
        items = parse_items(json.dumps([item_json]))
        assert len(items) == 1
        assert items[0].title == "GitHub"
        assert items[0].vault.name == "Private"

    def test_unknown_keys_ignored(self, item_json):
        item_json["additional_information"] = "octocat"
        assert parse_items(json.dumps([item_json]))[0].id == "abc123"

    def test_invalid_json(self):
        with pytest.raises(OpError) as exc:
            parse_items("not json")
        assert exc.value.kind is ErrorKind.PARSE_FAILURE

    def test_object_instead_of_list(self):
        with pytest.raises(OpError) as exc:
            parse_items("{}")
        assert exc.value.kind is ErrorKind.PARSE_FAILURE

    def test_missing_required_field(self):
        with pytest.raises(OpError) as exc:
            parse_items(json.dumps([{"title": "no id"}]))
        assert exc.value.kind is ErrorKind.PARSE_FAILURE


class TestParseItem:
    def test_empty_is_not_found(self):
        with pytest.raises(OpError) as exc:
            parse_item("")
        assert exc.value.kind is ErrorKind.NOT_FOUND

    def test_list_is_parse_failure(self):
        with pytest.raises(OpError) as exc:
            parse_item("[]")
        assert exc.value.kind is ErrorKind.PARSE_FAILURE

    def test_timestamps(self, item_json):
        item = parse_item(json.dumps(item_json))
        assert item.created_at.year == 2024
        assert item.updated_at.month == 3

    def test_camel_case_aliases(self):
        item = Item.model_validate(
            {
                "id": "x",
                "vault": {"id": "v"},
                "notesPlain": "hello",
                "updatedAt": "2024-01-01T00:00:00Z",
            }
        )
        assert item.notes_plain == "hello"
        assert item.updated_at is not None


class TestItemAccessors:
    def test_username(self, item_json):
        assert parse_item(json.dumps(item_json)).username == "octocat"

    def test_field_by_label_case_insensitive(self, item_json):
        item = parse_item(json.dumps(item_json))
        assert item.field_by_label("PASSWORD").value == "hunter2"
        assert item.field_by_label("missing") is None

    def test_concealed(self, item_json):
        item = parse_item(json.dumps(item_json))
        assert item.field_by_purpose("password").concealed
        assert not item.field_by_purpose("username").concealed

    def test_otp_field(self, item_json):
        field = parse_item(json.dumps(item_json)).otp_field()
        assert field is not None
        assert field.totp == "123456"

    def test_otp_by_label(self):
        item = Item.model_validate(
            {"id": "x", "vault": {"id": "v"}, "fields": [{"label": "TOTP code", "value": "1"}]}
        )
        assert item.otp_field().value == "1"

    def test_notes_from_field(self, item_json):
        assert parse_item(json.dumps(item_json)).notes == "2FA on"

    def test_primary_url(self, item_json):
        item_json["urls"] = [
            {"href": "https://a.example"},
            {"href": "https://b.example", "primary": True},
        ]
        assert parse_item(json.dumps(item_json)).primary_url == "https://b.example"

    def test_primary_url_falls_back_to_first(self, item_json):
        item_json["urls"] = [{"href": "https://a.example"}]
        assert parse_item(json.dumps(item_json)).primary_url == "https://a.example"

    def test_no_urls(self, item_json):
        item_json["urls"] = []
        assert parse_item(json.dumps(item_json)).primary_url is None


class TestVaults:
    def test_item_count_alias(self):
        vaults = parse_vaults(
            json.dumps([{"id": "v1", "name": "Private", "type": "PERSONAL", "items": 12}])
        )
        assert vaults[0].item_count == 12
        assert vaults[0].type == "PERSONAL"


class TestParseObject:
    def test_empty(self):
        assert parse_object("") == {}

    def test_object(self):
        assert parse_object('{"email": "me@example.com"}')["email"] == "me@example.com"

    def test_array_rejected(self):
        with pytest.raises(OpError):
            parse_object("[1]")
