"""1Password record models and JSON output parsing."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from oplauncher.errors import ErrorKind, OpError


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class FieldSection(_Record):
    id: str = ""
    label: str | None = None


class ItemField(_Record):
    """A typed value inside an item (username, password, OTP, custom...)."""

    id: str = ""
    label: str = ""
    value: str | None = None
    type: str = ""
    purpose: str | None = None
    section: FieldSection | None = None
    # Current code for OTP fields; `value` holds the otpauth:// URI
    totp: str | None = None

    @property
    def concealed(self) -> bool:
        return self.type.upper() == "CONCEALED"


class ItemUrl(_Record):
    href: str
    label: str | None = None
    primary: bool = False


class VaultRef(_Record):
    id: str
    name: str = ""


class Item(_Record):
    """A credential record as returned by `op item list` / `op item get`."""

    id: str
    title: str = ""
    vault: VaultRef
    category: str = ""
    urls: list[ItemUrl] = Field(default_factory=list)
    fields: list[ItemField] = Field(default_factory=list)
    notes_plain: str | None = Field(
        default=None, validation_alias=AliasChoices("notes_plain", "notesPlain")
    )
    created_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("created_at", "createdAt")
    )
    updated_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("updated_at", "updatedAt")
    )
    last_edited_by: str | None = Field(
        default=None, validation_alias=AliasChoices("last_edited_by", "lastEditedBy")
    )

    def field_by_label(self, label: str) -> ItemField | None:
        wanted = label.lower()
        return next((f for f in self.fields if f.label.lower() == wanted), None)

    def field_by_purpose(self, purpose: str) -> ItemField | None:
        wanted = purpose.lower()
        return next(
            (f for f in self.fields if f.purpose and f.purpose.lower() == wanted), None
        )

    def otp_field(self) -> ItemField | None:
        for f in self.fields:
            label = f.label.lower()
            if f.type.lower() == "otp" or "otp" in label or "totp" in label:
                return f
        return None

    @property
    def username(self) -> str | None:
        f = self.field_by_purpose("username")
        return f.value if f else None

    @property
    def notes(self) -> str | None:
        if self.notes_plain:
            return self.notes_plain
        f = self.field_by_purpose("notes")
        return f.value if f and f.value else None

    @property
    def primary_url(self) -> str | None:
        if not self.urls:
            return None
        return next((u.href for u in self.urls if u.primary), self.urls[0].href)


class Vault(_Record):
    id: str
    name: str = ""
    type: str = ""
    item_count: int | None = Field(
        default=None, validation_alias=AliasChoices("item_count", "items", "itemCount")
    )
    created_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("created_at", "createdAt")
    )
    updated_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("updated_at", "updatedAt")
    )


def _load_json(output: str) -> Any:
    try:
        return json.loads(output)
    except json.JSONDecodeError as e:
        raise OpError(ErrorKind.PARSE_FAILURE, f"op returned invalid JSON: {e}") from e


def parse_list(output: str, model: type[_Record]) -> list[Any]:
    """Parse `--format json` list output. Empty output is an empty list."""
    if not output.strip():
        return []
    data = _load_json(output)
    if not isinstance(data, list):
        raise OpError(ErrorKind.PARSE_FAILURE, "Expected a JSON array from op")
    try:
        return [model.model_validate(entry) for entry in data]
    except ValidationError as e:
        raise OpError(ErrorKind.PARSE_FAILURE, f"Unexpected record shape: {e}") from e


def parse_items(output: str) -> list[Item]:
    return parse_list(output, Item)


def parse_vaults(output: str) -> list[Vault]:
    return parse_list(output, Vault)


def parse_item(output: str) -> Item:
    """Parse `item get --format json` output into a single Item."""
    if not output.strip():
        raise OpError(ErrorKind.NOT_FOUND, "op returned no item")
    data = _load_json(output)
    if not isinstance(data, dict):
        raise OpError(ErrorKind.PARSE_FAILURE, "Expected a JSON object from op")
    try:
        return Item.model_validate(data)
    except ValidationError as e:
        raise OpError(ErrorKind.PARSE_FAILURE, f"Unexpected item shape: {e}") from e


def parse_object(output: str) -> dict[str, Any]:
    """Parse a JSON object (whoami and similar). Empty output is {}."""
    if not output.strip():
        return {}
    data = _load_json(output)
    if not isinstance(data, dict):
        raise OpError(ErrorKind.PARSE_FAILURE, "Expected a JSON object from op")
    return data
