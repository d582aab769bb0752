"""Small presentation helpers shared by the CLI and the TUI."""

from __future__ import annotations

from datetime import datetime

CATEGORY_ICONS: dict[str, str] = {
    "LOGIN": "\U0001f512",
    "PASSWORD": "\U0001f511",
    "CREDIT_CARD": "\U0001f4b3",
    "SECURE_NOTE": "\U0001f4c4",
    "IDENTITY": "\U0001f464",
    "BANK_ACCOUNT": "\U0001f3e6",
    "DATABASE": "\U0001f5c4",
    "DRIVER_LICENSE": "\U0001faaa",
    "EMAIL_ACCOUNT": "✉",
    "OUTDOOR_LICENSE": "\U0001f3f7",
    "PASSPORT": "\U0001f6c2",
    "REWARD_PROGRAM": "\U0001f381",
    "SOCIAL_SECURITY_NUMBER": "\U0001f4c4",
    "SOFTWARE_LICENSE": "\U0001f4bf",
    "SSH_KEY": "\U0001f527",
    "WIRELESS_ROUTER": "\U0001f4f6",
    "SERVER": "\U0001f5a5",
    "API_CREDENTIAL": "\U0001f50c",
}
DEFAULT_ICON = "\U0001f3f7"

MASK_CHAR = "•"


def _category_key(category: str) -> str:
    # op emits LOGIN / CREDIT_CARD; older payloads use "Login" / "Credit Card"
    return category.strip().upper().replace(" ", "_")


def category_icon(category: str) -> str:
    return CATEGORY_ICONS.get(_category_key(category), DEFAULT_ICON)


def category_label(category: str) -> str:
    """LOGIN → Login, CREDIT_CARD → Credit Card."""
    return _category_key(category).replace("_", " ").title()


def format_date(value: datetime | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value.strftime("%b %d, %Y %H:%M")


def mask_password(password: str) -> str:
    return MASK_CHAR * min(len(password), 20)
