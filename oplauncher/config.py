"""
Centralized configuration for oplauncher.

Loaded from a YAML preferences file, then overridden by environment
variables. Defaults need no file and no environment at all.

Usage:
    from oplauncher.config import get_config
    cfg = get_config()
    print(cfg.op_path)            # "" = discover op on PATH
    print(cfg.generator.length)   # 20
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class GeneratorDefaults:
    """Initial values of the password generator form."""

    length: int = 20
    uppercase: bool = True
    lowercase: bool = True
    digits: bool = True
    symbols: bool = True
    exclude_ambiguous: bool = False


@dataclass(frozen=True)
class Config:
    """Top-level oplauncher configuration."""

    # op binary; empty = look on PATH and in common install locations
    op_path: str = ""
    # Account shorthand, email or id passed to `op signin --account`
    account: str = ""
    default_vault: str = ""
    # Pass --reveal when reading single fields (op >= 2.25 conceals otherwise)
    reveal_concealed: bool = True

    log_level: str = "WARNING"
    log_file: Path | None = None

    generator: GeneratorDefaults = field(default_factory=GeneratorDefaults)

    @property
    def tui_log_file(self) -> Path:
        """Log destination while the TUI owns the terminal."""
        return self.log_file or Path.home() / ".cache" / "oplauncher" / "oplauncher.log"


# Singleton
_config: Config | None = None


def get_config() -> Config:
    """Get or create the singleton config from file and environment."""
    global _config
    if _config is not None:
        return _config
    _config = _load()
    return _config


def config_path() -> Path:
    return Path(
        os.environ.get(
            "OPLAUNCHER_CONFIG", Path.home() / ".config" / "oplauncher" / "config.yaml"
        )
    )


def _load_file(path: Path) -> dict[str, Any]:
    """Read the YAML preferences file. Missing or malformed files yield {}."""
    if not path.is_file():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: expected a mapping", path)
        return {}
    return data


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE


def _length(raw: Any, source: str) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring password length %r from %s: not a whole number", raw, source)
        return GeneratorDefaults.length


def _load() -> Config:
    """Load configuration: defaults, then YAML file, then environment."""
    data = _load_file(config_path())
    gen = data.get("generator") or {}
    if not isinstance(gen, dict):
        logger.warning("Ignoring generator settings: expected a mapping")
        gen = {}

    length = _length(gen.get("length", GeneratorDefaults.length), "config file")
    if "OPLAUNCHER_PASSWORD_LENGTH" in os.environ:
        length = _length(os.environ["OPLAUNCHER_PASSWORD_LENGTH"], "OPLAUNCHER_PASSWORD_LENGTH")

    generator = GeneratorDefaults(
        length=length,
        uppercase=bool(gen.get("uppercase", True)),
        lowercase=bool(gen.get("lowercase", True)),
        digits=bool(gen.get("digits", True)),
        symbols=bool(gen.get("symbols", True)),
        exclude_ambiguous=bool(gen.get("exclude_ambiguous", False)),
    )

    log_file = os.environ.get("OPLAUNCHER_LOG_FILE", data.get("log_file") or "")

    return Config(
        op_path=os.environ.get("OPLAUNCHER_OP_PATH", data.get("op_path", "")),
        account=os.environ.get("OPLAUNCHER_ACCOUNT", data.get("account", "")),
        default_vault=os.environ.get("OPLAUNCHER_DEFAULT_VAULT", data.get("default_vault", "")),
        reveal_concealed=_env_bool(
            "OPLAUNCHER_REVEAL", bool(data.get("reveal_concealed", True))
        ),
        log_level=os.environ.get("OPLAUNCHER_LOG_LEVEL", data.get("log_level", "WARNING")).upper(),
        log_file=Path(log_file).expanduser() if log_file else None,
        generator=generator,
    )


def reset_config() -> None:
    """Reset the singleton config (for testing)."""
    global _config
    _config = None
