"""Configuration models and loading for hunkwise.

Settings resolve from CLI overrides, then ``HUNKWISE_*`` environment
variables, then ``config.toml``, then the built-in defaults.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hunkwise.diff.generator import DEFAULT_CONTEXT_LINES, DEFAULT_LOOKAHEAD, DiffStrategy
from hunkwise.paths import default_config_path


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Settings(BaseModel):
    """Resolved hunkwise settings."""

    model_config = ConfigDict(frozen=True, validate_default=True, extra="forbid")

    context_lines: int = Field(default=DEFAULT_CONTEXT_LINES, ge=0)
    lookahead: int = Field(default=DEFAULT_LOOKAHEAD, ge=1)
    strategy: DiffStrategy = DiffStrategy.GREEDY
    fuzzy_whitespace: bool = True
    log_level: LogLevel = LogLevel.INFO


ENV_PREFIX = "HUNKWISE_"
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def load_settings(
    cli_overrides: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
    config_path: Path | str | None = None,
    *,
    create_if_missing: bool = False,
) -> Settings:
    env = os.environ if env is None else env
    cli_overrides = cli_overrides or {}
    path = Path(config_path) if config_path else default_config_path()

    created_new = False
    if not path.exists() and create_if_missing:
        path.parent.mkdir(parents=True, exist_ok=True)
        write_config(Settings(), path)
        created_new = True

    config_data: dict[str, Any] = {}
    if path.exists():
        config_data = _read_toml(path)

    defaults = Settings()

    context_lines = _first_value(
        _clean_str(cli_overrides.get("context_lines")),
        _clean_str(env.get(f"{ENV_PREFIX}CONTEXT_LINES")),
        _get_config_value(config_data, "diff", "context_lines"),
        defaults.context_lines,
    )

    lookahead = _first_value(
        _clean_str(cli_overrides.get("lookahead")),
        _clean_str(env.get(f"{ENV_PREFIX}LOOKAHEAD")),
        _get_config_value(config_data, "diff", "lookahead"),
        defaults.lookahead,
    )

    strategy = _first_value(
        _clean_str(cli_overrides.get("strategy")),
        _clean_str(env.get(f"{ENV_PREFIX}STRATEGY")),
        _clean_str(_get_config_value(config_data, "diff", "strategy")),
        defaults.strategy,
    )

    fuzzy_whitespace = _first_value(
        _clean_str(cli_overrides.get("fuzzy_whitespace")),
        _clean_str(env.get(f"{ENV_PREFIX}FUZZY_WHITESPACE")),
        _get_config_value(config_data, "apply", "fuzzy_whitespace"),
        defaults.fuzzy_whitespace,
    )

    log_level = _first_value(
        _clean_str(cli_overrides.get("log_level")),
        _clean_str(env.get(f"{ENV_PREFIX}LOG_LEVEL")),
        _clean_str(_get_config_value(config_data, "logging", "log_level")),
        defaults.log_level,
    )

    strategy_val = cast(DiffStrategy, _coerce_enum(strategy, DiffStrategy, DiffStrategy.GREEDY))
    log_level_val = cast(LogLevel, _coerce_enum(log_level, LogLevel, LogLevel.INFO))

    try:
        settings = Settings(
            context_lines=_coerce_int(context_lines, "context_lines"),
            lookahead=_coerce_int(lookahead, "lookahead"),
            strategy=strategy_val,
            fuzzy_whitespace=_coerce_bool(fuzzy_whitespace, "fuzzy_whitespace"),
            log_level=log_level_val,
        )
    except ValidationError as exc:
        raise SystemExit(f"invalid settings: {exc}") from exc

    if created_new:
        write_config(settings, path)
    return settings


def write_config(settings: Settings, config_path: Path | str | None = None) -> Path:
    path = Path(config_path) if config_path else default_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    sections: list[str] = []
    _append_section(
        sections,
        "diff",
        {
            "context_lines": settings.context_lines,
            "lookahead": settings.lookahead,
            "strategy": settings.strategy,
        },
    )
    _append_section(sections, "apply", {"fuzzy_whitespace": settings.fuzzy_whitespace})
    _append_section(sections, "logging", {"log_level": settings.log_level})

    content = "\n\n".join(filter(None, sections)) + "\n"
    path.write_text(content, encoding="utf-8")
    return path


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_config_value(config: Mapping[str, Any], section: str, key: str) -> Any:
    section_data = config.get(section)
    if not isinstance(section_data, dict):
        return None
    return section_data.get(key)


def _clean_str(value: Any) -> Any:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    return value


def _first_value(*candidates: Any) -> Any:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def _coerce_enum(value: Any, enum_cls: type[Enum], default: Enum | None = None) -> Enum | None:
    if value is None:
        return default
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value)
        except ValueError:
            return default
    return default


def _coerce_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise SystemExit(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value))
    except ValueError:
        raise SystemExit(f"{name} must be an integer, got {value!r}") from None


def _coerce_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    lowered = str(value).lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise SystemExit(f"{name} must be a boolean, got {value!r}")


def _append_section(parts: list[str], name: str, values: Mapping[str, Any]) -> None:
    filtered = {k: v for k, v in values.items() if v is not None}
    if not filtered:
        return
    lines = [f"[{name}]"]
    for key, val in filtered.items():
        if isinstance(val, bool):
            lines.append(f"{key} = {'true' if val else 'false'}")
        elif isinstance(val, Enum):
            lines.append(f'{key} = "{val.value}"')
        elif isinstance(val, str):
            escaped = val.replace('"', '\\"')
            lines.append(f'{key} = "{escaped}"')
        else:
            lines.append(f"{key} = {val}")
    parts.append("\n".join(lines))


__all__ = [
    "Settings",
    "LogLevel",
    "DiffStrategy",
    "ENV_PREFIX",
    "load_settings",
    "write_config",
]
