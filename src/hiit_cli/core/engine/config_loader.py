"""
YAML -> typed settings loader.

Loads defaults from defaults.yaml (bundled with the package) and merges
user overrides from ``<data_dir>/config.yaml``.  Environment variables
HIIT_CLI_EMOJIS / HIIT_CLI_AUDIO and explicit CLI flags are applied on
top, in that order.

Usage:
    from hiit_cli.core.engine.config_loader import load_settings
    settings = load_settings(data_dir, emoji=None, audio=False)

If the user file has parse errors, a warning is issued and the file is
ignored.
"""

from __future__ import annotations

import os
import sys
import warnings
from pathlib import Path
from typing import Any

import yaml

from ..config import (
    AUDIO_ENV,
    EMOJI_ENV,
    USER_CONFIG_NAME,
    CompletionMessages,
    DisplaySettings,
    EngineTimings,
    Settings,
)

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; warn and return {} if it cannot be parsed."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"hiit-cli: ignoring config file {path} ({exc})", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _parse_bool(value: str) -> bool:
    return value.strip().lower() == "true"


def _env_flag(name: str) -> bool | None:
    raw = os.environ.get(name)
    if not raw:
        return None
    return _parse_bool(raw)


def detect_emoji_support() -> bool:
    """
    Guess whether the terminal can show emoji.

    Non-Windows terminals are assumed to; on Windows only Windows Terminal
    or a UTF-8 console qualifies.
    """
    if sys.platform != "win32":
        return True
    if os.environ.get("WT_SESSION"):
        return True
    encoding = (getattr(sys.stdout, "encoding", None) or "").lower().replace("-", "")
    return encoding == "utf8"


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    """Return config section *name*; warn and use {} if it is not a mapping."""
    value = raw.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        warnings.warn(
            f"hiit-cli: ignoring config section '{name}' (expected a mapping, got {type(value).__name__})",
            stacklevel=3,
        )
        return {}
    return value


def _timing(section: dict[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    if isinstance(value, bool):
        raise ValueError(f"timings.{key} must be a whole number, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"timings.{key} must be a whole number, got {value!r}") from e


def _timings_from(section: dict[str, Any]) -> EngineTimings:
    defaults = EngineTimings()
    return EngineTimings(
        start_countdown=_timing(section, "start_countdown", defaults.start_countdown),
        inter_rep_prepare=_timing(section, "inter_rep_prepare", defaults.inter_rep_prepare),
        no_rest_transition=_timing(section, "no_rest_transition", defaults.no_rest_transition),
        rest_prepare=_timing(section, "rest_prepare", defaults.rest_prepare),
        inter_rep_rest=_timing(section, "inter_rep_rest", defaults.inter_rep_rest),
    )


def _message_list(section: dict[str, Any], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """A list of templates; anything else warns and keeps the default."""
    value = section.get(key)
    if not value:
        return default
    if not isinstance(value, list):
        warnings.warn(
            f"hiit-cli: ignoring messages.{key} (expected a list, got {type(value).__name__})",
            stacklevel=4,
        )
        return default
    return tuple(str(m) for m in value)


def _messages_from(section: dict[str, Any]) -> CompletionMessages:
    defaults = CompletionMessages()
    return CompletionMessages(
        regular=_message_list(section, "regular", defaults.regular),
        no_rest=_message_list(section, "no_rest", defaults.no_rest),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled defaults.yaml, or None if not found."""
    # config_loader.py lives at src/hiit_cli/core/engine/config_loader.py
    # three levels up -> src/hiit_cli/
    candidate = Path(__file__).parent.parent.parent / "defaults.yaml"
    return candidate if candidate.is_file() else None


def get_user_yaml_path(data_dir: Path) -> Path | None:
    """Return <data_dir>/config.yaml if it exists, else None."""
    p = Path(data_dir) / USER_CONFIG_NAME
    return p if p.exists() else None


def load_raw_config(data_dir: Path | None = None) -> dict[str, Any]:
    """
    Load and merge configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/hiit_cli/defaults.yaml
    2. User override at <data_dir>/config.yaml

    Returns:
        Merged dict of config sections.  Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        config = _deep_merge(config, _load_yaml_file(bundled))

    if data_dir is not None:
        user = get_user_yaml_path(data_dir)
        if user is not None:
            config = _deep_merge(config, _load_yaml_file(user))

    return config


def load_settings(
    data_dir: Path | None = None,
    *,
    emoji: bool | None = None,
    audio: bool | None = None,
) -> Settings:
    """
    Resolve the application settings.

    Args:
        data_dir: Directory holding the user's config.yaml (optional)
        emoji: Explicit --emoji/--no-emoji flag, None when not given
        audio: Explicit --audio/--no-audio flag, None when not given

    Raises:
        ValueError: If a configured timing is not a non-negative whole number
    """
    raw = load_raw_config(data_dir)
    display = _section(raw, "display")

    resolved_emoji = emoji
    if resolved_emoji is None:
        resolved_emoji = _env_flag(EMOJI_ENV)
    if resolved_emoji is None and display.get("emoji") is not None:
        resolved_emoji = bool(display["emoji"])
    if resolved_emoji is None:
        resolved_emoji = detect_emoji_support()

    resolved_audio = audio
    if resolved_audio is None:
        resolved_audio = _env_flag(AUDIO_ENV)
    if resolved_audio is None:
        resolved_audio = bool(display.get("audio", True))

    return Settings(
        timings=_timings_from(_section(raw, "timings")),
        display=DisplaySettings(emoji=resolved_emoji, audio=resolved_audio),
        messages=_messages_from(_section(raw, "messages")),
    )
