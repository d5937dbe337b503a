"""
Configuration constants and settings containers for hiit-cli.

Default timings live here as ``Final`` constants; the bundled
defaults.yaml and the user's config.yaml can override them through
core/engine/config_loader.py, which builds a ``Settings`` object.
"""

from dataclasses import dataclass, field
from typing import Final

# =============================================================================
# PACING DELAYS (seconds)
# =============================================================================

START_COUNTDOWN_SECONDS: Final[int] = 3  # "Get ready! Starting in..." before the first set
INTER_REP_PREPARE_SECONDS: Final[int] = 3  # Pause at the top of every rep after the first
NO_REST_TRANSITION_SECONDS: Final[int] = 1  # Between sets / exercises when there is no rest
REST_PREPARE_SECONDS: Final[int] = 2  # Between exercises when this one has rest == 0
INTER_REP_REST_SECONDS: Final[int] = 5  # After each rep except the last

# =============================================================================
# COUNTDOWN EMPHASIS
# =============================================================================

FINAL_SECONDS_URGENT: Final[int] = 3  # Active sets: shout the last 3 seconds
FINAL_SECONDS_WARNING: Final[int] = 5  # Active sets: highlight the last 5 seconds

TICK_SECONDS: Final[int] = 1

# =============================================================================
# ROUTINE LIMITS
# =============================================================================

MIN_DIFFICULTY: Final[int] = 1
MAX_DIFFICULTY: Final[int] = 5

# =============================================================================
# DATA LOCATIONS
# =============================================================================

DATA_DIR_ENV: Final[str] = "HIIT_CLI_DATA_DIR"
EMOJI_ENV: Final[str] = "HIIT_CLI_EMOJIS"
AUDIO_ENV: Final[str] = "HIIT_CLI_AUDIO"
DEFAULT_DATA_DIR_NAME: Final[str] = ".hiit-cli"
ROUTINES_DIR_NAME: Final[str] = "routines"
USER_CONFIG_NAME: Final[str] = "config.yaml"


@dataclass(frozen=True)
class EngineTimings:
    """Fixed pacing delays used by the workout engine (seconds, 0 disables)."""

    start_countdown: int = START_COUNTDOWN_SECONDS
    inter_rep_prepare: int = INTER_REP_PREPARE_SECONDS
    no_rest_transition: int = NO_REST_TRANSITION_SECONDS
    rest_prepare: int = REST_PREPARE_SECONDS
    inter_rep_rest: int = INTER_REP_REST_SECONDS

    def __post_init__(self) -> None:
        for name in (
            "start_countdown",
            "inter_rep_prepare",
            "no_rest_transition",
            "rest_prepare",
            "inter_rep_rest",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"timings.{name} must be non-negative")


@dataclass(frozen=True)
class DisplaySettings:
    """Renderer switches; passed to the console renderer at construction."""

    emoji: bool = True
    audio: bool = True


@dataclass(frozen=True)
class CompletionMessages:
    """
    Completion message templates.

    Templates may reference display symbols by name, e.g. "{fire}".
    """

    regular: tuple[str, ...] = ("Great job! You've completed your workout! {muscle}",)
    no_rest: tuple[str, ...] = ("INCREDIBLE! You just crushed a no-rest workout! {fire}{muscle}",)


@dataclass(frozen=True)
class Settings:
    """Complete application settings resolved from YAML, environment and flags."""

    timings: EngineTimings = field(default_factory=EngineTimings)
    display: DisplaySettings = field(default_factory=DisplaySettings)
    messages: CompletionMessages = field(default_factory=CompletionMessages)
