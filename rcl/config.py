"""Configuration helpers for resolution selection and resolution-map layout."""
from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from dotenv import load_dotenv

from rcl.errors import ConfigError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_PATH = PROJECT_ROOT / ".env"

# Load environment variables early so downstream modules can rely on them.
load_dotenv(ENV_PATH, override=False)

OUTPUT_DIR_ENV = "RCL_OUTPUT_DIR"
SUMMARY_TOP_ENV = "RCL_SUMMARY_TOP"
SHARED_WINDOW_ENV = "RCL_SHARED_WINDOW"
RUNG_WIDTH_ENV = "RCL_RUNG_WIDTH"
MAX_RUNG_ENV = "RCL_MAX_RUNG"

DEFAULT_OUTPUT_DIR = Path(".")
DEFAULT_SUMMARY_TOP = 20
DEFAULT_SHARED_WINDOW = 30
DEFAULT_RUNG_WIDTH = 20
DEFAULT_RUNG_EPSILON = 0.01
DEFAULT_MAX_RUNG = 199

LABEL_MODES = ("size", "ival", "leaf", "none")


@dataclass(frozen=True)
class SelectSettings:
    """Runtime settings for the resolution selection step."""

    output_dir: Path
    summary_top: int
    shared_window: int


@dataclass(frozen=True)
class ResmapSettings:
    """Rung geometry for the resolution-map layout."""

    rung_width: int = DEFAULT_RUNG_WIDTH
    rung_epsilon: float = DEFAULT_RUNG_EPSILON
    max_rung: int = DEFAULT_MAX_RUNG


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _get_int_env(name: str, default: int, minimum: int) -> int:
    raw = _get_env(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer; received '{raw}'.") from exc
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}; received {value}.")
    return value


def get_select_settings() -> SelectSettings:
    """Resolve selection settings from the environment with defaults."""

    raw_dir = _get_env(OUTPUT_DIR_ENV, str(DEFAULT_OUTPUT_DIR))
    return SelectSettings(
        output_dir=Path(raw_dir).expanduser(),
        summary_top=_get_int_env(SUMMARY_TOP_ENV, DEFAULT_SUMMARY_TOP, minimum=1),
        shared_window=_get_int_env(SHARED_WINDOW_ENV, DEFAULT_SHARED_WINDOW, minimum=1),
    )


def get_resmap_settings() -> ResmapSettings:
    """Resolve rung geometry from the environment with defaults."""

    return ResmapSettings(
        rung_width=_get_int_env(RUNG_WIDTH_ENV, DEFAULT_RUNG_WIDTH, minimum=1),
        rung_epsilon=DEFAULT_RUNG_EPSILON,
        max_rung=_get_int_env(MAX_RUNG_ENV, DEFAULT_MAX_RUNG, minimum=0),
    )


def parse_resolutions(values: Iterable[Union[str, int, float]]) -> Tuple[float, ...]:
    """Validate resolution thresholds; return them de-duplicated, largest first.

    Raises ConfigError if no value is given or any value is not a finite
    positive number.
    """
    parsed = set()
    for raw in values:
        try:
            value = float(raw)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Resolution check: strange number {raw!r}") from exc
        if not math.isfinite(value) or value <= 0:
            raise ConfigError(f"Resolution must be a positive number; received {raw!r}")
        parsed.add(value)
    if not parsed:
        raise ConfigError("Need at least one resolution parameter")
    return tuple(sorted(parsed, reverse=True))


def format_resolution(resolution: float) -> str:
    """Render a resolution for file and node names (100.0 -> '100')."""
    if float(resolution).is_integer():
        return str(int(resolution))
    return repr(float(resolution))


def validate_label_mode(mode: str) -> str:
    if mode not in LABEL_MODES:
        raise ConfigError(f"Need {'|'.join(LABEL_MODES)}; received '{mode}'")
    return mode
