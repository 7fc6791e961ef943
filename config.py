"""Settings for the chordal command line, read from ``config.toml``."""

from __future__ import annotations

import dataclasses
import sys
import tomllib
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config.toml"
DEFAULT_CONFIG = """
# keyboard to score: asetniop, unconstrained, thumbs, modifiers
layout = "thumbs"
objective = "finger_alt + hand_alt + 10finger_balance + 10hand_balance"
skip_untypeable = false
"""

LAYOUTS = ("asetniop", "unconstrained", "thumbs", "modifiers")


@dataclasses.dataclass(slots=True, frozen=True)
class Settings:
    layout: str
    objective: str
    skip_untypeable: bool
    seed: int | None = None
    finger_targets: tuple[float, ...] | None = None
    hand_targets: tuple[float, ...] | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        layout = str(data.get("layout", "thumbs"))
        if layout not in LAYOUTS:
            raise ValueError(f"Unknown layout '{layout}', expected one of {', '.join(LAYOUTS)}")

        seed = data.get("seed")
        if seed is not None and not isinstance(seed, int):
            raise ValueError(f"seed must be an integer, got {seed!r}")

        return cls(
            layout=layout,
            objective=str(data.get("objective", "finger_alt + hand_alt")),
            skip_untypeable=bool(data.get("skip_untypeable", False)),
            seed=seed,
            finger_targets=_targets(data, "finger_targets", 10),
            hand_targets=_targets(data, "hand_targets", 2),
        )


def _targets(data: dict, key: str, size: int) -> tuple[float, ...] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or len(value) != size:
        raise ValueError(f"{key} must be a list of {size} numbers")
    return tuple(float(v) for v in value)


def load_settings(config_path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """
    Read the settings, writing the default config first if the file does not exist.

    Raises
    ------
    ValueError
        If the file is not valid TOML or holds invalid settings.
    """
    if not config_path.exists():
        print(
            f"warning: config file not found at {config_path}, creating default config",
            file=sys.stderr,
        )
        config_path.write_text(DEFAULT_CONFIG, encoding="utf-8")

    try:
        with config_path.open("rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"malformed config in {config_path}: {exc}") from exc

    return Settings.from_dict(data)
