"""Runtime configuration, read from ``STOREFRONT_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

# Resolve the default data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    log_level: str = "WARNING"
    poll_interval: float = 5.0
    store_name: str = "Sikkolu Specials"
    background_side_effects: bool = False


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ

    poll_raw = env.get("STOREFRONT_POLL_INTERVAL", "5.0")
    try:
        poll_interval = float(poll_raw)
    except ValueError:
        raise ValueError(f"STOREFRONT_POLL_INTERVAL must be a number, got {poll_raw!r}")
    if poll_interval <= 0:
        raise ValueError("STOREFRONT_POLL_INTERVAL must be positive")

    return Settings(
        data_dir=Path(env.get("STOREFRONT_DATA_DIR", str(_DEFAULT_DATA_DIR))).expanduser(),
        log_level=env.get("STOREFRONT_LOG_LEVEL", "WARNING").upper(),
        poll_interval=poll_interval,
        store_name=env.get("STOREFRONT_STORE_NAME", "Sikkolu Specials"),
        background_side_effects=_parse_bool(
            "STOREFRONT_BACKGROUND_SIDE_EFFECTS",
            env.get("STOREFRONT_BACKGROUND_SIDE_EFFECTS", "0"),
        ),
    )
