"""
edgeval configuration — default seed for the thread-local generator.

Config file: ~/.edgeval/config.json
Resolution order: env var → config file → None (system entropy)
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".edgeval"
CONFIG_FILE = CONFIG_DIR / "config.json"

SEED_ENV_VAR = "EDGEVAL_SEED"


def parse_seed(raw) -> Optional[int]:
    """
    Parse a seed from an int or a decimal / 0x-prefixed hex string.

    Returns None if the value is not a valid 64-bit unsigned seed.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        seed = raw
    elif isinstance(raw, str):
        try:
            seed = int(raw.strip().replace("_", ""), 0)
        except ValueError:
            return None
    else:
        return None
    if not 0 <= seed < (1 << 64):
        return None
    return seed


def load_config() -> dict:
    """Load config from ~/.edgeval/config.json."""
    if CONFIG_FILE.exists():
        try:
            data = json.loads(CONFIG_FILE.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable config {CONFIG_FILE}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {CONFIG_FILE}: expected a JSON object, got {type(data).__name__}")
            return {}
        return data
    return {}


def save_config(seed: Optional[int]) -> None:
    """Save the default seed to the config file. None removes it."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    config = load_config()
    if seed is None:
        config.pop("seed", None)
    else:
        config["seed"] = seed
    CONFIG_FILE.write_text(json.dumps(config, indent=2), encoding="utf-8")


def resolve_seed() -> Optional[int]:
    """
    Resolve the default seed.

    Resolution order:
    1. EDGEVAL_SEED environment variable (highest priority)
    2. ~/.edgeval/config.json "seed"
    3. None, meaning seed from system entropy
    """
    # 1. Check environment variable
    raw = os.environ.get(SEED_ENV_VAR)
    if raw:
        seed = parse_seed(raw)
        if seed is not None:
            logger.debug(f"Using seed from {SEED_ENV_VAR}")
            return seed
        logger.warning(f"Ignoring invalid {SEED_ENV_VAR}={raw!r}")

    # 2. Check config file
    config = load_config()
    if "seed" in config:
        seed = parse_seed(config["seed"])
        if seed is not None:
            logger.debug(f"Using seed from {CONFIG_FILE}")
            return seed
        logger.warning(f"Ignoring invalid seed in {CONFIG_FILE}: {config['seed']!r}")

    # 3. Nothing found
    return None
