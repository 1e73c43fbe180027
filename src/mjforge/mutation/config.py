"""
Configuration for component mutations.

Content policy and history capacity, overridable via MJFORGE_* environment variables.
"""

import os
from dataclasses import dataclass


DEFAULT_MAX_CONTENT_LENGTH = 5000
DEFAULT_HISTORY_CAPACITY = 50


def _env_int(key: str, default: int) -> int:
    """Read integer from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    """Read boolean from environment variable."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


def get_mutation_config():
    """Get mutation configuration with environment overrides."""
    return {
        "max_content_length": _env_int("MJFORGE_MAX_CONTENT_LENGTH", DEFAULT_MAX_CONTENT_LENGTH),
        "allow_empty": _env_bool("MJFORGE_ALLOW_EMPTY", False),
        "trim_content": _env_bool("MJFORGE_TRIM_CONTENT", True),
        "history_capacity": _env_int("MJFORGE_HISTORY_CAPACITY", DEFAULT_HISTORY_CAPACITY),
        "copy_suffix_length": 5,
    }


MUTATION_CONFIG = get_mutation_config()


@dataclass
class ContentPolicy:
    """Validation policy applied to new content before any tree mutation."""

    max_length: int = DEFAULT_MAX_CONTENT_LENGTH
    allow_empty: bool = False
    trim: bool = True

    @classmethod
    def from_config(cls, config: dict = None, **overrides) -> "ContentPolicy":
        config = {**MUTATION_CONFIG, **(config or {})}
        policy = cls(
            max_length=config["max_content_length"],
            allow_empty=config["allow_empty"],
            trim=config["trim_content"],
        )
        for key, value in overrides.items():
            if value is not None and hasattr(policy, key):
                setattr(policy, key, value)
        return policy
