"""
CLI Configuration

Centralized configuration for the mjforge CLI subsystem.
"""

import os
from typing import Optional


class CLIConfig:
    """Configuration for CLI commands"""

    # Machine mode (plain JSON output)
    _machine_mode: Optional[bool] = None

    @classmethod
    def set_machine_mode(cls, enabled: bool) -> None:
        """Set machine mode (pure data output, no presentation)"""
        cls._machine_mode = enabled

    @classmethod
    def reset(cls) -> None:
        cls._machine_mode = None

    @classmethod
    def is_machine_mode(cls) -> bool:
        """
        Check if machine mode is active.

        Machine mode is the default; MJFORGE_HUMAN_MODE opts into rich output.
        """
        if cls._machine_mode is not None:
            return cls._machine_mode
        if os.getenv("MJFORGE_HUMAN_MODE", "").lower() in ("1", "true", "yes"):
            return False
        return True
