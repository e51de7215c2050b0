"""Startup configuration."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ENV_PREFIX = "THESHIT_"


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    value = environ.get(ENV_PREFIX + name)
    if value is None:
        return default
    return value == "true"


def _env_int(environ: Mapping[str, str], name: str, default: int, minimum: int = 1) -> int:
    value = environ.get(ENV_PREFIX + name)
    if value is None:
        return default
    try:
        number = int(value)
    except ValueError:
        number = None
    if number is None or number < minimum:
        logger.warning(f"Ignoring invalid {ENV_PREFIX + name}={value!r}")
        return default
    return number


@dataclass
class Settings:
    """Settings read once at startup and passed to whatever needs them."""

    require_confirmation: bool = True
    no_colors: bool = False
    debug: bool = False
    wait_command: int = 3  # seconds allowed for capturing a command's output
    history_limit: int = 9999
    num_close_matches: int = 3
    search_path: str = ""
    shell: str = ""
    home: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            Settings with defaults for anything unset
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            require_confirmation=_env_flag(env, "REQUIRE_CONFIRMATION", defaults.require_confirmation),
            no_colors=_env_flag(env, "NO_COLORS", defaults.no_colors),
            debug=_env_flag(env, "DEBUG", defaults.debug),
            wait_command=_env_int(env, "WAIT_COMMAND", defaults.wait_command),
            history_limit=_env_int(env, "HISTORY_LIMIT", defaults.history_limit),
            num_close_matches=_env_int(env, "NUM_CLOSE_MATCHES", defaults.num_close_matches),
            search_path=env.get("PATH", ""),
            shell=env.get("SHELL", ""),
            home=env.get("HOME", ""),
        )
