# result_command/load_config.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

try:
    import tomllib as tomli  # Python 3.11+
except ImportError:
    import tomli  # <3.11

from .config import CommandConfig
from .exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


# =====================================================================
#   Main loader
# =====================================================================
def load_config(path: str | Path | BinaryIO) -> dict[str, CommandConfig]:
    """
    Load and validate a TOML file into CommandConfig objects keyed by name.

    Layout:

        [defaults]
        max_history_length = 20

        [[command]]
        name = "fetch_user"
        timeout_secs = 2.5

    Keys in [defaults] apply to every [[command]] that does not set them.
    """
    if not hasattr(path, "read"):
        config_path = Path(path).resolve()
        with open(config_path, "rb") as f:
            data = tomli.load(f)
    else:
        data = tomli.load(path)  # type: ignore[arg-type]

    defaults = data.get("defaults", {})
    if not isinstance(defaults, dict):
        raise ConfigValidationError("[defaults] must be a table")
    if "name" in defaults:
        raise ConfigValidationError("[defaults] cannot set 'name'")

    command_data = data.get("command", [])
    if not isinstance(command_data, list):
        raise ConfigValidationError("[[command]] must be an array of tables")

    configs: dict[str, CommandConfig] = {}
    for cmd_dict in command_data:
        name = cmd_dict.get("name")
        if not name:
            raise ConfigValidationError("Every [[command]] needs a 'name'")
        if name in configs:
            raise ConfigValidationError(f"Duplicate command name '{name}'")

        try:
            configs[name] = CommandConfig(**{**defaults, **cmd_dict})
        except TypeError as e:
            raise ConfigValidationError(f"Invalid config in [[command]] '{name}': {e}") from None

    logger.debug(f"Loaded {len(configs)} command configs")
    return configs
