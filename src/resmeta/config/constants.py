"""Default paths, environment variable names, and constants."""

from __future__ import annotations

import platformdirs

APP_NAME = "resmeta"
APP_AUTHOR = "resmeta"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Environment variable names
ENV_ORIGIN_NAME = "RESMETA_ORIGIN_NAME"

OUTPUT_FORMATS = ("table", "json", "yaml")
DEFAULT_INDENT = 2
