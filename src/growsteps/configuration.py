# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "growsteps"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# Set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)

DEFAULT_STORAGE_KEY = "grow_entries"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
DEFAULT_LOG_LEVEL = "WARNING"


class Configuration(TypedDict):
    data_path: Optional[str]
    storage_key: str
    show_header: bool
    log_level: str
    feedback_seed: NotRequired[Optional[int]]


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "storage_key": DEFAULT_STORAGE_KEY,
        "show_header": True,
        "log_level": DEFAULT_LOG_LEVEL,
        "feedback_seed": None,
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set DATA_PATH dynamically.

    This must be called after the config file exists and before the entry
    repository touches its storage slot.
    """
    global DATA_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting)
