# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "dailyintake"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_STORE_PATH: Path = DATA_PATH / "store.yaml"


class Configuration(TypedDict):
    data_path: Optional[str]
    show_header: bool
    history_limit: int
    check_interval_seconds: int
    reminder_start_hour: int
    reminder_end_hour: int
    log_level: NotRequired[str]


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "show_header": True,
        "history_limit": 7,
        "check_interval_seconds": 60,
        "reminder_start_hour": 8,
        "reminder_end_hour": 22,
        "log_level": "WARNING",
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before the
    key-value store is first read.
    """
    global DATA_PATH, DATA_STORE_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting)
        DATA_STORE_PATH = DATA_PATH / "store.yaml"
