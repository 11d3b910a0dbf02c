# SPDX-License-Identifier: MIT

import re
from pathlib import Path
from typing import Literal, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

from travellog.model.summary import YearScope

APP_NAME = "travellog"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"
APP_SESSION_PATH = CONFIG_PATH / "session.yaml"

# Set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_USERS_DIR: Path = DATA_PATH / "users"

DEFAULT_RESIDENCY_THRESHOLD_DAYS = 183

OverlapPolicy = Literal["replace", "clip"]
OVERLAP_POLICIES: tuple[OverlapPolicy, ...] = ("replace", "clip")
YEAR_SCOPES: tuple[YearScope, ...] = ("start", "clip")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class Configuration(TypedDict):
    data_path: Optional[str]
    show_header: bool
    residency_threshold_days: int
    overlap_policy: OverlapPolicy
    year_scope: YearScope
    default_city: Optional[str]
    default_country: Optional[str]
    log_level: str


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "show_header": True,
        "residency_threshold_days": DEFAULT_RESIDENCY_THRESHOLD_DAYS,
        "overlap_policy": "replace",
        "year_scope": "start",
        "default_city": None,
        "default_country": None,
        "log_level": "WARNING",
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are instantiated.
    """
    global DATA_PATH, DATA_USERS_DIR

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting)
        DATA_USERS_DIR = DATA_PATH / "users"


def user_slug(user: str) -> str:
    slug = re.sub(r"[^a-z0-9._-]+", "-", user.strip().lower()).strip("-")
    if not slug:
        raise ValueError(f"Cannot derive a data directory from user name '{user}'")
    return slug


def user_data_dir(user: str) -> Path:
    return DATA_USERS_DIR / user_slug(user)


def user_entries_dir(user: str) -> Path:
    return user_data_dir(user) / "entries"


def user_id_map_path(user: str) -> Path:
    return user_data_dir(user) / "id_map.yaml"
