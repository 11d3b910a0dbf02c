# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from travellog import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        loaded = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)
        if loaded is None:
            loaded = {}

        # Migration: add any keys introduced after the file was written
        for key, value in configuration.get_default_configuration().items():
            if key not in loaded:
                loaded[key] = value
                self.is_dirty = True

        self._config = loaded

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def reset(self) -> None:
        """Drop the cached configuration so the next access reloads it."""
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        show_header: Optional[bool] = None,
        residency_threshold_days: Optional[int] = None,
        overlap_policy: Optional[configuration.OverlapPolicy] = None,
        year_scope: Optional[configuration.YearScope] = None,
        default_city: Optional[str] = None,
        default_country: Optional[str] = None,
        remove_default_location: bool = False,
        log_level: Optional[str] = None,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
    ) -> None:
        self.is_dirty = True

        if show_header is not None:
            self.config["show_header"] = show_header
        if residency_threshold_days is not None:
            self.config["residency_threshold_days"] = residency_threshold_days
        if overlap_policy is not None:
            self.config["overlap_policy"] = overlap_policy
        if year_scope is not None:
            self.config["year_scope"] = year_scope
        if default_city is not None:
            self.config["default_city"] = default_city
        if default_country is not None:
            self.config["default_country"] = default_country
        if remove_default_location:
            self.config["default_city"] = None
            self.config["default_country"] = None
        if log_level is not None:
            self.config["log_level"] = log_level.upper()
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None


CONFIGURATION_REPO = ConfigurationRepository()
