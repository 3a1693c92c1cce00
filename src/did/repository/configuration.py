# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from did import configuration
from did.errors import ConfigurationError


class ConfigurationRepository:
    def __init__(self, path: Path) -> None:
        self.path = path
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
        config = configuration.default_configuration()

        if self.path.is_file():
            try:
                text = self.path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigurationError(
                    f"failed to read config file {self.path}: {e}"
                ) from e
            try:
                raw_config = load(text, Loader=Loader)
            except YAMLError as e:
                raise ConfigurationError(
                    f"failed to parse config file {self.path}: {e}"
                ) from e
            if raw_config is not None:
                if not isinstance(raw_config, dict):
                    raise ConfigurationError(
                        f"config file {self.path} must contain a mapping"
                    )
                # Keys missing from older files keep their defaults
                for key, value in cast(dict[str, Any], raw_config).items():
                    if key in config:
                        config[key] = value  # type: ignore[literal-required]

        configuration.validate_configuration(config)
        self._config = config

    def __save_data(self, config: configuration.Configuration) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        retention_days: Optional[int] = None,
        show_header: Optional[bool] = None,
        timezone: Optional[str] = None,
    ) -> None:
        updated = deepcopy(self.config)

        if data_path is not None:
            updated["data_path"] = data_path
        if remove_data_path:
            updated["data_path"] = None
        if retention_days is not None:
            updated["retention_days"] = retention_days
        if show_header is not None:
            updated["show_header"] = show_header
        if timezone is not None:
            updated["timezone"] = timezone

        configuration.validate_configuration(updated)
        self._config = updated
        self.is_dirty = True
