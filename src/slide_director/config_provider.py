"""Helpers for constructing configuration instances."""

import logging
import os
from pathlib import Path
from typing import Optional

from slide_director.config import DEFAULT_CONFIG_PATH, Config

CONFIG_PATH_ENV = "SLIDE_DIRECTOR_CONFIG"

logger = logging.getLogger(__name__)


class ConfigProvider:
    """
    Provides configuration instances without import-time side effects.

    The JSON file is taken from ``path``, else from the ``SLIDE_DIRECTOR_CONFIG``
    environment variable, else from ``.slide_director/config.json``. The
    loaded configuration is cached for the provider's lifetime.

    Args:
        path: Optional override path for the JSON config file.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path
        self._config: Optional[Config] = None

    def resolve_path(self) -> Path:
        if self._path is not None:
            return self._path
        from_env = os.environ.get(CONFIG_PATH_ENV)
        if from_env:
            return Path(from_env)
        return DEFAULT_CONFIG_PATH

    def load(self) -> Config:
        """
        Loads the configuration once and returns the cached instance afterwards.

        Returns:
            A validated configuration object.
        """
        if self._config is None:
            path = self.resolve_path()
            logger.debug("Loading configuration from %s", path)
            self._config = Config.load(path)
        return self._config
