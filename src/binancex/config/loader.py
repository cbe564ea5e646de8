"""
Client configuration from YAML files and the environment.

A settings file is either the ``ClientConfig`` fields themselves or a
mapping with a ``binance:`` section holding them. ``client.yaml`` may be
layered with ``client.<env>.yaml`` (for example ``client.testnet.yaml``).
``${VAR}`` references are expanded by the models, after a ``.env`` file
has been loaded into the process environment.
"""

import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from binancex.core.logger import get_logger

from .exceptions import ConfigFileNotFoundError, ConfigParseError, ConfigValidationError
from .models import ClientConfig

logger = get_logger(__name__)

DEFAULT_SECTION = "binance"
ENV_PREFIX = "BINANCE_"


def _build(settings: Mapping[str, Any]) -> ClientConfig:
    try:
        return ClientConfig(**settings)
    except ValidationError as e:
        problems = [
            ".".join(str(part) for part in error["loc"]) + f": {error['msg']}"
            for error in e.errors()
        ]
        raise ConfigValidationError(problems) from e


class ConfigLoader:
    """
    Reads ``ClientConfig`` from YAML, optionally overlaid per environment.

    Example:
        >>> config = ConfigLoader().load("config/client.yaml", env="testnet")
        >>> config.host
        'https://testnet.binance.vision'
    """

    def __init__(self, env_file: Optional[str | Path] = None):
        # Searched before <config dir>/.env and ./.env
        self._env_file = Path(env_file) if env_file else None
        self._dotenv_done = False

    def load(
        self,
        path: str | Path,
        env: Optional[str] = None,
        section: str = DEFAULT_SECTION,
    ) -> ClientConfig:
        """
        Load, overlay and validate a settings file.

        Raises:
            ConfigFileNotFoundError: ``path`` does not exist
            ConfigParseError: invalid YAML, or the settings are not a mapping
            ConfigValidationError: ``ClientConfig`` rejected a value
        """
        path = Path(path)
        self._load_dotenv(path.parent)

        data = self.load_yaml(path)
        if env:
            overlay = path.with_name(f"{path.stem}.{env}{path.suffix}")
            if overlay.exists():
                data = self.merge_configs(data, self.load_yaml(overlay))
                logger.debug(f"Applied config overlay {overlay}")
            else:
                logger.debug(f"No {env} overlay next to {path}")

        settings = data.get(section, data)
        if not isinstance(settings, dict):
            raise ConfigParseError(str(path), f"section '{section}' is not a mapping")
        return _build(settings)

    def load_yaml(self, path: str | Path) -> dict[str, Any]:
        """Parse one YAML file; an empty file reads as ``{}``."""
        path = Path(path)
        if not path.is_file():
            raise ConfigFileNotFoundError(str(path))

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigParseError(str(path), str(e)) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigParseError(str(path), "top level must be a mapping")
        return data

    def merge_configs(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """
        Recursively merge ``override`` into a copy of ``base``.

        Example:
            >>> ConfigLoader().merge_configs(
            ...     {"binance": {"host": "a", "recv_window": 5000}},
            ...     {"binance": {"host": "b"}},
            ... )
            {'binance': {'host': 'b', 'recv_window': 5000}}
        """
        merged = deepcopy(base)
        for key, value in override.items():
            current = merged.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                merged[key] = self.merge_configs(current, value)
            else:
                merged[key] = deepcopy(value)
        return merged

    def from_environment(self, prefix: str = ENV_PREFIX) -> ClientConfig:
        """
        Build settings from ``<prefix><FIELD>`` variables, e.g. ``BINANCE_API_KEY``.

        Unset fields keep their defaults. A ``.env`` in the working directory
        is honoured.
        """
        self._load_dotenv(Path.cwd())
        settings = {
            name: os.environ[prefix + name.upper()]
            for name in ClientConfig.model_fields
            if prefix + name.upper() in os.environ
        }
        return _build(settings)

    def _load_dotenv(self, config_dir: Path) -> None:
        if self._dotenv_done:
            return

        candidates = [self._env_file] if self._env_file else []
        candidates += [config_dir / ".env", Path.cwd() / ".env"]
        for candidate in candidates:
            if candidate.is_file():
                load_dotenv(candidate)
                logger.debug(f"Loaded environment from {candidate}")
                self._dotenv_done = True
                return


def load_config(
    path: str | Path,
    env: Optional[str] = None,
    env_file: Optional[str | Path] = None,
) -> ClientConfig:
    """Shorthand for ``ConfigLoader(env_file).load(path, env)``."""
    return ConfigLoader(env_file=env_file).load(path, env=env)
