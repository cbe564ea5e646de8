"""
Configuration errors.

They share ``BinanceError``'s message/code/details shape so a caller can
catch every client failure, configuration included, with one handler.
"""

from binancex.core.exceptions import BinanceError


class ConfigError(BinanceError):
    """Client configuration could not be loaded."""

    default_message = "Invalid client configuration"


class ConfigFileNotFoundError(ConfigError):
    """The YAML file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Configuration file not found: {path}", code="CONFIG_NOT_FOUND")


class ConfigParseError(ConfigError):
    """The file is not YAML, or not shaped as a settings mapping."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(
            f"Cannot read configuration file '{path}'",
            code="CONFIG_PARSE",
            details={"reason": reason},
        )


class ConfigValidationError(ConfigError):
    """Settings were read but rejected by ``ClientConfig``."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            f"{len(errors)} invalid client setting(s): " + "; ".join(errors),
            code="CONFIG_INVALID",
        )
