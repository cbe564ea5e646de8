"""
Shared behaviour for configuration models.

String values may reference the environment as ``${VAR}`` or
``${VAR:default}``; references are expanded before validation, so numeric
fields such as ``recv_window`` can be supplied from the environment too.
Credential fields never appear in ``repr``/``str`` output.
"""

import os
import re
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator

ENV_REFERENCE = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<default>[^}]*))?\}")

MASK = "***"


def _expand(match: re.Match) -> str:
    found = os.environ.get(match.group("name"))
    if found is not None:
        return found
    return match.group("default") or ""


def substitute_env_vars(value: str) -> str:
    """
    Expand every ``${VAR}`` / ``${VAR:default}`` reference in ``value``.

    An unset variable without a default expands to the empty string.
    """
    return ENV_REFERENCE.sub(_expand, value)


def expand_environment(data: Any) -> Any:
    """Apply ``substitute_env_vars`` to every string inside nested containers."""
    if isinstance(data, str):
        return substitute_env_vars(data)
    if isinstance(data, dict):
        return {key: expand_environment(item) for key, item in data.items()}
    if isinstance(data, list):
        return [expand_environment(item) for item in data]
    return data


class BaseConfig(BaseModel):
    """
    Frozen configuration model.

    One instance is shared by every request a client makes, so it is
    immutable once validated.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        validate_default=True,
        str_strip_whitespace=True,
    )

    # Substrings that mark a field as a credential
    _credential_markers: ClassVar[tuple[str, ...]] = ("api_key", "secret", "token")

    @model_validator(mode="before")
    @classmethod
    def _expand_environment(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return expand_environment(data)
        return data

    @classmethod
    def is_credential(cls, field_name: str) -> bool:
        name = field_name.lower()
        return any(marker in name for marker in cls._credential_markers)

    def masked_dict(self) -> dict[str, Any]:
        """Dump the model with every non-empty credential replaced by ``***``."""
        return {
            name: MASK if value and self.is_credential(name) else value
            for name, value in self.model_dump().items()
        }

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!r}" for name, value in self.masked_dict().items())
        return f"{type(self).__name__}({fields})"

    __str__ = __repr__
