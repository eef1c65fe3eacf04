"""Consul connection settings model and loader.

Provides the ConsulSettings Pydantic model for validated, immutable
connection settings and the loader that builds it from the ``[consul]``
section of the layered configuration.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from kvconfig.domain.errors import ConfigurationError

DEFAULT_ADDRESS = "http://127.0.0.1:8500"


class ConsulSettings(BaseModel):
    """Validated, immutable Consul connection settings.

    Example:
        >>> settings = ConsulSettings(address="http://consul.local:8500/", datacenter="dc1")
        >>> settings.address
        'http://consul.local:8500'
        >>> settings.token is None
        True
    """

    model_config = ConfigDict(frozen=True)

    address: str = DEFAULT_ADDRESS
    token: str | None = None
    datacenter: str | None = None
    timeout: float = 10.0
    verify: bool = True

    @field_validator("token", "datacenter", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: str | None) -> str | None:
        """Treat empty strings from config files and .env as "not configured"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("address", mode="before")
    @classmethod
    def _normalize_address(cls, v: Any) -> Any:
        """Strip whitespace and trailing slashes; empty means the local agent.

        Examples:
            >>> ConsulSettings._normalize_address(" http://h:8500/ ")
            'http://h:8500'
            >>> ConsulSettings._normalize_address("")
            'http://127.0.0.1:8500'
        """
        if isinstance(v, str):
            stripped = v.strip().rstrip("/")
            return stripped or DEFAULT_ADDRESS
        return v

    @model_validator(mode="after")
    def _validate_settings(self) -> ConsulSettings:
        """Reject values that would only fail later at request time.

        Example:
            >>> ConsulSettings(timeout=0)  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if not self.address.startswith(("http://", "https://")):
            raise ValueError(f"address must start with http:// or https://, got {self.address!r}")
        return self

    def __repr__(self) -> str:
        """Return string representation with the ACL token redacted.

        Example:
            >>> "s3cr3t" in repr(ConsulSettings(token="s3cr3t"))
            False
        """
        fields: list[str] = []
        for name, value in self:
            if name == "token" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"ConsulSettings({', '.join(fields)})"


def load_consul_settings(config_dict: Mapping[str, Any]) -> ConsulSettings:
    """Build ConsulSettings from the ``consul`` section of a config dict.

    Args:
        config_dict: Full configuration mapping (``Config.as_dict()``).

    Returns:
        Validated settings; an absent section yields the defaults.

    Raises:
        ConfigurationError: When the section holds invalid values.

    Example:
        >>> load_consul_settings({"consul": {"timeout": 2.5}}).timeout
        2.5
        >>> load_consul_settings({}).address
        'http://127.0.0.1:8500'
    """
    raw = config_dict.get("consul", {})
    try:
        return ConsulSettings.model_validate(raw if raw else {})
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid consul settings: {_summarize(exc)}") from exc


def _summarize(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(loc) for loc in error["loc"]) or "consul"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


__all__ = [
    "DEFAULT_ADDRESS",
    "ConsulSettings",
    "load_consul_settings",
]
