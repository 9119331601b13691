"""Shoutbox connection settings model and loader.

Provides the ShoutboxConfig Pydantic model for validated, immutable transport
settings and the loader function to create it from configuration dictionaries.
The service endpoints are defaults on the model, never process-wide state.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from btx_lib_mail import validate_email_address, validate_smtp_host
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_BASE_URL = "https://api.shoutbox.net"
DEFAULT_SMTP_HOST = "mail.shoutbox.net"
DEFAULT_SMTP_PORT = 587
DEFAULT_SMTP_USERNAME = "shoutbox"


class ShoutboxConfig(BaseModel):
    """Validated, immutable Shoutbox transport configuration.

    Example:
        >>> config = ShoutboxConfig(api_key="key-123")
        >>> config.base_url
        'https://api.shoutbox.net'
        >>> (config.smtp_host, config.smtp_port, config.smtp_username)
        ('mail.shoutbox.net', 587, 'shoutbox')
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    smtp_host: str = DEFAULT_SMTP_HOST
    smtp_port: int = DEFAULT_SMTP_PORT
    smtp_username: str = DEFAULT_SMTP_USERNAME
    use_starttls: bool = True
    timeout: float = 30.0
    from_address: str | None = None
    from_name: str | None = None
    recipients: list[str] = Field(default_factory=list)

    @field_validator("recipients", mode="before")
    @classmethod
    def _coerce_string_to_list(cls, v: Any) -> list[str]:
        """Coerce single strings to single-element lists.

        Handles environment variables and .env files that provide single strings
        instead of TOML arrays. Empty strings become empty lists.

        Examples:
            >>> ShoutboxConfig._coerce_string_to_list("ops@example.com")
            ['ops@example.com']
            >>> ShoutboxConfig._coerce_string_to_list("")
            []
        """
        if isinstance(v, str):
            return [v] if v.strip() else []
        if isinstance(v, list):
            return cast(list[str], v)
        return []

    @field_validator("api_key", "from_address", "from_name", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: str | None) -> str | None:
        """Treat empty or whitespace-only strings from config files as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("base_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        """Normalise the base URL so ``/send`` can be appended directly."""
        return v.rstrip("/")

    @model_validator(mode="after")
    def _validate_config(self) -> ShoutboxConfig:
        """Catch configuration mistakes early with clear error messages.

        Raises:
            ValueError: When configuration values are invalid.

        Example:
            >>> ShoutboxConfig(timeout=-5.0)  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {self.base_url!r}")

        if not 1 <= self.smtp_port <= 65535:
            raise ValueError(f"smtp_port must be between 1 and 65535, got {self.smtp_port}")

        validate_smtp_host(f"{self.smtp_host}:{self.smtp_port}")

        if self.from_address is not None:
            validate_email_address(self.from_address)

        for recipient in self.recipients:
            validate_email_address(recipient)

        return self

    def __repr__(self) -> str:
        """Return string representation with api_key redacted.

        Example:
            >>> "key-123" in repr(ShoutboxConfig(api_key="key-123"))
            False
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"ShoutboxConfig({', '.join(fields)})"

    @property
    def send_url(self) -> str:
        """Full URL of the REST send endpoint.

        Example:
            >>> ShoutboxConfig(base_url="http://localhost:8080/").send_url
            'http://localhost:8080/send'
        """
        return f"{self.base_url}/send"


def load_shoutbox_config_from_dict(config_dict: Mapping[str, Any]) -> ShoutboxConfig:
    """Load ShoutboxConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed model.
    Reads the ``[shoutbox]`` section; a missing section yields defaults.

    Example:
        >>> cfg = load_shoutbox_config_from_dict({"shoutbox": {"smtp_port": 2525}})
        >>> cfg.smtp_port
        2525
        >>> load_shoutbox_config_from_dict({}).smtp_host
        'mail.shoutbox.net'
    """
    section: Any = config_dict.get("shoutbox", {})
    if not isinstance(section, Mapping):
        return ShoutboxConfig.model_validate(section)
    raw: dict[str, Any] = dict(cast(Mapping[str, Any], section))
    return ShoutboxConfig.model_validate(raw)


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_SMTP_HOST",
    "DEFAULT_SMTP_PORT",
    "DEFAULT_SMTP_USERNAME",
    "ShoutboxConfig",
    "load_shoutbox_config_from_dict",
]
