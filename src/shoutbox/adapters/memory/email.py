"""In-memory email adapters for testing.

Contents:
    * :class:`EmailSpy` - Captures REST and SMTP sends for test assertions.
    * :func:`load_shoutbox_config_from_dict_in_memory` - In-memory config loader.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ...domain.models import EmailMessage, EmailRequest
from ..email.config import ShoutboxConfig


def _empty_request_list() -> list[tuple[ShoutboxConfig, EmailRequest]]:
    return []


def _empty_message_list() -> list[tuple[ShoutboxConfig, EmailMessage]]:
    return []


@dataclass
class EmailSpy:
    """Captures email operations for test assertions.

    Each test should create its own EmailSpy instance to avoid cross-test
    pollution. The spy's send methods match the port signatures expected by
    AppServices.

    Attributes:
        sent_requests: ``(config, request)`` pairs captured from REST sends.
        sent_messages: ``(config, message)`` pairs captured from SMTP sends.
        raise_exception: When set, send operations record the call and then
            raise this exception.

    Example:
        >>> spy = EmailSpy()
        >>> req = EmailRequest(from_address="a@b.com", to="c@d.com", subject="Hi", html="<p>x</p>")
        >>> spy.send_rest_email(config=ShoutboxConfig(api_key="k"), request=req)
        >>> len(spy.sent_requests)
        1
    """

    sent_requests: list[tuple[ShoutboxConfig, EmailRequest]] = field(default_factory=_empty_request_list)
    sent_messages: list[tuple[ShoutboxConfig, EmailMessage]] = field(default_factory=_empty_message_list)
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.sent_requests.clear()
        self.sent_messages.clear()
        self.raise_exception = None

    def send_rest_email(self, *, config: ShoutboxConfig, request: EmailRequest) -> None:
        """Record a REST send.

        Raises:
            Exception: If raise_exception is set, raises that exception.
        """
        self.sent_requests.append((config, request))
        if self.raise_exception is not None:
            raise self.raise_exception

    def send_smtp_email(self, *, config: ShoutboxConfig, message: EmailMessage) -> None:
        """Record an SMTP send.

        Raises:
            Exception: If raise_exception is set, raises that exception.
        """
        self.sent_messages.append((config, message))
        if self.raise_exception is not None:
            raise self.raise_exception


def load_shoutbox_config_from_dict_in_memory(
    config_dict: Mapping[str, Any],
) -> ShoutboxConfig:
    """Parse the shoutbox section using the real Pydantic model."""
    section = config_dict.get("shoutbox", {})
    return ShoutboxConfig.model_validate(section if section else {})


__all__ = [
    "EmailSpy",
    "load_shoutbox_config_from_dict_in_memory",
]
