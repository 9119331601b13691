"""Type-safe domain enums for output formats and delivery transports."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Inherits from str to allow direct string comparison and Click integration.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class Transport(str, Enum):
    """Delivery path used for a send.

    Attributes:
        REST: JSON POST to the HTTP API.
        SMTP: MIME document submitted to the mail relay.

    Example:
        >>> Transport("smtp") is Transport.SMTP
        True
    """

    REST = "rest"
    SMTP = "smtp"


__all__ = [
    "OutputFormat",
    "Transport",
]
