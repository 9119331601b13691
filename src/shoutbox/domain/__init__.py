"""Domain layer - pure email types and rules with no I/O or framework dependencies.

Contents:
    * :mod:`.models` - EmailRequest, EmailMessage, Attachment
    * :mod:`.validation` - Advisory address checks
    * :mod:`.enums` - Domain enumerations (OutputFormat, Transport)
    * :mod:`.errors` - Failure taxonomy
"""

from __future__ import annotations

from .enums import OutputFormat, Transport
from .errors import (
    ConfigurationError,
    ConstructionError,
    InvalidAddressError,
    ProtocolError,
    ShoutboxError,
    TransportError,
)
from .models import DEFAULT_CONTENT_TYPE, Attachment, EmailMessage, EmailRequest, Header
from .validation import validate_email, validate_email_list

__all__ = [
    # Models
    "DEFAULT_CONTENT_TYPE",
    "Attachment",
    "EmailMessage",
    "EmailRequest",
    "Header",
    # Validation
    "validate_email",
    "validate_email_list",
    # Enums
    "OutputFormat",
    "Transport",
    # Errors
    "ConfigurationError",
    "ConstructionError",
    "InvalidAddressError",
    "ProtocolError",
    "ShoutboxError",
    "TransportError",
]
