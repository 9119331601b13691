"""Shoutbox transactional email client.

Public surface, routed through the architectural layers:

- Domain: request/message types, validation helpers, error taxonomy
- Adapters: the REST and SMTP clients, attachment helpers, settings model
- Composition: wired configuration loader
- Metadata: package information

Example:
    >>> from shoutbox import ApiClient, EmailRequest
    >>> client = ApiClient("your-api-key")  # doctest: +SKIP
    >>> client.send_email(EmailRequest(  # doctest: +SKIP
    ...     from_address="no-reply@yourdomain.com",
    ...     to="recipient@example.com",
    ...     subject="Welcome",
    ...     html="<h1>Welcome!</h1>",
    ... ))
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Adapter exports
from .adapters.email import (
    ApiClient,
    ShoutboxConfig,
    SMTPClient,
    attachment_from_file,
    attachment_from_reader,
    build_mime_message,
)

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain import (
    Attachment,
    ConfigurationError,
    ConstructionError,
    EmailMessage,
    EmailRequest,
    InvalidAddressError,
    ProtocolError,
    ShoutboxError,
    TransportError,
    validate_email,
    validate_email_list,
)

__all__ = [
    "ApiClient",
    "Attachment",
    "ConfigurationError",
    "ConstructionError",
    "EmailMessage",
    "EmailRequest",
    "InvalidAddressError",
    "ProtocolError",
    "SMTPClient",
    "ShoutboxConfig",
    "ShoutboxError",
    "TransportError",
    "attachment_from_file",
    "attachment_from_reader",
    "build_mime_message",
    "get_config",
    "print_info",
    "validate_email",
    "validate_email_list",
]
