"""Email adapter - REST and SMTP delivery to Shoutbox.

Structure:
    * :mod:`.config` - Connection settings model and loader
    * :mod:`.rest` - HTTP JSON client (httpx)
    * :mod:`.mime` - multipart/mixed document assembly
    * :mod:`.smtp` - STARTTLS submission (smtplib)
    * :mod:`.attachments` - Attachment construction helpers

Contents:
    * :class:`.rest.ApiClient` - REST client with sync and async send
    * :class:`.smtp.SMTPClient` - SMTP client
    * :func:`.rest.send_rest_email` / :func:`.smtp.send_smtp_email` - port adapters
"""

from __future__ import annotations

from .attachments import attachment_from_file, attachment_from_reader, guess_content_type
from .config import ShoutboxConfig, load_shoutbox_config_from_dict
from .mime import build_mime_message, format_address
from .rest import ApiClient, build_payload, send_rest_email
from .smtp import SMTPClient, send_smtp_email

__all__ = [
    "ApiClient",
    "SMTPClient",
    "ShoutboxConfig",
    "attachment_from_file",
    "attachment_from_reader",
    "build_mime_message",
    "build_payload",
    "format_address",
    "guess_content_type",
    "load_shoutbox_config_from_dict",
    "send_rest_email",
    "send_smtp_email",
]
