"""Email sending CLI commands.

Contents:
    * :func:`.send_email.cli_send_email` - Send one email over REST or SMTP.
"""

from __future__ import annotations

from ._common import filter_sentinels, parse_header
from .send_email import cli_send_email

__all__ = ["cli_send_email", "filter_sentinels", "parse_header"]
