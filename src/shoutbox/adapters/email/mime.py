"""Assemble the multipart/mixed MIME document submitted over SMTP.

Document shape:

* Header block: ``From``, ``To``, ``Subject``, ``MIME-Version``,
  ``Content-Type`` (multipart/mixed with boundary), optional ``Reply-To``,
  then caller headers in their given order.
* One ``text/html`` part, UTF-8, quoted-printable encoded.
* One base64 part per attachment with ``Content-Disposition: attachment``.

Caller headers named ``From``, ``To``, ``Subject`` or ``Reply-To`` replace
the generated value in place. Structural headers (``MIME-Version``,
``Content-Type``, ``Content-Transfer-Encoding``) cannot be overridden.
Other repeated names are emitted in order.
"""

from __future__ import annotations

import logging
from email import encoders
from email.charset import QP, Charset
from email.errors import MessageError
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.policy import SMTP
from email.utils import formataddr

from shoutbox.domain.errors import ConstructionError
from shoutbox.domain.models import Attachment, EmailMessage, Header
from shoutbox.domain.validation import is_valid_header_name

logger = logging.getLogger(__name__)

_REPLACEABLE_HEADERS = {
    "from": "From",
    "to": "To",
    "subject": "Subject",
    "reply-to": "Reply-To",
}
_STRUCTURAL_HEADERS = frozenset({"mime-version", "content-type", "content-transfer-encoding"})


def format_address(address: str, name: str | None = None) -> str:
    """Return ``Name <address>`` when a display name is set, else the bare address.

    Raises:
        ConstructionError: When the pair cannot be encoded, e.g. a display
            name combined with a non-ASCII address.

    Examples:
        >>> format_address("news@example.com", "Example News")
        'Example News <news@example.com>'
        >>> format_address("news@example.com")
        'news@example.com'
    """
    if not name:
        return address
    try:
        return formataddr((name, address))
    except UnicodeError as exc:
        raise ConstructionError(f"error writing headers: cannot encode address {address!r}: {exc}") from exc


def _html_charset() -> Charset:
    charset = Charset("utf-8")
    charset.body_encoding = QP
    return charset


def _merge_headers(standard: list[list[str]], custom: tuple[Header, ...]) -> list[list[str]]:
    """Fold caller headers into the generated header list.

    Raises:
        ConstructionError: When a caller header name is not a valid field
            name or targets a structural header.
    """
    merged = [list(pair) for pair in standard]
    for name, value in custom:
        if not is_valid_header_name(name.strip()):
            raise ConstructionError(f"error writing headers: invalid header name {name!r}")
        key = name.strip().lower()
        if key in _STRUCTURAL_HEADERS:
            raise ConstructionError(f"error writing headers: {name} cannot be overridden")
        canonical = _REPLACEABLE_HEADERS.get(key)
        if canonical is not None:
            existing = next((pair for pair in merged if pair[0] == canonical), None)
            if existing is not None:
                existing[1] = value
                continue
            merged.append([canonical, value])
            continue
        merged.append([name.strip(), value])
    return merged


def _build_html_part(html: str) -> MIMEText:
    try:
        part = MIMEText(html, "html", _html_charset(), policy=SMTP)
    except (TypeError, ValueError) as exc:
        raise ConstructionError(f"error creating HTML part: {exc}") from exc
    del part["MIME-Version"]
    return part


def _build_attachment_part(attachment: Attachment) -> MIMEBase:
    base, _, params = attachment.content_type.partition(";")
    maintype, slash, subtype = base.strip().partition("/")
    if not slash or not maintype or not subtype:
        raise ConstructionError(
            f"error creating attachment part: invalid content type {attachment.content_type!r} "
            f"for {attachment.filename!r}"
        )

    try:
        part = MIMEBase(maintype.lower(), subtype.lower(), policy=SMTP)
        for raw_param in params.split(";"):
            key, eq, value = raw_param.partition("=")
            if key.strip() and eq:
                part.set_param(key.strip(), value.strip().strip('"'))
        part.set_param("name", attachment.filename)
        part.set_payload(attachment.content)
        encoders.encode_base64(part)
        part.add_header("Content-Disposition", "attachment", filename=attachment.filename)
    except (TypeError, ValueError) as exc:
        raise ConstructionError(f"error creating attachment part: {exc}") from exc
    del part["MIME-Version"]
    return part


def build_mime_message(message: EmailMessage, *, boundary: str | None = None) -> bytes:
    """Render ``message`` as a multipart/mixed document with CRLF line endings.

    Args:
        message: The email to render.
        boundary: Fixed multipart boundary; generated when None.

    Returns:
        The complete document, ready for SMTP ``DATA``.

    Raises:
        ConstructionError: When a header or MIME part cannot be built. The
            message names the failing phase.

    Example:
        >>> msg = EmailMessage(from_address="a@example.com", to=["b@example.com"], subject="Hi", html="<p>Hi</p>")
        >>> raw = build_mime_message(msg, boundary="BOUNDARY")
        >>> raw.splitlines()[0]
        b'From: a@example.com'
        >>> b"multipart/mixed" in raw and b"--BOUNDARY--" in raw
        True
    """
    root = MIMEMultipart("mixed", boundary=boundary, policy=SMTP)
    content_type = str(root["Content-Type"])
    del root["Content-Type"]
    del root["MIME-Version"]

    standard = [
        ["From", format_address(message.from_address, message.name)],
        ["To", ", ".join(message.to)],
        ["Subject", message.subject],
        ["MIME-Version", "1.0"],
        ["Content-Type", content_type],
    ]
    if message.reply_to:
        standard.append(["Reply-To", message.reply_to])

    merged = _merge_headers(standard, message.headers)
    try:
        for name, value in merged:
            root[name] = value
    except (MessageError, ValueError) as exc:
        raise ConstructionError(f"error writing headers: {exc}") from exc

    root.attach(_build_html_part(message.html))
    for attachment in message.attachments:
        root.attach(_build_attachment_part(attachment))

    try:
        document = root.as_bytes()
    except (MessageError, TypeError, ValueError) as exc:
        raise ConstructionError(f"error writing message: {exc}") from exc

    logger.debug(
        "MIME message assembled",
        extra={"attachment_count": len(message.attachments), "size": len(document)},
    )
    return document


__all__ = [
    "build_mime_message",
    "format_address",
]
