"""Immutable email request and message types shared by both transports.

Every value here lives for a single send call: it is built, handed to a
transport, and discarded. Custom headers are stored as an ordered tuple of
``(name, value)`` pairs so that serialisation order is deterministic.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import cast

DEFAULT_CONTENT_TYPE = "application/octet-stream"

Header = tuple[str, str]
"""A single custom header as a ``(name, value)`` pair."""

HeadersInput = Mapping[str, str] | Sequence[Header] | None
"""Accepted forms for custom headers at construction time."""


def normalize_headers(headers: HeadersInput) -> tuple[Header, ...]:
    """Return custom headers as an ordered tuple of pairs.

    Mappings keep their iteration order; sequences keep theirs, including
    repeated names.

    Example:
        >>> normalize_headers({"X-A": "1", "X-B": "2"})
        (('X-A', '1'), ('X-B', '2'))
        >>> normalize_headers([("X-A", "1"), ("X-A", "2")])
        (('X-A', '1'), ('X-A', '2'))
        >>> normalize_headers(None)
        ()
    """
    if not headers:
        return ()
    if isinstance(headers, Mapping):
        mapping = cast(Mapping[str, str], headers)
        return tuple((str(name), str(value)) for name, value in mapping.items())
    return tuple((str(name), str(value)) for name, value in headers)


def _normalize_recipients(to: str | Sequence[str]) -> tuple[str, ...]:
    if isinstance(to, str):
        return (to,)
    return tuple(to)


@dataclass(frozen=True, slots=True)
class Attachment:
    """A file attached to an SMTP message.

    An empty or blank ``content_type`` falls back to the generic binary type.

    Example:
        >>> Attachment(filename="blob", content=b"\\x00", content_type="").content_type
        'application/octet-stream'
    """

    filename: str
    content: bytes
    content_type: str = DEFAULT_CONTENT_TYPE

    def __post_init__(self) -> None:
        if not self.content_type.strip():
            object.__setattr__(self, "content_type", DEFAULT_CONTENT_TYPE)


@dataclass(frozen=True, slots=True, init=False)
class EmailRequest:
    """Email sent through the REST API.

    ``to`` is the comma-joined recipient string the API expects; a sequence
    of addresses is joined with ``,``.

    Example:
        >>> req = EmailRequest(from_address="a@b.com", to=["c@d.com", "e@f.com"], subject="Hi", html="<p>x</p>")
        >>> req.to
        'c@d.com,e@f.com'
    """

    from_address: str
    to: str
    subject: str
    html: str
    name: str | None
    reply_to: str | None
    headers: tuple[Header, ...]

    def __init__(
        self,
        *,
        from_address: str,
        to: str | Sequence[str],
        subject: str,
        html: str,
        name: str | None = None,
        reply_to: str | None = None,
        headers: HeadersInput = None,
    ) -> None:
        object.__setattr__(self, "from_address", from_address)
        object.__setattr__(self, "to", to if isinstance(to, str) else ",".join(to))
        object.__setattr__(self, "subject", subject)
        object.__setattr__(self, "html", html)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "reply_to", reply_to)
        object.__setattr__(self, "headers", normalize_headers(headers))


@dataclass(frozen=True, slots=True, init=False)
class EmailMessage:
    """Email submitted over SMTP as a multipart/mixed MIME document.

    Example:
        >>> msg = EmailMessage(from_address="a@b.com", to="c@d.com", subject="Hi", html="<p>x</p>")
        >>> msg.to
        ('c@d.com',)
        >>> msg.attachments
        ()
    """

    from_address: str
    to: tuple[str, ...]
    subject: str
    html: str
    name: str | None
    reply_to: str | None
    headers: tuple[Header, ...]
    attachments: tuple[Attachment, ...]

    def __init__(
        self,
        *,
        from_address: str,
        to: str | Sequence[str],
        subject: str,
        html: str,
        name: str | None = None,
        reply_to: str | None = None,
        headers: HeadersInput = None,
        attachments: Sequence[Attachment] | None = None,
    ) -> None:
        object.__setattr__(self, "from_address", from_address)
        object.__setattr__(self, "to", _normalize_recipients(to))
        object.__setattr__(self, "subject", subject)
        object.__setattr__(self, "html", html)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "reply_to", reply_to)
        object.__setattr__(self, "headers", normalize_headers(headers))
        object.__setattr__(self, "attachments", tuple(attachments) if attachments else ())


__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "Attachment",
    "EmailMessage",
    "EmailRequest",
    "Header",
    "HeadersInput",
    "normalize_headers",
]
