"""Domain-specific exceptions for typed error handling at boundaries.

Failures fall into three kinds so callers can pick a policy per kind:

* :class:`ConstructionError` - the request or message could not be built;
  nothing was sent.
* :class:`TransportError` - the network exchange could not complete.
* :class:`ProtocolError` - the remote peer answered and rejected the send.
"""

from __future__ import annotations


class ShoutboxError(Exception):
    """Base class for every failure raised by this package.

    Example:
        >>> issubclass(ProtocolError, ShoutboxError)
        True
    """


class ConfigurationError(ShoutboxError):
    """Missing, invalid, or incomplete configuration.

    Raised when required configuration values are absent, malformed, or
    logically inconsistent, such as a send attempt without an API key.

    Example:
        >>> err = ConfigurationError("No API key configured")
        >>> str(err)
        'No API key configured'
    """


class ConstructionError(ShoutboxError):
    """A request or MIME message could not be assembled.

    Raised before any network activity, e.g. when an attachment file cannot
    be read or a MIME part cannot be created.

    Example:
        >>> err = ConstructionError("error creating attachment part: bad type")
        >>> str(err)
        'error creating attachment part: bad type'
    """


class TransportError(ShoutboxError):
    """The network call itself could not complete.

    Covers DNS failures, refused connections, timeouts, and sessions dropped
    by the peer before a reply was received.

    Example:
        >>> err = TransportError("error sending request: connection refused")
        >>> str(err)
        'error sending request: connection refused'
    """


class ProtocolError(ShoutboxError):
    """The remote service responded but rejected the send.

    Attributes:
        status_code: HTTP status or SMTP reply code, when known.
        detail: Remote-supplied error text, when known.

    Example:
        >>> err = ProtocolError("api error: rate limited", status_code=429, detail="rate limited")
        >>> err.status_code
        429
        >>> str(err)
        'api error: rate limited'
    """

    def __init__(self, message: str, *, status_code: int | None = None, detail: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class InvalidAddressError(ShoutboxError, ValueError):
    """Email address failed the syntactic check.

    Inherits from ValueError so generic ``except ValueError`` handlers at
    argument boundaries keep catching it.

    Example:
        >>> err = InvalidAddressError("invalid email address: nobody")
        >>> isinstance(err, ValueError)
        True
    """


__all__ = [
    "ConfigurationError",
    "ConstructionError",
    "InvalidAddressError",
    "ProtocolError",
    "ShoutboxError",
    "TransportError",
]
