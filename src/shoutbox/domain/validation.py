"""Advisory syntactic address checks and the header field-name rule.

The address helpers only look for an ``@``; they say nothing about
deliverability. Neither transport calls them internally.
"""

from __future__ import annotations

from collections.abc import Iterable

from .errors import InvalidAddressError


def validate_email(address: str) -> None:
    """Raise unless ``address`` contains an ``@``.

    Raises:
        InvalidAddressError: When the address has no ``@``.

    Example:
        >>> validate_email("test@example.com")
        >>> validate_email("invalid-email")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidAddressError: invalid email address: invalid-email
    """
    if "@" not in address:
        raise InvalidAddressError(f"invalid email address: {address}")


def validate_email_list(addresses: Iterable[str]) -> None:
    """Raise on the first address that fails :func:`validate_email`.

    Example:
        >>> validate_email_list(["a@b.com", "c@d.com"])
        >>> validate_email_list([])
    """
    for address in addresses:
        validate_email(address)


def is_valid_header_name(name: str) -> bool:
    """Return True when ``name`` is an RFC 5322 field name.

    A field name is one or more printable ASCII characters (33 to 126)
    other than ``:``.

    Examples:
        >>> is_valid_header_name("X-Campaign")
        True
        >>> is_valid_header_name("X Bad"), is_valid_header_name("X-A:"), is_valid_header_name("")
        (False, False, False)
    """
    return bool(name) and all(33 <= ord(char) <= 126 and char != ":" for char in name)


__all__ = ["is_valid_header_name", "validate_email", "validate_email_list"]
