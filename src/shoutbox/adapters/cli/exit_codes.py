"""POSIX-conventional exit codes for CLI error paths.

Each failure kind of the email adapters maps onto its own code so scripts can
tell a rejected send from an unreachable service.

Contents:
    * :class:`ExitCode` - IntEnum of all exit codes used by this application.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes following sysexits.h and errno conventions.

    * 0-1: generic success / failure
    * 22: EINVAL - bad option value or address
    * 65: EX_DATAERR - the request or MIME document could not be built
    * 69: EX_UNAVAILABLE - the service could not be reached
    * 76: EX_PROTOCOL - the service answered and rejected the send
    * 78: EX_CONFIG - missing or invalid configuration
    * 130: interrupted (Ctrl+C)

    Example:
        >>> int(ExitCode.PROTOCOL_FAILURE)
        76
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENT = 22
    CONSTRUCTION_ERROR = 65
    TRANSPORT_FAILURE = 69
    PROTOCOL_FAILURE = 76
    CONFIG_ERROR = 78
    SIGNAL_INT = 130


__all__ = ["ExitCode"]
