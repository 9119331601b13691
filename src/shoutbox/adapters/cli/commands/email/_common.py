"""Shared helpers for the email CLI commands.

Configuration loading, option decorators and the mapping from email adapter
failures onto exit codes.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable
from typing import Any, NoReturn, cast

import rich_click as click
from lib_layered_config import Config
from pydantic import ValidationError

from shoutbox import __init__conf__
from shoutbox.adapters.email.config import ShoutboxConfig
from shoutbox.application.ports import LoadShoutboxConfigFromDict
from shoutbox.domain.errors import ConfigurationError, ConstructionError, ProtocolError, TransportError
from shoutbox.domain.models import Header
from shoutbox.domain.validation import is_valid_header_name

from ...constants import API_KEY_ENVVAR
from ...exit_codes import ExitCode

logger = logging.getLogger(__name__)


def filter_sentinels(**kwargs: Any) -> dict[str, Any]:
    """Drop unset options (None or empty tuple); turn tuples into lists.

    Example:
        >>> filter_sentinels(smtp_port=2525, timeout=None, recipients=("a@b.com",), api_key=None)
        {'smtp_port': 2525, 'recipients': ['a@b.com']}
    """
    result: dict[str, Any] = {}
    for key, value in kwargs.items():
        if value is None or value == ():
            continue
        result[key] = list(cast(tuple[Any, ...], value)) if isinstance(value, tuple) else value
    return result


def apply_validated_overrides(base_config: ShoutboxConfig, overrides: dict[str, Any]) -> ShoutboxConfig:
    """Merge CLI overrides into ``base_config`` and re-run every validator.

    Raises:
        ValidationError: When an override is invalid.
    """
    if not overrides:
        return base_config
    return ShoutboxConfig.model_validate({**base_config.model_dump(), **overrides})


def parse_header(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> tuple[Header, ...]:
    """Click callback turning ``NAME:VALUE`` strings into header pairs.

    Raises:
        click.BadParameter: When a value has no ``:`` or the name is not a
            valid header field name.

    Example:
        >>> parse_header(None, None, ("X-Campaign: spring", "X-Tag:a:b"))  # type: ignore[arg-type]
        (('X-Campaign', 'spring'), ('X-Tag', 'a:b'))
    """
    headers: list[Header] = []
    for raw in values:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME:VALUE, got {raw!r}")
        if not is_valid_header_name(name.strip()):
            raise click.BadParameter(f"invalid header name {name.strip()!r}")
        headers.append((name.strip(), value.strip()))
    return tuple(headers)


def shoutbox_config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add CLI flags overriding the ``[shoutbox]`` connection settings."""
    options = [
        click.option(
            "--api-key",
            envvar=API_KEY_ENVVAR,
            default=None,
            show_envvar=True,
            help="Shoutbox API key (Bearer token for REST, password for SMTP)",
        ),
        click.option("--base-url", default=None, help="Override REST API base URL"),
        click.option("--smtp-host", default=None, help="Override SMTP relay host"),
        click.option("--smtp-port", type=int, default=None, help="Override SMTP relay port"),
        click.option("--smtp-username", default=None, help="Override SMTP authentication username"),
        click.option("--use-starttls/--no-use-starttls", default=None, help="Override STARTTLS setting"),
        click.option("--timeout", type=float, default=None, help="Override per-send timeout in seconds"),
    ]
    return functools.reduce(lambda f, opt: opt(f), reversed(options), func)


def load_and_validate_shoutbox_config(config: Config, loader: LoadShoutboxConfigFromDict) -> ShoutboxConfig:
    """Build the ShoutboxConfig from the ``[shoutbox]`` section.

    Raises:
        SystemExit: CONFIG_ERROR (78) when the section fails validation.
    """
    try:
        return loader(config.as_dict())
    except ValidationError as exc:
        _exit_with_error(exc, "Invalid shoutbox configuration", "Invalid configuration", ExitCode.CONFIG_ERROR)


def require_api_key(shoutbox_config: ShoutboxConfig) -> None:
    """Exit with CONFIG_ERROR (78) when no API key is configured."""
    if shoutbox_config.api_key:
        return
    logger.error("No API key configured")
    click.echo(
        f"\nError: No API key configured. Pass --api-key, set {API_KEY_ENVVAR}, "
        "or configure shoutbox.api_key in your config file.",
        err=True,
    )
    click.echo(f"See: {__init__conf__.shell_command} config --section shoutbox", err=True)
    raise SystemExit(ExitCode.CONFIG_ERROR)


def execute_with_email_error_handling(*, operation: Callable[[], None], recipients: list[str]) -> None:
    """Run ``operation`` and map its failure onto an exit code.

    Handlers run most specific first:

    1. ConfigurationError -> CONFIG_ERROR (78)
    2. ConstructionError -> CONSTRUCTION_ERROR (65)
    3. TransportError -> TRANSPORT_FAILURE (69)
    4. ProtocolError -> PROTOCOL_FAILURE (76)
    5. ValueError -> INVALID_ARGUMENT (22)
    6. Exception -> GENERAL_ERROR (1), re-raised when DEVELOPMENT_MODE is set

    Raises:
        SystemExit: On any failure.
    """
    try:
        operation()
    except ConfigurationError as exc:
        _exit_with_error(exc, "Email configuration error", "Configuration error", ExitCode.CONFIG_ERROR)
    except ConstructionError as exc:
        _exit_with_error(exc, "Email could not be built", "Could not build email", ExitCode.CONSTRUCTION_ERROR)
    except TransportError as exc:
        _exit_with_error(exc, "Shoutbox unreachable", "Failed to reach Shoutbox", ExitCode.TRANSPORT_FAILURE)
    except ProtocolError as exc:
        _exit_with_error(exc, "Shoutbox rejected email", "Email rejected", ExitCode.PROTOCOL_FAILURE)
    except ValueError as exc:
        _exit_with_error(exc, "Invalid email parameters", "Invalid email parameters", ExitCode.INVALID_ARGUMENT)
    except Exception as exc:
        if os.environ.get("DEVELOPMENT_MODE"):
            raise
        _exit_with_error(exc, "Unexpected error sending email", "Unexpected error", ExitCode.GENERAL_ERROR, True)

    click.echo("\nEmail sent successfully!")
    logger.info("Email sent via CLI", extra={"recipients": recipients})


def handle_validation_error(exc: ValidationError) -> NoReturn:
    """Exit with INVALID_ARGUMENT (22) for a rejected option override."""
    _exit_with_error(exc, "Invalid configuration override", "Invalid option value", ExitCode.INVALID_ARGUMENT)


def _exit_with_error(
    exc: Exception,
    log_message: str,
    user_message: str,
    exit_code: ExitCode,
    log_traceback: bool = False,
) -> NoReturn:
    logger.error(
        log_message,
        extra={"error": str(exc), "error_type": type(exc).__name__},
        exc_info=log_traceback,
    )
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    raise SystemExit(exit_code)


__all__ = [
    "apply_validated_overrides",
    "execute_with_email_error_handling",
    "filter_sentinels",
    "handle_validation_error",
    "load_and_validate_shoutbox_config",
    "parse_header",
    "require_api_key",
    "shoutbox_config_options",
]
