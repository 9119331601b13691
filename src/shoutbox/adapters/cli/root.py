"""The ``shoutbox`` command group.

Global options are resolved here before any subcommand runs: the layered
configuration for ``--profile`` is loaded, ``--set`` values are merged on
top, logging starts from the result, and everything is stored on the Click
context for the subcommands.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import rich_click as click
from lib_layered_config import Config

from shoutbox import __init__conf__
from shoutbox.adapters.config.overrides import apply_overrides

from .constants import CLICK_CONTEXT_SETTINGS
from .context import apply_traceback_preferences, store_cli_context
from .exit_codes import ExitCode

if TYPE_CHECKING:
    from shoutbox.composition import AppServices

_EPILOG = (
    f"Exit codes: {ExitCode.SUCCESS:d} sent, {ExitCode.INVALID_ARGUMENT:d} invalid value, "
    f"{ExitCode.CONSTRUCTION_ERROR:d} email could not be built, {ExitCode.TRANSPORT_FAILURE:d} unreachable, "
    f"{ExitCode.PROTOCOL_FAILURE:d} rejected by Shoutbox, {ExitCode.CONFIG_ERROR:d} configuration error."
)


def _resolve_config(services: AppServices, profile: str | None, set_overrides: tuple[str, ...]) -> Config:
    """Load ``profile`` and merge ``--set`` values, as usage errors on bad input."""
    try:
        config = services.get_config(profile=profile)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--profile") from exc
    try:
        return apply_overrides(config, set_overrides)
    except (TypeError, ValueError) as exc:
        raise click.BadParameter(str(exc), param_hint="--set") from exc


@click.group(
    help=__init__conf__.title,
    epilog=_EPILOG,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option("--traceback/--no-traceback", default=False, help="Print the full Python traceback on failure")
@click.option("--profile", default=None, help="Configuration profile to load, e.g. 'staging'")
@click.option(
    "--set",
    "set_overrides",
    multiple=True,
    metavar="SECTION.KEY=VALUE",
    help="Override one configuration value (repeatable), e.g. shoutbox.timeout=10",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, profile: str | None, set_overrides: tuple[str, ...]) -> None:
    """Resolve configuration and services once for the chosen subcommand.

    ``ctx.obj`` must be a zero-argument factory returning AppServices.

    Example:
        >>> from click.testing import CliRunner
        >>> from shoutbox.composition import build_testing
        >>> CliRunner().invoke(cli, ["validate", "a@b.com"], obj=build_testing).exit_code
        0
    """
    factory = ctx.obj
    if not callable(factory):
        raise RuntimeError("Services factory not provided. This is a bug.")
    services: AppServices = factory()
    config = _resolve_config(services, profile, set_overrides)
    services.init_logging(config)
    store_cli_context(
        ctx,
        traceback=traceback,
        config=config,
        services=services,
        profile=profile,
        set_overrides=set_overrides,
    )
    apply_traceback_preferences(traceback)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Command modules import from this package, so registration is deferred.
def _register_commands() -> None:
    from .commands import cli_config, cli_info, cli_send_email, cli_validate

    for command in (cli_send_email, cli_validate, cli_config, cli_info):
        cli.add_command(command)


_register_commands()


__all__ = ["cli"]
