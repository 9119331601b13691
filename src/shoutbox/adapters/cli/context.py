"""State carried from the root group to subcommands, plus traceback toggles.

The root group resolves configuration and services exactly once and parks
them on ``ctx.obj`` as a :class:`CLIContext`. The ``--traceback`` flag lives
in ``lib_cli_exit_tools.config`` because that is where the error renderer
reads it; the helpers below save and restore it around a run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

import lib_cli_exit_tools
import rich_click as click
from lib_layered_config import Config

if TYPE_CHECKING:
    from shoutbox.composition import AppServices


class TracebackState(NamedTuple):
    """Saved ``lib_cli_exit_tools`` traceback flags."""

    enabled: bool
    force_color: bool


@dataclass(slots=True)
class CLIContext:
    """Resolved configuration and services for one CLI invocation.

    ``set_overrides`` is kept so ``config --profile`` can reload another
    profile and still honour the root ``--set`` values.
    """

    traceback: bool
    config: Config
    services: AppServices
    profile: str | None = None
    set_overrides: tuple[str, ...] = ()


def store_cli_context(
    ctx: click.Context,
    *,
    traceback: bool,
    config: Config,
    services: AppServices,
    profile: str | None = None,
    set_overrides: tuple[str, ...] = (),
) -> None:
    """Swap the services factory on ``ctx.obj`` for the resolved :class:`CLIContext`.

    Example:
        >>> from unittest.mock import MagicMock
        >>> ctx = MagicMock()
        >>> store_cli_context(ctx, traceback=False, config=Config({}, {}), services=MagicMock(), profile="staging")
        >>> ctx.obj.profile
        'staging'
    """
    ctx.obj = CLIContext(traceback, config, services, profile, set_overrides)


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Return the :class:`CLIContext` stored by the root group.

    Raises:
        RuntimeError: When a subcommand runs without the root group.
    """
    obj = ctx.obj
    if isinstance(obj, CLIContext):
        return obj
    raise RuntimeError("CLI context not initialized; invoke subcommands through the shoutbox group")


def apply_traceback_preferences(enabled: bool) -> None:
    """Turn full, colourised tracebacks on or off."""
    lib_cli_exit_tools.config.traceback = enabled
    lib_cli_exit_tools.config.traceback_force_color = enabled


def snapshot_traceback_state() -> TracebackState:
    """Read the current traceback flags.

    Example:
        >>> apply_traceback_preferences(False)
        >>> snapshot_traceback_state()
        TracebackState(enabled=False, force_color=False)
    """
    config = lib_cli_exit_tools.config
    return TracebackState(
        enabled=bool(getattr(config, "traceback", False)),
        force_color=bool(getattr(config, "traceback_force_color", False)),
    )


def restore_traceback_state(state: TracebackState) -> None:
    """Put back flags captured by :func:`snapshot_traceback_state`."""
    lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color = state


__all__ = [
    "CLIContext",
    "TracebackState",
    "apply_traceback_preferences",
    "get_cli_context",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]
