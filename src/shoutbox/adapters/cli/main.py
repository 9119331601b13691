"""Process-level runner behind the ``shoutbox`` console script and ``python -m shoutbox``.

Turns every outcome of a CLI run into an integer exit status:

* normal completion and ``--help`` / ``--version``: 0
* Click usage errors: their own code (2), after printing the usage hint
* ``SystemExit`` raised by commands: the code it carries
* Ctrl+C: :attr:`ExitCode.SIGNAL_INT`
* anything else: rendered by lib_cli_exit_tools, which picks the code
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import click
import lib_cli_exit_tools
import lib_log_rich.runtime

from shoutbox import __init__conf__

from .constants import TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import restore_traceback_state, snapshot_traceback_state
from .exit_codes import ExitCode

if TYPE_CHECKING:
    from shoutbox.composition import AppServices


def _render_failure(exc: BaseException) -> int:
    verbose = snapshot_traceback_state().enabled
    lib_cli_exit_tools.print_exception_message(
        trace_back=verbose,
        length_limit=TRACEBACK_VERBOSE_LIMIT if verbose else TRACEBACK_SUMMARY_LIMIT,
    )
    return lib_cli_exit_tools.get_system_exit_code(exc)


def _run_cli(argv: Sequence[str] | None, *, services_factory: Callable[[], AppServices]) -> int:
    """Invoke the root group with ``services_factory`` as ``ctx.obj``.

    ``standalone_mode`` is off so exit statuses come back here instead of
    Click calling ``sys.exit`` itself.
    """
    from .root import cli

    try:
        cli.main(
            args=list(sys.argv[1:] if argv is None else argv),
            prog_name=__init__conf__.shell_command,
            obj=services_factory,
            standalone_mode=False,
        )
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except SystemExit as exc:
        if exc.code is None:
            return 0
        return int(exc.code) if isinstance(exc.code, int) else _render_failure(exc)
    except (KeyboardInterrupt, click.exceptions.Abort):
        click.echo("\nAborted.", err=True)
        return int(ExitCode.SIGNAL_INT)
    except BaseException as exc:
        return _render_failure(exc)
    return 0


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Run the CLI and return its exit status.

    Args:
        argv: Arguments without the program name; ``sys.argv[1:]`` when None.
        restore_traceback: Put the traceback flags back as they were afterwards.
        services_factory: Builds the AppServices for this run. Required;
            pass ``build_production`` outside of tests.

    Raises:
        ValueError: If services_factory is not provided.

    Example:
        >>> from shoutbox.composition import build_testing
        >>> main(["validate", "ops@example.com"], services_factory=build_testing)
        valid: ops@example.com
        0
    """
    if services_factory is None:
        raise ValueError("services_factory is required. Pass build_production from composition layer.")

    saved = snapshot_traceback_state()
    try:
        return _run_cli(argv, services_factory=services_factory)
    finally:
        if restore_traceback:
            restore_traceback_state(saved)
        # Shutting down from a worker thread would stop logging for the main thread.
        if threading.current_thread() is threading.main_thread() and lib_log_rich.runtime.is_initialised():
            lib_log_rich.runtime.shutdown()


__all__ = ["main"]
