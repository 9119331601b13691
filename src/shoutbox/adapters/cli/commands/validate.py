"""``shoutbox validate`` - advisory syntactic address check."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from shoutbox.domain.errors import InvalidAddressError
from shoutbox.domain.validation import validate_email

from ..constants import CLICK_CONTEXT_SETTINGS
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


@click.command("validate", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("addresses", nargs=-1, required=True)
def cli_validate(addresses: tuple[str, ...]) -> None:
    """Check that every ADDRESS looks like an email address.

    Only the presence of ``@`` is checked. Exits with 22 when any address
    fails.

    Example:
        >>> from click.testing import CliRunner
        >>> result = CliRunner().invoke(cli_validate, ["ops@example.com", "nobody"])
        >>> result.exit_code
        22
        >>> print(result.output, end="")
        valid: ops@example.com
        invalid: nobody
    """
    with lib_log_rich.runtime.bind(job_id="cli-validate", extra={"command": "validate"}):
        failures = 0
        for address in addresses:
            try:
                validate_email(address)
            except InvalidAddressError:
                failures += 1
                click.echo(f"invalid: {address}")
            else:
                click.echo(f"valid: {address}")

        logger.info("Validated addresses", extra={"checked": len(addresses), "invalid": failures})
        if failures:
            raise SystemExit(ExitCode.INVALID_ARGUMENT)


__all__ = ["cli_validate"]
