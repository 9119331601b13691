"""``shoutbox send-email`` - send one email through the REST API or SMTP."""

from __future__ import annotations

import functools
import logging

import lib_log_rich.runtime
import rich_click as click
from pydantic import ValidationError

from shoutbox.adapters.email.attachments import attachment_from_file
from shoutbox.adapters.email.config import ShoutboxConfig
from shoutbox.application.ports import SendSmtpEmail
from shoutbox.domain.enums import Transport
from shoutbox.domain.models import EmailMessage, EmailRequest, Header

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ...exit_codes import ExitCode
from ._common import (
    apply_validated_overrides,
    execute_with_email_error_handling,
    filter_sentinels,
    handle_validation_error,
    load_and_validate_shoutbox_config,
    parse_header,
    require_api_key,
    shoutbox_config_options,
)

logger = logging.getLogger(__name__)


def _missing_setting(message: str) -> SystemExit:
    logger.error(message)
    click.echo(f"\nError: {message}", err=True)
    return SystemExit(ExitCode.CONFIG_ERROR)


def _send_over_smtp(
    send: SendSmtpEmail,
    *,
    config: ShoutboxConfig,
    attachment_paths: tuple[str, ...],
    **fields: object,
) -> None:
    """Read attachments, then hand the message to the SMTP port."""
    attachments = [attachment_from_file(path) for path in attachment_paths]
    message = EmailMessage(attachments=attachments, **fields)  # type: ignore[arg-type]
    send(config=config, message=message)


@click.command("send-email", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--transport",
    type=click.Choice([t.value for t in Transport], case_sensitive=False),
    default=Transport.REST.value,
    show_default=True,
    help="Delivery path: JSON REST API or SMTP relay",
)
@click.option(
    "--to",
    "recipients",
    multiple=True,
    help="Recipient address (repeatable; uses shoutbox.recipients if not specified)",
)
@click.option("--subject", required=True, help="Email subject line")
@click.option("--html", required=True, help="HTML body")
@click.option(
    "--from", "from_address", default=None, help="Sender address (uses shoutbox.from_address if not specified)"
)
@click.option("--name", default=None, help="Sender display name (uses shoutbox.from_name if not specified)")
@click.option("--reply-to", default=None, help="Reply-To address")
@click.option(
    "--header",
    "headers",
    multiple=True,
    callback=parse_header,
    metavar="NAME:VALUE",
    help="Custom header (repeatable)",
)
@click.option(
    "--attachment",
    "attachments",
    multiple=True,
    type=click.Path(path_type=str),
    help="File to attach (repeatable; SMTP transport only)",
)
@shoutbox_config_options
@click.pass_context
def cli_send_email(
    ctx: click.Context,
    transport: str,
    recipients: tuple[str, ...],
    subject: str,
    html: str,
    from_address: str | None,
    name: str | None,
    reply_to: str | None,
    headers: tuple[Header, ...],
    attachments: tuple[str, ...],
    api_key: str | None,
    base_url: str | None,
    smtp_host: str | None,
    smtp_port: int | None,
    smtp_username: str | None,
    use_starttls: bool | None,
    timeout: float | None,
) -> None:
    """Send one email using the configured Shoutbox account.

    Exit codes: 0 sent, 22 invalid option, 65 email could not be built,
    69 service unreachable, 76 service rejected the email, 78 configuration
    missing or invalid.
    """
    cli_ctx = get_cli_context(ctx)
    selected = Transport(transport.lower())
    if attachments and selected is Transport.REST:
        raise click.UsageError("--attachment requires --transport smtp")

    extra = {"command": "send-email", "transport": selected.value, "subject": subject}
    with lib_log_rich.runtime.bind(job_id="cli-send-email", extra=extra):
        shoutbox_config = load_and_validate_shoutbox_config(
            cli_ctx.config, cli_ctx.services.load_shoutbox_config_from_dict
        )
        overrides = filter_sentinels(
            api_key=api_key,
            base_url=base_url,
            smtp_host=smtp_host,
            smtp_port=smtp_port,
            smtp_username=smtp_username,
            use_starttls=use_starttls,
            timeout=timeout,
        )
        try:
            shoutbox_config = apply_validated_overrides(shoutbox_config, overrides)
        except ValidationError as exc:
            handle_validation_error(exc)
        require_api_key(shoutbox_config)

        sender = from_address or shoutbox_config.from_address
        if not sender:
            raise _missing_setting("No sender address. Pass --from or configure shoutbox.from_address.")
        resolved_recipients = list(recipients) if recipients else list(shoutbox_config.recipients)
        if not resolved_recipients:
            raise _missing_setting("No recipients. Pass --to or configure shoutbox.recipients.")

        fields: dict[str, object] = {
            "from_address": sender,
            "to": resolved_recipients,
            "subject": subject,
            "html": html,
            "name": name or shoutbox_config.from_name,
            "reply_to": reply_to,
            "headers": headers,
        }
        logger.info(
            "Sending email",
            extra={
                "recipients": resolved_recipients,
                "header_count": len(headers),
                "attachment_count": len(attachments),
            },
        )

        if selected is Transport.REST:
            operation = functools.partial(
                cli_ctx.services.send_rest_email,
                config=shoutbox_config,
                request=EmailRequest(**fields),  # type: ignore[arg-type]
            )
        else:
            operation = functools.partial(
                _send_over_smtp,
                cli_ctx.services.send_smtp_email,
                config=shoutbox_config,
                attachment_paths=attachments,
                **fields,
            )
        execute_with_email_error_handling(operation=operation, recipients=resolved_recipients)


__all__ = ["cli_send_email"]
