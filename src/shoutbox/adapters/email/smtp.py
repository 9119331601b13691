"""SMTP transport: STARTTLS submission to the Shoutbox mail relay.

Each send opens its own connection, upgrades it with STARTTLS when
configured, authenticates with the fixed service username and the API key as
password, submits one MIME document and closes the connection.
"""

from __future__ import annotations

import logging
import smtplib
import ssl

from shoutbox.domain.errors import ConfigurationError, ProtocolError, TransportError
from shoutbox.domain.models import EmailMessage

from .config import ShoutboxConfig
from .mime import build_mime_message

logger = logging.getLogger(__name__)


def _protocol_error(exc: smtplib.SMTPException) -> ProtocolError:
    """Translate a server rejection, keeping the reply code when smtplib exposes one."""
    if isinstance(exc, smtplib.SMTPRecipientsRefused):
        detail = "; ".join(
            f"{recipient}: {code} {reply.decode('utf-8', 'replace')}"
            for recipient, (code, reply) in exc.recipients.items()
        )
        return ProtocolError(f"error sending email: recipients refused ({detail})", detail=detail)

    if isinstance(exc, smtplib.SMTPResponseException):
        reply = exc.smtp_error.decode("utf-8", "replace") if isinstance(exc.smtp_error, bytes) else str(exc.smtp_error)
        return ProtocolError(
            f"error sending email: {exc.smtp_code} {reply}",
            status_code=exc.smtp_code,
            detail=reply,
        )
    return ProtocolError(f"error sending email: {exc}")


class SMTPClient:
    """Shoutbox SMTP client.

    Args:
        api_key: Password for SMTP AUTH. Falls back to ``config.api_key``.
        config: Relay host, port, username and timeout; defaults when None.

    Raises:
        ConfigurationError: When no API key is available.

    Example:
        >>> client = SMTPClient("key-123")
        >>> client.address
        'mail.shoutbox.net:587'
    """

    def __init__(self, api_key: str | None = None, *, config: ShoutboxConfig | None = None) -> None:
        self._config = config if config is not None else ShoutboxConfig()
        resolved_key = api_key if api_key is not None else self._config.api_key
        if not resolved_key:
            raise ConfigurationError("No API key configured (shoutbox.api_key is empty)")
        self._api_key = resolved_key

    @property
    def address(self) -> str:
        return f"{self._config.smtp_host}:{self._config.smtp_port}"

    def send_email(self, message: EmailMessage) -> None:
        """Assemble and submit ``message``.

        Raises:
            ConstructionError: The MIME document could not be assembled.
            TransportError: The connection or TLS upgrade failed.
            ProtocolError: The server rejected authentication, sender,
                recipients or data.
        """
        document = build_mime_message(message)
        config = self._config
        logger.info(
            "Sending email via SMTP",
            extra={"smtp_host": self.address, "recipients": list(message.to), "subject": message.subject},
        )

        try:
            with smtplib.SMTP(config.smtp_host, config.smtp_port, timeout=config.timeout) as smtp:
                if config.use_starttls:
                    smtp.starttls(context=ssl.create_default_context())
                smtp.login(config.smtp_username, self._api_key)
                smtp.sendmail(message.from_address, list(message.to), document)
        except (smtplib.SMTPConnectError, smtplib.SMTPServerDisconnected) as exc:
            logger.debug("SMTP session failed", exc_info=True)
            raise TransportError(f"error sending email: {exc}") from exc
        except smtplib.SMTPException as exc:
            error = _protocol_error(exc)
            logger.warning(
                "SMTP server rejected email",
                extra={"smtp_host": self.address, "error": str(error), "recipients": list(message.to)},
            )
            raise error from exc
        except OSError as exc:
            logger.debug("SMTP session failed", exc_info=True)
            raise TransportError(f"error sending email: {exc}") from exc

        logger.info("Email sent successfully", extra={"smtp_host": self.address, "recipients": list(message.to)})

    def __repr__(self) -> str:
        return f"SMTPClient(address={self.address!r}, api_key='[REDACTED]')"


def send_smtp_email(*, config: ShoutboxConfig, message: EmailMessage) -> None:
    """Send ``message`` over SMTP using ``config`` settings.

    Raises:
        ConfigurationError: No API key configured.
        ConstructionError: The MIME document could not be assembled.
        TransportError: The connection or TLS upgrade failed.
        ProtocolError: The server rejected the submission.
    """
    SMTPClient(config=config).send_email(message)


__all__ = [
    "SMTPClient",
    "send_smtp_email",
]
