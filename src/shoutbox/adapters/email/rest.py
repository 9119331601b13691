"""REST transport: one authenticated JSON POST per email.

Contents:
    * :func:`build_payload` - EmailRequest to JSON-ready dict.
    * :class:`ApiClient` - sync and async send against ``{base_url}/send``.
    * :func:`send_rest_email` - port-shaped wrapper used by the composition root.

No retries are performed. Transport failures (DNS, refused connection,
timeout) raise :class:`TransportError`; non-200 replies raise
:class:`ProtocolError`. Cancelling the async call propagates
``asyncio.CancelledError`` unchanged.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
import orjson

from shoutbox.domain.errors import ConfigurationError, ConstructionError, ProtocolError, TransportError
from shoutbox.domain.models import EmailRequest

from .config import ShoutboxConfig

logger = logging.getLogger(__name__)

_HTTP_OK = 200


def build_payload(request: EmailRequest) -> dict[str, Any]:
    """Map an EmailRequest onto the API's JSON object.

    Unset or empty optional fields are left out entirely rather than sent as
    ``null``. Custom headers keep their order; a repeated name keeps its last
    value because JSON objects cannot repeat keys.

    Example:
        >>> req = EmailRequest(from_address="a@b.com", to="c@d.com", subject="Hi", html="<p>x</p>", reply_to="r@b.com")
        >>> build_payload(req)
        {'from': 'a@b.com', 'to': 'c@d.com', 'subject': 'Hi', 'html': '<p>x</p>', 'reply_to': 'r@b.com'}
    """
    payload: dict[str, Any] = {
        "from": request.from_address,
        "to": request.to,
        "subject": request.subject,
        "html": request.html,
    }
    if request.name:
        payload["name"] = request.name
    if request.reply_to:
        payload["reply_to"] = request.reply_to
    if request.headers:
        payload["headers"] = dict(request.headers)
    return payload


def encode_payload(request: EmailRequest) -> bytes:
    """Serialise the request body.

    Raises:
        ConstructionError: When the payload cannot be encoded as JSON.
    """
    try:
        return orjson.dumps(build_payload(request))
    except orjson.JSONEncodeError as exc:
        raise ConstructionError(f"error marshaling request: {exc}") from exc


def _error_from_response(response: httpx.Response) -> ProtocolError:
    """Build the failure for a non-200 reply.

    Uses the server's ``{"error": "..."}`` text when present, else a generic
    message naming the status code.
    """
    status = response.status_code
    try:
        body: Any = orjson.loads(response.content)
    except orjson.JSONDecodeError:
        body = None

    if isinstance(body, dict):
        detail: Any = body.get("error")  # type: ignore[union-attr]
        if isinstance(detail, str):
            return ProtocolError(f"api error: {detail}", status_code=status, detail=detail)
    return ProtocolError(f"error response with status {status}", status_code=status)


class ApiClient:
    """Shoutbox REST API client.

    Holds only immutable settings; every send opens and closes its own HTTP
    client, so one instance can serve concurrent threads.

    Args:
        api_key: Bearer token. Falls back to ``config.api_key``.
        config: Endpoint and timeout settings; defaults when None.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.

    Raises:
        ConfigurationError: When no API key is available.

    Example:
        >>> client = ApiClient("key-123")
        >>> client.url
        'https://api.shoutbox.net/send'
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        config: ShoutboxConfig | None = None,
        transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config if config is not None else ShoutboxConfig()
        resolved_key = api_key if api_key is not None else self._config.api_key
        if not resolved_key:
            raise ConfigurationError("No API key configured (shoutbox.api_key is empty)")
        self._api_key = resolved_key
        self._transport = transport

    @property
    def url(self) -> str:
        return self._config.send_url

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def _timeout(self, timeout: float | None) -> float:
        return timeout if timeout is not None else self._config.timeout

    def send_email(self, request: EmailRequest, *, timeout: float | None = None) -> None:
        """Send one email, blocking for a single round-trip.

        Args:
            request: The email to send.
            timeout: Per-call deadline in seconds; config timeout when None.

        Raises:
            ConstructionError: The request could not be serialised.
            TransportError: The HTTP exchange did not complete.
            ProtocolError: The API answered with a non-200 status.
        """
        body = encode_payload(request)
        logger.info("Sending email via REST API", extra={"recipients": request.to, "subject": request.subject})

        sync_transport = self._transport if isinstance(self._transport, httpx.BaseTransport) else None
        try:
            with httpx.Client(transport=sync_transport, timeout=self._timeout(timeout)) as client:
                response = client.post(self.url, content=body, headers=self._headers())
        except httpx.TransportError as exc:
            logger.debug("REST request failed", exc_info=True)
            raise TransportError(f"error sending request: {exc}") from exc

        self._check_response(response, request)

    async def send_email_async(self, request: EmailRequest, *, timeout: float | None = None) -> None:
        """Async variant of :meth:`send_email`.

        The caller owns cancellation: cancelling the task or wrapping the call
        in ``asyncio.timeout`` aborts the request and propagates unchanged.
        """
        body = encode_payload(request)
        logger.info("Sending email via REST API", extra={"recipients": request.to, "subject": request.subject})

        async_transport = self._transport if isinstance(self._transport, httpx.AsyncBaseTransport) else None
        try:
            async with httpx.AsyncClient(transport=async_transport, timeout=self._timeout(timeout)) as client:
                response = await client.post(self.url, content=body, headers=self._headers())
        except httpx.TransportError as exc:
            logger.debug("REST request failed", exc_info=True)
            raise TransportError(f"error sending request: {exc}") from exc

        self._check_response(response, request)

    def _check_response(self, response: httpx.Response, request: EmailRequest) -> None:
        if response.status_code != _HTTP_OK:
            error = _error_from_response(response)
            logger.warning(
                "REST API rejected email",
                extra={"status_code": response.status_code, "error": str(error), "recipients": request.to},
            )
            raise error
        logger.info("Email sent successfully", extra={"recipients": request.to})

    def __repr__(self) -> str:
        return f"ApiClient(url={self.url!r}, api_key='[REDACTED]')"


def send_rest_email(*, config: ShoutboxConfig, request: EmailRequest) -> None:
    """Send ``request`` through the REST API using ``config`` settings.

    Raises:
        ConfigurationError: No API key configured.
        ConstructionError: The request could not be serialised.
        TransportError: The HTTP exchange did not complete.
        ProtocolError: The API answered with a non-200 status.
    """
    ApiClient(config=config).send_email(request)


__all__ = [
    "ApiClient",
    "build_payload",
    "encode_payload",
    "send_rest_email",
]
