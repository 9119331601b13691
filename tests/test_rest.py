"""REST transport: payload shape, request headers and failure mapping."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import httpx
import orjson
import pytest

from shoutbox.adapters.email.config import ShoutboxConfig
from shoutbox.adapters.email.rest import ApiClient, build_payload, send_rest_email
from shoutbox.domain.errors import ConfigurationError, ProtocolError, TransportError
from shoutbox.domain.models import EmailRequest

MockApi = Callable[[httpx.Response], tuple[httpx.MockTransport, Any]]


def _minimal_request(**overrides: object) -> EmailRequest:
    fields: dict[str, object] = {
        "from_address": "no-reply@example.com",
        "to": "alice@example.com",
        "subject": "Hi",
        "html": "<p>Hi</p>",
    }
    fields.update(overrides)
    return EmailRequest(**fields)  # type: ignore[arg-type]


# ======================== Payload ========================


@pytest.mark.os_agnostic
def test_payload_keeps_every_populated_field(email_request: EmailRequest) -> None:
    assert build_payload(email_request) == {
        "from": "no-reply@example.com",
        "to": "alice@example.com,bob@example.com",
        "subject": "Welcome",
        "html": "<h1>Welcome!</h1>",
        "name": "Example App",
        "reply_to": "support@example.com",
        "headers": {"X-Campaign": "spring"},
    }


@pytest.mark.os_agnostic
def test_payload_omits_unset_optional_fields() -> None:
    payload = build_payload(_minimal_request())

    assert set(payload) == {"from", "to", "subject", "html"}


@pytest.mark.os_agnostic
def test_payload_omits_empty_optional_fields() -> None:
    payload = build_payload(_minimal_request(name="", reply_to="", headers={}))

    assert "name" not in payload
    assert "reply_to" not in payload
    assert "headers" not in payload


@pytest.mark.os_agnostic
def test_payload_repeated_header_keeps_last_value() -> None:
    payload = build_payload(_minimal_request(headers=[("X-Tag", "a"), ("X-Tag", "b")]))
    assert payload["headers"] == {"X-Tag": "b"}


# ======================== Client construction ========================


@pytest.mark.os_agnostic
def test_client_without_api_key_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="No API key"):
        ApiClient()


@pytest.mark.os_agnostic
def test_client_takes_api_key_from_config() -> None:
    client = ApiClient(config=ShoutboxConfig(api_key="from-config"))
    assert client.url == "https://api.shoutbox.net/send"


@pytest.mark.os_agnostic
def test_client_repr_hides_api_key() -> None:
    assert "secret-key" not in repr(ApiClient("secret-key"))


# ======================== Sync send ========================


@pytest.mark.os_agnostic
def test_successful_send_posts_json_with_bearer_token(
    mock_api: MockApi, shoutbox_config: ShoutboxConfig, email_request: EmailRequest
) -> None:
    transport, exchange = mock_api(httpx.Response(200, json={"id": "abc"}))

    ApiClient(config=shoutbox_config, transport=transport).send_email(email_request)

    (sent,) = exchange.requests
    assert sent.method == "POST"
    assert str(sent.url) == "https://api.test.invalid/send"
    assert sent.headers["Authorization"] == "Bearer test-key"
    assert sent.headers["Content-Type"] == "application/json"
    assert orjson.loads(sent.content) == build_payload(email_request)


@pytest.mark.os_agnostic
def test_explicit_api_key_wins_over_config(mock_api: MockApi, shoutbox_config: ShoutboxConfig) -> None:
    transport, exchange = mock_api(httpx.Response(200))

    ApiClient("explicit-key", config=shoutbox_config, transport=transport).send_email(_minimal_request())

    assert exchange.requests[0].headers["Authorization"] == "Bearer explicit-key"


@pytest.mark.os_agnostic
def test_reply_to_reaches_the_wire_only_when_set(mock_api: MockApi, shoutbox_config: ShoutboxConfig) -> None:
    transport, exchange = mock_api(httpx.Response(200))
    client = ApiClient(config=shoutbox_config, transport=transport)

    client.send_email(_minimal_request(reply_to="support@example.com"))
    client.send_email(_minimal_request())

    with_reply, without_reply = (orjson.loads(request.content) for request in exchange.requests)
    assert with_reply["reply_to"] == "support@example.com"
    assert "reply_to" not in without_reply


@pytest.mark.os_agnostic
def test_api_error_body_message_is_surfaced(mock_api: MockApi, shoutbox_config: ShoutboxConfig) -> None:
    transport, _ = mock_api(httpx.Response(429, json={"error": "rate limited"}))

    with pytest.raises(ProtocolError, match="api error: rate limited") as excinfo:
        ApiClient(config=shoutbox_config, transport=transport).send_email(_minimal_request())

    assert excinfo.value.status_code == 429
    assert excinfo.value.detail == "rate limited"


@pytest.mark.os_agnostic
def test_unparseable_error_body_reports_status_code(mock_api: MockApi, shoutbox_config: ShoutboxConfig) -> None:
    transport, _ = mock_api(httpx.Response(502, content=b"<html>Bad Gateway</html>"))

    with pytest.raises(ProtocolError, match="error response with status 502") as excinfo:
        ApiClient(config=shoutbox_config, transport=transport).send_email(_minimal_request())

    assert excinfo.value.status_code == 502
    assert excinfo.value.detail is None


@pytest.mark.os_agnostic
@pytest.mark.parametrize("body", [{"message": "nope"}, {"error": 42}, ["error"]])
def test_error_body_without_error_string_reports_status_code(
    mock_api: MockApi, shoutbox_config: ShoutboxConfig, body: object
) -> None:
    transport, _ = mock_api(httpx.Response(400, json=body))

    with pytest.raises(ProtocolError, match="error response with status 400"):
        ApiClient(config=shoutbox_config, transport=transport).send_email(_minimal_request())


@pytest.mark.os_agnostic
def test_non_200_success_status_is_still_a_failure(mock_api: MockApi, shoutbox_config: ShoutboxConfig) -> None:
    transport, _ = mock_api(httpx.Response(202))

    with pytest.raises(ProtocolError, match="status 202"):
        ApiClient(config=shoutbox_config, transport=transport).send_email(_minimal_request())


@pytest.mark.os_agnostic
def test_connection_failure_is_a_transport_error(shoutbox_config: ShoutboxConfig) -> None:
    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = ApiClient(config=shoutbox_config, transport=httpx.MockTransport(_refuse))

    with pytest.raises(TransportError, match="error sending request") as excinfo:
        client.send_email(_minimal_request())

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.os_agnostic
def test_timeout_is_a_transport_error(shoutbox_config: ShoutboxConfig) -> None:
    def _stall(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = ApiClient(config=shoutbox_config, transport=httpx.MockTransport(_stall))

    with pytest.raises(TransportError):
        client.send_email(_minimal_request(), timeout=0.5)


@pytest.mark.os_agnostic
def test_port_function_sends_with_config_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: list[tuple[str, EmailRequest]] = []

    def _fake_send(self: ApiClient, request: EmailRequest, *, timeout: float | None = None) -> None:
        captured.append((self.url, request))

    monkeypatch.setattr(ApiClient, "send_email", _fake_send)
    request = _minimal_request()

    send_rest_email(config=ShoutboxConfig(api_key="k", base_url="http://localhost:8080"), request=request)

    assert captured == [("http://localhost:8080/send", request)]


# ======================== Async send ========================


@pytest.mark.os_agnostic
def test_async_send_posts_the_same_payload(
    mock_api: MockApi, shoutbox_config: ShoutboxConfig, email_request: EmailRequest
) -> None:
    transport, exchange = mock_api(httpx.Response(200))

    asyncio.run(ApiClient(config=shoutbox_config, transport=transport).send_email_async(email_request))

    assert orjson.loads(exchange.requests[0].content) == build_payload(email_request)


@pytest.mark.os_agnostic
def test_async_send_maps_rejection_to_protocol_error(mock_api: MockApi, shoutbox_config: ShoutboxConfig) -> None:
    transport, _ = mock_api(httpx.Response(401, json={"error": "invalid api key"}))
    client = ApiClient(config=shoutbox_config, transport=transport)

    with pytest.raises(ProtocolError, match="invalid api key"):
        asyncio.run(client.send_email_async(_minimal_request()))


@pytest.mark.os_agnostic
def test_async_send_cancellation_propagates_unwrapped(shoutbox_config: ShoutboxConfig) -> None:
    async def _hang(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(10)
        return httpx.Response(200)

    client = ApiClient(config=shoutbox_config, transport=httpx.MockTransport(_hang))

    async def _run() -> None:
        task = asyncio.create_task(client.send_email_async(_minimal_request()))
        await asyncio.sleep(0.05)
        task.cancel()
        await task

    with pytest.raises(asyncio.CancelledError):
        asyncio.run(_run())
