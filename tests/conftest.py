"""Shared pytest fixtures for library, CLI and module-entry tests.

Centralizes test infrastructure:
- All shared fixtures live here
- Tests receive fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

from shoutbox.adapters.email.config import ShoutboxConfig
from shoutbox.domain.models import EmailMessage, EmailRequest

if TYPE_CHECKING:
    from shoutbox.adapters.memory.email import EmailSpy
    from shoutbox.composition import AppServices


def _load_dotenv() -> None:
    """Load .env when present so integration tests can pick up SHOUTBOX_* values."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))


def _snapshot_cli_config() -> dict[str, object]:
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test."""
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory."""
    from shoutbox.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config cache before the test (not after: it may be monkeypatched)."""
    from shoutbox.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture(autouse=True)
def no_ambient_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's SHOUTBOX_API_KEY from leaking into ``--api-key``."""
    monkeypatch.delenv("SHOUTBOX_API_KEY", raising=False)


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from plain dicts, without filesystem I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def shoutbox_config() -> ShoutboxConfig:
    """A ShoutboxConfig pointing at a local test endpoint."""
    return ShoutboxConfig(api_key="test-key", base_url="https://api.test.invalid", timeout=5.0)


@pytest.fixture
def email_request() -> EmailRequest:
    """A REST request with every optional field populated."""
    return EmailRequest(
        from_address="no-reply@example.com",
        to=["alice@example.com", "bob@example.com"],
        subject="Welcome",
        html="<h1>Welcome!</h1>",
        name="Example App",
        reply_to="support@example.com",
        headers={"X-Campaign": "spring"},
    )


@pytest.fixture
def email_message() -> EmailMessage:
    """An SMTP message without attachments."""
    return EmailMessage(
        from_address="no-reply@example.com",
        to=["alice@example.com"],
        subject="Welcome",
        html="<h1>Welcome!</h1>",
        name="Example App",
    )


@dataclass
class RecordedExchange:
    """Requests captured by a mock httpx transport."""

    requests: list[httpx.Request]


@pytest.fixture
def mock_api() -> Callable[[httpx.Response], tuple[httpx.MockTransport, RecordedExchange]]:
    """Build a MockTransport that records requests and answers with ``response``.

    Example:
        def test_send(mock_api) -> None:
            transport, exchange = mock_api(httpx.Response(200))
            ApiClient("k", transport=transport).send_email(request)
            assert exchange.requests[0].url.path == "/send"
    """

    def _build(response: httpx.Response) -> tuple[httpx.MockTransport, RecordedExchange]:
        exchange = RecordedExchange(requests=[])

        def _handler(request: httpx.Request) -> httpx.Response:
            exchange.requests.append(request)
            return httpx.Response(response.status_code, headers=response.headers, content=response.content)

        return httpx.MockTransport(_handler), exchange

    return _build


@pytest.fixture
def inject_config(
    clear_config_cache: None,
) -> Callable[[Config], Callable[[], AppServices]]:
    """Return a factory providing production services with an injected Config.

    Only the I/O boundary (``get_config``) and logging start-up are replaced.
    """
    from shoutbox.adapters.memory import init_logging_in_memory
    from shoutbox.composition import AppServices, build_production

    def _inject(config: Config) -> Callable[[], AppServices]:
        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        prod = build_production()
        test_services = AppServices(
            get_config=_fake_get_config,
            get_default_config_path=prod.get_default_config_path,
            display_config=prod.display_config,
            send_rest_email=prod.send_rest_email,
            send_smtp_email=prod.send_smtp_email,
            load_shoutbox_config_from_dict=prod.load_shoutbox_config_from_dict,
            init_logging=init_logging_in_memory,
        )
        return lambda: test_services

    return _inject


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a factory whose get_config records the profile it was called with."""
    from shoutbox.adapters.memory import init_logging_in_memory
    from shoutbox.composition import AppServices, build_production

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        prod = build_production()
        test_services = AppServices(
            get_config=_capturing_get_config,
            get_default_config_path=prod.get_default_config_path,
            display_config=prod.display_config,
            send_rest_email=prod.send_rest_email,
            send_smtp_email=prod.send_smtp_email,
            load_shoutbox_config_from_dict=prod.load_shoutbox_config_from_dict,
            init_logging=init_logging_in_memory,
        )
        return lambda: test_services

    return _inject


@dataclass
class EmailCliContext:
    """Services factory and EmailSpy for email CLI tests."""

    factory: Callable[[], Any]
    spy: EmailSpy


@pytest.fixture
def email_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], EmailCliContext]:
    """Create an email CLI context from the ``[shoutbox]`` section contents.

    Example:
        def test_send(cli_runner, email_cli_context) -> None:
            ctx = email_cli_context({"api_key": "k", "from_address": "a@b.com"})
            result = cli_runner.invoke(cli, ["send-email", ...], obj=ctx.factory)
            assert ctx.spy.sent_requests
    """
    from shoutbox.adapters.memory import init_logging_in_memory, load_shoutbox_config_from_dict_in_memory
    from shoutbox.adapters.memory.email import EmailSpy as EmailSpyImpl
    from shoutbox.composition import AppServices, build_production

    def _create(shoutbox_data: dict[str, Any]) -> EmailCliContext:
        spy = EmailSpyImpl()
        config = Config({"shoutbox": shoutbox_data}, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            get_default_config_path=prod.get_default_config_path,
            display_config=prod.display_config,
            send_rest_email=spy.send_rest_email,
            send_smtp_email=spy.send_smtp_email,
            load_shoutbox_config_from_dict=load_shoutbox_config_from_dict_in_memory,
            init_logging=init_logging_in_memory,
        )
        return EmailCliContext(factory=lambda: test_services, spy=spy)

    return _create


@pytest.fixture
def config_cli_context(
    inject_config: Callable[[Config], Callable[[], AppServices]],
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Create a services factory straight from a config dict."""

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        return inject_config(Config(config_data, {}))

    return _create
