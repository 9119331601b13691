"""Logging configuration model and runtime initialisation."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from lib_layered_config import Config

from shoutbox.adapters.logging import setup
from shoutbox.adapters.logging.setup import LoggingConfigModel


@pytest.mark.os_agnostic
def test_logging_config_model_allows_extra_fields() -> None:
    """Extra fields pass through for lib_log_rich RuntimeConfig."""
    parsed = LoggingConfigModel.model_validate({"service": "svc", "environment": "dev", "console_level": "DEBUG"})

    assert parsed.service == "svc"
    assert parsed.environment == "dev"
    assert parsed.model_dump(exclude={"service", "environment"}, exclude_none=True) == {"console_level": "DEBUG"}


@pytest.mark.os_agnostic
def test_logging_config_model_defaults() -> None:
    parsed = LoggingConfigModel.model_validate({})

    assert parsed.service is None
    assert parsed.environment == "prod"


@pytest.mark.os_agnostic
def test_runtime_config_uses_package_name_as_service(monkeypatch: pytest.MonkeyPatch) -> None:
    runtime_config = MagicMock()
    monkeypatch.setattr(setup.lib_log_rich.runtime, "RuntimeConfig", runtime_config)

    setup._build_runtime_config(Config({"lib_log_rich": {"environment": "test", "console_level": "WARNING"}}, {}))  # pyright: ignore[reportPrivateUsage]

    runtime_config.assert_called_once_with(service="shoutbox", environment="test", console_level="WARNING")


@pytest.mark.os_agnostic
def test_init_logging_is_a_no_op_when_already_initialised(monkeypatch: pytest.MonkeyPatch) -> None:
    init = MagicMock()
    monkeypatch.setattr(setup.lib_log_rich.runtime, "is_initialised", lambda: True)
    monkeypatch.setattr(setup.lib_log_rich.runtime, "init", init)

    setup.init_logging(Config({}, {}))

    init.assert_not_called()


@pytest.mark.os_agnostic
def test_init_logging_starts_runtime_and_bridges_std_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []
    monkeypatch.setattr(setup.lib_log_rich.runtime, "is_initialised", lambda: False)
    monkeypatch.setattr(setup.lib_log_rich.config, "enable_dotenv", lambda: calls.append("dotenv"))
    monkeypatch.setattr(setup.lib_log_rich.runtime, "RuntimeConfig", MagicMock())
    monkeypatch.setattr(setup.lib_log_rich.runtime, "init", lambda _cfg: calls.append("init"))
    monkeypatch.setattr(setup.lib_log_rich.runtime, "attach_std_logging", lambda: calls.append("attach"))

    setup.init_logging(Config({}, {}))

    assert calls == ["dotenv", "init", "attach"]
