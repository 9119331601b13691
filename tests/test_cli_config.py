"""CLI config stories: display, JSON format, sections and profile reloads."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from click.testing import CliRunner, Result
from lib_layered_config import Config

from shoutbox.adapters import cli as cli_mod


@pytest.mark.os_agnostic
def test_config_displays_bundled_defaults(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    clear_config_cache: None,
) -> None:
    result: Result = cli_runner.invoke(cli_mod.cli, ["config", "--format", "json"], obj=production_factory)

    assert result.exit_code == 0
    assert "{" in result.stdout


@pytest.mark.os_agnostic
def test_config_with_nonexistent_section_fails(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    clear_config_cache: None,
) -> None:
    result: Result = cli_runner.invoke(
        cli_mod.cli, ["config", "--section", "nonexistent_section_that_does_not_exist"], obj=production_factory
    )

    assert result.exit_code == 22
    assert "not found" in result.stderr


@pytest.mark.os_agnostic
def test_config_displays_injected_sections(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    factory = config_cli_context({"shoutbox": {"smtp_host": "relay.example.test", "smtp_port": 2525}})

    result: Result = cli_runner.invoke(cli_mod.cli, ["config"], obj=factory)

    assert result.exit_code == 0
    assert "shoutbox" in result.output
    assert "relay.example.test" in result.output


@pytest.mark.os_agnostic
def test_config_json_section_shows_only_that_section(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    factory = config_cli_context(
        {
            "shoutbox": {"from_address": "no-reply@example.com"},
            "lib_log_rich": {"console_level": "DEBUG"},
        }
    )

    result: Result = cli_runner.invoke(
        cli_mod.cli, ["config", "--format", "json", "--section", "shoutbox"], obj=factory
    )

    assert result.exit_code == 0
    assert "no-reply@example.com" in result.stdout
    assert "console_level" not in result.stdout

@pytest.mark.os_agnostic
def test_config_profile_reload_preserves_root_set_overrides(
    cli_runner: CliRunner,
    inject_config_with_profile_capture: Callable[[Config, list[str | None]], Callable[[], Any]],
) -> None:
    captured: list[str | None] = []
    factory = inject_config_with_profile_capture(Config({"shoutbox": {"smtp_host": "original.test"}}, {}), captured)

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "shoutbox.smtp_host=overridden.test", "config", "--profile", "staging", "--format", "json"],
        obj=factory,
    )

    assert result.exit_code == 0
    assert captured == [None, "staging"]
    assert "overridden.test" in result.stdout
    assert "original.test" not in result.stdout
