"""Composition root: the only place that chooses concrete adapters.

The CLI receives a zero-argument factory (``build_production`` or
``build_testing``) and reaches the configuration loader, both transports and
logging start-up only through it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config, get_default_config_path

# Transports
from ..adapters.email.config import load_shoutbox_config_from_dict
from ..adapters.email.rest import send_rest_email
from ..adapters.email.smtp import send_smtp_email

# Logging
from ..adapters.logging.setup import init_logging

# Static conformance assertions checked by the type checker.
if TYPE_CHECKING:
    from ..adapters.memory.email import EmailSpy
    from ..application.ports import (
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadShoutboxConfigFromDict,
        SendRestEmail,
        SendSmtpEmail,
    )

    _assert_get_config: GetConfig = get_config
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path
    _assert_display_config: DisplayConfig = display_config
    _assert_send_rest_email: SendRestEmail = send_rest_email
    _assert_send_smtp_email: SendSmtpEmail = send_smtp_email
    _assert_load_shoutbox_config_from_dict: LoadShoutboxConfigFromDict = load_shoutbox_config_from_dict
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """One implementation per application port, fixed for the life of a CLI run."""

    get_config: GetConfig
    get_default_config_path: GetDefaultConfigPath
    display_config: DisplayConfig
    send_rest_email: SendRestEmail
    send_smtp_email: SendSmtpEmail
    load_shoutbox_config_from_dict: LoadShoutboxConfigFromDict
    init_logging: InitLogging


def build_production() -> AppServices:
    """Real layered config, lib_log_rich logging and the httpx/smtplib transports."""
    return AppServices(
        get_config=get_config,
        get_default_config_path=get_default_config_path,
        display_config=display_config,
        send_rest_email=send_rest_email,
        send_smtp_email=send_smtp_email,
        load_shoutbox_config_from_dict=load_shoutbox_config_from_dict,
        init_logging=init_logging,
    )


def build_testing(*, spy: EmailSpy | None = None) -> AppServices:
    """Empty config, silent logging and an :class:`EmailSpy` in place of both transports.

    Args:
        spy: EmailSpy that records sends; a fresh one when None. Pass your
            own to assert on captured requests and messages.
    """
    from ..adapters.memory import (
        EmailSpy,
        display_config_in_memory,
        get_config_in_memory,
        get_default_config_path_in_memory,
        init_logging_in_memory,
        load_shoutbox_config_from_dict_in_memory,
    )

    email_spy = spy if spy is not None else EmailSpy()

    return AppServices(
        get_config=get_config_in_memory,
        get_default_config_path=get_default_config_path_in_memory,
        display_config=display_config_in_memory,
        send_rest_email=email_spy.send_rest_email,
        send_smtp_email=email_spy.send_smtp_email,
        load_shoutbox_config_from_dict=load_shoutbox_config_from_dict_in_memory,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    # Configuration
    "display_config",
    "get_config",
    "get_default_config_path",
    # Email
    "load_shoutbox_config_from_dict",
    "send_rest_email",
    "send_smtp_email",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
