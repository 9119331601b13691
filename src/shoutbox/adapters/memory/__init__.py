"""In-memory adapter implementations for testing.

Provides lightweight implementations of all application ports that operate
entirely in memory -- no filesystem, no network, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.email` - In-memory email adapters (EmailSpy class)
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    display_config_in_memory,
    get_config_in_memory,
    get_default_config_path_in_memory,
)
from .email import (
    EmailSpy,
    load_shoutbox_config_from_dict_in_memory,
)
from .logging import init_logging_in_memory

# Static conformance assertions
if TYPE_CHECKING:
    from shoutbox.application.ports import (
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadShoutboxConfigFromDict,
        SendRestEmail,
        SendSmtpEmail,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_load_shoutbox_config: LoadShoutboxConfigFromDict = load_shoutbox_config_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_send_rest: SendRestEmail = EmailSpy().send_rest_email
    _assert_send_smtp: SendSmtpEmail = EmailSpy().send_smtp_email

__all__ = [
    "EmailSpy",
    "display_config_in_memory",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
    "init_logging_in_memory",
    "load_shoutbox_config_from_dict_in_memory",
]
