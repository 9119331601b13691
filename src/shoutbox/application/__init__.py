"""Application layer - port definitions consumed by the CLI and composition root."""

from __future__ import annotations

from .ports import (
    DisplayConfig,
    GetConfig,
    GetDefaultConfigPath,
    InitLogging,
    LoadShoutboxConfigFromDict,
    SendRestEmail,
    SendSmtpEmail,
)

__all__ = [
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadShoutboxConfigFromDict",
    "SendRestEmail",
    "SendSmtpEmail",
]
