"""Values shared by the ``shoutbox`` command group and its subcommands."""

from __future__ import annotations

from typing import Final

#: ``-h`` works everywhere ``--help`` does.
CLICK_CONTEXT_SETTINGS: Final[dict[str, list[str]]] = {"help_option_names": ["-h", "--help"]}

#: Environment variable consulted by ``--api-key`` before ``shoutbox.api_key``.
API_KEY_ENVVAR: Final[str] = "SHOUTBOX_API_KEY"

#: Characters of traceback printed without and with ``--traceback``.
TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

__all__ = [
    "API_KEY_ENVVAR",
    "CLICK_CONTEXT_SETTINGS",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
]
