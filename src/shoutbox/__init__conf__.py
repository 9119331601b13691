"""Static package metadata surfaced to the CLI and configuration loader.

Values are kept in sync with ``pyproject.toml``; ``tests/test_metadata_sync.py``
guards against drift.

Contents:
    * Metadata constants (name, title, version, homepage, author, shell_command).
    * ``LAYEREDCONF_*`` identifiers used by lib_layered_config for path discovery.
    * :func:`print_info` - renders the metadata block for ``shoutbox info``.
"""

from __future__ import annotations

name = "shoutbox"
title = "Send transactional email through Shoutbox via REST API or SMTP"
version = "0.1.0"
homepage = "https://shoutbox.net"
author = "Shoutbox"
author_email = "support@shoutbox.net"
shell_command = "shoutbox"

#: Vendor/app/slug identifiers for lib_layered_config path resolution.
LAYEREDCONF_VENDOR = "shoutbox"
LAYEREDCONF_APP = "shoutbox"
LAYEREDCONF_SLUG = "shoutbox"


def print_info() -> None:
    """Print the summarised metadata block.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for shoutbox:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
