"""``--set SECTION.KEY=VALUE`` overrides applied on top of the loaded Config.

Used for one-off tweaks such as ``--set shoutbox.smtp_port=2525`` without
editing a configuration file.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

OverrideValue = str | int | float | bool | None | list[object] | dict[str, object]


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """One parsed ``--set`` argument."""

    section: str
    key_path: tuple[str, ...]
    value: OverrideValue


def parse_override(raw: str) -> ConfigOverride:
    """Parse ``SECTION.KEY[.SUBKEY...]=VALUE``.

    Everything before the first ``=`` is the dotted path; its first component
    is the section. The value goes through :func:`coerce_value`.

    Raises:
        ValueError: Missing ``=``, no dot in the path, or an empty component.

    Examples:
        >>> parse_override("shoutbox.smtp_port=2525")
        ConfigOverride(section='shoutbox', key_path=('smtp_port',), value=2525)
        >>> parse_override("shoutbox.base_url=http://localhost:8080").value
        'http://localhost:8080'
    """
    path_part, sep, value_str = raw.partition("=")
    if not sep:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")

    section, dot, key_str = path_part.partition(".")
    if not dot:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")
    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")

    key_path = tuple(key_str.split("."))
    if not all(key_path):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")

    return ConfigOverride(section=section, key_path=key_path, value=coerce_value(value_str))


def coerce_value(raw: str) -> OverrideValue:
    """Decode ``raw`` as JSON, keeping it as a plain string when that fails.

    Examples:
        >>> coerce_value("false")
        False
        >>> coerce_value("12.5")
        12.5
        >>> coerce_value('["ops@example.com"]')
        ['ops@example.com']
        >>> coerce_value("mail.example.com")
        'mail.example.com'
        >>> coerce_value("")
        ''
    """
    if not raw:
        return ""
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return raw


def _nest_override(target: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    node: dict[str, object] = target.setdefault(override.section, {})
    for part in override.key_path[:-1]:
        existing = node.setdefault(part, {})
        if not isinstance(existing, dict):
            raise TypeError(f"Expected dict at key {part!r}, got {type(existing).__name__}")
        node = cast("dict[str, object]", existing)
    node[override.key_path[-1]] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Return ``config`` with every ``--set`` value deep-merged in.

    The original Config is returned unchanged when there are no overrides.

    Raises:
        ValueError: If any override string is malformed.

    Example:
        >>> cfg = Config({"shoutbox": {"timeout": 30.0}}, {})
        >>> apply_overrides(cfg, ("shoutbox.timeout=5",))["shoutbox"]["timeout"]
        5
    """
    if not raw_overrides:
        return config

    overrides: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _nest_override(overrides, parse_override(raw))
    return config.with_overrides(overrides)


__all__ = [
    "ConfigOverride",
    "OverrideValue",
    "apply_overrides",
    "coerce_value",
    "parse_override",
]
