"""Listing, reading and changing configuration settings by dotted key."""

from __future__ import annotations

import copy
import dataclasses
from typing import Any, Sequence

from vfox.config import CacheDuration, Config, default_config, parse_duration

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


def _format(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_section(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _find_field(section: Any, key: str) -> dataclasses.Field | None:
    for f in dataclasses.fields(section):
        if f.metadata.get("yaml") == key:
            return f
    return None


def _parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    return False


def _field_kind(section: Any, f: dataclasses.Field) -> Any:
    if isinstance(f.type, type):
        return f.type
    return type(getattr(section, f.name))


def config_list(config: Any, prefix: str = "") -> list[str]:
    """Return ``key = value`` lines for every setting, keys joined with dots."""
    lines: list[str] = []
    for f in dataclasses.fields(config):
        key = f.metadata.get("yaml", f.name)
        value = getattr(config, f.name)
        if _is_section(value):
            lines.extend(config_list(value, f"{prefix}{key}."))
        else:
            lines.append(f"{prefix}{key} = {_format(value)}")
    return lines


def config_get(config: Config, keys: Sequence[str]) -> list[str]:
    """Return the lines describing the setting or section at ``keys``.

    A missing key gives an empty list.
    """
    current: Any = config
    found = 0
    for key in keys:
        if not _is_section(current):
            break
        f = _find_field(current, key)
        if f is not None:
            current = getattr(current, f.name)
            found += 1
    if found != len(keys):
        return []
    if _is_section(current):
        return config_list(current, ".".join(keys) + ".")
    return [_format(current)]


def config_set(config: Any, keys: Sequence[str], value: Any) -> None:
    """Set the setting at ``keys`` from ``value``; unknown keys are ignored.

    Raises ValueError for values that cannot be parsed and when a section
    is given a plain string, TypeError for unsupported settings.
    """
    if not keys:
        raise ValueError("no configuration key given")
    key = keys[0]
    if not _is_section(config):
        raise ValueError(f"{key} is not inside a section")
    f = _find_field(config, key)
    if f is None:
        return
    if len(keys) > 1:
        config_set(getattr(config, f.name), keys[1:], value)
        return

    kind = _field_kind(config, f)
    if kind is str:
        setattr(config, f.name, _format(value))
    elif kind is bool:
        setattr(config, f.name, _parse_bool(_format(value)))
    elif kind is CacheDuration:
        text = _format(value)
        if text == "-1":
            setattr(config, f.name, CacheDuration(-1))
        else:
            setattr(config, f.name, CacheDuration(parse_duration(text.lower())))
    elif kind is int:
        setattr(config, f.name, int(_format(value)))
    elif isinstance(kind, type) and dataclasses.is_dataclass(kind):
        if isinstance(value, str):
            raise ValueError(f"key does not contain a section: {key}")
        if not isinstance(value, kind):
            raise TypeError(f"cannot use {value!r} as section {key}")
        setattr(config, f.name, copy.deepcopy(value))
    else:
        raise TypeError("unsupported configuration type")


def default_value(keys: Sequence[str]) -> Any:
    """Return the default setting or section found by walking ``keys``."""
    current: Any = default_config()
    for key in keys:
        if not _is_section(current):
            break
        f = _find_field(current, key)
        if f is not None:
            current = getattr(current, f.name)
    return current