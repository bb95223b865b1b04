"""User configuration stored as YAML in the vfox home directory."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, fields
from typing import Any

import yaml

FILENAME = "config.yaml"

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

_UNITS = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "\u00b5s": MICROSECOND,
    "\u03bcs": MICROSECOND,
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}
_COMPONENT = re.compile(r"(\d*)(?:\.(\d*))?([^\d.]+)")


def parse_duration(text: str) -> int:
    """Parse a duration such as ``1h30m`` or ``1.5s`` into nanoseconds."""
    rest = text
    sign = 1
    if rest[:1] in ("+", "-"):
        sign = -1 if rest[0] == "-" else 1
        rest = rest[1:]
    if rest == "0":
        return 0
    if not rest:
        raise ValueError(f'time: invalid duration "{text}"')
    total = 0
    pos = 0
    while pos < len(rest):
        match = _COMPONENT.match(rest, pos)
        if match is None or (not match.group(1) and not match.group(2)):
            raise ValueError(f'time: invalid duration "{text}"')
        unit = _UNITS.get(match.group(3))
        if unit is None:
            raise ValueError(f'time: unknown unit "{match.group(3)}" in duration "{text}"')
        whole = int(match.group(1) or 0)
        frac = match.group(2) or ""
        total += whole * unit
        if frac:
            total += int(frac) * unit // 10 ** len(frac)
        pos = match.end()
    return sign * total


class CacheDuration(int):
    """A cache lifetime in nanoseconds: -1 never expires, 0 disables caching."""

    def __str__(self) -> str:
        if self == -1:
            return "-1"
        if self == 0:
            return "0"
        if self < 0:
            return ""
        text = ""
        hours = self // HOUR
        if hours > 0:
            text = f"{hours}h"
        minutes = (self // MINUTE) % 60
        if minutes > 0:
            text += f"{minutes}m"
        seconds = (self // SECOND) % 60
        if seconds > 0:
            text += f"{seconds}s"
        return text

    def __repr__(self) -> str:
        return f"CacheDuration({int(self)})"

    def to_yaml(self) -> int | str:
        """Value written to YAML: the special values as integers, others as text."""
        if self in (-1, 0):
            return int(self)
        return str(self)


def parse_cache_duration(value: Any) -> CacheDuration:
    """Read a duration from YAML: integers are nanoseconds, strings are parsed.

    Values of any other kind give a zero duration.
    """
    if isinstance(value, bool):
        return CacheDuration(0)
    if isinstance(value, int):
        return CacheDuration(value)
    if isinstance(value, str):
        return CacheDuration(parse_duration(value))
    return CacheDuration(0)


@dataclass
class Cache:
    available_hook_duration: CacheDuration = field(
        default=CacheDuration(12 * HOUR), metadata={"yaml": "availableHookDuration"}
    )


@dataclass
class Proxy:
    url: str = field(default="", metadata={"yaml": "url"})
    enable: bool = field(default=False, metadata={"yaml": "enable"})


@dataclass
class Storage:
    sdk_path: str = field(default="", metadata={"yaml": "sdkPath"})

    def validate(self) -> None:
        """Check that the SDK path is a writable directory; raise OSError if not."""
        if not self.sdk_path:
            return
        os.stat(self.sdk_path)
        if not os.path.isdir(self.sdk_path):
            raise NotADirectoryError(f"{self.sdk_path} is not a directory")
        probe = os.path.join(self.sdk_path, ".tmpfile")
        with open(probe, "a"):
            pass
        try:
            os.remove(probe)
        except OSError:
            pass


@dataclass
class Registry:
    address: str = field(default="", metadata={"yaml": "address"})


@dataclass
class LegacyVersionFile:
    """Whether legacy version files are parsed; disabled by default."""

    enable: bool = field(default=False, metadata={"yaml": "enable"})


@dataclass
class Config:
    proxy: Proxy = field(default_factory=Proxy, metadata={"yaml": "proxy"})
    storage: Storage = field(default_factory=Storage, metadata={"yaml": "storage"})
    registry: Registry = field(default_factory=Registry, metadata={"yaml": "registry"})
    legacy_version_file: LegacyVersionFile = field(
        default_factory=LegacyVersionFile, metadata={"yaml": "legacyVersionFile"}
    )
    cache: Cache = field(default_factory=Cache, metadata={"yaml": "cache"})

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write the configuration to ``config.yaml`` inside ``path``."""
        target = os.path.join(os.fspath(path), FILENAME)
        with open(target, "w", encoding="utf-8") as fh:
            fh.write(_dump(self))


def _section_to_dict(section: Any) -> dict[str, Any]:
    result = {}
    for f in fields(section):
        value = getattr(section, f.name)
        if isinstance(value, CacheDuration):
            value = value.to_yaml()
        result[f.metadata["yaml"]] = value
    return result


def _dump(config: Config) -> str:
    data = {f.metadata["yaml"]: _section_to_dict(getattr(config, f.name)) for f in fields(config)}
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)


def _convert(kind: type, raw: Any, key: str) -> Any:
    if kind is CacheDuration:
        return parse_cache_duration(raw)
    if kind is bool:
        if raw is None:
            return False
        if not isinstance(raw, bool):
            raise ValueError(f"cannot use {raw!r} as a boolean for {key}")
        return raw
    if raw is None:
        return ""
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, (dict, list)):
        raise ValueError(f"cannot use {raw!r} as a string for {key}")
    return str(raw)


def _section_from_yaml(cls: type, data: Any, key: str) -> Any:
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ValueError(f"section {key} must be a mapping")
    kwargs = {}
    for f in fields(cls):
        kind = type(f.default)
        yaml_key = f.metadata["yaml"]
        if yaml_key in data:
            kwargs[f.name] = _convert(kind, data[yaml_key], f"{key}.{yaml_key}")
        else:
            kwargs[f.name] = kind()
    return cls(**kwargs)


def _load(text: str) -> Config:
    raw = yaml.safe_load(text)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError("configuration must be a mapping")
    kwargs = {}
    for f in fields(Config):
        key = f.metadata["yaml"]
        kwargs[f.name] = _section_from_yaml(f.default_factory, raw.get(key), key)
    return Config(**kwargs)


def default_config() -> Config:
    """A fresh configuration with every setting at its default."""
    return Config()


def new_config_with_path(path: str | os.PathLike[str]) -> Config:
    """Load the configuration file, creating it with defaults if it is missing."""
    path = os.fspath(path)
    if not os.path.exists(path):
        config = default_config()
        try:
            with open(path, "w", encoding="utf-8") as fh:
                fh.write(_dump(config))
        except OSError:
            pass
        return config
    try:
        if os.stat(path).st_mode & 0o777 != 0o666:
            os.chmod(path, 0o666)
    except OSError:
        pass
    with open(path, "r", encoding="utf-8") as fh:
        return _load(fh.read())


def new_config(path: str | os.PathLike[str]) -> Config:
    """Load ``config.yaml`` from the directory ``path``."""
    return new_config_with_path(os.path.join(os.fspath(path), FILENAME))