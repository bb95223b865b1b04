"""Data exchanged with plugin hooks."""

from __future__ import annotations

from dataclasses import dataclass, field

from vfox.checksum import NONE_CHECKSUM, Checksum


def _tag(name: str, default: object = "") -> object:
    if isinstance(default, list):
        return field(default_factory=list, metadata={"luai": name})
    return field(default=default, metadata={"luai": name})


@dataclass
class LuaCheckSum:
    """Checksums a plugin may report for a download."""

    sha256: str = _tag("sha256")
    sha512: str = _tag("sha512")
    sha1: str = _tag("sha1")
    md5: str = _tag("md5")

    def checksum(self) -> Checksum:
        """Pick the checksum to verify with: sha256, md5, sha1, then sha512."""
        for kind in ("sha256", "md5", "sha1", "sha512"):
            value = getattr(self, kind)
            if value:
                return Checksum(value=value, type=kind)
        return NONE_CHECKSUM


@dataclass
class AvailableHookCtx:
    args: list[str] = _tag("args", [])


@dataclass
class PreInstallHookCtx:
    version: str = _tag("version")


@dataclass
class PreUseHookResult:
    version: str = _tag("version")


@dataclass
class EnvKeysHookResultItem:
    key: str = _tag("key")
    value: str = _tag("value")


@dataclass
class ParseLegacyFileResult:
    version: str = _tag("version")


@dataclass
class LuaPluginInfo:
    """Metadata a plugin declares about itself."""

    name: str = _tag("name")
    version: str = _tag("version")
    description: str = _tag("description")
    update_url: str = _tag("updateUrl")
    manifest_url: str = _tag("manifestUrl")
    homepage: str = _tag("homepage")
    license: str = _tag("license")
    min_runtime_version: str = _tag("minRuntimeVersion")
    notes: list[str] = _tag("notes", [])
    legacy_filenames: list[str] = _tag("legacyFilenames", [])


@dataclass
class LuaRuntime:
    """Runtime information handed to plugins."""

    os_type: str = _tag("osType")
    arch_type: str = _tag("archType")
    version: str = _tag("version")
    plugin_dir_path: str = _tag("pluginDirPath")