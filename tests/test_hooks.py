import hashlib

import pytest

from vfox.checksum import NONE_CHECKSUM
from vfox.hooks import (
    AvailableHookCtx,
    LuaCheckSum,
    LuaPluginInfo,
    LuaRuntime,
)
from vfox.luai import LuaTable, marshal, unmarshal


def test_checksum_none_when_empty():
    assert LuaCheckSum().checksum() is NONE_CHECKSUM


@pytest.mark.parametrize("kind", ["sha256", "sha512", "sha1", "md5"])
def test_checksum_single_kind(kind):
    result = LuaCheckSum(**{kind: "abc123"}).checksum()
    assert result.type == kind
    assert result.value == "abc123"


def test_checksum_priority_sha256_first():
    result = LuaCheckSum(sha256="s256", sha512="s512", sha1="s1", md5="m5").checksum()
    assert (result.type, result.value) == ("sha256", "s256")


def test_checksum_priority_md5_before_sha1_and_sha512():
    result = LuaCheckSum(sha512="s512", sha1="s1", md5="m5").checksum()
    assert (result.type, result.value) == ("md5", "m5")


def test_checksum_priority_sha1_before_sha512():
    result = LuaCheckSum(sha512="s512", sha1="s1").checksum()
    assert (result.type, result.value) == ("sha1", "s1")


def test_checksum_verifies_file(tmp_path):
    target = tmp_path / "f.bin"
    target.write_bytes(b"content")
    digest = hashlib.sha256(b"content").hexdigest()
    assert LuaCheckSum(sha256=digest).checksum().verify(target) is True
    assert LuaCheckSum(sha256="bad").checksum().verify(target) is False


def test_plugin_info_tags():
    table = marshal(LuaPluginInfo())
    keys = set(table)
    assert {"minRuntimeVersion", "legacyFilenames", "updateUrl"} <= keys


def test_plugin_info_decodes_from_tags():
    table = LuaTable({"minRuntimeVersion": "0.3.0", "updateUrl": "https://example.com/p.lua"})
    info = unmarshal(table, LuaPluginInfo)
    assert info.min_runtime_version == "0.3.0"
    assert info.update_url == "https://example.com/p.lua"


def test_runtime_tags():
    table = marshal(LuaRuntime())
    assert list(table) == ["osType", "archType", "version", "pluginDirPath"]


def test_list_defaults_are_independent():
    first = AvailableHookCtx()
    second = AvailableHookCtx()
    first.args.append("x")
    assert second.args == []
    info = LuaPluginInfo()
    assert info.notes == [] and info.legacy_filenames == []