import pytest

from vfox.config import (
    HOUR,
    MINUTE,
    SECOND,
    CacheDuration,
    Config,
    Proxy,
    Storage,
    default_config,
    new_config,
    new_config_with_path,
    parse_cache_duration,
    parse_duration,
)

FIXTURE = """\
proxy:
  url: http://test
  enable: false
storage:
  sdkPath: /tmp
legacyVersionFile:
  enable: true
cache:
  availableHookDuration: -1
"""


@pytest.mark.parametrize(
    "duration,want",
    [(CacheDuration(-1), -1), (CacheDuration(0), 0), (CacheDuration(HOUR), "1h")],
)
def test_cache_duration_to_yaml(duration, want):
    assert duration.to_yaml() == want


@pytest.mark.parametrize(
    "value,want",
    [(-1, CacheDuration(-1)), (0, CacheDuration(0)), ("1h", CacheDuration(HOUR))],
)
def test_parse_cache_duration(value, want):
    assert parse_cache_duration(value) == want


def test_parse_cache_duration_unsupported_is_zero():
    assert parse_cache_duration(True) == 0
    assert parse_cache_duration(1.5) == 0


def test_cache_duration_str():
    assert str(CacheDuration(HOUR + 30 * MINUTE + 5 * SECOND)) == "1h30m5s"
    assert str(CacheDuration(12 * HOUR)) == "12h"
    assert str(CacheDuration(-1)) == "-1"
    assert str(CacheDuration(0)) == "0"


@pytest.mark.parametrize(
    "text,want",
    [
        ("1h30m", 90 * MINUTE),
        ("1.5h", 90 * MINUTE),
        ("-2m", -2 * MINUTE),
        ("0", 0),
        ("250ms", SECOND // 4),
    ],
)
def test_parse_duration(text, want):
    assert parse_duration(text) == want


@pytest.mark.parametrize("text", ["", "10", "1x", ".h", "h"])
def test_parse_duration_invalid(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_new_config(tmp_path):
    (tmp_path / "config.yaml").write_text(FIXTURE)
    c = new_config(tmp_path)
    assert c.proxy.url == "http://test"
    assert c.proxy.enable is False
    assert c.storage.sdk_path == "/tmp"
    assert c.legacy_version_file.enable is True
    assert c.cache.available_hook_duration == CacheDuration(-1)
    assert c.registry.address == ""


def test_config_with_empty(tmp_path):
    path = tmp_path / "empty_test.yaml"
    path.write_text("")
    c = new_config_with_path(path)
    assert c.proxy.url == ""
    assert c.proxy.enable is False
    assert c.storage.sdk_path == ""
    assert c.legacy_version_file.enable is False
    assert c.registry.address == ""
    assert c.cache.available_hook_duration == CacheDuration(12 * HOUR)


def test_missing_file_is_created_with_defaults(tmp_path):
    c = new_config(tmp_path)
    assert c == default_config()
    assert (tmp_path / "config.yaml").exists()
    assert new_config(tmp_path) == default_config()


def test_present_cache_section_without_key_is_zero(tmp_path):
    path = tmp_path / "c.yaml"
    path.write_text("cache: {}\n")
    assert new_config_with_path(path).cache.available_hook_duration == 0


def test_save_round_trip(tmp_path):
    c = Config(proxy=Proxy(url="http://proxy.example.com", enable=True))
    c.cache.available_hook_duration = CacheDuration(90 * MINUTE)
    c.save(tmp_path)
    assert new_config(tmp_path) == c


def test_non_mapping_config_rejected(tmp_path):
    path = tmp_path / "c.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        new_config_with_path(path)


def test_storage_with_write_permission(tmp_path):
    Storage(sdk_path=str(tmp_path)).validate()
    assert list(tmp_path.iterdir()) == []


def test_storage_not_a_directory(tmp_path):
    target = tmp_path / "file"
    target.write_text("x")
    with pytest.raises(NotADirectoryError):
        Storage(sdk_path=str(target)).validate()


def test_storage_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        Storage(sdk_path=str(tmp_path / "nope")).validate()