import time

import pytest

from vfox.cache import NEVER_EXPIRED, FileCache, new_value, unmarshal_value


@pytest.fixture
def cache_path(tmp_path):
    return tmp_path / "testfile.cache"


@pytest.fixture
def sample_data():
    return [
        ("test1", b"test1"),
        ("test2", new_value(True)),
        ("test3", new_value(123)),
        ("test4", new_value(ord("c"))),
        ("test5", None),
    ]


def test_simple_type(cache_path, sample_data):
    cache = FileCache(cache_path)
    for key, value in sample_data:
        cache.set(key, value, NEVER_EXPIRED)
    for key, value in sample_data:
        got = cache.get(key)
        assert got is not None
        assert got == (value or b"")


def test_struct_type(cache_path):
    cache = FileCache(cache_path)
    td1 = {"V1": "test", "V2": 123, "V3": True}
    cache.set("test5", new_value(td1), NEVER_EXPIRED)
    got = cache.get("test5")
    assert unmarshal_value(got) == td1


def test_expire(cache_path):
    cache = FileCache(cache_path)
    cache.set("keep", b"1", NEVER_EXPIRED)
    before = len(cache)
    cache.set("test6", new_value("123"), 0.05)
    time.sleep(0.2)
    assert cache.get("test6") is None
    assert len(cache) == before


def test_not_yet_expired(cache_path):
    cache = FileCache(cache_path)
    cache.set("fresh", b"v", 60)
    assert cache.get("fresh") == b"v"


def test_remove(cache_path):
    cache = FileCache(cache_path)
    cache.set("test7", new_value("123"), NEVER_EXPIRED)
    cache.remove("test7")
    assert cache.get("test7") is None


def test_missing_key(cache_path):
    assert FileCache(cache_path).get("nothing") is None


def test_to_file(cache_path, sample_data):
    cache = FileCache(cache_path)
    for key, value in sample_data:
        cache.set(key, value, NEVER_EXPIRED)
    cache.close()

    reloaded = FileCache(cache_path)
    for key, value in sample_data:
        assert reloaded.get(key) == (value or b"")


def test_context_manager_saves(cache_path):
    with FileCache(cache_path) as cache:
        cache.set("name", b"1.2.3")
    assert FileCache(cache_path).get("name") == b"1.2.3"


def test_new_value_is_compact_json():
    assert new_value({"a": 1}) == b'{"a":1}'
    assert unmarshal_value(new_value([1, "x", None])) == [1, "x", None]