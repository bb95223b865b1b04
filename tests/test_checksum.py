import pytest

from vfox.checksum import NONE_CHECKSUM, Checksum

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
EMPTY_MD5 = "d41d8cd98f00b204e9800998ecf8427e"
EMPTY_SHA1 = "da39a3ee5e6b4b0d3255bfef95601890afd80709"


@pytest.fixture
def empty_file(tmp_path):
    path = tmp_path / "empty.bin"
    path.write_bytes(b"")
    return path


@pytest.mark.parametrize(
    "kind,value",
    [("sha256", EMPTY_SHA256), ("md5", EMPTY_MD5), ("sha1", EMPTY_SHA1)],
)
def test_known_digest_matches(empty_file, kind, value):
    assert Checksum(value, kind).verify(empty_file) is True


def test_uppercase_digest_does_not_match(empty_file):
    assert Checksum(EMPTY_SHA256.upper(), "sha256").verify(empty_file) is False


def test_wrong_digest_fails(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(b"payload")
    assert Checksum(EMPTY_SHA256, "sha256").verify(path) is False
    assert Checksum(EMPTY_MD5, "sha512").verify(path) is False


def test_unknown_type_fails(empty_file):
    assert Checksum(EMPTY_SHA256, "crc32").verify(empty_file) is False


def test_none_checksum_skips_with_warning(empty_file, capsys):
    assert NONE_CHECKSUM.verify(empty_file) is True
    assert "WARNING" in capsys.readouterr().out


def test_missing_file_fails_even_for_none(tmp_path):
    missing = tmp_path / "missing.bin"
    assert NONE_CHECKSUM.verify(missing) is False
    assert Checksum(EMPTY_SHA256, "sha256").verify(missing) is False