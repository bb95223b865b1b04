"""Finding, naming and downloading release binaries for self-upgrade."""

from __future__ import annotations

import os
import platform
import re
import shutil
import sys
import urllib.request

TAGS_URL = "https://github.com/version-fox/vfox/tags"
RELEASE_DOWNLOAD_URL = "https://github.com/version-fox/vfox/releases/download"
COMPARE_URL = "https://github.com/version-fox/vfox/compare"

_TAG_PATTERN = re.compile(r'href="/version-fox/vfox/releases/tag/(v[0-9.]+)"')


def _opener(proxy_url: str | None) -> urllib.request.OpenerDirector:
    if proxy_url:
        handler = urllib.request.ProxyHandler({"http": proxy_url, "https": proxy_url})
        return urllib.request.build_opener(handler)
    return urllib.request.build_opener()


def parse_latest_version(html: str) -> str:
    """Return the first release tag linked from a tags page."""
    match = _TAG_PATTERN.search(html)
    if match is None:
        raise ValueError("Failed to fetch the version.")
    return match.group(1)


def fetch_latest_version(proxy_url: str | None = None) -> str:
    """Download the tags page and return the latest release tag."""
    with _opener(proxy_url).open(TAGS_URL) as resp:
        body = resp.read().decode("utf-8", errors="replace")
    return parse_latest_version(body)


def _normalize_os(os_type: str | None) -> str:
    name = (os_type or platform.system()).lower()
    return "macos" if name == "darwin" else name


def _normalize_arch(arch_type: str | None) -> str:
    arch = (arch_type or platform.machine()).lower()
    if arch == "arm64":
        return "aarch64"
    if arch == "amd64":
        return "x86_64"
    return arch


def construct_binary_name(
    tag_name: str, os_type: str | None = None, arch_type: str | None = None
) -> str:
    """Return the archive name of a release for the given (or current) platform."""
    os_name = _normalize_os(os_type)
    arch = _normalize_arch(arch_type)
    ext = "zip" if os_name == "windows" else "tar.gz"
    return f"vfox_{tag_name[1:]}_{os_name}_{arch}.{ext}"


def generate_urls(
    current_version: str,
    tag_name: str,
    os_type: str | None = None,
    arch_type: str | None = None,
) -> tuple[str, str]:
    """Return the binary download URL and the URL of the changes since ``current_version``."""
    file_name = construct_binary_name(tag_name, os_type, arch_type)
    bin_url = f"{RELEASE_DOWNLOAD_URL}/{tag_name}/{file_name}"
    diff_url = f"{COMPARE_URL}/{current_version}...{tag_name}"
    return bin_url, diff_url


def download_file(
    url: str, path: str | os.PathLike[str], proxy_url: str | None = None
) -> None:
    """Save the resource at ``url`` to ``path``."""
    with open(path, "wb") as out:
        with _opener(proxy_url).open(url) as resp:
            shutil.copyfileobj(resp, out)


def request_permission() -> None:
    """Check that the running executable may be replaced.

    Raises PermissionError when the directory holding it is not writable.
    """
    exe_dir = os.path.dirname(os.path.abspath(sys.argv[0] or sys.executable))
    if not os.access(exe_dir, os.W_OK):
        raise PermissionError(f"no permission to write to {exe_dir}")