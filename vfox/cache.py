"""File-backed key/value cache with optional expiry."""

from __future__ import annotations

import base64
import json
import os
import threading
import time
from dataclasses import dataclass
from typing import Any

NEVER_EXPIRED = -1


def new_value(value: Any) -> bytes:
    """Encode a value as compact JSON bytes for storage in the cache."""
    return json.dumps(value, separators=(",", ":")).encode("utf-8")


def unmarshal_value(value: bytes) -> Any:
    """Decode bytes produced by :func:`new_value`."""
    return json.loads(value)


@dataclass
class _Item:
    val: bytes
    expire: int  # absolute time in nanoseconds, or NEVER_EXPIRED


class FileCache:
    """A cache kept in memory and written to a file on close."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)
        self._lock = threading.RLock()
        self._items: dict[str, _Item] = {}
        self._load()

    def _load(self) -> None:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return
        with self._lock:
            for key, item in data.items():
                self._items[key] = _Item(
                    val=base64.b64decode(item["val"]),
                    expire=int(item["expire"]),
                )

    def set(self, key: str, value: bytes | None, expire_time: float = NEVER_EXPIRED) -> None:
        """Store ``value``; ``expire_time`` is a lifetime in seconds or NEVER_EXPIRED."""
        if expire_time == NEVER_EXPIRED:
            expire = NEVER_EXPIRED
        else:
            expire = time.time_ns() + int(round(expire_time * 1_000_000_000))
        with self._lock:
            self._items[key] = _Item(val=bytes(value or b""), expire=expire)

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes, or None if absent or expired."""
        with self._lock:
            item = self._items.get(key)
            if item is None:
                return None
            if item.expire != NEVER_EXPIRED and time.time_ns() > item.expire:
                del self._items[key]
                return None
            return item.val

    def remove(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def close(self) -> None:
        """Write the cache contents to its file."""
        with self._lock:
            data = {
                key: {"val": base64.b64encode(item.val).decode("ascii"), "expire": item.expire}
                for key, item in self._items.items()
            }
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(data, fh)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __enter__(self) -> FileCache:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()