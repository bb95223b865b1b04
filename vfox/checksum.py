"""Checksums of downloaded files."""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass

_ALGORITHMS = {
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
    "sha1": hashlib.sha1,
    "md5": hashlib.md5,
}


@dataclass(frozen=True)
class Checksum:
    """An expected hex digest and the name of its algorithm."""

    value: str
    type: str

    def verify(self, path: str | os.PathLike[str]) -> bool:
        """Return whether the file at ``path`` matches this checksum."""
        try:
            with open(path, "rb") as fh:
                data = fh.read()
        except OSError:
            return False
        if self.type == "none":
            print("WARNING: Checksum is not provided, skip verify...")
            return True
        algorithm = _ALGORITHMS.get(self.type)
        if algorithm is None:
            return False
        return algorithm(data).hexdigest() == self.value


NONE_CHECKSUM = Checksum(value="", type="none")