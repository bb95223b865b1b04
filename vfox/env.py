"""Environment variables and PATH handling for activated SDKs."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator

from vfox import logger

HOOK_FLAG = "__VFOX_SHELL"
PID_FLAG = "__VFOX_PID"


def is_hook_env() -> bool:
    """Return whether the current process runs inside a hooked shell."""
    return os.environ.get(HOOK_FLAG, "") != ""


def get_pid() -> int:
    """Return the pid of the hooked shell, falling back to the parent pid."""
    pid = os.environ.get(PID_FLAG, "")
    if pid:
        try:
            return int(pid)
        except ValueError:
            return 0
    return os.getppid()


class PathFrom(Enum):
    """Where the initial entries of a :class:`Paths` come from."""

    EMPTY_PATHS = 0
    OS_PATHS = 1


def _is_executable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


class Paths:
    """An ordered set of PATH entries, kept in insertion order."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries: dict[str, None] = {}
        for entry in entries:
            self.add(entry)

    def add(self, path: str) -> bool:
        """Add an entry; return False if it was already present."""
        if path in self._entries:
            return False
        self._entries[path] = None
        return True

    def slice(self) -> list[str]:
        """Return the entries as a list, in insertion order."""
        return list(self._entries)

    def merge(self, other: Paths) -> Paths:
        """Add every entry of ``other`` to this set and return this set."""
        for path in other:
            self.add(path)
        return self

    def to_bin_paths(self) -> Paths:
        """Return the executable files found directly inside each entry."""
        bins = Paths()
        for path in self:
            try:
                with os.scandir(path) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except OSError as exc:
                logger.debugf("Failed to read bin paths:%s: %s", path, exc)
                raise OSError(f"failed to read bin paths:{path}: {exc}") from exc
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    continue
                file = os.path.join(path, entry.name)
                if _is_executable(file):
                    bins.add(file)
        return bins

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __str__(self) -> str:
        return ":".join(self._entries)

    def __repr__(self) -> str:
        return f"Paths({self.slice()!r})"


def new_paths(source: PathFrom = PathFrom.EMPTY_PATHS) -> Paths:
    """Create a :class:`Paths`, filled from the PATH variable for OS_PATHS."""
    if source is PathFrom.OS_PATHS:
        return Paths(os.environ.get("PATH", "").split(os.pathsep))
    return Paths()


@dataclass
class Envs:
    """Environment variables together with PATH entries."""

    variables: dict[str, str | None] = field(default_factory=dict)
    bin_paths: Paths = field(default_factory=Paths)
    paths: Paths = field(default_factory=Paths)


class EnvManager:
    """Collects variable and PATH changes and applies them to this process."""

    def __init__(self) -> None:
        self._env: dict[str, str] = {}
        self._deleted_env: dict[str, None] = {}
        self._paths: dict[str, None] = {}
        self._deleted_paths: dict[str, None] = {}

    def load(self, envs: Envs) -> None:
        """Record the variables and PATH entries of ``envs``."""
        for key, value in envs.variables.items():
            if value is None:
                raise ValueError(f"variable {key} has no value")
            self._env[key] = value
        for path in envs.paths:
            self._paths.setdefault(path, None)

    def remove(self, envs: Envs) -> None:
        """Mark the variables and PATH entries of ``envs`` for removal."""
        for key in envs.variables:
            if key == "PATH":
                raise ValueError("can not remove PATH variable")
            self._env.pop(key, None)
            self._deleted_env[key] = None
        for path in envs.paths:
            if path in self._paths:
                del self._paths[path]
                self._deleted_paths[path] = None

    def flush(self) -> None:
        """Apply the recorded changes to ``os.environ``."""
        for key in self._deleted_env:
            os.environ.pop(key, None)
        for key, value in self._env.items():
            os.environ[key] = value
        new_paths_list = list(self._paths)
        for path in os.environ.get("PATH", "").split(":"):
            if path in self._deleted_paths or path in self._paths:
                continue
            new_paths_list.append(path)
        os.environ["PATH"] = ":".join(new_paths_list)

    def get(self, key: str) -> str | None:
        """Return a recorded value; PATH gives the new entries before ``$PATH``."""
        if key == "PATH":
            return ":".join([*self._paths, "$PATH"])
        return self._env.get(key)

    def close(self) -> None:
        """Release resources; nothing is held on this platform."""

    def __enter__(self) -> EnvManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def new_env_manager(config_path: str | os.PathLike[str] | None = None) -> EnvManager:
    """Create the environment manager for this platform."""
    return EnvManager()