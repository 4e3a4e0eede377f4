"""Shell variables and executable lookup."""

from __future__ import annotations

import itertools
import os
from collections.abc import Iterable, Iterator

__all__ = ["BUCKET_COUNT", "Environment", "djb2_hash", "init_env"]

BUCKET_COUNT = 100

_INT_MIN = -(1 << 31)
_INT_RANGE = 1 << 32


def _wrap_int32(value: int) -> int:
    return (value - _INT_MIN) % _INT_RANGE + _INT_MIN


def djb2_hash(key: str) -> int:
    """Return the djb2 hash of ``key`` as a signed 32-bit integer.

    The key is hashed over its UTF-8 bytes, each taken as a signed char.
    """
    value = 5381
    for byte in key.encode("utf-8"):
        signed = byte - 256 if byte >= 128 else byte
        value = _wrap_int32(value * 33 + signed)
    return value


def _bucket_of(key: str) -> int:
    return abs(djb2_hash(key)) % BUCKET_COUNT


class Environment:
    """The variables of a running shell together with its status.

    Variables are kept in a hash table of ``BUCKET_COUNT`` buckets;
    :meth:`to_envp` lists them bucket by bucket, newest first within a
    bucket.
    """

    def __init__(self, shell_pid: int | None = None, last_exit_code: int = 0) -> None:
        self.shell_pid = os.getpid() if shell_pid is None else shell_pid
        self.last_exit_code = last_exit_code
        self._values: dict[str, str] = {}
        self._order: dict[str, int] = {}
        self._counter = itertools.count()

    def get(self, key: str) -> str | None:
        """Return the value of ``key``, or None when it is unset."""
        return self._values.get(key)

    def set(self, key: str, value: str) -> bool:
        """Set ``key`` to ``value``; return True when the key is new."""
        is_new = key not in self._values
        self._values[key] = value
        if is_new:
            self._order[key] = next(self._counter)
        return is_new

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ordered_keys())

    def _ordered_keys(self) -> list[str]:
        return sorted(self._values, key=lambda k: (_bucket_of(k), -self._order[k]))

    def to_envp(self) -> list[str]:
        """Return the variables as ``KEY=VALUE`` strings."""
        return [f"{key}={self._values[key]}" for key in self._ordered_keys()]

    def find_executable(self, command: str) -> str | None:
        """Locate ``command`` on PATH.

        A command containing ``/`` is returned as it is.  Otherwise each
        non-empty PATH entry is tried in turn and the first executable
        match is returned; None when there is none or PATH is unset.
        """
        if "/" in command:
            return command
        path = self.get("PATH")
        if path is None:
            return None
        for directory in filter(None, path.split(":")):
            candidate = f"{directory}/{command}"
            if os.access(candidate, os.X_OK):
                return candidate
        return None


def init_env(envp: Iterable[str]) -> Environment:
    """Build an environment from ``KEY=VALUE`` strings.

    Each entry is split on ``=`` with empty pieces dropped; the first
    two pieces become key and value, and entries with fewer than two
    pieces are ignored.
    """
    env = Environment()
    for entry in envp:
        pieces = [piece for piece in entry.split("=") if piece]
        if len(pieces) < 2:
            continue
        env.set(pieces[0], pieces[1])
    return env