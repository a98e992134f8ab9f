"""Round-robin rotation over the outbound API keys.

Keys are spread across upstream accounts to stay inside each account's quota.
The pool is shared by every request the process serves, so advancing the
cursor is done under a lock.
"""

from __future__ import annotations

import threading
from typing import Iterable, Literal, Sequence, Tuple

from .errors import ConfigurationError

KeyPolicy = Literal["per_request", "per_source"]
KEY_POLICIES: Tuple[str, ...] = ("per_request", "per_source")


class CredentialPool:
    """Hands out credentials in round-robin order."""

    def __init__(self, keys: Sequence[str]) -> None:
        self._keys: Tuple[str, ...] = tuple(keys)
        self._cursor = 0
        self._lock = threading.Lock()

    @classmethod
    def from_values(cls, values: Iterable[str]) -> "CredentialPool":
        """Build a pool from raw config values, dropping blanks."""
        return cls([v.strip() for v in values if v and v.strip()])

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def cursor(self) -> int:
        return self._cursor

    def next_key(self) -> str:
        """Return the key at the cursor and advance it, wrapping to 0."""
        if not self._keys:
            raise ConfigurationError("API key pool is empty; set RAPIDAPI_KEYS or KEY1..KEYn")
        with self._lock:
            key = self._keys[self._cursor]
            self._cursor = (self._cursor + 1) % len(self._keys)
        return key


def mask_credential(key: str, visible: int = 4) -> str:
    """Render a key for logs and exports without leaking it."""
    if not key:
        return ""
    if len(key) <= visible:
        return "*" * len(key)
    return "****" + key[-visible:]


def credential_label(keys: Sequence[str], expose: bool = False) -> str:
    """Audit label for the keys that served a request."""
    shown = keys if expose else [mask_credential(k) for k in keys]
    return ", ".join(shown)
