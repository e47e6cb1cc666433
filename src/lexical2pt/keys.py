"""Key generation for Portable Text blocks, spans and mark definitions."""

from __future__ import annotations

import random
import string
import threading

from lexical2pt.config import LEXICAL2PT_KEY_SALT_LENGTH

_SALT_ALPHABET = string.ascii_lowercase + string.digits


class KeyGenerator:
    """Produce process-unique keys from a counter plus a short random salt.

    Keys are only guaranteed to be unique among keys issued by the same
    generator since its last reset. Consumers must not rely on ordering.
    """

    def __init__(self, salt_length: int = LEXICAL2PT_KEY_SALT_LENGTH) -> None:
        if salt_length < 0:
            raise ValueError(f"salt_length must be >= 0, got {salt_length}")
        self.salt_length = salt_length
        self._counter = 0
        self._lock = threading.Lock()

    def next_key(self) -> str:
        with self._lock:
            self._counter += 1
            count = self._counter
        salt = "".join(random.choices(_SALT_ALPHABET, k=self.salt_length))
        return f"{salt}{count}"

    def reset(self) -> None:
        with self._lock:
            self._counter = 0

    @property
    def issued(self) -> int:
        """Number of keys issued since the last reset."""
        return self._counter


_default_generator = KeyGenerator()


def default_key_generator() -> KeyGenerator:
    """Return the process-wide generator used when none is injected."""
    return _default_generator


def reset_key_counter() -> None:
    """Reset the process-wide key counter (for deterministic tests)."""
    _default_generator.reset()
