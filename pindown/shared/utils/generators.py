"""ID and value generators (CUID2 and Realtime Database push ids)."""

import secrets
import threading
import time

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

# Modeled after base64 web-safe chars, but ordered by ASCII so keys sort
# lexicographically in creation order.
PUSH_CHARS = "-0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


class PushIdGenerator:
    """Generate 20-character chronologically sortable push keys.

    Format matches the keys the Realtime Database SDKs produce with push():
    8 characters of millisecond timestamp followed by 12 random characters.
    Keys generated within the same millisecond increment the random part so
    ordering stays strict within one process.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last_push_time = 0
        self._last_rand_chars: list[int] = [0] * 12

    def __call__(self, now_ms: int | None = None) -> str:
        now = int(time.time() * 1000) if now_ms is None else now_ms
        with self._lock:
            duplicate_time = now == self._last_push_time
            self._last_push_time = now

            time_chars = [""] * 8
            for i in range(7, -1, -1):
                time_chars[i] = PUSH_CHARS[now % 64]
                now //= 64

            if not duplicate_time:
                self._last_rand_chars = [secrets.randbelow(64) for _ in range(12)]
            else:
                # Same millisecond: increment the random part by one.
                i = 11
                while i >= 0 and self._last_rand_chars[i] == 63:
                    self._last_rand_chars[i] = 0
                    i -= 1
                if i >= 0:
                    self._last_rand_chars[i] += 1

            rand_chars = "".join(PUSH_CHARS[c] for c in self._last_rand_chars)
        return "".join(time_chars) + rand_chars


_push_id_generator = PushIdGenerator()


def generate_push_id() -> str:
    """Return a new chronologically sortable push key (process-wide generator)."""
    return _push_id_generator()
