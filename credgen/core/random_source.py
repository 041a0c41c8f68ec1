from __future__ import annotations

import os
import secrets


def secure_random_bytes(nbytes: int) -> bytes:
    """Read exactly `nbytes` from the OS CSPRNG, raising OSError on any failure."""
    if nbytes < 0:
        raise ValueError("byte count must be >= 0")
    try:
        data = os.urandom(nbytes)
    except (NotImplementedError, OSError) as exc:
        raise OSError(f"OS CSPRNG failure requesting {nbytes} byte(s): {exc}") from exc
    if len(data) != nbytes:
        raise OSError(f"OS CSPRNG returned unexpected byte count ({len(data)} != {nbytes})")
    return data


def assert_csprng_ready() -> None:
    secure_random_bytes(1)


def random_below(upper: int) -> int:
    if upper <= 0:
        raise ValueError("upper bound must be > 0")
    return secrets.randbelow(upper)
