"""Time-ordered identifiers for flock-commons rows."""

import secrets
import time
import uuid

_TIMESTAMP_MASK = (1 << 48) - 1


def generate_uuid_v7() -> str:
    """
    Build an RFC 9562 version 7 UUID.

    Layout, most significant bits first: 48-bit Unix time in milliseconds,
    the version nibble, 12 random bits, the ``10`` variant, 62 random bits.
    Ids sort by creation time, so transaction and seed rows insert near the
    end of their primary key index.

    Returns:
        The canonical hyphenated string form.
    """
    unix_ms = time.time_ns() // 1_000_000
    value = (unix_ms & _TIMESTAMP_MASK) << 80
    value |= 0x7 << 76
    value |= secrets.randbits(12) << 64
    value |= 0b10 << 62
    value |= secrets.randbits(62)
    return str(uuid.UUID(int=value))
