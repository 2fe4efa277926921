"""
Byte-level key arithmetic for rangesplit.

Keys are unsigned big-endian byte strings of arbitrary length. Two operations
are needed by the planner:

INCREMENT
---------
increment_key() adds 1 to a window of the key, carrying leftward:

    key = 05 12 FF FF    window = [1, 4)
    ->    05 13 00 00    overflow = False

    key = 05 FF FF       window = [1, 3)
    ->    05 00 00       overflow = True   (no finite successor)

Overflow is how the planner spells "+infinity": an inclusive upper bound of
FF FF has no exclusive successor, so the range runs to the end of the table.

GROUP-KEY ROUNDING
------------------
round_to_group_key() snaps a partition boundary onto a grouping-key boundary
so that no split cuts a group in two. With group_key_len = 1:

    05 90   ->  06 00   (byte after prefix has high bit set: round up)
    05 10   ->  05 00   (high bit clear: round down)
    FF 90   ->  None    (round up overflows: unbounded)

The high-bit test is a crude proximity guess that assumes key bytes are
spread uniformly inside a group. Skewed dimensions (e.g. calendar time)
will always round the same way. We cannot know how many rows live in a
group at planning time, so this approximation is accepted as is.
"""

from typing import Optional, Tuple

from rangesplit.constants import ROUND_UP_BIT


def increment_key(key: bytes, offset: int, length: int) -> Tuple[bytes, bool]:
    """
    Increment ``key[offset:offset + length]`` as an unsigned big-endian integer.

    Args:
        key: Key to increment (not modified)
        offset: First byte of the window
        length: Window length in bytes

    Returns:
        Tuple of (new key, overflow). On overflow the window is all zeros.
    """
    if offset < 0 or length < 0 or offset + length > len(key):
        raise ValueError(
            f"Window [{offset}, {offset + length}) is outside key of "
            f"length {len(key)}"
        )

    buf = bytearray(key)
    for i in range(offset + length - 1, offset - 1, -1):
        if buf[i] != 0xFF:
            buf[i] += 1
            return bytes(buf), False
        buf[i] = 0

    return bytes(buf), True


def round_to_group_key(key: bytes, group_key_len: int) -> Optional[bytes]:
    """
    Round a partition boundary to the nearest grouping-key boundary.

    Keys not longer than ``group_key_len`` already sit on a group boundary and
    are returned unchanged. The result keeps the length of ``key``.

    Returns:
        Rounded key, or None if rounding up overflowed (unbounded)
    """
    if group_key_len < 0:
        raise ValueError(f"group_key_len must be >= 0, got {group_key_len}")
    if len(key) <= group_key_len:
        return key

    prefix = key
    if key[group_key_len] & ROUND_UP_BIT:
        prefix, overflow = increment_key(key, 0, group_key_len)
        if overflow:
            return None

    return prefix[:group_key_len] + bytes(len(key) - group_key_len)
