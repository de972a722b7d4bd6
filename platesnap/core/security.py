"""Password hashing compatible with hashes already stored in the admins collection."""

from __future__ import annotations

import struct

_UINT32 = 0x1_0000_0000
_INT32_MAX = 0x7FFF_FFFF


def _utf16_units(value: str) -> list[int]:
    """Return UTF-16 code units, so astral characters count as surrogate pairs."""
    raw = value.encode("utf-16-le", errors="surrogatepass")
    return [unit for (unit,) in struct.iter_unpack("<H", raw)]


def _to_int32(value: int) -> int:
    value %= _UINT32
    return value - _UINT32 if value > _INT32_MAX else value


def simple_hash(password: str) -> str:
    """Fold a string into a signed 32-bit rolling hash rendered as hex.

    ``h = h * 31 + unit`` with 32-bit wraparound; negative results keep their
    sign (``-1a2b``). This is NOT a password hashing function: there is no
    salt and short inputs are trivially brute-forced. It is kept only so that
    existing ``passwordHash`` values keep verifying.
    """
    acc = 0
    for unit in _utf16_units(password):
        acc = _to_int32(acc * 31 + unit)
    return format(acc, "x")


def verify_simple_hash(password: str, stored_hash: str) -> bool:
    """Return whether ``password`` folds to ``stored_hash``."""
    return simple_hash(password) == (stored_hash or "")
