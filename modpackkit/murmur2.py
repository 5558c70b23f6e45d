"""MurmurHash2 and the whitespace-stripping fingerprint used for CurseForge files."""

from __future__ import annotations

_M = 0x5BD1E995
_R = 24
_MASK = 0xFFFFFFFF
_WHITESPACE = frozenset(b"\t\n\r ")


def murmur_hash2(data: bytes, seed: int) -> int:
    """Return the 32-bit MurmurHash2 of ``data`` with the given seed."""
    data = bytes(data)
    length = len(data)
    h = (seed ^ length) & _MASK
    tail_start = length - (length & 3)
    for offset in range(0, tail_start, 4):
        k = int.from_bytes(data[offset:offset + 4], "little")
        k = (k * _M) & _MASK
        k ^= k >> _R
        k = (k * _M) & _MASK
        h = (h * _M) & _MASK
        h ^= k
    tail = data[tail_start:]
    if tail:
        if len(tail) >= 3:
            h ^= tail[2] << 16
        if len(tail) >= 2:
            h ^= tail[1] << 8
        h ^= tail[0]
        h = (h * _M) & _MASK
    h ^= h >> 13
    h = (h * _M) & _MASK
    h ^= h >> 15
    return h


def normalize(data: bytes) -> bytes:
    """Strip tab, newline, carriage return and space bytes."""
    return bytes(b for b in bytes(data) if b not in _WHITESPACE)


def fingerprint(data: bytes) -> int:
    """Return the CurseForge fingerprint of a file's contents."""
    return murmur_hash2(normalize(data), 1)


class Murmur2CF:
    """Hash object producing the CurseForge fingerprint.

    The hash is seeded with the input length, so input is buffered
    until a digest is requested.
    """

    name = "murmur2"
    digest_size = 4
    block_size = 4

    def __init__(self, data: bytes = b"") -> None:
        self._buf = bytearray()
        if data:
            self.update(data)

    def update(self, data: bytes) -> None:
        """Add bytes to the hash, dropping whitespace."""
        self._buf.extend(normalize(data))

    def intdigest(self) -> int:
        """Return the fingerprint as an unsigned 32-bit integer."""
        return murmur_hash2(bytes(self._buf), 1)

    def digest(self) -> bytes:
        """Return the fingerprint as four big-endian bytes."""
        return self.intdigest().to_bytes(4, "big")

    def hexdigest(self) -> str:
        return self.digest().hex()

    def reset(self) -> None:
        """Discard all buffered input."""
        self._buf.clear()