from __future__ import annotations

import struct
from typing import List, Sequence

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

# Both MD5 and SHA-256 consume 64-byte blocks.
BLOCK_SIZE = 64


def u32(x: int) -> int:
    return x & MASK32


def rl(x: int, s: int) -> int:
    x &= MASK32
    return ((x << s) | (x >> (32 - s))) & MASK32


def rr(x: int, s: int) -> int:
    x &= MASK32
    return ((x >> s) | (x << (32 - s))) & MASK32


def bytes_to_words_le(block: bytes, offset: int = 0) -> List[int]:
    return list(struct.unpack_from("<16I", block, offset))


def words_to_bytes_le(words: Sequence[int]) -> bytes:
    return b"".join(u32(w).to_bytes(4, "little") for w in words)


def words_to_bytes_be(words: Sequence[int]) -> bytes:
    return b"".join(u32(w).to_bytes(4, "big") for w in words)
