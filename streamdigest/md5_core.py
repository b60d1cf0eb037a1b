from __future__ import annotations

import struct
from typing import List, Tuple

from .core import BLOCK_SIZE, MASK32, rl

State4 = Tuple[int, int, int, int]

# MD5 initial value (A, B, C, D) from RFC 1321
IV: State4 = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)

# AC constants (MD5 T[1..64]) from RFC 1321
AC: List[int] = [
    0xd76aa478, 0xe8c7b756, 0x242070db, 0xc1bdceee,
    0xf57c0faf, 0x4787c62a, 0xa8304613, 0xfd469501,
    0x698098d8, 0x8b44f7af, 0xffff5bb1, 0x895cd7be,
    0x6b901122, 0xfd987193, 0xa679438e, 0x49b40821,
    0xf61e2562, 0xc040b340, 0x265e5a51, 0xe9b6c7aa,
    0xd62f105d, 0x02441453, 0xd8a1e681, 0xe7d3fbc8,
    0x21e1cde6, 0xc33707d6, 0xf4d50d87, 0x455a14ed,
    0xa9e3e905, 0xfcefa3f8, 0x676f02d9, 0x8d2a4c8a,
    0xfffa3942, 0x8771f681, 0x6d9d6122, 0xfde5380c,
    0xa4beea44, 0x4bdecfa9, 0xf6bb4b60, 0xbebfbc70,
    0x289b7ec6, 0xeaa127fa, 0xd4ef3085, 0x04881d05,
    0xd9d4d039, 0xe6db99e5, 0x1fa27cf8, 0xc4ac5665,
    0xf4292244, 0x432aff97, 0xab9423a7, 0xfc93a039,
    0x655b59c3, 0x8f0ccc92, 0xffeff47d, 0x85845dd1,
    0x6fa87e4f, 0xfe2ce6e0, 0xa3014314, 0x4e0811a1,
    0xf7537e82, 0xbd3af235, 0x2ad7d2bb, 0xeb86d391,
]

# RC rotation counts (per step)
RC: List[int] = (
    [7, 12, 17, 22] * 4
    + [5, 9, 14, 20] * 4
    + [4, 11, 16, 23] * 4
    + [6, 10, 15, 21] * 4
)


def wt_index(t: int) -> int:
    if 0 <= t < 16:
        return t
    if 16 <= t < 32:
        return (5 * t + 1) % 16
    if 32 <= t < 48:
        return (3 * t + 5) % 16
    if 48 <= t < 64:
        return (7 * t) % 16
    raise ValueError("t out of range")


# Message word read at each step
G: List[int] = [wt_index(t) for t in range(64)]


def compress_block(ihv: State4, block: bytes, offset: int = 0) -> State4:
    """Run the 64 MD5 steps over one block and feed forward into ``ihv``.

    ``block`` is any bytes-like object; the 64 bytes starting at ``offset``
    are read as sixteen little-endian words.
    """
    m = struct.unpack_from("<16I", block, offset)
    a0, b0, c0, d0 = ihv
    a, b, c, d = a0, b0, c0, d0
    for t in range(64):
        if t < 16:
            f = d ^ (b & (c ^ d))
        elif t < 32:
            f = c ^ (d & (b ^ c))
        elif t < 48:
            f = b ^ c ^ d
        else:
            f = c ^ (b | (~d & MASK32))
        tmp = (a + f + AC[t] + m[G[t]]) & MASK32
        tmp = (rl(tmp, RC[t]) + b) & MASK32
        a, d, c, b = d, c, b, tmp
    return (
        (a0 + a) & MASK32,
        (b0 + b) & MASK32,
        (c0 + c) & MASK32,
        (d0 + d) & MASK32,
    )


def process_blocks(ihv: State4, data: bytes) -> State4:
    # len(data) is a whole number of blocks
    for off in range(0, len(data) - len(data) % BLOCK_SIZE, BLOCK_SIZE):
        ihv = compress_block(ihv, data, off)
    return ihv
