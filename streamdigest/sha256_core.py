from __future__ import annotations

import struct
from typing import Tuple

from .core import BLOCK_SIZE, MASK32, rr

State8 = Tuple[int, int, int, int, int, int, int, int]

# FIPS 180-4 section 5.3.3
IV256: State8 = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)

# FIPS 180-4 section 5.3.2
IV224: State8 = (
    0xC1059ED8, 0x367CD507, 0x3070DD17, 0xF70E5939,
    0xFFC00B31, 0x68581511, 0x64F98FA7, 0xBEFA4FA4,
)

K: Tuple[int, ...] = (
    0x428a2f98, 0x71374491, 0xb5c0fbcf, 0xe9b5dba5,
    0x3956c25b, 0x59f111f1, 0x923f82a4, 0xab1c5ed5,
    0xd807aa98, 0x12835b01, 0x243185be, 0x550c7dc3,
    0x72be5d74, 0x80deb1fe, 0x9bdc06a7, 0xc19bf174,
    0xe49b69c1, 0xefbe4786, 0x0fc19dc6, 0x240ca1cc,
    0x2de92c6f, 0x4a7484aa, 0x5cb0a9dc, 0x76f988da,
    0x983e5152, 0xa831c66d, 0xb00327c8, 0xbf597fc7,
    0xc6e00bf3, 0xd5a79147, 0x06ca6351, 0x14292967,
    0x27b70a85, 0x2e1b2138, 0x4d2c6dfc, 0x53380d13,
    0x650a7354, 0x766a0abb, 0x81c2c92e, 0x92722c85,
    0xa2bfe8a1, 0xa81a664b, 0xc24b8b70, 0xc76c51a3,
    0xd192e819, 0xd6990624, 0xf40e3585, 0x106aa070,
    0x19a4c116, 0x1e376c08, 0x2748774c, 0x34b0bcb5,
    0x391c0cb3, 0x4ed8aa4a, 0x5b9cca4f, 0x682e6ff3,
    0x748f82ee, 0x78a5636f, 0x84c87814, 0x8cc70208,
    0x90befffa, 0xa4506ceb, 0xbef9a3f7, 0xc67178f2,
)


def message_schedule(block: bytes, offset: int = 0) -> list:
    w = list(struct.unpack_from(">16I", block, offset))
    for i in range(16, 64):
        x = w[i - 15]
        y = w[i - 2]
        s0 = rr(x, 7) ^ rr(x, 18) ^ (x >> 3)
        s1 = rr(y, 17) ^ rr(y, 19) ^ (y >> 10)
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & MASK32)
    return w


def compress_block(h: State8, block: bytes, offset: int = 0) -> State8:
    w = message_schedule(block, offset)
    a, b, c, d, e, f, g, hh = h
    for i in range(64):
        s1 = rr(e, 6) ^ rr(e, 11) ^ rr(e, 25)
        ch = (e & f) ^ (~e & g)
        t1 = (hh + s1 + ch + K[i] + w[i]) & MASK32
        s0 = rr(a, 2) ^ rr(a, 13) ^ rr(a, 22)
        maj = (a & b) ^ (a & c) ^ (b & c)
        t2 = (s0 + maj) & MASK32
        hh, g, f, e = g, f, e, (d + t1) & MASK32
        d, c, b, a = c, b, a, (t1 + t2) & MASK32
    return (
        (h[0] + a) & MASK32,
        (h[1] + b) & MASK32,
        (h[2] + c) & MASK32,
        (h[3] + d) & MASK32,
        (h[4] + e) & MASK32,
        (h[5] + f) & MASK32,
        (h[6] + g) & MASK32,
        (h[7] + hh) & MASK32,
    )


def process_blocks(h: State8, data: bytes) -> State8:
    for off in range(0, len(data) - len(data) % BLOCK_SIZE, BLOCK_SIZE):
        h = compress_block(h, data, off)
    return h
