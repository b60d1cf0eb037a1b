"""
MD5 and SHA-256 block functions compiled with Numba.

They mirror ``md5_core.process_blocks`` and ``sha256_core.process_blocks``
bit for bit. Arithmetic is done on int64 values masked back to 32 bits.
"""

from __future__ import annotations

import os
from typing import Tuple

import numpy as np

from .md5_core import AC as _AC, G as _G, RC as _RC
from .sha256_core import K as _K

try:
    if os.getenv("STREAMDIGEST_NO_NUMBA") == "1":
        raise ImportError("STREAMDIGEST_NO_NUMBA=1")
    from numba import njit
except Exception:  # pragma: no cover
    njit = None


MASK32 = 0xFFFFFFFF

# Numba sometimes behaves unexpectedly when indexing numpy global arrays inside `@njit`
# functions on some platforms. Keep tuple-based copies for deterministic typing.
_MD5_AC_T = tuple(int(x) for x in _AC)
_MD5_RC_T = tuple(int(x) for x in _RC)
_MD5_G_T = tuple(int(x) for x in _G)
_SHA256_K_T = tuple(int(x) for x in _K)


def numba_available() -> bool:
    return njit is not None


if njit is not None:

    @njit(cache=True, inline="always")
    def _rol(x: int, n: int) -> int:
        return ((x << n) | (x >> (32 - n))) & MASK32

    @njit(cache=True, inline="always")
    def _ror(x: int, n: int) -> int:
        return ((x >> n) | (x << (32 - n))) & MASK32

    @njit(cache=True)
    def md5_blocks_u32(ihv: np.ndarray, data: np.ndarray) -> None:
        m = np.empty(16, dtype=np.int64)
        a0 = np.int64(ihv[0])
        b0 = np.int64(ihv[1])
        c0 = np.int64(ihv[2])
        d0 = np.int64(ihv[3])
        nblocks = data.shape[0] // 64
        for blk in range(nblocks):
            base = blk * 64
            for k in range(16):
                j = base + 4 * k
                m[k] = (
                    np.int64(data[j])
                    | (np.int64(data[j + 1]) << 8)
                    | (np.int64(data[j + 2]) << 16)
                    | (np.int64(data[j + 3]) << 24)
                )
            a = a0
            b = b0
            c = c0
            d = d0
            for i in range(64):
                if i < 16:
                    f = d ^ (b & (c ^ d))
                elif i < 32:
                    f = c ^ (d & (b ^ c))
                elif i < 48:
                    f = b ^ c ^ d
                else:
                    f = c ^ (b | (~d & MASK32))
                tmp = (a + f + _MD5_AC_T[i] + m[_MD5_G_T[i]]) & MASK32
                tmp = (_rol(tmp, _MD5_RC_T[i]) + b) & MASK32
                a, d, c, b = d, c, b, tmp
            a0 = (a0 + a) & MASK32
            b0 = (b0 + b) & MASK32
            c0 = (c0 + c) & MASK32
            d0 = (d0 + d) & MASK32
        ihv[0] = a0
        ihv[1] = b0
        ihv[2] = c0
        ihv[3] = d0

    @njit(cache=True)
    def sha256_blocks_u32(h: np.ndarray, data: np.ndarray) -> None:
        w = np.empty(64, dtype=np.int64)
        hv = np.empty(8, dtype=np.int64)
        for k in range(8):
            hv[k] = np.int64(h[k])
        nblocks = data.shape[0] // 64
        for blk in range(nblocks):
            base = blk * 64
            for k in range(16):
                j = base + 4 * k
                w[k] = (
                    (np.int64(data[j]) << 24)
                    | (np.int64(data[j + 1]) << 16)
                    | (np.int64(data[j + 2]) << 8)
                    | np.int64(data[j + 3])
                )
            for k in range(16, 64):
                x = w[k - 15]
                y = w[k - 2]
                s0 = _ror(x, 7) ^ _ror(x, 18) ^ (x >> 3)
                s1 = _ror(y, 17) ^ _ror(y, 19) ^ (y >> 10)
                w[k] = (w[k - 16] + s0 + w[k - 7] + s1) & MASK32
            a = hv[0]
            b = hv[1]
            c = hv[2]
            d = hv[3]
            e = hv[4]
            f = hv[5]
            g = hv[6]
            hh = hv[7]
            for i in range(64):
                s1 = _ror(e, 6) ^ _ror(e, 11) ^ _ror(e, 25)
                ch = (e & f) ^ ((~e & MASK32) & g)
                t1 = (hh + s1 + ch + _SHA256_K_T[i] + w[i]) & MASK32
                s0 = _ror(a, 2) ^ _ror(a, 13) ^ _ror(a, 22)
                maj = (a & b) ^ (a & c) ^ (b & c)
                t2 = (s0 + maj) & MASK32
                hh = g
                g = f
                f = e
                e = (d + t1) & MASK32
                d = c
                c = b
                b = a
                a = (t1 + t2) & MASK32
            hv[0] = (hv[0] + a) & MASK32
            hv[1] = (hv[1] + b) & MASK32
            hv[2] = (hv[2] + c) & MASK32
            hv[3] = (hv[3] + d) & MASK32
            hv[4] = (hv[4] + e) & MASK32
            hv[5] = (hv[5] + f) & MASK32
            hv[6] = (hv[6] + g) & MASK32
            hv[7] = (hv[7] + hh) & MASK32
        for k in range(8):
            h[k] = hv[k]


def _require_numba() -> None:
    if njit is None:
        raise RuntimeError("numba is not available (pip install numba) or disabled via STREAMDIGEST_NO_NUMBA=1")


def md5_process_blocks(ihv: Tuple[int, ...], data: bytes) -> Tuple[int, ...]:
    _require_numba()
    state = np.array(ihv, dtype=np.uint32)
    md5_blocks_u32(state, np.frombuffer(data, dtype=np.uint8))
    return tuple(int(x) for x in state)


def sha256_process_blocks(h: Tuple[int, ...], data: bytes) -> Tuple[int, ...]:
    _require_numba()
    state = np.array(h, dtype=np.uint32)
    sha256_blocks_u32(state, np.frombuffer(data, dtype=np.uint8))
    return tuple(int(x) for x in state)
