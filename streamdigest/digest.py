from __future__ import annotations

import struct
from typing import Tuple, Union

from .backend import Backend, BlockFunc, get_backend
from .core import BLOCK_SIZE, MASK64, words_to_bytes_be
from .errors import InvalidStateIdentifier, InvalidStateSize, PaddingInvariantError


class Digest:
    """
    Streaming Merkle-Damgard digest over 64-byte blocks.

    Subclasses pick the initial state, the compression function, and the
    byte order of the length field and of the output words.
    Internal state:
      - _h: state words (tuple, replaced on every compression)
      - _x: one block of pending input, only _x[:_nx] is meaningful
      - _nx: pending byte count, always _len % BLOCK_SIZE between calls
      - _len: total bytes written
    """

    name = ""
    digest_size = 0
    block_size = BLOCK_SIZE
    magic = b""

    _iv: Tuple[int, ...] = ()
    _engine_attr = ""
    _length_order = "big"
    _output_order = "big"

    def __init__(self, backend: Union[Backend, str, None] = None) -> None:
        if not isinstance(backend, Backend):
            backend = get_backend(backend)
        self._backend = backend
        self._blocks: BlockFunc = getattr(backend, self._engine_attr)
        self._x = bytearray(BLOCK_SIZE)
        self.reset()

    @classmethod
    def state_size(cls) -> int:
        return len(cls.magic) + 4 * len(cls._iv) + BLOCK_SIZE + 8

    @classmethod
    def from_state(cls, blob: bytes, backend: Union[Backend, str, None] = None) -> "Digest":
        d = cls(backend)
        d.import_state(blob)
        return d

    @property
    def engine(self) -> str:
        return self._backend.name

    @property
    def total_len(self) -> int:
        return self._len

    def reset(self) -> None:
        self._h = tuple(self._iv)
        self._nx = 0
        self._len = 0

    def write(self, data: bytes) -> int:
        p = memoryview(data).cast("B")
        nn = len(p)
        self._len += nn

        if self._nx > 0:
            n = min(BLOCK_SIZE - self._nx, nn)
            self._x[self._nx : self._nx + n] = p[:n]
            self._nx += n
            if self._nx == BLOCK_SIZE:
                self._h = self._blocks(self._h, self._x)
                self._nx = 0
            p = p[n:]

        # whole blocks straight from the caller's buffer
        if len(p) >= BLOCK_SIZE:
            n = len(p) & ~(BLOCK_SIZE - 1)
            self._h = self._blocks(self._h, p[:n])
            p = p[n:]

        if len(p) > 0:
            self._nx = len(p)
            self._x[: self._nx] = p
        return nn

    def update(self, data: bytes) -> None:
        self.write(data)

    def copy(self) -> "Digest":
        other = self.__class__.__new__(self.__class__)
        other._backend = self._backend
        other._blocks = self._blocks
        other._h = self._h
        other._x = bytearray(self._x)
        other._nx = self._nx
        other._len = self._len
        return other

    def sum(self, prefix: bytes = b"") -> bytes:
        """Return ``prefix`` followed by the digest of everything written so far.

        Finalization runs on a copy, so writing may continue afterwards.
        """
        d0 = self.copy()
        return bytes(prefix) + d0._check_sum()

    def digest(self) -> bytes:
        return self.sum()

    def hexdigest(self) -> str:
        return self.sum().hex()

    def _check_sum(self) -> bytes:
        # 1 byte end marker :: 0-63 zero bytes :: 8 byte length in bits
        length = self._len
        tmp = bytearray(1 + 63 + 8)
        tmp[0] = 0x80
        pad = (55 - length) % 64
        tmp[1 + pad : 1 + pad + 8] = ((length << 3) & MASK64).to_bytes(8, self._length_order)
        self.write(tmp[: 1 + pad + 8])

        if self._nx != 0:
            raise PaddingInvariantError(f"{self.name}: {self._nx} bytes left in buffer after padding")

        nwords = self.digest_size // 4
        return b"".join(w.to_bytes(4, self._output_order) for w in self._h[:nwords])

    def export_state(self) -> bytes:
        b = bytearray(self.magic)
        b += words_to_bytes_be(self._h)
        b += self._x[: self._nx]
        b += bytes(BLOCK_SIZE - self._nx)
        b += (self._len & MASK64).to_bytes(8, "big")
        return bytes(b)

    def import_state(self, blob: bytes) -> None:
        b = bytes(blob)
        if len(b) < len(self.magic) or b[: len(self.magic)] != self.magic:
            raise InvalidStateIdentifier(f"{self.name}: invalid hash state identifier")
        if len(b) != self.state_size():
            raise InvalidStateSize(
                f"{self.name}: invalid hash state size {len(b)}, expected {self.state_size()}"
            )
        off = len(self.magic)
        nwords = len(self._iv)
        h = struct.unpack_from(f">{nwords}I", b, off)
        off += 4 * nwords
        x = bytearray(b[off : off + BLOCK_SIZE])
        off += BLOCK_SIZE
        length = int.from_bytes(b[off : off + 8], "big")

        self._h = tuple(h)
        self._x = x
        self._len = length
        self._nx = length % BLOCK_SIZE

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} engine={self.engine} total_len={self._len}>"

