"""SHA-224 and SHA-256 as defined in FIPS 180-4."""

from __future__ import annotations

from typing import Union

from .backend import Backend
from .digest import Digest
from .sha256_core import IV224, IV256

SIZE = 32
SIZE224 = 28


class SHA256(Digest):
    name = "sha256"
    digest_size = SIZE
    magic = b"sha\x03"

    _iv = IV256
    _engine_attr = "sha256"


class SHA224(SHA256):
    # same compression, different IV, output truncated to 7 words
    name = "sha224"
    digest_size = SIZE224
    magic = b"sha\x02"

    _iv = IV224


def new(backend: Union[Backend, str, None] = None) -> SHA256:
    return SHA256(backend)


def new224(backend: Union[Backend, str, None] = None) -> SHA224:
    return SHA224(backend)


def sum256(data: bytes) -> bytes:
    d = SHA256()
    d.write(data)
    return d.sum()


def sum224(data: bytes) -> bytes:
    d = SHA224()
    d.write(data)
    return d.sum()


def sha256_hex(data: bytes) -> str:
    return sum256(data).hex()


def sha224_hex(data: bytes) -> str:
    return sum224(data).hex()
