from __future__ import annotations

from typing import Union

from .backend import Backend
from .digest import Digest
from .md5_core import IV

# The size of an MD5 checksum in bytes.
SIZE = 16


class MD5(Digest):
    """MD5 as defined in RFC 1321.

    MD5 is cryptographically broken and should not be used for secure
    applications.
    """

    name = "md5"
    digest_size = SIZE
    magic = b"md5\x01"

    _iv = IV
    _engine_attr = "md5"
    _length_order = "little"
    _output_order = "little"


def new(backend: Union[Backend, str, None] = None) -> MD5:
    return MD5(backend)


def md5_bytes(data: bytes) -> bytes:
    d = MD5()
    d.write(data)
    return d.sum()


def md5_hex(data: bytes) -> str:
    return md5_bytes(data).hex()
