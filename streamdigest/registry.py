from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Type, Union

from .backend import Backend
from .digest import Digest
from .errors import InvalidStateIdentifier, UnknownAlgorithm
from .md5 import MD5
from .sha256 import SHA224, SHA256


@dataclass(frozen=True)
class Algorithm:
    name: str
    cls: Type[Digest]

    @property
    def digest_size(self) -> int:
        return self.cls.digest_size

    @property
    def magic(self) -> bytes:
        return self.cls.magic

    @property
    def state_size(self) -> int:
        return self.cls.state_size()


class Registry:
    """Name -> digest class lookup, populated explicitly by its owner."""

    def __init__(self) -> None:
        self._algos: Dict[str, Algorithm] = {}

    def register(self, cls: Type[Digest], name: str | None = None) -> Algorithm:
        key = (name or cls.name).lower()
        if key in self._algos:
            raise ValueError(f"algorithm {key!r} is already registered")
        algo = Algorithm(key, cls)
        self._algos[key] = algo
        return algo

    def get(self, name: str) -> Algorithm:
        try:
            return self._algos[name.lower()]
        except KeyError:
            raise UnknownAlgorithm(name) from None

    def names(self) -> List[str]:
        return sorted(self._algos)

    def new(self, name: str, backend: Union[Backend, str, None] = None) -> Digest:
        return self.get(name).cls(backend)

    def for_state(self, blob: bytes) -> Algorithm:
        for algo in self._algos.values():
            if bytes(blob[: len(algo.magic)]) == algo.magic:
                return algo
        raise InvalidStateIdentifier("no registered algorithm matches the hash state identifier")

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._algos


def default_registry() -> Registry:
    reg = Registry()
    reg.register(MD5)
    reg.register(SHA224)
    reg.register(SHA256)
    return reg
