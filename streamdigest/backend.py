from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from . import md5_core, sha256_core

logger = logging.getLogger(__name__)

# (state words, whole blocks) -> new state words
BlockFunc = Callable[[Tuple[int, ...], bytes], Tuple[int, ...]]

ENGINES = ("auto", "python", "numba")


@dataclass(frozen=True)
class Backend:
    """One implementation of the compression functions.

    Every backend produces identical states for identical inputs; only speed differs.
    """

    name: str
    md5: BlockFunc
    sha256: BlockFunc


PYTHON_BACKEND = Backend("python", md5_core.process_blocks, sha256_core.process_blocks)

_resolved: Dict[str, Backend] = {}


def numba_available() -> bool:
    from .numba_blocks import numba_available as _available

    return _available()


def available_engines() -> List[str]:
    names = ["python"]
    if numba_available():
        names.append("numba")
    return names


def _build(name: str) -> Backend:
    if name == "python":
        return PYTHON_BACKEND
    if name == "numba":
        from .numba_blocks import md5_process_blocks, sha256_process_blocks, numba_available as _available

        if not _available():
            raise RuntimeError("numba engine requested but numba is not available (pip install numba)")
        return Backend("numba", md5_process_blocks, sha256_process_blocks)
    if name == "auto":
        return _build("numba" if numba_available() else "python")
    raise ValueError(f"unknown engine {name!r}, expected one of {', '.join(ENGINES)}")


def get_backend(name: Optional[str] = None) -> Backend:
    """
    Resolve an engine name to a Backend.

    Resolution happens once per name and is cached for the life of the process.
    Without a name, `STREAMDIGEST_ENGINE` is consulted, then "auto".
    """
    if name is None:
        name = os.getenv("STREAMDIGEST_ENGINE") or "auto"
    name = name.strip().lower()
    backend = _resolved.get(name)
    if backend is None:
        backend = _build(name)
        _resolved[name] = backend
        logger.debug("engine %s resolved to %s backend", name, backend.name)
    return backend
