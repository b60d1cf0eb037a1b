from __future__ import annotations

import argparse
import hashlib
import logging
import sys
from pathlib import Path
from typing import BinaryIO, List, Optional

from .backend import ENGINES, available_engines, get_backend
from .digest import Digest
from .errors import StateError, UnknownAlgorithm
from .registry import default_registry

DEFAULT_CHUNK_SIZE = 1 << 16


def _feed(d: Digest, fh: BinaryIO, chunk_size: int, limit: Optional[int] = None) -> int:
    total = 0
    while limit is None or total < limit:
        n = chunk_size if limit is None else min(chunk_size, limit - total)
        chunk = fh.read(n)
        if not chunk:
            break
        d.write(chunk)
        total += len(chunk)
    return total


def _verify_vectors() -> List[bytes]:
    vectors = [
        b"",
        b"a",
        b"abc",
        b"message digest",
        b"abcdefghijklmnopqrstuvwxyz",
        b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
        b"1234567890" * 8,
    ]
    # padding branch boundaries
    for n in (55, 56, 63, 64, 119, 120, 1000):
        vectors.append(bytes(range(256)) * (n // 256) + bytes(range(n % 256)))
    return vectors


def cmd_verify_core(ns: argparse.Namespace) -> int:
    reg = default_registry()
    ok_all = True
    for name in reg.names():
        fails = 0
        for m in _verify_vectors():
            ref = hashlib.new(name, m).hexdigest()

            whole = reg.new(name, ns.backend)
            whole.write(m)

            # one byte at a time, with a running sum halfway through
            split = reg.new(name, ns.backend)
            for i in range(len(m)):
                split.write(m[i : i + 1])
                if i == len(m) // 2:
                    split.sum()

            for label, ours in (("whole", whole.hexdigest()), ("bytewise", split.hexdigest())):
                if ours != ref:
                    fails += 1
                    print(f"{name}(len={len(m)}, {label}) -> FAIL")
                    print(f"  ours={ours}\n  ref ={ref}")
        status = "OK" if fails == 0 else "FAIL"
        print(f"{name} [{ns.backend.name}]: {len(_verify_vectors())} vectors -> {status}")
        ok_all = ok_all and fails == 0
    print("verify-core:", "PASS" if ok_all else "FAIL")
    return 0 if ok_all else 1


def cmd_sum(ns: argparse.Namespace) -> int:
    reg = default_registry()
    failed = False
    for path in ns.files:
        d = reg.new(ns.algo, ns.backend)
        if path == "-":
            _feed(d, sys.stdin.buffer, ns.chunk_size)
        else:
            try:
                with Path(path).open("rb") as fh:
                    _feed(d, fh, ns.chunk_size)
            except OSError as e:
                print(f"sum: {path}: {e.strerror or e}")
                failed = True
                continue
        print(f"{d.hexdigest()}  {path}")
    return 1 if failed else 0


def cmd_checkpoint(ns: argparse.Namespace) -> int:
    reg = default_registry()
    d = reg.new(ns.algo, ns.backend)
    src = Path(ns.file)
    try:
        with src.open("rb") as fh:
            n = _feed(d, fh, ns.chunk_size, ns.limit)
    except OSError as e:
        print(f"checkpoint: {src}: {e.strerror or e}")
        return 1

    blob = d.export_state()
    try:
        Path(ns.state).write_bytes(blob)
    except OSError as e:
        print(f"checkpoint: {ns.state}: {e.strerror or e}")
        return 1
    if not ns.quiet:
        print(f"checkpoint: absorbed {n} bytes of {src}")
        print(f"checkpoint: running {d.name}={d.hexdigest()}")
        print(f"checkpoint: wrote {len(blob)} byte state to {ns.state}")
    return 0


def cmd_resume(ns: argparse.Namespace) -> int:
    reg = default_registry()
    try:
        blob = Path(ns.state_in).read_bytes()
        algo = reg.for_state(blob)
        d = algo.cls.from_state(blob, ns.backend)
    except OSError as e:
        print(f"resume: {ns.state_in}: {e.strerror or e}")
        return 1
    except StateError as e:
        print(f"resume: {ns.state_in}: {e}")
        return 1

    offset = d.total_len if ns.offset is None else ns.offset
    if offset != d.total_len and not ns.quiet:
        print(f"resume: warning: offset {offset} differs from the {d.total_len} bytes already hashed")
    src = Path(ns.file)
    try:
        with src.open("rb") as fh:
            fh.seek(offset)
            n = _feed(d, fh, ns.chunk_size)
    except OSError as e:
        print(f"resume: {src}: {e.strerror or e}")
        return 1

    if not ns.quiet:
        print(f"resume: {algo.name} continued at offset {offset}, absorbed {n} more bytes")
    print(f"{d.hexdigest()}  {src}")
    if ns.state_out:
        try:
            Path(ns.state_out).write_bytes(d.export_state())
        except OSError as e:
            print(f"resume: {ns.state_out}: {e.strerror or e}")
            return 1
        if not ns.quiet:
            print(f"resume: wrote state to {ns.state_out}")
    return 0


def cmd_list(_: argparse.Namespace) -> int:
    reg = default_registry()
    for name in reg.names():
        algo = reg.get(name)
        print(f"{name}: digest={algo.digest_size} bytes, state={algo.state_size} bytes, magic={algo.magic!r}")
    print("engines:", ", ".join(available_engines()))
    return 0


def main(argv: List[str] | None = None) -> int:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--engine", choices=list(ENGINES), default=None, help="compression engine (or STREAMDIGEST_ENGINE)")
    common.add_argument("--verbose", "-v", action="store_true")

    p = argparse.ArgumentParser(prog="streamdigest")
    sub = p.add_subparsers(dest="cmd", required=True)

    s1 = sub.add_parser("verify-core", parents=[common], help="check every algorithm against hashlib")
    s1.set_defaults(func=cmd_verify_core)

    s2 = sub.add_parser("sum", parents=[common], help="print the digest of each file")
    s2.add_argument("files", nargs="+", metavar="FILE", help="'-' reads stdin")
    s2.add_argument("--algo", "-a", default="sha256")
    s2.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE)
    s2.set_defaults(func=cmd_sum)

    s3 = sub.add_parser("checkpoint", parents=[common], help="hash a file and save the unfinished state")
    s3.add_argument("file")
    s3.add_argument("--state", "-s", required=True, help="where to write the state blob")
    s3.add_argument("--algo", "-a", default="sha256")
    s3.add_argument("--limit", type=int, default=None, help="stop after this many bytes")
    s3.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE)
    s3.add_argument("--quiet", "-q", action="store_true")
    s3.set_defaults(func=cmd_checkpoint)

    s4 = sub.add_parser("resume", parents=[common], help="restore a saved state and continue hashing a file")
    s4.add_argument("state_in", metavar="STATE")
    s4.add_argument("file")
    s4.add_argument("--offset", type=int, default=None, help="file offset to continue from (default: bytes already hashed; other values warn)")
    s4.add_argument("--state", "-s", dest="state_out", default=None, help="write the new state here")
    s4.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE)
    s4.add_argument("--quiet", "-q", action="store_true")
    s4.set_defaults(func=cmd_resume)

    s5 = sub.add_parser("list", parents=[common], help="list algorithms and engines")
    s5.set_defaults(func=cmd_list)

    args = p.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s")
    if getattr(args, "chunk_size", 1) < 1:
        print(f"{args.cmd}: --chunk-size must be >= 1")
        return 1
    try:
        args.backend = get_backend(args.engine)
    except (RuntimeError, ValueError) as e:
        print(f"{args.cmd}: {e}")
        return 1
    try:
        return int(args.func(args))
    except UnknownAlgorithm as e:
        print(f"{args.cmd}: unknown algorithm {e.args[0]!r}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
