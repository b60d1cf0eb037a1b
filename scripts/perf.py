#!/usr/bin/env python3
"""Throughput micro-benchmarks for the compression engines."""
from __future__ import annotations

import argparse
import random
import time
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from streamdigest.backend import available_engines, get_backend
from streamdigest.registry import default_registry


def bench_stream(name: str, engine: str, data: bytes, chunk: int) -> None:
    reg = default_registry()
    backend = get_backend(engine)
    # first call pays for JIT compilation
    warm = reg.new(name, backend)
    warm.write(data[:4096])
    warm.sum()

    d = reg.new(name, backend)
    start = time.time()
    for off in range(0, len(data), chunk):
        d.write(data[off : off + chunk])
    d.sum()
    elapsed = time.time() - start
    rate = len(data) / elapsed / (1 << 20) if elapsed else 0.0
    print(f"{name}[{engine}]: bytes={len(data)} chunk={chunk} time={elapsed:.3f}s rate={rate:.2f} MiB/s")


def bench_checkpoint(trials: int, engine: str) -> None:
    reg = default_registry()
    d = reg.new("sha256", engine)
    d.write(b"x" * 1000)
    start = time.time()
    for _ in range(trials):
        r = reg.new("sha256", engine)
        r.import_state(d.export_state())
    elapsed = time.time() - start
    rate = trials / elapsed if elapsed else 0.0
    print(f"checkpoint[{engine}]: trials={trials} time={elapsed:.3f}s rate={rate:.2f}/s")


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--size", type=int, default=1 << 20)
    ap.add_argument("--chunk", type=int, default=1000)
    ap.add_argument("--trials", type=int, default=10000)
    ap.add_argument("--seed", type=int, default=2024)
    args = ap.parse_args()

    rng = random.Random(args.seed)
    data = bytes(rng.getrandbits(8) for _ in range(args.size))
    for engine in available_engines():
        for name in ("md5", "sha256"):
            bench_stream(name, engine, data, args.chunk)
        bench_checkpoint(args.trials, engine)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
