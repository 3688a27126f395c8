#!/usr/bin/env python3
from __future__ import annotations

import argparse
import math
import statistics
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "python"))

from latebind import Namespace, Runtime  # noqa: E402


def _percentile(sorted_values: list[float], percentile: float) -> float:
    if not sorted_values:
        raise ValueError("no values to summarize")
    if percentile <= 0.0:
        return sorted_values[0]
    if percentile >= 1.0:
        return sorted_values[-1]
    index = (len(sorted_values) - 1) * percentile
    low = int(math.floor(index))
    high = int(math.ceil(index))
    if low == high:
        return sorted_values[low]
    weight = index - low
    return sorted_values[low] + (sorted_values[high] - sorted_values[low]) * weight


def _generator(host, name):
    return name


def _bump(host, name, counter):
    counter.append(name)


def _time_first_reads(runtime: Runtime, slots: int, amendments: int) -> float:
    ns = Namespace()
    counter: list[str] = []
    names = [f"slot{i}" for i in range(slots)]
    for name in names:
        runtime.postpone(ns, name, _generator)
        for _ in range(amendments):
            runtime.amend(ns, name, _bump, counter)
    start = time.perf_counter()
    for name in names:
        getattr(ns, name)
    return (time.perf_counter() - start) * 1e6 / slots


def _time_repeat_reads(runtime: Runtime, reads: int) -> float:
    ns = Namespace()
    runtime.postpone(ns, "value", _generator)
    ns.value
    start = time.perf_counter()
    for _ in range(reads):
        ns.value
    return (time.perf_counter() - start) * 1e6 / reads


def _time_plain_reads(reads: int) -> float:
    ns = Namespace()
    ns.value = "value"
    start = time.perf_counter()
    for _ in range(reads):
        ns.value
    return (time.perf_counter() - start) * 1e6 / reads


def _summarize(label: str, samples: list[float]) -> None:
    ordered = sorted(samples)
    print(
        f"{label:<14} mean {statistics.fmean(ordered):8.3f}us  "
        f"p50 {_percentile(ordered, 0.5):8.3f}us  "
        f"p95 {_percentile(ordered, 0.95):8.3f}us"
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Benchmark postponed attribute resolution against plain attributes.",
    )
    parser.add_argument("--iterations", type=int, default=30)
    parser.add_argument("--slots", type=int, default=200)
    parser.add_argument("--amendments", type=int, default=2)
    parser.add_argument("--reads", type=int, default=2000)
    args = parser.parse_args(argv)

    if args.iterations <= 0 or args.slots <= 0 or args.reads <= 0:
        parser.error("--iterations, --slots and --reads must be positive")

    runtime = Runtime()
    first = [_time_first_reads(runtime, args.slots, args.amendments) for _ in range(args.iterations)]
    repeat = [_time_repeat_reads(runtime, args.reads) for _ in range(args.iterations)]
    plain = [_time_plain_reads(args.reads) for _ in range(args.iterations)]

    _summarize("first read", first)
    _summarize("repeat read", repeat)
    _summarize("plain read", plain)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
