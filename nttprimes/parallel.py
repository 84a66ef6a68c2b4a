# nttprimes/parallel.py
# Shard coordination for the two searches that parallelize:
#   - descending scans over disjoint contiguous ranges, merged by value
#   - random draws with independent seeds, merged as a set
# Workers only return values; a Manager Event tells stragglers to quit early.

from __future__ import annotations
import concurrent.futures
import logging
import multiprocessing
import os
import random
from typing import Dict, List, Optional

from .modulus import Direction
from .scan import draw_progression, scan_linear

log = logging.getLogger(__name__)

def effective_workers(workers: int) -> int:
    return max(1, min(workers, os.cpu_count() or 1))

# ---------- descending shards ----------

def _shard_bounds(top: int, floor: int, step: int, shard_size: int, index: int):
    """(start, span) of shard `index`, or None past the floor."""
    start = top - index * shard_size * step
    if start < floor:
        return None
    span = min(shard_size, (start - floor) // step + 1)
    return start, span

def descending_shards(top: int, floor: int, step: int, levels: int,
                      workers: int, shard_size: int) -> List[int]:
    """
    The `levels` largest primes in {top, top-step, ...} that are >= floor,
    strictly descending. Fewer are returned only when the range runs out.

    Shards are submitted in rounds of `workers`. A finished shard is only
    trusted once every shard above it has finished too, so the answer does
    not depend on completion order.
    """
    workers = effective_workers(workers)
    results: Dict[int, List[int]] = {}
    next_shard = 0
    done = False
    with multiprocessing.Manager() as manager:
        stop = manager.Event()
        with concurrent.futures.ProcessPoolExecutor(max_workers=workers) as executor:
            while not done:
                futures = {}
                for _ in range(workers):
                    bounds = _shard_bounds(top, floor, step, shard_size, next_shard)
                    if bounds is None:
                        break
                    start, span = bounds
                    fut = executor.submit(scan_linear, start, step, Direction.DESCENDING,
                                          span, levels, stop)
                    futures[fut] = next_shard
                    next_shard += 1
                if not futures:
                    break
                for fut in concurrent.futures.as_completed(futures):
                    results[futures[fut]] = fut.result()
                    if _prefix_count(results, levels) >= levels:
                        stop.set()
                        for f in futures:
                            f.cancel()
                        done = True
                        break
                # let the round drain before the next one reuses `stop`
                concurrent.futures.wait(futures)
    merged = _merge_prefix(results)
    log.debug("descending_shards: %d shards scanned, %d primes", next_shard, len(merged))
    return merged[:levels]

def _prefix_count(results: Dict[int, List[int]], levels: int) -> int:
    total, i = 0, 0
    while i in results and total < levels:
        total += len(results[i]); i += 1
    return total

def _merge_prefix(results: Dict[int, List[int]]) -> List[int]:
    merged: List[int] = []
    i = 0
    while i in results:
        merged.extend(results[i]); i += 1
    return sorted(set(merged), reverse=True)

# ---------- random shards ----------

def random_shards(two_n: int, bits: int, count: int, attempts: int,
                  workers: int, rng: random.Random) -> List[int]:
    """Up to `count` distinct primes from independent seeded draws."""
    workers = effective_workers(workers)
    per_worker = -(-attempts // workers)
    seeds = [rng.getrandbits(64) for _ in range(workers)]
    found: Dict[int, None] = {}
    with multiprocessing.Manager() as manager:
        stop = manager.Event()
        with concurrent.futures.ProcessPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(draw_progression, two_n, bits, count, per_worker, s, stop)
                       for s in seeds]
            for fut in concurrent.futures.as_completed(futures):
                for q in fut.result():
                    found[q] = None
                if len(found) >= count:
                    stop.set()
                    for f in futures:
                        f.cancel()
                    break
            concurrent.futures.wait(futures)
    return list(found)[:count]
