"""
Concurrency tests for fuzzydist.

Tests cover:
- Keyboard layouts built once when many threads ask at the same time
- Shared metric objects used from several threads
- Parallel searches returning the same results as sequential ones
"""

import concurrent.futures
import threading

import fuzzydist as fd


class TestLayoutCache:
    """The keyboard layout cache is safe to fill from several threads."""

    def test_single_instance_under_contention(self):
        barrier = threading.Barrier(8)

        def build():
            barrier.wait()
            return fd.get_layout("qwertz", case_sensitive=True, shift_z_offset=0.37)

        with concurrent.futures.ThreadPoolExecutor(max_workers=8) as pool:
            layouts = list(pool.map(lambda _: build(), range(8)))
        assert all(layout is layouts[0] for layout in layouts)


class TestSharedMetrics:
    """Metric instances hold no per-call state."""

    def test_keyboard_metric(self):
        metric = fd.KeyboardMetric()
        pairs = [("hello", "jello"), ("as", "sa"), ("q", "m"), ("abc", "abc")] * 50

        with concurrent.futures.ThreadPoolExecutor(max_workers=4) as pool:
            parallel = list(pool.map(lambda p: metric(*p), pairs))
        assert parallel == [metric(a, b) for a, b in pairs]

    def test_parallel_search(self):
        words = ["apple", "apply", "ample", "maple", "banana", "appeal"] * 20
        targets = ["appel", "bananna", "mapel", "aple"]

        def search(target):
            return fd.fuzzy_search(words, target, 0.6, "osa")

        with concurrent.futures.ThreadPoolExecutor(max_workers=4) as pool:
            parallel = list(pool.map(search, targets))
        assert parallel == [search(t) for t in targets]
