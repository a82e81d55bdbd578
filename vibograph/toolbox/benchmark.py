# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import functools
import logging
import os
import time

logger = logging.getLogger(__name__)

BENCHMARK_LOGGING_LEVEL = 5
"Below DEBUG: timings only show up when explicitly asked for."

try:
    import psutil
except ModuleNotFoundError:
    logger.info("psutil isn't available. Benchmarks won't report memory usage.")
    psutil = None


def residentSetSize() -> int:
    if psutil is None:
        return 0
    return psutil.Process(os.getpid()).memory_info().rss


class Benchmark:
    """
    Times a block of code and logs the result at BENCHMARK_LOGGING_LEVEL.
    Nested benchmarks are reported with their full path, e.g. "outer/inner".
    """

    _stack: list[str] = []

    def __init__(self, name: str):
        self.name = name
        self.elapsedMs = 0.0
        self._t0 = 0.0
        self._rss0 = 0

    def __enter__(self):
        Benchmark._stack.append(self.name)
        self._rss0 = residentSetSize()
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, excType, excValue, excTraceback):
        self.elapsedMs = (time.perf_counter() - self._t0) * 1000
        if logger.isEnabledFor(BENCHMARK_LOGGING_LEVEL):
            deltaKB = (residentSetSize() - self._rss0) // 1024
            label = "/".join(Benchmark._stack)
            logger.log(BENCHMARK_LOGGING_LEVEL, f"{self.elapsedMs:8.2f} ms {deltaKB:6,d}K {label}")
        Benchmark._stack.pop()


def benchmark(func):
    """ Decorator version of Benchmark, labeled with the function's qualified name. """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with Benchmark(func.__qualname__):
            return func(*args, **kwargs)
    return wrapper
