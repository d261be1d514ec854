"""
Execution timing for experiment backends.

Section timings end up in Result.timing so that CPU and GPU runs of the
same experiment can be compared directly.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Accumulating wall-clock timer.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('sampling'):
            ...
        timer.stop()
        timer.result()
        # {'total_seconds': 0.05, 'sampling': 0.04}

    With sync_cuda=True, pending CUDA kernels are awaited before every
    reading so GPU sections are not under-reported.
    """

    def __init__(self, sync_cuda: bool = False):
        self._sync_cuda = sync_cuda
        self._sections: dict[str, float] = {}
        self._start_time: float | None = None
        self._total: float | None = None

    def _sync(self) -> None:
        if not self._sync_cuda:
            return
        try:
            import torch
        except ImportError:
            return
        if torch.cuda.is_available():
            torch.cuda.synchronize()

    def start(self) -> None:
        self._sync()
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        self._sync()
        if self._start_time is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._start_time

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time a named block; repeated sections accumulate."""
        self._sync()
        began = time.perf_counter()
        try:
            yield
        finally:
            self._sync()
            elapsed = time.perf_counter() - began
            self._sections[name] = self._sections.get(name, 0.0) + elapsed

    def result(self) -> dict[str, float]:
        """
        Timing breakdown: 'total_seconds' plus one key per section.

        Raises:
            RuntimeError: If called before stop()
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        out = {'total_seconds': self._total}
        out.update(self._sections)
        return out


@contextmanager
def timed(sync_cuda: bool = False) -> Iterator[Timer]:
    """
    Time a whole block.

        with timed() as timer:
            run(population, 50, 1000)
        timer.result()['total_seconds']
    """
    timer = Timer(sync_cuda=sync_cuda)
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
