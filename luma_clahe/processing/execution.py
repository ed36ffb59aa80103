"""
Execution strategies for the per-tile and per-row-band stages.

Every stage of the pipeline is data-parallel: tiles are independent while
histograms and tables are built, and row bands are independent during
reconstruction. A strategy maps a function over work items and returns the
results in item order, so the serial and threaded paths produce identical
output.
"""

import os
import concurrent.futures
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Sequence

from ..config import settings
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ExecutionStrategy(ABC):
    """Abstract base class for work-item execution strategies."""

    @abstractmethod
    def map(self, func: Callable[[Any], Any], items: Sequence[Any]) -> List[Any]:
        """
        Apply `func` to every item.

        Returns:
            Results in the same order as `items`.
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this execution strategy can be used."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this strategy."""
        pass


class SerialStrategy(ExecutionStrategy):
    """In-order loop on the calling thread."""

    @property
    def name(self) -> str:
        return "serial"

    def is_available(self) -> bool:
        return True

    def map(self, func, items):
        return [func(item) for item in items]


class ThreadPoolStrategy(ExecutionStrategy):
    """Thread pool; numpy releases the GIL for the array-heavy work."""

    def __init__(self, max_workers: Optional[int] = None):
        if max_workers is None:
            max_workers = settings.EXECUTION_DEFAULTS.get("max_workers")
        self._max_workers = max_workers or os.cpu_count() or 1

    @property
    def name(self) -> str:
        return "threads"

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def is_available(self) -> bool:
        return self._max_workers > 1

    def map(self, func, items):
        results: List[Any] = [None] * len(items)
        with concurrent.futures.ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            future_to_index = {
                executor.submit(func, item): index
                for index, item in enumerate(items)
            }
            for future in concurrent.futures.as_completed(future_to_index):
                # Worker exceptions propagate to the caller here
                results[future_to_index[future]] = future.result()
        return results


class ExecutionContext:
    """
    Selects the execution strategy for one enhancement call.

    `parallel=True` forces the thread pool, `False` forces serial execution
    and `None` uses the pool only for images of at least
    `parallel_min_pixels` pixels.
    """

    def __init__(
        self,
        parallel: Optional[bool] = None,
        max_workers: Optional[int] = None,
        parallel_min_pixels: Optional[int] = None,
    ):
        self._parallel = parallel
        self._serial = SerialStrategy()
        self._pool = ThreadPoolStrategy(max_workers)
        if parallel_min_pixels is None:
            parallel_min_pixels = settings.EXECUTION_DEFAULTS["parallel_min_pixels"]
        self._parallel_min_pixels = parallel_min_pixels

    def get_strategy(self, num_pixels: int) -> ExecutionStrategy:
        """Get the strategy to use for an image of `num_pixels` pixels."""
        want_pool = self._parallel
        if want_pool is None:
            want_pool = num_pixels >= self._parallel_min_pixels
        if not want_pool:
            return self._serial
        if self._pool.is_available():
            return self._pool
        if self._parallel:
            logger.warning(
                "Thread pool requested but only %d worker is available; running serially.",
                self._pool.max_workers,
            )
        return self._serial
