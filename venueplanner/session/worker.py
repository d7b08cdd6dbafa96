"""
Background allocation worker.

Runs the allocator on a dedicated thread so an interactive host stays
responsive. Results come back through a Future and optional callbacks.
A running search cannot be interrupted. A job still queued can be
cancelled through its Future, which reports a CancelledError to on_error.
"""

from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from typing import Callable, Iterable, Optional

from ..algorithms.allocator import Allocator, validate_inputs
from ..algorithms.base import AllocationResult, AllocatorConfig
from ..models.event import Event
from ..models.venue import Venue
from ..utils.logger import get_logger


logger = get_logger(__name__)

CompletedCallback = Callable[[AllocationResult], None]
ErrorCallback = Callable[[BaseException], None]


class AllocationWorker:
    """Single-thread executor for allocation searches."""

    def __init__(self, config: Optional[AllocatorConfig] = None):
        self.config = config or AllocatorConfig()
        self._executor = ThreadPoolExecutor(max_workers=1,
                                            thread_name_prefix="allocation-worker")

    def submit(self, events: Iterable[Event], venues: Iterable[Venue],
               on_completed: Optional[CompletedCallback] = None,
               on_error: Optional[ErrorCallback] = None) -> 'Future[AllocationResult]':
        """
        Queue a search and return its future.

        Input is validated here, on the caller's thread, so malformed
        input raises InvalidArgumentError immediately.
        """
        event_list, venue_list = validate_inputs(events, venues)
        # Each job gets its own allocator so metrics are not shared
        allocator = Allocator(self.config)
        future = self._executor.submit(allocator.solve, event_list, venue_list)
        logger.debug("Allocation job queued | events=%s | venues=%s",
                     len(event_list), len(venue_list))

        def _dispatch(done: Future) -> None:
            if done.cancelled():
                logger.info("Allocation job cancelled")
                if on_error is not None:
                    on_error(CancelledError())
                return
            error = done.exception()
            if error is not None:
                logger.error("Allocation job failed | error=%s", error)
                if on_error is not None:
                    on_error(error)
            elif on_completed is not None:
                on_completed(done.result())

        future.add_done_callback(_dispatch)
        return future

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting jobs; optionally wait for queued ones."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> 'AllocationWorker':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)
