"""
Utility functions for path finding operations.
"""

import gc
import logging
import os
import threading
import time
from typing import List, Optional, Sequence, Tuple

import psutil

from ..exceptions import SearchCancelledError
from ..models import Edge, Vertex
from .state import StateTable

# Configure logging
logger = logging.getLogger(__name__)

# Constants
EPSILON = 1e-10  # Floating point comparison tolerance
SENTINEL_INFINITE = 99999999.0  # Larger than any feasible route cost


def is_better_cost(new_cost: float, old_cost: Optional[float]) -> bool:
    """Compare costs with floating point tolerance; an unset cost is always worse."""
    if old_cost is None:
        return True
    return (new_cost - old_cost) < -EPSILON


def reconstruct_path(
    vertices: Sequence[Vertex], table: StateTable, origin: int, dest: int
) -> Tuple[List[Edge], List[int]]:
    """
    Walk predecessor links from ``dest`` back to ``origin``.

    Args:
        vertices: Graph arena, addressed by dense index
        table: State table holding the predecessor chain
        origin: Dense index of the route start
        dest: Dense index of the route end

    Returns:
        Edges and vertex ids in travel order
    """
    edges: List[Edge] = []
    vertex_ids = [vertices[dest].id]
    current = dest
    while current != origin:
        state = table[current]
        assert state.predecessor is not None and state.predecessor_edge is not None, (
            f"Broken predecessor chain at vertex {vertices[current].id}"
        )
        edges.append(state.predecessor_edge)
        current = state.predecessor
        vertex_ids.append(vertices[current].id)
        assert len(edges) <= len(vertices), "Predecessor cycle detected"
    edges.reverse()
    vertex_ids.reverse()
    return edges, vertex_ids


class CancellationToken:
    """
    Cooperative cancellation flag shared between a caller and a running search.

    Searches poll the token once per queue extraction.
    """

    def __init__(self, timeout: Optional[float] = None):
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """Whether cancellation was requested or the deadline passed."""
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def check(self) -> None:
        """Raise SearchCancelledError if cancelled."""
        if self.cancelled:
            raise SearchCancelledError("Search cancelled")


class MemoryManager:
    """Memory management utilities for graph algorithms."""

    def __init__(self, max_memory_mb: Optional[float] = None):
        """Initialize memory manager."""
        self.max_memory = max_memory_mb * 1024 * 1024 if max_memory_mb else None
        # RSS is only sampled when a limit is set
        self.start_memory = get_memory_usage() if self.max_memory else 0
        self._peak_memory = self.start_memory
        self._last_check = time.time()
        self._check_interval = 0.1  # Check memory every 100ms

    def check_memory(self) -> None:
        """Check if memory usage exceeds limit."""
        if not self.max_memory:
            return

        current_time = time.time()
        if current_time - self._last_check < self._check_interval:
            return
        self._last_check = current_time

        current = get_memory_usage()
        self._peak_memory = max(self._peak_memory, current)

        if current - self.start_memory > self.max_memory:
            # Try to reclaim memory
            gc.collect()
            current = get_memory_usage()

            if current - self.start_memory > self.max_memory:
                logger.error(
                    "Search memory %.1fMB exceeds limit of %.1fMB",
                    (current - self.start_memory) / 1024 / 1024,
                    self.max_memory / 1024 / 1024,
                )
                raise MemoryError(
                    f"Memory usage {current/1024/1024:.1f}MB exceeds "
                    f"limit of {self.max_memory/1024/1024:.1f}MB"
                )

    @property
    def peak_memory_mb(self) -> float:
        """Get peak memory usage in MB."""
        return self._peak_memory / 1024 / 1024

    def reset_peak_memory(self) -> None:
        """Reset peak memory tracking."""
        if not self.max_memory:
            return
        self._peak_memory = get_memory_usage()
        self.start_memory = self._peak_memory
        self._last_check = time.time()


def get_memory_usage() -> int:
    """Get current memory usage in bytes."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss
