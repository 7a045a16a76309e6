"""Engine configuration."""

from dataclasses import dataclass
from typing import Optional

from .graph_paths.types import MeetingCriterion

# Constants
DEFAULT_PATH_CACHE_SIZE = 1000  # Maximum number of cached path results per graph


@dataclass(frozen=True)
class EngineConfig:
    """
    Tunables for a road graph and the searches run on it.

    Attributes:
        path_cache_size: Maximum number of cached point-to-point results
        use_path_cache: Whether point-to-point results are cached at all
        max_memory_mb: Optional RSS growth limit checked at every extraction
        meeting_criterion: How bidirectional search selects its meeting vertex
    """

    path_cache_size: int = DEFAULT_PATH_CACHE_SIZE
    use_path_cache: bool = True
    max_memory_mb: Optional[float] = None
    meeting_criterion: MeetingCriterion = MeetingCriterion.DISTANCE_SUM

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not isinstance(self.path_cache_size, int) or isinstance(self.path_cache_size, bool):
            raise TypeError("path_cache_size must be an integer")
        if self.path_cache_size <= 0:
            raise ValueError("path_cache_size must be positive")
        if self.max_memory_mb is not None and self.max_memory_mb <= 0:
            raise ValueError("max_memory_mb must be positive")
        if not isinstance(self.meeting_criterion, MeetingCriterion):
            raise TypeError("meeting_criterion must be a MeetingCriterion enum")
