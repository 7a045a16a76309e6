"""Tests for engine configuration."""

import pytest

from wagonpath.core.config import DEFAULT_PATH_CACHE_SIZE, EngineConfig
from wagonpath.core.graph_paths.types import MeetingCriterion


def test_defaults():
    config = EngineConfig()

    assert config.path_cache_size == DEFAULT_PATH_CACHE_SIZE
    assert config.use_path_cache is True
    assert config.max_memory_mb is None
    assert config.meeting_criterion is MeetingCriterion.DISTANCE_SUM


def test_config_is_frozen():
    config = EngineConfig()
    with pytest.raises(AttributeError):
        config.path_cache_size = 10  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs,error,message",
    [
        ({"path_cache_size": 0}, ValueError, "path_cache_size must be positive"),
        ({"path_cache_size": 1.5}, TypeError, "path_cache_size must be an integer"),
        ({"max_memory_mb": -1}, ValueError, "max_memory_mb must be positive"),
        ({"meeting_criterion": "distance_sum"}, TypeError, "MeetingCriterion"),
    ],
)
def test_invalid_config(kwargs, error, message):
    with pytest.raises(error, match=message):
        EngineConfig(**kwargs)
