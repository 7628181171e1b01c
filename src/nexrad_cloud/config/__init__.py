"""Configuration management for the volume-scan pipeline."""

from .models import (
    ProjectionConfig,
    SamplingConfig,
    ClusteringConfig,
    CacheConfig,
    PipelineConfig,
    PipelineRequest,
)

__all__ = [
    "ProjectionConfig",
    "SamplingConfig",
    "ClusteringConfig",
    "CacheConfig",
    "PipelineConfig",
    "PipelineRequest",
]
