"""Pydantic configuration models for the volume-scan pipeline."""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class ProjectionConfig(BaseModel):
    """Configuration for gate projection into the render frame."""

    render_ratio_to_m: float = 0.00001
    inclusion_threshold: float = 0.5
    include_folded: bool = False


class SamplingConfig(BaseModel):
    """Configuration for fixed-stride decimation."""

    stride: int = 1


class ClusteringConfig(BaseModel):
    """Configuration for DBSCAN clustering."""

    enabled: bool = True
    epsilon: float = 0.05
    min_points: int = 5
    recolor: bool = True


class CacheConfig(BaseModel):
    """Configuration for the advisory raw-file cache."""

    directory: Optional[Path] = None


class PipelineConfig(BaseModel):
    """Main pipeline configuration combining all sub-configs."""

    projection: ProjectionConfig = Field(default_factory=ProjectionConfig)
    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    clustering: ClusteringConfig = Field(default_factory=ClusteringConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "PipelineConfig":
        """Load configuration from a YAML file."""
        import yaml

        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        import yaml

        with path.open("w", encoding="utf-8") as fh:
            yaml.dump(self.model_dump(mode="json"), fh, default_flow_style=False)


class PipelineRequest(BaseModel):
    """A single fetch-and-process request for one site, day and time of day."""

    site: str
    date: dt.date
    time: dt.time
    stride: Optional[int] = None
    cluster: Optional[bool] = None

    def resolve(self, config: PipelineConfig) -> PipelineConfig:
        """Return a copy of ``config`` with this request's overrides applied."""
        resolved = config.model_copy(deep=True)
        if self.stride is not None:
            resolved.sampling.stride = self.stride
        if self.cluster is not None:
            resolved.clustering.enabled = self.cluster
        return resolved
