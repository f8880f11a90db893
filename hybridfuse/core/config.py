"""Configuration management for hybridfuse."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from hybridfuse.core.models import FusionAlgorithm


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# =============================================================================
# Fusion Configuration
# =============================================================================


class RankedFusionConfig(BaseModel):
    """Rank-based fusion configuration."""

    rank_constant: int = Field(default=60, ge=0)  # k in 1 / (k + rank + 1)


class RelativeScoreFusionConfig(BaseModel):
    """Min-max score fusion configuration."""

    # Normalized value assigned when every score in a result set is equal
    equal_score_value: float = Field(default=1.0, ge=0.0, le=1.0)


class OverSearchConfig(BaseModel):
    """Candidate over-fetching before normalization."""

    enabled: bool = True
    factor: float = Field(default=3.0, ge=1.0)
    max_retrieval_limit: Optional[int] = Field(default=1000, gt=0)


class FusionConfig(BaseModel):
    """Fusion engine configuration."""

    default_algorithm: FusionAlgorithm = FusionAlgorithm.RANKED
    default_alpha: float = Field(default=0.5, ge=0.0, le=1.0)
    default_limit: int = Field(default=10, gt=0)
    strict_result_sets: bool = False  # Raise on duplicate ids instead of deduplicating
    ranked: RankedFusionConfig = Field(default_factory=RankedFusionConfig)
    relative: RelativeScoreFusionConfig = Field(default_factory=RelativeScoreFusionConfig)
    over_search: OverSearchConfig = Field(default_factory=OverSearchConfig)


# =============================================================================
# Execution Configuration
# =============================================================================


class ExecutionConfig(BaseModel):
    """Concurrent upstream search configuration."""

    timeout_seconds: float = Field(default=10.0, gt=0.0)
    max_workers: int = Field(default=2, ge=2)
    allow_single_source: bool = False  # Fuse with an empty set when one source fails


# =============================================================================
# Main Configuration
# =============================================================================


class HybridFuseConfig(BaseSettings):
    """Main hybridfuse configuration."""

    log_level: LogLevel = LogLevel.INFO
    fusion: FusionConfig = Field(default_factory=FusionConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)

    model_config = {
        "env_prefix": "HYBRIDFUSE_",
        "env_file": ".env",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "HybridFuseConfig":
        """Load configuration from a YAML file."""
        import yaml

        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls(**data) if data else cls()

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to a YAML file."""
        import yaml

        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)


def load_config(path: Optional[Union[str, Path]] = None) -> HybridFuseConfig:
    """
    Load configuration from file or create default.

    Args:
        path: Optional path to YAML config file

    Returns:
        HybridFuseConfig instance
    """
    if path:
        return HybridFuseConfig.from_yaml(path)
    return HybridFuseConfig()
