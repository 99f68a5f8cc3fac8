"""Configuration loading, validation, and defaults."""

from expertscore.config.loader import load_config
from expertscore.config.schema import ExpertScoreConfig, ScoringConfig

__all__ = ["load_config", "ExpertScoreConfig", "ScoringConfig"]
