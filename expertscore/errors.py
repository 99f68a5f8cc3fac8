"""Exception types raised outside the (total) scoring engine."""

from __future__ import annotations


class ExpertScoreError(Exception):
    """Base class for all expertscore errors."""


class RepositoryError(ExpertScoreError):
    """An expert aggregate could not be read or parsed."""


class ExpertNotFoundError(RepositoryError):
    """No expert exists with the requested id."""

    def __init__(self, expert_id: str):
        super().__init__(f"Expert not found: {expert_id}")
        self.expert_id = expert_id


class ConfigError(ExpertScoreError, ValueError):
    """A configuration file could not be read or is not valid YAML."""
