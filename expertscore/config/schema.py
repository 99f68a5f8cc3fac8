"""Pydantic models for expertscore.yaml validation.

All models are frozen and their containers read-only (weight tables are
mapping proxies, lists are tuples): a loaded configuration is a value that
can be shared across threads and swapped per call, never mutated in place.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from expertscore.config.defaults import (
    CONFIDENCE_SIGNAL_BONUS,
    CONFIDENCE_SIGNAL_BONUS_MAX,
    CONFIDENCE_WEIGHTS,
    DEFAULT_PATTERN_WEIGHT,
    DEFAULT_RELATIONSHIP_WEIGHT,
    EMPLOYMENT_WEIGHTS,
    EXPERTISE_WEIGHTS,
    GEOGRAPHY_WEIGHTS,
    LEGAL_SUFFIXES,
    NETWORK_WEIGHTS,
    PATTERN_WEIGHTS,
    PERFORMANCE_WEIGHTS,
    RANKING_DEFAULTS,
    RECENCY_BONUS_FLOOR,
    RECENCY_BONUS_STEPS,
    RECENCY_MULTIPLIERS,
    RECOMMENDATION_THRESHOLDS,
    RELATIONSHIP_WEIGHTS,
    SCORE_CAPS,
    STALE_DAYS,
    TOP_QUESTION_MULTIPLIER,
    VERIFICATION_MULTIPLIERS,
)


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


def _frozen_table(
    table: Mapping[str, float],
    recase: Callable[[str], str] | None = None,
) -> Mapping[str, float]:
    """Read-only copy of a weight table, keys optionally re-cased."""
    if recase is not None:
        table = {recase(k): w for k, w in table.items()}
    return MappingProxyType(dict(table))


# ---------------------------------------------------------------------------
# Sub-score weights
# ---------------------------------------------------------------------------

class EmploymentWeightsConfig(_FrozenModel):
    current: float = EMPLOYMENT_WEIGHTS["current"]
    past: float = EMPLOYMENT_WEIGHTS["past"]
    decay: float = EMPLOYMENT_WEIGHTS["decay"]
    floor: float = EMPLOYMENT_WEIGHTS["floor"]


class ExpertiseWeightsConfig(_FrozenModel):
    topic_match: float = EXPERTISE_WEIGHTS["topic_match"]
    industry_match: float = EXPERTISE_WEIGHTS["industry_match"]


class NetworkWeightsConfig(_FrozenModel):
    per_connection: float = NETWORK_WEIGHTS["per_connection"]
    per_company_max: float = NETWORK_WEIGHTS["per_company_max"]
    joined_bonus: float = NETWORK_WEIGHTS["joined_bonus"]


class PerformanceWeightsConfig(_FrozenModel):
    accuracy: float = PERFORMANCE_WEIGHTS["accuracy"]
    response_rate: float = PERFORMANCE_WEIGHTS["response_rate"]
    verification: float = PERFORMANCE_WEIGHTS["verification"]
    per_answer: float = PERFORMANCE_WEIGHTS["per_answer"]
    experience_max: float = PERFORMANCE_WEIGHTS["experience_max"]
    speed_bonus: float = PERFORMANCE_WEIGHTS["speed_bonus"]
    speed_threshold_hours: float = PERFORMANCE_WEIGHTS["speed_threshold_hours"]


class ScoreCapsConfig(_FrozenModel):
    vendor: float = SCORE_CAPS["vendor"]
    observable: float = SCORE_CAPS["observable"]
    expertise: float = SCORE_CAPS["expertise"]
    network: float = SCORE_CAPS["network"]

    @model_validator(mode="after")
    def caps_non_negative(self) -> "ScoreCapsConfig":
        for name, value in self.model_dump().items():
            if value < 0:
                raise ValueError(f"Score cap '{name}' must be >= 0, got {value}")
        return self


# ---------------------------------------------------------------------------
# Multipliers
# ---------------------------------------------------------------------------

class VerificationMultipliersConfig(_FrozenModel):
    linkedin_verified: float = VERIFICATION_MULTIPLIERS["linkedin_verified"]
    email_domain_verified: float = VERIFICATION_MULTIPLIERS["email_domain_verified"]
    colleague_endorsements: float = VERIFICATION_MULTIPLIERS["colleague_endorsements"]
    document_verified: float = VERIFICATION_MULTIPLIERS["document_verified"]


class RecencyMultipliersConfig(_FrozenModel):
    active_7_days: float = RECENCY_MULTIPLIERS["active_7_days"]
    active_30_days: float = RECENCY_MULTIPLIERS["active_30_days"]
    observation_30_days: float = RECENCY_MULTIPLIERS["observation_30_days"]


# ---------------------------------------------------------------------------
# Confidence & classification
# ---------------------------------------------------------------------------

class ConfidenceConfig(_FrozenModel):
    employment: float = CONFIDENCE_WEIGHTS["employment"]
    vendor: float = CONFIDENCE_WEIGHTS["vendor"]
    observable: float = CONFIDENCE_WEIGHTS["observable"]
    network: float = CONFIDENCE_WEIGHTS["network"]
    signal_bonus: float = CONFIDENCE_SIGNAL_BONUS
    signal_bonus_max: float = CONFIDENCE_SIGNAL_BONUS_MAX


class RecommendationThresholdsConfig(_FrozenModel):
    highly_recommended: float = RECOMMENDATION_THRESHOLDS["highly_recommended"]
    recommended: float = RECOMMENDATION_THRESHOLDS["recommended"]
    suitable: float = RECOMMENDATION_THRESHOLDS["suitable"]
    possible: float = RECOMMENDATION_THRESHOLDS["possible"]

    @model_validator(mode="after")
    def thresholds_descending(self) -> "RecommendationThresholdsConfig":
        ordered = [self.highly_recommended, self.recommended, self.suitable, self.possible]
        if any(a <= b for a, b in zip(ordered, ordered[1:])):
            raise ValueError(
                f"Recommendation thresholds must be strictly descending, got {ordered}"
            )
        return self


# ---------------------------------------------------------------------------
# Scoring Config
# ---------------------------------------------------------------------------

class ScoringConfig(_FrozenModel):
    employment: EmploymentWeightsConfig = Field(default_factory=EmploymentWeightsConfig)
    relationship_weights: Mapping[str, float] = Field(
        default_factory=lambda: dict(RELATIONSHIP_WEIGHTS), validate_default=True
    )
    default_relationship_weight: float = DEFAULT_RELATIONSHIP_WEIGHT
    pattern_weights: Mapping[str, float] = Field(
        default_factory=lambda: dict(PATTERN_WEIGHTS), validate_default=True
    )
    default_pattern_weight: float = DEFAULT_PATTERN_WEIGHT
    recency_bonus_steps: tuple[tuple[int, float], ...] = Field(
        default_factory=lambda: tuple(RECENCY_BONUS_STEPS)
    )
    recency_bonus_floor: float = RECENCY_BONUS_FLOOR
    geography: Mapping[str, float] = Field(
        default_factory=lambda: dict(GEOGRAPHY_WEIGHTS), validate_default=True
    )
    expertise: ExpertiseWeightsConfig = Field(default_factory=ExpertiseWeightsConfig)
    network: NetworkWeightsConfig = Field(default_factory=NetworkWeightsConfig)
    performance: PerformanceWeightsConfig = Field(default_factory=PerformanceWeightsConfig)
    caps: ScoreCapsConfig = Field(default_factory=ScoreCapsConfig)
    verification: VerificationMultipliersConfig = Field(
        default_factory=VerificationMultipliersConfig
    )
    recency: RecencyMultipliersConfig = Field(default_factory=RecencyMultipliersConfig)
    top_question_multiplier: float = TOP_QUESTION_MULTIPLIER
    confidence: ConfidenceConfig = Field(default_factory=ConfidenceConfig)
    thresholds: RecommendationThresholdsConfig = Field(
        default_factory=RecommendationThresholdsConfig
    )
    legal_suffixes: tuple[str, ...] = Field(default_factory=lambda: tuple(LEGAL_SUFFIXES))
    stale_days: int = STALE_DAYS

    @field_validator("relationship_weights")
    @classmethod
    def lower_relationship_keys(cls, v: Mapping[str, float]) -> Mapping[str, float]:
        """Relationship types are looked up lower-cased."""
        return _frozen_table(v, str.lower)

    @field_validator("pattern_weights")
    @classmethod
    def upper_pattern_keys(cls, v: Mapping[str, float]) -> Mapping[str, float]:
        """Pattern types are looked up upper-cased."""
        return _frozen_table(v, str.upper)

    @field_validator("geography")
    @classmethod
    def freeze_geography(cls, v: Mapping[str, float]) -> Mapping[str, float]:
        return _frozen_table(v)

    @field_validator("recency_bonus_steps")
    @classmethod
    def steps_ascending(
        cls, v: tuple[tuple[int, float], ...]
    ) -> tuple[tuple[int, float], ...]:
        days = [d for d, _ in v]
        if days != sorted(days):
            raise ValueError(f"recency_bonus_steps must be in ascending day order, got {days}")
        return v

    @field_serializer("relationship_weights", "pattern_weights", "geography")
    def dump_table(self, table: Mapping[str, float]) -> dict[str, float]:
        return dict(table)

    @model_validator(mode="after")
    def multipliers_positive(self) -> "ScoringConfig":
        values = [
            *self.verification.model_dump().values(),
            *self.recency.model_dump().values(),
            self.top_question_multiplier,
        ]
        if any(m <= 0 for m in values):
            raise ValueError("All multipliers must be > 0")
        return self


# ---------------------------------------------------------------------------
# Ranking Config
# ---------------------------------------------------------------------------

class RankingConfig(_FrozenModel):
    limit: int | None = Field(RANKING_DEFAULTS["limit"], ge=1)
    min_score: int = RANKING_DEFAULTS["min_score"]
    max_workers: int = Field(RANKING_DEFAULTS["max_workers"], ge=1)


# ---------------------------------------------------------------------------
# Top-Level Config
# ---------------------------------------------------------------------------

class ExpertScoreConfig(_FrozenModel):
    """Root configuration model for expertscore."""

    version: int = 1
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)

    @model_validator(mode="before")
    @classmethod
    def coerce_none_to_defaults(cls, data: Any) -> Any:
        """YAML parses empty keys as None. Coerce to proper defaults."""
        if isinstance(data, dict):
            data = dict(data)
            for key in ("scoring", "ranking"):
                if key in data and data[key] is None:
                    data[key] = {}
        return data
