"""score_expert() — Central orchestrator for scoring one candidate expert.

Scores a single candidate against one question by:
  1. Computing 7 sub-scores (employment, vendor, observable, geography,
     expertise, network, performance)
  2. Summing them into a raw score
  3. Applying the trust / recency / urgency multiplier and rounding
  4. Estimating confidence from the company-specific signals
  5. Classifying the total into a recommendation tier
  6. Returning a ScoreResult dict

Pure and deterministic: the same expert, question, entities, ``now`` and
config always produce the same result, and no input is modified.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, TypedDict

from expertscore.engine.composite import (
    calc_confidence,
    calc_multiplier,
    classify_recommendation,
    compose_total,
    sum_subscores,
)
from expertscore.engine.context import ScoringContext
from expertscore.engine.models import CandidateExpert, EntitySet, Question
from expertscore.engine.subscores import (
    SubScore,
    calc_employment_score,
    calc_expertise_score,
    calc_geography_score,
    calc_network_score,
    calc_observable_score,
    calc_performance_score,
    calc_vendor_score,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Type definitions
# ---------------------------------------------------------------------------

class ScoreResult(TypedDict):
    """Return type for score_expert()."""
    expertId: str
    totalScore: int
    breakdown: dict[str, SubScore]
    multiplier: float
    confidence: float
    recommendationLevel: str


# ---------------------------------------------------------------------------
# Main scoring functions
# ---------------------------------------------------------------------------

def score_candidate(expert: CandidateExpert, ctx: ScoringContext) -> ScoreResult:
    """Score one candidate against the question bundled in ``ctx``."""
    sc = ctx.scoring
    entities = ctx.entities
    now = ctx.now

    breakdown: dict[str, SubScore] = {
        "employment": calc_employment_score(expert, entities, now, sc),
        "vendor": calc_vendor_score(expert, entities, sc),
        "observable": calc_observable_score(expert, entities, now, sc),
        "geography": calc_geography_score(expert, entities, sc),
        "expertise": calc_expertise_score(expert, entities, sc),
        "network": calc_network_score(expert, entities, sc),
        "performance": calc_performance_score(expert, sc),
    }

    raw_score = sum_subscores(breakdown)
    multiplier = calc_multiplier(expert, ctx.question, now, sc)
    total = compose_total(raw_score, multiplier)
    level = classify_recommendation(total, sc)

    logger.debug(
        "Expert %s: raw=%.2f multiplier=%.3f total=%d (%s)",
        expert.id, raw_score, multiplier, total, level.value,
    )

    return {
        "expertId": expert.id,
        "totalScore": total,
        "breakdown": breakdown,
        "multiplier": multiplier,
        "confidence": calc_confidence(breakdown, sc),
        "recommendationLevel": level.value,
    }


def score_expert(
    expert: CandidateExpert,
    question: Question,
    entities: EntitySet,
    now: datetime,
    config: Any | None = None,
) -> ScoreResult:
    """Calculate the ScoreResult for a single candidate expert.

    Parameters:
        expert: Fully-populated expert aggregate (active relations only).
        question: The research question; only ``is_top3`` is read.
        entities: Companies, locations, topics and industries extracted
                  from the question text. Any field may be empty.
        now: Reference time for decay and recency calculations.
        config: ScoringConfig / ExpertScoreConfig (optional). When None,
                uses the default weight tables.
    """
    ctx = ScoringContext(question=question, entities=entities, now=now, config=config)
    return score_candidate(expert, ctx)


class ScoringEngine:
    """Scoring bound to one immutable weight configuration.

    Usage::

        engine = ScoringEngine(load_config())
        result = engine.score(expert, question, entities, now)
    """

    def __init__(self, config: Any | None = None):
        self.config = config

    def score(
        self,
        expert: CandidateExpert,
        question: Question,
        entities: EntitySet,
        now: datetime,
    ) -> ScoreResult:
        return score_expert(expert, question, entities, now, self.config)

    def __repr__(self) -> str:
        return f"ScoringEngine(config={type(self.config).__name__})"
