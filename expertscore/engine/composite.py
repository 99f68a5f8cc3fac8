"""Total composition, multipliers, confidence and classification.

Functions:
  sum_subscores             — Raw score = plain sum of the seven sub-scores
  calc_multiplier           — Trust / recency / urgency multiplier
  compose_total             — round(raw * multiplier)
  calc_confidence           — Confidence from the company-specific signals
  classify_recommendation   — Total -> RecommendationLevel
"""

from __future__ import annotations

import math
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from expertscore.engine.models import CandidateExpert, Question
from expertscore.engine.recency import days_since
from expertscore.engine.subscores import SubScore, resolve_scoring_config


class RecommendationLevel(str, Enum):
    """Recommendation tier for a scored expert."""
    HIGHLY_RECOMMENDED = "HIGHLY_RECOMMENDED"
    RECOMMENDED = "RECOMMENDED"
    SUITABLE = "SUITABLE"
    POSSIBLE = "POSSIBLE"
    LOW_MATCH = "LOW_MATCH"


# Sub-scores that count as company-specific signals for confidence
SIGNAL_CATEGORIES = ("employment", "vendor", "observable", "network")


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------

def sum_subscores(breakdown: Mapping[str, SubScore]) -> float:
    return sum(sub["score"] for sub in breakdown.values())


def compose_total(raw_score: float, multiplier: float) -> int:
    """Apply the multiplier and round half up to an integer."""
    return math.floor(raw_score * multiplier + 0.5)


def calc_multiplier(
    expert: CandidateExpert,
    question: Question,
    now: datetime,
    config: Any | None = None,
) -> float:
    """Product of the trust, recency and urgency adjustments.

    x1.1 verified user, x1.1 LinkedIn verified, x1.15 active within 7 days
    (else x1.05 within 30), x1.2 any pattern observed within 30 days,
    x1.2 for a top-3 question.
    """
    sc = resolve_scoring_config(config)
    multiplier = 1.0

    if expert.is_user_verified:
        multiplier *= sc.verification.email_domain_verified
    if expert.linkedin_verified:
        multiplier *= sc.verification.linkedin_verified

    days_active = days_since(expert.last_active_date, now, sc.stale_days)
    if days_active < 7:
        multiplier *= sc.recency.active_7_days
    elif days_active < 30:
        multiplier *= sc.recency.active_30_days

    if any(
        days_since(p.last_observed, now, sc.stale_days) < 30
        for p in expert.observable_patterns
    ):
        multiplier *= sc.recency.observation_30_days

    if question.is_top3:
        multiplier *= sc.top_question_multiplier

    return multiplier


# ---------------------------------------------------------------------------
# Confidence
# ---------------------------------------------------------------------------

def calc_confidence(
    breakdown: Mapping[str, SubScore],
    config: Any | None = None,
) -> float:
    """Confidence in [0, 1] from the positive company-specific sub-scores.

    Each positive signal adds its weighted score; confidence is the
    weighted average / 100 plus 0.1 per signal (max 0.3), capped at 1.
    No signals means zero confidence, whatever the other sub-scores are.
    """
    conf = resolve_scoring_config(config).confidence
    weights = {
        "employment": conf.employment,
        "vendor": conf.vendor,
        "observable": conf.observable,
        "network": conf.network,
    }

    signals = 0
    total_weight = 0.0
    for category in SIGNAL_CATEGORIES:
        sub = breakdown.get(category)
        if sub is not None and sub["score"] > 0:
            signals += 1
            total_weight += sub["score"] * weights[category]

    if signals == 0:
        return 0.0

    avg_weight = total_weight / signals
    signal_bonus = min(signals * conf.signal_bonus, conf.signal_bonus_max)
    return min(avg_weight / 100 + signal_bonus, 1.0)


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------

def classify_recommendation(
    total_score: float,
    config: Any | None = None,
) -> RecommendationLevel:
    """Classify a final total score.

    Default thresholds (inclusive):
      >= 150: HIGHLY_RECOMMENDED
      >= 100: RECOMMENDED
      >=  50: SUITABLE
      >=  25: POSSIBLE
      <   25: LOW_MATCH
    """
    t = resolve_scoring_config(config).thresholds

    if total_score >= t.highly_recommended:
        return RecommendationLevel.HIGHLY_RECOMMENDED
    if total_score >= t.recommended:
        return RecommendationLevel.RECOMMENDED
    if total_score >= t.suitable:
        return RecommendationLevel.SUITABLE
    if total_score >= t.possible:
        return RecommendationLevel.POSSIBLE
    return RecommendationLevel.LOW_MATCH
