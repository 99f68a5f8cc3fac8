"""Expert sub-score calculators.

Seven independent sub-scores that sum to the raw expert score:
  - employment:  current / past employment at a target company (max match)
  - vendor:      company relationships and trusted connections (cap 70)
  - observable:  first-hand observable patterns at a target company (cap 80)
  - geography:   proximity to the target locations (max tier)
  - expertise:   topic and primary-industry match (cap 60)
  - network:     connections at target companies (cap 40)
  - performance: track record on the platform (bounded by input ranges)

Every calculator returns a ``SubScore`` and contributes zero, never an
exception, when the entities or expert relations it needs are absent.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, TypedDict

from expertscore.config.schema import ScoringConfig
from expertscore.engine.companies import match_company
from expertscore.engine.models import CandidateExpert, EntitySet
from expertscore.engine.recency import recency_bonus, years_since

DEFAULT_SCORING_CONFIG = ScoringConfig()


# ---------------------------------------------------------------------------
# Type definitions
# ---------------------------------------------------------------------------

class SubScore(TypedDict):
    """Return type for every calc_*_score() function."""
    score: float
    details: list[dict[str, Any]]


def resolve_scoring_config(config: Any | None) -> ScoringConfig:
    """Accept None, a ScoringConfig, or the root config carrying ``.scoring``."""
    if config is None:
        return DEFAULT_SCORING_CONFIG
    return getattr(config, "scoring", config)


def _empty() -> SubScore:
    return {"score": 0, "details": []}


def relationship_weight(relationship_type: str | None, config: Any | None = None) -> float:
    """Weight for a free-text relationship type.

    Unrecognized types fall back to ``default_relationship_weight`` (30).
    """
    sc = resolve_scoring_config(config)
    key = (relationship_type or "").lower()
    if key in sc.relationship_weights:
        return sc.relationship_weights[key]
    return sc.default_relationship_weight


def pattern_weight(pattern_type: str | None, config: Any | None = None) -> float:
    """Weight for an observable pattern type.

    Unrecognized types fall back to ``default_pattern_weight`` (10).
    """
    sc = resolve_scoring_config(config)
    key = (pattern_type or "").upper()
    if key in sc.pattern_weights:
        return sc.pattern_weights[key]
    return sc.default_pattern_weight


# ---------------------------------------------------------------------------
# Employment
# ---------------------------------------------------------------------------

def calc_employment_score(
    expert: CandidateExpert,
    entities: EntitySet,
    now: datetime,
    config: Any | None = None,
) -> SubScore:
    """Best single employment match across the target companies.

    A current role scores ``current`` (100) and short-circuits past roles
    for that company. Each past role scores
    ``max(past - years_since(end) * decay, floor)``, i.e. 80 minus 10 per
    year since leaving, never below 20. The result is the max, not a sum.
    """
    if not entities.companies:
        return _empty()

    sc = resolve_scoring_config(config)
    w = sc.employment
    details: list[dict[str, Any]] = []
    max_score = 0.0

    for company in entities.companies:
        current = next(
            (
                emp for emp in expert.employment_history
                if emp.is_current and match_company(emp.company, company, sc.legal_suffixes)
            ),
            None,
        )
        if current is not None:
            details.append({
                "company": company,
                "type": "current_employment",
                "score": w.current,
                "employer": current.company,
            })
            max_score = max(max_score, w.current)
            continue

        for emp in expert.employment_history:
            if emp.is_current or not match_company(emp.company, company, sc.legal_suffixes):
                continue
            years_ago = years_since(emp.end_date, now, sc.stale_days)
            score = max(w.past - years_ago * w.decay, w.floor)
            details.append({
                "company": company,
                "type": "past_employment",
                "score": score,
                "yearsAgo": years_ago,
                "employer": emp.company,
            })
            max_score = max(max_score, score)

    return {"score": max_score, "details": details}


# ---------------------------------------------------------------------------
# Vendor / relationships
# ---------------------------------------------------------------------------

def calc_vendor_score(
    expert: CandidateExpert,
    entities: EntitySet,
    config: Any | None = None,
) -> SubScore:
    """Sum of relationship and trusted-connection weights, capped at 70.

    Active company relationships contribute the table weight for their
    type; connections contribute the same weight scaled by trust / 100.
    """
    if not entities.companies:
        return _empty()

    sc = resolve_scoring_config(config)
    details: list[dict[str, Any]] = []
    total = 0.0

    for company in entities.companies:
        for rel in expert.company_relationships:
            if not match_company(rel.company, company, sc.legal_suffixes):
                continue
            score = relationship_weight(rel.relationship_type, sc)
            details.append({
                "company": company,
                "source": "company_relationship",
                "relationship": rel.relationship_type,
                "score": score,
            })
            total += score

    for company in entities.companies:
        for conn in expert.connections:
            if not match_company(conn.company, company, sc.legal_suffixes):
                continue
            score = relationship_weight(conn.relationship, sc) * (conn.trust_level / 100)
            details.append({
                "company": company,
                "source": "connection",
                "relationship": conn.relationship,
                "trustLevel": conn.trust_level,
                "score": score,
            })
            total += score

    return {"score": min(total, sc.caps.vendor), "details": details}


# ---------------------------------------------------------------------------
# Observable patterns
# ---------------------------------------------------------------------------

def calc_observable_score(
    expert: CandidateExpert,
    entities: EntitySet,
    now: datetime,
    config: Any | None = None,
) -> SubScore:
    """Sum of type weight x recency bonus x confidence, capped at 80."""
    if not entities.companies:
        return _empty()

    sc = resolve_scoring_config(config)
    details: list[dict[str, Any]] = []
    total = 0.0

    for company in entities.companies:
        for pattern in expert.observable_patterns:
            if not match_company(pattern.company, company, sc.legal_suffixes):
                continue
            type_weight = pattern_weight(pattern.pattern_type, sc)
            bonus = recency_bonus(
                pattern.last_observed, now,
                sc.recency_bonus_steps, sc.recency_bonus_floor, sc.stale_days,
            )
            score = type_weight * bonus * (pattern.confidence / 100)
            details.append({
                "company": company,
                "patternType": pattern.pattern_type,
                "category": pattern.category,
                "confidence": pattern.confidence,
                "lastObserved": pattern.last_observed,
                "recencyBonus": bonus,
                "score": score,
            })
            total += score

    return {"score": min(total, sc.caps.observable), "details": details}


# ---------------------------------------------------------------------------
# Geography
# ---------------------------------------------------------------------------

def calc_geography_score(
    expert: CandidateExpert,
    entities: EntitySet,
    config: Any | None = None,
) -> SubScore:
    """Coarse proximity: same_city when the expert observes a target company.

    Only two tiers are reachable: ``same_city`` if any of the expert's
    patterns is at one of the target companies, else ``different_country``.
    The finer tiers in the geography table are not used yet.
    """
    if not entities.locations:
        return _empty()

    sc = resolve_scoring_config(config)
    has_local_patterns = any(
        pattern.company and any(
            match_company(pattern.company, company, sc.legal_suffixes)
            for company in entities.companies
        )
        for pattern in expert.observable_patterns
    )
    proximity = "same_city" if has_local_patterns else "different_country"
    score = sc.geography.get(proximity, 0)

    details = [
        {"location": name, "proximityLevel": proximity, "score": score}
        for name in entities.location_names
    ]
    return {"score": score, "details": details}


# ---------------------------------------------------------------------------
# Expertise
# ---------------------------------------------------------------------------

def calc_expertise_score(
    expert: CandidateExpert,
    entities: EntitySet,
    config: Any | None = None,
) -> SubScore:
    """Topic substring matches scaled by proficiency, plus industry match; cap 60."""
    sc = resolve_scoring_config(config)
    w = sc.expertise
    details: list[dict[str, Any]] = []
    total = 0.0

    for area in expert.expertise_areas:
        value = area.value.lower()
        if not value:
            continue
        for topic in entities.topics:
            needle = topic.lower()
            if not needle:
                continue
            if needle in value or value in needle:
                score = w.topic_match * (area.proficiency_level / 100)
                details.append({
                    "type": area.type,
                    "value": area.value,
                    "topic": topic,
                    "score": score,
                })
                total += score

    if expert.primary_industry:
        primary = expert.primary_industry.lower()
        for industry in entities.industries:
            if industry.lower() == primary:
                details.append({
                    "type": "primary_industry",
                    "value": industry,
                    "score": w.industry_match,
                })
                total += w.industry_match

    return {"score": min(total, sc.caps.expertise), "details": details}


# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------

def calc_network_score(
    expert: CandidateExpert,
    entities: EntitySet,
    config: Any | None = None,
) -> SubScore:
    """Connections per target company (5 each, max 20) + 3 per joined; cap 40."""
    if not entities.companies:
        return _empty()

    sc = resolve_scoring_config(config)
    w = sc.network
    details: list[dict[str, Any]] = []
    total = 0.0

    for company in entities.companies:
        at_company = [
            conn for conn in expert.connections
            if match_company(conn.company, company, sc.legal_suffixes)
        ]
        joined = sum(1 for conn in at_company if conn.connected_user_id)
        connection_score = min(len(at_company) * w.per_connection, w.per_company_max)
        joined_bonus = joined * w.joined_bonus
        total += connection_score + joined_bonus
        details.append({
            "company": company,
            "connections": len(at_company),
            "joinedConnections": joined,
            "score": connection_score + joined_bonus,
        })

    return {"score": min(total, sc.caps.network), "details": details}


# ---------------------------------------------------------------------------
# Performance
# ---------------------------------------------------------------------------

def calc_performance_score(
    expert: CandidateExpert,
    config: Any | None = None,
) -> SubScore:
    """Track record: accuracy, response rate, verification, experience, speed.

    With in-range inputs the maximum is 20 + 10 + 20 + 20 + 5 = 75.
    """
    w = resolve_scoring_config(config).performance

    metrics = {
        "accuracy": expert.accuracy_score * w.accuracy,
        "responseRate": expert.response_rate * w.response_rate,
        "verification": expert.verification_level * w.verification,
        "experience": min(expert.answer_count * w.per_answer, w.experience_max),
    }
    if (
        expert.average_response_time is not None
        and expert.average_response_time < w.speed_threshold_hours
    ):
        metrics["speedBonus"] = w.speed_bonus

    return {
        "score": sum(metrics.values()),
        "details": [{"metric": name, "score": value} for name, value in metrics.items()],
    }
