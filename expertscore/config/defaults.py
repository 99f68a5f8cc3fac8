"""Default weight tables for the expert scoring engine.

Every number the engine uses lives here. The pydantic schema in
``schema.py`` seeds its defaults from these constants, so a config file
only needs to name the values it overrides.
"""

# ---------------------------------------------------------------------------
# Employment (max single match, not summed)
# ---------------------------------------------------------------------------
EMPLOYMENT_WEIGHTS = {
    "current": 100,  # Currently employed at the target company
    "past": 80,      # Starting score for a past employer
    "decay": 10,     # Points lost per year since leaving
    "floor": 20,     # Past employment never scores below this
}

# ---------------------------------------------------------------------------
# Vendor / relationship types (lower-cased keys)
# ---------------------------------------------------------------------------
RELATIONSHIP_WEIGHTS = {
    "direct_vendor": 70,
    "logistics_provider": 65,
    "service_provider": 60,
    "competitor": 50,
    "industry_peer": 40,
}
DEFAULT_RELATIONSHIP_WEIGHT = 30

# ---------------------------------------------------------------------------
# Observable pattern types (upper-case keys)
# ---------------------------------------------------------------------------
PATTERN_WEIGHTS = {
    "TRAFFIC": 15,
    "FACILITY": 20,
    "SUPPLY_CHAIN": 25,
    "WORKFORCE": 20,
    "FINANCIAL": 30,
    "TECHNOLOGY": 15,
}
DEFAULT_PATTERN_WEIGHT = 10

# Recency bonus applied to an observation: (max_days_exclusive, bonus).
# Anything at or beyond the last step gets RECENCY_BONUS_FLOOR.
RECENCY_BONUS_STEPS = [
    (30, 1.2),
    (90, 1.0),
    (180, 0.8),
]
RECENCY_BONUS_FLOOR = 0.6

# ---------------------------------------------------------------------------
# Geographic proximity
# ---------------------------------------------------------------------------
# Only same_city and different_country are reachable today; the other
# tiers are kept so a richer location model can use them.
GEOGRAPHY_WEIGHTS = {
    "same_facility": 50,
    "same_city": 40,
    "same_region": 30,
    "same_state": 20,
    "same_country": 10,
    "different_country": 0,
}

# ---------------------------------------------------------------------------
# Expertise, network and performance
# ---------------------------------------------------------------------------
EXPERTISE_WEIGHTS = {
    "topic_match": 15,       # Scaled by proficiency / 100
    "industry_match": 30,    # Exact primary-industry match
}

NETWORK_WEIGHTS = {
    "per_connection": 5,
    "per_company_max": 20,
    "joined_bonus": 3,       # Connection who has joined the platform
}

PERFORMANCE_WEIGHTS = {
    "accuracy": 0.2,           # accuracyScore 0-100 -> max 20
    "response_rate": 10,       # responseRate 0-1 -> max 10
    "verification": 5,         # verificationLevel 0-4 -> max 20
    "per_answer": 2,
    "experience_max": 20,
    "speed_bonus": 5,
    "speed_threshold_hours": 24,
}

# ---------------------------------------------------------------------------
# Sub-score caps
# ---------------------------------------------------------------------------
SCORE_CAPS = {
    "vendor": 70,
    "observable": 80,
    "expertise": 60,
    "network": 40,
}

# ---------------------------------------------------------------------------
# Multipliers
# ---------------------------------------------------------------------------
VERIFICATION_MULTIPLIERS = {
    "linkedin_verified": 1.1,
    "email_domain_verified": 1.1,    # user.isVerified
    "colleague_endorsements": 1.2,   # Not yet wired to any expert field
    "document_verified": 1.15,       # Not yet wired to any expert field
}

RECENCY_MULTIPLIERS = {
    "active_7_days": 1.15,
    "active_30_days": 1.05,
    "observation_30_days": 1.2,
}

TOP_QUESTION_MULTIPLIER = 1.2

# ---------------------------------------------------------------------------
# Confidence
# ---------------------------------------------------------------------------
CONFIDENCE_WEIGHTS = {
    "employment": 1.0,
    "vendor": 0.8,
    "observable": 0.9,
    "network": 0.6,
}
CONFIDENCE_SIGNAL_BONUS = 0.1
CONFIDENCE_SIGNAL_BONUS_MAX = 0.3

# ---------------------------------------------------------------------------
# Recommendation tiers (inclusive lower bounds, descending)
# ---------------------------------------------------------------------------
RECOMMENDATION_THRESHOLDS = {
    "highly_recommended": 150,
    "recommended": 100,
    "suitable": 50,
    "possible": 25,
}

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
LEGAL_SUFFIXES = ["inc", "llc", "ltd", "limited", "corp", "corporation", "company", "co"]

# Days reported for a missing or unparsable date
STALE_DAYS = 999

# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------
RANKING_DEFAULTS = {
    "limit": 20,
    "min_score": 1,
    "max_workers": 1,
}
