"""Expert scoring engine.

Public API:
  score_expert    — Score a single candidate expert -> ScoreResult
  ScoringEngine   — score_expert bound to one weight configuration
  rank_experts    — Score a candidate pool and sort best-first
  ScoreResult     — TypedDict for scoring output
  ScoringContext  — Shared per-question context (question, entities, now)
"""

from expertscore.engine.composite import RecommendationLevel
from expertscore.engine.context import ScoringContext
from expertscore.engine.models import CandidateExpert, EntitySet, Question
from expertscore.engine.ranking import RankingResult, rank_experts, rank_from_repository
from expertscore.engine.scorer import ScoreResult, ScoringEngine, score_expert

__all__ = [
    "CandidateExpert",
    "EntitySet",
    "Question",
    "RankingResult",
    "RecommendationLevel",
    "ScoreResult",
    "ScoringContext",
    "ScoringEngine",
    "rank_experts",
    "rank_from_repository",
    "score_expert",
]
