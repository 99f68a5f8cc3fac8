"""Candidate ranking orchestrator.

Coordinates a ranking run for one question:
  1. Build the ScoringContext (question, entities, now, config)
  2. Load each candidate through an ExpertRepository (skip failed loads)
  3. Score each candidate via scorer.score_candidate()
  4. Drop results below ``min_score``
  5. Sort by total score descending and truncate to ``limit``

The scoring engine is pure, so candidates can be scored on a thread pool
with no coordination; ordering is imposed only after all scores are in.
"""

from __future__ import annotations

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Iterable

from expertscore.engine.context import ScoringContext
from expertscore.engine.models import CandidateExpert, EntitySet, Question
from expertscore.engine.scorer import ScoreResult, score_candidate
from expertscore.errors import RepositoryError

if TYPE_CHECKING:
    from expertscore.data.repository import ExpertRepository

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Run tracker
# ---------------------------------------------------------------------------

@dataclass
class RankingTracker:
    """Tracks the state and metrics of a ranking run."""

    run_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    started_at: str = field(default_factory=lambda: datetime.now().isoformat())
    experts_scored: int = 0
    experts_skipped: int = 0
    """Candidates whose aggregate could not be loaded."""
    experts_filtered: int = 0
    """Scored candidates dropped by ``min_score`` or ``limit``."""
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "started_at": self.started_at,
            "experts_scored": self.experts_scored,
            "experts_skipped": self.experts_skipped,
            "experts_filtered": self.experts_filtered,
            "errors": self.errors,
        }


# ---------------------------------------------------------------------------
# Ranking result
# ---------------------------------------------------------------------------

@dataclass
class RankingResult:
    """Result from a ranking run."""

    results: list[ScoreResult] = field(default_factory=list)
    """Ranked best-first."""
    tracker: RankingTracker = field(default_factory=RankingTracker)

    @property
    def expert_ids(self) -> list[str]:
        return [r["expertId"] for r in self.results]

    def top(self, n: int = 10) -> list[ScoreResult]:
        return self.results[:n]

    def __len__(self) -> int:
        return len(self.results)


def _rank_key(result: ScoreResult) -> tuple[int, float, str]:
    return (-result["totalScore"], -result["confidence"], result["expertId"])


def _score_all(
    candidates: list[CandidateExpert],
    ctx: ScoringContext,
    max_workers: int | None,
) -> list[ScoreResult]:
    if not max_workers or max_workers <= 1 or len(candidates) <= 1:
        return [score_candidate(expert, ctx) for expert in candidates]

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(lambda expert: score_candidate(expert, ctx), candidates))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def rank_experts(
    candidates: Iterable[CandidateExpert],
    question: Question,
    entities: EntitySet,
    now: datetime,
    config: Any | None = None,
    *,
    limit: int | None = None,
    min_score: int = 1,
    max_workers: int | None = None,
    tracker: RankingTracker | None = None,
) -> RankingResult:
    """Score every candidate and return them best-first.

    Ties on total score are broken by confidence, then expert id, so the
    order does not depend on input order or ``max_workers``.

    Raises ValueError if ``limit`` is given and below 1.
    """
    if limit is not None and limit < 1:
        raise ValueError(f"limit must be >= 1 or None, got {limit}")

    tracker = tracker if tracker is not None else RankingTracker()
    ctx = ScoringContext(question=question, entities=entities, now=now, config=config)

    pool = list(candidates)
    scored = _score_all(pool, ctx, max_workers)
    tracker.experts_scored += len(scored)

    kept = [r for r in scored if r["totalScore"] >= min_score]
    kept.sort(key=_rank_key)
    if limit is not None:
        kept = kept[:limit]
    tracker.experts_filtered += len(scored) - len(kept)

    logger.info(
        "Ranking %s: %d scored, %d kept, %d skipped",
        tracker.run_id, tracker.experts_scored, len(kept), tracker.experts_skipped,
    )
    return RankingResult(results=kept, tracker=tracker)


def rank_from_repository(
    repository: ExpertRepository,
    question: Question,
    entities: EntitySet,
    now: datetime,
    config: Any | None = None,
    *,
    expert_ids: Iterable[str] | None = None,
    **kwargs: Any,
) -> RankingResult:
    """Load candidates from ``repository`` and rank them.

    A candidate whose aggregate fails to load is logged and skipped; the
    rest of the pool is still ranked. ``kwargs`` go to ``rank_experts``.
    """
    tracker = RankingTracker()
    ids = list(expert_ids) if expert_ids is not None else repository.list_expert_ids()

    candidates: list[CandidateExpert] = []
    for expert_id in ids:
        try:
            candidates.append(repository.load_expert(expert_id))
        except RepositoryError as e:
            logger.warning("Skipping expert %s: %s", expert_id, e)
            tracker.experts_skipped += 1
            tracker.errors.append(f"{expert_id}: {e}")

    return rank_experts(
        candidates, question, entities, now, config, tracker=tracker, **kwargs,
    )
