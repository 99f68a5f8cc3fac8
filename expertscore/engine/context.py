"""ScoringContext -- shared per-question scoring context.

Bundles everything that is constant while a pool of candidates is scored
against one question: the question itself, the extracted entities, the
"now" used by every decay and recency helper, and the weight
configuration.

Built once per ranking run, then passed to every ``score_candidate()``
call. Candidate-specific data (the ``CandidateExpert``) stays positional.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from expertscore.config.schema import ScoringConfig
from expertscore.engine.models import EntitySet, Question
from expertscore.engine.subscores import resolve_scoring_config


@dataclass(frozen=True)
class ScoringContext:
    """Shared per-question scoring context.

    Usage::

        ctx = ScoringContext(
            question=Question(is_top3=True),
            entities=EntitySet(companies=("Acme Corp",)),
            now=datetime(2026, 10, 19, tzinfo=timezone.utc),
        )

        for expert in candidates:
            result = score_candidate(expert, ctx)
    """

    question: Question
    entities: EntitySet
    now: datetime
    """Reference time for every days/years-since calculation."""

    config: Any | None = None
    """ScoringConfig or ExpertScoreConfig; None uses the defaults."""

    @property
    def scoring(self) -> ScoringConfig:
        return resolve_scoring_config(self.config)
