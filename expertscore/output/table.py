"""Flatten ranked ScoreResults into a pandas DataFrame.

One row per expert, best first, with the headline numbers followed by one
column per sub-score. Used for the CLI table and CSV export.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from expertscore.engine.scorer import ScoreResult

CATEGORY_COLUMNS = [
    "employment",
    "vendor",
    "observable",
    "geography",
    "expertise",
    "network",
    "performance",
]

SUMMARY_COLUMNS = [
    "rank",
    "expertId",
    "totalScore",
    "recommendationLevel",
    "confidence",
    "multiplier",
]


def results_to_frame(results: Iterable[ScoreResult]) -> pd.DataFrame:
    """Build a ranking table; ``rank`` follows the input order (1-based)."""
    rows = []
    for rank, result in enumerate(results, start=1):
        row = {
            "rank": rank,
            "expertId": result["expertId"],
            "totalScore": result["totalScore"],
            "recommendationLevel": result["recommendationLevel"],
            "confidence": round(result["confidence"], 3),
            "multiplier": round(result["multiplier"], 3),
        }
        breakdown = result.get("breakdown", {})
        for category in CATEGORY_COLUMNS:
            sub = breakdown.get(category)
            row[category] = round(sub["score"], 2) if sub is not None else 0.0
        rows.append(row)

    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS + CATEGORY_COLUMNS)
