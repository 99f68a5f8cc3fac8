"""Output generation: tabular views of ranked results.

Public API:
  results_to_frame  — Ranked ScoreResults -> pandas DataFrame
"""

from expertscore.output.table import results_to_frame

__all__ = ["results_to_frame"]
