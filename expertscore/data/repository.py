"""Expert aggregate repositories.

The scoring engine depends only on the shape of ``CandidateExpert``. How an
aggregate is fetched (ORM, cache, export file) is the repository's concern.
Two implementations ship here:

  - ``InMemoryExpertRepository`` over already-parsed records
  - ``FileExpertRepository`` over a JSON or YAML export, either a list of
    expert records or ``{"experts": [...]}`` in the API's camelCase shape
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Protocol, runtime_checkable

import yaml

from expertscore.engine.models import CandidateExpert, EntitySet
from expertscore.errors import ExpertNotFoundError, RepositoryError

logger = logging.getLogger(__name__)


@runtime_checkable
class ExpertRepository(Protocol):
    """Loads one fully-populated expert aggregate per call."""

    def list_expert_ids(self) -> list[str]:
        ...

    def load_expert(self, expert_id: str) -> CandidateExpert:
        """Return the aggregate, or raise ExpertNotFoundError / RepositoryError."""
        ...


# ---------------------------------------------------------------------------
# Document loading
# ---------------------------------------------------------------------------

def load_document(path: str | Path) -> Any:
    """Parse a JSON (``.json``) or YAML file.

    Raises RepositoryError if the file is missing or malformed.
    """
    path = Path(path).expanduser()
    try:
        with open(path) as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except OSError as e:
        raise RepositoryError(f"Cannot read {path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise RepositoryError(f"Malformed document {path}: {e}") from e


def load_entities(path: str | Path) -> EntitySet:
    """Load an entity set ``{companies, locations, topics, industries}``."""
    raw = load_document(path)
    if raw is not None and not isinstance(raw, Mapping):
        raise RepositoryError(f"Entities file must hold a mapping: {path}")
    return EntitySet.from_dict(raw)


# ---------------------------------------------------------------------------
# Implementations
# ---------------------------------------------------------------------------

class InMemoryExpertRepository:
    """Repository over experts already held in memory."""

    def __init__(self, experts: Iterable[CandidateExpert]):
        self._experts: dict[str, CandidateExpert] = {e.id: e for e in experts}

    def list_expert_ids(self) -> list[str]:
        return list(self._experts)

    def load_expert(self, expert_id: str) -> CandidateExpert:
        try:
            return self._experts[expert_id]
        except KeyError:
            raise ExpertNotFoundError(expert_id) from None

    def __len__(self) -> int:
        return len(self._experts)


class FileExpertRepository:
    """Repository over a JSON/YAML export of expert aggregates.

    The file is read lazily on first access. Records are parsed one at a
    time, so a single malformed record only fails its own ``load_expert``.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()
        self._records: dict[str, Mapping[str, Any]] | None = None

    def _load(self) -> dict[str, Mapping[str, Any]]:
        if self._records is not None:
            return self._records

        raw = load_document(self.path)
        if isinstance(raw, Mapping):
            raw = raw.get("experts")
        if not isinstance(raw, list):
            raise RepositoryError(
                f"Expected a list of experts (or an 'experts' key) in {self.path}"
            )

        records: dict[str, Mapping[str, Any]] = {}
        for i, record in enumerate(raw):
            if not isinstance(record, Mapping) or record.get("id") is None:
                logger.warning("Ignoring expert record #%d without an id in %s", i, self.path)
                continue
            records[str(record["id"])] = record

        logger.debug("Loaded %d expert records from %s", len(records), self.path)
        self._records = records
        return records

    def list_expert_ids(self) -> list[str]:
        return list(self._load())

    def load_expert(self, expert_id: str) -> CandidateExpert:
        records = self._load()
        if expert_id not in records:
            raise ExpertNotFoundError(expert_id)
        try:
            return CandidateExpert.from_dict(records[expert_id])
        except (TypeError, ValueError, AttributeError) as e:
            raise RepositoryError(f"Malformed expert record {expert_id}: {e}") from e

    def __repr__(self) -> str:
        return f"FileExpertRepository({self.path})"
