"""Input records for the scoring engine.

The data-access layer hands the engine fully-populated expert aggregates
in the camelCase shape of the marketplace API. ``from_dict`` accepts that
shape (and snake_case) and produces frozen records, so the engine can never
mutate what it was given.

Dates are stored exactly as supplied. Only ``engine.recency`` interprets
them, which keeps a malformed date from breaking record construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping


def _get(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present, non-None value among ``keys``."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


def _num(value: Any, default: float = 0.0) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _records(value: Any) -> list[Mapping[str, Any]]:
    """Nested collections arrive as lists of dicts, or not at all."""
    if not value:
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _active(records: Iterable[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
    return [r for r in records if _get(r, "isActive", "is_active", default=True)]


# ---------------------------------------------------------------------------
# Nested relations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EmploymentRecord:
    company: str = ""
    is_current: bool = False
    start_date: Any = None
    end_date: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EmploymentRecord":
        return cls(
            company=_str(data.get("company")),
            is_current=bool(_get(data, "isCurrent", "is_current", default=False)),
            start_date=_get(data, "startDate", "start_date"),
            end_date=_get(data, "endDate", "end_date"),
        )


@dataclass(frozen=True)
class Connection:
    company: str = ""
    relationship: str = ""
    trust_level: float = 0.0
    connected_user_id: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Connection":
        return cls(
            company=_str(data.get("company")),
            relationship=_str(data.get("relationship")),
            trust_level=_num(_get(data, "trustLevel", "trust_level")),
            connected_user_id=_get(data, "connectedUserId", "connected_user_id"),
        )


@dataclass(frozen=True)
class ExpertiseArea:
    type: str = ""
    value: str = ""
    proficiency_level: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExpertiseArea":
        return cls(
            type=_str(data.get("type")),
            value=_str(data.get("value")),
            proficiency_level=_num(_get(data, "proficiencyLevel", "proficiency_level")),
        )


@dataclass(frozen=True)
class CompanyRelationship:
    company: str = ""
    relationship_type: str = ""
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CompanyRelationship":
        return cls(
            company=_str(data.get("company")),
            relationship_type=_str(_get(data, "relationshipType", "relationship_type")),
            is_active=bool(_get(data, "isActive", "is_active", default=True)),
        )


@dataclass(frozen=True)
class ObservablePattern:
    company: str = ""
    pattern_type: str = ""
    category: str = ""
    confidence: float = 0.0
    last_observed: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ObservablePattern":
        return cls(
            company=_str(data.get("company")),
            pattern_type=_str(_get(data, "patternType", "pattern_type")),
            category=_str(data.get("category")),
            confidence=_num(data.get("confidence")),
            last_observed=_get(data, "lastObserved", "last_observed"),
        )


@dataclass(frozen=True)
class ExpertUser:
    is_verified: bool = False


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CandidateExpert:
    """One expert profile with every relation the engine reads.

    ``company_relationships`` and ``observable_patterns`` hold active
    records only; ``from_dict`` drops records flagged ``isActive: false``.
    """

    id: str
    accuracy_score: float = 0.0
    response_rate: float = 0.0
    verification_level: int = 0
    average_response_time: float | None = None
    last_active_date: Any = None
    linkedin_verified: bool = False
    user: ExpertUser | None = None
    primary_industry: str | None = None
    employment_history: tuple[EmploymentRecord, ...] = ()
    connections: tuple[Connection, ...] = ()
    expertise_areas: tuple[ExpertiseArea, ...] = ()
    company_relationships: tuple[CompanyRelationship, ...] = ()
    observable_patterns: tuple[ObservablePattern, ...] = ()
    answer_history: tuple[Any, ...] = ()

    @property
    def is_user_verified(self) -> bool:
        return self.user is not None and self.user.is_verified

    @property
    def answer_count(self) -> int:
        return len(self.answer_history)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CandidateExpert":
        """Build from a collaborator record (camelCase or snake_case keys)."""
        user_data = data.get("user")
        user = None
        if isinstance(user_data, Mapping):
            user = ExpertUser(
                is_verified=bool(_get(user_data, "isVerified", "is_verified", default=False))
            )

        avg_response = _get(data, "averageResponseTime", "average_response_time")

        return cls(
            id=_str(data.get("id")),
            accuracy_score=_num(_get(data, "accuracyScore", "accuracy_score")),
            response_rate=_num(_get(data, "responseRate", "response_rate")),
            verification_level=int(_num(_get(data, "verificationLevel", "verification_level"))),
            average_response_time=None if avg_response is None else _num(avg_response),
            last_active_date=_get(data, "lastActiveDate", "last_active_date"),
            linkedin_verified=bool(_get(data, "linkedinVerified", "linkedin_verified", default=False)),
            user=user,
            primary_industry=_get(data, "primaryIndustry", "primary_industry"),
            employment_history=tuple(
                EmploymentRecord.from_dict(r)
                for r in _records(_get(data, "employmentHistory", "employment_history"))
            ),
            connections=tuple(
                Connection.from_dict(r) for r in _records(data.get("connections"))
            ),
            expertise_areas=tuple(
                ExpertiseArea.from_dict(r)
                for r in _records(_get(data, "expertiseAreas", "expertise_areas"))
            ),
            company_relationships=tuple(
                CompanyRelationship.from_dict(r)
                for r in _active(_records(
                    _get(data, "companyRelationships", "company_relationships")
                ))
            ),
            observable_patterns=tuple(
                ObservablePattern.from_dict(r)
                for r in _active(_records(
                    _get(data, "observablePatterns", "observable_patterns")
                ))
            ),
            answer_history=tuple(
                _get(data, "ExpertAnswer", "answerHistory", "answer_history", default=[])
            ),
        )


# ---------------------------------------------------------------------------
# Question & entities
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Question:
    is_top3: bool = False
    id: str | None = None
    text: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Question":
        return cls(
            is_top3=bool(_get(data, "isTop3", "is_top3", default=False)),
            id=_get(data, "id"),
            text=_get(data, "text"),
        )


@dataclass(frozen=True)
class EntitySet:
    """Entities extracted from the question text by an upstream service.

    ``locations`` may hold plain strings or ``{"name": ...}`` mappings.
    """

    companies: tuple[str, ...] = ()
    locations: tuple[Any, ...] = ()
    topics: tuple[str, ...] = ()
    industries: tuple[str, ...] = ()

    @property
    def location_names(self) -> list[str]:
        names = []
        for loc in self.locations:
            if isinstance(loc, Mapping):
                names.append(_str(loc.get("name")))
            else:
                names.append(_str(loc))
        return names

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "EntitySet":
        data = data or {}
        return cls(
            companies=tuple(_str(c) for c in data.get("companies") or []),
            locations=tuple(data.get("locations") or []),
            topics=tuple(_str(t) for t in data.get("topics") or []),
            industries=tuple(_str(i) for i in data.get("industries") or []),
        )
