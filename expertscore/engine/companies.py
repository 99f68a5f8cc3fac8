"""Company-name normalization shared by every sub-score."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable

from expertscore.config.defaults import LEGAL_SUFFIXES

_NON_ALNUM = re.compile(r"[^a-z0-9]")


@lru_cache(maxsize=8)
def _suffix_pattern(suffixes: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(s.lower()) for s in suffixes)
    return re.compile(rf"\b(?:{alternatives})\b\.?$")


def normalize_company(name: str | None, suffixes: Iterable[str] = LEGAL_SUFFIXES) -> str:
    """Lower-case, trim, drop one trailing legal suffix, keep only [a-z0-9].

    "Acme Corp." -> "acme", "Foo, Inc" -> "foo", "Big Co" -> "big".
    """
    text = (name or "").lower().strip()
    text = _suffix_pattern(tuple(suffixes)).sub("", text)
    return _NON_ALNUM.sub("", text)


def match_company(
    a: str | None,
    b: str | None,
    suffixes: Iterable[str] = LEGAL_SUFFIXES,
) -> bool:
    """True when both names normalize to the same non-empty key."""
    suffixes = tuple(suffixes)
    key = normalize_company(a, suffixes)
    return bool(key) and key == normalize_company(b, suffixes)
