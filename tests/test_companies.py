"""Tests for expertscore.engine.companies — company-name matching."""

from __future__ import annotations

import pytest

from expertscore.engine.companies import match_company, normalize_company


class TestNormalizeCompany:
    @pytest.mark.parametrize("raw, expected", [
        ("Acme Corp", "acme"),
        ("Acme Corp.", "acme"),
        ("  ACME corporation ", "acme"),
        ("Foo, Inc.", "foo"),
        ("Big Co", "big"),
        ("Widgets Limited", "widgets"),
        ("AT&T", "att"),
        ("Procter & Gamble Company", "proctergamble"),
    ])
    def test_strips_suffix_and_punctuation(self, raw, expected):
        assert normalize_company(raw) == expected

    def test_only_trailing_suffix_removed(self):
        assert normalize_company("Co-op Foods") == "coopfoods"
        assert normalize_company("Inc Magazine LLC") == "incmagazine"

    def test_suffix_inside_word_kept(self):
        assert normalize_company("Costco") == "costco"

    def test_none(self):
        assert normalize_company(None) == ""

    def test_custom_suffixes(self):
        assert normalize_company("Acme GmbH", suffixes=["gmbh"]) == "acme"
        assert normalize_company("Acme Inc", suffixes=["gmbh"]) == "acmeinc"


class TestMatchCompany:
    def test_suffix_variants_match(self):
        assert match_company("Acme Corp", "Acme Corp.")
        assert match_company("acme", "ACME, Inc.")

    def test_different_companies(self):
        assert not match_company("Acme", "Acme Logistics")

    def test_empty_names_never_match(self):
        assert not match_company("", "")
        assert not match_company("Inc", "Co")
        assert not match_company(None, "Acme")
