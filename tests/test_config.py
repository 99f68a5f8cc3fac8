"""Tests for the configuration system."""

from __future__ import annotations

import pytest
import yaml
from pydantic import ValidationError

from expertscore.config.defaults import (
    CONFIDENCE_SIGNAL_BONUS,
    CONFIDENCE_SIGNAL_BONUS_MAX,
    GEOGRAPHY_WEIGHTS,
    RECENCY_BONUS_STEPS,
    RECOMMENDATION_THRESHOLDS,
    RELATIONSHIP_WEIGHTS,
    SCORE_CAPS,
)
from expertscore.config.loader import _expand_env_vars, load_config
from expertscore.config.schema import ExpertScoreConfig, RankingConfig, ScoringConfig
from expertscore.engine.subscores import relationship_weight, resolve_scoring_config
from expertscore.errors import ConfigError, ExpertScoreError


class TestDefaults:
    """Verify the default weight tables are present and consistent."""

    def test_thresholds_descending(self):
        t = RECOMMENDATION_THRESHOLDS
        assert t["highly_recommended"] > t["recommended"] > t["suitable"] > t["possible"]

    def test_recency_steps_ascending(self):
        days = [d for d, _ in RECENCY_BONUS_STEPS]
        assert days == sorted(days)

    def test_geography_tiers_descending(self):
        values = list(GEOGRAPHY_WEIGHTS.values())
        assert values == sorted(values, reverse=True)
        assert GEOGRAPHY_WEIGHTS["different_country"] == 0

    def test_relationship_keys_lower_case(self):
        assert all(k == k.lower() for k in RELATIONSHIP_WEIGHTS)

    def test_signal_bonus_reaches_max_at_three_signals(self):
        assert round(3 * CONFIDENCE_SIGNAL_BONUS, 6) == CONFIDENCE_SIGNAL_BONUS_MAX

    def test_schema_seeds_from_defaults(self):
        sc = ScoringConfig()
        assert sc.caps.vendor == SCORE_CAPS["vendor"]
        assert sc.relationship_weights == RELATIONSHIP_WEIGHTS
        assert sc.thresholds.possible == RECOMMENDATION_THRESHOLDS["possible"]


class TestConfigLoading:
    """Test config file loading and validation."""

    def test_load_defaults_no_file(self):
        config = load_config("/nonexistent/path.yaml")
        assert isinstance(config, ExpertScoreConfig)
        assert config.version == 1
        assert config.scoring.employment.current == 100
        assert config.ranking.limit == 20

    def test_load_from_yaml(self, tmp_path):
        yaml_content = {
            "version": 1,
            "scoring": {
                "caps": {"vendor": 90},
                "relationship_weights": {"Direct_Vendor": 75},
            },
            "ranking": {"limit": 5},
        }
        config_file = tmp_path / "config.yaml"
        with open(config_file, "w") as f:
            yaml.dump(yaml_content, f)

        config = load_config(str(config_file))
        assert config.scoring.caps.vendor == 90
        assert config.scoring.caps.network == 40
        assert config.scoring.relationship_weights == {"direct_vendor": 75}
        assert config.ranking.limit == 5

    def test_empty_sections_use_defaults(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("version: 1\nscoring:\nranking:\n")
        config = load_config(config_file)
        assert config.scoring == ScoringConfig()
        assert config.ranking == RankingConfig()

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")
        assert load_config(config_file) == ExpertScoreConfig()

    def test_env_var_in_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("EXPERTSCORE_TEST_LIMIT", "7")
        config_file = tmp_path / "config.yaml"
        config_file.write_text("ranking:\n  limit: ${EXPERTSCORE_TEST_LIMIT}\n")
        assert load_config(config_file).ranking.limit == 7

    def test_malformed_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("scoring: [unclosed\n")
        with pytest.raises(ConfigError, match="Malformed YAML"):
            load_config(config_file)

    def test_top_level_must_be_mapping(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(config_file)

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)
        assert issubclass(ConfigError, ExpertScoreError)

    def test_search_order_uses_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "expertscore.yaml").write_text("ranking:\n  min_score: 10\n")
        assert load_config().ranking.min_score == 10


class TestValidation:
    def test_thresholds_must_descend(self):
        with pytest.raises(ValidationError):
            ScoringConfig(thresholds={"highly_recommended": 50, "recommended": 100})

    def test_caps_non_negative(self):
        with pytest.raises(ValidationError):
            ScoringConfig(caps={"vendor": -1})

    def test_multipliers_positive(self):
        with pytest.raises(ValidationError):
            ScoringConfig(top_question_multiplier=0)

    def test_recency_steps_ascending(self):
        with pytest.raises(ValidationError):
            ScoringConfig(recency_bonus_steps=[(90, 1.0), (30, 1.2)])

    def test_pattern_keys_upper_cased(self):
        sc = ScoringConfig(pattern_weights={"financial": 50})
        assert sc.pattern_weights == {"FINANCIAL": 50}

    def test_max_workers_at_least_one(self):
        with pytest.raises(ValidationError):
            RankingConfig(max_workers=0)

    def test_no_limit(self):
        assert RankingConfig(limit=None).limit is None

    @pytest.mark.parametrize("limit", [0, -1])
    def test_limit_at_least_one(self, limit):
        with pytest.raises(ValidationError):
            RankingConfig(limit=limit)


class TestFrozen:
    def test_config_immutable(self):
        config = ExpertScoreConfig()
        with pytest.raises(ValidationError):
            config.version = 2

    def test_nested_immutable(self):
        sc = ScoringConfig()
        with pytest.raises(ValidationError):
            sc.caps.vendor = 100

    @pytest.mark.parametrize("table", ["relationship_weights", "pattern_weights", "geography"])
    def test_weight_tables_read_only(self, table):
        weights = getattr(resolve_scoring_config(None), table)
        with pytest.raises(TypeError):
            weights["direct_vendor"] = 0

    def test_sequences_are_tuples(self):
        sc = ScoringConfig(legal_suffixes=["gmbh"], recency_bonus_steps=[[7, 2.0]])
        assert sc.legal_suffixes == ("gmbh",)
        assert sc.recency_bonus_steps == ((7, 2.0),)
        with pytest.raises(AttributeError):
            sc.legal_suffixes.append("ag")

    def test_shared_default_survives_mutation_attempt(self):
        with pytest.raises(TypeError):
            resolve_scoring_config(None).relationship_weights["direct_vendor"] = 0
        assert relationship_weight("direct_vendor") == 70

    def test_loaded_tables_read_only(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("scoring:\n  pattern_weights:\n    financial: 50\n")
        weights = load_config(config_file).scoring.pattern_weights
        assert weights == {"FINANCIAL": 50}
        with pytest.raises(TypeError):
            weights["FINANCIAL"] = 0

    def test_dump_is_plain_data(self):
        dumped = ScoringConfig().model_dump()
        assert type(dumped["relationship_weights"]) is dict
        assert dumped["geography"]["same_city"] == 40


class TestEnvExpansion:
    def test_simple_var(self, monkeypatch):
        monkeypatch.setenv("TEST_VAR", "hello")
        assert _expand_env_vars("${TEST_VAR}") == "hello"

    def test_nested_dict(self, monkeypatch):
        monkeypatch.setenv("MY_KEY", "secret")
        result = _expand_env_vars({"api": {"key": "${MY_KEY}"}})
        assert result["api"]["key"] == "secret"

    def test_list(self, monkeypatch):
        monkeypatch.setenv("ITEM", "val")
        assert _expand_env_vars(["${ITEM}", "static"]) == ["val", "static"]

    def test_missing_var_empty(self):
        assert _expand_env_vars("${DEFINITELY_NOT_SET_12345}") == ""

    def test_non_string_passthrough(self):
        assert _expand_env_vars(42) == 42
        assert _expand_env_vars(None) is None
