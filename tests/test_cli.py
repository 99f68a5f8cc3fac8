"""Tests for the expertscore CLI (rank, config)."""

from __future__ import annotations

import csv
import json

import pytest
import yaml
from click.testing import CliRunner

from expertscore import __version__
from expertscore.cli.main import cli

NOW_ARG = "2026-10-19T12:00:00Z"

EXPERTS = {
    "experts": [
        {
            "id": "insider",
            "employmentHistory": [{"company": "Acme Corp", "isCurrent": True}],
            "accuracyScore": 90,
        },
        {
            "id": "alumnus",
            "employmentHistory": [
                {"company": "Acme", "isCurrent": False, "endDate": "2024-10-19T12:00:00Z"},
            ],
        },
        {"id": "stranger", "employmentHistory": [{"company": "Initech", "isCurrent": True}]},
    ],
}


@pytest.fixture
def files(tmp_path):
    experts = tmp_path / "experts.json"
    experts.write_text(json.dumps(EXPERTS))
    entities = tmp_path / "entities.yaml"
    entities.write_text(yaml.dump({"companies": ["Acme Corp."]}))
    return {
        "experts": str(experts),
        "entities": str(entities),
        "config": str(tmp_path / "no-config.yaml"),
        "dir": tmp_path,
    }


def _rank(files, *extra):
    runner = CliRunner()
    return runner.invoke(cli, [
        "--config", files["config"],
        "rank", files["experts"],
        "--entities", files["entities"],
        "--now", NOW_ARG,
        *extra,
    ])


class TestRankCommand:
    def test_text_output(self, files):
        result = _rank(files)
        assert result.exit_code == 0, result.output
        assert "Expert Ranking" in result.output
        assert result.output.index("insider") < result.output.index("alumnus")
        assert "stranger" not in result.output
        assert "Ranking complete: 3 scored, 2 listed, 0 skipped" in result.output

    def test_json_output(self, files):
        result = _rank(files, "--json")
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        ids = [r["expertId"] for r in payload["results"]]
        assert ids == ["insider", "alumnus"]
        # current 100 + performance 18
        assert payload["results"][0]["totalScore"] == 118
        # 2 years since leaving -> 60
        assert payload["results"][1]["totalScore"] == 60
        assert payload["run"]["experts_scored"] == 3

    def test_top3_flag(self, files):
        result = _rank(files, "--json", "--top3")
        payload = json.loads(result.output)
        assert payload["results"][1]["totalScore"] == 72

    def test_limit_and_min_score(self, files):
        payload = json.loads(_rank(files, "--json", "--limit", "1").output)
        assert [r["expertId"] for r in payload["results"]] == ["insider"]

        payload = json.loads(_rank(files, "--json", "--min-score", "0").output)
        assert len(payload["results"]) == 3

    def test_csv_export(self, files):
        out = files["dir"] / "ranking.csv"
        result = _rank(files, "--csv", str(out))
        assert result.exit_code == 0, result.output
        with open(out) as f:
            rows = list(csv.DictReader(f))
        assert [r["expertId"] for r in rows] == ["insider", "alumnus"]
        assert rows[0]["rank"] == "1"

    def test_workers(self, files):
        result = _rank(files, "--json", "--workers", "3")
        assert result.exit_code == 0, result.output
        assert len(json.loads(result.output)["results"]) == 2

    def test_performance_only_expert_still_listed(self, files):
        entities = files["dir"] / "other.yaml"
        entities.write_text("companies: [Globex]\n")
        files = {**files, "entities": str(entities)}
        payload = json.loads(_rank(files, "--json").output)
        # accuracy 90 -> performance 18, no company signal
        assert [(r["expertId"], r["totalScore"]) for r in payload["results"]] == [("insider", 18)]
        assert payload["results"][0]["recommendationLevel"] == "LOW_MATCH"

    def test_no_matches(self, files):
        entities = files["dir"] / "other.yaml"
        entities.write_text("companies: [Globex]\n")
        files = {**files, "entities": str(entities)}
        result = _rank(files, "--min-score", "19")
        assert result.exit_code == 0, result.output
        assert "No experts matched." in result.output

    @pytest.mark.parametrize("limit", ["0", "-1"])
    def test_limit_below_one_rejected(self, files, limit):
        result = _rank(files, "--limit", limit)
        assert result.exit_code == 2
        assert "--limit" in result.output

    def test_config_limit_below_one(self, files):
        config = files["dir"] / "expertscore.yaml"
        config.write_text("ranking:\n  limit: 0\n")
        result = _rank({**files, "config": str(config)})
        assert result.exit_code == 1
        assert "Ranking failed" in result.output

    def test_malformed_config(self, files):
        config = files["dir"] / "expertscore.yaml"
        config.write_text("scoring: [unclosed\n")
        result = _rank({**files, "config": str(config)})
        assert result.exit_code == 1
        assert "Malformed YAML" in result.output

    def test_bad_now(self, files):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "--config", files["config"], "rank", files["experts"],
            "--entities", files["entities"], "--now", "whenever",
        ])
        assert result.exit_code != 0
        assert "ISO-8601" in result.output

    def test_malformed_experts_file(self, files):
        bad = files["dir"] / "bad.json"
        bad.write_text('{"people": []}')
        files = {**files, "experts": str(bad)}
        result = _rank(files)
        assert result.exit_code == 1
        assert "Ranking failed" in result.output

    def test_config_limit_applies(self, files):
        config = files["dir"] / "expertscore.yaml"
        config.write_text("ranking:\n  limit: 1\n")
        files = {**files, "config": str(config)}
        payload = json.loads(_rank(files, "--json").output)
        assert len(payload["results"]) == 1


class TestConfigCommand:
    def test_show(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(tmp_path / "none.yaml"), "config", "show"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["scoring"]["caps"]["vendor"] == 70
        assert data["ranking"]["limit"] == 20

    def test_validate_ok(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(tmp_path / "none.yaml"), "config", "validate"])
        assert result.exit_code == 0
        assert "Config is valid." in result.output
        assert "Thresholds: 150/100/50/25" in result.output

    def test_validate_bad(self, tmp_path):
        config = tmp_path / "expertscore.yaml"
        config.write_text("scoring:\n  caps:\n    vendor: -5\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "validate"])
        assert result.exit_code == 1
        assert "Config validation failed" in result.output

    def test_validate_malformed_yaml(self, tmp_path):
        config = tmp_path / "expertscore.yaml"
        config.write_text("scoring: [unclosed\n")
        result = CliRunner().invoke(cli, ["--config", str(config), "config", "validate"])
        assert result.exit_code == 1
        assert "Config validation failed" in result.output
        assert "Malformed YAML" in result.output

    def test_show_malformed_yaml(self, tmp_path):
        config = tmp_path / "expertscore.yaml"
        config.write_text("scoring: [unclosed\n")
        result = CliRunner().invoke(cli, ["--config", str(config), "config", "show"])
        assert result.exit_code == 1
        assert "Cannot load config" in result.output


class TestVersion:
    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
