"""Tests for boardroom_session/cli.py."""

from __future__ import annotations

import argparse
import json

import pytest

from boardroom_session.cli import parse_participant, parse_topic, run_cli
from boardroom_session.models import TopicPriority


@pytest.fixture
def cli_env(monkeypatch, tmp_path):
    for name in ("BRS_MODEL", "BRS_REDIS_URL", "BRS_ARCHIVE_JSONL", "BRS_NARRATIVE_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BRS_OUTPUT_DIR", str(tmp_path / "out"))
    return tmp_path


class TestArgumentParsing:
    """Topic and participant specs."""

    def test_parse_topic(self):
        topic = parse_topic("Q3 Budget Review:15:high")
        assert topic.id == "q3-budget-review"
        assert topic.estimated_duration == 15
        assert topic.priority is TopicPriority.HIGH

    def test_parse_topic_default_priority(self):
        assert parse_topic("Hiring:5").priority is TopicPriority.MEDIUM

    @pytest.mark.parametrize("raw", ["Hiring", "Hiring:soon", "Hiring:0", "Hiring:5:urgent", ":5"])
    def test_parse_topic_invalid(self, raw):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_topic(raw)

    def test_parse_participant(self):
        participant = parse_participant("alice:cfo")
        assert participant.id == "alice"
        assert participant.role == "cfo"
        assert parse_participant("cdo").role == "cdo"


class TestCommands:
    """End-to-end command runs without a model."""

    def test_simulate(self, cli_env, capsys):
        run_cli(
            [
                "simulate",
                "--seed",
                "7",
                "--topic",
                "Budget:5:high",
                "--topic",
                "Hiring:5",
            ]
        )
        output = capsys.readouterr().out
        assert "## Budget" in output
        assert "## Hiring" in output
        assert "Overall progress: 100%" in output
        archive = cli_env / "out" / "topics.jsonl"
        assert archive.exists()

    def test_assess_scores_only(self, cli_env, capsys):
        run_cli(
            [
                "assess",
                "--domain",
                "cfo",
                "--set",
                "expected_roi=30",
                "--set",
                "payback_period=10",
                "--scores-only",
            ]
        )
        output = capsys.readouterr().out
        assert "roi: 100/100" in output

    def test_assess_falls_back_without_model(self, cli_env, capsys):
        context_file = cli_env / "context.json"
        context_file.write_text(json.dumps({"data_quality": 9}), encoding="utf-8")
        run_cli(
            [
                "assess",
                "--domain",
                "data_strategy",
                "--proposal",
                "Build a lakehouse",
                "--context",
                str(context_file),
            ]
        )
        payload = json.loads(capsys.readouterr().out)
        assert payload["used_fallback"] is True
        assert payload["scores"]["quality"]["score"] == 90
        assert payload["result"]["verdict"] == "neutral"

    def test_unknown_domain_exits(self, cli_env):
        with pytest.raises(SystemExit):
            run_cli(["assess", "--domain", "astrology", "--scores-only"])

    def test_malformed_context_exits(self, cli_env):
        """A context file that is not JSON is reported, not raised."""
        context_file = cli_env / "context.json"
        context_file.write_text("{expected_roi: 30", encoding="utf-8")
        with pytest.raises(SystemExit, match="Could not read --context"):
            run_cli(["assess", "--domain", "cfo", "--context", str(context_file), "--scores-only"])

    def test_missing_context_exits(self, cli_env):
        with pytest.raises(SystemExit, match="Could not read --context"):
            run_cli(
                ["assess", "--domain", "cfo", "--context", str(cli_env / "nope.json"), "--scores-only"]
            )

    def test_repeated_titles_get_unique_ids(self, cli_env, capsys):
        """Topics whose titles slug the same are both kept on the agenda."""
        run_cli(
            [
                "simulate",
                "--seed",
                "7",
                "--topic",
                "Budget:5:high",
                "--topic",
                "budget!:5",
            ]
        )
        output = capsys.readouterr().out
        assert "## Budget" in output
        assert "## budget!" in output
        assert "budget-2: " in output
        assert "Overall progress: 100%" in output
