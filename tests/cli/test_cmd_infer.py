"""Tests for the cmd_infer CLI function and argument parsing."""

from __future__ import annotations

import argparse
import gzip
import json

import pytest

from column_mapping.interfaces.cli.main import build_parser, cmd_infer, main


def _args(inputs, **kwargs) -> argparse.Namespace:
    defaults = dict(locale=None, config=None, limit=None, report=False, report_json=False)
    defaults.update(kwargs)
    return argparse.Namespace(inputs=[str(p) for p in inputs], **defaults)


@pytest.fixture
def events_file(tmp_path):
    path = tmp_path / "events.jsonl"
    lines = [
        {"user": "alice", "created_at": 1547809200, "amount": "12.5"},
        {"user": "bob", "created_at": 1547812800, "amount": "7"},
    ]
    path.write_text("\n".join(json.dumps(line) for line in lines) + "\n", encoding="utf-8")
    return path


class TestCmdInfer:
    """Tests for cmd_infer function."""

    def test_cmd_infer_success(self, events_file, capsys):
        """Test that a readable sample returns 0 and prints the summary."""
        result = cmd_infer(_args([events_file]))

        assert result == 0
        out = capsys.readouterr().out
        assert "Column Mapping Summary:" in out
        assert "Sample: 2 documents (events.jsonl), locale en-US" in out
        assert "created_at: TIME [%d %b %Y %H:%M:%S]" in out
        assert "amount: NUMBER" in out

    def test_cmd_infer_missing_input(self, tmp_path):
        """Test error when an input file doesn't exist."""
        assert cmd_infer(_args([tmp_path / "missing.jsonl"])) == 2

    def test_cmd_infer_unsupported_input(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello", encoding="utf-8")
        assert cmd_infer(_args([path])) == 2

    def test_cmd_infer_no_columns(self, tmp_path):
        """Test that a sample without fields returns 1."""
        path = tmp_path / "empty.json"
        path.write_text("[]", encoding="utf-8")
        assert cmd_infer(_args([path])) == 1

    def test_cmd_infer_invalid_limit(self, events_file):
        assert cmd_infer(_args([events_file], limit=0)) == 2

    def test_cmd_infer_invalid_config(self, events_file, tmp_path):
        config = tmp_path / "mapping.yaml"
        config.write_text("mapping:\n  nope: 1\n", encoding="utf-8")
        assert cmd_infer(_args([events_file], config=str(config))) == 2

    def test_cmd_infer_config_and_locale(self, tmp_path, capsys):
        """Test that config overrides and the locale reach the generator."""
        data = tmp_path / "prices.csv"
        data.write_text('price\n"1.234,5"\n', encoding="utf-8")
        config = tmp_path / "mapping.yaml"
        config.write_text("mapping:\n  default_locale: de-DE\n", encoding="utf-8")

        assert cmd_infer(_args([data], config=str(config))) == 0
        assert "price: NUMBER" in capsys.readouterr().out

        assert cmd_infer(_args([data], locale="en-US")) == 0
        assert "price: TEXT" in capsys.readouterr().out

    def test_cmd_infer_limit_spans_inputs(self, events_file, tmp_path, capsys):
        """Test that --limit caps the sample across all inputs."""
        second = tmp_path / "more.json"
        second.write_text(json.dumps([{"extra": "x"}]), encoding="utf-8")

        assert cmd_infer(_args([events_file, second], limit=2)) == 0
        out = capsys.readouterr().out
        assert "Sample: 2 documents" in out
        assert "extra" not in out.split("\n\n", 1)[1]

    def test_cmd_infer_with_reports(self, events_file, tmp_path):
        """Test --report and --report-json writing to custom directories."""
        md_dir = tmp_path / "md"
        json_dir = tmp_path / "json"

        result = cmd_infer(_args([events_file], report=str(md_dir), report_json=str(json_dir)))

        assert result == 0
        md = (md_dir / "column_mapping_report.md").read_text(encoding="utf-8")
        assert "| created_at | TIME |" in md
        data = json.loads((json_dir / "column_mapping_report.json").read_text(encoding="utf-8"))
        assert [c["name"] for c in data["columns"]] == ["user", "created_at", "amount"]

    def test_cmd_infer_report_default_location(self, events_file):
        """Test that reports default to the first input's directory."""
        assert cmd_infer(_args([events_file], report=True)) == 0
        assert (events_file.parent / "column_mapping_report.md").exists()


def test_build_parser_infer_arguments():
    args = build_parser().parse_args(
        ["infer", "a.jsonl", "b.csv", "--locale", "de-CH", "--limit", "50", "--report"]
    )
    assert args.command == "infer"
    assert args.inputs == ["a.jsonl", "b.csv"]
    assert args.locale == "de-CH"
    assert args.limit == 50
    assert args.report is True
    assert args.report_json is False
    assert args.func is cmd_infer


def test_build_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_main_runs_infer(events_file):
    assert main(["--errors-only", "infer", str(events_file)]) == 0


def test_cmd_infer_truncated_gzip_input(tmp_path):
    """Test that a truncated compressed input returns exit code 2."""
    path = tmp_path / "events.jsonl.gz"
    path.write_bytes(gzip.compress(b'{"a": 1}\n' * 1000)[:20])
    assert cmd_infer(_args([path])) == 2
