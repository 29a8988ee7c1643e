"""Tests for the CLI commands (parse, draft, batch, minimums)."""

import csv
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from typer.testing import CliRunner

from src.cli import app

runner = CliRunner()
INBOX = Path(__file__).resolve().parent.parent / "data" / "inbox.json"
FIXED_WIDTH = (
    "Campaign Name    Channels       Budget\n"
    "Spring Launch    LinkedIn       $500\n"
)


def test_minimums_prints_table():
    result = runner.invoke(app, ["minimums"])
    assert result.exit_code == 0
    assert "LinkedIn" in result.output
    assert "GBP" in result.output


def test_parse_text_body(tmp_path):
    body = tmp_path / "email.txt"
    body.write_text(FIXED_WIDTH, encoding="utf-8")
    result = runner.invoke(app, ["parse", str(body), "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["formData"][1] == {"question": "Channels", "answer": "LinkedIn"}


def test_parse_without_questions_exits_1(tmp_path):
    body = tmp_path / "email.txt"
    body.write_text("just one line", encoding="utf-8")
    result = runner.invoke(app, ["parse", str(body)])
    assert result.exit_code == 1


def test_draft_writes_bundle(tmp_path):
    body = tmp_path / "email.txt"
    body.write_text(FIXED_WIDTH, encoding="utf-8")
    out = tmp_path / "bundle.json"
    result = runner.invoke(app, ["draft", str(body), "--platform", "linkedin", "--output", str(out)])
    assert result.exit_code == 0
    bundle = json.loads(out.read_text(encoding="utf-8"))
    assert list(bundle["drafts"]) == ["linkedin"]
    assert bundle["drafts"]["linkedin"]["draft"]["budget_amount"] == "500.00"


def test_batch_processes_sample_inbox(tmp_path):
    result = runner.invoke(app, ["batch", "--inbox", str(INBOX), "--output", str(tmp_path)])
    assert result.exit_code == 0
    responses = json.loads((tmp_path / "responses.json").read_text(encoding="utf-8"))
    assert len(responses) == 3
    assert responses[0]["uuid_fragment"] == "3f2a9c1e-7b4d-4e2a-9f11-2c8d5e6a7b90"
    assert list(responses[1]["drafts"]["drafts"]) == ["google", "meta", "linkedin"]
    assert responses[2]["subject"] == "New response: Search Brief"
    with (tmp_path / "processing_log.csv").open(encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [row["error"] for row in rows] == ["", "", ""]
    assert rows[1]["currency"] == "GBP"


def test_batch_missing_inbox_exits_1(tmp_path):
    result = runner.invoke(app, ["batch", "--inbox", str(tmp_path / "nope.json"), "--output", str(tmp_path)])
    assert result.exit_code == 1
