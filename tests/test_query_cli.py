from __future__ import annotations

import json
from pathlib import Path

import pytest

from ahaguide.scripts import query_guidelines


def _run(tmp_path: Path, *args: str) -> list[str]:
    return [*args, "--guidelines", str(tmp_path / "absent.json")]


def test_cli_prints_ranked_matches(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert query_guidelines.main(_run(tmp_path, "heart failure")) == 0
    lines = capsys.readouterr().out.splitlines()
    assert "aha-001" in lines[0]
    assert lines[-1].endswith("matching guideline(s)")


def test_cli_json_output_respects_limit(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert query_guidelines.main(_run(tmp_path, "guideline", "--json", "--limit", "2")) == 0
    rows = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert len(rows) == 2
    assert rows[0]["score"] >= rows[1]["score"] > 0


def test_cli_exit_codes(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert query_guidelines.main(_run(tmp_path, "xyzxyz-no-match")) == 1
    assert query_guidelines.main(_run(tmp_path, "   ")) == 2
