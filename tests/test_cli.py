from __future__ import annotations

import io
import json

from soraagent import cli


def test_cli_writes_plan_to_output(tmp_path, village_script):
    script_path = tmp_path / "script.txt"
    script_path.write_text(village_script, encoding="utf-8")
    output = tmp_path / "out" / "plan.json"

    exit_code = cli.main([str(script_path), "--plan-only", "--duration", "30-60 seconds", "--output", str(output)])

    assert exit_code == 0
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["mock"] is True
    assert [scene["title"] for scene in payload["scenes"]][0] == "Opening shot of a quiet village"
    assert 28 <= sum(shot["duration"] for shot in payload["timeline"]) <= 62


def test_cli_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("One beat only."))

    exit_code = cli.main(["-", "--plan-only", "--tone", "High-energy trailer"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert len(payload["scenes"]) == 1
    assert payload["scenes"][0]["visuals"].startswith("Punchy fast cuts")


def test_cli_rejects_empty_script(tmp_path, capsys):
    script_path = tmp_path / "empty.txt"
    script_path.write_text("\n\n   \n", encoding="utf-8")

    exit_code = cli.main([str(script_path), "--plan-only"])

    assert exit_code == 2
    assert "Script is required" in capsys.readouterr().err
