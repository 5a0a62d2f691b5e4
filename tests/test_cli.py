import json

import main


def test_missing_source_file_prints_json_error(tmp_path, capsys):
    code = main.main(["--settings", str(tmp_path / "none.yaml"), "summarize", str(tmp_path / "missing.txt")])

    body = json.loads(capsys.readouterr().out)
    assert code == 1
    assert body["ok"] is False
    assert body["error"] == "invalid_input"
    assert "missing.txt" in body["details"]


def test_empty_source_file_is_invalid_input(tmp_path, capsys):
    source = tmp_path / "notes.txt"
    source.write_text("   \n", encoding="utf-8")

    code = main.main(["--settings", str(tmp_path / "none.yaml"), "quiz", str(source), "--count", "3"])

    body = json.loads(capsys.readouterr().out)
    assert code == 1
    assert body["error"] == "invalid_input"
