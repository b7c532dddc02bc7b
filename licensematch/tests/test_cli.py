import json
from pathlib import Path

from licensematch.cli import main
from licensematch.core import TemplateEvent
from licensematch.io.json_io import save_template_events

def _write_inputs(tmp_path: Path, text: str):
    template = tmp_path / "events.json"
    save_template_events(template, [
        TemplateEvent.literal("Copyright "),
        TemplateEvent.variable("YEAR", "[0-9]{4}"),
        TemplateEvent.literal(" ACME"),
    ])
    text_path = tmp_path / "license.txt"
    text_path.write_text(text, encoding="utf-8")
    return template, text_path

def test_cli_compare_match_prints_report(tmp_path: Path, capsys):
    template, text_path = _write_inputs(tmp_path, "Copyright 2024 ACME\n")
    rc = main(["compare", "--template", str(template), "--text", str(text_path)])
    assert rc == 0
    assert "Matched: True" in capsys.readouterr().out

def test_cli_compare_divergence_writes_json(tmp_path: Path):
    template, text_path = _write_inputs(tmp_path, "Copyright ACME\n")
    out = tmp_path / "report" / "out.json"
    rc = main(["compare", "--template", str(template), "--text", str(text_path), "--out", str(out)])
    assert rc == 1
    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["matched"] is False
    assert report["differences"] == [{"line": 1, "column": 10, "length": 4}]

def test_cli_compare_with_config(tmp_path: Path):
    template, text_path = _write_inputs(tmp_path, "Copyright 2024 ACME\n")
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"patterns": {"ignore_case": False}}), encoding="utf-8")
    rc = main(["compare", "--template", str(template), "--text", str(text_path), "--config", str(cfg)])
    assert rc == 0

def test_cli_version(capsys):
    from licensematch import __version__
    assert main(["version"]) == 0
    assert capsys.readouterr().out.strip() == __version__
