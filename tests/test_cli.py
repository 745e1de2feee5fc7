"""
Tests for the ontology-interpret command line tool.
"""
import json

from ontology_interpreter.cli import interpret

from conftest import ZOO


def test_text_summary(zoo_path, capsys):
    assert interpret.main([str(zoo_path), "--workers", "2"]) == interpret.EXIT_OK

    out = capsys.readouterr().out
    assert "Ontology: zoo" in out
    assert "Instances:      2" in out
    assert "Relations:      1" in out
    assert "owl:Thing" in out


def test_json_summary(zoo_path, capsys):
    assert interpret.main([str(zoo_path), "--json"]) == interpret.EXIT_OK

    summary = json.loads(capsys.readouterr().out)
    assert summary["iri"] == ZOO
    assert summary["instances"] == 2


def test_exit_codes(tmp_path, invalid_path, html_path):
    assert interpret.main([str(tmp_path / "missing.owl")]) == interpret.EXIT_NOT_FOUND
    assert interpret.main([str(invalid_path)]) == interpret.EXIT_INVALID
    assert interpret.main([str(html_path)]) == interpret.EXIT_INVALID


def test_bad_config_file(zoo_path, tmp_path):
    config = tmp_path / "bad.yaml"
    config.write_text("interpreter:\n  reserved_cores: -1\n")

    assert interpret.main([str(zoo_path), "--config", str(config)]) == interpret.EXIT_CONFIG


def test_prompt_selection(no_prefix_path, monkeypatch, capsys):
    answers = iter(["nonsense", ZOO])
    monkeypatch.setattr("builtins.input", lambda _prompt: next(answers))

    assert interpret.main([str(no_prefix_path), "--select", "prompt"]) == interpret.EXIT_OK

    out = capsys.readouterr().out
    assert "Invalid choice: nonsense" in out
    assert f"URI prefix: {ZOO}" in out
    assert "WARNING: no default URI prefix declared" in out
