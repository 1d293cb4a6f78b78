from __future__ import annotations

import logging
from pathlib import Path

from dicograph.config import RunConfig

PATH = Path("dicograph.yml")


def test_defaults():
    cfg = RunConfig.loads(PATH, "")
    cfg.validate()
    assert cfg.passes == ["basic"]
    assert cfg["graphviz"] is False
    assert cfg["max_rounds"] is None


def test_passes_and_options():
    cfg = RunConfig.loads(
        PATH, "passes: [basic, advanced]\ngraphviz: true\nmax_rounds: 3\n"
    )
    cfg.validate()
    assert cfg.passes == ["basic", "advanced"]
    assert cfg["graphviz"] is True
    assert cfg["max_rounds"] == 3


def test_single_pass_as_string():
    cfg = RunConfig.loads(PATH, "passes: intermediate\n")
    cfg.validate()
    assert cfg.passes == ["intermediate"]


def test_unknown_pass_is_reported_and_dropped(caplog):
    cfg = RunConfig.loads(PATH, "passes: [basic, bogus]\n")
    with caplog.at_level(logging.ERROR):
        cfg.validate()
    assert cfg.passes == ["basic"]
    assert "unknown reduction pass 'bogus'" in caplog.text


def test_bad_max_rounds(caplog):
    cfg = RunConfig.loads(PATH, "max_rounds: 0\n")
    with caplog.at_level(logging.ERROR):
        cfg.validate()
    assert cfg["max_rounds"] is None
    assert "max_rounds" in caplog.text


def test_invalid_yaml(caplog):
    with caplog.at_level(logging.ERROR):
        cfg = RunConfig.loads(PATH, "passes: [basic\n")
    assert cfg.data == {}
    assert "cannot parse" in caplog.text


def test_non_mapping_yaml(caplog):
    with caplog.at_level(logging.ERROR):
        cfg = RunConfig.loads(PATH, "- basic\n")
    assert cfg.data == {}
    assert "invalid YAML" in caplog.text


def test_find_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = RunConfig.find()
    assert cfg.passes == ["basic"]


def test_find_uses_file_in_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "dicograph.yml").write_text("passes: [advanced]\n")
    assert RunConfig.find().passes == ["advanced"]


def test_find_explicit_path(tmp_path):
    path = tmp_path / "run.yml"
    path.write_text("graphviz: true\n")
    assert RunConfig.find(path)["graphviz"] is True


def test_non_string_pass_is_reported_and_dropped(caplog):
    cfg = RunConfig.loads(PATH, "passes: [[basic], advanced, 3]\n")
    with caplog.at_level(logging.ERROR):
        cfg.validate()
    assert cfg.passes == ["advanced"]
    assert "unknown reduction pass ['basic']" in caplog.text


def test_boolean_max_rounds_is_rejected(caplog):
    cfg = RunConfig.loads(PATH, "max_rounds: true\n")
    with caplog.at_level(logging.ERROR):
        cfg.validate()
    assert cfg["max_rounds"] is None


def test_unknown_key_is_reported(caplog):
    cfg = RunConfig.loads(PATH, "graphvis: true\n")
    with caplog.at_level(logging.WARNING):
        cfg.validate()
    assert cfg["graphviz"] is False
    assert "unknown key 'graphvis'" in caplog.text


def test_validate_keyword_defaults():
    cfg = RunConfig.loads(PATH, "graphviz: false\n")
    cfg.validate(graphviz=True, max_rounds=2)
    assert cfg["graphviz"] is False
    assert cfg["max_rounds"] == 2
