from __future__ import annotations

import sys
from io import BytesIO, StringIO, TextIOWrapper

import pytest

from dicograph.cli import main
from dicograph.selftest import run_selftest

DICTIONARY = "a b\nb c\nc a\nc d\n"


def run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["dg", *argv])
    with pytest.raises(SystemExit) as info:
        main()
    return info.value.code


@pytest.fixture
def dictionary(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "dico"
    path.write_text(DICTIONARY)
    return path


def test_reduce(monkeypatch, capsys, dictionary):
    assert not run(monkeypatch, "reduce", str(dictionary))
    assert capsys.readouterr().out == (
        "Original dictionary: 4 words and 4 links.\n"
        "Number of essential words: 3\n"
    )


def test_reduce_with_dot(monkeypatch, capsys, dictionary):
    args = ["reduce", "--dot", "-p", "intermediate", str(dictionary)]
    assert not run(monkeypatch, *args)
    out = capsys.readouterr().out
    assert "Number of essential words: 2\n" in out
    assert out.endswith("digraph {\n c;\n d;\n c -> c;\n c -> d;\n}\n")


def test_reduce_uses_config(monkeypatch, capsys, dictionary, tmp_path):
    (tmp_path / "dicograph.yml").write_text("passes: [basic, intermediate]\n")
    assert not run(monkeypatch, "reduce", str(dictionary))
    assert "Number of essential words: 0\n" in capsys.readouterr().out


def test_reduce_from_stdin(monkeypatch, capsys, dictionary):
    monkeypatch.setattr(sys, "stdin", StringIO(DICTIONARY))
    assert not run(monkeypatch, "reduce")
    assert "4 words and 4 links" in capsys.readouterr().out


def test_reduce_missing_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    assert run(monkeypatch, "reduce", str(tmp_path / "missing")) == 1


def test_dot(monkeypatch, capsys, dictionary):
    assert not run(monkeypatch, "dot", "-r", str(dictionary))
    assert capsys.readouterr().out == (
        "digraph {\n a;\n b;\n c;\n a -> b;\n b -> c;\n c -> a;\n}\n"
    )


def test_selftest(monkeypatch, capsys):
    assert run(monkeypatch, "selftest") == 0
    assert capsys.readouterr().out == "\t==> OK\n"


def test_run_selftest():
    assert run_selftest() == 0


def test_reduce_non_utf8_stdin(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    stdin = TextIOWrapper(BytesIO(b"caf\xe9 boisson\n"), encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", stdin)
    assert run(monkeypatch, "reduce") == 1
