"""Tests for the command-line host."""

import io
import json

import pytest

from tagtree.__main__ import main

GOOD = "<!DOCTYPE html><html><body><p>hi</p></body></html>"


def _write(tmp_path, name: str, text: str) -> str:  # type: ignore[no-untyped-def]
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestMain:
    def test_findings_then_tree(self, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:  # type: ignore[no-untyped-def]
        path = _write(tmp_path, "page.html", GOOD)
        assert main([path]) == 0
        out = capsys.readouterr().out
        assert f"{path}: Unescaped special character: <" in out
        assert out.rstrip().endswith("      p\n        hi")

    def test_parse_error(self, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:  # type: ignore[no-untyped-def]
        path = _write(tmp_path, "bad.html", "<div><p>text")
        assert main([path]) == 1
        captured = capsys.readouterr()
        assert f"{path}: Unclosed tag: <p>" in captured.out
        assert f"{path}: Parsing error: Unclosed tags at end of input: p, div" in captured.err

    def test_strict_mode(self, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:  # type: ignore[no-untyped-def]
        path = _write(tmp_path, "a.html", "<a><b></a>")
        assert main(["--no-detect", path]) == 0
        assert main(["--no-detect", "--mode", "strict", path]) == 1
        assert "Mismatched closing tag" in capsys.readouterr().err

    def test_recover_mode_always_prints(self, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:  # type: ignore[no-untyped-def]
        path = _write(tmp_path, "a.html", "<div>")
        assert main(["--no-detect", "--mode", "recover", path]) == 0
        assert capsys.readouterr().out == "root\n  div\n"

    def test_gate_skips_parse(self, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:  # type: ignore[no-untyped-def]
        path = _write(tmp_path, "a.html", "<p>x</p>")
        assert main(["--gate", path]) == 1
        captured = capsys.readouterr()
        assert "not parsed" in captured.err
        assert "root" not in captured.out.splitlines()

    def test_json_format(self, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:  # type: ignore[no-untyped-def]
        path = _write(tmp_path, "a.html", "<p>x</p>")
        assert main(["--no-detect", "--format", "json", path]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["children"][0]["tag_name"] == "p"

    def test_levels_format(self, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:  # type: ignore[no-untyped-def]
        path = _write(tmp_path, "a.html", "<p>x</p>")
        assert main(["--no-detect", "--format", "levels", path]) == 0
        assert capsys.readouterr().out == "Element: p\n  Text: x\n"

    def test_missing_file(self, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:  # type: ignore[no-untyped-def]
        assert main([str(tmp_path / "nope.html")]) == 2
        assert "cannot read" in capsys.readouterr().err

    def test_worst_status_wins(self, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:  # type: ignore[no-untyped-def]
        good = _write(tmp_path, "good.html", "<p>x</p>")
        bad = _write(tmp_path, "bad.html", "<p>")
        assert main(["--no-detect", good, bad]) == 1
        assert capsys.readouterr().out.startswith("root\n  p\n    x\n")

    def test_stdin(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("<p>x</p>"))
        assert main([]) == 0
        out = capsys.readouterr().out
        assert "<stdin>: Missing DOCTYPE declaration" in out
