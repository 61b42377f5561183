"""Tests for the CLI module: arg parsing, exit codes, output formats."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from scenariotree.cli import (
    CliOptions,
    build_parser,
    compile_file,
    main,
    render_modifiers,
    watch_loop,
)

from samples import TWO_CHILDREN

# ---------------------------------------------------------------------------
# Arg parsing via build_parser
# ---------------------------------------------------------------------------


class TestArgParsing:
    def test_input_only(self) -> None:
        p = build_parser()
        ns = p.parse_args(["spec.tree"])
        assert ns.input == "spec.tree"
        assert ns.output is None
        assert ns.format is None

    def test_output_and_format(self) -> None:
        p = build_parser()
        ns = p.parse_args(["spec.tree", "-o", "out.json", "--format", "json"])
        assert ns.output == "out.json"
        assert ns.format == "json"

    def test_unknown_format_rejected(self) -> None:
        p = build_parser()
        with pytest.raises(SystemExit):
            p.parse_args(["spec.tree", "--format", "yaml"])

    def test_watch_and_debug(self) -> None:
        p = build_parser()
        ns = p.parse_args(["spec.tree", "--watch", "--debug"])
        assert ns.watch is True
        assert ns.debug is True


# ---------------------------------------------------------------------------
# Output rendering
# ---------------------------------------------------------------------------


class TestRenderModifiers:
    def test_text(self) -> None:
        out = render_modifiers("f", {"when a b": "whenAB"}, "text")
        assert out == "when a b -> whenAB\n"

    def test_text_empty(self) -> None:
        assert render_modifiers("f", {}, "text") == ""

    def test_json(self) -> None:
        out = render_modifiers("f.t.sol", {"when a": "whenA"}, "json")
        assert json.loads(out) == {"file_name": "f.t.sol", "modifiers": {"when a": "whenA"}}


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


class TestExitCodes:
    def test_success(self, tmp_path: Path, capsys) -> None:
        tree = tmp_path / "ok.tree"
        tree.write_text(TWO_CHILDREN, encoding="utf-8")
        assert main([str(tree)]) == 0
        assert capsys.readouterr().out == (
            "when stuff called -> whenStuffCalled\n"
            "when not stuff called -> whenNotStuffCalled\n"
        )

    def test_parse_error_returns_1(self, tmp_path: Path, capsys) -> None:
        tree = tmp_path / "bad.tree"
        tree.write_text("file.sol\nwhen x\n", encoding="utf-8")
        assert main([str(tree)]) == 1
        err = capsys.readouterr().err
        assert "error: unexpected WHEN keyword" in err
        assert f"{tree}:2:1" in err

    def test_lex_error_returns_1(self, tmp_path: Path, capsys) -> None:
        tree = tmp_path / "empty.tree"
        tree.write_text("", encoding="utf-8")
        assert main([str(tree)]) == 1
        assert "missing file name" in capsys.readouterr().err

    def test_missing_file_returns_2(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "nope.tree")]) == 2

    def test_invalid_utf8_returns_2(self, tmp_path: Path, capsys) -> None:
        tree = tmp_path / "latin1.tree"
        tree.write_bytes(b"file.sol\n\xff\xfe\n")
        assert main([str(tree)]) == 2
        assert capsys.readouterr().err.startswith("error:")

    def test_invalid_utf8_config_returns_2(self, tmp_path: Path, capsys) -> None:
        (tmp_path / "scenariotree.toml").write_bytes(b"[output]\nformat = \"\xff\"\n")
        tree = tmp_path / "spec.tree"
        tree.write_text("f", encoding="utf-8")
        assert main([str(tree)]) == 2
        assert capsys.readouterr().err.startswith("error:")


# ---------------------------------------------------------------------------
# Output destinations and flags
# ---------------------------------------------------------------------------


class TestOutput:
    def test_json_to_file(self, tmp_path: Path) -> None:
        tree = tmp_path / "spec.tree"
        tree.write_text(TWO_CHILDREN, encoding="utf-8")
        out = tmp_path / "out.json"
        assert main([str(tree), "--format", "json", "-o", str(out)]) == 0
        assert json.loads(out.read_text(encoding="utf-8")) == {
            "file_name": "two_children.t.sol",
            "modifiers": {
                "when stuff called": "whenStuffCalled",
                "when not stuff called": "whenNotStuffCalled",
            },
        }

    def test_debug_dumps_ast(self, tmp_path: Path, capsys) -> None:
        tree = tmp_path / "spec.tree"
        tree.write_text(TWO_CHILDREN, encoding="utf-8")
        assert main([str(tree), "--debug"]) == 0
        err = capsys.readouterr().err
        assert "Root two_children.t.sol" in err
        assert "  Condition 'when stuff called'" in err


# ---------------------------------------------------------------------------
# compile_file smoke test
# ---------------------------------------------------------------------------


class TestCompileFile:
    def test_basic(self, tmp_path: Path) -> None:
        tree = tmp_path / "simple.tree"
        tree.write_text("file.sol\n└── when only owner\n   └── it works\n", encoding="utf-8")
        opts = CliOptions(
            input_file=tree,
            output_file=None,
            format="text",
            watch=False,
            debug=False,
        )
        assert compile_file(opts) == "when only owner -> whenOnlyOwner\n"


# ---------------------------------------------------------------------------
# Watch loop
# ---------------------------------------------------------------------------


class TestWatchLoop:
    def _options(self, tree: Path) -> CliOptions:
        return CliOptions(
            input_file=tree,
            output_file=None,
            format="text",
            watch=True,
            debug=False,
        )

    def _stop(self, seconds: float) -> None:
        raise KeyboardInterrupt

    def test_invalid_utf8_reported(self, tmp_path: Path, capsys, monkeypatch) -> None:
        tree = tmp_path / "latin1.tree"
        tree.write_bytes(b"file.sol\n\xff\xfe\n")
        monkeypatch.setattr("scenariotree.cli.time.sleep", self._stop)
        watch_loop(self._options(tree))
        assert "error:" in capsys.readouterr().err

    def test_parse_error_reported(self, tmp_path: Path, capsys, monkeypatch) -> None:
        tree = tmp_path / "bad.tree"
        tree.write_text("file.sol\nwhen x\n", encoding="utf-8")
        monkeypatch.setattr("scenariotree.cli.time.sleep", self._stop)
        watch_loop(self._options(tree))
        assert "unexpected WHEN keyword" in capsys.readouterr().err
