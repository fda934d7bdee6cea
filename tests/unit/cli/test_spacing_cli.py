"""Unit tests for the cjk-spacing command line interface."""

import io
from pathlib import Path

import pytest

from cjk_spacing.cli.spacing import main


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


@pytest.mark.unit
class TestSpacingCli:
    def test_prints_spaced_file(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        source = _write(tmp_path / "note.md", "中文english中文\n")

        assert main([str(source)]) == 0
        assert capsys.readouterr().out == "中文 english 中文\n"
        assert source.read_text(encoding="utf-8") == "中文english中文\n"

    def test_in_place(self, tmp_path: Path) -> None:
        source = _write(tmp_path / "note.md", "中文english中文\n")

        assert main(["--in-place", str(source)]) == 0
        assert source.read_text(encoding="utf-8") == "中文 english 中文\n"

    def test_check_reports_files_that_would_change(
        self, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        dirty = _write(tmp_path / "dirty.md", "中文english\n")
        clean = _write(tmp_path / "clean.md", "中文 english\n")

        assert main(["--check", str(dirty), str(clean)]) == 1
        out = capsys.readouterr().out
        assert str(dirty) in out
        assert str(clean) not in out
        assert dirty.read_text(encoding="utf-8") == "中文english\n"

    def test_check_passes_on_clean_files(self, tmp_path: Path) -> None:
        clean = _write(tmp_path / "clean.md", "中文 english\n")
        assert main(["--check", str(clean)]) == 0

    def test_stdin_to_stdout(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("价格100元"))

        assert main([]) == 0
        assert capsys.readouterr().out == "价格 100 元"

    def test_stdin_check(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("价格100元"))
        assert main(["--check", "-"]) == 1

    def test_option_overrides(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("你好-世界"))

        assert main(["--after-cjk", "", "--before-cjk", ""]) == 0
        assert capsys.readouterr().out == "你好-世界"

    def test_profile(self, tmp_path: Path) -> None:
        source = _write(tmp_path / "note.md", "中文english   \n")

        assert main(["--profile", "tidy", "--in-place", str(source)]) == 0
        assert source.read_text(encoding="utf-8") == "中文 english\n"

    def test_profile_file_from_settings(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config = _write(
            tmp_path / "profiles.yml",
            "profiles:\n  trim:\n    - trim_trailing_whitespace\n",
        )
        source = _write(tmp_path / "note.md", "中文english \n")
        monkeypatch.setenv("CJK_SPACING_RULES_CONFIG", str(config))

        assert main(["--profile", "trim", "--in-place", str(source)]) == 0
        assert source.read_text(encoding="utf-8") == "中文english\n"

    def test_unknown_profile_is_an_error(self, capsys: pytest.CaptureFixture) -> None:
        assert main(["--profile", "__missing__"]) == 2
        assert "not found" in capsys.readouterr().err

    def test_missing_file_is_an_error(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        assert main([str(tmp_path / "absent.md")]) == 2
        assert "Error" in capsys.readouterr().err

    def test_stdin_with_in_place_is_an_error(self) -> None:
        assert main(["--in-place", "-"]) == 2

    def test_in_place_and_check_are_exclusive(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--in-place", "--check", "a.md"])
        assert exc_info.value.code == 2

    def test_list_rules(self, capsys: pytest.CaptureFixture) -> None:
        assert main(["--list-rules"]) == 0
        out = capsys.readouterr().out
        assert "space_between_cjk_and_english [spacing]" in out
        assert "trim_trailing_whitespace [content]" in out
        assert "profiles:" in out
