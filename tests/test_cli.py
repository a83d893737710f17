"""Integration tests for the CLI main() function."""

from __future__ import annotations

import json

import pytest

from khaikhai.cli import main


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _run_main(args: list[str], capsys) -> tuple[int, str, str]:
    """Run main() and return (exit_code, stdout, stderr)."""
    code = main(args)
    captured = capsys.readouterr()
    return code, captured.out, captured.err


def _feed_input(monkeypatch, answers: list[str]) -> None:
    """Answer prompts from a list; running out raises EOFError like a closed stdin."""
    remaining = iter(answers)

    def fake_input(*args):
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


# ---------------------------------------------------------------------------
# Basic invocations
# ---------------------------------------------------------------------------

class TestMainBasicInvocations:

    def test_two_items_terminal(self, capsys, monkeypatch) -> None:
        """main() with two items asks once and prints the ranking."""
        _feed_input(monkeypatch, ["2"])
        code, out, err = _run_main(["Tea", "Coffee", "--no-color"], capsys)

        assert code == 0
        assert "YOUR PREFERENCE RANKING" in out
        ranking_section = out[out.index("YOUR PREFERENCE RANKING"):]
        assert ranking_section.index("Coffee") < ranking_section.index("Tea")

    def test_verbose(self, capsys, monkeypatch) -> None:
        """--verbose reports strategy and counts on stderr."""
        _feed_input(monkeypatch, ["1"])
        code, out, err = _run_main(["Tea", "Coffee", "--verbose"], capsys)

        assert code == 0
        assert "tournament strategy" in err
        assert "Asked 1 questions" in err

    def test_version(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert "khaikhai" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Output format tests
# ---------------------------------------------------------------------------

class TestMainOutputFormats:

    def test_format_json(self, capsys, monkeypatch) -> None:
        """--format json keeps prompts off stdout and prints valid JSON."""
        _feed_input(monkeypatch, ["1", "1", "1"])
        code, out, err = _run_main(["Tea", "Coffee", "Juice", "--format", "json"], capsys)

        assert code == 0
        parsed = json.loads(out)
        assert [entry["item"] for entry in parsed["ranking"]] == ["Tea", "Coffee", "Juice"]
        assert parsed["summary"]["questions_asked"] == 3
        assert "Which do you prefer?" in err

    def test_format_markdown(self, capsys, monkeypatch) -> None:
        _feed_input(monkeypatch, ["1"])
        code, out, err = _run_main(["Tea", "Coffee", "--format", "markdown"], capsys)

        assert code == 0
        assert "# Preference Ranking" in out
        assert "1. Tea" in out

    def test_output_file(self, capsys, monkeypatch, tmp_path) -> None:
        """--output writes the report to a file."""
        _feed_input(monkeypatch, ["2"])
        out_file = tmp_path / "ranking.json"
        code, out, err = _run_main(
            ["Tea", "Coffee", "--format", "json", "--output", str(out_file)],
            capsys,
        )

        assert code == 0
        assert "Report saved to" in err
        assert json.loads(out_file.read_text(encoding="utf-8"))["ranking"][0]["item"] == "Coffee"


# ---------------------------------------------------------------------------
# Item entry
# ---------------------------------------------------------------------------

class TestMainItemEntry:

    def test_import(self, capsys, monkeypatch) -> None:
        """--import splits a comma-separated list."""
        _feed_input(monkeypatch, ["1", "1", "1"])
        code, out, err = _run_main(
            ["--import", "Apple, Banana, Cherry", "--format", "json"], capsys
        )

        assert code == 0
        assert len(json.loads(out)["ranking"]) == 3

    def test_import_duplicates_count_mismatch(self, capsys) -> None:
        """Importing "Apple, Banana, Apple" for 3 items fails to start."""
        code, out, err = _run_main(
            ["--count", "3", "--import", "Apple, Banana, Apple"], capsys
        )

        assert code == 1
        assert "exactly 3 items" in err

    def test_import_duplicates_without_count(self, capsys) -> None:
        """The count defaults to the number of names given."""
        code, out, err = _run_main(["--import", "Apple, Banana, Apple"], capsys)
        assert code == 1
        assert "exactly 3 items" in err

    def test_single_item(self, capsys) -> None:
        code, out, err = _run_main(["Tea"], capsys)
        assert code == 1
        assert "at least 2" in err

    def test_duplicate_positional_items(self, capsys) -> None:
        code, out, err = _run_main(["Tea", "Tea"], capsys)
        assert code == 1
        assert "already exists" in err

    def test_invalid_count(self, capsys) -> None:
        code, out, err = _run_main(["--count", "many", "A", "B"], capsys)
        assert code == 1
        assert "Not a valid item count" in err

    def test_interactive_entry(self, capsys, monkeypatch) -> None:
        """Items typed at the prompt are re-asked on duplicates."""
        _feed_input(monkeypatch, ["3", "Tea", "Tea", "Coffee", "Juice", "1", "2"])
        code, out, err = _run_main(["--format", "json"], capsys)

        assert code == 0
        parsed = json.loads(out)
        assert [entry["item"] for entry in parsed["ranking"]] == ["Juice", "Tea", "Coffee"]
        assert parsed["summary"]["inferred"] == 1
        assert "already exists" in err

    def test_interactive_bad_count(self, capsys, monkeypatch) -> None:
        """An invalid typed count is asked again."""
        _feed_input(monkeypatch, ["1", "2", "Tea", "Coffee", "1"])
        code, out, err = _run_main(["--format", "json"], capsys)

        assert code == 0
        assert "at least 2" in err

    def test_large_count_advisory(self, capsys, monkeypatch) -> None:
        """A large count prints a warning, then continues."""
        _feed_input(monkeypatch, [])
        code, out, err = _run_main(["--count", "60", "--format", "json"], capsys)

        assert "many comparisons" in err
        assert code == 130


# ---------------------------------------------------------------------------
# Settings and interruption
# ---------------------------------------------------------------------------

class TestMainSettings:

    def test_quick_preset(self, capsys, monkeypatch) -> None:
        """--preset quick uses quicksort even for small sets."""
        _feed_input(monkeypatch, ["1"] * 10)
        code, out, err = _run_main(
            ["A", "B", "C", "D", "--preset", "quick", "--format", "json"], capsys
        )

        assert code == 0
        parsed = json.loads(out)
        assert parsed["summary"]["strategy"] == "quicksort"
        assert parsed["summary"]["complete"] is True

    def test_strategy_flag(self, capsys, monkeypatch) -> None:
        _feed_input(monkeypatch, ["1"] * 10)
        code, out, err = _run_main(
            ["A", "B", "C", "--strategy", "quicksort", "--format", "json"], capsys
        )
        assert code == 0
        assert json.loads(out)["summary"]["strategy"] == "quicksort"

    def test_play_again(self, capsys, monkeypatch) -> None:
        """--play-again restarts the same items with fresh answers."""
        _feed_input(monkeypatch, ["1", "y", "2", "n"])
        code, out, err = _run_main(["Tea", "Coffee", "--play-again", "--no-color"], capsys)

        assert code == 0
        assert out.count("YOUR PREFERENCE RANKING") == 2
        assert out.count("Play again") == 2
        first, second = out.split("YOUR PREFERENCE RANKING")[1:]
        assert first.index("Tea") < first.index("Coffee")
        assert second.index("Coffee") < second.index("Tea")

    def test_single_round_by_default(self, capsys, monkeypatch) -> None:
        _feed_input(monkeypatch, ["1"])
        code, out, err = _run_main(["Tea", "Coffee", "--no-color"], capsys)
        assert code == 0
        assert "Play again" not in out

    def test_eof_interrupts(self, capsys, monkeypatch) -> None:
        """Closing stdin mid-session exits 130."""
        _feed_input(monkeypatch, [])
        code, out, err = _run_main(["Tea", "Coffee"], capsys)
        assert code == 130
        assert "Interrupted" in err
