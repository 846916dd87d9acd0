"""Tests for the session loop: prompt, counter, exit keywords, end of input."""

from __future__ import annotations

from collections.abc import Sequence
from unittest.mock import MagicMock, call, patch

import pytest

from taskshell.core.models import CommandLine, SessionCounter
from taskshell.core.segmenter import segment
from taskshell.core.session import Session, is_exit_command, render_prompt


def _session(lines: Sequence[str | None]) -> tuple[Session, MagicMock, MagicMock, MagicMock]:
    line_source = MagicMock()
    line_source.read_line.side_effect = list(lines)
    sequencer = MagicMock()
    reporter = MagicMock()
    return Session(line_source, sequencer, reporter), line_source, sequencer, reporter


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

class TestRenderPrompt:
    def test_first_prompt(self) -> None:
        assert render_prompt(SessionCounter()) == "shell[1]% "

    def test_reflects_counter(self) -> None:
        assert render_prompt(SessionCounter(value=12)) == "shell[12]% "


class TestIsExitCommand:
    @pytest.mark.parametrize("line", ["exit", "EXIT", "quit", "Quit", "qUiT"])
    def test_exit_keywords(self, line: str) -> None:
        assert is_exit_command(line) is True

    @pytest.mark.parametrize(
        "line", ["", "exit now", "exit; ls", "quitter", "ls", "  exit  ", "quit\t"],
    )
    def test_non_exit_lines(self, line: str) -> None:
        assert is_exit_command(line) is False


# ---------------------------------------------------------------------------
# Loop behaviour
# ---------------------------------------------------------------------------

class TestSessionRun:
    @pytest.mark.parametrize("keyword", ["exit", "EXIT", "quit"])
    def test_exit_keyword_skips_segmenter_and_sequencer(self, keyword: str) -> None:
        session, _src, sequencer, reporter = _session([keyword])
        with patch("taskshell.core.session.segment") as mock_segment:
            session.run()

        mock_segment.assert_not_called()
        sequencer.run.assert_not_called()
        reporter.session_closed.assert_called_once_with()

    def test_padded_keyword_is_a_command_line(self) -> None:
        session, _src, sequencer, reporter = _session([" exit", "exit"])
        session.run()
        sequencer.run.assert_called_once_with(segment(" exit"))
        reporter.session_closed.assert_called_once_with()

    def test_end_of_input_ends_session(self) -> None:
        session, _src, sequencer, reporter = _session([None])
        session.run()
        sequencer.run.assert_not_called()
        reporter.session_closed.assert_called_once_with()

    def test_lines_are_segmented_and_sequenced(self) -> None:
        session, _src, sequencer, _rep = _session(["A & B ; C", "exit"])
        session.run()
        sequencer.run.assert_called_once_with(segment("A & B ; C"))

    def test_prompt_counts_processed_lines(self) -> None:
        session, line_source, _seq, _rep = _session(["ls", "", " ; & ", "quit"])
        session.run()

        assert line_source.read_line.call_args_list == [
            call("shell[1]% "),
            call("shell[2]% "),
            call("shell[3]% "),
            call("shell[4]% "),
        ]
        assert session.counter.value == 4

    def test_empty_line_sequences_empty_command_line(self) -> None:
        session, _src, sequencer, _rep = _session(["   ", None])
        session.run()
        sequencer.run.assert_called_once_with(CommandLine())

    def test_exit_does_not_advance_counter(self) -> None:
        session, _src, _seq, _rep = _session(["exit"])
        session.run()
        assert session.counter.value == 1


class TestRunLine:
    def test_returns_sequencer_records(self) -> None:
        session, _src, sequencer, _rep = _session([])
        sequencer.run.return_value = ("sentinel",)
        assert session.run_line("echo hi") == ("sentinel",)
        assert session.counter.value == 2

    def test_shared_counter(self) -> None:
        counter = SessionCounter(value=5)
        session = Session(MagicMock(), MagicMock(), MagicMock(), counter=counter)
        session.run_line("echo")
        assert counter.value == 6
