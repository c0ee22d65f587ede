"""Tests for the progress states."""

import pytest

from transcript_functions.domain import ProgressType


class TestProgressType:
    def test_stored_values(self):
        assert [p.value for p in ProgressType] == [
            "queued",
            "analysing",
            "transcribing",
            "saving",
            "done",
            "error",
        ]

    @pytest.mark.parametrize(
        "progress, terminal",
        [
            (ProgressType.QUEUED, False),
            (ProgressType.ANALYSING, False),
            (ProgressType.TRANSCRIBING, False),
            (ProgressType.SAVING, False),
            (ProgressType.DONE, True),
            (ProgressType.ERROR, True),
        ],
    )
    def test_terminal_states(self, progress, terminal):
        assert progress.is_terminal is terminal

    def test_percent_effects(self):
        assert {p for p in ProgressType if p.resets_percent} == {
            ProgressType.ANALYSING,
            ProgressType.SAVING,
        }
        assert {p for p in ProgressType if p.clears_percent} == {ProgressType.DONE}

    def test_unknown_value(self):
        with pytest.raises(ValueError):
            ProgressType("uploading")
