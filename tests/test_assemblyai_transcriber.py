"""Tests for the AssemblyAI transcription adapter."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import assemblyai as aai
import pytest

from transcript_functions.exceptions import TranscriptionError
from transcript_functions.infrastructure import AssemblyAITranscriber


def _provider_paragraph(start_ms, end_ms, text, speaker="A"):
    return SimpleNamespace(
        start=start_ms,
        end=end_ms,
        text=text,
        confidence=0.93,
        words=[SimpleNamespace(speaker=speaker, text=text.split()[0])],
    )


@pytest.fixture
def sdk_transcriber():
    transcription = MagicMock()
    transcription.status = aai.TranscriptStatus.completed
    transcription.audio_duration = 61
    transcription.get_paragraphs.return_value = [
        _provider_paragraph(0, 4500, "Hello there.", speaker="A"),
        _provider_paragraph(4500, 9000, "General Kenobi.", speaker="B"),
    ]
    transcriber = MagicMock()
    transcriber.transcribe.return_value = transcription
    return transcriber


class TestAssemblyAITranscriber:
    async def test_converts_paragraphs(self, sdk_transcriber):
        output = await AssemblyAITranscriber(sdk_transcriber).transcribe(
            "https://example.com/a.mp3"
        )

        assert output.audio_duration == 61
        assert [p.text for p in output.paragraphs] == ["Hello there.", "General Kenobi."]
        assert output.paragraphs[1].start_time == 4.5
        assert output.paragraphs[1].end_time == 9.0
        assert output.paragraphs[1].speaker == "B"
        assert output.paragraphs[0].confidence == 0.93

    async def test_passes_language_and_speaker_labels(self, sdk_transcriber):
        await AssemblyAITranscriber(sdk_transcriber, speaker_labels=False).transcribe(
            "https://example.com/a.mp3", language_code="en"
        )

        url, config = sdk_transcriber.transcribe.call_args.args
        assert url == "https://example.com/a.mp3"
        assert config.speaker_labels is False
        assert config.language_code == "en"

    async def test_paragraph_without_words(self, sdk_transcriber):
        paragraph = _provider_paragraph(0, 1000, "Hi")
        paragraph.words = []
        sdk_transcriber.transcribe.return_value.get_paragraphs.return_value = [paragraph]

        output = await AssemblyAITranscriber(sdk_transcriber).transcribe("u")

        assert output.paragraphs[0].speaker is None

    async def test_provider_error_status(self, sdk_transcriber):
        transcription = sdk_transcriber.transcribe.return_value
        transcription.status = aai.TranscriptStatus.error
        transcription.error = "Download failed"

        with pytest.raises(TranscriptionError) as exc_info:
            await AssemblyAITranscriber(sdk_transcriber).transcribe("https://x/y.mp3")

        assert exc_info.value.audio_url == "https://x/y.mp3"
        assert str(exc_info.value.cause) == "Download failed"

    async def test_sdk_exception_is_wrapped(self, sdk_transcriber):
        sdk_transcriber.transcribe.side_effect = RuntimeError("network")

        with pytest.raises(TranscriptionError) as exc_info:
            await AssemblyAITranscriber(sdk_transcriber).transcribe("u")

        assert isinstance(exc_info.value.__cause__, RuntimeError)
