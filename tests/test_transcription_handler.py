"""Tests for the transcription pipeline handler."""

import pytest

from tests.fakes import FakeTranscriptionService
from transcript_functions.domain import Paragraph, ProgressType, TranscriptionOutput
from transcript_functions.exceptions import (
    MissingAudioSourceError,
    StoreUnavailableError,
    TranscriptionError,
    TranscriptNotFoundError,
)
from transcript_functions.handlers import TranscriptionHandler


def _output(count: int, duration: float | None = 120.0) -> TranscriptionOutput:
    return TranscriptionOutput(
        audio_duration=duration,
        paragraphs=[
            Paragraph(start_time=i * 10.0, end_time=i * 10.0 + 9.0, text=f"part {i}")
            for i in range(count)
        ],
    )


class TestTranscriptionHandler:
    async def test_full_pipeline(self, repository, store, transcript_id):
        service = FakeTranscriptionService(output=_output(4))

        result = await TranscriptionHandler(repository, service).process(transcript_id)

        assert result.progress is ProgressType.DONE
        assert result.paragraph_count == 4
        assert result.audio_duration == 120.0
        assert service.calls == [("https://example.com/interview.mp3", "en")]

        document = store.documents["transcripts/t1"]
        assert document["status"] == {"progress": "done"}
        assert document["metadata"]["audioDuration"] == 120.0

        paragraphs = await repository.get_paragraphs(transcript_id)
        assert [p.text for p in paragraphs] == ["part 0", "part 1", "part 2", "part 3"]
        percents = [batch[1].data["status.percent"] for batch in store.batches]
        assert percents == [25, 50, 75, 100]

    async def test_progress_while_transcribing(self, repository, store, transcript_id):
        seen = []

        async def snapshot():
            seen.append(dict(store.documents["transcripts/t1"]["status"]))

        service = FakeTranscriptionService(output=_output(1), on_call=snapshot)

        await TranscriptionHandler(repository, service).process(transcript_id)

        assert seen == [{"progress": "transcribing", "percent": 0}]

    async def test_without_duration(self, repository, store, transcript_id):
        service = FakeTranscriptionService(output=_output(1, duration=None))

        await TranscriptionHandler(repository, service).process(transcript_id)

        assert "audioDuration" not in store.documents["transcripts/t1"]["metadata"]

    async def test_no_paragraphs(self, repository, store, transcript_id):
        service = FakeTranscriptionService(output=_output(0))

        result = await TranscriptionHandler(repository, service).process(transcript_id)

        assert result.paragraph_count == 0
        assert store.documents["transcripts/t1"]["status"] == {"progress": "done"}

    async def test_provider_failure_marks_error(self, repository, store, transcript_id):
        error = TranscriptionError("https://example.com/interview.mp3")
        service = FakeTranscriptionService(error=error)

        with pytest.raises(TranscriptionError):
            await TranscriptionHandler(repository, service).process(transcript_id)

        status = store.documents["transcripts/t1"]["status"]
        assert status["progress"] == "error"
        assert status["percent"] == 0
        assert status["error"]["kind"] == "TranscriptionError"
        assert "code" not in status["error"]

    async def test_missing_audio_marks_error(self, repository, store, transcript_id):
        del store.documents["transcripts/t1"]["audioUrl"]
        service = FakeTranscriptionService(output=_output(1))

        with pytest.raises(MissingAudioSourceError):
            await TranscriptionHandler(repository, service).process(transcript_id)

        assert service.calls == []
        status = store.documents["transcripts/t1"]["status"]
        assert status["progress"] == "error"
        assert status["error"]["kind"] == "MissingAudioSourceError"

    @pytest.mark.parametrize("progress", ["done", "error"])
    async def test_terminal_transcript_is_skipped(
        self, repository, store, transcript_id, progress
    ):
        store.documents["transcripts/t1"]["status"] = {"progress": progress}
        service = FakeTranscriptionService(output=_output(2))

        result = await TranscriptionHandler(repository, service).process(transcript_id)

        assert result.progress.value == progress
        assert result.paragraph_count == 0
        assert service.calls == []
        assert store.documents["transcripts/t1"]["status"] == {"progress": progress}

    async def test_missing_transcript(self, repository):
        service = FakeTranscriptionService(output=_output(1))

        with pytest.raises(TranscriptNotFoundError):
            await TranscriptionHandler(repository, service).process("ghost")

    async def test_existing_error_record_without_kind(self, repository, store, transcript_id):
        store.documents["transcripts/t1"]["status"]["error"] = {
            "name": "Error",
            "message": "previous attempt",
        }
        service = FakeTranscriptionService(output=_output(1))

        result = await TranscriptionHandler(repository, service).process(transcript_id)

        assert result.progress is ProgressType.DONE

    async def test_original_error_survives_failed_error_write(
        self, repository, transcript_id, monkeypatch
    ):
        error = TranscriptionError("https://example.com/interview.mp3")
        service = FakeTranscriptionService(error=error)

        async def unavailable(transcript_id, error):
            raise StoreUnavailableError("transcripts/t1")

        monkeypatch.setattr(repository, "fail", unavailable)

        with pytest.raises(TranscriptionError) as exc_info:
            await TranscriptionHandler(repository, service).process(transcript_id)

        assert exc_info.value is error
