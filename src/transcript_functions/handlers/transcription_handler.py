"""Handler that runs the transcription pipeline for a new transcript."""

import logging

from transcript_functions.domain import ProgressType, TranscriptionResult
from transcript_functions.exceptions import MissingAudioSourceError
from transcript_functions.infrastructure.interfaces import TranscriptionService
from transcript_functions.repositories import TranscriptRepository

logger = logging.getLogger(__name__)


class TranscriptionHandler:
    """Orchestrates transcription of a transcript and mirrors its progress."""

    def __init__(
        self,
        repository: TranscriptRepository,
        transcription_service: TranscriptionService,
    ):
        self._repository = repository
        self._transcription_service = transcription_service

    async def process(self, transcript_id: str) -> TranscriptionResult:
        """
        Transcribes a transcript's audio and saves its paragraphs.

        Transcripts already in a terminal state are left alone. Any failure
        after that check is stored on the transcript, which moves to ERROR, and
        is then re-raised.

        Args:
            transcript_id: The transcript to process.

        Returns:
            TranscriptionResult describing the final state.

        Raises:
            TranscriptNotFoundError: If the transcript does not exist.
            MissingAudioSourceError: If the transcript has no audio url.
            TranscriptionError: If the provider fails.
        """
        transcript = await self._repository.get_transcript(transcript_id)
        progress = transcript.status.progress

        if progress is not None and progress.is_terminal:
            logger.info(
                "Transcript already finished, skipping",
                extra={"transcript_id": transcript_id, "progress": progress.value},
            )
            return TranscriptionResult(transcript_id=transcript_id, progress=progress)

        logger.info("Processing transcript", extra={"transcript_id": transcript_id})

        try:
            await self._repository.set_progress(transcript_id, ProgressType.ANALYSING)

            if not transcript.audio_url:
                raise MissingAudioSourceError(transcript_id)

            await self._repository.set_progress(transcript_id, ProgressType.TRANSCRIBING)

            output = await self._transcription_service.transcribe(
                transcript.audio_url, transcript.metadata.language_code
            )

            if output.audio_duration is not None:
                await self._repository.set_duration(transcript_id, output.audio_duration)

            await self._repository.set_progress(transcript_id, ProgressType.SAVING)

            total = len(output.paragraphs)
            for index, paragraph in enumerate(output.paragraphs, start=1):
                percent = round(100 * index / total)
                await self._repository.add_paragraph(transcript_id, paragraph, percent)

            await self._repository.set_progress(transcript_id, ProgressType.DONE)

        except Exception as e:
            logger.exception(
                "Transcription pipeline failed",
                extra={"transcript_id": transcript_id},
            )
            try:
                await self._repository.fail(transcript_id, e)
            except Exception:
                logger.exception(
                    "Failed to record transcript failure",
                    extra={"transcript_id": transcript_id},
                )
            raise e

        logger.info(
            "Transcript processed",
            extra={"transcript_id": transcript_id, "paragraph_count": total},
        )
        return TranscriptionResult(
            transcript_id=transcript_id,
            progress=ProgressType.DONE,
            paragraph_count=total,
            audio_duration=output.audio_duration,
        )
