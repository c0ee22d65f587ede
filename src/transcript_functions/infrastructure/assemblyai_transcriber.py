"""AssemblyAI implementation of the TranscriptionService interface."""

import asyncio
import logging

import assemblyai as aai

from transcript_functions.domain.models import Paragraph, TranscriptionOutput
from transcript_functions.exceptions import TranscriptionError
from transcript_functions.infrastructure.interfaces import TranscriptionService

logger = logging.getLogger(__name__)


def _ms_to_seconds(value: int | float | None) -> float:
    return (value or 0) / 1000


class AssemblyAITranscriber(TranscriptionService):
    """Handles audio transcription using AssemblyAI."""

    def __init__(self, transcriber: aai.Transcriber, speaker_labels: bool = True):
        self._transcriber = transcriber
        self._speaker_labels = speaker_labels

    async def transcribe(
        self, audio_url: str, language_code: str | None = None
    ) -> TranscriptionOutput:
        """
        Transcribes remote audio using AssemblyAI.

        The SDK blocks while polling for the result, so it runs in a worker
        thread. Paragraph timestamps arrive in milliseconds and are converted
        to seconds.
        """
        config = aai.TranscriptionConfig(
            speaker_labels=self._speaker_labels,
            language_code=language_code,
        )
        try:
            transcription = await asyncio.to_thread(
                self._transcriber.transcribe, audio_url, config
            )

            if transcription.status == aai.TranscriptStatus.error:
                raise TranscriptionError(audio_url, Exception(transcription.error))

            provider_paragraphs = await asyncio.to_thread(transcription.get_paragraphs)
        except TranscriptionError:
            logger.error("AssemblyAI reported an error", extra={"audio_url": audio_url})
            raise
        except Exception as e:
            logger.exception("AssemblyAI transcription failed", extra={"audio_url": audio_url})
            raise TranscriptionError(audio_url, e) from e

        paragraphs = [
            Paragraph(
                start_time=_ms_to_seconds(p.start),
                end_time=_ms_to_seconds(p.end),
                text=p.text,
                speaker=p.words[0].speaker if p.words else None,
                confidence=p.confidence,
            )
            for p in provider_paragraphs
        ]

        logger.info(
            "Audio transcription successful",
            extra={
                "audio_url": audio_url,
                "paragraph_count": len(paragraphs),
                "audio_duration": transcription.audio_duration,
            },
        )
        return TranscriptionOutput(
            audio_duration=transcription.audio_duration,
            paragraphs=paragraphs,
        )
