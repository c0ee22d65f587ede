"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod

from transcript_functions.domain.models import TranscriptionOutput


class TranscriptionService(ABC):
    """Abstract base class for speech-to-text backends."""

    @abstractmethod
    async def transcribe(
        self, audio_url: str, language_code: str | None = None
    ) -> TranscriptionOutput:
        """
        Transcribes audio and returns its paragraphs.

        Args:
            audio_url: Location of the audio, readable by the provider.
            language_code: Optional spoken language hint.

        Returns:
            TranscriptionOutput with the paragraphs ordered by start time.

        Raises:
            TranscriptionError: If transcription fails.
        """
        pass
