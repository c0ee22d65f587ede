"""Custom exceptions for the transcript functions."""


class DocumentStoreError(Exception):
    """Base class for failures reported by the document store."""

    def __init__(self, path: str, message: str, cause: Exception | None = None):
        self.path = path
        self.cause = cause
        super().__init__(message)


class StoreUnavailableError(DocumentStoreError):
    """Raised when the document store cannot be reached or times out."""

    def __init__(self, path: str, cause: Exception | None = None):
        super().__init__(path, f"Document store unavailable for '{path}'", cause)


class PermissionDeniedError(DocumentStoreError):
    """Raised when the store rejects the caller's credentials."""

    def __init__(self, path: str, cause: Exception | None = None):
        super().__init__(path, f"Permission denied for '{path}'", cause)


class BatchWriteFailedError(DocumentStoreError):
    """Raised when an atomic batch is rejected; none of its writes are applied."""

    def __init__(self, paths: list[str], cause: Exception | None = None):
        self.paths = paths
        super().__init__(
            ", ".join(paths),
            f"Atomic batch of {len(paths)} write(s) failed",
            cause,
        )


class DocumentNotFoundError(DocumentStoreError):
    """Raised when reading a document that does not exist."""

    def __init__(self, path: str, cause: Exception | None = None):
        super().__init__(path, f"Document '{path}' not found", cause)


class TranscriptNotFoundError(DocumentNotFoundError):
    """Raised when a transcript document does not exist."""

    def __init__(self, transcript_id: str, path: str, cause: Exception | None = None):
        self.transcript_id = transcript_id
        super().__init__(path, cause)


class TranscriptionError(Exception):
    """Raised when the transcription provider fails."""

    def __init__(self, audio_url: str, cause: Exception | None = None):
        self.audio_url = audio_url
        self.cause = cause
        super().__init__(f"Failed to transcribe audio '{audio_url}'")


class MissingAudioSourceError(Exception):
    """Raised when a transcript has no audio to transcribe."""

    def __init__(self, transcript_id: str):
        self.transcript_id = transcript_id
        super().__init__(f"Transcript '{transcript_id}' has no audio source")


class InvalidTranscriptIdError(ValueError):
    """Raised when a transcript id cannot name a document."""

    def __init__(self, transcript_id: str):
        self.transcript_id = transcript_id
        super().__init__(f"Invalid transcript id: {transcript_id!r}")
