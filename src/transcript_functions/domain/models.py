"""Domain models for transcripts and their paragraphs."""

import traceback
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from transcript_functions.domain.progress import ProgressType

# Deeper cause chains are truncated.
MAX_CAUSE_DEPTH = 5


class StoredModel(BaseModel):
    """Base for records persisted with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_store(self) -> dict[str, Any]:
        """Returns the document body, omitting every unset field."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ErrorRecord(StoredModel):
    """
    Serializable description of a failure, stored under ``status.error``.

    Only these fields are ever written, so arbitrary exception objects never
    reach the store. Records written by other producers may name the kind
    ``name`` instead, or omit it.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    kind: str = Field(default="Error", validation_alias=AliasChoices("kind", "name"))
    message: str = ""
    code: str | int | None = None
    stack: str | None = None
    cause: "ErrorRecord | None" = None

    @classmethod
    def from_exception(
        cls, error: BaseException, include_stack: bool = True, _depth: int = 0
    ) -> "ErrorRecord":
        """
        Flattens an exception and its cause chain into a record.

        The cause is taken from ``__cause__`` or, failing that, from a ``cause``
        attribute holding another exception.
        """
        code = getattr(error, "code", None)
        if not isinstance(code, (str, int)) or isinstance(code, bool):
            code = None

        stack = None
        if include_stack and error.__traceback__ is not None:
            stack = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )

        cause = error.__cause__
        if cause is None and isinstance(getattr(error, "cause", None), BaseException):
            cause = error.cause

        cause_record = None
        if cause is not None and cause is not error and _depth < MAX_CAUSE_DEPTH:
            cause_record = cls.from_exception(cause, include_stack=False, _depth=_depth + 1)

        return cls(
            kind=type(error).__name__,
            message=str(error),
            code=code,
            stack=stack,
            cause=cause_record,
        )


class TranscriptStatus(StoredModel):
    """Progress information mirrored to the transcript document."""

    progress: ProgressType | None = None
    percent: int | None = Field(default=None, ge=0, le=100)
    error: ErrorRecord | None = None


class TranscriptMetadata(StoredModel):
    """Descriptive data about the transcribed audio."""

    audio_duration: float | None = Field(default=None, ge=0)
    language_code: str | None = None


class Transcript(StoredModel):
    """Root record of one transcription job."""

    id: str | None = Field(default=None, exclude=True)
    name: str | None = None
    audio_url: str | None = None
    playback_gs_url: str | None = None
    status: TranscriptStatus = Field(default_factory=TranscriptStatus)
    metadata: TranscriptMetadata = Field(default_factory=TranscriptMetadata)


class Paragraph(StoredModel):
    """
    An immutable recognized-speech segment of a transcript.

    Paragraphs may be written by other producers, so every field is optional
    and unknown fields are kept as they are.
    """

    start_time: float | None = Field(default=None, ge=0)
    end_time: float | None = Field(default=None, ge=0)
    text: str | None = None
    speaker: str | None = None
    confidence: float | None = None


class TranscriptionOutput(BaseModel, frozen=True):
    """What a transcription provider returns for one audio file."""

    audio_duration: float | None = None
    paragraphs: list[Paragraph]


class TranscriptionResult(BaseModel, frozen=True):
    """Result of running the transcription pipeline for a transcript."""

    transcript_id: str
    progress: ProgressType
    paragraph_count: int = 0
    audio_duration: float | None = None
