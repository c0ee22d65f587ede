from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from transcript_functions.domain import ProgressType


class ApiModel(BaseModel):
    """Response body serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeleteTranscriptResponse(ApiModel):
    """Outcome of a transcript deletion."""

    transcript_id: str
    success: bool
    deleted_paragraphs: int = 0


class TranscriptionResponse(ApiModel):
    """Outcome of a transcription run."""

    transcript_id: str
    progress: ProgressType
    paragraph_count: int
    audio_duration: float | None = None
