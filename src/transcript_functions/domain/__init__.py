"""Domain layer exports."""

from transcript_functions.domain.models import (
    ErrorRecord,
    Paragraph,
    Transcript,
    TranscriptionOutput,
    TranscriptionResult,
    TranscriptMetadata,
    TranscriptStatus,
)
from transcript_functions.domain.progress import ProgressType
from transcript_functions.domain.transcript_exporter import TranscriptExporter

__all__ = [
    "ErrorRecord",
    "Paragraph",
    "ProgressType",
    "Transcript",
    "TranscriptExporter",
    "TranscriptionOutput",
    "TranscriptionResult",
    "TranscriptMetadata",
    "TranscriptStatus",
]
