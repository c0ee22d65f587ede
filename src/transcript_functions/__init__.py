from transcript_functions.config import AppConfig, load_config
from transcript_functions.domain import (
    ErrorRecord,
    Paragraph,
    ProgressType,
    Transcript,
)
from transcript_functions.exceptions import (
    BatchWriteFailedError,
    DocumentNotFoundError,
    DocumentStoreError,
    InvalidTranscriptIdError,
    PermissionDeniedError,
    StoreUnavailableError,
    TranscriptionError,
    TranscriptNotFoundError,
)
from transcript_functions.logging import setup_logging

__all__ = [
    "setup_logging",
    "load_config",
    "AppConfig",
    "ErrorRecord",
    "Paragraph",
    "ProgressType",
    "Transcript",
    "BatchWriteFailedError",
    "DocumentNotFoundError",
    "DocumentStoreError",
    "InvalidTranscriptIdError",
    "PermissionDeniedError",
    "StoreUnavailableError",
    "TranscriptionError",
    "TranscriptNotFoundError",
]
