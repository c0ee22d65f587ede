"""Infrastructure interface exports."""

from transcript_functions.infrastructure.interfaces.document_store import (
    DELETE_FIELD,
    DOCUMENT_ID,
    DocumentStore,
    StoredDocument,
    WriteOperation,
)
from transcript_functions.infrastructure.interfaces.transcription_service import (
    TranscriptionService,
)

__all__ = [
    "DELETE_FIELD",
    "DOCUMENT_ID",
    "DocumentStore",
    "StoredDocument",
    "TranscriptionService",
    "WriteOperation",
]
