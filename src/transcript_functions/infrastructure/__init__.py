"""Infrastructure layer exports."""

from transcript_functions.infrastructure.assemblyai_transcriber import (
    AssemblyAITranscriber,
)
from transcript_functions.infrastructure.collection_deleter import CollectionDeleter
from transcript_functions.infrastructure.firestore_store import FirestoreDocumentStore

__all__ = [
    "AssemblyAITranscriber",
    "CollectionDeleter",
    "FirestoreDocumentStore",
]
