"""Dependency injection configuration for the transcript functions."""

import logging

import assemblyai as aai
from fastapi import Request
from google.cloud import firestore

from transcript_functions.config import AppConfig
from transcript_functions.domain import TranscriptExporter
from transcript_functions.handlers import TranscriptionHandler
from transcript_functions.infrastructure import (
    AssemblyAITranscriber,
    CollectionDeleter,
    FirestoreDocumentStore,
)
from transcript_functions.infrastructure.interfaces import (
    DocumentStore,
    TranscriptionService,
)
from transcript_functions.repositories import TranscriptRepository

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Holds the process-wide service graph.

    Built once when the application starts and closed when it stops. The
    store client is passed to every component explicitly.
    """

    def __init__(
        self,
        config: AppConfig,
        store: DocumentStore,
        transcription_service: TranscriptionService,
    ):
        self.config = config
        self.store = store
        self.repository = TranscriptRepository(
            store,
            CollectionDeleter(store),
            transcripts_collection=config.firestore.transcripts_collection,
            paragraphs_collection=config.firestore.paragraphs_collection,
            delete_batch_size=config.deletion.batch_size,
        )
        self.transcription_handler = TranscriptionHandler(
            self.repository, transcription_service
        )
        self.exporter = TranscriptExporter()

    @classmethod
    def from_config(cls, config: AppConfig) -> "ServiceContainer":
        """Creates the Firestore and AssemblyAI clients described by config."""
        # Firestore
        firestore_client = firestore.AsyncClient(
            project=config.firestore.project_id,
            database=config.firestore.database,
        )
        store = FirestoreDocumentStore(firestore_client)

        # AssemblyAI
        aai.settings.api_key = config.assemblyai.api_key
        transcriber = AssemblyAITranscriber(
            aai.Transcriber(),
            speaker_labels=config.assemblyai.speaker_labels,
        )

        logger.info(
            "Services initialized",
            extra={
                "project": config.firestore.project_id,
                "database": config.firestore.database,
            },
        )
        return cls(config, store, transcriber)

    async def close(self) -> None:
        """Releases the store client."""
        await self.store.close()


def get_container(request: Request) -> ServiceContainer:
    """Returns the container created by the application lifespan."""
    return request.app.state.container


def get_repository(request: Request) -> TranscriptRepository:
    """Returns the configured transcript repository."""
    return get_container(request).repository


def get_transcription_handler(request: Request) -> TranscriptionHandler:
    """Returns the configured transcription handler."""
    return get_container(request).transcription_handler


def get_exporter(request: Request) -> TranscriptExporter:
    """Returns the transcript exporter."""
    return get_container(request).exporter
