"""Repository for transcript documents and their paragraphs."""

import logging
from typing import Any

from transcript_functions.domain.models import (
    ErrorRecord,
    Paragraph,
    Transcript,
    TranscriptMetadata,
    TranscriptStatus,
)
from transcript_functions.domain.progress import ProgressType
from transcript_functions.exceptions import (
    DocumentNotFoundError,
    InvalidTranscriptIdError,
    TranscriptNotFoundError,
)
from transcript_functions.infrastructure.collection_deleter import CollectionDeleter
from transcript_functions.infrastructure.interfaces import (
    DELETE_FIELD,
    DOCUMENT_ID,
    DocumentStore,
    WriteOperation,
)

logger = logging.getLogger(__name__)


class TranscriptRepository:
    """
    Handles store operations for transcripts.

    Every mutation is a merge-write or an atomic batch against the store; no
    local copy of a transcript is kept, so fields written by other producers
    are never clobbered.
    """

    def __init__(
        self,
        store: DocumentStore,
        deleter: CollectionDeleter,
        transcripts_collection: str = "transcripts",
        paragraphs_collection: str = "paragraphs",
        delete_batch_size: int = 10,
    ):
        """
        Initializes the repository.

        Args:
            store: The document store client.
            deleter: Deletes the paragraphs subtree on transcript removal.
            transcripts_collection: Root collection holding transcripts.
            paragraphs_collection: Sub-collection holding paragraphs.
            delete_batch_size: Paragraphs deleted per batch.
        """
        self._store = store
        self._deleter = deleter
        self._transcripts_collection = transcripts_collection
        self._paragraphs_collection = paragraphs_collection
        self._delete_batch_size = delete_batch_size

    def transcript_path(self, transcript_id: str) -> str:
        if not transcript_id or "/" in transcript_id:
            raise InvalidTranscriptIdError(transcript_id)
        return f"{self._transcripts_collection}/{transcript_id}"

    def paragraphs_path(self, transcript_id: str) -> str:
        return f"{self.transcript_path(transcript_id)}/{self._paragraphs_collection}"

    async def _update(self, transcript_id: str, transcript: Transcript) -> None:
        """Merge-writes the fields explicitly set on a partial transcript."""
        data = transcript.model_dump(
            by_alias=True, exclude_unset=True, exclude_none=True, mode="json"
        )
        await self._store.write(self.transcript_path(transcript_id), data, merge=True)

    # Progress state machine

    async def set_progress(self, transcript_id: str, progress: ProgressType) -> None:
        """
        Moves a transcript to a new progress state.

        Entering ANALYSING or SAVING resets the percent to 0, entering DONE
        removes it; other states leave it as is.
        """
        progress = ProgressType(progress)
        data: dict[str, Any] = {"status": {"progress": progress.value}}
        if progress.resets_percent:
            data["status"]["percent"] = 0
        elif progress.clears_percent:
            data["status"]["percent"] = DELETE_FIELD

        await self._store.write(self.transcript_path(transcript_id), data, merge=True)
        logger.info(
            "Progress set",
            extra={"transcript_id": transcript_id, "progress": progress.value},
        )

    async def set_percent(self, transcript_id: str, percent: int) -> None:
        """Sets the completion percent without touching the progress state."""
        transcript = Transcript(status=TranscriptStatus(percent=percent))
        await self._update(transcript_id, transcript)

    async def set_duration(self, transcript_id: str, seconds: float) -> None:
        """Records the audio duration in seconds."""
        transcript = Transcript(metadata=TranscriptMetadata(audio_duration=seconds))
        await self._update(transcript_id, transcript)

    async def set_playback_gs_url(self, transcript_id: str, url: str) -> None:
        """Records where the processed audio can be played back from."""
        await self._update(transcript_id, Transcript(playback_gs_url=url))

    async def record_error(
        self, transcript_id: str, error: BaseException | ErrorRecord
    ) -> None:
        """
        Stores an error under ``status.error`` as plain data.

        Absent fields of the record are left out of the written map. The
        progress state is not changed; use ``fail`` for that.
        """
        record = self._error_record(error)
        data = {"status": {"error": record.to_store()}}
        await self._store.write(self.transcript_path(transcript_id), data, merge=True)
        logger.info(
            "Error recorded",
            extra={"transcript_id": transcript_id, "error_kind": record.kind},
        )

    async def fail(self, transcript_id: str, error: BaseException | ErrorRecord) -> None:
        """Stores the error and moves to ERROR in a single merge-write."""
        record = self._error_record(error)
        data = {
            "status": {
                "progress": ProgressType.ERROR.value,
                "error": record.to_store(),
            }
        }
        await self._store.write(self.transcript_path(transcript_id), data, merge=True)
        logger.warning(
            "Transcript failed",
            extra={"transcript_id": transcript_id, "error_kind": record.kind},
        )

    def _error_record(self, error: BaseException | ErrorRecord) -> ErrorRecord:
        if isinstance(error, ErrorRecord):
            return error
        return ErrorRecord.from_exception(error)

    # Paragraphs

    async def add_paragraph(
        self, transcript_id: str, paragraph: Paragraph, percent: int
    ) -> str:
        """
        Appends a paragraph and advances the percent in one atomic batch.

        Args:
            transcript_id: The owning transcript.
            paragraph: The new paragraph.
            percent: Completion percent after this paragraph.

        Returns:
            The generated paragraph id.

        Raises:
            BatchWriteFailedError: If either write is rejected; neither is applied.
        """
        status = TranscriptStatus(percent=percent)
        paragraphs_path = self.paragraphs_path(transcript_id)
        paragraph_id = self._store.new_document_id(paragraphs_path)

        await self._store.batch_write(
            [
                WriteOperation.create(
                    f"{paragraphs_path}/{paragraph_id}", paragraph.to_store()
                ),
                WriteOperation.update(
                    self.transcript_path(transcript_id),
                    {"status.percent": status.percent},
                ),
            ]
        )
        logger.debug(
            "Paragraph added",
            extra={
                "transcript_id": transcript_id,
                "paragraph_id": paragraph_id,
                "percent": percent,
            },
        )
        return paragraph_id

    async def get_paragraphs(self, transcript_id: str) -> list[Paragraph]:
        """Returns the paragraphs ordered by ascending start time."""
        documents = await self._store.query_ordered(
            self.paragraphs_path(transcript_id), "startTime"
        )
        return [Paragraph.model_validate(document.data) for document in documents]

    # Reads

    async def get_transcript(self, transcript_id: str) -> Transcript:
        """
        Reads a transcript.

        Raises:
            TranscriptNotFoundError: If the transcript does not exist.
        """
        path = self.transcript_path(transcript_id)
        try:
            data = await self._store.read(path)
        except DocumentNotFoundError as e:
            raise TranscriptNotFoundError(transcript_id, path, cause=e) from e

        transcript = Transcript.model_validate(data)
        transcript.id = transcript_id
        return transcript

    async def get_progress(self, transcript_id: str) -> ProgressType | None:
        """Returns the progress state, or None if it was never set."""
        transcript = await self.get_transcript(transcript_id)
        return transcript.status.progress

    async def get_transcripts(self) -> dict[str, Transcript]:
        """
        Returns every transcript keyed by id.

        This scans the whole collection without pagination and is meant for
        administrative use on small collections only.
        """
        documents = await self._store.query_ordered(
            self._transcripts_collection, DOCUMENT_ID
        )
        transcripts: dict[str, Transcript] = {}
        for document in documents:
            transcript = Transcript.model_validate(document.data)
            transcript.id = document.id
            transcripts[document.id] = transcript
        return transcripts

    # Deletion

    async def delete_transcript(self, transcript_id: str) -> int:
        """
        Deletes a transcript with all of its paragraphs.

        Paragraphs go first, then the transcript document. The two steps are
        not atomic; a failure in between leaves an empty transcript behind.

        Returns:
            The number of deleted paragraphs.
        """
        path = self.transcript_path(transcript_id)
        deleted = await self._deleter.delete_collection(
            self.paragraphs_path(transcript_id), self._delete_batch_size
        )
        await self._store.delete(path)
        logger.info(
            "Transcript deleted",
            extra={"transcript_id": transcript_id, "paragraphs": deleted},
        )
        return deleted
