"""Transcript trigger and export endpoints."""

import logging
from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from transcript_functions.dependencies import (
    get_exporter,
    get_repository,
    get_transcription_handler,
)
from transcript_functions.domain import Transcript, TranscriptExporter
from transcript_functions.exceptions import (
    InvalidTranscriptIdError,
    PermissionDeniedError,
    StoreUnavailableError,
    TranscriptNotFoundError,
)
from transcript_functions.handlers import TranscriptionHandler
from transcript_functions.repositories import TranscriptRepository
from transcript_functions.response_models import (
    DeleteTranscriptResponse,
    TranscriptionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transcripts", tags=["transcripts"])

RepositoryDep = Annotated[TranscriptRepository, Depends(get_repository)]
HandlerDep = Annotated[TranscriptionHandler, Depends(get_transcription_handler)]
ExporterDep = Annotated[TranscriptExporter, Depends(get_exporter)]


def _to_http_error(error: Exception, transcript_id: str | None = None) -> HTTPException:
    """Maps domain failures onto HTTP responses."""
    if isinstance(error, TranscriptNotFoundError):
        return HTTPException(status_code=404, detail="Transcript not found")
    if isinstance(error, ValidationError):
        logger.exception(
            "Stored document failed validation",
            extra={"transcript_id": transcript_id},
        )
        return HTTPException(status_code=500, detail="Internal server error")
    if isinstance(error, InvalidTranscriptIdError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, PermissionDeniedError):
        return HTTPException(status_code=403, detail="Permission denied")
    if isinstance(error, StoreUnavailableError):
        return HTTPException(status_code=503, detail="Document store unavailable")
    logger.error(
        f"Unexpected error: {error}",
        extra={"transcript_id": transcript_id},
    )
    return HTTPException(status_code=500, detail="Internal server error")


@router.get("", response_model=dict[str, Transcript])
async def list_transcripts(repo: RepositoryDep):
    """Returns every transcript keyed by id."""
    try:
        return await repo.get_transcripts()
    except Exception as e:
        raise _to_http_error(e) from e


@router.get("/{transcript_id}", response_model=Transcript)
async def get_transcript(transcript_id: str, repo: RepositoryDep):
    """Returns a single transcript record."""
    try:
        return await repo.get_transcript(transcript_id)
    except Exception as e:
        raise _to_http_error(e, transcript_id) from e


@router.post("/{transcript_id}/transcription", response_model=TranscriptionResponse)
async def transcribe_transcript(transcript_id: str, handler: HandlerDep):
    """Runs the transcription pipeline for a newly created transcript."""
    try:
        result = await handler.process(transcript_id)
    except Exception as e:
        raise _to_http_error(e, transcript_id) from e

    return TranscriptionResponse(
        transcript_id=result.transcript_id,
        progress=result.progress,
        paragraph_count=result.paragraph_count,
        audio_duration=result.audio_duration,
    )


@router.delete("/{transcript_id}", response_model=DeleteTranscriptResponse)
async def delete_transcript(transcript_id: str, repo: RepositoryDep):
    """Deletes a transcript and all of its paragraphs."""
    try:
        deleted = await repo.delete_transcript(transcript_id)
    except Exception as e:
        raise _to_http_error(e, transcript_id) from e

    return DeleteTranscriptResponse(
        transcript_id=transcript_id,
        success=True,
        deleted_paragraphs=deleted,
    )


@router.get("/{transcript_id}/export", response_class=PlainTextResponse)
async def export_transcript(
    transcript_id: str,
    repo: RepositoryDep,
    exporter: ExporterDep,
    timestamps: Annotated[bool, Query()] = False,
):
    """Returns the transcript text as a downloadable plain text file."""
    try:
        transcript = await repo.get_transcript(transcript_id)
        paragraphs = await repo.get_paragraphs(transcript_id)
    except Exception as e:
        raise _to_http_error(e, transcript_id) from e

    text = exporter.render(transcript, paragraphs, include_timestamps=timestamps)
    filename = exporter.filename(transcript_id, transcript)
    return PlainTextResponse(
        text,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )
