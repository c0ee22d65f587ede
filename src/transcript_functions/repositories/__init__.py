from transcript_functions.repositories.transcript_repository import TranscriptRepository

__all__ = ["TranscriptRepository"]
