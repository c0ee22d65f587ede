from transcript_functions.handlers.transcription_handler import TranscriptionHandler

__all__ = ["TranscriptionHandler"]
