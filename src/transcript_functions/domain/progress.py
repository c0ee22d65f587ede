"""Progress states of the transcription pipeline."""

from enum import Enum


class ProgressType(str, Enum):
    """Phase a transcript is in, stored as ``status.progress``."""

    QUEUED = "queued"
    ANALYSING = "analysing"
    TRANSCRIBING = "transcribing"
    SAVING = "saving"
    DONE = "done"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        """No automatic transition leaves a terminal state."""
        return self in (ProgressType.DONE, ProgressType.ERROR)

    @property
    def resets_percent(self) -> bool:
        """Entering this state re-arms the percent counter at zero."""
        return self in (ProgressType.ANALYSING, ProgressType.SAVING)

    @property
    def clears_percent(self) -> bool:
        """Entering this state removes the percent field altogether."""
        return self is ProgressType.DONE
