"""Plain text rendering of transcripts."""

import re

from transcript_functions.domain.models import Paragraph, Transcript

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\r\n]+')


class TranscriptExporter:
    """Builds a downloadable text document from ordered paragraphs."""

    def render(
        self,
        transcript: Transcript,
        paragraphs: list[Paragraph],
        include_timestamps: bool = False,
    ) -> str:
        """
        Renders a transcript as plain text.

        Args:
            transcript: The transcript record; its name becomes the title.
            paragraphs: Paragraphs already ordered by start time. Paragraphs
                without text are skipped.
            include_timestamps: Prefix each paragraph with its start time,
                when it has one.

        Returns:
            The text, paragraphs separated by blank lines.
        """
        blocks: list[str] = []
        if transcript.name:
            blocks.append(transcript.name)

        for paragraph in paragraphs:
            text = (paragraph.text or "").strip()
            if not text:
                continue
            if include_timestamps and paragraph.start_time is not None:
                text = f"[{self._format_timestamp(paragraph.start_time)}] {text}"
            blocks.append(text)

        return "\n\n".join(blocks) + "\n" if blocks else ""

    def filename(self, transcript_id: str, transcript: Transcript) -> str:
        """Derives the attachment file name from the transcript name or id."""
        base = _UNSAFE_FILENAME_CHARS.sub(" ", transcript.name or "").strip()
        return f"{base or transcript_id}.txt"

    def _format_timestamp(self, seconds: float) -> str:
        total = int(seconds)
        hours, remainder = divmod(total, 3600)
        minutes, secs = divmod(remainder, 60)
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
