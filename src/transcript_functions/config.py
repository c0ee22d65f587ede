"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel, Field

# Firestore rejects write batches larger than this.
MAX_BATCH_SIZE = 500


class FirestoreConfig(BaseModel, frozen=True):
    """Firestore connection and layout configuration."""

    project_id: str | None = None
    database: str = "(default)"
    transcripts_collection: str = "transcripts"
    paragraphs_collection: str = "paragraphs"


class DeletionConfig(BaseModel, frozen=True):
    """Subtree deletion configuration."""

    batch_size: int = Field(default=10, gt=0, le=MAX_BATCH_SIZE)


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    speaker_labels: bool = True


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    firestore: FirestoreConfig
    deletion: DeletionConfig
    assemblyai: AssemblyAIConfig
    log_level: str = "INFO"


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        firestore=FirestoreConfig(
            project_id=os.getenv("FIRESTORE_PROJECT_ID") or None,
            database=os.getenv("FIRESTORE_DATABASE", "(default)"),
            transcripts_collection=os.getenv("TRANSCRIPTS_COLLECTION", "transcripts"),
            paragraphs_collection=os.getenv("PARAGRAPHS_COLLECTION", "paragraphs"),
        ),
        deletion=DeletionConfig(
            batch_size=int(os.getenv("DELETE_BATCH_SIZE", "10")),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
            speaker_labels=_env_flag("ASSEMBLYAI_SPEAKER_LABELS", True),
        ),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
