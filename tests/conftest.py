"""Shared fixtures for the test suite."""

import logging
import os

import pytest

os.environ.setdefault("DD_TRACE_ENABLED", "false")

from tests.fakes import InMemoryDocumentStore
from transcript_functions.infrastructure import CollectionDeleter
from transcript_functions.repositories import TranscriptRepository


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def repository(store) -> TranscriptRepository:
    return TranscriptRepository(store, CollectionDeleter(store))


@pytest.fixture
def transcript_id(store) -> str:
    """A queued transcript as created by the client application."""
    store.documents["transcripts/t1"] = {
        "name": "Interview",
        "audioUrl": "https://example.com/interview.mp3",
        "status": {"progress": "queued"},
        "metadata": {"languageCode": "en"},
    }
    return "t1"


@pytest.fixture(autouse=True)
def restore_logging():
    """Undoes handler changes made by setup_logging during a test."""
    names = ["", "uvicorn", "uvicorn.access", "uvicorn.error"]
    saved = {
        name: (
            logging.getLogger(name).handlers[:],
            logging.getLogger(name).level,
            logging.getLogger(name).propagate,
        )
        for name in names
    }
    yield
    for name, (handlers, level, propagate) in saved.items():
        logger = logging.getLogger(name)
        logger.handlers = handlers
        logger.setLevel(level)
        logger.propagate = propagate
