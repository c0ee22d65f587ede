"""Batched deletion of whole collections."""

import asyncio
import logging

from transcript_functions.config import MAX_BATCH_SIZE
from transcript_functions.infrastructure.interfaces import (
    DOCUMENT_ID,
    DocumentStore,
    WriteOperation,
)

logger = logging.getLogger(__name__)


class CollectionDeleter:
    """
    Deletes every document of a collection, a batch at a time.

    The collection is never loaded into memory as a whole: each pass queries at
    most ``batch_size`` documents ordered by id, deletes them in one atomic
    batch and starts over until a query comes back empty. Passes run in a flat
    loop so the number of batches does not grow the call stack.
    """

    def __init__(self, store: DocumentStore):
        self._store = store

    async def delete_collection(self, collection_path: str, batch_size: int) -> int:
        """
        Deletes all documents under a collection.

        Args:
            collection_path: Slash separated collection path.
            batch_size: Number of documents deleted per batch.

        Returns:
            The number of deleted documents.

        Raises:
            ValueError: If batch_size is outside 1..500.
            BatchWriteFailedError: If a batch is rejected.
            StoreUnavailableError: If the store cannot be reached.
        """
        if not 0 < batch_size <= MAX_BATCH_SIZE:
            raise ValueError(
                f"batch_size must be between 1 and {MAX_BATCH_SIZE}, got {batch_size}"
            )

        deleted = 0
        batches = 0
        while True:
            documents = await self._store.query_ordered(
                collection_path, DOCUMENT_ID, limit=batch_size
            )
            if not documents:
                break

            await self._store.batch_write(
                [WriteOperation.delete(document.path) for document in documents]
            )
            deleted += len(documents)
            batches += 1
            logger.info(
                "Batch deleted",
                extra={
                    "collection": collection_path,
                    "batch": batches,
                    "documents": len(documents),
                },
            )

            # Hand control back to the event loop before the next pass.
            await asyncio.sleep(0)

        logger.info(
            "Collection deleted",
            extra={
                "collection": collection_path,
                "documents": deleted,
                "batches": batches,
            },
        )
        return deleted
