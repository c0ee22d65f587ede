"""Firestore implementation of the DocumentStore interface."""

import inspect
import logging
from typing import Any

from google.api_core import exceptions as api_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.field_path import FieldPath

from transcript_functions.exceptions import (
    BatchWriteFailedError,
    DocumentNotFoundError,
    DocumentStoreError,
    PermissionDeniedError,
    StoreUnavailableError,
)
from transcript_functions.infrastructure.interfaces import (
    DELETE_FIELD,
    DOCUMENT_ID,
    DocumentStore,
    StoredDocument,
    WriteOperation,
)

logger = logging.getLogger(__name__)

_UNAVAILABLE_ERRORS = (
    api_exceptions.ServiceUnavailable,
    api_exceptions.DeadlineExceeded,
    api_exceptions.InternalServerError,
    api_exceptions.TooManyRequests,
    api_exceptions.RetryError,
)
_DENIED_ERRORS = (
    api_exceptions.PermissionDenied,
    api_exceptions.Unauthenticated,
)


def _translate_error(path: str, error: api_exceptions.GoogleAPIError) -> DocumentStoreError:
    """Maps a Google API error onto the store error taxonomy."""
    if isinstance(error, _UNAVAILABLE_ERRORS):
        return StoreUnavailableError(path, cause=error)
    if isinstance(error, _DENIED_ERRORS):
        return PermissionDeniedError(path, cause=error)
    return DocumentStoreError(path, f"Firestore request failed for '{path}'", error)


def _to_firestore(value: Any) -> Any:
    """Replaces DELETE_FIELD sentinels with Firestore's own."""
    if value is DELETE_FIELD:
        return firestore.DELETE_FIELD
    if isinstance(value, dict):
        return {key: _to_firestore(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_to_firestore(item) for item in value]
    return value


class FirestoreDocumentStore(DocumentStore):
    """Document store implementation using Cloud Firestore."""

    def __init__(self, client: firestore.AsyncClient):
        self._client = client

    async def write(self, path: str, data: dict[str, Any], merge: bool = True) -> None:
        try:
            await self._client.document(path).set(_to_firestore(data), merge=merge)
        except api_exceptions.GoogleAPIError as e:
            logger.exception("Firestore write failed", extra={"path": path})
            raise _translate_error(path, e) from e

    async def read(self, path: str) -> dict[str, Any]:
        try:
            snapshot = await self._client.document(path).get()
        except api_exceptions.GoogleAPIError as e:
            logger.exception("Firestore read failed", extra={"path": path})
            raise _translate_error(path, e) from e

        if not snapshot.exists:
            raise DocumentNotFoundError(path)
        return snapshot.to_dict() or {}

    async def query_ordered(
        self, collection_path: str, order_by: str, limit: int | None = None
    ) -> list[StoredDocument]:
        document_id = FieldPath.document_id()

        query = self._client.collection(collection_path)
        if order_by == DOCUMENT_ID:
            query = query.order_by(document_id)
        else:
            query = query.order_by(order_by).order_by(document_id)
        if limit is not None:
            query = query.limit(limit)

        try:
            snapshots = await query.get()
        except api_exceptions.GoogleAPIError as e:
            logger.exception(
                "Firestore query failed",
                extra={"collection": collection_path, "order_by": order_by},
            )
            raise _translate_error(collection_path, e) from e

        return [
            StoredDocument(
                id=snapshot.id,
                path=snapshot.reference.path,
                data=snapshot.to_dict() or {},
            )
            for snapshot in snapshots
        ]

    async def batch_write(self, operations: list[WriteOperation]) -> None:
        if not operations:
            return

        batch = self._client.batch()
        for operation in operations:
            reference = self._client.document(operation.path)
            if operation.kind == "create":
                batch.create(reference, _to_firestore(operation.data))
            elif operation.kind == "update":
                batch.update(reference, _to_firestore(operation.data))
            else:
                batch.delete(reference)

        paths = [operation.path for operation in operations]
        try:
            await batch.commit()
        except (_UNAVAILABLE_ERRORS + _DENIED_ERRORS) as e:
            logger.exception("Firestore batch failed", extra={"paths": paths})
            raise _translate_error(paths[0], e) from e
        except api_exceptions.GoogleAPIError as e:
            logger.exception("Firestore batch rejected", extra={"paths": paths})
            raise BatchWriteFailedError(paths, cause=e) from e

        logger.debug("Firestore batch committed", extra={"writes": len(operations)})

    async def delete(self, path: str) -> None:
        try:
            await self._client.document(path).delete()
        except api_exceptions.GoogleAPIError as e:
            logger.exception("Firestore delete failed", extra={"path": path})
            raise _translate_error(path, e) from e

    def new_document_id(self, collection_path: str) -> str:
        return self._client.collection(collection_path).document().id

    async def close(self) -> None:
        result = self._client.close()
        if inspect.isawaitable(result):
            await result
        logger.info("Firestore client closed")
