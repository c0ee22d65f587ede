"""Abstract interface for hierarchical document store operations."""

from abc import ABC, abstractmethod
from typing import Any, Literal

from pydantic import BaseModel

# Orders a query by document identifier.
DOCUMENT_ID = "__name__"


class _DeleteField:
    """Sentinel value that removes a field when written."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DELETE_FIELD"


DELETE_FIELD = _DeleteField()


class StoredDocument(BaseModel, frozen=True):
    """A document returned by a read or query."""

    id: str
    path: str
    data: dict[str, Any]


class WriteOperation(BaseModel, frozen=True):
    """One staged write of an atomic batch."""

    kind: Literal["create", "update", "delete"]
    path: str
    data: dict[str, Any] | None = None

    @classmethod
    def create(cls, path: str, data: dict[str, Any]) -> "WriteOperation":
        """Creates a new document; fails the batch if it already exists."""
        return cls(kind="create", path=path, data=data)

    @classmethod
    def update(cls, path: str, data: dict[str, Any]) -> "WriteOperation":
        """Updates fields, dotted keys addressing nested fields; fails if missing."""
        return cls(kind="update", path=path, data=data)

    @classmethod
    def delete(cls, path: str) -> "WriteOperation":
        """Deletes a document."""
        return cls(kind="delete", path=path)


class DocumentStore(ABC):
    """Abstract base class for document store backends."""

    @abstractmethod
    async def write(self, path: str, data: dict[str, Any], merge: bool = True) -> None:
        """
        Writes a document.

        Args:
            path: Slash separated document path.
            data: Fields to write. ``DELETE_FIELD`` values remove the field.
            merge: When true, fields absent from ``data`` are left untouched.

        Raises:
            StoreUnavailableError: If the store cannot be reached.
            PermissionDeniedError: If the caller is not allowed to write.
        """

    @abstractmethod
    async def read(self, path: str) -> dict[str, Any]:
        """
        Reads a document.

        Args:
            path: Slash separated document path.

        Returns:
            The document fields.

        Raises:
            DocumentNotFoundError: If the document does not exist.
            StoreUnavailableError: If the store cannot be reached.
            PermissionDeniedError: If the caller is not allowed to read.
        """

    @abstractmethod
    async def query_ordered(
        self, collection_path: str, order_by: str, limit: int | None = None
    ) -> list[StoredDocument]:
        """
        Lists documents of a collection in ascending order.

        Args:
            collection_path: Slash separated collection path.
            order_by: Field to order by; ties are broken by document id.
            limit: Maximum number of documents, or None for all of them.

        Returns:
            The matching documents.
        """

    @abstractmethod
    async def batch_write(self, operations: list[WriteOperation]) -> None:
        """
        Applies writes as one all-or-nothing unit.

        Args:
            operations: The staged writes.

        Raises:
            BatchWriteFailedError: If any write is rejected; nothing is applied.
            StoreUnavailableError: If the store cannot be reached.
            PermissionDeniedError: If the caller is not allowed to write.
        """

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Deletes a single document; deleting a missing document succeeds."""

    @abstractmethod
    def new_document_id(self, collection_path: str) -> str:
        """Generates a fresh document identifier for the collection."""

    @abstractmethod
    async def close(self) -> None:
        """Releases the underlying client."""
