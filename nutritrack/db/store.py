"""Document store interface and the in-process implementation."""

import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


Document = Dict[str, Any]


class DocumentStore(ABC):
    """Generic CRUD over JSON documents grouped in collections and keyed by id."""

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Fetch one document, or None if absent."""

    @abstractmethod
    def put(self, collection: str, doc_id: str, document: Document) -> Document:
        """Insert or overwrite a document."""

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> bool:
        """Remove a document. Returns False if it did not exist."""

    @abstractmethod
    def find(self, collection: str, **equals: Any) -> List[Document]:
        """All documents whose top-level fields equal the given values."""


class MemoryStore(DocumentStore):
    """Dict-backed store. Documents are copied on the way in and out."""

    def __init__(self):
        self._collections: Dict[str, Dict[str, Document]] = {}

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        document = self._collections.get(collection, {}).get(doc_id)
        return copy.deepcopy(document) if document is not None else None

    def put(self, collection: str, doc_id: str, document: Document) -> Document:
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(document)
        return copy.deepcopy(document)

    def delete(self, collection: str, doc_id: str) -> bool:
        return self._collections.get(collection, {}).pop(doc_id, None) is not None

    def find(self, collection: str, **equals: Any) -> List[Document]:
        documents = self._collections.get(collection, {}).values()
        return [
            copy.deepcopy(doc)
            for doc in documents
            if all(doc.get(key) == value for key, value in equals.items())
        ]
