"""Supabase client and document store."""

from supabase import create_client, Client
from functools import lru_cache
from typing import Any, List, Optional

from nutritrack.config import get_settings
from nutritrack.db.store import Document, DocumentStore


@lru_cache()
def get_supabase_client() -> Client:
    """Get cached Supabase client."""
    settings = get_settings()
    return create_client(settings.supabase_url, settings.supabase_key)


class SupabaseStore(DocumentStore):
    """Documents kept in one table per collection with ``id text`` and ``data jsonb`` columns."""

    def __init__(self, client: Optional[Client] = None):
        self.client = client or get_supabase_client()

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        result = (
            self.client.table(collection)
            .select("data")
            .eq("id", doc_id)
            .execute()
        )
        if result.data:
            return result.data[0]["data"]
        return None

    def put(self, collection: str, doc_id: str, document: Document) -> Document:
        # Upsert - overwrite the whole document if the id exists
        result = (
            self.client.table(collection)
            .upsert({"id": doc_id, "data": document}, on_conflict="id")
            .execute()
        )
        return result.data[0]["data"]

    def delete(self, collection: str, doc_id: str) -> bool:
        result = (
            self.client.table(collection)
            .delete()
            .eq("id", doc_id)
            .execute()
        )
        return bool(result.data)

    def find(self, collection: str, **equals: Any) -> List[Document]:
        query = self.client.table(collection).select("data")
        if equals:
            query = query.contains("data", equals)
        result = query.execute()
        return [row["data"] for row in result.data]
