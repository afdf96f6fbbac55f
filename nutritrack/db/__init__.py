"""Database module."""

from .store import DocumentStore, MemoryStore
from .supabase import get_supabase_client, SupabaseStore

__all__ = ["DocumentStore", "MemoryStore", "get_supabase_client", "SupabaseStore"]
