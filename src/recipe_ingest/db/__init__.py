"""Database access layer."""

from recipe_ingest.db.client import RecipeRequestStore, get_client, get_store

__all__ = ["RecipeRequestStore", "get_client", "get_store"]
