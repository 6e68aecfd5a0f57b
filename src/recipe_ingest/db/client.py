"""
Recipe Ingest - Supabase Client.

Low-level database access for recipe requests and imported recipes.
"""

from supabase import Client, create_client

from recipe_ingest.config import settings
from recipe_ingest.recipe_import.errors import ConfigurationError, StoreError
from recipe_ingest.recipe_import.models import Recipe, RequestStatus
from recipe_ingest.recipe_import.response import recipe_to_row

# Singleton client instance
_client: Client | None = None


def get_client() -> Client:
    """
    Get the Supabase client (service role).

    Uses singleton pattern to reuse connection.
    """
    global _client

    if _client is None:
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise ConfigurationError(
                "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables must be set"
            )
        _client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _client


class RecipeRequestStore:
    """Recipe request and recipe rows. CRUD only."""

    def __init__(
        self,
        client: Client,
        requests_table: str = "recipe_requests",
        recipes_table: str = "recipes",
    ):
        self.client = client
        self.requests_table = requests_table
        self.recipes_table = recipes_table

    def create_request(self, url: str, user_id: str) -> str:
        """Create a recipe request with REQUESTED status. Returns its id."""
        data = {
            "url": url,
            "status": RequestStatus.REQUESTED.value,
            "user_id": user_id,
        }
        try:
            response = self.client.table(self.requests_table).insert(data).execute()
        except Exception as e:
            raise StoreError(f"failed to create recipe request: {e}") from e
        return self._inserted_id(response, "recipe request")

    def update_status(self, request_id: str, status: RequestStatus) -> None:
        """Update the status of an existing recipe request."""
        try:
            (
                self.client.table(self.requests_table)
                .update({"status": status.value})
                .eq("id", request_id)
                .execute()
            )
        except Exception as e:
            raise StoreError(
                f"failed to update recipe request status to {status.value}: {e}"
            ) from e

    def create_recipe(self, request_id: str, user_id: str, recipe: Recipe) -> str:
        """Store a recipe linked to its request. Returns the recipe id."""
        data = recipe_to_row(request_id, user_id, recipe)
        try:
            response = self.client.table(self.recipes_table).insert(data).execute()
        except Exception as e:
            raise StoreError(f"failed to create recipe: {e}") from e
        return self._inserted_id(response, "recipe")

    @staticmethod
    def _inserted_id(response, label: str) -> str:
        if not response.data:
            raise StoreError(f"failed to create {label}: no row returned")
        return str(response.data[0]["id"])


def get_store() -> RecipeRequestStore:
    """Store bound to the configured Supabase project and tables."""
    return RecipeRequestStore(
        get_client(),
        requests_table=settings.recipe_requests_table,
        recipes_table=settings.recipes_table,
    )
