"""
Shared FastAPI dependencies and request helpers.

Routes take the store and the extractor through Depends() so tests can
swap them with app.dependency_overrides.
"""

import json
from typing import Any

from fastapi import Request

from recipe_ingest.db.client import RecipeRequestStore, get_store
from recipe_ingest.processing import Extractor
from recipe_ingest.recipe_import import extract_recipe


def get_request_store() -> RecipeRequestStore:
    return get_store()


def get_extractor() -> Extractor:
    return extract_recipe


async def read_json_body(request: Request) -> dict[str, Any]:
    """JSON object body, or {} when the body is empty or not a JSON object."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except ValueError:
        return {}
    return parsed if isinstance(parsed, dict) else {}


def pick_param(request: Request, body: dict[str, Any], key: str) -> str | None:
    """Query parameter first, then the JSON body."""
    value = request.query_params.get(key)
    if value:
        return value
    value = body.get(key)
    return value if isinstance(value, str) and value else None
