"""
Ad-hoc recipe extraction endpoint.

Fetches a page and returns the parsed recipe without storing anything.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from recipe_ingest.processing import Extractor
from recipe_ingest.recipe_import import InvalidURLError, to_recipe_response, validate_url
from recipe_ingest.web.dependencies import get_extractor, pick_param, read_json_body
from recipe_ingest.web.request_routes import MISSING_URL_MESSAGE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])


class RecipeSummary(BaseModel):
    model_config = {"populate_by_name": True}

    name: str = ""
    description: str = ""
    image: str = ""
    prep_time: str = Field("", alias="prepTime")
    cook_time: str = Field("", alias="cookTime")
    total_time: str = Field("", alias="totalTime")
    author: str = ""


class RecipeResponse(BaseModel):
    """Flattened recipe returned to API callers."""

    url: str
    recipe: RecipeSummary
    instructions: list[str] = []
    ingredients: list[str] = []


@router.api_route("/fetch", methods=["GET", "POST"], response_model=RecipeResponse, response_model_by_alias=True)
async def fetch_recipe(
    request: Request,
    extract: Extractor = Depends(get_extractor),
):
    """
    Fetch a recipe from a URL.

    ``url`` may be given as a query parameter or in the JSON body.
    """
    body = await read_json_body(request)
    target_url = pick_param(request, body, "url")
    if not target_url:
        return JSONResponse({"error": MISSING_URL_MESSAGE}, status_code=400)

    try:
        target_url = validate_url(target_url)
    except InvalidURLError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    logger.info(f"Fetching recipe from: {target_url}")

    try:
        recipe = await run_in_threadpool(extract, target_url)
    except InvalidURLError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except Exception as e:
        logger.error(f"Error fetching recipe from {target_url}: {e}")
        return JSONResponse({"error": f"Failed to fetch recipe: {e}"}, status_code=500)

    if recipe is None:
        logger.info(f"No recipe found at: {target_url}")
        return JSONResponse({"error": "No Recipe structured data found on the page"}, status_code=404)

    logger.info(f"Successfully extracted recipe: {recipe.name}")
    return to_recipe_response(target_url, recipe)
