"""API endpoints for stored recipe requests (create + process)."""

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from recipe_ingest.db.client import RecipeRequestStore
from recipe_ingest.processing import DocumentEvent, Extractor, process_recipe_request
from recipe_ingest.recipe_import import InvalidURLError, RequestStatus, StoreError, validate_url
from recipe_ingest.web.dependencies import (
    get_extractor,
    get_request_store,
    pick_param,
    read_json_body,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recipe-requests"])

MISSING_URL_MESSAGE = "URL parameter is required. Provide 'url' as query parameter or in JSON body."


# =============================================================================
# Response Models
# =============================================================================


class RequestCreatedResponse(BaseModel):
    """Response after recording a recipe request."""

    model_config = {"populate_by_name": True}

    document_id: str = Field(alias="documentId")
    status: str
    url: str


# =============================================================================
# Endpoints
# =============================================================================


@router.api_route("/recipe-requests", methods=["GET", "POST"], response_model=RequestCreatedResponse)
async def create_recipe_request(
    request: Request,
    store: RecipeRequestStore = Depends(get_request_store),
):
    """
    Record a recipe import for later processing.

    The URL comes from the ``url`` query parameter or the JSON body; the
    user from ``user_id`` (query, body, or X-User-Id header).
    """
    body = await read_json_body(request)

    target_url = pick_param(request, body, "url")
    if not target_url:
        return JSONResponse({"error": MISSING_URL_MESSAGE}, status_code=400)

    try:
        target_url = validate_url(target_url)
    except InvalidURLError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    user_id = pick_param(request, body, "user_id") or request.headers.get("x-user-id")
    if not user_id:
        return JSONResponse({"error": "user_id is required"}, status_code=400)

    try:
        document_id = await run_in_threadpool(store.create_request, target_url, user_id)
    except StoreError as e:
        logger.error(f"Error creating request record: {e}")
        return JSONResponse({"error": "Error creating request record"}, status_code=500)

    logger.info(f"Created request record: {document_id} for URL: {target_url}")

    return RequestCreatedResponse(
        document_id=document_id,
        status=RequestStatus.REQUESTED.value,
        url=target_url,
    )


@router.post("/recipe-requests/process")
async def process_recipe_request_event(
    request: Request,
    store: RecipeRequestStore = Depends(get_request_store),
    extract: Extractor = Depends(get_extractor),
) -> JSONResponse:
    """
    Process a recipe request from its database event.

    Fetches and parses the page, persists the recipe and moves the request
    to COMPLETED (or FAILED).
    """
    raw = await request.body()
    payload = {}
    if raw:
        try:
            payload = json.loads(raw)
        except ValueError as e:
            return JSONResponse({"error": f"Invalid event payload: {e}"}, status_code=400)
    if not isinstance(payload, dict):
        return JSONResponse({"error": "Invalid event payload: expected a JSON object"}, status_code=400)

    try:
        event = DocumentEvent.from_payload(payload)
    except ValidationError as e:
        return JSONResponse({"error": f"Invalid event payload: {e}"}, status_code=400)

    outcome = await run_in_threadpool(process_recipe_request, event, store, extract)
    return JSONResponse(outcome.body, status_code=outcome.status_code)
