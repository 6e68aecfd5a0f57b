"""
Recipe request processing.

Takes a REQUESTED recipe request through IN_PROGRESS to COMPLETED or
FAILED: fetch and parse the page, persist the recipe, report the outcome.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

from recipe_ingest.db.client import RecipeRequestStore
from recipe_ingest.observability import RequestLogger
from recipe_ingest.recipe_import import (
    InvalidURLError,
    Recipe,
    RequestStatus,
    StoreError,
    extract_recipe,
    to_recipe_response,
)

logger = logging.getLogger(__name__)

Extractor = Callable[..., Recipe | None]


class DocumentEvent(BaseModel):
    """
    Database event for a recipe request row.

    Accepts the flat document payload ({"$id", "url", ...}) or a Supabase
    database webhook ({"type", "table", "record": {...}}).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field("", alias="$id")
    url: str = ""
    status: str = ""
    user_id: str = ""
    created_at: str | None = Field(None, alias="$createdAt")
    updated_at: str | None = Field(None, alias="$updatedAt")

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "DocumentEvent":
        record = payload.get("record")
        if isinstance(record, dict):
            payload = record
        if "$id" not in payload and "id" in payload:
            payload = {**payload, "$id": str(payload["id"])}
        return cls.model_validate(payload)

    def validation_error(self) -> str | None:
        if not self.id:
            return "$id is required in event payload"
        if not self.url:
            return "url is required in event payload"
        if not self.user_id:
            return "user_id is required in event payload"
        return None


@dataclass
class ProcessOutcome:
    """HTTP-shaped result of processing one event."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)


def _error(status_code: int, message: str) -> ProcessOutcome:
    return ProcessOutcome(status_code=status_code, body={"error": message})


def process_recipe_request(
    event: DocumentEvent,
    store: RecipeRequestStore,
    extract: Extractor = extract_recipe,
) -> ProcessOutcome:
    """
    Process one recipe request event.

    Only REQUESTED documents are processed; our own status updates fire
    events too and must not loop.
    """
    validation_error = event.validation_error()
    if validation_error:
        return _error(400, validation_error)

    if event.status != RequestStatus.REQUESTED.value:
        logger.info(f"Skipping document {event.id} with status {event.status} (only processing REQUESTED)")
        return ProcessOutcome(
            status_code=200,
            body={"message": f"Skipped: document status is {event.status}, not REQUESTED"},
        )

    log = RequestLogger(logger, request_id=event.id, url=event.url, user_id=event.user_id)
    main_log = log.bind(component="main")
    main_log.info("Processing recipe request")

    try:
        store.update_status(event.id, RequestStatus.IN_PROGRESS)
    except StoreError as e:
        main_log.error("Error updating status to IN_PROGRESS", fields={"error": str(e)})
        return _error(500, "Error updating status to IN_PROGRESS")

    main_log.info("Status updated to IN_PROGRESS")

    try:
        recipe = extract(event.url, log=log.bind(component="executor"))
    except InvalidURLError as e:
        main_log.error("Invalid recipe URL", fields={"error": str(e)})
        return _fail(store, event, main_log, 400, str(e))
    except Exception as e:
        main_log.error("Error fetching recipe", fields={"error": str(e)})
        return _fail(store, event, main_log, 500, "Failed to fetch recipe")

    if recipe is None:
        main_log.error("No recipe structured data found on page")
        return _fail(store, event, main_log, 404, "No Recipe structured data found on the page")

    try:
        recipe_id = store.create_recipe(event.id, event.user_id, recipe)
    except StoreError as e:
        main_log.error("Error saving recipe to database", fields={"error": str(e)})
        try:
            store.update_status(event.id, RequestStatus.FAILED)
        except StoreError as update_error:
            main_log.error("Error updating status to FAILED", fields={"error": str(update_error)})
        return _error(500, "Failed to save recipe to database")

    main_log.info("Recipe saved to database", fields={"recipe_id": recipe_id})

    try:
        store.update_status(event.id, RequestStatus.COMPLETED)
    except StoreError as e:
        main_log.error("Error updating status to COMPLETED", fields={"error": str(e)})
        return _error(500, "Error updating status to COMPLETED")

    main_log.with_duration("Recipe processing completed", fields={"recipe_id": recipe_id})

    return ProcessOutcome(status_code=200, body=to_recipe_response(event.url, recipe))


def _fail(
    store: RecipeRequestStore,
    event: DocumentEvent,
    log: RequestLogger,
    status_code: int,
    message: str,
) -> ProcessOutcome:
    """Mark the request FAILED and return the error outcome."""
    try:
        store.update_status(event.id, RequestStatus.FAILED)
    except StoreError as e:
        log.error("Error updating status to FAILED", fields={"error": str(e)})
        return _error(500, "Error updating status to FAILED")
    return _error(status_code, message)
