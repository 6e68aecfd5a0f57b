"""
Firecrawl fetch strategy.

Hybrid approach:
1. Ask Firecrawl for the rendered raw HTML and parse its JSON-LD (cheap).
2. If the page has no JSON-LD, ask Firecrawl's LLM extraction for the
   recipe against an explicit JSON schema (expensive, works on any page).
"""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError, ExtractionError, FetchError, NoJSONLDError
from .json_ld import extract_recipe_from_html
from .models import Author, InstructionStep, Nutrition, Recipe
from .strategies import FetchStrategy

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.firecrawl.dev"
DEFAULT_TIMEOUT_SECONDS = 60.0

EXTRACTION_PROMPT = """
Extract the complete recipe data from this page.
Focus on the main recipe content and ignore navigation, advertisements, related recipes, and sidebar content.
If the page shows several recipes, extract the primary one.
Extract all available fields including image, instructions, times, servings, nutrition, and author information when present.
"""


def _string_property(description: str) -> dict[str, str]:
    return {"type": "string", "description": description}


RECIPE_EXTRACTION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": _string_property("The name/title of the recipe"),
        "description": _string_property("A brief description of the recipe"),
        "image": _string_property("URL of the main recipe image (usually the thumbnail image)"),
        "prepTime": _string_property("Preparation time (e.g., '15 minutes' or 'PT15M')"),
        "cookTime": _string_property("Cooking time (e.g., '30 minutes' or 'PT30M')"),
        "totalTime": _string_property("Total time (e.g., '45 minutes' or 'PT45M')"),
        "recipeYield": _string_property("Number of servings or yield (e.g., '4 servings')"),
        "recipeIngredient": {
            "type": "array",
            "items": {"type": "string"},
            "description": "List of ingredients with quantities",
        },
        "recipeInstructions": {
            "type": "array",
            "items": _string_property("A single step in the cooking instructions"),
            "description": "Step-by-step cooking instructions",
        },
        "author": _string_property("Author or creator of the recipe"),
        "recipeCategory": _string_property("Category (e.g., 'Dessert', 'Main Course')"),
        "recipeCuisine": _string_property("Cuisine type (e.g., 'Italian', 'Mexican')"),
        "nutrition": {
            "type": "object",
            "properties": {
                "calories": {"type": "string"},
                "fatContent": {"type": "string"},
                "saturatedFatContent": {"type": "string"},
                "cholesterolContent": {"type": "string"},
                "sodiumContent": {"type": "string"},
                "carbohydrateContent": {"type": "string"},
                "fiberContent": {"type": "string"},
                "sugarContent": {"type": "string"},
                "proteinContent": {"type": "string"},
            },
            "description": "Nutritional information",
        },
    },
    "required": ["name", "recipeIngredient", "recipeInstructions"],
}


# =============================================================================
# LLM extraction payload
# =============================================================================


class ExtractedNutrition(BaseModel):
    """Nutrition as returned by the extraction endpoint."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    calories: str | None = None
    fat: str | None = Field(None, alias="fatContent")
    saturated_fat: str | None = Field(None, alias="saturatedFatContent")
    cholesterol: str | None = Field(None, alias="cholesterolContent")
    sodium: str | None = Field(None, alias="sodiumContent")
    carbohydrate: str | None = Field(None, alias="carbohydrateContent")
    fiber: str | None = Field(None, alias="fiberContent")
    sugar: str | None = Field(None, alias="sugarContent")
    protein: str | None = Field(None, alias="proteinContent")


class ExtractedRecipe(BaseModel):
    """Recipe as returned by the extraction endpoint, already typed."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    name: str | None = None
    description: str | None = None
    image: str | None = None
    prep_time: str | None = Field(None, alias="prepTime")
    cook_time: str | None = Field(None, alias="cookTime")
    total_time: str | None = Field(None, alias="totalTime")
    recipe_yield: str | None = Field(None, alias="recipeYield")
    recipe_ingredient: list[str] | None = Field(None, alias="recipeIngredient")
    recipe_instructions: list[str] | None = Field(None, alias="recipeInstructions")
    author: str | None = None
    recipe_category: str | None = Field(None, alias="recipeCategory")
    recipe_cuisine: str | None = Field(None, alias="recipeCuisine")
    nutrition: ExtractedNutrition | None = None

    def to_recipe(self) -> Recipe:
        if not self.name:
            raise ExtractionError("extracted recipe missing required field: name")

        nutrition = None
        if self.nutrition is not None:
            nutrition = Nutrition(
                **{key: value or None for key, value in self.nutrition.model_dump().items()}
            )
            if nutrition.is_empty():
                nutrition = None

        return Recipe(
            name=self.name,
            image=(self.image,) if self.image else (),
            description=self.description or None,
            prep_time=self.prep_time or None,
            cook_time=self.cook_time or None,
            total_time=self.total_time or None,
            recipe_yield=_single(self.recipe_yield),
            recipe_category=_single(self.recipe_category),
            recipe_cuisine=_single(self.recipe_cuisine),
            ingredients=tuple(i for i in self.recipe_ingredient or [] if i),
            instructions=tuple(
                InstructionStep(text=step) for step in self.recipe_instructions or [] if step
            ),
            author=Author(name=self.author, type="Person") if self.author else None,
            nutrition=nutrition,
        )


def _single(value: str | None) -> tuple[str, ...]:
    return (value,) if value else ()


def parse_extracted_recipe(data: dict[str, Any] | None) -> Recipe:
    """Convert the extraction endpoint's JSON into a Recipe."""
    if not data:
        raise ExtractionError("no data extracted from page")
    try:
        extracted = ExtractedRecipe.model_validate(data)
    except ValidationError as e:
        raise ExtractionError(f"failed to parse extracted recipe: {e}") from e
    return extracted.to_recipe()


# =============================================================================
# Strategy
# =============================================================================


class FirecrawlStrategy(FetchStrategy):
    """
    Fetch through the Firecrawl scrape API.

    Most capable and most expensive strategy, so it is always last and
    never retryable.
    """

    name = "Firecrawl"

    def __init__(
        self,
        api_key: str | None,
        log: logging.Logger | logging.LoggerAdapter = logger,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_key = api_key
        self.log = log
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def can_retry(self, error: Exception) -> bool:
        return False

    def fetch(self, url: str) -> Recipe:
        if not self.api_key:
            raise ConfigurationError("FIRECRAWL_API_KEY environment variable is not set")

        with httpx.Client(
            base_url=self.api_url,
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            try:
                return self._fetch_with_html(client, url)
            except NoJSONLDError:
                self.log.info("No JSON-LD in Firecrawl HTML, falling back to LLM extraction")
            return self._fetch_with_llm_extraction(client, url)

    def _fetch_with_html(self, client: httpx.Client, url: str) -> Recipe:
        # rawHtml keeps <script> tags; the cleaned "html" format strips them
        data = self._scrape(client, {"url": url, "formats": ["rawHtml"]})
        html = data.get("rawHtml")
        if not html:
            raise NoJSONLDError()

        recipe = extract_recipe_from_html(html, base_url=url, log=self.log)
        if recipe is None:
            raise NoJSONLDError()
        return recipe

    def _fetch_with_llm_extraction(self, client: httpx.Client, url: str) -> Recipe:
        payload = {
            "url": url,
            "formats": ["json"],
            "jsonOptions": {
                "schema": RECIPE_EXTRACTION_SCHEMA,
                "prompt": EXTRACTION_PROMPT,
            },
        }
        data = self._scrape(client, payload)
        return parse_extracted_recipe(data.get("json"))

    def _scrape(self, client: httpx.Client, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = client.post("/v1/scrape", json=payload)
        except httpx.TimeoutException as e:
            raise FetchError(f"Firecrawl request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"failed to scrape URL with Firecrawl: {e}") from e

        if response.status_code != 200:
            raise FetchError(
                f"failed to scrape URL with Firecrawl: unexpected status code: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ExtractionError(f"invalid response from Firecrawl: {e}") from e

        if not isinstance(body, dict) or not body.get("success"):
            error = body.get("error") if isinstance(body, dict) else None
            raise ExtractionError(f"Firecrawl scrape failed: {error or 'no result'}")

        data = body.get("data")
        if not isinstance(data, dict):
            raise ExtractionError("no result from Firecrawl")
        return data
