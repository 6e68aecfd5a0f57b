"""JSON-LD/Schema.org recipe extraction from HTML."""

import json
import logging
from typing import Any

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from .errors import HTMLParseError
from .models import Recipe
from .normalizer import (
    extract_images,
    get_string,
    normalize_ingredients,
    normalize_keywords,
    normalize_string_or_array,
    parse_author,
    parse_instructions,
    parse_nutrition,
)

logger = logging.getLogger(__name__)

JSON_LD_TYPE = "application/ld+json"


def extract_recipe_from_html(
    html: str,
    *,
    base_url: str | None = None,
    log: logging.Logger | logging.LoggerAdapter = logger,
) -> Recipe | None:
    """
    Find the first schema.org Recipe in the page's JSON-LD scripts.

    Scripts are scanned in document order; within a script, @graph and
    array entries are scanned in order. Scripts that are not valid JSON
    are skipped.

    Returns:
        The first qualifying Recipe, or None when the page has none.

    Raises:
        HTMLParseError: The markup could not be parsed at all.
    """
    log.debug(f"HTML content length: {len(html)} chars")

    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        raise HTMLParseError(f"failed to parse HTML: {e}") from e

    scripts = [
        script
        for script in soup.find_all("script")
        if script.get("type") == JSON_LD_TYPE
    ]
    log.debug(f"Found {len(scripts)} JSON-LD scripts")

    for index, script in enumerate(scripts):
        content = script.string or script.get_text()
        if not content or not content.strip():
            log.debug(f"JSON-LD script #{index} is empty")
            continue

        try:
            data = json.loads(content)
        except (ValueError, RecursionError) as e:
            log.debug(f"JSON-LD script #{index} parse error: {e}")
            continue

        recipe = extract_recipe_from_json_ld(data, base_url=base_url)
        if recipe is not None:
            log.debug(f"Found Recipe in JSON-LD script #{index}: {recipe.name}")
            return recipe

    return None


def extract_recipe_from_json_ld(data: Any, *, base_url: str | None = None) -> Recipe | None:
    """Search one decoded JSON-LD value (object, @graph container or array)."""
    if isinstance(data, dict):
        recipe = extract_recipe_from_object(data, base_url=base_url)
        if recipe is not None:
            return recipe
        graph = data.get("@graph")
        if isinstance(graph, list):
            return _extract_recipe_from_array(graph, base_url=base_url)
        return None

    if isinstance(data, list):
        return _extract_recipe_from_array(data, base_url=base_url)

    return None


def _extract_recipe_from_array(items: list, *, base_url: str | None) -> Recipe | None:
    for item in items:
        if isinstance(item, dict):
            recipe = extract_recipe_from_json_ld(item, base_url=base_url)
            if recipe is not None:
                return recipe
    return None


def is_recipe_type(type_value: Any) -> bool:
    """
    Check a JSON-LD @type for Recipe.

    Matches "Recipe", full URIs like "https://schema.org/Recipe", and
    compound type lists such as ["Recipe", "NewsArticle"].
    """
    if isinstance(type_value, str):
        return "Recipe" in type_value
    if isinstance(type_value, list):
        return any(isinstance(t, str) and "Recipe" in t for t in type_value)
    return False


def extract_recipe_from_object(obj: dict, *, base_url: str | None = None) -> Recipe | None:
    """
    Build a Recipe from a single JSON-LD object.

    Returns None when the object is not Recipe-typed, or when it lacks a
    name or an image.
    """
    if not is_recipe_type(obj.get("@type")):
        return None

    name = get_string(obj, "name")
    if not name:
        return None

    images = extract_images(obj.get("image"), base_url=base_url)
    if not images:
        return None

    return Recipe(
        name=name,
        image=images,
        description=get_string(obj, "description"),
        prep_time=get_string(obj, "prepTime"),
        cook_time=get_string(obj, "cookTime"),
        total_time=get_string(obj, "totalTime"),
        recipe_yield=normalize_string_or_array(obj.get("recipeYield")),
        recipe_category=normalize_string_or_array(obj.get("recipeCategory")),
        recipe_cuisine=normalize_string_or_array(obj.get("recipeCuisine")),
        ingredients=normalize_ingredients(obj.get("recipeIngredient")),
        instructions=parse_instructions(obj.get("recipeInstructions")),
        author=parse_author(obj.get("author")),
        nutrition=parse_nutrition(obj.get("nutrition")),
        keywords=normalize_keywords(obj.get("keywords")),
        date_published=get_string(obj, "datePublished"),
        date_modified=get_string(obj, "dateModified"),
    )
