"""Normalization utilities for schema.org recipe fields.

JSON-LD in the wild is loosely typed: the same field shows up as a string,
a list, a nested object or a number depending on the site. Each function
here decodes one field shape-by-shape (string, then list, then object) and
falls through to "absent" instead of raising.
"""

import html
import re
from typing import Any
from urllib.parse import urljoin

from .models import Author, Instruction, InstructionSection, InstructionStep, Nutrition

# Nested HowToSections deeper than this are truncated
MAX_INSTRUCTION_DEPTH = 10

_WHITESPACE_RE = re.compile(r"\s+")

# schema.org NutritionInformation key -> Nutrition field
_NUTRITION_FIELDS = {
    "calories": "calories",
    "fatContent": "fat",
    "saturatedFatContent": "saturated_fat",
    "cholesterolContent": "cholesterol",
    "sodiumContent": "sodium",
    "carbohydrateContent": "carbohydrate",
    "fiberContent": "fiber",
    "sugarContent": "sugar",
    "proteinContent": "protein",
}


def sanitize_text(text: str) -> str:
    """
    Decode HTML entities and normalize whitespace.

    Examples:
        "Caf&eacute;&nbsp;Recipe" -> "Café Recipe"
        "  Mix\\n\\n the   flour " -> "Mix the flour"
    """
    if not text:
        return ""
    result = html.unescape(text)
    result = result.replace("\u00a0", " ")
    result = _WHITESPACE_RE.sub(" ", result)
    return result.strip()


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a yield or a calorie count
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _number_to_string(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _scalar_string(value: Any) -> str | None:
    """Sanitized string for a string or numeric value, None when empty."""
    if isinstance(value, str):
        return sanitize_text(value) or None
    if _is_number(value):
        return _number_to_string(value)
    return None


def get_string(obj: dict, key: str) -> str | None:
    """Sanitized string value of ``obj[key]``, None if absent, empty or not a string."""
    value = obj.get(key)
    if not isinstance(value, str):
        return None
    return sanitize_text(value) or None


def normalize_string_or_array(value: Any) -> tuple[str, ...]:
    """
    Normalize a field that may be a string, a list of strings, or a number.

    Used for recipeYield, recipeCategory and recipeCuisine.

    Examples:
        "Dessert" -> ("Dessert",)
        ["Italian", "", "Pasta"] -> ("Italian", "Pasta")
        4 -> ("4",)
    """
    if isinstance(value, str) or _is_number(value):
        items = [value]
    elif isinstance(value, list):
        items = value
    else:
        return ()

    result = []
    for item in items:
        text = _scalar_string(item)
        if text:
            result.append(text)
    return tuple(result)


def normalize_ingredients(ingredients: Any) -> tuple[str, ...]:
    """
    Normalize recipeIngredient to a tuple of strings, order preserved.

    Handles:
        - A single string
        - List of strings
        - List of dicts with 'text' or 'name' field
    """
    if isinstance(ingredients, str):
        ingredients = [ingredients]
    if not isinstance(ingredients, list):
        return ()

    result = []
    for item in ingredients:
        if isinstance(item, str):
            text = sanitize_text(item)
        elif isinstance(item, dict):
            text = get_string(item, "text") or get_string(item, "name") or ""
        else:
            continue
        if text:
            result.append(text)
    return tuple(result)


def _image_object_url(image: dict) -> str | None:
    return get_string(image, "url") or get_string(image, "contentUrl")


def extract_images(image: Any, base_url: str | None = None) -> tuple[str, ...]:
    """
    Extract image URLs from the formats sites use.

    Handles:
        - Plain URL string
        - List of URL strings
        - ImageObject dict with 'url' (or 'contentUrl')
        - List of ImageObjects

    Relative URLs are resolved against ``base_url`` when given.
    """
    if isinstance(image, str):
        candidates = [sanitize_text(image)]
    elif isinstance(image, list):
        candidates = []
        for item in image:
            if isinstance(item, str):
                candidates.append(sanitize_text(item))
            elif isinstance(item, dict):
                candidates.append(_image_object_url(item))
    elif isinstance(image, dict):
        candidates = [_image_object_url(image)]
    else:
        return ()

    urls = []
    for candidate in candidates:
        if not candidate:
            continue
        urls.append(urljoin(base_url, candidate) if base_url else candidate)
    return tuple(urls)


def _parse_instruction_item(item: Any, depth: int) -> Instruction | None:
    if not isinstance(item, dict):
        return None

    text = get_string(item, "text")
    name = get_string(item, "name")
    url = get_string(item, "url")

    children: tuple[Instruction, ...] = ()
    item_list = item.get("itemListElement")
    if isinstance(item_list, list) and depth < MAX_INSTRUCTION_DEPTH:
        parsed = (_parse_instruction_item(child, depth + 1) for child in item_list)
        children = tuple(child for child in parsed if child is not None)

    if children:
        return InstructionSection(name=name or "", children=children, url=url)
    if text:
        return InstructionStep(text=text, name=name, url=url)
    return None


def parse_instructions(instructions: Any) -> tuple[Instruction, ...]:
    """
    Parse recipeInstructions into a tree of steps and sections.

    Accepts a single HowToStep/HowToSection object or a list of them.
    Non-object list entries and objects with neither text nor children
    are skipped.
    """
    if isinstance(instructions, list):
        items = instructions
    elif isinstance(instructions, dict):
        items = [instructions]
    else:
        return ()

    parsed = (_parse_instruction_item(item, 0) for item in items)
    return tuple(inst for inst in parsed if inst is not None)


def parse_author(author: Any) -> Author | None:
    """
    Parse the author field.

    A bare string is the author's name. For a list, only the first entry
    counts. An author without a name is treated as absent.
    """
    if isinstance(author, str):
        name = sanitize_text(author)
        return Author(name=name) if name else None

    if isinstance(author, list):
        return parse_author(author[0]) if author else None

    if isinstance(author, dict):
        name = get_string(author, "name")
        if not name:
            return None
        return Author(
            name=name,
            url=get_string(author, "url"),
            type=get_string(author, "@type"),
        )

    return None


def parse_nutrition(nutrition: Any) -> Nutrition | None:
    """Parse a NutritionInformation object. Values are kept verbatim (no unit parsing)."""
    if not isinstance(nutrition, dict):
        return None

    values = {
        field_name: _scalar_string(nutrition.get(key))
        for key, field_name in _NUTRITION_FIELDS.items()
    }
    result = Nutrition(**values)
    return None if result.is_empty() else result


def normalize_keywords(keywords: Any) -> str | None:
    """Keywords as a single string; lists are joined with ', '."""
    if isinstance(keywords, str):
        return sanitize_text(keywords) or None
    if isinstance(keywords, list):
        parts = [text for text in (_scalar_string(k) for k in keywords) if text]
        return ", ".join(parts) or None
    return None
