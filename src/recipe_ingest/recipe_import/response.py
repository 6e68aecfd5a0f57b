"""Flatten the canonical Recipe into response and storage shapes."""

from typing import Any, Iterable

from .models import Instruction, InstructionSection, Recipe
from .normalizer import MAX_INSTRUCTION_DEPTH


def flatten_instructions(instructions: Iterable[Instruction], _depth: int = 0) -> list[str]:
    """
    Flatten an instruction tree into its step texts.

    Sections are expanded depth-first, left to right, so steps keep the
    order they have on the page.
    """
    result: list[str] = []
    for inst in instructions:
        if isinstance(inst, InstructionSection):
            if _depth < MAX_INSTRUCTION_DEPTH:
                result.extend(flatten_instructions(inst.children, _depth + 1))
        elif inst.text:
            result.append(inst.text)
    return result


def to_recipe_response(url: str, recipe: Recipe) -> dict[str, Any]:
    """
    Lightweight API response: first image only, author name only.

    Missing scalar fields are empty strings, never null.
    """
    return {
        "url": url,
        "recipe": {
            "name": recipe.name,
            "description": recipe.description or "",
            "image": recipe.image[0] if recipe.image else "",
            "prepTime": recipe.prep_time or "",
            "cookTime": recipe.cook_time or "",
            "totalTime": recipe.total_time or "",
            "author": recipe.author.name if recipe.author else "",
        },
        "instructions": flatten_instructions(recipe.instructions),
        "ingredients": list(recipe.ingredients),
    }


# Nutrition field -> storage column
_NUTRITION_COLUMNS = {
    "calories": "nutrition_calories",
    "fat": "nutrition_fat",
    "saturated_fat": "nutrition_saturated_fat",
    "cholesterol": "nutrition_cholesterol",
    "sodium": "nutrition_sodium",
    "carbohydrate": "nutrition_carbohydrate",
    "fiber": "nutrition_fiber",
    "sugar": "nutrition_sugar",
    "protein": "nutrition_protein",
}


def recipe_to_row(request_id: str, user_id: str, recipe: Recipe) -> dict[str, Any]:
    """Row for the recipes table. Absent optional fields are omitted."""
    row: dict[str, Any] = {
        "fk_recipe_request": request_id,
        "user_id": user_id,
        "name": recipe.name,
    }

    optional_scalars = {
        "description": recipe.description,
        "prep_time": recipe.prep_time,
        "cook_time": recipe.cook_time,
        "total_time": recipe.total_time,
        "keywords": recipe.keywords,
        "date_published": recipe.date_published,
        "date_modified": recipe.date_modified,
    }
    row.update({key: value for key, value in optional_scalars.items() if value is not None})

    optional_lists = {
        "recipe_yield": recipe.recipe_yield,
        "recipe_category": recipe.recipe_category,
        "recipe_cuisine": recipe.recipe_cuisine,
        "image": recipe.image,
        "ingredients": recipe.ingredients,
    }
    row.update({key: list(value) for key, value in optional_lists.items() if value})

    instructions = flatten_instructions(recipe.instructions)
    if instructions:
        row["instructions"] = instructions

    if recipe.author:
        row["author_name"] = recipe.author.name
        if recipe.author.url:
            row["author_url"] = recipe.author.url

    if recipe.nutrition:
        for field_name, column in _NUTRITION_COLUMNS.items():
            value = getattr(recipe.nutrition, field_name)
            if value is not None:
                row[column] = value

    return row
