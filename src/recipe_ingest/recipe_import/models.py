"""Data models for recipe import."""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Union


class RequestStatus(str, Enum):
    """Lifecycle of a stored recipe request."""

    REQUESTED = "REQUESTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class InstructionStep:
    """A single instruction (schema.org HowToStep)."""

    text: str
    name: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class InstructionSection:
    """A named group of instructions (schema.org HowToSection)."""

    name: str
    children: tuple["Instruction", ...]
    url: str | None = None


Instruction = Union[InstructionStep, InstructionSection]


@dataclass(frozen=True)
class Author:
    """Recipe author. Only present when it has a name."""

    name: str
    url: str | None = None
    type: str | None = None  # "Person" | "Organization", verbatim


@dataclass(frozen=True)
class Nutrition:
    """schema.org NutritionInformation, values kept verbatim."""

    calories: str | None = None
    fat: str | None = None
    saturated_fat: str | None = None
    cholesterol: str | None = None
    sodium: str | None = None
    carbohydrate: str | None = None
    fiber: str | None = None
    sugar: str | None = None
    protein: str | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


@dataclass(frozen=True)
class Recipe:
    """Canonical recipe extracted from a page."""

    name: str
    image: tuple[str, ...]
    description: str | None = None
    prep_time: str | None = None
    cook_time: str | None = None
    total_time: str | None = None
    recipe_yield: tuple[str, ...] = ()
    recipe_category: tuple[str, ...] = ()
    recipe_cuisine: tuple[str, ...] = ()
    ingredients: tuple[str, ...] = ()
    instructions: tuple[Instruction, ...] = ()
    author: Author | None = None
    nutrition: Nutrition | None = None
    keywords: str | None = None
    date_published: str | None = None
    date_modified: str | None = None
