"""Recipe import module for extracting recipes from external URLs."""

from .errors import (
    ConfigurationError,
    ExtractionError,
    FetchError,
    HTMLParseError,
    InvalidURLError,
    NoJSONLDError,
    RecipeImportError,
    StoreError,
)
from .extractor import build_executor, extract_recipe, validate_url
from .json_ld import extract_recipe_from_html
from .models import (
    Author,
    Instruction,
    InstructionSection,
    InstructionStep,
    Nutrition,
    Recipe,
    RequestStatus,
)
from .response import flatten_instructions, recipe_to_row, to_recipe_response
from .strategies import FetchStrategy, StrategyExecutor

__all__ = [
    "Author",
    "ConfigurationError",
    "ExtractionError",
    "FetchError",
    "FetchStrategy",
    "HTMLParseError",
    "Instruction",
    "InstructionSection",
    "InstructionStep",
    "InvalidURLError",
    "NoJSONLDError",
    "Nutrition",
    "Recipe",
    "RecipeImportError",
    "RequestStatus",
    "StoreError",
    "StrategyExecutor",
    "build_executor",
    "extract_recipe",
    "extract_recipe_from_html",
    "flatten_instructions",
    "recipe_to_row",
    "to_recipe_response",
    "validate_url",
]
