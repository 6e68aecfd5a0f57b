"""
Pytest configuration and fixtures for Recipe Ingest tests.
"""

import json
import os
from unittest.mock import MagicMock

import pytest

# Set test environment before importing recipe_ingest modules
os.environ["RECIPE_INGEST_ENV"] = "development"
os.environ["FALLBACK_STRATEGY"] = "none"
os.environ.pop("FIRECRAWL_API_KEY", None)


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.insert.return_value = mock_table
    mock_table.update.return_value = mock_table
    mock_table.delete.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    return mock_client


def _page_with_json_ld(*blocks: str) -> str:
    scripts = "\n".join(
        f'<script type="application/ld+json">{block}</script>' for block in blocks
    )
    return f"<html><head><title>Recipe</title>{scripts}</head><body><h1>Recipe</h1></body></html>"


@pytest.fixture
def make_page():
    """Build an HTML page with each block in its own JSON-LD script tag."""
    return _page_with_json_ld


@pytest.fixture
def sample_recipe_json_ld():
    """A complete schema.org Recipe object."""
    return {
        "@context": "https://schema.org",
        "@type": "Recipe",
        "name": "Classic Pancakes",
        "description": "Fluffy buttermilk pancakes",
        "image": ["https://example.com/pancakes.jpg", "https://example.com/pancakes-2.jpg"],
        "prepTime": "PT10M",
        "cookTime": "PT15M",
        "totalTime": "PT25M",
        "recipeYield": "4 servings",
        "recipeCategory": "Breakfast",
        "recipeCuisine": ["American"],
        "recipeIngredient": ["2 cups flour", "1 tsp salt", "2 eggs"],
        "recipeInstructions": [
            {"@type": "HowToStep", "text": "Mix dry ingredients"},
            {
                "@type": "HowToSection",
                "name": "Cooking",
                "itemListElement": [
                    {"@type": "HowToStep", "text": "Heat the griddle"},
                    {"@type": "HowToStep", "text": "Cook until golden"},
                ],
            },
        ],
        "author": {"@type": "Person", "name": "Jane Cook", "url": "https://example.com/jane"},
        "nutrition": {"@type": "NutritionInformation", "calories": "250 calories", "proteinContent": "6 g"},
        "keywords": "breakfast, quick",
        "datePublished": "2024-01-15",
    }


@pytest.fixture
def sample_recipe_html(sample_recipe_json_ld):
    """Page carrying the sample recipe."""
    return _page_with_json_ld(json.dumps(sample_recipe_json_ld))
