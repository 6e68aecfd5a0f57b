"""Tests for the response and storage shapes."""

from recipe_ingest.recipe_import import (
    Author,
    InstructionSection,
    InstructionStep,
    Nutrition,
    Recipe,
    flatten_instructions,
    recipe_to_row,
    to_recipe_response,
)


def _step(text):
    return InstructionStep(text=text)


class TestFlattenInstructions:
    def test_depth_first_order(self):
        tree = (
            _step("one"),
            InstructionSection(
                name="A",
                children=(_step("two"), InstructionSection(name="B", children=(_step("three"),))),
            ),
            _step("four"),
        )
        assert flatten_instructions(tree) == ["one", "two", "three", "four"]

    def test_flattening_a_section_matches_flattening_its_parts(self):
        first = InstructionSection(name="Dough", children=(_step("mix"), _step("knead")))
        second = InstructionSection(name="Bake", children=(_step("shape"), _step("bake")))
        outer = InstructionSection(name="All", children=(first, second))

        assert flatten_instructions([outer]) == flatten_instructions([first]) + flatten_instructions([second])

    def test_empty(self):
        assert flatten_instructions(()) == []


class TestToRecipeResponse:
    def test_full(self):
        recipe = Recipe(
            name="Pasta",
            image=("http://x/p.jpg", "http://x/q.jpg"),
            description="Quick",
            prep_time="PT5M",
            cook_time="PT10M",
            total_time="PT15M",
            ingredients=("pasta", "salt"),
            instructions=(_step("Boil"), InstructionSection(name="Finish", children=(_step("Drain"),))),
            author=Author(name="Alice", url="https://x/alice"),
        )

        assert to_recipe_response("https://x/pasta", recipe) == {
            "url": "https://x/pasta",
            "recipe": {
                "name": "Pasta",
                "description": "Quick",
                "image": "http://x/p.jpg",
                "prepTime": "PT5M",
                "cookTime": "PT10M",
                "totalTime": "PT15M",
                "author": "Alice",
            },
            "instructions": ["Boil", "Drain"],
            "ingredients": ["pasta", "salt"],
        }

    def test_missing_fields_are_empty_strings(self):
        response = to_recipe_response("https://x/y", Recipe(name="Bare", image=()))

        assert response["recipe"] == {
            "name": "Bare",
            "description": "",
            "image": "",
            "prepTime": "",
            "cookTime": "",
            "totalTime": "",
            "author": "",
        }
        assert response["instructions"] == []
        assert response["ingredients"] == []


class TestRecipeToRow:
    def test_columns(self):
        recipe = Recipe(
            name="Pasta",
            image=("http://x/p.jpg",),
            description="Quick",
            recipe_yield=("4",),
            recipe_cuisine=("Italian",),
            ingredients=("pasta",),
            instructions=(_step("Boil"),),
            author=Author(name="Alice", url="https://x/alice"),
            nutrition=Nutrition(calories="300", sodium="1 g"),
            keywords="quick",
            date_published="2024-01-01",
        )

        assert recipe_to_row("req-1", "user-1", recipe) == {
            "fk_recipe_request": "req-1",
            "user_id": "user-1",
            "name": "Pasta",
            "description": "Quick",
            "keywords": "quick",
            "date_published": "2024-01-01",
            "recipe_yield": ["4"],
            "recipe_cuisine": ["Italian"],
            "image": ["http://x/p.jpg"],
            "ingredients": ["pasta"],
            "instructions": ["Boil"],
            "author_name": "Alice",
            "author_url": "https://x/alice",
            "nutrition_calories": "300",
            "nutrition_sodium": "1 g",
        }

    def test_absent_fields_omitted(self):
        row = recipe_to_row("req-1", "user-1", Recipe(name="Bare", image=()))
        assert row == {"fk_recipe_request": "req-1", "user_id": "user-1", "name": "Bare"}
