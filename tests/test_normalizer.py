"""Tests for schema.org field normalization."""

from recipe_ingest.recipe_import.models import (
    Author,
    InstructionSection,
    InstructionStep,
    Nutrition,
)
from recipe_ingest.recipe_import.normalizer import (
    MAX_INSTRUCTION_DEPTH,
    extract_images,
    get_string,
    normalize_ingredients,
    normalize_keywords,
    normalize_string_or_array,
    parse_author,
    parse_instructions,
    parse_nutrition,
    sanitize_text,
)


class TestSanitizeText:
    def test_decodes_entities(self):
        assert sanitize_text("Caf&eacute;&nbsp;Recipe") == "Café Recipe"
        assert sanitize_text("Mac &amp; Cheese") == "Mac & Cheese"
        assert sanitize_text("&quot;Best&quot; &#39;ever&#39;") == "\"Best\" 'ever'"

    def test_collapses_whitespace(self):
        assert sanitize_text("  Mix\n\n the \t  flour ") == "Mix the flour"

    def test_non_breaking_space(self):
        assert sanitize_text("2\u00a0cups") == "2 cups"

    def test_empty(self):
        assert sanitize_text("") == ""
        assert sanitize_text("   ") == ""

    def test_stable_on_clean_text(self):
        for text in ["Caf&eacute;&nbsp;Recipe", "  a \n b  ", "plain"]:
            once = sanitize_text(text)
            assert sanitize_text(once) == once


class TestGetString:
    def test_present(self):
        assert get_string({"name": " Soup "}, "name") == "Soup"

    def test_absent_or_wrong_type(self):
        assert get_string({}, "name") is None
        assert get_string({"name": 5}, "name") is None
        assert get_string({"name": ["Soup"]}, "name") is None

    def test_blank_is_absent(self):
        assert get_string({"name": "  "}, "name") is None


class TestNormalizeStringOrArray:
    def test_string(self):
        assert normalize_string_or_array("Dessert") == ("Dessert",)

    def test_list_drops_empty_entries(self):
        assert normalize_string_or_array(["Italian", "", "Pasta"]) == ("Italian", "Pasta")

    def test_numbers(self):
        assert normalize_string_or_array(4) == ("4",)
        assert normalize_string_or_array(4.0) == ("4",)
        assert normalize_string_or_array(2.5) == ("2.5",)
        assert normalize_string_or_array([4, "4 servings"]) == ("4", "4 servings")

    def test_other_shapes(self):
        assert normalize_string_or_array(None) == ()
        assert normalize_string_or_array({"value": 4}) == ()
        assert normalize_string_or_array(True) == ()


class TestNormalizeIngredients:
    def test_string_list(self):
        assert normalize_ingredients(["2 cups flour", "1 tsp salt"]) == ("2 cups flour", "1 tsp salt")

    def test_single_string(self):
        assert normalize_ingredients("1 egg") == ("1 egg",)

    def test_dict_entries(self):
        result = normalize_ingredients([{"text": "2 cups flour"}, {"name": "1 tsp salt"}])
        assert result == ("2 cups flour", "1 tsp salt")

    def test_filters_empty_and_non_strings(self):
        result = normalize_ingredients(["2 cups flour", "", "  ", 3, None, "1 tsp salt"])
        assert result == ("2 cups flour", "1 tsp salt")

    def test_entities_decoded(self):
        assert normalize_ingredients(["1&frac12; cups milk"]) == ("1½ cups milk",)

    def test_not_a_list(self):
        assert normalize_ingredients(None) == ()
        assert normalize_ingredients({"text": "flour"}) == ()


class TestExtractImages:
    def test_string(self):
        assert extract_images("https://example.com/a.jpg") == ("https://example.com/a.jpg",)

    def test_list_of_strings(self):
        result = extract_images(["https://example.com/a.jpg", "", "https://example.com/b.jpg"])
        assert result == ("https://example.com/a.jpg", "https://example.com/b.jpg")

    def test_image_object(self):
        assert extract_images({"@type": "ImageObject", "url": "https://example.com/a.jpg"}) == (
            "https://example.com/a.jpg",
        )
        assert extract_images({"contentUrl": "https://example.com/c.jpg"}) == ("https://example.com/c.jpg",)

    def test_list_of_image_objects(self):
        result = extract_images([{"url": "https://example.com/a.jpg"}, {"width": 100}])
        assert result == ("https://example.com/a.jpg",)

    def test_relative_resolved_against_base(self):
        result = extract_images("/img/a.jpg", base_url="https://example.com/recipes/pasta")
        assert result == ("https://example.com/img/a.jpg",)

    def test_absent(self):
        assert extract_images(None) == ()
        assert extract_images([]) == ()
        assert extract_images({"width": 100}) == ()


class TestParseInstructions:
    def test_steps(self):
        result = parse_instructions(
            [
                {"@type": "HowToStep", "text": "Mix ingredients"},
                {"@type": "HowToStep", "text": "Bake for 30 minutes", "name": "Bake"},
            ]
        )
        assert result == (
            InstructionStep(text="Mix ingredients"),
            InstructionStep(text="Bake for 30 minutes", name="Bake"),
        )

    def test_sections(self):
        result = parse_instructions(
            [
                {
                    "@type": "HowToSection",
                    "name": "Dough",
                    "itemListElement": [
                        {"@type": "HowToStep", "text": "Knead"},
                        {"@type": "HowToStep", "text": "Rest"},
                    ],
                }
            ]
        )
        assert result == (
            InstructionSection(
                name="Dough",
                children=(InstructionStep(text="Knead"), InstructionStep(text="Rest")),
            ),
        )

    def test_section_without_name(self):
        result = parse_instructions([{"itemListElement": [{"text": "Stir"}]}])
        assert result == (InstructionSection(name="", children=(InstructionStep(text="Stir"),)),)

    def test_skips_non_objects(self):
        result = parse_instructions(["Plain string step", {"text": "Real step"}, 7])
        assert result == (InstructionStep(text="Real step"),)

    def test_drops_empty_entries(self):
        result = parse_instructions([{"@type": "HowToStep"}, {"itemListElement": []}, {"text": "  "}])
        assert result == ()

    def test_single_object(self):
        assert parse_instructions({"text": "Only step"}) == (InstructionStep(text="Only step"),)

    def test_absent(self):
        assert parse_instructions(None) == ()
        assert parse_instructions("Mix and bake") == ()

    def test_depth_is_capped(self):
        node = {"text": "deepest"}
        for _ in range(MAX_INSTRUCTION_DEPTH + 5):
            node = {"name": "level", "itemListElement": [node]}

        result = parse_instructions([node])

        # The truncated branch has no step at the bottom, so it collapses away
        assert result == ()

    def test_nesting_within_cap(self):
        node = {"text": "deep step"}
        for _ in range(3):
            node = {"name": "level", "itemListElement": [node]}

        (section,) = parse_instructions([node])
        for _ in range(2):
            (section,) = section.children
        assert section.children == (InstructionStep(text="deep step"),)


class TestParseAuthor:
    def test_string(self):
        assert parse_author("Jane") == Author(name="Jane")

    def test_object(self):
        result = parse_author({"@type": "Person", "name": "Jane", "url": "https://example.com/jane"})
        assert result == Author(name="Jane", url="https://example.com/jane", type="Person")

    def test_list_takes_first(self):
        assert parse_author(["Alice", "Bob"]) == Author(name="Alice")
        assert parse_author([{"@type": "Organization", "name": "Test Kitchen"}]) == Author(
            name="Test Kitchen", type="Organization"
        )

    def test_nameless_is_absent(self):
        assert parse_author({"@type": "Person", "url": "https://example.com"}) is None
        assert parse_author("") is None
        assert parse_author([]) is None
        assert parse_author(None) is None


class TestParseNutrition:
    def test_fields(self):
        result = parse_nutrition(
            {
                "@type": "NutritionInformation",
                "calories": "250 calories",
                "fatContent": "10 g",
                "saturatedFatContent": "3 g",
                "proteinContent": "6 g",
            }
        )
        assert result == Nutrition(calories="250 calories", fat="10 g", saturated_fat="3 g", protein="6 g")

    def test_numbers_kept_as_strings(self):
        assert parse_nutrition({"calories": 250}) == Nutrition(calories="250")

    def test_empty_is_absent(self):
        assert parse_nutrition({"@type": "NutritionInformation"}) is None
        assert parse_nutrition(None) is None
        assert parse_nutrition("250 calories") is None


class TestNormalizeKeywords:
    def test_string(self):
        assert normalize_keywords("quick, easy") == "quick, easy"

    def test_list_joined(self):
        assert normalize_keywords(["quick", "", "easy"]) == "quick, easy"

    def test_absent(self):
        assert normalize_keywords(None) is None
        assert normalize_keywords("") is None
        assert normalize_keywords([]) is None
