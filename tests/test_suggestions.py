"""
Tests for the suggestion service (kitchen.suggestions) without the HTTP layer.
"""

import threading
from unittest.mock import Mock, patch

import pytest

from kitchen.errors import SuggestionError, ValidationError
from kitchen.suggestions import RECIPE_COUNT, build_prompt, lookup_images, suggest_recipes


def recipe(i, **overrides):
    data = {
        "title": f"Dish {i}",
        "time": "30 mins",
        "ingredients": ["a", "b"],
        "instructions": ["mix", "bake"],
        "image_query": f"dish {i}",
    }
    data.update(overrides)
    return data


class TestBuildPrompt:

    def test_no_exclusions_returns_prompt_unchanged(self):
        assert build_prompt("curry") == "curry"
        assert build_prompt("curry", []) == "curry"

    def test_exclusions_are_listed_in_order(self):
        prompt = build_prompt("curry", ["Tikka Masala", "Korma"])

        assert prompt.startswith("curry\n\n")
        assert "Tikka Masala, Korma" in prompt
        assert "Do NOT suggest" in prompt

    def test_blank_exclusions_are_ignored(self):
        assert build_prompt("curry", ["", "  "]) == "curry"


class TestSuggestRecipes:

    def test_blank_prompt_raises_validation_error(self):
        with pytest.raises(ValidationError, match="Prompt is required"):
            suggest_recipes("  ")

    def test_returns_suggested_recipes_with_images(self):
        with patch("kitchen.suggestions.GeminiRecipeGenerator") as gen_class, \
             patch("kitchen.suggestions.PexelsImageProvider") as img_class:
            gen_class.return_value.generate.return_value = [recipe(i) for i in range(RECIPE_COUNT)]
            img_class.return_value.find_image.side_effect = lambda q: f"https://img/{q}"

            results = suggest_recipes("cake", excluded=["Brownies"])

        assert [r.title for r in results] == [f"Dish {i}" for i in range(RECIPE_COUNT)]
        assert [r.image_url for r in results] == [f"https://img/dish {i}" for i in range(RECIPE_COUNT)]
        sent_prompt = gen_class.return_value.generate.call_args.args[0]
        assert "Brownies" in sent_prompt

    def test_blank_ingredient_lines_are_dropped(self):
        with patch("kitchen.suggestions.GeminiRecipeGenerator") as gen_class, \
             patch("kitchen.suggestions.PexelsImageProvider", side_effect=RuntimeError("no key")):
            batch = [recipe(i) for i in range(RECIPE_COUNT)]
            batch[0]["ingredients"] = ["flour", " ", "sugar"]
            gen_class.return_value.generate.return_value = batch

            results = suggest_recipes("cake")

        assert results[0].ingredients == ["flour", "sugar"]

    @pytest.mark.parametrize("field, value", [
        ("title", ""),
        ("time", " "),
        ("ingredients", []),
        ("instructions", ["  "]),
    ])
    def test_empty_fields_are_rejected(self, field, value):
        with patch("kitchen.suggestions.GeminiRecipeGenerator") as gen_class:
            batch = [recipe(i) for i in range(RECIPE_COUNT)]
            batch[1][field] = value
            gen_class.return_value.generate.return_value = batch

            with pytest.raises(SuggestionError):
                suggest_recipes("cake")

    def test_malformed_item_is_rejected(self):
        with patch("kitchen.suggestions.GeminiRecipeGenerator") as gen_class:
            batch = [recipe(i) for i in range(RECIPE_COUNT)]
            batch[4] = {"title": "No body"}
            gen_class.return_value.generate.return_value = batch

            with pytest.raises(SuggestionError):
                suggest_recipes("cake")


class TestLookupImages:

    def test_order_is_preserved(self):
        with patch("kitchen.suggestions.PexelsImageProvider") as img_class:
            img_class.return_value.find_image.side_effect = lambda q: f"url:{q}"

            assert lookup_images(["a", "b", "c"]) == ["url:a", "url:b", "url:c"]

    def test_lookups_run_concurrently(self):
        """All five lookups must be in flight at the same time."""
        barrier = threading.Barrier(RECIPE_COUNT, timeout=5)

        def find_image(query):
            barrier.wait()
            return f"url:{query}"

        with patch("kitchen.suggestions.PexelsImageProvider") as img_class:
            img_class.return_value.find_image.side_effect = find_image

            urls = lookup_images([f"q{i}" for i in range(RECIPE_COUNT)])

        assert urls == [f"url:q{i}" for i in range(RECIPE_COUNT)]

    def test_failures_and_blank_queries_become_none(self):
        provider = Mock()
        provider.find_image.side_effect = [TimeoutError("slow"), "url:ok"]

        with patch("kitchen.suggestions.PexelsImageProvider", return_value=provider):
            urls = lookup_images(["slow", "", "ok"])

        # Blank query never reaches the provider
        assert urls[1] is None
        assert sorted(u for u in urls if u) == ["url:ok"]
        assert provider.find_image.call_count == 2

    def test_no_queries(self):
        assert lookup_images([]) == []
