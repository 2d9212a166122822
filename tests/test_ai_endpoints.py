"""
Tests for the AI suggestion endpoints.

The recipe generator and the image provider are patched where kitchen.suggestions
looks them up, so no network call is made.
"""

from unittest.mock import Mock, patch

import pytest


def make_batch(count=5, prefix="Recipe"):
    return [
        {
            "title": f"{prefix} {i}",
            "time": f"{10 + i} mins",
            "ingredients": [f"ingredient {i}a", f"ingredient {i}b"],
            "instructions": [f"step {i}.1", f"step {i}.2"],
            "image_query": f"{prefix.lower()} {i} on a plate",
        }
        for i in range(count)
    ]


@pytest.fixture
def generator():
    with patch("kitchen.suggestions.GeminiRecipeGenerator") as mock_class:
        instance = Mock()
        instance.generate.return_value = make_batch()
        mock_class.return_value = instance
        yield instance


@pytest.fixture
def images():
    with patch("kitchen.suggestions.PexelsImageProvider") as mock_class:
        instance = Mock()
        instance.find_image.side_effect = lambda query: f"https://images.example.com/{query.replace(' ', '-')}.jpg"
        mock_class.return_value = instance
        yield instance


class TestGenerate:
    """Test cases for POST /api/ai/generate."""

    def test_generate_returns_exactly_five_recipes(self, client, auth_headers, generator, images):
        response = client.post("/api/ai/generate", json={"prompt": "quick vegan dinner"}, headers=auth_headers)

        assert response.status_code == 200
        recipes = response.json()["recipes"]
        assert len(recipes) == 5
        for recipe in recipes:
            assert recipe["title"]
            assert recipe["time"]
            assert recipe["ingredients"]
            assert recipe["instructions"]
            assert recipe["imageQuery"]
            assert recipe["imageUrl"].startswith("https://images.example.com/")

    def test_generate_passes_prompt_and_count(self, client, auth_headers, generator, images):
        client.post("/api/ai/generate", json={"prompt": "quick vegan dinner"}, headers=auth_headers)

        generator.generate.assert_called_once_with("quick vegan dinner", 5)

    def test_images_are_looked_up_per_recipe(self, client, auth_headers, generator, images):
        client.post("/api/ai/generate", json={"prompt": "soup"}, headers=auth_headers)

        queries = sorted(call.args[0] for call in images.find_image.call_args_list)
        assert queries == [f"recipe {i} on a plate" for i in range(5)]

    def test_failed_image_lookup_yields_null_url(self, client, auth_headers, generator, images):
        """Test that one failing lookup does not fail the request."""
        def find_image(query):
            if query.startswith("recipe 2"):
                raise RuntimeError("Pexels 503")
            return "https://images.example.com/ok.jpg"
        images.find_image.side_effect = find_image

        response = client.post("/api/ai/generate", json={"prompt": "soup"}, headers=auth_headers)

        assert response.status_code == 200
        urls = [r["imageUrl"] for r in response.json()["recipes"]]
        assert urls[2] is None
        assert all(url == "https://images.example.com/ok.jpg" for i, url in enumerate(urls) if i != 2)

    def test_missing_image_credential_yields_null_urls(self, client, auth_headers, generator):
        with patch("kitchen.suggestions.PexelsImageProvider", side_effect=RuntimeError("PEXELS_API_KEY is not set")):
            response = client.post("/api/ai/generate", json={"prompt": "soup"}, headers=auth_headers)

        assert response.status_code == 200
        assert [r["imageUrl"] for r in response.json()["recipes"]] == [None] * 5

    @pytest.mark.parametrize("body", [{}, {"prompt": ""}, {"prompt": "   "}])
    def test_missing_prompt_returns_400(self, client, auth_headers, generator, images, body):
        response = client.post("/api/ai/generate", json=body, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Prompt is required"}
        generator.generate.assert_not_called()

    def test_generate_requires_auth(self, client, generator, images):
        response = client.post("/api/ai/generate", json={"prompt": "soup"})

        assert response.status_code == 401


class TestGenerationFailures:
    """Upstream failures surface as 500 with a fixed message."""

    @pytest.mark.parametrize("count", [4, 6, 0])
    def test_wrong_cardinality_returns_500(self, client, auth_headers, generator, images, count):
        generator.generate.return_value = make_batch(count)

        response = client.post("/api/ai/generate", json={"prompt": "soup"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate response from AI"}

    def test_empty_field_returns_500(self, client, auth_headers, generator, images):
        batch = make_batch()
        batch[3]["instructions"] = []
        generator.generate.return_value = batch

        response = client.post("/api/ai/generate", json={"prompt": "soup"}, headers=auth_headers)

        assert response.status_code == 500

    def test_generator_error_returns_500(self, client, auth_headers, generator, images):
        generator.generate.side_effect = ValueError("Expecting value: line 1 column 1")

        response = client.post("/api/ai/generate", json={"prompt": "soup"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate response from AI"}
        images.find_image.assert_not_called()

    def test_missing_ai_credential_returns_500(self, client, auth_headers, images):
        with patch("kitchen.suggestions.GeminiRecipeGenerator", side_effect=RuntimeError("GEMINI_API_KEY is not set")):
            response = client.post("/api/ai/generate", json={"prompt": "soup"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate response from AI"}


class TestRegenerate:
    """Test cases for POST /api/ai/regenerate."""

    def test_regenerate_adds_exclusions_to_prompt(self, client, auth_headers, generator, images):
        response = client.post(
            "/api/ai/regenerate",
            json={"prompt": "pasta", "excludedRecipes": ["Carbonara", "Pesto Pasta"]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert len(response.json()["recipes"]) == 5
        prompt, count = generator.generate.call_args.args
        assert prompt.startswith("pasta")
        assert "Carbonara" in prompt
        assert "Pesto Pasta" in prompt
        assert count == 5

    def test_regenerate_without_exclusions_uses_plain_prompt(self, client, auth_headers, generator, images):
        client.post("/api/ai/regenerate", json={"prompt": "pasta"}, headers=auth_headers)

        generator.generate.assert_called_once_with("pasta", 5)

    def test_regenerate_missing_prompt_returns_400(self, client, auth_headers, generator, images):
        response = client.post("/api/ai/regenerate", json={"excludedRecipes": ["Carbonara"]}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Prompt is required"}
