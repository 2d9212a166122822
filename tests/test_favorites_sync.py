"""
Tests for FavoritesController: search sessions, focus sync and optimistic favorites.

The backend client is a Mock; state lives in a HomeState and a dict-backed
CredentialStore, exactly as the pages wire them up.
"""

import copy
from unittest.mock import Mock

import pytest

from streamlit_app.utils.api_client import ApiError, AuthExpiredError, NetworkError
from streamlit_app.utils.credentials import CredentialStore
from streamlit_app.utils.favorites_sync import (
    FAVORITE_UPDATE_FAILED,
    FavoritesController,
    reconcile_suggestion,
    to_client_recipe,
)
from streamlit_app.utils.search_session import HomeState


def make_suggestion(title, time="20 mins", image_url="https://img/1.jpg"):
    return {
        "title": title,
        "time": time,
        "ingredients": ["1 thing"],
        "instructions": ["Do it."],
        "imageQuery": title.lower(),
        "imageUrl": image_url,
    }


def make_favorite(name, recipe_id, favorite_id):
    return {
        "favoriteId": favorite_id,
        "id": recipe_id,
        "name": name,
        "cooking_time": 20,
        "image_url": None,
        "ingredients": [],
        "instructions": [],
    }


BATCH = [make_suggestion(t) for t in ("Pesto", "Carbonara", "Arrabbiata", "Aglio e Olio", "Cacio e Pepe")]


@pytest.fixture
def api():
    return Mock()


@pytest.fixture
def storage():
    return {"auth_token": "tok-1", "user_id": "user-1"}


@pytest.fixture
def signed_out():
    return Mock()


@pytest.fixture
def controller(api, storage, signed_out):
    return FavoritesController(api, CredentialStore(storage), HomeState(), on_sign_out=signed_out)


class TestClientRecipeMapping:

    def test_placeholder_id_and_parsed_time(self):
        recipe = to_client_recipe(make_suggestion("Pesto", time="45 mins"), 2, [])

        assert recipe["id"] == "ai-2"
        assert recipe["name"] == "Pesto"
        assert recipe["cooking_time"] == 45
        assert recipe["favoriteId"] is None

    def test_existing_favorite_supplies_ids(self):
        favorites = [make_favorite("Pesto", "r-9", "f-9")]

        recipe = to_client_recipe(make_suggestion("Pesto"), 0, favorites)

        assert recipe["id"] == "r-9"
        assert recipe["favoriteId"] == "f-9"

    def test_reconcile_clears_stale_marker(self):
        recipe = {"id": "r-1", "name": "Pesto", "favoriteId": "f-1"}

        assert reconcile_suggestion(recipe, [])["favoriteId"] is None


class TestSearch:

    def test_search_populates_suggestions(self, controller, api):
        api.generate.return_value = BATCH

        controller.search("pasta")

        api.generate.assert_called_once_with("tok-1", "pasta")
        state = controller.state
        assert [r["name"] for r in state.search.suggestions] == [s["title"] for s in BATCH]
        assert [r["id"] for r in state.search.suggestions] == ["ai-0", "ai-1", "ai-2", "ai-3", "ai-4"]
        assert not state.searching
        assert state.error == ""

    def test_blank_query_returns_to_favorites_mode(self, controller, api):
        api.generate.return_value = BATCH
        controller.search("pasta")

        controller.search("   ")

        assert not controller.state.search.active
        assert controller.state.search.suggestions == []
        assert api.generate.call_count == 1

    def test_rejections_accumulate_across_regenerations(self, controller, api):
        """Each regeneration excludes every recipe shown so far, not just the last batch."""
        second = [make_suggestion(t) for t in ("A", "B", "C", "D", "E")]
        third = [make_suggestion(t) for t in ("F", "G", "H", "I", "J")]
        api.generate.return_value = BATCH
        api.regenerate.side_effect = [second, third]

        controller.search("pasta")
        controller.reject_suggestions()
        controller.reject_suggestions()

        first_names = [s["title"] for s in BATCH]
        calls = api.regenerate.call_args_list
        assert calls[0].args == ("tok-1", "pasta", first_names)
        assert calls[1].args == ("tok-1", "pasta", first_names + ["A", "B", "C", "D", "E"])
        assert [r["name"] for r in controller.state.search.suggestions] == ["F", "G", "H", "I", "J"]

    def test_new_query_resets_exclusions(self, controller, api):
        api.generate.return_value = BATCH
        api.regenerate.return_value = BATCH
        controller.search("pasta")
        controller.reject_suggestions()

        controller.search("curry")
        controller.reject_suggestions()

        assert api.regenerate.call_args_list[-1].args[2] == [s["title"] for s in BATCH]

    def test_reject_without_search_does_nothing(self, controller, api):
        controller.reject_suggestions()

        api.regenerate.assert_not_called()

    def test_error_message_is_shown(self, controller, api):
        api.generate.side_effect = ApiError(500, "Failed to generate response from AI")

        controller.search("pasta")

        assert controller.state.error == "Failed to generate response from AI"
        assert not controller.state.searching

    def test_stale_result_is_discarded(self, controller, api):
        """A response arriving after the search was cleared must not be applied."""
        def respond(token, prompt):
            controller.clear_search()
            return BATCH

        api.generate.side_effect = respond

        controller.search("pasta")

        assert controller.state.search.suggestions == []
        assert not controller.state.searching

    def test_stale_error_is_ignored(self, controller, api):
        def fail(token, prompt):
            controller.clear_search()
            raise ApiError(500, "boom")

        api.generate.side_effect = fail

        controller.search("pasta")

        assert controller.state.error == ""


class TestSignOut:

    def test_401_signs_out(self, controller, api, storage, signed_out):
        api.generate.side_effect = AuthExpiredError(401, "Invalid or expired token")

        controller.search("pasta")

        assert storage == {}
        signed_out.assert_called_once()
        assert not controller.state.searching
        assert not controller.state.search.active

    def test_missing_token_signs_out_without_calling_backend(self, api, signed_out):
        controller = FavoritesController(api, CredentialStore({}), HomeState(), on_sign_out=signed_out)

        controller.load_favorites()

        api.list_favorites.assert_not_called()
        signed_out.assert_called_once()

    def test_logout_ignores_backend_failure(self, controller, api, storage, signed_out):
        api.logout.side_effect = NetworkError()

        controller.logout()

        api.logout.assert_called_once_with("tok-1")
        assert storage == {}
        signed_out.assert_called_once()


class TestLoadAndSync:

    def test_load_favorites(self, controller, api):
        favorites = [make_favorite("Pesto", "r-1", "f-1")]
        api.list_favorites.return_value = favorites

        controller.load_favorites()

        assert controller.state.favorites == favorites
        assert not controller.state.loading

    def test_load_failure_sets_error(self, controller, api):
        api.list_favorites.side_effect = NetworkError()

        controller.load_favorites()

        assert controller.state.error == "Network error. Please try again."
        assert not controller.state.loading

    def test_sync_reconciles_suggestions_by_name(self, controller, api):
        """Favorites changed elsewhere are reflected in the suggestion markers."""
        api.generate.return_value = BATCH
        controller.search("pasta")
        controller.state.search.suggestions[1]["favoriteId"] = "f-stale"
        api.list_favorites.return_value = [make_favorite("Pesto", "r-1", "f-1")]

        controller.sync_favorites()

        suggestions = controller.state.search.suggestions
        assert suggestions[0]["id"] == "r-1"
        assert suggestions[0]["favoriteId"] == "f-1"
        assert suggestions[1]["favoriteId"] is None
        assert controller.state.favorites == [make_favorite("Pesto", "r-1", "f-1")]

    def test_sync_failure_keeps_state(self, controller, api):
        favorites = [make_favorite("Pesto", "r-1", "f-1")]
        controller.state.favorites = list(favorites)
        api.list_favorites.side_effect = ApiError(500, "Failed to fetch favorites")

        controller.sync_favorites()

        assert controller.state.favorites == favorites
        assert controller.state.error == ""


class TestOptimisticFavorites:

    @pytest.fixture
    def searched(self, controller, api):
        api.generate.return_value = BATCH
        controller.search("pasta")
        return controller

    def test_add_replaces_placeholder_ids(self, searched, api):
        api.add_favorite.return_value = {"favoriteId": "f-1", "recipeId": "r-1"}
        recipe = dict(searched.state.search.suggestions[0])

        ref = searched.add_favorite(recipe)

        assert ref == {"favoriteId": "f-1", "recipeId": "r-1"}
        api.add_favorite.assert_called_once_with("tok-1", recipe)
        suggestion = searched.state.search.suggestions[0]
        assert suggestion["id"] == "r-1"
        assert suggestion["favoriteId"] == "f-1"
        assert searched.state.favorites[-1]["favoriteId"] == "f-1"
        assert searched.state.favorites[-1]["id"] == "r-1"

    def test_add_from_stale_selection_leaves_current_batch_alone(self, searched, api):
        """A recipe from an earlier batch must not mark the new suggestion that reuses its placeholder id."""
        api.add_favorite.return_value = {"favoriteId": "f-old", "recipeId": "r-old"}
        stale = {**searched.state.search.suggestions[0], "name": "Shakshuka"}

        ref = searched.add_favorite(stale)

        assert ref == {"favoriteId": "f-old", "recipeId": "r-old"}
        current = searched.state.search.suggestions[0]
        assert current["id"] == "ai-0"
        assert current["favoriteId"] is None
        assert searched.state.favorites[-1]["name"] == "Shakshuka"

    def test_remove_from_stale_selection_leaves_current_batch_alone(self, searched):
        searched.state.search.suggestions[0]["favoriteId"] = "f-current"
        stale = {**searched.state.search.suggestions[0], "name": "Shakshuka", "favoriteId": "f-old"}

        assert searched.remove_favorite(stale) is True
        assert searched.state.search.suggestions[0]["favoriteId"] == "f-current"

    def test_add_shows_marker_before_backend_answers(self, searched, api):
        seen = {}

        def respond(token, recipe):
            seen["suggestion"] = dict(searched.state.search.suggestions[0])
            seen["favorites"] = len(searched.state.favorites)
            return {"favoriteId": "f-1", "recipeId": "r-1"}

        api.add_favorite.side_effect = respond

        searched.add_favorite(dict(searched.state.search.suggestions[0]))

        assert seen["suggestion"]["favoriteId"].startswith("opt-")
        assert seen["favorites"] == 1

    def test_failed_add_restores_both_lists(self, searched, api):
        searched.state.favorites = [make_favorite("Risotto", "r-0", "f-0")]
        before_favorites = copy.deepcopy(searched.state.favorites)
        before_suggestions = copy.deepcopy(searched.state.search.suggestions)
        api.add_favorite.side_effect = ApiError(500, "Failed to add favorite")

        ref = searched.add_favorite(dict(searched.state.search.suggestions[0]))

        assert ref is None
        assert searched.state.favorites == before_favorites
        assert searched.state.search.suggestions == before_suggestions
        assert searched.state.error == FAVORITE_UPDATE_FAILED

    def test_add_401_signs_out(self, searched, api, storage, signed_out):
        api.add_favorite.side_effect = AuthExpiredError(401, "Invalid or expired token")

        assert searched.add_favorite(dict(searched.state.search.suggestions[0])) is None
        assert storage == {}
        signed_out.assert_called_once()

    def test_remove(self, controller, api):
        favorite = make_favorite("Pesto", "r-1", "f-1")
        controller.state.favorites = [dict(favorite)]

        assert controller.remove_favorite(favorite) is True

        api.remove_favorite.assert_called_once_with("tok-1", "f-1")
        assert controller.state.favorites == []

    def test_failed_remove_restores_favorite(self, controller, api):
        favorite = make_favorite("Pesto", "r-1", "f-1")
        controller.state.favorites = [dict(favorite)]
        api.remove_favorite.side_effect = NetworkError()

        assert controller.remove_favorite(favorite) is False
        assert controller.state.favorites == [favorite]
        assert controller.state.error == FAVORITE_UPDATE_FAILED

    def test_toggle(self, searched, api):
        api.add_favorite.return_value = {"favoriteId": "f-1", "recipeId": "r-1"}
        recipe = dict(searched.state.search.suggestions[0])

        added = searched.toggle_favorite(recipe)
        removed = searched.toggle_favorite(added)

        assert added["favoriteId"] == "f-1"
        assert added["id"] == "r-1"
        assert removed["favoriteId"] is None
        api.remove_favorite.assert_called_once_with("tok-1", "f-1")
        assert searched.state.search.suggestions[0]["favoriteId"] is None
