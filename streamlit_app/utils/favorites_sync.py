"""
Favorites reconciliation for the home and recipe detail screens.

FavoritesController owns every state change that involves the backend:
- loading and focus-syncing the favorites list
- AI search, regeneration with a cumulative exclusion set, clearing the search
- optimistic favorite add/remove with snapshot rollback

Suggested recipes (client shape):
    {"id", "name", "cooking_time", "image_url", "ingredients", "instructions", "favoriteId"}
where id is the favorited recipe's id or a placeholder "ai-<index>", and favoriteId
is None when the recipe is not a favorite.

# NOTE: Suggestions and favorites are matched by exact recipe name, which is the same
    key the backend uses to de-duplicate favorited recipes.

A missing token or a 401 from any call signs the user out (credentials cleared,
on_sign_out invoked). Nothing is retried.
"""

import logging
import uuid
from typing import Any, Callable, Dict, List, Optional

from .api_client import ApiError, AuthExpiredError, BackendClient, NetworkError
from .credentials import CredentialStore
from .formatting import parse_cooking_minutes
from .optimistic import OptimisticTransaction
from .search_session import HomeState

logger = logging.getLogger(__name__)

PLACEHOLDER_ID_PREFIX = "ai-"
OPTIMISTIC_ID_PREFIX = "opt-"

FAVORITES_LOAD_FAILED = "Failed to load favorites"
SUGGESTIONS_FAILED = "Failed to get recipe suggestions"
FAVORITE_UPDATE_FAILED = "Could not update favorites. Please try again."


def find_by_name(recipes: List[Dict[str, Any]], name: str) -> Optional[Dict[str, Any]]:
    for recipe in recipes:
        if recipe.get("name") == name:
            return recipe
    return None


def to_client_recipe(suggestion: Dict[str, Any], index: int, favorites: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Map an API suggestion to the client shape, reusing ids of a favorite with the same name.

    Args:
        suggestion: {title, time, ingredients, instructions, imageQuery, imageUrl}
        index: Position in the batch (used for the placeholder id)
        favorites: Current favorites list
    """
    title = suggestion.get("title") or ""
    existing = find_by_name(favorites, title)
    return {
        "id": existing["id"] if existing else f"{PLACEHOLDER_ID_PREFIX}{index}",
        "name": title,
        "cooking_time": parse_cooking_minutes(suggestion.get("time")),
        "image_url": suggestion.get("imageUrl") or None,
        "ingredients": suggestion.get("ingredients") or [],
        "instructions": suggestion.get("instructions") or [],
        "favoriteId": existing.get("favoriteId") if existing else None,
    }


def _matches(suggestion: Dict[str, Any], recipe_id: Optional[str], name: Optional[str]) -> bool:
    # Placeholder ids repeat across batches, so the name must agree too
    return suggestion.get("id") == recipe_id and suggestion.get("name") == name


def reconcile_suggestion(recipe: Dict[str, Any], favorites: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Re-derive a suggestion's id and favoriteId from the authoritative favorites list."""
    match = find_by_name(favorites, recipe.get("name"))
    if match:
        return {**recipe, "id": match["id"], "favoriteId": match.get("favoriteId")}
    if recipe.get("favoriteId"):
        return {**recipe, "favoriteId": None}
    return recipe


class FavoritesController:
    """
    Backend-facing operations of the recipe screens.

    Args:
        api: BackendClient (or any object with the same methods)
        credentials: Where the bearer token lives
        state: HomeState rendered by the pages
        on_sign_out: Called after credentials are cleared (navigates to login)
    """

    def __init__(
        self,
        api: BackendClient,
        credentials: CredentialStore,
        state: HomeState,
        on_sign_out: Optional[Callable[[], None]] = None,
    ) -> None:
        self.api = api
        self.credentials = credentials
        self.state = state
        self.on_sign_out = on_sign_out

    # ------------------------------------------------------------ session

    def sign_out(self) -> None:
        """Forget credentials and screen state, then hand control to on_sign_out."""
        logger.info("Signing out user %s", self.credentials.get_user_id())
        self.credentials.clear()
        self.state.favorites = []
        self.state.search.clear()
        self.state.error = ""
        self.state.searching = False
        if self.on_sign_out is not None:
            self.on_sign_out()

    def logout(self) -> None:
        """Invalidate the session on the backend (best effort) and sign out locally."""
        token = self.credentials.get_token()
        if token:
            try:
                self.api.logout(token)
            except ApiError as e:
                logger.warning("Backend logout failed: %s", e)
        self.sign_out()

    def _require_token(self) -> Optional[str]:
        token = self.credentials.get_token()
        if not token:
            self.sign_out()
        return token

    # ---------------------------------------------------------- favorites

    def load_favorites(self) -> None:
        """Fetch favorites with a loading state (first visit)."""
        token = self._require_token()
        if not token:
            return

        self.state.loading = True
        self.state.error = ""
        try:
            self.state.favorites = self.api.list_favorites(token)
        except AuthExpiredError:
            self.sign_out()
        except NetworkError as e:
            self.state.error = e.message
        except ApiError as e:
            self.state.error = e.message or FAVORITES_LOAD_FAILED
        finally:
            self.state.loading = False

    def sync_favorites(self) -> None:
        """
        Focus reconciliation: refresh favorites silently and re-derive every
        suggestion's id/favoriteId by name. Non-auth failures are logged and ignored.
        """
        token = self.credentials.get_token()
        if not token:
            return

        try:
            favorites = self.api.list_favorites(token)
        except AuthExpiredError:
            self.sign_out()
            return
        except ApiError as e:
            logger.warning("Favorites sync failed: %s", e)
            return

        self.state.favorites = favorites
        search = self.state.search
        search.suggestions = [reconcile_suggestion(r, favorites) for r in search.suggestions]

    # ------------------------------------------------------------- search

    def search(self, query: Optional[str]) -> None:
        """Generate suggestions for query; a blank query returns to favorites mode."""
        if not query or not query.strip():
            self.clear_search()
            return

        self.state.search.start(query)
        self._fetch_suggestions(lambda token: self.api.generate(token, query))

    def clear_search(self) -> None:
        self.state.search.clear()
        self.state.searching = False
        self.state.error = ""

    def reject_suggestions(self) -> None:
        """Exclude every suggestion currently shown and regenerate ("I don't like these")."""
        search = self.state.search
        if not search.active:
            return

        search.exclude([r["name"] for r in search.suggestions])
        query = search.query
        excluded = list(search.excluded)
        self._fetch_suggestions(lambda token: self.api.regenerate(token, query, excluded))

    def _fetch_suggestions(self, call: Callable[[str], List[Dict[str, Any]]]) -> None:
        token = self._require_token()
        if not token:
            return

        search = self.state.search
        request = search.begin_request()
        self.state.searching = True
        self.state.error = ""
        try:
            results = call(token)
        except AuthExpiredError:
            self.sign_out()
            return
        except ApiError as e:
            if search.is_current(request):
                self.state.error = e.message or SUGGESTIONS_FAILED
            return
        finally:
            if search.is_current(request):
                self.state.searching = False

        if not search.is_current(request):
            logger.info("Discarding suggestions from superseded request %d", request)
            return

        favorites = self.state.favorites
        search.suggestions = [to_client_recipe(r, i, favorites) for i, r in enumerate(results)]

    # ------------------------------------------------- optimistic toggling

    def add_favorite(self, recipe: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Optimistically favorite a recipe.

        The suggestion is marked and a placeholder favorite appended immediately; on
        success the placeholder favorite id and the recipe's placeholder id are replaced
        by the server's ids everywhere, on failure both lists are restored.

        Returns:
            {"favoriteId", "recipeId"} on success, None on failure
        """
        token = self._require_token()
        if not token:
            return None

        recipe_id = recipe.get("id")
        name = recipe.get("name")
        optimistic_id = f"{OPTIMISTIC_ID_PREFIX}{uuid.uuid4().hex[:12]}"
        state = self.state

        try:
            with OptimisticTransaction(state, "favorites", "search.suggestions"):
                for suggestion in state.search.suggestions:
                    if _matches(suggestion, recipe_id, name):
                        suggestion["favoriteId"] = optimistic_id
                state.favorites.append({
                    "id": recipe_id,
                    "name": name,
                    "cooking_time": recipe.get("cooking_time"),
                    "image_url": recipe.get("image_url"),
                    "ingredients": list(recipe.get("ingredients") or []),
                    "instructions": list(recipe.get("instructions") or []),
                    "favoriteId": optimistic_id,
                })
                ref = self.api.add_favorite(token, recipe)
        except AuthExpiredError:
            self.sign_out()
            return None
        except ApiError as e:
            logger.warning("Add to favorites failed for %r: %s", name, e)
            state.error = FAVORITE_UPDATE_FAILED
            return None

        favorite_id = ref["favoriteId"]
        new_recipe_id = ref.get("recipeId") or recipe_id
        for suggestion in state.search.suggestions:
            if _matches(suggestion, recipe_id, name):
                suggestion["id"] = new_recipe_id
                suggestion["favoriteId"] = favorite_id
        for favorite in state.favorites:
            if favorite.get("favoriteId") == optimistic_id:
                favorite["id"] = new_recipe_id
                favorite["favoriteId"] = favorite_id

        return {"favoriteId": favorite_id, "recipeId": new_recipe_id}

    def remove_favorite(self, recipe: Dict[str, Any]) -> bool:
        """
        Optimistically unfavorite a recipe; both lists are restored on failure.

        Returns:
            True if the backend confirmed the removal
        """
        favorite_id = recipe.get("favoriteId")
        if not favorite_id:
            return False

        token = self._require_token()
        if not token:
            return False

        recipe_id = recipe.get("id")
        name = recipe.get("name")
        state = self.state
        try:
            with OptimisticTransaction(state, "favorites", "search.suggestions"):
                state.favorites = [f for f in state.favorites if f.get("favoriteId") != favorite_id]
                for suggestion in state.search.suggestions:
                    if _matches(suggestion, recipe_id, name):
                        suggestion["favoriteId"] = None
                self.api.remove_favorite(token, favorite_id)
        except AuthExpiredError:
            self.sign_out()
            return False
        except ApiError as e:
            logger.warning("Remove from favorites failed for %s: %s", favorite_id, e)
            state.error = FAVORITE_UPDATE_FAILED
            return False

        return True

    def toggle_favorite(self, recipe: Dict[str, Any]) -> Dict[str, Any]:
        """
        Add or remove depending on the recipe's favoriteId.

        Returns:
            The recipe with its id/favoriteId updated to the outcome
        """
        if recipe.get("favoriteId"):
            if self.remove_favorite(recipe):
                return {**recipe, "favoriteId": None}
            return recipe

        ref = self.add_favorite(recipe)
        if ref:
            return {**recipe, "id": ref["recipeId"], "favoriteId": ref["favoriteId"]}
        return recipe
