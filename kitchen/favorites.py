"""
Favorites: a user's saved references to recipes.

Favoriting an AI suggestion persists the recipe on the fly. Recipes are matched by
exact (case-sensitive) name, so favoriting a suggestion whose name already exists
reuses that recipe instead of inserting a duplicate row, and favoriting the same
recipe twice returns the existing favorite.

# NOTE: Name matching is the only de-duplication key. Two different dishes with the
    same title share one recipe row; the same dish with a different title gets two.

Insertion is not transactional across tables: the recipe header row is committed
first, and a failure inserting its ingredient or step rows is logged without
removing the recipe.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from .db import FavoriteRow, RecipeRow, get_db_session
from .errors import NotFoundError, ValidationError
from .models import FavoriteRecipe, FavoriteRef, RecipeInput
from .recipes import ingredient_rows, step_rows

logger = logging.getLogger(__name__)


def find_recipe_id_by_name(db, name: str) -> Optional[str]:
    """Oldest recipe whose name equals name exactly, or None."""
    row = (
        db.query(RecipeRow.id)
        .filter(RecipeRow.name == name)
        .order_by(RecipeRow.created_at.asc())
        .first()
    )
    return row[0] if row else None


def _find_favorite(db, user_id: str, recipe_id: str) -> Optional[FavoriteRow]:
    return (
        db.query(FavoriteRow)
        .filter(FavoriteRow.user_id == user_id, FavoriteRow.recipe_id == recipe_id)
        .first()
    )


def _insert_recipe(db, data: RecipeInput) -> str:
    """
    Insert a recipe created by favoriting, then its ingredients and steps.

    Returns:
        The new recipe id
    """
    recipe = RecipeRow(
        name=data.name,
        cooking_time=data.cooking_time,
        image_url=data.image_url,
    )
    db.add(recipe)
    db.commit()
    recipe_id = recipe.id

    if data.ingredients:
        try:
            db.add_all(ingredient_rows(recipe_id, data.ingredients))
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error("Failed to insert ingredients for recipe %s: %s", recipe_id, e, exc_info=True)

    if data.instructions:
        try:
            db.add_all(step_rows(recipe_id, data.instructions))
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error("Failed to insert steps for recipe %s: %s", recipe_id, e, exc_info=True)

    return recipe_id


def list_favorites(user_id: str) -> List[FavoriteRecipe]:
    """
    List the user's favorites, most recently favorited first.

    Args:
        user_id: Owner of the favorites

    Returns:
        List of FavoriteRecipe models, each flattened with its recipe fields
    """
    db = get_db_session()
    try:
        rows = (
            db.query(FavoriteRow)
            .filter(FavoriteRow.user_id == user_id)
            .order_by(FavoriteRow.created_at.desc())
            .all()
        )

        favorites = []
        for fav in rows:
            recipe = fav.recipe
            favorites.append(FavoriteRecipe(
                favorite_id=fav.id,
                id=recipe.id,
                name=recipe.name,
                cooking_time=recipe.cooking_time,
                image_url=recipe.image_url,
                ingredients=[i.ingredient_text for i in recipe.ingredients],
                instructions=[s.step_text for s in recipe.steps],
                created_at=fav.created_at,
            ))
        return favorites
    finally:
        db.close()


def add_favorite(user_id: str, data: RecipeInput) -> Tuple[FavoriteRef, bool]:
    """
    Favorite a recipe, creating the recipe first if no recipe has the same name.

    Args:
        user_id: The user favoriting the recipe
        data: Recipe record (name, cooking_time, image_url, ingredients, instructions)

    Returns:
        Tuple of (FavoriteRef with favoriteId and recipeId, created) where created is
        False when the user had already favorited this recipe

    Raises:
        ValidationError: If the name is missing
    """
    if not (data.name or "").strip():
        raise ValidationError("Recipe name is required")

    db = get_db_session()
    try:
        recipe_id = find_recipe_id_by_name(db, data.name)
        if recipe_id is None:
            recipe_id = _insert_recipe(db, data)
            logger.info("Created recipe %s for favorite (name=%r)", recipe_id, data.name)
        else:
            logger.debug("Reusing recipe %s for favorite (name=%r)", recipe_id, data.name)

        existing = _find_favorite(db, user_id, recipe_id)
        if existing is not None:
            return FavoriteRef(favorite_id=existing.id, recipe_id=recipe_id), False

        favorite = FavoriteRow(user_id=user_id, recipe_id=recipe_id)
        db.add(favorite)
        try:
            db.commit()
        except IntegrityError:
            # Concurrent identical request won the insert
            db.rollback()
            existing = _find_favorite(db, user_id, recipe_id)
            if existing is None:
                raise
            return FavoriteRef(favorite_id=existing.id, recipe_id=recipe_id), False

        logger.info("Favorite created: id=%s user=%s recipe=%s", favorite.id, user_id, recipe_id)
        return FavoriteRef(favorite_id=favorite.id, recipe_id=recipe_id), True
    finally:
        db.close()


def remove_favorite(user_id: str, favorite_id: str) -> None:
    """
    Remove one of the user's favorites.

    Only a favorite owned by user_id is ever deleted.

    Raises:
        NotFoundError: If the user has no favorite with this id
    """
    db = get_db_session()
    try:
        deleted = (
            db.query(FavoriteRow)
            .filter(FavoriteRow.id == favorite_id, FavoriteRow.user_id == user_id)
            .delete()
        )
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Error removing favorite %s: %s", favorite_id, e)
        raise
    finally:
        db.close()

    if not deleted:
        raise NotFoundError("Favorite not found")
    logger.info("Favorite removed: id=%s user=%s", favorite_id, user_id)
