"""
Direct recipe CRUD.

Recipes created here are owned by their creator; update and delete are filtered by
owner so a caller can never modify another user's recipe. A recipe that does not
exist and a recipe owned by someone else are reported the same way (NotFoundError).

Ingredients and instructions are stored one row per line, ordered by order_index
and step_number respectively.
"""

import logging
from typing import List

from .db import RecipeIngredientRow, RecipeRow, RecipeStepRow, get_db_session, utcnow
from .errors import NotFoundError, ValidationError
from .models import Recipe, RecipeInput

logger = logging.getLogger(__name__)


def recipe_to_model(row: RecipeRow) -> Recipe:
    """Convert a RecipeRow (with loaded ingredients/steps) to a Recipe."""
    return Recipe(
        id=row.id,
        name=row.name,
        cooking_time=row.cooking_time,
        image_url=row.image_url,
        ingredients=[i.ingredient_text for i in row.ingredients],
        instructions=[s.step_text for s in row.steps],
        user_id=row.user_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def ingredient_rows(recipe_id: str, ingredients: List[str]) -> List[RecipeIngredientRow]:
    return [
        RecipeIngredientRow(recipe_id=recipe_id, ingredient_text=text, order_index=index)
        for index, text in enumerate(ingredients)
    ]


def step_rows(recipe_id: str, instructions: List[str]) -> List[RecipeStepRow]:
    return [
        RecipeStepRow(recipe_id=recipe_id, step_text=text, step_number=index + 1)
        for index, text in enumerate(instructions)
    ]


def _require_name(data: RecipeInput) -> str:
    name = (data.name or "").strip()
    if not name:
        raise ValidationError("Recipe name is required")
    return data.name


def list_recipes() -> List[Recipe]:
    """
    List all recipes, newest first.

    Returns:
        List of Recipe models including ingredients and instructions
    """
    db = get_db_session()
    try:
        rows = db.query(RecipeRow).order_by(RecipeRow.created_at.desc()).all()
        return [recipe_to_model(row) for row in rows]
    finally:
        db.close()


def get_recipe(recipe_id: str) -> Recipe:
    """
    Get a single recipe by id.

    Raises:
        NotFoundError: If no recipe has this id
    """
    db = get_db_session()
    try:
        row = db.get(RecipeRow, recipe_id)
        if row is None:
            raise NotFoundError("Recipe not found")
        return recipe_to_model(row)
    finally:
        db.close()


def create_recipe(user_id: str, data: RecipeInput) -> Recipe:
    """
    Create a recipe owned by user_id.

    Args:
        user_id: Owner of the new recipe
        data: Full recipe record

    Returns:
        The created Recipe

    Raises:
        ValidationError: If the name is missing
    """
    name = _require_name(data)

    db = get_db_session()
    try:
        row = RecipeRow(
            name=name,
            cooking_time=data.cooking_time,
            image_url=data.image_url,
            user_id=user_id,
        )
        db.add(row)
        db.flush()
        row.ingredients = ingredient_rows(row.id, data.ingredients)
        row.steps = step_rows(row.id, data.instructions)
        db.commit()
        db.refresh(row)

        logger.info("Recipe created: id=%s name=%r owner=%s", row.id, row.name, user_id)
        return recipe_to_model(row)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def update_recipe(user_id: str, recipe_id: str, data: RecipeInput) -> Recipe:
    """
    Replace every field of an owned recipe (full-record update).

    Raises:
        ValidationError: If the name is missing
        NotFoundError: If the recipe does not exist or is not owned by user_id
    """
    name = _require_name(data)

    db = get_db_session()
    try:
        row = (
            db.query(RecipeRow)
            .filter(RecipeRow.id == recipe_id, RecipeRow.user_id == user_id)
            .first()
        )
        if row is None:
            raise NotFoundError("Recipe not found or unauthorized")

        row.name = name
        row.cooking_time = data.cooking_time
        row.image_url = data.image_url
        row.ingredients = ingredient_rows(row.id, data.ingredients)
        row.steps = step_rows(row.id, data.instructions)
        row.updated_at = utcnow()
        db.commit()
        db.refresh(row)

        logger.info("Recipe updated: id=%s owner=%s", recipe_id, user_id)
        return recipe_to_model(row)
    except NotFoundError:
        raise
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def delete_recipe(user_id: str, recipe_id: str) -> None:
    """
    Delete an owned recipe together with its ingredients, steps and favorites.

    Raises:
        NotFoundError: If the recipe does not exist or is not owned by user_id
    """
    db = get_db_session()
    try:
        row = (
            db.query(RecipeRow)
            .filter(RecipeRow.id == recipe_id, RecipeRow.user_id == user_id)
            .first()
        )
        if row is None:
            raise NotFoundError("Recipe not found or unauthorized")

        db.delete(row)
        db.commit()
        logger.info("Recipe deleted: id=%s owner=%s", recipe_id, user_id)
    except NotFoundError:
        raise
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
