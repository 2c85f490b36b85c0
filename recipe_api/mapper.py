from typing import List, Optional

from . import models, schemas

FIELDS = (
    "name",
    "cook_time_minutes",
    "prep_time_minutes",
    "servings",
    "difficulty",
    "cuisine",
    "tags",
    "ingredients",
    "instructions",
    "image",
    "rating",
    "review_count",
    "calories_per_serving",
    "user_id",
    "meal_type",
)

LIST_FIELDS = ("tags", "ingredients", "instructions", "meal_type")


def _copy(name: str, value):
    # lists are copied so entity and transfer object never share state
    if name in LIST_FIELDS and value is not None:
        return list(value)
    return value


def to_schema(recipe: Optional[models.Recipe]) -> Optional[schemas.Recipe]:
    if recipe is None:
        return None
    values = {name: _copy(name, getattr(recipe, name)) for name in FIELDS}
    return schemas.Recipe(id=recipe.id, **values)


def to_entity(
    recipe: Optional[schemas.Recipe], keep_id: bool = True
) -> Optional[models.Recipe]:
    """Build an unsaved entity from a transfer object.

    With ``keep_id=False`` the identifier is dropped so storage assigns a
    fresh one; ingestion always maps this way.
    """
    if recipe is None:
        return None
    values = {name: _copy(name, getattr(recipe, name)) for name in FIELDS}
    if keep_id and recipe.id is not None:
        values["id"] = recipe.id
    return models.Recipe(**values)


def to_schemas(recipes) -> List[schemas.Recipe]:
    return [to_schema(r) for r in recipes]
