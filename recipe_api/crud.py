import json
from typing import List

from sqlalchemy import Text, or_, type_coerce
from sqlalchemy.orm import Session

from . import models

# ids are stored as signed 64-bit integers
MAX_RECIPE_ID = 2**63 - 1


class TextMatcher:
    def clause(self, column, query: str):
        return column.icontains(query, autoescape=True)

    def matches(self, value, query: str) -> bool:
        return value is not None and query.lower() in value.lower()


class ItemMatcher:
    """Substring match against any single item of a JSON-encoded list.

    The SQL clause matches the JSON-escaped query against the encoded text.
    That text also holds quotes and escape sequences (``\\n``, ``\\u001f``),
    so rows it selects are checked item by item in ``matches``.
    """

    def clause(self, column, query: str):
        fragment = json.dumps(query, ensure_ascii=False)[1:-1]
        return type_coerce(column, Text).icontains(fragment, autoescape=True)

    def matches(self, value, query: str) -> bool:
        needle = query.lower()
        return any(needle in item.lower() for item in value or ())


# Fields searched by free-text search; a recipe matches if any pair matches.
SEARCH_FIELDS = (
    (models.Recipe.name, TextMatcher()),
    (models.Recipe.cuisine, TextMatcher()),
    (models.Recipe.tags, ItemMatcher()),
    (models.Recipe.ingredients, ItemMatcher()),
)


def _is_match(recipe: models.Recipe, query: str) -> bool:
    return any(
        matcher.matches(getattr(recipe, column.key), query)
        for column, matcher in SEARCH_FIELDS
    )


def get_recipe(db: Session, recipe_id: int):
    if not 0 < recipe_id <= MAX_RECIPE_ID:
        return None
    return db.query(models.Recipe).filter(models.Recipe.id == recipe_id).first()


def get_recipes(db: Session) -> List[models.Recipe]:
    return db.query(models.Recipe).order_by(models.Recipe.id).all()


def search_recipes(db: Session, query: str) -> List[models.Recipe]:
    predicate = or_(*(matcher.clause(column, query) for column, matcher in SEARCH_FIELDS))
    candidates = (
        db.query(models.Recipe)
        .filter(predicate)
        .order_by(models.Recipe.id)
        .all()
    )
    return [r for r in candidates if _is_match(r, query)]


def delete_all_recipes(db: Session) -> int:
    """Delete every recipe row. The caller owns the commit."""
    return db.query(models.Recipe).delete()


def create_recipes(db: Session, recipes: List[models.Recipe]) -> List[models.Recipe]:
    """Insert recipes in one flush and return the ones that got an id.

    The caller owns the commit.
    """
    db.add_all(recipes)
    db.flush()
    return [r for r in recipes if r.id is not None]
