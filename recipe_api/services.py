import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from . import crud, mapper, schemas
from .errors import RecipeNotFound
from .validation import is_blank, validate_recipe_id, validate_search_query

logger = logging.getLogger(__name__)


class RecipeService:
    """Recipe ingestion and queries on top of one database session.

    ``fetcher`` is anything with a ``fetch_all()`` method returning an
    ``ExternalRecipesResponse`` or None; only ingestion needs it.
    """

    def __init__(self, db: Session, fetcher=None):
        self.db = db
        self.fetcher = fetcher

    def load_from_external_source(self) -> int:
        """Replace every stored recipe with the external API's collection.

        Returns the number of recipes stored. Existing rows are left alone
        when the fetch yields nothing.
        """
        if self.fetcher is None:
            raise RuntimeError("RecipeService was created without a fetcher")
        logger.info("Starting to load recipes from external API")

        response = self.fetcher.fetch_all()
        if response is None or response.recipes is None:
            logger.warning("External API returned no recipes; keeping existing data")
            return 0

        recipes = [mapper.to_entity(r, keep_id=False) for r in response.recipes]
        try:
            deleted = crud.delete_all_recipes(self.db)
            saved = crud.create_recipes(self.db, recipes)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(
            "Replaced %d recipes with %d from external API", deleted, len(saved)
        )
        return len(saved)

    def search(self, query: Optional[str]) -> List[schemas.Recipe]:
        if is_blank(query):
            logger.debug("Empty search query, returning all recipes")
            return self.get_all()
        validate_search_query(query)
        recipes = crud.search_recipes(self.db, query.strip())
        logger.debug("Found %d recipes matching %r", len(recipes), query)
        return mapper.to_schemas(recipes)

    def get_by_id(self, recipe_id: int) -> schemas.Recipe:
        validate_recipe_id(recipe_id)
        recipe = crud.get_recipe(self.db, recipe_id)
        if recipe is None:
            raise RecipeNotFound(recipe_id)
        return mapper.to_schema(recipe)

    def get_all(self) -> List[schemas.Recipe]:
        return mapper.to_schemas(crud.get_recipes(self.db))
