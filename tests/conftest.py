# flake8: noqa
import sys
from pathlib import Path

# Ensure project root is on sys.path so `recipe_api` can be imported when tests are run
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from recipe_api import models
from recipe_api.db import make_engine
from recipe_api.schemas import ExternalRecipesResponse


SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
# Use StaticPool so the same in-memory database is shared across connections
engine = make_engine(SQLALCHEMY_DATABASE_URL, poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    models.Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        models.Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded(db):
    """The two recipes used by the search examples."""
    pasta = models.Recipe(
        name="Italian Pasta",
        cuisine="Italian",
        tags=["pasta", "italian", "dinner"],
        ingredients=["pasta", "tomato sauce", "cheese"],
        instructions=["Boil pasta", "Add sauce"],
        meal_type=["Dinner"],
    )
    tacos = models.Recipe(
        name="Mexican Tacos",
        cuisine="Mexican",
        tags=["tacos", "mexican", "lunch"],
        ingredients=["tortillas", "meat", "vegetables"],
        instructions=["Warm tortillas", "Serve with sushi-grade fish"],
        meal_type=["Lunch", "Sushi night"],
    )
    db.add_all([pasta, tacos])
    db.commit()
    return pasta, tacos


def external_payload(*recipes):
    return {
        "recipes": list(recipes),
        "total": len(recipes),
        "skip": 0,
        "limit": len(recipes),
    }


MARGHERITA = {
    "id": 1,
    "name": "Classic Margherita Pizza",
    "ingredients": ["Pizza dough", "Tomato sauce", "Fresh mozzarella cheese"],
    "instructions": ["Preheat the oven to 475°F (245°C).", "Bake"],
    "prepTimeMinutes": 20,
    "cookTimeMinutes": 15,
    "servings": 4,
    "difficulty": "Easy",
    "cuisine": "Italian",
    "caloriesPerServing": 300,
    "tags": ["Pizza", "Italian"],
    "userId": 166,
    "image": "https://cdn.dummyjson.com/recipe-images/1.webp",
    "rating": 4.6,
    "reviewCount": 98,
    "mealType": ["Dinner"],
}

STIR_FRY = {
    "id": 2,
    "name": "Vegetarian Stir-Fry",
    "ingredients": ["Tofu, cubed", "Broccoli florets", "Soy sauce"],
    "instructions": ["Stir-fry tofu", "Add vegetables"],
    "prepTimeMinutes": 15,
    "cookTimeMinutes": 20,
    "servings": 3,
    "difficulty": "Medium",
    "cuisine": "Asian",
    "caloriesPerServing": 250,
    "tags": ["Vegetarian", "Stir-fry", "Asian"],
    "userId": 143,
    "image": "https://cdn.dummyjson.com/recipe-images/2.webp",
    "rating": 4.7,
    "reviewCount": 26,
    "mealType": ["Lunch"],
}


class FakeFetcher:
    """Stands in for ExternalRecipeClient and records how often it ran."""

    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = 0

    def fetch_all(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        if self.payload is None:
            return None
        return ExternalRecipesResponse.model_validate(self.payload)
