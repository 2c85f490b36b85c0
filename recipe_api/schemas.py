from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RecipeBase(BaseModel):
    """Recipe fields as exchanged with clients and the external API.

    Keys are camelCase on the wire (``cookTimeMinutes``); snake_case names
    are accepted on input as well. ``None`` in a list field means "no data"
    and is kept distinct from an empty list.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    name: str = Field(
        ..., min_length=1, json_schema_extra={"example": "Classic Margherita Pizza"}
    )
    cook_time_minutes: Optional[int] = Field(default=None, ge=0)
    prep_time_minutes: Optional[int] = Field(default=None, ge=0)
    servings: Optional[int] = Field(default=None, ge=1)
    difficulty: Optional[str] = Field(
        default=None, json_schema_extra={"example": "Easy"}
    )
    cuisine: Optional[str] = Field(
        default=None, json_schema_extra={"example": "Italian"}
    )
    tags: Optional[List[str]] = Field(
        default=None, json_schema_extra={"example": ["Pizza", "Italian"]}
    )
    ingredients: Optional[List[str]] = Field(
        default=None,
        json_schema_extra={"example": ["Pizza dough", "Tomato sauce"]},
    )
    instructions: Optional[List[str]] = Field(
        default=None,
        json_schema_extra={"example": ["Preheat the oven", "Bake"]},
    )
    image: Optional[str] = None
    rating: Optional[float] = None
    review_count: Optional[int] = Field(default=None, ge=0)
    calories_per_serving: Optional[int] = Field(default=None, ge=0)
    user_id: Optional[int] = None
    meal_type: Optional[List[str]] = Field(
        default=None, json_schema_extra={"example": ["Dinner"]}
    )


class Recipe(RecipeBase):
    id: Optional[int] = None


class ExternalRecipesResponse(BaseModel):
    """Payload of ``GET /recipes?limit=0`` on the external recipe API."""

    recipes: Optional[List[Recipe]] = None
    total: int = 0
    skip: int = 0
    limit: int = 0


class LoadResult(BaseModel):
    message: str
    count: int


class ErrorResponse(BaseModel):
    error: str
    message: str
