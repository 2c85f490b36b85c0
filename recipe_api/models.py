import json

from sqlalchemy import Column, Float, Integer, String, Text
from sqlalchemy.types import TypeDecorator

from .db import Base


class JSONEncodedList(TypeDecorator):
    """List of strings stored as JSON text.

    NULL means the list is absent; ``"[]"`` is an empty list.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(list(value), ensure_ascii=False)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return json.loads(value)


class Recipe(Base):
    __tablename__ = "recipes"
    # ids are not reused after a full reload
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), index=True, nullable=False)
    cook_time_minutes = Column(Integer, nullable=True)
    prep_time_minutes = Column(Integer, nullable=True)
    servings = Column(Integer, nullable=True)
    difficulty = Column(String(50), nullable=True)
    cuisine = Column(String(100), nullable=True)
    tags = Column(JSONEncodedList, nullable=True)
    ingredients = Column(JSONEncodedList, nullable=True)
    instructions = Column(JSONEncodedList, nullable=True)
    meal_type = Column(JSONEncodedList, nullable=True)
    image = Column(String(500), nullable=True)
    rating = Column(Float, nullable=True)
    review_count = Column(Integer, nullable=True)
    calories_per_serving = Column(Integer, nullable=True)
    # not a foreign key: there is no users table
    user_id = Column(Integer, nullable=True)

    def __repr__(self):
        return f"<Recipe id={self.id} name={self.name!r}>"
