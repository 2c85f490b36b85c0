from typing import Optional

from .errors import InvalidArgument

MIN_QUERY_LENGTH = 2
MAX_QUERY_LENGTH = 100


def is_blank(query: Optional[str]) -> bool:
    return query is None or not query.strip()


def validate_search_query(query: Optional[str]) -> None:
    """Reject search queries that are too short or too long.

    Blank queries are allowed and mean "return everything".
    """
    if is_blank(query):
        return
    trimmed = query.strip()
    if len(trimmed) < MIN_QUERY_LENGTH:
        raise InvalidArgument(
            f"Search query must be at least {MIN_QUERY_LENGTH} characters long."
        )
    if len(trimmed) > MAX_QUERY_LENGTH:
        raise InvalidArgument(
            f"Search query must not exceed {MAX_QUERY_LENGTH} characters."
        )


def validate_recipe_id(recipe_id: Optional[int]) -> None:
    if recipe_id is None or recipe_id <= 0:
        raise InvalidArgument("Recipe ID must be a positive number.")
