class RecipeAPIError(Exception):
    """Base class for errors raised by the recipe core."""


class InvalidArgument(RecipeAPIError, ValueError):
    pass


class RecipeNotFound(RecipeAPIError, LookupError):
    def __init__(self, recipe_id):
        self.recipe_id = recipe_id
        super().__init__(f"Recipe not found with ID: {recipe_id}")


class ExternalServiceError(RecipeAPIError):
    """The external recipe API could not be reached after all retries."""
