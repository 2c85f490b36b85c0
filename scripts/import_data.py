import sys

from recipe_api.config import get_settings, setup_logging
from recipe_api.db import SessionLocal, init_db
from recipe_api.errors import ExternalServiceError
from recipe_api.external import ExternalRecipeClient
from recipe_api.services import RecipeService


def main():
    settings = get_settings()
    setup_logging(settings.log_level)
    init_db()
    fetcher = ExternalRecipeClient(
        settings.external_api_base_url,
        timeout=settings.external_api_timeout,
        max_attempts=settings.external_api_max_attempts,
        retry_delay=settings.external_api_retry_delay,
    )
    db = SessionLocal()
    try:
        count = RecipeService(db, fetcher).load_from_external_source()
    except ExternalServiceError as e:
        print(f'Import failed: {e} ({e.__cause__})')
        return 1
    finally:
        db.close()
        fetcher.close()
    print(f'Imported {count} recipes')
    return 0


if __name__ == '__main__':
    sys.exit(main())
