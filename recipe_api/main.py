import uvicorn

from .config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "recipe_api.app:app",
        host="0.0.0.0",
        port=8080,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
