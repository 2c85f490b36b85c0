import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from . import schemas
from .config import get_settings, setup_logging
from .db import SessionLocal, init_db
from .errors import ExternalServiceError, InvalidArgument, RecipeNotFound
from .external import ExternalRecipeClient
from .services import RecipeService

logger = logging.getLogger(__name__)

settings = get_settings()
setup_logging(settings.log_level)


def load_initial_data(fetcher) -> int:
    """Populate the database at startup; failures never stop the app."""
    logger.info("Starting data initialization from external API")
    db = SessionLocal()
    try:
        count = RecipeService(db, fetcher).load_from_external_source()
        logger.info("Initialized %d recipes from external API", count)
        return count
    except Exception:
        logger.exception("Error loading recipes during startup")
        return 0
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    fetcher = ExternalRecipeClient(
        settings.external_api_base_url,
        timeout=settings.external_api_timeout,
        max_attempts=settings.external_api_max_attempts,
        retry_delay=settings.external_api_retry_delay,
    )
    app.state.recipe_fetcher = fetcher
    try:
        if settings.load_on_startup:
            await run_in_threadpool(load_initial_data, fetcher)
        yield
    finally:
        fetcher.close()


app = FastAPI(title="Recipe API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_recipe_fetcher(request: Request):
    fetcher = getattr(request.app.state, "recipe_fetcher", None)
    if fetcher is None:
        raise RuntimeError("recipe_fetcher not initialized. Check app startup wiring.")
    return fetcher


def get_recipe_service(db: Session = Depends(get_db)) -> RecipeService:
    return RecipeService(db)


def get_loading_service(
    db: Session = Depends(get_db), fetcher=Depends(get_recipe_fetcher)
) -> RecipeService:
    return RecipeService(db, fetcher)


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    body = schemas.ErrorResponse(error=error, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument):
    logger.error("Invalid argument: %s", exc)
    return _error(400, "Invalid argument", str(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.error("Invalid request: %s", exc.errors())
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return _error(400, "Invalid argument", message)


@app.exception_handler(RecipeNotFound)
async def recipe_not_found_handler(request: Request, exc: RecipeNotFound):
    logger.error("Recipe not found: %s", exc)
    return _error(404, "Recipe not found", str(exc))


@app.exception_handler(ExternalServiceError)
async def external_service_handler(request: Request, exc: ExternalServiceError):
    logger.error("External API error: %s (cause: %r)", exc, exc.__cause__)
    return _error(503, "External API error", str(exc))


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error("An unexpected error occurred", exc_info=exc)
    return _error(
        500,
        "Internal server error",
        "An unexpected error occurred. Please try again later.",
    )


@app.get("/recipes", response_model=List[schemas.Recipe])
def list_recipes(service: RecipeService = Depends(get_recipe_service)):
    logger.info("Fetching all recipes")
    return service.get_all()


# declared before /recipes/{recipe_id} so "search" is not taken for an id
@app.get("/recipes/search", response_model=List[schemas.Recipe])
def search_recipes(
    q: Optional[str] = None,
    service: RecipeService = Depends(get_recipe_service),
):
    logger.info("Searching recipes with query: %r", q)
    return service.search(q)


@app.get("/recipes/{recipe_id}", response_model=schemas.Recipe)
def get_recipe(recipe_id: int, service: RecipeService = Depends(get_recipe_service)):
    logger.info("Fetching recipe with ID: %d", recipe_id)
    return service.get_by_id(recipe_id)


@app.post("/recipes/load", response_model=schemas.LoadResult)
def load_recipes(service: RecipeService = Depends(get_loading_service)):
    logger.info("Manual trigger to load recipes from external API")
    count = service.load_from_external_source()
    return schemas.LoadResult(
        message="Successfully loaded recipes from external API", count=count
    )
