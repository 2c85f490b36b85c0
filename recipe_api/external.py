import json
import logging
import time
from typing import Optional

import httpx

from .errors import ExternalServiceError
from .schemas import ExternalRecipesResponse

logger = logging.getLogger(__name__)

# limit=0 asks the external API for the whole collection
RECIPES_PATH = "/recipes"
RECIPES_PARAMS = {"limit": 0}


class ExternalRecipeClient:
    """Client for the third-party recipe API.

    One instance (and its underlying ``httpx.Client``) is created at startup
    and reused for every fetch. Failed attempts are retried a fixed number
    of times with a fixed delay in between.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
        http_client: Optional[httpx.Client] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.Client(
            base_url=self.base_url, timeout=timeout
        )

    def close(self) -> None:
        if self._owns_client:
            self.http_client.close()

    def _fetch_once(self) -> Optional[ExternalRecipesResponse]:
        # httpx timeouts bound each connect/read phase; the deadline bounds
        # the whole response, checked as each chunk of the body arrives
        deadline = time.monotonic() + self.timeout
        chunks = []
        with self.http_client.stream(
            "GET", RECIPES_PATH, params=RECIPES_PARAMS, timeout=self.timeout
        ) as response:
            response.raise_for_status()
            for chunk in response.iter_bytes():
                if time.monotonic() > deadline:
                    raise httpx.ReadTimeout(
                        f"Response not complete within {self.timeout}s",
                        request=response.request,
                    )
                chunks.append(chunk)
        body = b"".join(chunks)
        if not body.strip():
            return None
        data = json.loads(body)
        if data is None:
            return None
        return ExternalRecipesResponse.model_validate(data)

    def fetch_all(self) -> Optional[ExternalRecipesResponse]:
        """Fetch every recipe from the external API.

        Returns None when the API answers with an empty body. Raises
        ExternalServiceError once all attempts have failed.
        """
        logger.info("Fetching all recipes from external API %s", self.base_url)
        last_error = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                result = self._fetch_once()
            except Exception as e:
                last_error = e
                logger.warning(
                    "Attempt %d/%d to fetch recipes failed: %s",
                    attempt,
                    self.max_attempts,
                    e,
                )
                if attempt < self.max_attempts:
                    time.sleep(self.retry_delay)
                continue
            logger.info("Successfully fetched recipes from external API")
            return result

        logger.error(
            "Giving up fetching recipes after %d attempts", self.max_attempts
        )
        raise ExternalServiceError(
            "Failed to fetch recipes from external API"
        ) from last_error
