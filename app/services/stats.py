"""
Client for the third-party pandemic statistics API.
"""
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from app.core.config import Settings, get_settings
from app.schemas.stats import PandemicStats

logger = logging.getLogger(__name__)

COUNTRY_NOT_FOUND = "Country not found"


class StatsServiceError(Exception):
    """Base exception for stats lookup errors."""
    pass


class CountryNotFoundError(StatsServiceError):
    """The upstream API does not recognise the country."""

    def __init__(self, country: str):
        super().__init__(COUNTRY_NOT_FOUND)
        self.country = country


class StatsLookupError(StatsServiceError):
    """Transport or decode failure during a lookup."""
    pass


class StatsClient:
    """
    Looks up one country's statistics per call.

    The country name is interpolated into the URL path verbatim; httpx
    applies whatever percent-encoding the path requires.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self._client = client

    def country_url(self, country: str) -> str:
        """Build the lookup URL for a country."""
        return self.settings.stats_country_url.format(country=country)

    async def lookup(self, country: str) -> PandemicStats:
        """
        Fetch statistics for a country.

        Args:
            country: Free-text country name

        Returns:
            PandemicStats exactly as decoded

        Raises:
            CountryNotFoundError: If the body is the "Country not found" sentinel
            StatsLookupError: On transport failure or an undecodable body
        """
        try:
            url = self.country_url(country)
            if self._client is not None:
                response = await self._client.get(url)
            else:
                async with httpx.AsyncClient(
                    timeout=httpx.Timeout(
                        self.settings.REQUEST_TIMEOUT_SECONDS,
                        connect=self.settings.CONNECT_TIMEOUT_SECONDS,
                    ),
                    follow_redirects=True,
                ) as client:
                    response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("Stats lookup for %r failed: %s", country, e)
            raise StatsLookupError(f"Request error: {e}") from e

        body = response.text
        if body == COUNTRY_NOT_FOUND:
            logger.info("Stats lookup: country %r not found", country)
            raise CountryNotFoundError(country)

        try:
            return PandemicStats.model_validate_json(body)
        except ValidationError as e:
            logger.error("Stats lookup for %r returned an undecodable body (HTTP %s): %s", country, response.status_code, e)
            raise StatsLookupError(f"Invalid response body: {e}") from e
