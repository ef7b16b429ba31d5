"""
Headline API endpoints: the aggregate view, optionally with country stats.
"""
import logging
from typing import AsyncGenerator, Optional, Sequence

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.config import Settings, get_settings
from app.crawler.base import CrawlError, CrawlerConfig, CrawlSession
from app.crawler.sites import SiteSpec, get_site_specs
from app.schemas.headlines import (
    AggregateResponse,
    HeadlineResponse,
    SiteListResponse,
    SiteSpecResponse,
    SiteStatusResponse,
)
from app.schemas.stats import PandemicStats, PandemicStatsResponse, StatsRequest
from app.services.aggregator import AggregateResult, aggregate
from app.services.stats import CountryNotFoundError, StatsClient, StatsServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/headlines", tags=["headlines"])
sites_router = APIRouter(prefix="/sites", tags=["sites"])

GENERIC_FAILURE = "Something went wrong"


async def get_crawl_session(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[CrawlSession, None]:
    """Request-scoped crawl session."""
    async with CrawlSession(CrawlerConfig.from_settings(settings)) as session:
        yield session


def get_stats_client(settings: Settings = Depends(get_settings)) -> StatsClient:
    """Request-scoped stats client."""
    return StatsClient(settings)


def get_sites() -> Sequence[SiteSpec]:
    """The read-only site table."""
    return get_site_specs()


def build_response(result: AggregateResult) -> AggregateResponse:
    """Construct the response for one request from its AggregateResult."""
    covid_case: Optional[PandemicStatsResponse] = None
    if result.stats is not None:
        covid_case = PandemicStatsResponse(**result.stats.model_dump())

    return AggregateResponse(
        sites={
            name: [HeadlineResponse.model_validate(record) for record in records]
            for name, records in result.sites.items()
        },
        statuses={
            name: SiteStatusResponse.model_validate(outcome)
            for name, outcome in result.outcomes.items()
        },
        covid_case=covid_case,
    )


async def _aggregate_or_fail(
    sites: Sequence[SiteSpec],
    session: CrawlSession,
    settings: Settings,
) -> AggregateResult:
    try:
        return await aggregate(
            sites,
            session,
            concurrent=settings.CRAWL_CONCURRENTLY,
            fail_fast=settings.CRAWL_FAIL_FAST,
        )
    except CrawlError as e:
        logger.error("Crawl aborted: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=GENERIC_FAILURE,
        )


@router.get("", response_model=AggregateResponse)
async def get_headlines(
    sites: Sequence[SiteSpec] = Depends(get_sites),
    session: CrawlSession = Depends(get_crawl_session),
    settings: Settings = Depends(get_settings),
):
    """
    Crawl every configured site and return the aggregate headlines.

    Sites that could not be fetched appear with an empty list and an
    unavailable status.
    """
    result = await _aggregate_or_fail(sites, session, settings)
    return build_response(result)


@router.post("", response_model=AggregateResponse)
async def get_headlines_with_stats(
    request: StatsRequest,
    sites: Sequence[SiteSpec] = Depends(get_sites),
    session: CrawlSession = Depends(get_crawl_session),
    stats_client: StatsClient = Depends(get_stats_client),
    settings: Settings = Depends(get_settings),
):
    """
    Return the aggregate headlines with statistics for one country.

    An unrecognised country is a 400; any other lookup failure is a 500.
    """
    try:
        stats: PandemicStats = await stats_client.lookup(request.country)
    except CountryNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except StatsServiceError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=GENERIC_FAILURE,
        )

    result = await _aggregate_or_fail(sites, session, settings)
    result.stats = stats
    return build_response(result)


@sites_router.get("", response_model=SiteListResponse)
async def list_sites(sites: Sequence[SiteSpec] = Depends(get_sites)):
    """Return the configured site table."""
    return SiteListResponse(
        sites=[SiteSpecResponse.model_validate(spec) for spec in sites],
        total=len(sites),
    )
