"""
Aggregator: crawl every configured site and assemble one result keyed by site.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from app.crawler.base import CrawlError, CrawlSession
from app.crawler.deduplication import deduplicate
from app.crawler.extractor import extract
from app.crawler.parser import HeadlineRecord
from app.crawler.sites import SiteSpec
from app.schemas.stats import PandemicStats

logger = logging.getLogger(__name__)


@dataclass
class SiteOutcome:
    """Per-site crawl status."""
    name: str
    available: bool = True
    record_count: int = 0
    removed_duplicates: int = 0
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)


@dataclass
class AggregateResult:
    """
    Headlines for every configured site, in site table order.

    `sites` always holds one entry per SiteSpec; a site that failed or
    matched nothing maps to an empty list.
    """
    sites: Dict[str, List[HeadlineRecord]] = field(default_factory=dict)
    outcomes: Dict[str, SiteOutcome] = field(default_factory=dict)
    stats: Optional[PandemicStats] = None

    @property
    def unavailable_sites(self) -> List[str]:
        return [name for name, outcome in self.outcomes.items() if not outcome.available]


def skip_leading(
    records: List[HeadlineRecord],
    count: int,
    outcome: SiteOutcome,
) -> List[HeadlineRecord]:
    """
    Drop `count` records from the front of the list.

    When fewer than `count` records were extracted the page layout no longer
    matches the configuration; the list is returned unmodified and a warning
    is recorded on the outcome.
    """
    if count <= 0:
        return records
    if len(records) < count:
        message = f"expected at least {count} records to skip, found {len(records)}; skip ignored"
        logger.warning("%s: %s", outcome.name, message)
        outcome.warnings.append(message)
        return records
    return records[count:]


async def crawl_site(spec: SiteSpec, session: CrawlSession) -> Tuple[List[HeadlineRecord], SiteOutcome]:
    """
    Extract one site and apply its configured post-processing.

    Returns:
        Tuple of (records, SiteOutcome)

    Raises:
        CrawlError: If the site could not be fetched or decoded
    """
    outcome = SiteOutcome(name=spec.name)

    records = await extract(spec, session)
    records = skip_leading(records, spec.skip_leading, outcome)

    if spec.dedup_required:
        records, removed = deduplicate(records)
        outcome.removed_duplicates = removed

    outcome.record_count = len(records)
    return records, outcome


async def _crawl_isolated(
    spec: SiteSpec,
    session: CrawlSession,
    fail_fast: bool,
) -> Tuple[List[HeadlineRecord], SiteOutcome]:
    try:
        return await crawl_site(spec, session)
    except CrawlError as e:
        if fail_fast:
            raise
        logger.error("%s unavailable: %s", spec.name, e)
        return [], SiteOutcome(name=spec.name, available=False, error=e.message)


async def aggregate(
    specs: Sequence[SiteSpec],
    session: CrawlSession,
    concurrent: bool = False,
    fail_fast: bool = False,
) -> AggregateResult:
    """
    Crawl every site and assemble the aggregate.

    Sites are crawled one after another in table order unless `concurrent`
    is set, in which case they are fetched in parallel (bounded by the
    session's max_concurrent_requests) and joined before assembly. Either
    way the result is keyed and ordered by the site table.

    Args:
        specs: The site table
        session: The request-scoped crawl session
        concurrent: Fetch sites in parallel
        fail_fast: Propagate the first crawl error instead of isolating it

    Returns:
        AggregateResult with one entry per site

    Raises:
        CrawlError: Only when fail_fast is set
    """
    if concurrent:
        semaphore = asyncio.Semaphore(max(1, session.config.max_concurrent_requests))

        async def bounded(spec: SiteSpec) -> Tuple[List[HeadlineRecord], SiteOutcome]:
            async with semaphore:
                return await _crawl_isolated(spec, session, fail_fast)

        tasks = [asyncio.ensure_future(bounded(spec)) for spec in specs]
        try:
            outcomes = await asyncio.gather(*tasks)
        except CrawlError:
            # Stop the remaining sites before the session is closed under them
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
    else:
        outcomes = []
        for spec in specs:
            outcomes.append(await _crawl_isolated(spec, session, fail_fast))

    result = AggregateResult()
    for spec, (records, outcome) in zip(specs, outcomes):
        result.sites[spec.name] = records
        result.outcomes[spec.name] = outcome

    unavailable = result.unavailable_sites
    if unavailable:
        logger.warning("Aggregate built with %d unavailable sites: %s", len(unavailable), ", ".join(unavailable))
    return result
