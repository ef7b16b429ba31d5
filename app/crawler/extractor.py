"""
Extraction engine: fetch one site and parse its headline listing.
"""
import logging
from typing import List

from app.crawler.base import CrawlSession, DecodeError
from app.crawler.parser import HeadlineParser, HeadlineRecord
from app.crawler.sites import SiteSpec

logger = logging.getLogger(__name__)


async def extract(spec: SiteSpec, session: CrawlSession) -> List[HeadlineRecord]:
    """
    Fetch spec.base_url once and extract its headlines in document order.

    Args:
        spec: The site to crawl
        session: The request-scoped crawl session

    Returns:
        HeadlineRecords, possibly empty

    Raises:
        FetchError: If the page could not be fetched
        DecodeError: If the response is not an HTML document
    """
    result = await session.fetch(spec.base_url)

    if not result.is_html:
        raise DecodeError(spec.base_url, f"Unexpected content type {result.content_type!r}")

    records = HeadlineParser(spec).parse(result.content)
    logger.debug("%s: extracted %d records", spec.name, len(records))
    return records
