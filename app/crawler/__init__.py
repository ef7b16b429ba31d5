"""
Headline crawler: site table, crawl session, parsing and deduplication.
"""
from app.crawler.base import CrawlError, CrawlerConfig, CrawlResult, CrawlSession, DecodeError, FetchError
from app.crawler.deduplication import deduplicate
from app.crawler.extractor import extract
from app.crawler.parser import HeadlineParser, HeadlineRecord
from app.crawler.sites import (
    DEFAULT_SITES,
    SiteConfigError,
    SiteSpec,
    get_site_specs,
    load_site_specs,
)

__all__ = [
    "CrawlError",
    "CrawlerConfig",
    "CrawlResult",
    "CrawlSession",
    "DecodeError",
    "FetchError",
    "deduplicate",
    "extract",
    "HeadlineParser",
    "HeadlineRecord",
    "DEFAULT_SITES",
    "SiteConfigError",
    "SiteSpec",
    "get_site_specs",
    "load_site_specs",
]
