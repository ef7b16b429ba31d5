"""
Schemas for headline API endpoints.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.stats import PandemicStatsResponse


class HeadlineResponse(BaseModel):
    """Response schema for one headline."""
    heading: str
    link: str
    published_at: str

    model_config = ConfigDict(from_attributes=True)


class SiteStatusResponse(BaseModel):
    """Response schema for a site's crawl status."""
    name: str
    available: bool
    record_count: int = 0
    removed_duplicates: int = 0
    error: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class AggregateResponse(BaseModel):
    """Response schema for the aggregate headline view."""
    sites: Dict[str, List[HeadlineResponse]]
    statuses: Dict[str, SiteStatusResponse]
    covid_case: Optional[PandemicStatsResponse] = None


class SiteSpecResponse(BaseModel):
    """Response schema for a configured site."""
    name: str
    base_url: str
    container_selector: str
    heading_selector: str
    link_selector: str
    published_selector: str
    skip_leading: int
    dedup_required: bool
    link_base: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SiteListResponse(BaseModel):
    """Response schema for the site table."""
    sites: List[SiteSpecResponse]
    total: int
