"""
Declarative site table: one SiteSpec per news source.

Selectors describe each site's current markup and break silently (empty
fields) when that markup changes, so the table can be replaced at startup
from an external JSON file via the SITES_FILE setting.
"""
import json
import logging
from dataclasses import asdict, dataclass, fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from app.core.config import get_settings

logger = logging.getLogger(__name__)


class SiteConfigError(Exception):
    """Site table could not be loaded."""
    pass


@dataclass(frozen=True)
class SiteSpec:
    """Fetch target and extraction selectors for one news source."""
    name: str
    container_selector: str
    heading_selector: str
    link_selector: str
    published_selector: str
    base_url: str
    skip_leading: int = 0
    dedup_required: bool = False
    # Resolve relative hrefs against this URL; links are left verbatim when unset
    link_base: Optional[str] = None

    def __post_init__(self):
        if not self.name:
            raise SiteConfigError("Site name must not be empty")
        if self.skip_leading < 0:
            raise SiteConfigError(f"{self.name}: skip_leading must be >= 0")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SiteSpec":
        """Build a SiteSpec from a JSON object, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise SiteConfigError(f"Unknown site keys: {', '.join(sorted(unknown))}")
        try:
            return cls(**data)
        except TypeError as e:
            raise SiteConfigError(f"Invalid site entry: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


DEFAULT_SITES: Tuple[SiteSpec, ...] = (
    SiteSpec(
        name="punch",
        container_selector=".list-item article",
        heading_selector=".entry-title a",
        link_selector=".entry-title a",
        published_selector=".entry-meta .meta-time span",
        base_url="https://www.punchng.com",
        dedup_required=True,
    ),
    SiteSpec(
        name="guardian",
        container_selector=".row-3 .cell",
        heading_selector="a .headline span",
        link_selector="a",
        published_selector="a .meta span",
        base_url="https://www.guardian.ng",
        dedup_required=True,
    ),
    SiteSpec(
        name="sun",
        container_selector="article .jeg_postblock_content",
        heading_selector="h3 a",
        link_selector="h3 a",
        published_selector=".jeg_post_meta .jeg_meta_date a",
        base_url="https://www.sunnewsonline.com/",
        dedup_required=True,
    ),
    SiteSpec(
        name="premium_times",
        container_selector="article .jeg_postblock_content",
        heading_selector="h3 a",
        link_selector="h3 a",
        published_selector=".jeg_post_meta .jeg_meta_date a",
        base_url="https://www.premiumtimesng.com/",
        dedup_required=True,
    ),
    SiteSpec(
        name="aljazeera",
        container_selector="article .gc__content",
        heading_selector=".gc__header-wrap .gc__title a span",
        link_selector=".gc__header-wrap .gc__title a",
        published_selector=".gc__footer .gc__meta .gc__date .gc__date__date .date-simple",
        base_url="https://www.aljazeera.com/where/nigeria/",
    ),
    SiteSpec(
        name="sahara",
        container_selector=".block-module-content",
        heading_selector=".block-module-content-header span a",
        link_selector=".block-module-content-header span a",
        published_selector=".block-module-content-footer .block-module-content-footer-item-date",
        base_url="https://www.saharareporters.com/",
        dedup_required=True,
    ),
    SiteSpec(
        name="daily_trust",
        container_selector=".list_body__19fyx",
        heading_selector="a",
        link_selector="a",
        published_selector=".list_category__1sVu4 span.list_time__1UhFn",
        base_url="https://dailytrust.com",
        skip_leading=9,
        link_base="https://www.dailytrust.com",
    ),
    SiteSpec(
        name="daily_post",
        container_selector=".mvp-blog-story-wrap",
        heading_selector="a .mvp-blog-story-in .mvp-blog-story-text h2",
        link_selector="a",
        published_selector="a .mvp-blog-story-in .mvp-blog-story-text .mvp-cat-date-wrap .mvp-cd-date",
        base_url="https://dailypost.ng/headlines/",
    ),
    SiteSpec(
        name="sky_sports",
        container_selector=".sdc-site-tile__body-main",
        heading_selector=".sdc-site-tile__headline a span",
        link_selector=".sdc-site-tile__headline a",
        published_selector=".sdc-site-tile__info .sdc-site-tile__tag a",
        base_url="https://www.skysports.com/",
        link_base="https://www.skysports.com/",
    ),
    SiteSpec(
        name="complete_sports",
        container_selector=".td",
        heading_selector=".item-title a span",
        link_selector=".item-title a",
        published_selector=".meta-item-date a span",
        base_url="https://www.completesports.com/",
    ),
    SiteSpec(
        name="complete_sports_more",
        container_selector=".item-sub",
        heading_selector=".item-title a",
        link_selector=".item-title a",
        published_selector=".meta-items .meta-item-date span",
        base_url="https://www.completesports.com/",
        dedup_required=True,
    ),
)


def validate_site_specs(specs: Iterable[SiteSpec]) -> Tuple[SiteSpec, ...]:
    """Check a site table for duplicate names and return it as a tuple."""
    specs = tuple(specs)
    seen = set()
    for spec in specs:
        if spec.name in seen:
            raise SiteConfigError(f"Duplicate site name: {spec.name}")
        seen.add(spec.name)
    return specs


def load_site_specs(path: Union[str, Path]) -> Tuple[SiteSpec, ...]:
    """
    Load a site table from a JSON file.

    The file must hold a JSON array of objects whose keys match SiteSpec
    fields.

    Args:
        path: Path to the JSON file

    Returns:
        Tuple of SiteSpec in file order

    Raises:
        SiteConfigError: If the file is missing, malformed or inconsistent
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise SiteConfigError(f"Cannot read site table {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SiteConfigError(f"Site table {path} is not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise SiteConfigError(f"Site table {path} must be a JSON array")

    specs = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise SiteConfigError(f"Site table {path} entries must be objects")
        specs.append(SiteSpec.from_dict(entry))

    return validate_site_specs(specs)


@lru_cache
def get_site_specs() -> Tuple[SiteSpec, ...]:
    """Get the process-wide, read-only site table."""
    settings = get_settings()
    if settings.SITES_FILE:
        specs = load_site_specs(settings.SITES_FILE)
        logger.info("Loaded %d sites from %s", len(specs), settings.SITES_FILE)
        return specs
    return validate_site_specs(DEFAULT_SITES)
