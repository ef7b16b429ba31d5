"""
Headline listing parser driven by a SiteSpec's CSS selectors.
"""
from dataclasses import dataclass
from typing import List
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from app.crawler.sites import SiteSpec


@dataclass
class HeadlineRecord:
    """One headline extracted from a listing page."""
    heading: str = ""
    link: str = ""
    published_at: str = ""


class HeadlineParser:
    """
    Extracts HeadlineRecords from a listing page.

    One record is emitted per element matching the container selector, in
    document order. Heading, link and published selectors are resolved inside
    each container; a selector that matches nothing yields an empty string.
    """

    def __init__(self, spec: SiteSpec):
        self.spec = spec

    def parse(self, html: str) -> List[HeadlineRecord]:
        """
        Parse a listing page.

        Args:
            html: The HTML content

        Returns:
            HeadlineRecords in document order
        """
        soup = BeautifulSoup(html, "html.parser")

        records = []
        for container in soup.select(self.spec.container_selector):
            records.append(HeadlineRecord(
                heading=self._child_text(container, self.spec.heading_selector),
                link=self._child_link(container, self.spec.link_selector),
                published_at=self._child_text(container, self.spec.published_selector),
            ))
        return records

    @staticmethod
    def _child_text(container: Tag, selector: str) -> str:
        """Concatenated text of every match inside the container, trimmed."""
        return "".join(
            element.get_text() for element in container.select(selector)
        ).strip()

    def _child_link(self, container: Tag, selector: str) -> str:
        """href of the first match inside the container, trimmed."""
        element = container.select_one(selector)
        if element is None:
            return ""

        href = element.get("href")
        if not isinstance(href, str):
            return ""
        href = href.strip()
        if not href:
            return ""
        if self.spec.link_base:
            return urljoin(self.spec.link_base, href)
        return href
