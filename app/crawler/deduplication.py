"""
Order-preserving duplicate filter for headline listings.
"""
import logging
from typing import Iterable, List, Set, Tuple

from app.crawler.parser import HeadlineRecord

logger = logging.getLogger(__name__)


def deduplicate(records: Iterable[HeadlineRecord]) -> Tuple[List[HeadlineRecord], int]:
    """
    Drop records whose heading was already seen.

    The key is the exact heading text: no trimming, case folding or unicode
    normalization. The first occurrence keeps its position and survivors are
    never reordered, so applying the filter twice removes nothing more.

    Args:
        records: HeadlineRecords in document order

    Returns:
        Tuple of (unique records, number of records removed)
    """
    seen: Set[str] = set()
    unique: List[HeadlineRecord] = []
    removed = 0

    for record in records:
        if record.heading in seen:
            removed += 1
            continue
        seen.add(record.heading)
        unique.append(record)

    logger.debug("Recurring: %d", removed)
    return unique, removed
