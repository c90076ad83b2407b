"""Bounded crawler: BFS over discovered links from a seed URL."""

import logging
from collections import deque
from typing import Deque, List, Set, Tuple

from app.services.normalizer import is_same_domain, normalize
from app.services.scraper import PageData, Profile, fetch_and_extract

logger = logging.getLogger(__name__)

# Hard ceilings; callers clamp first, these protect direct callers of crawl()
MAX_PAGES_HARD_LIMIT = 20
MAX_DEPTH_HARD_LIMIT = 3


async def crawl(
    start_url: str,
    max_pages: int = 5,
    max_depth: int = 1,
    same_domain: bool = True,
) -> List[PageData]:
    """Crawl breadth-first from *start_url*.

    Every dequeued URL that canonicalises and has not been visited yet yields
    exactly one :class:`PageData`, including failed and non-HTML pages, so the
    result is capped at *max_pages* entries.  Links of a page at depth ``d``
    are queued only when ``d + 1 <= max_depth``; with *same_domain* only links
    on the seed's exact hostname are followed.

    Returns:
        The pages in visiting order (by depth, then discovery order).
    """
    max_pages = max(1, min(max_pages, MAX_PAGES_HARD_LIMIT))
    max_depth = max(0, min(max_depth, MAX_DEPTH_HARD_LIMIT))

    visited: Set[str] = set()
    # Queue entries: (url, depth)
    queue: Deque[Tuple[str, int]] = deque([(start_url, 0)])
    results: List[PageData] = []

    while queue and len(results) < max_pages:
        url, depth = queue.popleft()
        normalised = normalize(url)

        if not normalised or normalised in visited:
            continue
        visited.add(normalised)

        page = await fetch_and_extract(normalised, Profile.CRAWL)
        results.append(page)

        if not page.ok:
            continue

        next_depth = depth + 1
        if next_depth > max_depth:
            continue
        for link in page.links:
            if same_domain and not is_same_domain(link, start_url):
                continue
            if link not in visited:
                queue.append((link, next_depth))

    logger.info(
        "Crawl of %s finished: %d page(s), %d left in frontier",
        start_url,
        len(results),
        len(queue),
    )
    return results
