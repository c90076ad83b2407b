from typing import List, Optional

from app.models.crawl_response import PageResult


class ScrapeResponse(PageResult):
    """Single-page summary: the crawl fields plus Open Graph tags, headings and a preview."""

    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image: Optional[str] = None
    text_preview: Optional[str] = None
    """First paragraph longer than 40 characters, truncated to 280."""
    headings: List[str] = []
