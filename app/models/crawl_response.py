from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PageResult(BaseModel):
    """One visited page.  ``error`` is set for failed fetches and non-HTML responses."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str
    status: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    links: List[str] = []
    error: Optional[str] = None


class CrawlResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    start_url: str
    max_pages: int
    max_depth: int
    same_domain: bool
    pages: List[PageResult]
