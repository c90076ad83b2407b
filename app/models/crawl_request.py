import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.services.crawler import MAX_DEPTH_HARD_LIMIT, MAX_PAGES_HARD_LIMIT
from app.services.normalizer import is_http_url

DEFAULT_MAX_PAGES = 5
DEFAULT_MAX_DEPTH = 1

_FALSE_STRINGS = {"", "0", "false", "no", "off"}


def _clamp(value: Any, default: int, low: int, high: int) -> int:
    """Coerce *value* to an int in ``[low, high]``; unusable input becomes *default*."""
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return min(max(value, low), high)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if math.isnan(number):
        return default
    return int(min(max(number, low), high))


class CrawlRequest(BaseModel):
    """Crawl options.  Out-of-range numbers are clamped rather than rejected."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str
    max_pages: int = Field(
        default=DEFAULT_MAX_PAGES,
        description=f"Maximum number of pages to visit (clamped to 1–{MAX_PAGES_HARD_LIMIT}).",
    )
    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        description=f"Maximum link depth from the seed URL (clamped to 0–{MAX_DEPTH_HARD_LIMIT}).",
    )
    same_domain: bool = Field(
        default=True,
        description="Only follow links whose hostname equals the seed's hostname.",
    )

    @field_validator("url")
    @classmethod
    def _require_http_url(cls, value: str) -> str:
        if not is_http_url(value):
            raise ValueError("Invalid or missing URL: an absolute http(s) URL is required.")
        return value

    @field_validator("max_pages", mode="before")
    @classmethod
    def _clamp_max_pages(cls, value: Any) -> int:
        return _clamp(value, DEFAULT_MAX_PAGES, 1, MAX_PAGES_HARD_LIMIT)

    @field_validator("max_depth", mode="before")
    @classmethod
    def _clamp_max_depth(cls, value: Any) -> int:
        return _clamp(value, DEFAULT_MAX_DEPTH, 0, MAX_DEPTH_HARD_LIMIT)

    @field_validator("same_domain", mode="before")
    @classmethod
    def _coerce_same_domain(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() not in _FALSE_STRINGS
        return bool(value)
