"""Single-page fetch and extraction, returning a tagged result instead of raising."""

import asyncio
import enum
import logging
from typing import NamedTuple, Optional, Sequence

import httpx

from app.config import settings
from app.services import extractor
from app.services.fetcher import fetch_page

logger = logging.getLogger(__name__)

SKIPPED_NON_HTML = "Skipped non-HTML response"


class Profile(enum.Enum):
    """How much to extract: just enough to follow links, or the full page summary."""

    CRAWL = "crawl"
    SCRAPE = "scrape"


class Outcome(str, enum.Enum):
    OK = "ok"
    SKIPPED = "skipped"
    FAILED = "failed"


class PageData(NamedTuple):
    url: str
    outcome: Outcome
    status: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image: Optional[str] = None
    text_preview: Optional[str] = None
    headings: Sequence[str] = ()
    links: Sequence[str] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK


def _describe_error(exc: Exception) -> str:
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError)):
        return f"Request timed out after {settings.request_timeout:g}s"
    message = str(exc).strip()
    return message or type(exc).__name__


def _extract(url: str, status: int, html: str, profile: Profile) -> PageData:
    soup = extractor.parse_html(html)
    if profile is Profile.CRAWL:
        return PageData(
            url=url,
            outcome=Outcome.OK,
            status=status,
            title=extractor.extract_title(soup),
            description=extractor.extract_meta(soup, "description"),
            links=extractor.extract_links(soup, url),
        )
    return PageData(
        url=url,
        outcome=Outcome.OK,
        status=status,
        title=extractor.extract_title(soup),
        description=extractor.extract_meta(soup, "description", allow_property=True),
        og_title=extractor.extract_meta(soup, "og:title", allow_property=True),
        og_description=extractor.extract_meta(soup, "og:description", allow_property=True),
        og_image=extractor.extract_meta(soup, "og:image", allow_property=True),
        text_preview=extractor.extract_text_preview(soup),
        headings=extractor.extract_headings(soup),
        links=extractor.extract_links(soup, url),
    )


async def fetch_and_extract(url: str, profile: Profile = Profile.CRAWL) -> PageData:
    """Fetch the canonical *url* once and extract metadata for *profile*.

    The whole fetch, redirects and body included, must finish within
    ``settings.request_timeout`` seconds.

    Never raises: transport failures produce a ``FAILED`` result with a
    readable ``error`` and no status; non-HTML responses produce a
    ``SKIPPED`` result that keeps the status code.  Links are resolved
    against *url* itself, not the post-redirect location.
    """
    try:
        fetched = await asyncio.wait_for(fetch_page(url), timeout=settings.request_timeout)
    except (
        httpx.HTTPError,
        httpx.InvalidURL,
        asyncio.TimeoutError,
        RuntimeError,
        ValueError,
    ) as exc:
        logger.warning("Fetch failed for %s – %s", url, _describe_error(exc))
        return PageData(url=url, outcome=Outcome.FAILED, error=_describe_error(exc))
    except Exception:
        logger.exception("Unexpected error fetching %s", url)
        return PageData(url=url, outcome=Outcome.FAILED, error="Request failed")

    if not fetched.is_html:
        logger.debug("Skipping %s – content-type %r", url, fetched.content_type)
        return PageData(
            url=url,
            outcome=Outcome.SKIPPED,
            status=fetched.status_code,
            error=SKIPPED_NON_HTML,
        )

    try:
        return _extract(url, fetched.status_code, fetched.html, profile)
    except Exception:
        logger.exception("Unexpected error extracting %s", url)
        return PageData(
            url=url, outcome=Outcome.FAILED, status=fetched.status_code, error="Failed to parse page"
        )
