import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import settings
from app.models.request import ScrapeRequest
from app.models.response import ScrapeResponse
from app.services.normalizer import normalize
from app.services.scraper import Outcome, Profile, fetch_and_extract

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter(prefix="/api")


@router.post(
    "/scrape",
    response_model=ScrapeResponse,
    response_model_exclude_none=True,
    summary="Summarise a single web page",
    description=(
        "Fetches *url* once and returns its title, description, Open Graph tags, "
        "up to 20 h1–h3 headings, a short text preview and up to 50 canonical links.  "
        "A non-HTML response is returned with `error` set and no extracted fields; "
        "a failed fetch is returned with HTTP 500 and `error` set."
    ),
)
@limiter.limit(settings.scrape_rate_limit)
async def scrape(request: Request, body: ScrapeRequest) -> ScrapeResponse | JSONResponse:
    """Fetch and summarise one page."""
    logger.info("Scrape request received", extra={"url": body.url})

    target = normalize(body.url)
    if target is None:
        raise HTTPException(status_code=400, detail="Invalid URL")

    page = await fetch_and_extract(target, Profile.SCRAPE)
    result = ScrapeResponse(
        url=page.url,
        status=page.status,
        title=page.title,
        description=page.description,
        og_title=page.og_title,
        og_description=page.og_description,
        og_image=page.og_image,
        text_preview=page.text_preview,
        headings=list(page.headings),
        links=list(page.links),
        error=page.error,
    )

    if page.outcome is Outcome.FAILED:
        logger.error("Scrape failed for %s: %s", target, page.error)
        return JSONResponse(
            status_code=500, content=result.model_dump(by_alias=True, exclude_none=True)
        )
    return result
