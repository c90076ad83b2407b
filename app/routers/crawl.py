import logging

from fastapi import APIRouter, HTTPException, Request

from app.config import settings
from app.models.crawl_request import CrawlRequest
from app.models.crawl_response import CrawlResponse, PageResult
from app.routers.scrape import limiter
from app.services.crawler import crawl

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post(
    "/crawl",
    response_model=CrawlResponse,
    response_model_exclude_none=True,
    summary="Crawl a site breadth-first",
    description=(
        "Starting from *url*, follows links breadth-first and visits up to "
        "`maxPages` pages (1–20) no deeper than `maxDepth` (0–3).  With "
        "`sameDomain` only links on the seed's hostname are followed.  Pages "
        "that fail are listed with `error` set; the call itself still succeeds."
    ),
)
@limiter.limit(settings.crawl_rate_limit)
async def crawl_endpoint(request: Request, body: CrawlRequest) -> CrawlResponse:
    """BFS-crawl from *url* within the requested bounds."""
    logger.info(
        "Crawl request received",
        extra={
            "url": body.url,
            "max_pages": body.max_pages,
            "max_depth": body.max_depth,
            "same_domain": body.same_domain,
        },
    )

    try:
        raw_results = await crawl(
            body.url,
            max_pages=body.max_pages,
            max_depth=body.max_depth,
            same_domain=body.same_domain,
        )
    except Exception:
        logger.exception("Crawl failed for %s", body.url)
        raise HTTPException(status_code=500, detail="Crawl failed")

    pages = [
        PageResult(
            url=page.url,
            status=page.status,
            title=page.title,
            description=page.description,
            links=list(page.links),
            error=page.error,
        )
        for page in raw_results
    ]

    return CrawlResponse(
        start_url=body.url,
        max_pages=body.max_pages,
        max_depth=body.max_depth,
        same_domain=body.same_domain,
        pages=pages,
    )
