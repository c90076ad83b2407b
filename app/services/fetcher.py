from typing import NamedTuple
from urllib.parse import urljoin

import httpx

from app.config import settings

ACCEPT_HEADER = "text/html,application/xhtml+xml"


class FetchedPage(NamedTuple):
    url: str
    status_code: int
    content_type: str
    html: str

    @property
    def is_html(self) -> bool:
        return "text/html" in self.content_type


def _headers() -> dict:
    return {"User-Agent": settings.user_agent, "Accept": ACCEPT_HEADER}


async def fetch_page(url: str) -> FetchedPage:
    """Issue one GET for *url* and return the final response.

    Redirects are followed manually, resolving each ``Location`` against the
    current URL, for at most ``settings.max_redirects`` hops.  The status code
    is returned whatever its value; only the transport can fail.  Bodies are
    read only for ``text/html`` responses.

    Raises:
        httpx.HTTPError: on timeouts, connection, TLS or protocol errors.
        RuntimeError: if the redirect cap is exceeded or the body exceeds
            ``settings.max_content_size``.
    """
    max_size = settings.max_content_size
    current_url = url
    async with httpx.AsyncClient(
        follow_redirects=False, timeout=settings.request_timeout, headers=_headers()
    ) as client:
        for _ in range(settings.max_redirects + 1):
            async with client.stream("GET", current_url) as response:
                if response.is_redirect:
                    location = response.headers.get("location", "")
                    current_url = urljoin(current_url, location)
                    continue

                content_type = response.headers.get("content-type", "")
                page = FetchedPage(
                    url=current_url,
                    status_code=response.status_code,
                    content_type=content_type,
                    html="",
                )
                if not page.is_html:
                    return page

                content_length = response.headers.get("content-length")
                if content_length and content_length.isdigit() and int(content_length) > max_size:
                    raise RuntimeError("Response body exceeds the maximum allowed size.")

                chunks = []
                total = 0
                async for chunk in response.aiter_bytes():
                    total += len(chunk)
                    if total > max_size:
                        raise RuntimeError("Response body exceeds the maximum allowed size.")
                    chunks.append(chunk)

                html = b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")
                return page._replace(html=html)

    raise RuntimeError(f"Maximum number of redirects ({settings.max_redirects}) exceeded.")
