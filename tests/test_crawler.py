"""Tests for app.services.crawler.crawl.

``fetch_and_extract`` is replaced by a fake site: a dict mapping canonical URLs
to the links found on that page.  URLs missing from the dict fail like an
unreachable host.
"""

import asyncio
from typing import Dict, List, Optional
from unittest.mock import AsyncMock, patch

from app.services.crawler import crawl
from app.services.scraper import SKIPPED_NON_HTML, Outcome, PageData


def _site(graph: Dict[str, List[str]], non_html: Optional[set] = None) -> AsyncMock:
    non_html = non_html or set()

    async def fake_fetch(url, profile):
        if url in non_html:
            return PageData(url=url, outcome=Outcome.SKIPPED, status=200, error=SKIPPED_NON_HTML)
        if url in graph:
            return PageData(url=url, outcome=Outcome.OK, status=200, links=graph[url])
        return PageData(url=url, outcome=Outcome.FAILED, error="Connection refused")

    return AsyncMock(side_effect=fake_fetch)


def _crawl(fetch: AsyncMock, start_url: str, **kwargs) -> List[PageData]:
    with patch("app.services.crawler.fetch_and_extract", new=fetch):
        return asyncio.run(crawl(start_url, **kwargs))


def _urls(pages: List[PageData]) -> List[str]:
    return [p.url for p in pages]


class TestCrawlScenario:
    def test_same_domain_skips_foreign_links(self):
        fetch = _site(
            {
                "https://example.com": ["https://example.com/a", "https://other.com/b"],
                "https://example.com/a": [],
            }
        )
        pages = _crawl(fetch, "https://example.com", max_pages=5, max_depth=1, same_domain=True)

        assert _urls(pages) == ["https://example.com", "https://example.com/a"]
        fetched = [call.args[0] for call in fetch.await_args_list]
        assert "https://other.com/b" not in fetched

    def test_cross_domain_links_followed_when_allowed(self):
        fetch = _site(
            {
                "https://example.com": ["https://example.com/a", "https://other.com/b"],
                "https://example.com/a": [],
                "https://other.com/b": [],
            }
        )
        pages = _crawl(fetch, "https://example.com", max_pages=5, max_depth=1, same_domain=False)

        assert _urls(pages) == [
            "https://example.com",
            "https://example.com/a",
            "https://other.com/b",
        ]

    def test_subdomain_is_out_of_scope(self):
        fetch = _site({"https://a.com": ["https://sub.a.com/x", "https://a.com:8443/y"]})
        pages = _crawl(fetch, "https://a.com", max_pages=5, max_depth=1, same_domain=True)

        assert _urls(pages) == ["https://a.com", "https://a.com:8443/y"]


class TestCrawlBounds:
    def test_page_cap_is_exact_under_wide_branching(self):
        links = [f"https://a.com/p{i}" for i in range(30)]
        graph = {"https://a.com": links, **{link: [] for link in links}}
        pages = _crawl(_site(graph), "https://a.com", max_pages=5, max_depth=1)

        assert len(pages) == 5
        assert _urls(pages)[1:] == links[:4]

    def test_depth_bound(self):
        graph = {
            "https://a.com": ["https://a.com/1"],
            "https://a.com/1": ["https://a.com/2"],
            "https://a.com/2": ["https://a.com/3"],
        }
        pages = _crawl(_site(graph), "https://a.com", max_pages=20, max_depth=1)

        assert _urls(pages) == ["https://a.com", "https://a.com/1"]

    def test_depth_zero_fetches_only_the_seed(self):
        graph = {"https://a.com": ["https://a.com/1"], "https://a.com/1": []}
        pages = _crawl(_site(graph), "https://a.com", max_pages=20, max_depth=0)

        assert _urls(pages) == ["https://a.com"]

    def test_hard_limits_apply_to_direct_callers(self):
        links = [f"https://a.com/p{i}" for i in range(49)]
        graph = {"https://a.com": links, **{link: [] for link in links}}
        pages = _crawl(_site(graph), "https://a.com", max_pages=500, max_depth=1)

        assert len(pages) == 20


class TestCrawlOrderAndDedup:
    def test_breadth_first_order(self):
        graph = {
            "https://a.com": ["https://a.com/x", "https://a.com/y"],
            "https://a.com/x": ["https://a.com/x1"],
            "https://a.com/y": ["https://a.com/y1"],
            "https://a.com/x1": [],
            "https://a.com/y1": [],
        }
        pages = _crawl(_site(graph), "https://a.com", max_pages=20, max_depth=2)

        assert _urls(pages) == [
            "https://a.com",
            "https://a.com/x",
            "https://a.com/y",
            "https://a.com/x1",
            "https://a.com/y1",
        ]

    def test_no_url_is_fetched_twice(self):
        graph = {
            "https://a.com": ["https://a.com/x", "https://a.com/y", "https://a.com"],
            "https://a.com/x": ["https://a.com/y", "https://a.com"],
            "https://a.com/y": ["https://a.com/x"],
        }
        fetch = _site(graph)
        pages = _crawl(fetch, "https://a.com/#top", max_pages=20, max_depth=3)

        urls = _urls(pages)
        assert urls == ["https://a.com", "https://a.com/x", "https://a.com/y"]
        assert len(set(urls)) == len(urls)
        assert fetch.await_count == len(pages)

    def test_duplicates_in_frontier_do_not_count_against_cap(self):
        # Both children link to /shared; the second copy is discarded for free.
        graph = {
            "https://a.com": ["https://a.com/x", "https://a.com/y"],
            "https://a.com/x": ["https://a.com/shared"],
            "https://a.com/y": ["https://a.com/shared", "https://a.com/z"],
            "https://a.com/shared": [],
            "https://a.com/z": [],
        }
        pages = _crawl(_site(graph), "https://a.com", max_pages=5, max_depth=2)

        assert _urls(pages) == [
            "https://a.com",
            "https://a.com/x",
            "https://a.com/y",
            "https://a.com/shared",
            "https://a.com/z",
        ]

    def test_invalid_seed_yields_no_pages(self):
        fetch = _site({})
        assert _crawl(fetch, "not a url") == []
        fetch.assert_not_awaited()


class TestCrawlFailures:
    def test_failed_pages_are_recorded_and_not_expanded(self):
        graph = {"https://a.com": ["https://a.com/down", "https://a.com/ok"], "https://a.com/ok": []}
        pages = _crawl(_site(graph), "https://a.com", max_pages=5, max_depth=2)

        assert _urls(pages) == ["https://a.com", "https://a.com/down", "https://a.com/ok"]
        failed = pages[1]
        assert failed.outcome is Outcome.FAILED
        assert failed.error == "Connection refused"
        assert failed.status is None

    def test_non_html_pages_are_recorded_but_not_expanded(self):
        graph = {
            "https://a.com": ["https://a.com/feed.json"],
            "https://a.com/feed.json": ["https://a.com/never"],
        }
        pages = _crawl(
            _site(graph, non_html={"https://a.com/feed.json"}),
            "https://a.com",
            max_pages=5,
            max_depth=3,
        )

        assert _urls(pages) == ["https://a.com", "https://a.com/feed.json"]
        assert pages[1].error == SKIPPED_NON_HTML
        assert pages[1].status == 200

    def test_failing_seed_still_produces_one_page(self):
        pages = _crawl(_site({}), "https://unreachable.example", max_pages=5, max_depth=1)

        assert len(pages) == 1
        assert pages[0].outcome is Outcome.FAILED
