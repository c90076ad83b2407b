"""Runtime settings for the crawler service.

Every value can be overridden through an environment variable or a ``.env``
file in the project root (loaded when this module is imported).
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Outbound HTTP
    # ------------------------------------------------------------------
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "CRAWLER_USER_AGENT", "TomfooleryCrawler/1.0 (+https://example.com)"
        )
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "10.0"))
    )
    max_redirects: int = field(
        default_factory=lambda: int(os.environ.get("MAX_REDIRECTS", "5"))
    )
    max_content_size: int = field(
        default_factory=lambda: int(os.environ.get("MAX_CONTENT_SIZE", str(10 * 1024 * 1024)))
    )

    # ------------------------------------------------------------------
    # API surface
    # ------------------------------------------------------------------
    frontend_origin: str = field(
        default_factory=lambda: os.environ.get("FRONTEND_ORIGIN", "http://localhost:5173")
    )
    scrape_rate_limit: str = field(
        default_factory=lambda: os.environ.get("SCRAPE_RATE_LIMIT", "10/minute")
    )
    crawl_rate_limit: str = field(
        default_factory=lambda: os.environ.get("CRAWL_RATE_LIMIT", "5/minute")
    )
    log_level: str = field(default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO"))

    @property
    def frontend_origins(self) -> List[str]:
        """Allowed CORS origins, parsed from the comma separated ``FRONTEND_ORIGIN``."""
        return [origin.strip() for origin in self.frontend_origin.split(",") if origin.strip()]


# Module-level singleton:
#   from app.config import settings
settings = Settings()
