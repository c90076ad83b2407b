"""URL canonicalisation: the single comparable form used for crawl dedup and scoping."""

from typing import Optional
from urllib.parse import SplitResult, urljoin, urlsplit

_HTTP_SCHEMES = {"http", "https"}
_DEFAULT_PORTS = {"http": 80, "https": 443}


def _parse(raw: str, base: Optional[str] = None) -> Optional[SplitResult]:
    """Split *raw* (resolved against *base* when given) or return None if it is not a URL."""
    if not isinstance(raw, str):
        return None
    try:
        absolute = urljoin(base, raw.strip()) if base else raw.strip()
        parts = urlsplit(absolute)
        scheme = parts.scheme.lower()
        if not scheme:
            return None
        if scheme in _HTTP_SCHEMES:
            if not parts.hostname:
                return None
            parts.port  # raises ValueError on a malformed port
    except ValueError:
        return None
    return parts


def _canonical_netloc(parts: SplitResult) -> str:
    """Lower-case the host and drop the scheme's default port; keep userinfo as-is."""
    userinfo, _, hostport = parts.netloc.rpartition("@")
    hostport = hostport.lower()
    scheme = parts.scheme.lower()
    port = parts.port
    if port is not None and port == _DEFAULT_PORTS.get(scheme):
        hostport = hostport.rsplit(":", 1)[0]
    return f"{userinfo}@{hostport}" if userinfo else hostport


def normalize(raw: str, base: Optional[str] = None) -> Optional[str]:
    """Return the canonical form of *raw*, or None when it cannot be parsed.

    The fragment is dropped, scheme and host are lower-cased, a default port is
    removed and trailing slashes are stripped, so ``https://a.com/x/`` and
    ``https://a.com/x#top`` both become ``https://a.com/x``.
    """
    parts = _parse(raw, base)
    if parts is None:
        return None

    scheme = parts.scheme.lower()
    path = parts.path
    if scheme in _HTTP_SCHEMES:
        netloc = _canonical_netloc(parts)
        path = path or "/"
    else:
        netloc = parts.netloc

    canonical = parts._replace(scheme=scheme, netloc=netloc, path=path, fragment="").geturl()
    return canonical.rstrip("/")


def is_http_url(raw: str) -> bool:
    """Return True when *raw* is an absolute http(s) URL with a host."""
    parts = _parse(raw)
    return parts is not None and parts.scheme.lower() in _HTTP_SCHEMES


def hostname(url: str) -> Optional[str]:
    """Return the lower-cased hostname of *url*, or None if it has none."""
    parts = _parse(url)
    return parts.hostname if parts is not None else None


def is_same_domain(url: str, origin: str) -> bool:
    """Return True when *url* and *origin* share the exact same hostname.

    Scheme and port are ignored; subdomains do not match their parent.
    """
    host = hostname(url)
    return host is not None and host == hostname(origin)
