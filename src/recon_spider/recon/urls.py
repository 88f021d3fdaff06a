"""URL resolution and classification helpers shared by the crawler stages."""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import unquote, urljoin, urlparse

logger = logging.getLogger(__name__)

HTML_EXTENSIONS: tuple[str, ...] = (
    ".htm",
    ".html",
    ".jhtml",
    ".xhtml",
    ".shtml",
    ".php",
    ".asp",
    ".jsp",
    ".do",
    ".action",
    ".aspx",
    ".cfm",
    ".pl",
    ".cgi",
)

STATIC_EXTENSIONS: tuple[str, ...] = (
    ".js",
    ".json",
    ".map",
    ".mjs",
    ".cjs",
    ".jsx",
    ".vue",
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".bmp",
    ".svg",
    ".webp",
    ".ico",
    ".tif",
    ".tiff",
    ".heic",
    ".apng",
    ".avif",
    ".psd",
    ".raw",
    ".css",
    ".woff",
    ".woff2",
    ".ttf",
    ".eot",
    ".otf",
    ".zip",
    ".tar.gz",
    ".bak",
    ".config",
    ".swf",
)

HTML = "html"
STATIC = "static"

# Characters that pile up in base64 blobs and minified string tables.
_DENSITY_CHARS = frozenset("+/=")
_ABSOLUTE_REFERENCE = re.compile(r"^(?:https?|wss?):", re.IGNORECASE)
_ASSET_MARKERS = ("img", "css", "font", "svg", "swf")


def extract_domain(url: str) -> Optional[str]:
    """Returns the authority of an ``http(s)`` URL, or ``None``.

    The authority is everything between the scheme and the first ``/``. URLs
    carrying user-info (``user@host``) and non-HTTP schemes such as ``data:``,
    ``javascript:`` or ``mailto:`` are ignored.
    """

    value = url.strip()
    for scheme in ("http://", "https://"):
        if value.startswith(scheme):
            authority = value[len(scheme):].split("/", 1)[0]
            if "@" in authority:
                return None
            return authority
    return None


def is_base64_like(value: str) -> bool:
    """Heuristic used to discard inline data and encoded blobs."""

    if "data:" in value or "base64" in value:
        return True
    if _count_density_chars(value) > 5:
        return True
    return len(value) > 100


def normalize_for_crawl(reference: str, base_url: str) -> Optional[str]:
    """Resolves ``reference`` against ``base_url`` for crawling.

    Already absolute ``http``/``ws`` references are returned unchanged. When the
    base is not an absolute URL or the join cannot be computed ``None`` is
    returned so the caller can skip this single reference.
    """

    reference = reference.strip()
    if _ABSOLUTE_REFERENCE.match(reference):
        return reference

    try:
        parsed_base = urlparse(base_url)
        if not parsed_base.scheme or not parsed_base.netloc:
            return None
        joined = urljoin(base_url, reference)
    except ValueError:
        logger.debug("Cannot resolve %r against %s", reference, base_url)
        return None

    logger.debug("Resolved crawl reference %s", joined)
    return joined


def normalize_for_api(path: str, base_url: str, api_core: str) -> str:
    """Builds an absolute API URL from a JavaScript path fragment.

    Returns an empty string whenever the fragment is rejected: base64-looking
    input, static asset paths, or a result that is not a valid absolute URL.
    A bare ``api`` fragment resolves to ``base_url`` plus ``api_core``.
    """

    if is_base64_like(path):
        logger.debug("Skipping base64-like path %s", path)
        return ""

    cleaned = unquote(path)
    path_part, _, query = cleaned.partition("?")

    if (
        "image" in path_part
        or any(marker in cleaned for marker in _ASSET_MARKERS)
        or cleaned.endswith(STATIC_EXTENSIONS)
        or (query and any(ext in path_part for ext in STATIC_EXTENSIONS))
        or _count_density_chars(cleaned) > 10
    ):
        logger.debug("Not an API path: %s", cleaned)
        return ""

    if _ABSOLUTE_REFERENCE.match(path):
        full_url = cleaned
    else:
        base = base_url if base_url.endswith("/") else f"{base_url}/"
        relative = cleaned.lstrip("/")
        if relative in ("api", "api/"):
            full_url = f"{base}{api_core.strip('/')}"
        else:
            full_url = f"{base}{relative}"

    if not _is_valid_absolute(full_url):
        logger.debug("Invalid API URL %s", full_url)
        return ""

    return full_url


def classify_url(url: str) -> Optional[str]:
    """Returns :data:`HTML`, :data:`STATIC` or ``None`` for ``url``."""

    if url.endswith(HTML_EXTENSIONS):
        return HTML
    if url.endswith(STATIC_EXTENSIONS):
        return STATIC
    return None


def _count_density_chars(value: str) -> int:
    return sum(1 for char in value if char in _DENSITY_CHARS)


def _is_valid_absolute(url: str) -> bool:
    try:
        parsed = urlparse(url)
        parsed.port  # raises ValueError on a malformed port
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.netloc)
