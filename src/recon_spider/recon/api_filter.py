"""Decides which JavaScript string fragments look like backend API paths."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence
from urllib.parse import unquote

from ..core.models import ApiCandidate, ApiKind
from .detector import CJK_RANGES
from .urls import STATIC_EXTENSIONS, is_base64_like, normalize_for_api

logger = logging.getLogger(__name__)

MIN_FRAGMENT_LENGTH = 2
MAX_FRAGMENT_LENGTH = 500

# Artifacts of minified markup and script that resemble paths.
SYNTAX_MARKERS = (
    "<?",
    "?>",
    "</",
    "/g,c=r(",
    "schemeClr",
    "'>",
    "<a:",
    "</a:",
    "length",
    "\\",
)
ASSET_MARKERS = ("image", "img", "css", "font", "svg", "swf", "ttf")
BARE_API_PATHS = frozenset({"api", "api/", "/api", "/api/"})

_CJK = re.compile(f"[{CJK_RANGES}]")
_RESTFUL_SHAPE = re.compile(r"/[\w/-]*")

# Quoted or slash-led paths, plus bare ``api`` references, in script bodies.
_PATH_CHAR = r'[^"\s;}{><' + CJK_RANGES + "]"
FRAGMENT_PATTERN = re.compile(
    rf"""(?:["']|/)(/{_PATH_CHAR}+|api/?(?:{_PATH_CHAR}+)?)(?:["']|/)?(?:{_PATH_CHAR}*)"""
)


def extract_fragments(script: str) -> List[str]:
    """Returns every path-like fragment found in a JavaScript body."""

    return [match.group(1) for match in FRAGMENT_PATTERN.finditer(script)]


def classify_api_path(path: str) -> Optional[ApiKind]:
    """Classifies a decoded path (without query) as explicit or RESTful."""

    if path in BARE_API_PATHS or path.startswith("api/") or "/api/" in path:
        return ApiKind.EXPLICIT

    if (
        path.startswith("/")
        and len(path.split("/")) >= 2
        and "." not in path
        and _RESTFUL_SHAPE.fullmatch(path)
    ):
        return ApiKind.RESTFUL

    return None


def evaluate_api_path(
    fragment: str,
    base_urls: Sequence[str],
    api_core: str,
    noise_strings: Sequence[str],
) -> Optional[ApiCandidate]:
    """Runs ``fragment`` through every filtering stage.

    Returns ``None`` when a stage rejects the fragment, otherwise an
    :class:`ApiCandidate` carrying one resolved URL per base URL that accepted
    it (possibly none).
    """

    trimmed = fragment.strip()

    if is_base64_like(trimmed):
        logger.debug("Base64-like fragment dropped: %s", trimmed)
        return None

    if not MIN_FRAGMENT_LENGTH <= len(trimmed) <= MAX_FRAGMENT_LENGTH:
        logger.debug("Fragment length out of range: %s", trimmed)
        return None

    if _CJK.search(trimmed):
        logger.debug("Fragment contains CJK characters: %s", trimmed)
        return None

    if (
        any(noise in trimmed for noise in noise_strings)
        or any(marker in trimmed for marker in SYNTAX_MARKERS)
        or trimmed.startswith("/#")
    ):
        logger.debug("Noise fragment dropped: %s", trimmed)
        return None

    cleaned = unquote(trimmed)
    path_part, _, query = cleaned.partition("?")

    if any(marker in path_part for marker in ASSET_MARKERS) or path_part.endswith(
        STATIC_EXTENSIONS
    ):
        logger.debug("Static resource path dropped: %s", cleaned)
        return None

    if query and any(ext in path_part for ext in STATIC_EXTENSIONS):
        logger.debug("Static resource with query dropped: %s", cleaned)
        return None

    kind = classify_api_path(path_part)
    if kind is None:
        logger.debug("Not an API path: %s", cleaned)
        return None

    urls = []
    for base_url in base_urls:
        full_url = normalize_for_api(cleaned, base_url, api_core)
        if full_url:
            urls.append(full_url)

    return ApiCandidate(fragment=trimmed, kind=kind, urls=tuple(urls))


def filter_api_path(
    fragment: str,
    base_urls: Sequence[str],
    api_core: str,
    noise_strings: Sequence[str],
) -> List[str]:
    """Returns the absolute candidate URLs derived from ``fragment``."""

    candidate = evaluate_api_path(fragment, base_urls, api_core, noise_strings)
    if candidate is None:
        return []
    return list(candidate.urls)
