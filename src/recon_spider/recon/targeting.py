from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from .urls import extract_domain

NOISE_JS_PREFIXES = ("vendor", "chunk-vendors", "main", "polyfills")


def is_blacklisted(url: str, blacklist: Sequence[str]) -> bool:
    """True when the domain of ``url`` contains any blacklist entry."""

    domain = extract_domain(url)
    if domain is None:
        return False
    return any(entry in domain for entry in blacklist)


def is_noise_js_file(url: str) -> bool:
    """True for generic bundler chunks such as ``vendor.js`` or ``main.abc.js``."""

    file_name = url.rsplit("/", 1)[-1]
    return file_name.startswith(NOISE_JS_PREFIXES)


@dataclass(slots=True)
class OriginPolicy:
    """Encapsulates first-party detection and blacklist rules for a run."""

    seed_url: str
    blacklist: tuple[str, ...] = field(default_factory=tuple)
    seed_domain: str = field(init=False, default="")

    def __post_init__(self) -> None:
        self.seed_domain = extract_domain(self.seed_url) or ""

    def is_blacklisted(self, url: str) -> bool:
        return is_blacklisted(url, self.blacklist)

    def is_same_origin(self, url: str, base_url: Optional[str] = None) -> bool:
        base_domain = extract_domain(base_url) if base_url else self.seed_domain
        return (extract_domain(url) or "") == (base_domain or "")

    def is_candidate_script(self, url: str) -> bool:
        """Same-domain JavaScript that is worth mining for endpoints."""

        return (
            url.endswith(".js")
            and not is_noise_js_file(url)
            and self.is_same_origin(url)
        )
