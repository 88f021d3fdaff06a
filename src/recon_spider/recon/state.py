from __future__ import annotations

from dataclasses import dataclass, field

from ..core.models import ApiCandidate, Finding


@dataclass(slots=True)
class DiscoveryContext:
    """Mutable bookkeeping shared by every stage of a single run."""

    visited_urls: set[str] = field(default_factory=set)
    domains: set[str] = field(default_factory=set)
    html_urls: list[str] = field(default_factory=list)
    static_urls: list[str] = field(default_factory=list)
    findings: list[Finding] = field(default_factory=list)
    base_urls: list[str] = field(default_factory=list)
    api_candidates: list[ApiCandidate] = field(default_factory=list)
    fetch_count: int = 0

    @property
    def api_urls(self) -> list[str]:
        return [url for candidate in self.api_candidates for url in candidate.urls]
