"""Shared artifact data structures handed from discovery to later stages."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .models import Finding, FindingCategory


def _freeze_targets(targets: Iterable[str]) -> Tuple[str, ...]:
    return tuple(sorted(set(targets)))


@dataclass
class DiscoveryReport:
    """Read-only data products of a discovery run."""

    seed_url: str = ""
    html_urls: Tuple[str, ...] = ()
    static_urls: Tuple[str, ...] = ()
    api_urls: Tuple[str, ...] = ()
    domains: Tuple[str, ...] = ()
    findings: List[Finding] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        seed_url: str,
        *,
        html_urls: Iterable[str] = (),
        static_urls: Iterable[str] = (),
        api_urls: Iterable[str] = (),
        domains: Iterable[str] = (),
        findings: Iterable[Finding] = (),
    ) -> "DiscoveryReport":
        return cls(
            seed_url=seed_url,
            html_urls=_freeze_targets(html_urls),
            static_urls=_freeze_targets(static_urls),
            api_urls=_freeze_targets(api_urls),
            domains=_freeze_targets(domains),
            findings=list(findings),
        )

    def all_urls(self) -> Tuple[str, ...]:
        return _freeze_targets((*self.html_urls, *self.static_urls, *self.api_urls))

    def to_json(self) -> str:
        data = {
            "seed_url": self.seed_url,
            "html_urls": list(self.html_urls),
            "static_urls": list(self.static_urls),
            "api_urls": list(self.api_urls),
            "domains": list(self.domains),
            "findings": [
                {"category": finding.category.value, "value": finding.value}
                for finding in self.findings
            ],
        }
        return json.dumps(data, indent=4, ensure_ascii=False)

    def save(self, path: Path) -> None:
        path.write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> "DiscoveryReport":
        raw = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            seed_url=raw.get("seed_url", ""),
            html_urls=tuple(raw.get("html_urls", [])),
            static_urls=tuple(raw.get("static_urls", [])),
            api_urls=tuple(raw.get("api_urls", [])),
            domains=tuple(raw.get("domains", [])),
            findings=[
                Finding(FindingCategory(entry["category"]), entry["value"])
                for entry in raw.get("findings", [])
            ],
        )

    def as_probe_targets(self) -> "ProbeTargetsArtifact":
        return ProbeTargetsArtifact(urls=self.all_urls())


@dataclass(frozen=True)
class ProbeTargetsArtifact:
    """Input data for the liveness prober."""

    urls: Tuple[str, ...]

    @classmethod
    def from_iterable(cls, urls: Iterable[str]) -> "ProbeTargetsArtifact":
        return cls(urls=_freeze_targets(urls))


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single liveness request."""

    url: str
    status_code: Optional[int]
    content_length: str
    category: str
    error: Optional[str] = None


@dataclass
class ProbeArtifact:
    """Container returned by the liveness prober."""

    checked_urls: Tuple[str, ...]
    results: List[ProbeResult]

    @property
    def alive(self) -> Tuple[ProbeResult, ...]:
        return tuple(result for result in self.results if result.status_code == 200)
