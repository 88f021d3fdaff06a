"""Origin-aware crawler that feeds the detector and the API path filter."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import requests

from ..core.artifacts import DiscoveryReport
from ..core.config import ScanConfig
from ..core.events import EventKind, EventSink, ScanEvent, log_event
from ..core.models import ApiKind, Finding, TraversalNode
from .api_filter import evaluate_api_path, extract_fragments
from .detector import detect_sensitive_info
from .link_collector import LinkCollector
from .state import DiscoveryContext
from .targeting import OriginPolicy
from .urls import HTML, STATIC, classify_url, extract_domain, normalize_for_crawl
from .utils import build_session

logger = logging.getLogger(__name__)

SEED_DEPTH = 1
MAX_FIRST_PARTY_DEPTH = 3
MAX_THIRD_PARTY_DEPTH = 1


@dataclass
class Spider:
    """Discovers pages, static resources, API candidates and leaked data."""

    config: ScanConfig
    session: Optional[requests.Session] = None
    on_event: EventSink = log_event
    link_collector: LinkCollector = field(default_factory=LinkCollector)

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = build_session(self.config)
        self._policy = OriginPolicy(
            seed_url=self.config.target_url,
            blacklist=tuple(self.config.blacklist),
        )
        self._context = DiscoveryContext()

    @property
    def context(self) -> DiscoveryContext:
        """Return the current mutable run state for observability tools."""

        return self._context

    # ------------------------------------------------------------------
    # Core workflow
    # ------------------------------------------------------------------
    def run(self) -> DiscoveryReport:
        seed = self.config.target_url
        self._context = DiscoveryContext(base_urls=[seed])

        self.crawl(TraversalNode(url=seed, base_url=seed, depth=SEED_DEPTH))
        self.enrich_from_scripts()

        return DiscoveryReport.build(
            seed,
            html_urls=self._context.html_urls,
            static_urls=self._context.static_urls,
            api_urls=self._context.api_urls,
            domains=self._context.domains,
            findings=self._context.findings,
        )

    def crawl(self, root: TraversalNode) -> None:
        """Depth-first walk driven by an explicit stack of pending nodes."""

        pending: List[TraversalNode] = [root]
        while pending:
            node = pending.pop()
            if not self._should_visit(node):
                continue

            self._context.visited_urls.add(node.url)
            body = self._fetch(node.url)
            if body is None:
                continue

            self._record_findings(detect_sensitive_info(body, node.base_url), node.url)
            children = self._expand(node, body)
            # reversed so that children are visited in document order
            pending.extend(reversed(children))

    def enrich_from_scripts(self) -> None:
        """Mines same-domain JavaScript for base URLs and API fragments.

        The first sweep fetches every candidate script, scans it for leaked
        data and grows the base URL set. Fragments are only resolved in the
        second sweep, once every base URL is known.
        """

        scripts: Dict[str, str] = {}
        for url in sorted(set(self._context.static_urls)):
            if not self._policy.is_candidate_script(url):
                self._emit(EventKind.JS_SKIPPED, url, "not a same-domain application script")
                continue

            body = self._fetch(url)
            if body is None:
                continue
            scripts[url] = body
            self._record_findings(detect_sensitive_info(body, self.config.target_url), url)
            self._harvest_base_urls(body)

        logger.debug("Base URLs for API resolution: %s", self._context.base_urls)

        for url, body in scripts.items():
            for fragment in extract_fragments(body):
                self._resolve_fragment(fragment, url)

    # ------------------------------------------------------------------
    # Traversal policy
    # ------------------------------------------------------------------
    def _should_visit(self, node: TraversalNode) -> bool:
        if node.url in self._context.visited_urls:
            self._emit(EventKind.SKIPPED_VISITED, node.url)
            return False

        limit = MAX_THIRD_PARTY_DEPTH if node.is_third_party else MAX_FIRST_PARTY_DEPTH
        if node.depth > limit:
            self._emit(EventKind.SKIPPED_DEPTH, node.url, f"depth {node.depth}")
            return False

        if self._policy.is_blacklisted(node.url):
            self._emit(EventKind.SKIPPED_BLACKLIST, node.url)
            return False

        return True

    def _expand(self, node: TraversalNode, body: str) -> List[TraversalNode]:
        base_domain = extract_domain(node.base_url) or ""
        children: List[TraversalNode] = []

        for reference in self.link_collector.collect(body):
            full_url = normalize_for_crawl(reference, node.base_url)
            if full_url is None:
                self._emit(EventKind.UNRESOLVABLE, reference, f"base {node.base_url}")
                continue

            self._emit(EventKind.REFERENCE, full_url)
            domain = extract_domain(full_url)
            if domain is None:
                continue
            self._context.domains.add(domain)

            if domain != base_domain:
                self._emit(EventKind.THIRD_PARTY, full_url)
                if not node.is_third_party and not self._policy.is_blacklisted(full_url):
                    children.append(
                        TraversalNode(
                            url=full_url,
                            base_url=full_url,
                            depth=SEED_DEPTH,
                            is_third_party=True,
                        )
                    )
                continue

            self._classify(full_url)
            if (
                full_url.endswith("/")
                and node.depth < MAX_FIRST_PARTY_DEPTH
                and not node.is_third_party
            ):
                children.append(
                    TraversalNode(
                        url=full_url,
                        base_url=node.base_url,
                        depth=node.depth + 1,
                    )
                )

        return children

    def _classify(self, url: str) -> None:
        kind = classify_url(url)
        if kind == HTML:
            self._context.html_urls.append(url)
        elif kind == STATIC:
            self._context.static_urls.append(url)

    # ------------------------------------------------------------------
    # JavaScript mining
    # ------------------------------------------------------------------
    def _harvest_base_urls(self, script: str) -> None:
        for url in self.link_collector.gather_absolute_urls(script):
            domain = extract_domain(url)
            if domain:
                self._context.domains.add(domain)

            if self._policy.is_blacklisted(url) or url in self._context.base_urls:
                continue
            if not self._policy.is_same_origin(url):
                continue

            self._context.base_urls.append(url)
            self._emit(EventKind.JS_BASE_URL, url)

    def _resolve_fragment(self, fragment: str, script_url: str) -> None:
        candidate = evaluate_api_path(
            fragment,
            self._context.base_urls,
            self.config.api_core,
            self.config.noise_strings,
        )
        if candidate is None:
            return

        self._context.api_candidates.append(candidate)
        kind = (
            EventKind.API_EXPLICIT
            if candidate.kind is ApiKind.EXPLICIT
            else EventKind.API_RESTFUL
        )
        for url in candidate.urls:
            self._emit(kind, url, f"from {script_url}")

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------
    def _fetch(self, url: str) -> Optional[str]:
        self._emit(EventKind.FETCH, url)
        try:
            response = self.session.get(url, timeout=self.config.request_timeout)
        except requests.RequestException as exc:
            self._emit(EventKind.FETCH_FAILED, url, str(exc))
            return None

        if not 200 <= response.status_code < 300:
            self._emit(EventKind.FETCH_FAILED, url, f"HTTP {response.status_code}")
            return None

        self._context.fetch_count += 1
        return response.text

    def _record_findings(self, findings: List[Finding], source_url: str) -> None:
        for finding in findings:
            self._emit(EventKind.FINDING, source_url, f"{finding.category.value}: {finding.value}")
        self._context.findings.extend(findings)

    def _emit(self, kind: EventKind, url: str, detail: str = "") -> None:
        self.on_event(ScanEvent(kind=kind, url=url, detail=detail))
