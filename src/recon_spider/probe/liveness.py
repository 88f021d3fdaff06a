"""Liveness checks for everything the discovery stage found."""

from __future__ import annotations

import concurrent.futures
from typing import List, Optional

import requests

from ..core.artifacts import DiscoveryReport, ProbeArtifact, ProbeResult, ProbeTargetsArtifact
from ..core.config import ScanConfig
from ..recon.targeting import is_blacklisted
from ..recon.utils import build_session

MISSING_LENGTH = "N/A"


def categorize_status(status_code: int) -> str:
    if status_code == 200:
        return "ok"
    if status_code == 302:
        return "redirect"
    if status_code in (401, 403):
        return "denied"
    if status_code == 404:
        return "not_found"
    if 500 <= status_code <= 599:
        return "server_error"
    return "other"


def _check_url(session: requests.Session, url: str, timeout: Optional[float]) -> ProbeResult:
    try:
        # Redirects are not followed so 3xx answers stay visible in the report.
        response = session.get(url, timeout=timeout, allow_redirects=False, stream=True)
    except requests.RequestException as exc:
        return ProbeResult(
            url=url,
            status_code=None,
            content_length=MISSING_LENGTH,
            category="error",
            error=str(exc),
        )

    try:
        return ProbeResult(
            url=url,
            status_code=response.status_code,
            content_length=response.headers.get("content-length", MISSING_LENGTH),
            category=categorize_status(response.status_code),
        )
    finally:
        response.close()


def run_liveness_probe(
    config: ScanConfig,
    targets: ProbeTargetsArtifact | DiscoveryReport,
    session: Optional[requests.Session] = None,
) -> ProbeArtifact:
    """Requests every discovered URL once and records its status."""

    artifact = targets.as_probe_targets() if isinstance(targets, DiscoveryReport) else targets
    urls = tuple(url for url in artifact.urls if not is_blacklisted(url, config.blacklist))

    if not urls:
        return ProbeArtifact(checked_urls=(), results=[])

    session = session or build_session(config)
    results: List[ProbeResult] = []

    with concurrent.futures.ThreadPoolExecutor(max_workers=config.probe_workers) as executor:
        futures = {
            executor.submit(_check_url, session, url, config.request_timeout): url
            for url in urls
        }
        for future in concurrent.futures.as_completed(futures):
            results.append(future.result())

    return ProbeArtifact(
        checked_urls=urls,
        results=sorted(results, key=lambda result: result.url),
    )
