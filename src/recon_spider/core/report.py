"""CSV export and console rendering of a finished run."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

from .artifacts import DiscoveryReport, ProbeArtifact

PROBE_HEADER = ("Code", "Length", "URL")
FINDINGS_HEADER = ("#", "Type", "Value")


def report_file_name(seed_url: str) -> str:
    host = urlparse(seed_url).hostname or "unknown"
    return f"{host.replace('.', '-')}.csv"


def write_csv_report(
    report: DiscoveryReport,
    probe: Optional[ProbeArtifact],
    output_dir: Path,
) -> Path:
    """Writes probe results followed by the findings table."""

    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / report_file_name(report.seed_url)

    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(PROBE_HEADER)
        for result in probe.results if probe else []:
            code = str(result.status_code) if result.status_code is not None else "N/A"
            writer.writerow((code, result.content_length, result.url))

        writer.writerow(("", "", ""))
        writer.writerow(FINDINGS_HEADER)
        for index, finding in enumerate(report.findings, start=1):
            writer.writerow((index, *finding.as_row()))

    return path


def render_summary(report: DiscoveryReport, probe: Optional[ProbeArtifact] = None) -> List[str]:
    lines: List[str] = []

    def section(title: str, values, empty: str) -> None:
        lines.append(f"\n=== {title} ===")
        if not values:
            lines.append(f" - {empty}")
        lines.extend(values)

    section("HTML pages", list(report.html_urls), "No HTML pages discovered.")
    section("Static resources", list(report.static_urls), "No static resources discovered.")
    section("API candidates from JavaScript", list(report.api_urls), "No API candidates.")

    if probe is not None:
        probe_lines = []
        for result in probe.results:
            if result.error:
                probe_lines.append(f"[!] Request failed: {result.url} - {result.error}")
            else:
                probe_lines.append(
                    f"Code: {result.status_code} Length: {result.content_length} URL: {result.url}"
                )
        section("Liveness results", probe_lines, "Nothing probed.")

    section("Domains seen in HTML and JavaScript", list(report.domains), "No domains found.")

    lines.append("\n=== Totals ===")
    lines.append(f"[+] URLs discovered: {len(report.all_urls())}")
    if probe is not None:
        lines.append(f"[+] URLs answering 200: {len(probe.alive)}")

    findings = [
        f"{index:<5} | {finding.category.value:<12} | {finding.value}"
        for index, finding in enumerate(report.findings, start=1)
    ]
    if findings:
        findings.insert(0, f"{'#':<5} | {'Type':<12} | Value")
    section("Sensitive data", findings, "No sensitive data detected.")

    return lines
