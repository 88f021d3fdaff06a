"""Command line interface for the recon spider."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .core.config import ConfigurationError, load_configuration, provision_default_files
from .core.report import render_summary, write_csv_report
from .probe import run_liveness_probe
from .recon.crawler import Spider
from .recon.utils import build_session


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Recon spider: pages, JS endpoints and leaked data")
    parser.add_argument("-u", "--url", required=True, help="Target URL, e.g. https://example.com")
    parser.add_argument("-c", "--cookie", help="Cookie header sent with every request")
    parser.add_argument("-a", "--authorization", help="Authorization header sent with every request")
    parser.add_argument("--config-dir", type=Path, help="Directory holding blacklist/api_core/noise_strings files")
    parser.add_argument("--output-dir", type=Path, help="Directory for the CSV report (default: output)")
    parser.add_argument("--report-json", type=Path, help="Also save the discovery report as JSON")
    parser.add_argument("--no-probe", action="store_true", help="Skip the liveness probe")
    parser.add_argument("--init-config", action="store_true", help="Create missing config files with defaults")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every traversal decision")
    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)
    configure_logging(args.verbose)

    if args.init_config:
        for path in provision_default_files(args.config_dir or Path(".")):
            print(f"[+] Created {path}")

    try:
        config = load_configuration(
            args.url,
            cookie=args.cookie,
            authorization=args.authorization,
            config_dir=args.config_dir,
            output_dir=args.output_dir,
        )
    except ConfigurationError as exc:
        print(f"[!] {exc}")
        return 2

    print(f"[*] Blacklist: {list(config.blacklist)}")
    print(f"[*] API core: {config.api_core}")
    print(f"[*] Noise strings: {len(config.noise_strings)} loaded")

    session = build_session(config)

    print("\n=== [1/3] Discovery ===")
    spider = Spider(config, session=session)
    report = spider.run()
    print(
        f"[+] {spider.context.fetch_count} response(s) fetched, "
        f"{len(report.all_urls())} URL(s) and {len(report.findings)} finding(s) collected."
    )
    if args.report_json:
        report.save(args.report_json)
        print(f"[+] Discovery report saved to {args.report_json}")

    probe = None
    print("\n=== [2/3] Liveness probe ===")
    if args.no_probe:
        print(" - Skipped.")
    else:
        probe = run_liveness_probe(config, report, session=session)
        print(f"[+] {len(probe.results)} URL(s) probed.")

    print("\n=== [3/3] Report ===")
    for line in render_summary(report, probe):
        print(line)

    csv_path = write_csv_report(report, probe, config.output_dir)
    print(f"\n[+] Results written to {csv_path}")
    return 0


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
