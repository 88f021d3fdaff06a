"""Helper script to execute the discovery stage in isolation.

Runs the crawler and the JavaScript enrichment pass against a single URL
without probing or CSV output, and saves the discovery report as JSON.
Useful for quick smoke tests or debugging the traversal policy.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

# Guarantee imports resolve to the local source tree when running from a checkout.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists():
    src_str = str(SRC_PATH)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)

from recon_spider.core.config import load_configuration
from recon_spider.recon.crawler import Spider


def parse_arguments() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Runs only the discovery stage against a target URL"
    )
    parser.add_argument(
        "url",
        help="Target base URL. Only use against systems you are authorized to test",
    )
    parser.add_argument(
        "--report",
        default="discovery.json",
        help="Output file for the discovery report (JSON). Default: discovery.json",
    )
    parser.add_argument("--config-dir", type=Path, help="Directory holding the config files")
    parser.add_argument("--cookie", help="Cookie header sent with every request")
    parser.add_argument("--authorization", help="Authorization header sent with every request")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log traversal decisions")
    return parser.parse_args()


def main() -> None:
    args = parse_arguments()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = load_configuration(
        args.url,
        cookie=args.cookie,
        authorization=args.authorization,
        config_dir=args.config_dir,
    )
    spider = Spider(config)

    print(f"[*] Starting discovery for {config.target_url}")
    try:
        report = spider.run()
    except KeyboardInterrupt:
        print("[!] Interrupted by user")
        return

    report_path = Path(args.report)
    report.save(report_path)

    print(f"[+] Report saved to {report_path}")
    print(f"    HTML pages      : {len(report.html_urls)}")
    print(f"    Static resources: {len(report.static_urls)}")
    print(f"    API candidates  : {len(report.api_urls)}")
    print(f"    Domains         : {len(report.domains)}")
    print(f"    Findings        : {len(report.findings)}")
    print(f"    URLs visited    : {len(spider.context.visited_urls)}")
    print(f"    Base URLs       : {len(spider.context.base_urls)}")


if __name__ == "__main__":
    main()
