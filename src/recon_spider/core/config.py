"""Configuration loading for a discovery run."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

BLACKLIST_FILE = "blacklist.txt"
API_CORE_FILE = "api_core.txt"
NOISE_STRINGS_FILE = "noise_strings.txt"

DEFAULT_API_CORE = "/api/"
DEFAULT_NOISE_STRINGS: tuple[str, ...] = (
    "/>",
    "><",
    ">;",
    "};",
    "function",
    "button",
    "webpack",
    "chunk",
    "module",
    "export",
    "import",
    "return",
    "var",
    "const",
    "let",
    "/a",
    "/b",
    "javascript",
    ")||['//'+",
    "+",
    "=",
    "/t",
    "xlink",
    "/!",
)
DEFAULT_PROBE_WORKERS = 10


class ConfigurationError(ValueError):
    """Raised when the run cannot be configured from the given input."""


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable options consumed by the discovery engine and the prober."""

    target_url: str
    cookie: Optional[str] = None
    authorization: Optional[str] = None
    blacklist: tuple[str, ...] = ()
    api_core: str = DEFAULT_API_CORE
    noise_strings: tuple[str, ...] = DEFAULT_NOISE_STRINGS
    output_dir: Path = Path("output")
    request_timeout: Optional[float] = None
    probe_workers: int = DEFAULT_PROBE_WORKERS


def normalize_target(target_url: str) -> str:
    """Strips the fragment and validates the scheme of the seed URL."""

    target = target_url.strip().split("#", 1)[0]
    if not target.startswith(("http://", "https://")):
        raise ConfigurationError(
            f"Target must be a full http(s) URL, e.g. https://example.com (got {target_url!r})"
        )
    return target


def read_entries(path: Path) -> Optional[list[str]]:
    """Returns the trimmed non-empty lines of ``path``.

    ``None`` means the file is missing or is not valid UTF-8; callers then fall
    back to their defaults.
    """

    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except UnicodeDecodeError as exc:
        logger.warning("Ignoring %s, not valid UTF-8: %s", path, exc)
        return None
    except OSError as exc:
        raise ConfigurationError(f"Cannot read {path}: {exc}") from exc
    return [line.strip() for line in content.splitlines() if line.strip()]


def load_blacklist(config_dir: Path) -> tuple[str, ...]:
    entries = read_entries(config_dir / BLACKLIST_FILE)
    if entries is None:
        logger.warning("Blacklist file unavailable in %s; no domains excluded", config_dir)
        return ()
    return tuple(entries)


def load_api_core(config_dir: Path) -> str:
    entries = read_entries(config_dir / API_CORE_FILE)
    if entries is None:
        logger.warning("API core file unavailable in %s; using %s", config_dir, DEFAULT_API_CORE)
        return DEFAULT_API_CORE
    return entries[0] if entries else DEFAULT_API_CORE


def load_noise_strings(config_dir: Path) -> tuple[str, ...]:
    entries = read_entries(config_dir / NOISE_STRINGS_FILE)
    if entries is None:
        logger.warning("Noise strings file unavailable in %s; using defaults", config_dir)
        return DEFAULT_NOISE_STRINGS
    return tuple(entries)


def provision_default_files(config_dir: Path) -> list[Path]:
    """Writes any missing configuration file with its default content."""

    defaults = {
        BLACKLIST_FILE: "",
        API_CORE_FILE: DEFAULT_API_CORE,
        NOISE_STRINGS_FILE: "\n".join(DEFAULT_NOISE_STRINGS),
    }
    config_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for name, content in defaults.items():
        path = config_dir / name
        if path.exists():
            continue
        path.write_text(content, encoding="utf-8")
        written.append(path)
    return written


def load_configuration(
    target_url: str,
    *,
    cookie: Optional[str] = None,
    authorization: Optional[str] = None,
    config_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
) -> ScanConfig:
    """Builds a ``ScanConfig`` from CLI input, environment and config files."""

    load_dotenv()  # Loads .env values if present

    directory = Path(config_dir or os.getenv("RECON_CONFIG_DIR", ".")).resolve()
    timeout_value = os.getenv("RECON_TIMEOUT")
    workers_value = os.getenv("RECON_PROBE_WORKERS")

    try:
        request_timeout = float(timeout_value) if timeout_value else None
        probe_workers = int(workers_value) if workers_value else DEFAULT_PROBE_WORKERS
    except ValueError as exc:
        raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc

    return ScanConfig(
        target_url=normalize_target(target_url),
        cookie=cookie or os.getenv("RECON_COOKIE") or None,
        authorization=authorization or os.getenv("RECON_AUTHORIZATION") or None,
        blacklist=load_blacklist(directory),
        api_core=load_api_core(directory),
        noise_strings=load_noise_strings(directory),
        output_dir=Path(output_dir or os.getenv("RECON_OUTPUT_DIR", "output")),
        request_timeout=request_timeout,
        probe_workers=probe_workers,
    )
