"""Helper utilities used by recon and probe modules."""

from __future__ import annotations

from typing import Optional

import requests
import urllib3

from ..core.config import ScanConfig


def build_default_headers(cookie: Optional[str], authorization: Optional[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    if cookie:
        headers["Cookie"] = cookie
    if authorization:
        headers["Authorization"] = authorization
    return headers


def build_session(config: ScanConfig) -> requests.Session:
    """Session shared by every request of a run.

    Certificate validation is disabled because targets are frequently internal
    services with self-signed certificates.
    """

    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    session = requests.Session()
    session.verify = False
    session.headers.update(build_default_headers(config.cookie, config.authorization))
    return session
