"""Pattern based detection of leaked secrets and contact data.

Every matcher is compiled once at import time and shared by all calls to
:func:`detect_sensitive_info`. Findings are returned in matcher order and are
never deduplicated: the same value seen in two responses is reported twice.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Tuple

from ..core.models import Finding, FindingCategory
from .urls import STATIC_EXTENSIONS, normalize_for_crawl

# Character-class body covering the Han script, astral extensions included.
CJK_RANGES = (
    "⺀-⿟"  # radicals
    "々-〇"
    "〡-〩"
    "〸-〻"
    "㐀-䶿"
    "一-鿿"
    "豈-﫿"  # compatibility ideographs
    "\U00020000-\U0003134f"  # extensions B and later
)

COUNTRY_BY_TLD: Mapping[str, str] = {
    "cn": "中国",
    "jp": "日本",
    "uk": "英国",
}
UNKNOWN_COUNTRY = "未知"

_OPERATOR_PREFIXES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (
        "中国移动",
        (
            "134", "135", "136", "137", "138", "139", "147", "148", "150",
            "151", "152", "157", "158", "159", "165", "172", "178", "182",
            "183", "184", "187", "188", "195", "197", "198",
        ),
    ),
    (
        "中国电信",
        ("133", "149", "153", "173", "174", "177", "180", "181", "189", "190", "191"),
    ),
    (
        "中国联通",
        (
            "130", "131", "132", "145", "146", "155", "156", "166", "171",
            "175", "176", "185", "186", "196", "199",
        ),
    ),
    ("中国电信虚拟运营商", ("162",)),
    ("中国联通虚拟运营商", ("167",)),
    ("中国广电", ("192",)),
    ("虚拟运营商", ("170",)),
)
OPERATOR_BY_PREFIX: Mapping[str, str] = {
    prefix: operator
    for operator, prefixes in _OPERATOR_PREFIXES
    for prefix in prefixes
}
UNKNOWN_OPERATOR = "未知运营商"

_AK_SK_MARKERS = ("ACCESSKEY", "SECRETKEY", "AK", "SK")

Renderer = Callable[[re.Match, str], Optional[Finding]]


@dataclass(frozen=True)
class Matcher:
    category: FindingCategory
    pattern: re.Pattern
    render: Renderer


def _render_ak_sk(match: re.Match, _base_url: str) -> Optional[Finding]:
    name, value = match.group(1), match.group(2)
    upper = name.upper()
    if not any(marker in upper for marker in _AK_SK_MARKERS):
        return None
    if not any(char.isdigit() for char in value):
        return None
    return Finding(FindingCategory.AK_SK, f"{name} = {value}")


def _render_email(match: re.Match, _base_url: str) -> Optional[Finding]:
    email = match.group(1)
    if email.endswith(STATIC_EXTENSIONS):
        return None
    country = COUNTRY_BY_TLD.get(email.rsplit(".", 1)[-1], UNKNOWN_COUNTRY)
    return Finding(FindingCategory.EMAIL, f"{email} ({country})")


def _render_phone(match: re.Match, _base_url: str) -> Optional[Finding]:
    phone = match.group(1)
    operator = OPERATOR_BY_PREFIX.get(phone[:3], UNKNOWN_OPERATOR)
    return Finding(FindingCategory.PHONE, f"{phone} ({operator})")


def _render_group(category: FindingCategory, group: int) -> Renderer:
    def render(match: re.Match, _base_url: str) -> Optional[Finding]:
        return Finding(category, match.group(group))

    return render


def _render_backup(match: re.Match, base_url: str) -> Optional[Finding]:
    path = match.group(1)
    full_url = normalize_for_crawl(path, base_url)
    if full_url is None:
        return None
    category = (
        FindingCategory.CONFIG_FILE if path.endswith(".config") else FindingCategory.BACKUP_FILE
    )
    return Finding(category, full_url)


MATCHERS: Tuple[Matcher, ...] = (
    Matcher(
        FindingCategory.AK_SK,
        re.compile(r"""["']?([a-zA-Z0-9_]+)\s*[=:]\s*["']([A-Za-z0-9\-]{16,64})["']"""),
        _render_ak_sk,
    ),
    Matcher(
        FindingCategory.EMAIL,
        re.compile(r'"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})"'),
        _render_email,
    ),
    Matcher(
        FindingCategory.PHONE,
        re.compile(r'"(1[3-9][0-9]{9})"'),
        _render_phone,
    ),
    Matcher(
        FindingCategory.TOKEN,
        re.compile(r'"(token|auth_token|bearer)\s*([A-Za-z0-9\-_]{16,128})"'),
        _render_group(FindingCategory.TOKEN, 0),
    ),
    Matcher(
        FindingCategory.API_KEY,
        re.compile(r'"apikey\s*([A-Za-z0-9\-_]{16,64})"'),
        _render_group(FindingCategory.API_KEY, 1),
    ),
    Matcher(
        FindingCategory.JDBC_URL,
        re.compile(r'"(jdbc:[a-z]+://[a-zA-Z0-9.-]+:[0-9]+/[a-zA-Z0-9_]+)"'),
        _render_group(FindingCategory.JDBC_URL, 1),
    ),
    Matcher(
        FindingCategory.PASSWORD,
        re.compile(r'"password\s*=\s*([A-Za-z0-9!@#$%^&*]{8,32})"'),
        _render_group(FindingCategory.PASSWORD, 1),
    ),
    Matcher(
        FindingCategory.WEBSOCKET,
        re.compile(r'"((?:ws|wss)://[a-zA-Z0-9.-]+(?::[0-9]{1,5})?(?:/[^"\n]*)?)"'),
        _render_group(FindingCategory.WEBSOCKET, 1),
    ),
    Matcher(
        FindingCategory.BACKUP_FILE,
        re.compile(
            rf"""["']([^"\s;}}{{><{CJK_RANGES}]+\.(?:zip|tar\.gz|bak|config))["']"""
        ),
        _render_backup,
    ),
)


def detect_sensitive_info(content: str, base_url: str) -> List[Finding]:
    """Scans ``content`` with every matcher and returns the findings."""

    findings: List[Finding] = []
    for matcher in MATCHERS:
        for match in matcher.pattern.finditer(content):
            finding = matcher.render(match, base_url)
            if finding is not None:
                findings.append(finding)
    return findings
