from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from bs4 import BeautifulSoup

SRC_HREF_PATTERN = re.compile(r"""(src|href)=["']([^"']+)["']""", re.IGNORECASE)
ABSOLUTE_URL_PATTERN = re.compile(r"""(https?://[^\s'"]+)""")


@dataclass(slots=True)
class LinkCollector:
    """Pulls outbound references out of a response body.

    Two independent passes run over the same body: a regex scan that also
    sees references inside broken or script-generated markup, and a
    BeautifulSoup pass that handles well-formed nested documents. Their
    results are not merged; the crawler's visited set absorbs duplicates.
    """

    parser: str = "html.parser"

    def collect(self, body: str) -> List[str]:
        return self.gather_from_regex(body) + self.gather_from_soup(body)

    @staticmethod
    def gather_from_regex(body: str) -> List[str]:
        return [match.group(2) for match in SRC_HREF_PATTERN.finditer(body)]

    def gather_from_soup(self, body: str) -> List[str]:
        soup = BeautifulSoup(body, self.parser)
        references: List[str] = []

        for element in soup.select("[src]") + soup.select("[href]"):
            value = element.get("src") or element.get("href")
            if value:
                references.append(value)

        for iframe in soup.select("iframe[src]"):
            value = iframe.get("src")
            if value:
                references.append(value)

        return references

    @staticmethod
    def gather_absolute_urls(script: str) -> List[str]:
        """Absolute ``http(s)`` URLs embedded in a JavaScript body."""

        return ABSOLUTE_URL_PATTERN.findall(script)
