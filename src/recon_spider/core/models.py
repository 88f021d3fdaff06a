"""Shared data structures used across the discovery engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class FindingCategory(str, Enum):
    """Kinds of sensitive data recognised by the detector."""

    AK_SK = "AK/SK"
    EMAIL = "email"
    PHONE = "phone"
    TOKEN = "token"
    API_KEY = "api_key"
    JDBC_URL = "jdbc_url"
    PASSWORD = "password"
    WEBSOCKET = "websocket"
    BACKUP_FILE = "backup_file"
    CONFIG_FILE = "config_file"


@dataclass(frozen=True, slots=True)
class Finding:
    """A single piece of leaked data found in a response body."""

    category: FindingCategory
    value: str

    def as_row(self) -> Tuple[str, str]:
        return (self.category.value, self.value)


class ApiKind(str, Enum):
    """Confidence tier of an accepted API fragment."""

    EXPLICIT = "explicit"
    RESTFUL = "restful"


@dataclass(frozen=True, slots=True)
class ApiCandidate:
    """A JavaScript fragment accepted as an API path and its resolved URLs."""

    fragment: str
    kind: ApiKind
    urls: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TraversalNode:
    """One pending unit of work for the crawler."""

    url: str
    base_url: str
    depth: int
    is_third_party: bool = False
