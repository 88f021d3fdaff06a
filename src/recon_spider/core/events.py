"""Structured events emitted by the discovery engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    FETCH = "fetch"
    FETCH_FAILED = "fetch_failed"
    SKIPPED_VISITED = "skipped_visited"
    SKIPPED_BLACKLIST = "skipped_blacklist"
    SKIPPED_DEPTH = "skipped_depth"
    UNRESOLVABLE = "unresolvable"
    REFERENCE = "reference"
    THIRD_PARTY = "third_party"
    JS_BASE_URL = "js_base_url"
    JS_SKIPPED = "js_skipped"
    API_EXPLICIT = "api_explicit"
    API_RESTFUL = "api_restful"
    FINDING = "finding"


@dataclass(frozen=True, slots=True)
class ScanEvent:
    """A single traversal decision: what happened, to which URL, and why."""

    kind: EventKind
    url: str
    detail: str = ""


EventSink = Callable[[ScanEvent], None]

_INFO_EVENTS = frozenset(
    {
        EventKind.THIRD_PARTY,
        EventKind.JS_BASE_URL,
        EventKind.API_EXPLICIT,
        EventKind.API_RESTFUL,
        EventKind.FINDING,
    }
)
_WARNING_EVENTS = frozenset({EventKind.FETCH_FAILED, EventKind.UNRESOLVABLE})


def log_event(event: ScanEvent) -> None:
    """Default sink: forwards events to the ``logging`` module."""

    if event.kind in _WARNING_EVENTS:
        level = logging.WARNING
    elif event.kind in _INFO_EVENTS:
        level = logging.INFO
    else:
        level = logging.DEBUG

    if event.detail:
        logger.log(level, "[%s] %s - %s", event.kind.value, event.url, event.detail)
    else:
        logger.log(level, "[%s] %s", event.kind.value, event.url)
