"""
InstaVault - Extraction Rules
=============================

Strategies for pulling a media link out of a downloader service response.

Each descriptor carries exactly one rule. Rules share a single interface,
``extract(body) -> Optional[str]``, so the client never branches on which
service it is talking to:

- ``SelectorRule``: HTML page, first element matching a CSS selector,
  one attribute read from it.
- ``FieldPathRule``: JSON document, walked key by key (or index by index
  for lists). Alternative paths are tried in order.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from bs4 import BeautifulSoup


PathStep = Union[str, int]


@dataclass(frozen=True)
class SelectorRule:
    """Scrape a link from HTML using a CSS selector."""

    selector: str
    attribute: str = "href"

    kind = "selector"
    accepts_json = False
    missing_message = "Download link not found"

    def extract(self, body: str) -> Optional[str]:
        soup = BeautifulSoup(body, "html.parser")
        element = soup.select_one(self.selector)
        if element is None:
            return None
        value = element.get(self.attribute)
        # Multi-valued attributes (class, rel) are never links
        if not isinstance(value, str):
            return None
        return value.strip() or None

    def describe(self) -> str:
        return f"{self.selector}[{self.attribute}]"


@dataclass(frozen=True)
class FieldPathRule:
    """Read a link from a JSON response by following field accesses."""

    path: Tuple[PathStep, ...]
    alternatives: Tuple[Tuple[PathStep, ...], ...] = ()

    kind = "field_path"
    accepts_json = True
    missing_message = "Download URL missing from response"

    def extract(self, body: str) -> Optional[str]:
        try:
            data = json.loads(body)
        except (ValueError, TypeError, RecursionError):
            return None

        for path in (self.path, *self.alternatives):
            value = _walk(data, path)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return None

    def describe(self) -> str:
        return " | ".join(
            ".".join(str(step) for step in path)
            for path in (self.path, *self.alternatives)
        )


ExtractionRule = Union[SelectorRule, FieldPathRule]


def _walk(data: Any, path: Tuple[PathStep, ...]) -> Any:
    """Follow a field path; None when any step is missing."""
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict) or step not in current:
                return None
            current = current[step]
    return current


__all__ = ["SelectorRule", "FieldPathRule", "ExtractionRule", "PathStep"]
