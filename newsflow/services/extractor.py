"""
Candidate extraction from a rendered news-flow page.

The page markup is not under our control and changes without notice, so the
"where are the items" guess lives in STRATEGIES (tried in order, first
non-empty match wins) and the "where is each field" guess lives in the
selector tuples below. Extraction itself never raises on missing markup.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from bs4 import BeautifulSoup, Tag

from newsflow.models.schemas import RawCandidate

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class SelectorStrategy:
    name: str
    selector: str
    id_attribute: str | None = None

    def find(self, document: BeautifulSoup) -> list[Tag]:
        return document.select(self.selector)


STRATEGIES: tuple[SelectorStrategy, ...] = (
    SelectorStrategy("news-id", "[data-news-id]", id_attribute="data-news-id"),
    SelectorStrategy("news-flow-card", 'a[data-id][href*="/news/"]', id_attribute="data-id"),
    SelectorStrategy("legacy-feed", ".tv-news-feed__item, .tv-widget-news__item, .tv-feed__item"),
    SelectorStrategy("article", "article"),
    SelectorStrategy("news-links", 'a[href*="/news/"]'),
)

# visible text may be ellipsized by layout; these carry the full headline
TITLE_ATTRIBUTES = ("data-overflow-tooltip-text", "title", "aria-label")
TITLE_SELECTORS = (
    '[data-name="news-headline-title"]',
    ".tv-widget-news__headline",
    ".title",
    "h1, h2, h3, h4",
)
SOURCE_SELECTORS = (
    ".tv-news-feed__source, .tv-widget-news__source, .provider",
    '[data-name="news-provider"]',
    '[class*="provider"]',
)
TIME_SELECTORS = (
    "time, relative-time",
    ".tv-widget-news__time, .tv-news-feed__time",
)
TIME_ATTRIBUTES = ("datetime", "event-time", "data-timestamp")
SNIPPET_SELECTORS = (
    ".tv-widget-news__summary, .summary",
    ".tv-news-feed__subtitle",
    '[class*="description"]',
)


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def _clean(text: str | None) -> str:
    if not text:
        return ""
    return _WS_RE.sub(" ", text).strip()


def _attr(node: Tag | None, names: Iterable[str]) -> str:
    if node is None:
        return ""
    for name in names:
        value = node.get(name)
        if isinstance(value, list):
            value = " ".join(value)
        value = _clean(value)
        if value:
            return value
    return ""


def _first(node: Tag, selectors: Sequence[str]) -> Tag | None:
    for sel in selectors:
        found = node.select_one(sel)
        if found is not None:
            return found
    return None


def _text(node: Tag | None) -> str:
    if node is None:
        return ""
    return _clean(node.get_text(" "))


def _anchor(node: Tag) -> Tag | None:
    if node.name == "a":
        return node
    return node.select_one("a[href]") or node.select_one("a")


def _title(node: Tag, anchor: Tag | None) -> str:
    title_el = _first(node, TITLE_SELECTORS)

    for el in (title_el, anchor, node):
        value = _attr(el, TITLE_ATTRIBUTES)
        if value:
            return value

    value = _text(title_el) or _text(anchor)
    if value:
        return value

    # last resort: first non-empty line of the node's text
    for line in node.get_text("\n").splitlines():
        line = _clean(line)
        if line:
            return line
    return ""


def _published(node: Tag) -> str:
    el = _first(node, TIME_SELECTORS)
    if el is None:
        return ""
    return _attr(el, TIME_ATTRIBUTES) or _text(el)


def _image(node: Tag) -> str:
    img = node if node.name == "img" else node.select_one("img")
    return _attr(img, ("src", "data-src"))


def read_candidate(node: Tag, strategy: SelectorStrategy) -> RawCandidate:
    anchor = _anchor(node)
    stable_id = _attr(node, (strategy.id_attribute,)) if strategy.id_attribute else ""

    return RawCandidate(
        title=_title(node, anchor) or None,
        link=_attr(anchor, ("href",)) or None,
        source=_text(_first(node, SOURCE_SELECTORS)) or None,
        published_raw=_published(node) or None,
        snippet=_text(_first(node, SNIPPET_SELECTORS)) or None,
        image=_image(node) or None,
        stable_id=stable_id or None,
    )


def match_nodes(
    document: BeautifulSoup,
    strategies: Sequence[SelectorStrategy] = STRATEGIES,
) -> tuple[SelectorStrategy | None, list[Tag]]:
    """First strategy with at least one match. Results are never merged across strategies."""
    for strategy in strategies:
        nodes = strategy.find(document)
        if nodes:
            logger.debug("Selector strategy %r matched %d nodes", strategy.name, len(nodes))
            return strategy, nodes
    return None, []


def extract(
    document: BeautifulSoup,
    max_candidates: int,
    strategies: Sequence[SelectorStrategy] = STRATEGIES,
) -> list[RawCandidate]:
    """
    Read up to `max_candidates` matched nodes in document order and keep the
    ones that have both a title and a link. An empty list is a valid result.
    """
    strategy, nodes = match_nodes(document, strategies)
    if strategy is None:
        logger.warning("No selector strategy matched; page markup may have changed")
        return []

    candidates = [read_candidate(n, strategy) for n in nodes[:max_candidates]]
    usable = [c for c in candidates if c.title and c.link]

    dropped = len(candidates) - len(usable)
    if dropped:
        logger.info("Dropped %d candidates without title or link", dropped)
    logger.info("Extracted %d candidates using strategy %r", len(usable), strategy.name)
    return usable
