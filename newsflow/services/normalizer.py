"""
Turn raw candidates into canonical Items.

Per-field fallbacks (never fatal):
    link, image   "/..." resolved against the page URL; unresolvable kept as-is
    published_at  unparsable or missing -> the run timestamp
    source        empty -> the configured publisher label
    snippet       empty -> ""
    image         empty -> None
    id            native id, else absolute link, else sha256(title + link)
"""
from __future__ import annotations

import hashlib
import logging
from datetime import datetime
from urllib.parse import urljoin, urlparse

from newsflow.models.schemas import Item, RawCandidate
from newsflow.tools.timeutil import parse_timestamp, to_iso_utc

logger = logging.getLogger(__name__)

DEFAULT_ITEM_SOURCE = "TradingView"


def resolve_link(link: str, page_base_url: str) -> str:
    link = link.strip()
    if not link.startswith("/"):
        return link
    try:
        return urljoin(page_base_url, link)
    except ValueError as e:
        logger.warning("Could not resolve link %r against %r: %s", link, page_base_url, e)
        return link


def is_absolute_url(link: str) -> bool:
    try:
        parsed = urlparse(link)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def content_hash(title: str, link: str) -> str:
    return hashlib.sha256(f"{title}{link}".encode("utf-8")).hexdigest()


def compute_item_id(stable_id: str | None, link: str, title: str) -> str:
    """
    Native id wins, then the absolute link, then a hash of title + link.
    Only the hash depends on the title, so only hash-identified items get a
    new id when the headline is edited.
    """
    if stable_id and stable_id.strip():
        return stable_id.strip()
    if is_absolute_url(link):
        return link
    return content_hash(title, link)


def _normalize(
    candidate: RawCandidate,
    page_base_url: str,
    run_at: datetime,
    default_source: str,
) -> tuple[Item, bool]:
    """Returns the Item and whether published_at fell back to the run time."""
    title = (candidate.title or "").strip()
    link = resolve_link(candidate.link or "", page_base_url)
    image = resolve_link(candidate.image or "", page_base_url)

    published = parse_timestamp(candidate.published_raw, default=run_at)
    fell_back = published is None
    if fell_back:
        logger.debug(
            "Unparsable published time %r for %s; using run time",
            candidate.published_raw,
            link,
        )
        published = run_at

    item = Item(
        id=compute_item_id(candidate.stable_id, link, title),
        title=title,
        link=link,
        source=(candidate.source or "").strip() or default_source,
        published_at=to_iso_utc(published),
        snippet=(candidate.snippet or "").strip(),
        image=image or None,
    )
    return item, fell_back


def normalize(
    candidate: RawCandidate,
    page_base_url: str,
    run_at: datetime,
    default_source: str = DEFAULT_ITEM_SOURCE,
) -> Item:
    return _normalize(candidate, page_base_url, run_at, default_source)[0]


def normalize_all(
    candidates: list[RawCandidate],
    page_base_url: str,
    run_at: datetime,
    default_source: str = DEFAULT_ITEM_SOURCE,
) -> list[Item]:
    items: list[Item] = []
    fallbacks = 0
    for c in candidates:
        item, fell_back = _normalize(c, page_base_url, run_at, default_source)
        items.append(item)
        fallbacks += fell_back

    if fallbacks:
        logger.info("%d of %d items use the run time as published_at", fallbacks, len(items))
    return items
