from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from newsflow.config.settings import Settings, get_settings
from newsflow.models.schemas import Delta, Feed
from newsflow.services.artifacts import write_artifacts, write_debug_artifacts
from newsflow.services.baseline import load_baseline
from newsflow.services.diff import diff
from newsflow.services.extractor import extract, parse_document
from newsflow.services.normalizer import normalize_all
from newsflow.services.renderer import RenderedPage, load_document
from newsflow.services.snapshot import assemble
from newsflow.tools.lock import RunLock
from newsflow.tools.timeutil import Clock, utc_now

logger = logging.getLogger(__name__)


def build_feed(html: str, page_url: str, run_at: datetime, s: Settings) -> Feed:
    """Extraction -> normalization -> snapshot. Pure given its inputs."""
    document = parse_document(html)
    candidates = extract(document, s.max_candidates)
    items = normalize_all(candidates, page_url, run_at, s.item_source_default)
    return assemble(items, run_at, s.max_items, s.feed_source_label)


def build_outputs(
    html: str,
    page_url: str,
    previous: Feed | None,
    run_at: datetime,
    s: Settings,
) -> tuple[Feed, Delta]:
    feed = build_feed(html, page_url, run_at, s)
    return feed, diff(feed, previous)


def run_scrape(
    settings: Settings | None = None,
    clock: Clock = utc_now,
    loader=load_document,
    baseline_loader=load_baseline,
) -> dict:
    """
    One complete run. SourceUnavailable from `loader` propagates and nothing
    is written; empty extraction and a missing baseline are not errors.
    """
    s = settings or get_settings()
    run_at = clock()

    with RunLock(s.output_dir):
        page: RenderedPage = asyncio.run(
            loader(
                s.target_url,
                timeout_ms=s.page_timeout_ms,
                settle_ms=s.page_settle_ms,
                screenshot=s.debug_artifacts,
            )
        )

        previous = baseline_loader(
            existing_feed_url=s.existing_feed_url,
            existing_feed_path=s.existing_feed_path,
            timeout=s.baseline_timeout_seconds,
        )

        feed, delta = build_outputs(page.html, page.url or s.target_url, previous, run_at, s)

        if not feed.items:
            logger.warning("Extraction produced no items from %s", page.url)
            if s.debug_artifacts:
                write_debug_artifacts(s.output_dir, page.html, page.screenshot)

        paths = write_artifacts(feed, delta, s.output_dir, run_at)

    logger.info("TOTAL_ITEMS=%d NEW_ITEMS=%d", len(feed.items), len(delta.new_items))

    return {
        "total_items": len(feed.items),
        "new_items": len(delta.new_items),
        "baseline_available": previous is not None,
        "updated_at": feed.updated_at,
        **paths,
    }
