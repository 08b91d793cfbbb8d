from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any

from newsflow.models.schemas import Delta, Feed
from newsflow.tools.timeutil import to_iso_utc, utc_now

logger = logging.getLogger(__name__)

FEED_FILE = "feed.json"
DIFF_FILE = "diff.json"
SUMMARY_FILE = "scrape_summary.txt"
DEBUG_HTML_FILE = "debug_page.html"
DEBUG_SCREENSHOT_FILE = "debug_page.png"


def _dumps(data: dict) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def render_summary(total: int, new: int, generated_at: datetime | None = None) -> str:
    lines = [f"TOTAL_ITEMS={total}", f"NEW_ITEMS={new}"]
    if generated_at is not None:
        lines.append(f"GENERATED_AT={to_iso_utc(generated_at)}")
    return "\n".join(lines) + "\n"


def _replace_all(out: Path, contents: dict[str, str]) -> None:
    """
    Write every file to a temp sibling first, then move them into place in
    the given order. Each move is atomic, the set is not: callers put the
    file that must stay last-good (feed.json) at the end.
    """
    staged: list[tuple[Path, Path]] = []
    try:
        for name, text in contents.items():
            tmp = out / f".{name}.tmp"
            staged.append((tmp, out / name))
            tmp.write_text(text, encoding="utf-8")

        for tmp, final in staged:
            os.replace(tmp, final)
    except OSError:
        for tmp, _ in staged:
            tmp.unlink(missing_ok=True)
        raise


def write_artifacts(feed: Feed, delta: Delta, out_dir: str | Path, generated_at: datetime) -> dict:
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    _replace_all(
        out,
        {
            DIFF_FILE: _dumps(delta.model_dump(mode="json")),
            SUMMARY_FILE: render_summary(len(feed.items), len(delta.new_items), generated_at),
            # swapped last: a failed move above leaves the published feed alone
            FEED_FILE: _dumps(feed.model_dump(mode="json")),
        },
    )

    return {
        "feed_path": str(out / FEED_FILE),
        "diff_path": str(out / DIFF_FILE),
        "summary_path": str(out / SUMMARY_FILE),
    }


def _safe_read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None


def _count_list(data: Any, *keys: str) -> int:
    if not isinstance(data, dict):
        return 0
    for key in keys:
        value = data.get(key)
        if isinstance(value, list):
            return len(value)
    return 0


def write_summary_from_files(out_dir: str | Path, generated_at: datetime | None = None) -> dict:
    """
    Rebuild scrape_summary.txt from feed.json/diff.json already on disk.
    Unreadable files count as zero items.
    """
    out = Path(out_dir)
    feed = _safe_read_json(out / FEED_FILE)
    delta = _safe_read_json(out / DIFF_FILE)

    total = _count_list(feed, "items")
    new = _count_list(delta, "new_items", "newItems", "items")

    path = out / SUMMARY_FILE
    path.write_text(render_summary(total, new, generated_at or utc_now()), encoding="utf-8")
    logger.info("Wrote %s TOTAL_ITEMS=%d NEW_ITEMS=%d", path, total, new)
    return {"total_items": total, "new_items": new, "summary_path": str(path)}


def write_debug_artifacts(out_dir: str | Path, html: str, screenshot: bytes | None) -> None:
    out = Path(out_dir)
    try:
        out.mkdir(parents=True, exist_ok=True)
        (out / DEBUG_HTML_FILE).write_text(html, encoding="utf-8")
        if screenshot:
            (out / DEBUG_SCREENSHOT_FILE).write_bytes(screenshot)
    except OSError as e:
        logger.warning("Could not write debug artifacts to %s: %s", out, e)
        return
    logger.info("Wrote debug artifacts to %s", out)
