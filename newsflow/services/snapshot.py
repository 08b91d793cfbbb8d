from __future__ import annotations

from datetime import datetime

from newsflow.models.schemas import Feed, Item
from newsflow.tools.timeutil import to_iso_utc


def assemble(items: list[Item], run_at: datetime, max_items: int, source: str) -> Feed:
    """
    Keep the first `max_items` in document order (the page lists newest first).
    No re-sorting and no id dedup here.
    """
    return Feed(
        updated_at=to_iso_utc(run_at),
        source=source,
        items=list(items[: max(max_items, 0)]),
    )
