from __future__ import annotations

import logging

from newsflow.models.schemas import Delta, Feed

logger = logging.getLogger(__name__)


def diff(current: Feed, previous: Feed | None) -> Delta:
    """
    Items of `current` whose id is not in `previous`, in current order.
    A missing baseline makes every current item new.
    """
    if previous is None:
        logger.warning("No baseline feed; reporting all %d items as new", len(current.items))
        known: set[str] = set()
    else:
        known = previous.ids

    new_items = [it for it in current.items if it.id not in known]
    return Delta(updated_at=current.updated_at, new_items=new_items)
