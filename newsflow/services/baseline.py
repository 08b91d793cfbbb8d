from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import requests
from pydantic import ValidationError

from newsflow.models.schemas import Feed

logger = logging.getLogger(__name__)


def _parse_feed(data: Any, origin: str) -> Feed | None:
    try:
        return Feed.model_validate(data)
    except ValidationError as e:
        logger.warning("Baseline feed from %s is malformed: %d errors", origin, e.error_count())
        return None


def fetch_previous_feed(url: str, timeout: int = 10) -> Feed | None:
    """Best-effort GET of the published feed.json. Any failure -> None."""
    if not url:
        return None

    try:
        r = requests.get(url, timeout=timeout, headers={"Accept": "application/json"})
        r.raise_for_status()
        data = r.json()
    except requests.RequestException as e:
        logger.warning("Baseline fetch failed for %s: %s", url, e)
        return None
    except ValueError as e:
        logger.warning("Baseline at %s is not JSON: %s", url, e)
        return None

    return _parse_feed(data, url)


def read_previous_feed(path: str | Path) -> Feed | None:
    """Local copy of a previously written feed.json. Missing or unreadable -> None."""
    p = Path(path)
    if not p.is_file():
        logger.warning("Baseline file %s does not exist", p)
        return None

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Could not read baseline file %s: %s", p, e)
        return None

    return _parse_feed(data, str(p))


def load_baseline(existing_feed_url: str = "", existing_feed_path: str = "", timeout: int = 10) -> Feed | None:
    if existing_feed_url:
        return fetch_previous_feed(existing_feed_url, timeout=timeout)
    if existing_feed_path:
        return read_previous_feed(existing_feed_path)
    logger.info("No baseline configured")
    return None
