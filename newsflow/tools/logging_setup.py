from __future__ import annotations

import logging
from pathlib import Path
from newsflow.config.settings import Settings, get_settings

# per-request chatter from the HTTP and browser stacks
_NOISY_LOGGERS = ("urllib3", "asyncio")


def setup_logging(settings: Settings | None = None) -> None:
    """Run log to LOG_FILE plus the console; TOTAL_ITEMS/NEW_ITEMS lines go to stdout separately."""
    s = settings or get_settings()
    level = getattr(logging, s.log_level.upper(), logging.INFO)
    log_path = Path(s.log_file or "logs/run.log")

    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(message)s",
        handlers=[
            logging.FileHandler(log_path, encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
