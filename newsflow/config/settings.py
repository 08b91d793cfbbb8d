from dotenv import load_dotenv
from pydantic import BaseModel, Field
import os

load_dotenv()

def _to_bool(v: str | None, default: bool = False) -> bool:
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes", "y", "on"}

def _to_int(v: str | None, default: int) -> int:
    if v is None or not v.strip():
        return default
    return int(v.strip())

def _to_str(v: str | None, default: str = "") -> str:
    if v is None:
        return default
    return v.strip()


DEFAULT_TARGET_URL = "https://br.tradingview.com/news-flow/?market=crypto"


class Settings(BaseModel):
    target_url: str = Field(default=DEFAULT_TARGET_URL)

    # optional baseline: public URL of the currently published feed.json,
    # or a local copy of it
    existing_feed_url: str = Field(default="")
    existing_feed_path: str = Field(default="")

    output_dir: str = Field(default=".")

    max_items: int = Field(default=40, ge=0)
    max_candidates: int = Field(default=60, ge=0)

    feed_source_label: str = Field(default="TradingView News Flow - crypto")
    item_source_default: str = Field(default="TradingView")

    page_timeout_ms: int = Field(default=60000)
    page_settle_ms: int = Field(default=1500)
    baseline_timeout_seconds: int = Field(default=10)

    debug_artifacts: bool = Field(default=False)

    log_level: str = Field(default="INFO")
    log_file: str = Field(default="logs/run.log")

    @property
    def baseline_location(self) -> str:
        return self.existing_feed_url or self.existing_feed_path


_settings: Settings | None = None

def get_settings() -> Settings:
    global _settings
    if _settings is not None:
        return _settings

    _settings = Settings(
        target_url=_to_str(os.getenv("TARGET_URL"), DEFAULT_TARGET_URL) or DEFAULT_TARGET_URL,
        existing_feed_url=_to_str(os.getenv("EXISTING_FEED_URL")),
        existing_feed_path=_to_str(os.getenv("EXISTING_FEED_PATH")),
        output_dir=_to_str(os.getenv("OUTPUT_DIR"), ".") or ".",
        max_items=_to_int(os.getenv("MAX_ITEMS"), 40),
        max_candidates=_to_int(os.getenv("MAX_CANDIDATES"), 60),
        feed_source_label=os.getenv("FEED_SOURCE_LABEL", "TradingView News Flow - crypto"),
        item_source_default=os.getenv("ITEM_SOURCE_DEFAULT", "TradingView"),
        page_timeout_ms=_to_int(os.getenv("PAGE_TIMEOUT_MS"), 60000),
        page_settle_ms=_to_int(os.getenv("PAGE_SETTLE_MS"), 1500),
        baseline_timeout_seconds=_to_int(os.getenv("BASELINE_TIMEOUT_SECONDS"), 10),
        debug_artifacts=_to_bool(os.getenv("DEBUG_ARTIFACTS"), False),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=os.getenv("LOG_FILE", "logs/run.log"),
    )
    return _settings
