from pydantic import BaseModel, ConfigDict, Field


class RawCandidate(BaseModel):
    """Unvalidated field bag read from one matched page node."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    link: str | None = None  # may be relative
    source: str | None = None
    published_raw: str | None = None
    snippet: str | None = None
    image: str | None = None
    stable_id: str | None = None  # only when the page exposes a per-item id


class Item(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str = Field(min_length=1)
    link: str = Field(min_length=1)
    source: str
    published_at: str  # ISO-8601 UTC
    snippet: str = ""
    image: str | None = None


class Feed(BaseModel):
    model_config = ConfigDict(frozen=True)

    updated_at: str
    source: str
    items: list[Item] = Field(default_factory=list)

    @property
    def ids(self) -> set[str]:
        return {it.id for it in self.items}


class Delta(BaseModel):
    model_config = ConfigDict(frozen=True)

    updated_at: str
    new_items: list[Item] = Field(default_factory=list)
