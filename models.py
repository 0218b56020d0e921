"""Shared search result models."""

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class SearchItem:
    """One search result as emitted by a backend parser or the merger."""

    url: str
    title: str
    summary: str = ""

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class EngineOutcome:
    """Settled result of querying one backend: items on success, error text on failure."""

    engine: str
    items: List[SearchItem]
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class FetchedDocument:
    content_type: str
    raw_body: str
    final_text: str
