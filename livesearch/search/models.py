from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Mode(str, Enum):
    ON = "on"
    OFF = "off"
    AUTO = "auto"


@dataclass
class SearchArgs:
    query: str
    mode: Optional[Mode] = None
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    from_date: Optional[str] = None  # YYYY-MM-DD
    to_date: Optional[str] = None  # YYYY-MM-DD
    max_results: Optional[float] = None
    min_faves: Optional[int] = None
    min_views: Optional[int] = None


@dataclass
class XSource:
    included_x_handles: List[str] = field(default_factory=list)
    excluded_x_handles: List[str] = field(default_factory=list)
    post_favorite_count: Optional[int] = None
    post_view_count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        source: Dict[str, Any] = {"type": "x"}
        if self.included_x_handles:
            source["included_x_handles"] = self.included_x_handles
        if self.excluded_x_handles:
            source["excluded_x_handles"] = self.excluded_x_handles
        if self.post_favorite_count is not None:
            source["post_favorite_count"] = self.post_favorite_count
        if self.post_view_count is not None:
            source["post_view_count"] = self.post_view_count
        return source


@dataclass
class SearchParameters:
    mode: Mode
    max_search_results: int
    sources: List[XSource]
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    return_citations: bool = True

    def to_dict(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "mode": self.mode.value,
            "return_citations": self.return_citations,
            "max_search_results": self.max_search_results,
        }
        # Unset date bounds are left off the wire entirely.
        if self.from_date:
            params["from_date"] = self.from_date
        if self.to_date:
            params["to_date"] = self.to_date
        params["sources"] = [source.to_dict() for source in self.sources]
        return params


@dataclass
class ChatMessage:
    role: str
    content: str


@dataclass
class ChatRequest:
    messages: List[ChatMessage]
    model: str
    temperature: float
    max_tokens: int
    search_parameters: SearchParameters

    def to_payload(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [m.__dict__ for m in self.messages],
            "extra_body": {"search_parameters": self.search_parameters.to_dict()},
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "stream": False,
        }


@dataclass
class SearchResult:
    query: str
    summary: str
    citations: Optional[List[Any]]
    usage: Optional[Dict[str, Any]]
    model: str
