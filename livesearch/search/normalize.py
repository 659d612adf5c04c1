import logging
import re
from typing import Any, Dict, List, Optional

import requests

from livesearch.core.exceptions import ResponseParseError
from livesearch.search.models import SearchResult

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"https?://[^\s)]+")
X_URL_PATTERN = re.compile(r"^https?://(x\.com|twitter\.com)/", re.IGNORECASE)


def parse_body(response: requests.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise ResponseParseError("Failed to parse JSON response") from exc
    return data if isinstance(data, dict) else {}


def _first_choice(data: Dict[str, Any]) -> Dict[str, Any]:
    choices = data.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        return choices[0]
    return {}


def _field(container: Any, key: str) -> Any:
    return container.get(key) if isinstance(container, dict) else None


def extract_summary(data: Dict[str, Any]) -> str:
    choice = _first_choice(data)
    text = _field(choice.get("message"), "content")
    if text is None:
        text = _field(choice.get("delta"), "content")
    if text is None:
        text = ""
    return str(text).strip()


def extract_x_urls(text: str) -> List[str]:
    """X/Twitter links mentioned in free text, in order, without repeats."""
    urls = URL_PATTERN.findall(text)
    return list(dict.fromkeys(u for u in urls if X_URL_PATTERN.match(u)))


def extract_citations(data: Dict[str, Any], summary: str) -> Optional[List[Any]]:
    choice = _first_choice(data)
    candidates = (
        data.get("citations"),
        _field(choice.get("message"), "citations"),
        _field(data.get("extra"), "citations"),
    )
    for citations in candidates:
        if citations is not None:
            return citations

    logger.info("No citations field in response; scanning summary for X links")
    return extract_x_urls(summary) or None


def normalize_response(data: Dict[str, Any], query: str, model: str) -> SearchResult:
    summary = extract_summary(data)
    return SearchResult(
        query=query,
        summary=summary,
        citations=extract_citations(data, summary),
        usage=data.get("usage"),
        model=data.get("model") or model,
    )
