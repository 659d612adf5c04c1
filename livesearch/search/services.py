import logging
import time
from typing import Any, Dict

from livesearch.search.arguments import clamp_max_results, normalize_handles
from livesearch.search.client import RetryingClient
from livesearch.search.models import (
    ChatMessage,
    ChatRequest,
    Mode,
    SearchArgs,
    SearchParameters,
    SearchResult,
    XSource,
)
from livesearch.search.normalize import normalize_response, parse_body
from livesearch.settings import settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are Grok 4 answering with X/Twitter Live Search. "
    "Summarize concisely, and include tweet URLs as citations. Prefer bullets."
)


class LiveSearchService:
    def __init__(self, project_settings=None, client: RetryingClient | None = None) -> None:
        self.settings = project_settings or settings
        openrouter = self.settings.openrouter
        self.api_key = openrouter["api_key"]
        self.base_url = openrouter["base_url"]
        self.model = openrouter["model"]
        self.app_title = openrouter["app_title"]
        self.referer = openrouter["referer"]
        self.temperature = openrouter["temperature"]
        self.max_tokens = openrouter["max_tokens"]
        self.client = client or RetryingClient(
            attempts=openrouter["attempts"],
            timeout=openrouter["timeout"],
            backoff_base_ms=openrouter["backoff_base_ms"],
        )

    # Public API
    def search(self, args: SearchArgs) -> SearchResult:
        request = self.build_request(args)
        logger.info(
            "Live search: model=%s mode=%s max=%s",
            request.model,
            request.search_parameters.mode.value,
            request.search_parameters.max_search_results,
        )
        start = time.time()
        response = self.client.post(self.base_url, request.to_payload(), self._headers())
        elapsed = time.time() - start
        logger.info("Live search call complete (%.2fs)", elapsed)
        data = parse_body(response)
        return normalize_response(data, query=args.query, model=self.model)

    def build_request(self, args: SearchArgs) -> ChatRequest:
        source = XSource(
            included_x_handles=normalize_handles(args.include),
            excluded_x_handles=normalize_handles(args.exclude),
            post_favorite_count=args.min_faves,
            post_view_count=args.min_views,
        )
        search_parameters = SearchParameters(
            mode=args.mode or Mode.AUTO,
            max_search_results=clamp_max_results(args.max_results),
            from_date=args.from_date,
            to_date=args.to_date,
            sources=[source],
        )
        return ChatRequest(
            messages=[
                ChatMessage(role="system", content=SYSTEM_PROMPT),
                ChatMessage(role="user", content=str(args.query)),
            ],
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            search_parameters=search_parameters,
        )

    # Internals
    def _headers(self) -> Dict[str, Any]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "X-Title": self.app_title,
            "HTTP-Referer": self.referer,
        }
