import json

from livesearch.search.models import SearchResult


def render_result(result: SearchResult) -> str:
    """Pretty-printed JSON in query/summary/citations/usage/model order."""
    return json.dumps(result.__dict__, ensure_ascii=False, indent=2)
