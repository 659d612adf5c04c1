import pytest
import requests

from livesearch.core.exceptions import ResponseParseError
from livesearch.search.normalize import extract_x_urls, normalize_response, parse_body


def make_response(body):
    response = requests.Response()
    response.status_code = 200
    response._content = body
    response.encoding = "utf-8"
    return response


def test_parse_body_rejects_invalid_json():
    with pytest.raises(ResponseParseError) as excinfo:
        parse_body(make_response(b"<html>gateway</html>"))
    assert excinfo.value.exit_code == 4


def test_parse_body_treats_non_object_as_empty():
    assert parse_body(make_response(b"[1, 2]")) == {}


def test_message_content_is_trimmed_summary():
    data = {
        "choices": [{"message": {"content": "  - bullet one\n"}}],
        "citations": ["https://x.com/a/status/1"],
        "usage": {"total_tokens": 42},
        "model": "x-ai/grok-4-0709",
    }
    result = normalize_response(data, query="q", model="x-ai/grok-4")
    assert result.summary == "- bullet one"
    assert result.citations == ["https://x.com/a/status/1"]
    assert result.usage == {"total_tokens": 42}
    assert result.model == "x-ai/grok-4-0709"


def test_delta_content_fallback_and_defaults():
    data = {"choices": [{"delta": {"content": "streamed"}}]}
    result = normalize_response(data, query="q", model="configured")
    assert result.summary == "streamed"
    assert result.citations is None
    assert result.usage is None
    assert result.model == "configured"


def test_empty_response_gives_empty_summary():
    result = normalize_response({}, query="q", model="m")
    assert result.summary == ""
    assert result.citations is None


def test_citation_priority_order():
    data = {
        "choices": [{"message": {"content": "", "citations": ["message"]}}],
        "extra": {"citations": ["extra"]},
    }
    assert normalize_response(data, "q", "m").citations == ["message"]
    data["citations"] = ["top"]
    assert normalize_response(data, "q", "m").citations == ["top"]
    del data["citations"]
    del data["choices"][0]["message"]["citations"]
    assert normalize_response(data, "q", "m").citations == ["extra"]


def test_empty_citation_list_is_kept():
    data = {"choices": [{"message": {"content": "see https://x.com/a/status/1"}}], "citations": []}
    assert normalize_response(data, "q", "m").citations == []


def test_fallback_scrapes_x_links_from_summary():
    text = (
        "- Launch recap (https://x.com/xai/status/1)\n"
        "- Same post again https://x.com/xai/status/1\n"
        "- Older: https://Twitter.com/elonmusk/status/2\n"
        "- Blog https://example.com/x.com/post\n"
        "- Mirror https://mobile.twitter.com/a/status/3"
    )
    data = {"choices": [{"message": {"content": text}}]}
    assert normalize_response(data, "q", "m").citations == [
        "https://x.com/xai/status/1",
        "https://Twitter.com/elonmusk/status/2",
    ]


def test_extract_x_urls_requires_scheme_and_domain_prefix():
    assert extract_x_urls("x.com/a https://xx.com/b http://x.com/c") == ["http://x.com/c"]
