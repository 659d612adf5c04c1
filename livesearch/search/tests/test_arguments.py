import pytest

from livesearch.core.exceptions import UsageError
from livesearch.search.arguments import build_parser, parse_args
from livesearch.search.models import Mode


def test_parse_full_command_line():
    args = parse_args(
        [
            "--q", "tweets from @elonmusk this week",
            "--include", "@elonmusk", "@OpenAI",
            "--from", "2025-11-01",
            "--to", "2025-11-07",
            "--mode", "on",
            "--max", "15",
            "--min-faves", "10",
            "--min-views", "0",
        ]
    )
    assert args.query == "tweets from @elonmusk this week"
    assert args.include == ["@elonmusk", "@OpenAI"]
    assert args.exclude == []
    assert args.from_date == "2025-11-01"
    assert args.to_date == "2025-11-07"
    assert args.mode is Mode.ON
    assert args.max_results == 15
    assert args.min_faves == 10
    assert args.min_views == 0


def test_defaults_leave_optional_fields_unset():
    args = parse_args(["--q", "hello"])
    assert args.mode is None
    assert args.max_results is None
    assert args.min_faves is None
    assert args.from_date is None


def test_query_alias():
    assert parse_args(["--query", "hello"]).query == "hello"


def test_variadic_lists_stop_at_next_flag_and_accumulate():
    args = parse_args(["--exclude", "a", "b", "--q", "x", "--exclude", "c"])
    assert args.exclude == ["a", "b", "c"]
    assert args.query == "x"


def test_unknown_tokens_are_ignored():
    args = parse_args(["stray", "--q", "hello", "--verbose-ish", "--mode", "auto"])
    assert args.query == "hello"
    assert args.mode is Mode.AUTO


def test_missing_query_is_usage_error():
    with pytest.raises(UsageError) as excinfo:
        parse_args(["--mode", "on"])
    assert excinfo.value.exit_code == 2
    assert "usage:" in str(excinfo.value)


def test_include_and_exclude_together_is_usage_error():
    with pytest.raises(UsageError) as excinfo:
        parse_args(["--q", "x", "--include", "a", "--exclude", "b"])
    assert excinfo.value.exit_code == 2


@pytest.mark.parametrize(
    "argv",
    [
        ["--q", "x", "--mode", "sometimes"],
        ["--q", "x", "--max", "many"],
        ["--q", "x", "--max", "nan"],
        ["--q", "x", "--min-faves", "-1"],
        ["--q", "x", "--min-views", "2.5"],
        ["--q", "x", "--from", "2025-02-30"],
    ],
)
def test_invalid_values_are_usage_errors(argv):
    with pytest.raises(UsageError) as excinfo:
        parse_args(argv)
    assert excinfo.value.exit_code == 2


def test_integral_float_text_is_accepted_for_thresholds():
    assert parse_args(["--q", "x", "--min-faves", "3.0"]).min_faves == 3


def test_dash_prefixed_query_attached_to_flag():
    assert parse_args(["--q=-rust vs go"]).query == "-rust vs go"


def test_dash_prefixed_query_as_separate_token_is_usage_error():
    with pytest.raises(UsageError):
        parse_args(["--q", "-rust"])


def test_help_documents_attached_query_form():
    assert '--q="-rust vs go"' in build_parser().format_help()
