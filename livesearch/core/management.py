import logging
import sys
from typing import List

from livesearch.core.exceptions import ConfigurationError, LiveSearchError
from livesearch.core.logging import configure_logging
from livesearch.search.arguments import parse_args
from livesearch.search.formatting import render_result
from livesearch.search.services import LiveSearchService
from livesearch.settings import settings

logger = logging.getLogger(__name__)


def execute_from_command_line(argv: List[str] | None = None, project_settings=None) -> int:
    """Run one live search and return the process exit code."""
    argv = argv or []
    project_settings = project_settings or settings
    configure_logging(project_settings.log_level)

    try:
        result = _search(argv, project_settings)
    except LiveSearchError as exc:
        logger.debug("Search failed with %s", type(exc).__name__)
        sys.stderr.write(f"{exc}\n")
        return exc.exit_code

    sys.stdout.write(render_result(result) + "\n")
    return 0


def _search(argv: List[str], project_settings):
    args = parse_args(argv)

    logger.info("Loading settings from %s", project_settings.environment)
    errors = project_settings.validate()
    if errors:
        raise ConfigurationError("\n".join(errors.values()))

    service = LiveSearchService(project_settings)
    return service.search(args)


def main() -> None:
    sys.exit(execute_from_command_line(sys.argv[1:]))
