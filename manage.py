#!/usr/bin/env python
import os
import sys


def main() -> None:
    os.environ.setdefault("LIVESEARCH_SETTINGS_MODULE", "livesearch.settings.base")
    # Settings load on import, so the module choice must be in place first.
    from livesearch.core.management import execute_from_command_line

    sys.exit(execute_from_command_line(sys.argv[1:]))


if __name__ == "__main__":
    main()
