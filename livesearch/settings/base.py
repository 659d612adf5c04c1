import math
import os

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "x-ai/grok-4"

# env var -> (openrouter key, cast, default)
NUMERIC_SETTINGS = {
    "GROK_TIMEOUT_SECONDS": ("timeout", float, "30"),
    "GROK_RETRY_ATTEMPTS": ("attempts", int, "3"),
    "GROK_BACKOFF_BASE_MS": ("backoff_base_ms", int, "500"),
}


def parse_number(raw: str, cast):
    """Return ``cast(raw)``, or None when the text is not a valid number."""
    try:
        return cast(raw.strip())
    except ValueError:
        return None


class Settings:
    """Django-inspired settings container with explicit configuration."""

    def __init__(self) -> None:
        self.environment = os.environ.get("LIVESEARCH_ENV", "base")
        self.log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()

        # Everything the request pipeline needs travels in this dict; nothing
        # downstream reads the environment.
        self.openrouter = {
            "api_key": os.environ.get("OPENROUTER_API_KEY", ""),
            "base_url": os.environ.get("OPENROUTER_BASE_URL", DEFAULT_BASE_URL),
            "model": os.environ.get("GROK_MODEL", DEFAULT_MODEL),
            "app_title": os.environ.get("OPENROUTER_APP_TITLE", "grok-skill"),
            "referer": os.environ.get("OPENROUTER_REFERER", "https://github.com"),
            "temperature": 0.2,
            "max_tokens": 1200,
        }

        # Unparseable numbers become None here and are reported by validate().
        self.raw_numbers = {}
        for env_name, (key, cast, default) in NUMERIC_SETTINGS.items():
            raw = os.environ.get(env_name, default)
            self.raw_numbers[env_name] = raw
            self.openrouter[key] = parse_number(raw, cast)

    def validate(self) -> dict:
        """Validate configuration and return any errors."""
        errors = {}

        if not self.openrouter["api_key"]:
            errors["api_key"] = "\n".join(
                [
                    "Missing env OPENROUTER_API_KEY.",
                    "Set it in your shell and re-run. Examples:",
                    '  export OPENROUTER_API_KEY="sk-or-..."',
                    '  OPENROUTER_API_KEY="sk-or-..." grok-search --q "..."',
                    "Tip: add the export to your shell profile (~/.zshrc or ~/.bashrc) to persist.",
                ]
            )

        for env_name, (key, cast, _) in NUMERIC_SETTINGS.items():
            if self.openrouter[key] is None:
                kind = "an integer" if cast is int else "a number"
                errors[key] = f"{env_name} must be {kind} (got {self.raw_numbers[env_name]!r})"

        attempts = self.openrouter["attempts"]
        if attempts is not None and attempts < 1:
            errors["attempts"] = "GROK_RETRY_ATTEMPTS must be at least 1"

        timeout = self.openrouter["timeout"]
        if timeout is not None and (not math.isfinite(timeout) or timeout <= 0):
            errors["timeout"] = "GROK_TIMEOUT_SECONDS must be a finite number greater than 0"

        backoff = self.openrouter["backoff_base_ms"]
        if backoff is not None and backoff < 0:
            errors["backoff_base_ms"] = "GROK_BACKOFF_BASE_MS must be 0 or greater"

        return errors


settings = Settings()
