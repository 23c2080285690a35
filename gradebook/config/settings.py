"""
Gradebook Settings

Centralized configuration for the grading and progress engine.
All values are loaded from environment variables (a .env file is honoured).
Grading constants (weights, breakpoints, pass threshold) live in code, not here.
"""
import os

from dotenv import load_dotenv

load_dotenv()


def get_bool_env(key: str, default: bool = False) -> bool:
    """Get a boolean value from environment variable."""
    value = os.getenv(key, str(default)).lower()
    return value in ('true', '1', 'yes', 'on', 'enabled')


def get_int_env(key: str, default: int) -> int:
    """Get an integer value from environment variable, falling back on garbage."""
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_float_env(key: str, default: float) -> float:
    """Get a float value from environment variable, falling back on garbage."""
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


class Settings:
    """
    Runtime settings for the gradebook.

    To add a new setting:
    1. Add it here as a class attribute
    2. Load it from an environment variable
    3. Pass it into the service that needs it (services never read os.environ)
    """

    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./gradebook.db")
    SQL_ECHO: bool = get_bool_env("GRADEBOOK_SQL_ECHO", False)

    # Calendar days for streaks are bucketed in this zone
    TIMEZONE: str = os.getenv("GRADEBOOK_TIMEZONE", "UTC")
    STREAK_WINDOW_DAYS: int = get_int_env("GRADEBOOK_STREAK_WINDOW_DAYS", 30)

    # Timeouts (seconds)
    UPSTREAM_TIMEOUT_SECONDS: float = get_float_env("GRADEBOOK_UPSTREAM_TIMEOUT_SECONDS", 5.0)
    REPORT_TIMEOUT_SECONDS: float = get_float_env("GRADEBOOK_REPORT_TIMEOUT_SECONDS", 15.0)

    # Study time estimate and course defaults
    MINUTES_PER_EXERCISE: int = get_int_env("GRADEBOOK_MINUTES_PER_EXERCISE", 10)
    DEFAULT_CREDITS: int = get_int_env("GRADEBOOK_DEFAULT_CREDITS", 3)

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @classmethod
    def as_dict(cls) -> dict:
        """Get all settings as a dictionary (DATABASE_URL is masked)."""
        values = {
            key: value
            for key, value in cls.__dict__.items()
            if key.isupper()
        }
        if "@" in values.get("DATABASE_URL", ""):
            scheme, _, rest = values["DATABASE_URL"].partition("://")
            values["DATABASE_URL"] = f"{scheme}://***@{rest.split('@', 1)[1]}"
        return values


# Singleton instance for easy importing
settings = Settings()
