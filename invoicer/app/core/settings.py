import os

from dotenv import find_dotenv, load_dotenv


DEFAULT_TOKEN_EXPIRE_MINUTES = 60 * 24 * 7


def load_env_file(path: str | None = None) -> bool:
    """Load ``.env`` (default: found from the working directory) into the environment.

    Variables already set in the real environment win over the file.
    """
    return load_dotenv(path or find_dotenv(usecwd=True))


class Settings:
    """Process-wide configuration read from ``INVOICER_*`` environment variables.

    Keyword arguments override the environment, which is how tests and
    embedding code build an isolated configuration.
    """

    def __init__(self, **overrides):
        self.app_name = "Hourly Invoicer"
        self.api_version = "1.0.0"
        self.environment = os.getenv("INVOICER_ENV", "development")
        # No fallback: an unset key means every token is rejected and create_app refuses to start
        self.secret_key = os.getenv("INVOICER_SECRET_KEY") or None
        self.access_token_expire_minutes = int(
            os.getenv("INVOICER_TOKEN_EXPIRE_MINUTES", DEFAULT_TOKEN_EXPIRE_MINUTES)
        )
        self.database_url = os.getenv("INVOICER_DATABASE_URL", "sqlite:///./invoices.db")
        self.log_level = os.getenv("INVOICER_LOG_LEVEL", "INFO").upper()
        self.host = os.getenv("INVOICER_HOST", "127.0.0.1")
        self.port = int(os.getenv("INVOICER_PORT", "9000"))
        for name, value in overrides.items():
            if not hasattr(self, name):
                raise TypeError(f"Unknown setting: {name}")
            setattr(self, name, value)

    def validate(self) -> None:
        """Raise ``RuntimeError`` when a setting required at startup is missing."""
        if not self.secret_key:
            raise RuntimeError(
                "INVOICER_SECRET_KEY is not set; refusing to start without a token signing key"
            )


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance, reading ``.env`` on first use."""
    global _settings_instance
    if _settings_instance is None:
        load_env_file()
        _settings_instance = Settings()
    return _settings_instance
