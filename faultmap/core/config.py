"""
Application configuration.

Loads settings from environment variables and .env file.
The development flag is read once here and handed to the exception
handler explicitly; nothing else inspects the environment.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEVELOPMENT_ENVIRONMENT = "development"


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        environment: Deployment name. "development" exposes exception
            details in server fault bodies and indents JSON output.
        debug: Enable debug mode (OpenAPI docs). Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        serializer_max_depth: Deepest nesting expanded in JSON bodies.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="FAULTMAP_"
    )

    project_name: str = "faultmap"
    version: str = "0.1.0"
    environment: str = "production"
    debug: bool = False
    log_level: str = "INFO"
    serializer_max_depth: int = 10

    @property
    def is_development(self) -> bool:
        """True when running in a development deployment."""
        return self.environment.strip().lower() == DEVELOPMENT_ENVIRONMENT


settings = Settings()
