from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentVariables(BaseSettings):
    """Simple primitive values loaded from environment variables and .env files.

    These are the names config.yaml refers to through ``${VAR}`` placeholders.
    Values are kept as raw strings; config.yaml decides how they are typed.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Environment and deployment
    app_environment: str | None = Field(default=None)
    app_host: str | None = Field(default=None)
    app_port: str | None = Field(default=None)
    log_level: str | None = Field(default=None)
    log_file: str | None = Field(default=None)

    # Database connection
    db_driver: str | None = Field(default=None)
    db_host: str | None = Field(default=None)
    db_port: str | None = Field(default=None)
    db_name: str | None = Field(default=None)
    db_username: str | None = Field(default=None)
    db_password: str | None = Field(default=None)
    db_url: str | None = Field(default=None)
    db_echo: str | None = Field(default=None)
    db_reset_on_startup: str | None = Field(default=None)

    @property
    def template_values(self) -> dict[str, str]:
        """Values keyed by their environment variable name, unset ones omitted."""
        return {
            name.upper(): value
            for name, value in self.model_dump(exclude_none=True).items()
        }
