"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field
from sqlalchemy.engine import URL, make_url


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    name: str = Field(default="product-service", description="Service name")
    host: str = Field(default="0.0.0.0", description="Application host")
    port: int = Field(default=9999, description="Application port")


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model.

    The connection string is assembled from the discrete connection settings
    unless ``url`` is given, in which case it is used verbatim.
    """

    driver: str = Field(
        default="mysql+pymysql", description="SQLAlchemy driver name"
    )
    host: str = Field(default="127.0.0.1", description="Database host")
    port: int | None = Field(default=3306, description="Database port")
    name: str = Field(default="products", description="Database name")
    username: str | None = Field(default="root", description="Database username")
    password: str | None = Field(default=None, description="Database password")
    url: str | None = Field(
        default=None, description="Full connection URL, overrides the fields above"
    )
    echo: bool = Field(default=False, description="Log every SQL statement")
    reset_on_startup: bool = Field(
        default=False,
        description="Drop and recreate all tables at startup. Destroys all data.",
    )
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string.

        An empty password is left out of the URL entirely, and MySQL
        connections are opened with the utf8mb4 character set.
        """
        if self.url:
            return self.url

        query = {"charset": "utf8mb4"} if self.driver.startswith("mysql") else {}
        url = URL.create(
            drivername=self.driver,
            username=self.username or None,
            password=self.password or None,
            host=self.host or None,
            port=self.port,
            database=self.name or None,
            query=query,
        )
        return url.render_as_string(hide_password=False)

    @property
    def safe_connection_string(self) -> str:
        """Connection string with the password masked, suitable for logs."""
        return make_url(self.connection_string).render_as_string(hide_password=True)

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.connection_string).get_backend_name() == "sqlite"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
