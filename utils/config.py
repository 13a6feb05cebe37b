"""Configuration management utilities for the spending dashboard.

Provides environment-backed settings objects for:
- The FastAPI application (host, port, logging, CORS)
- The Cosmos DB data source (endpoint, key, database, container)
- The dashboard HTTP client (API base URL, timeout)

All settings have defaults so the application starts without any
configuration.  Missing Cosmos settings are not rejected here; they surface
as a failed query when the container is first used.
"""

import os as _os
from typing import Any, Dict, Optional


class Config:
    """Base configuration class for organizing application settings."""

    def __init__(self):
        """Initialize configuration with default values."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary.

        Returns:
            Dictionary of all config attributes
        """
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}


class CosmosConfig(Config):
    """Cosmos DB connection settings loaded from environment variables.

    Environment variables:
        COSMOS_ENDPOINT: Account endpoint URL (https://<account>.documents.azure.com:443/)
        COSMOS_KEY: Account access key
        COSMOS_DATABASE: Database identifier
        COSMOS_CONTAINER: Container identifier holding the spending documents
    """

    def __init__(self) -> None:
        super().__init__()
        self.endpoint: Optional[str] = _os.getenv("COSMOS_ENDPOINT")
        self.key: Optional[str] = _os.getenv("COSMOS_KEY")
        self.database_id: Optional[str] = _os.getenv("COSMOS_DATABASE")
        self.container_id: Optional[str] = _os.getenv("COSMOS_CONTAINER")

    @classmethod
    def from_env(cls) -> "CosmosConfig":
        """Create a CosmosConfig instance populated from environment variables."""
        return cls()

    def missing(self) -> list[str]:
        """Return the environment variable names of unset settings."""
        env_names = {
            "endpoint": "COSMOS_ENDPOINT",
            "key": "COSMOS_KEY",
            "database_id": "COSMOS_DATABASE",
            "container_id": "COSMOS_CONTAINER",
        }
        return [env for attr, env in env_names.items() if not getattr(self, attr)]

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        # Never leak the access key into logs or health output
        if d.get("key"):
            d["key"] = "***"
        return d


class AppConfig(Config):
    """Application-level configuration loaded from environment variables.

    Environment variables:
        APP_PORT: API server port (default: 8000)
        APP_HOST: API server bind address (default: 127.0.0.1)
        APP_LOG_FORMAT: Logging format — "text" or "json" (default: text)
        APP_LOG_LEVEL: Root log level name (default: INFO)
        APP_CORS_ORIGINS: Comma-separated allowed origins (default: *)
    """

    def __init__(self) -> None:
        super().__init__()
        self.api_port = int(_os.getenv("APP_PORT", "8000"))
        self.api_host = _os.getenv("APP_HOST", "127.0.0.1")
        self.log_format = _os.getenv("APP_LOG_FORMAT", "text")
        self.log_level = _os.getenv("APP_LOG_LEVEL", "INFO").upper()
        raw_origins = _os.getenv("APP_CORS_ORIGINS", "*")
        self.cors_origins: list[str] = (
            ["*"] if raw_origins == "*"
            else [o.strip() for o in raw_origins.split(",") if o.strip()]
        )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()


class ClientConfig(Config):
    """Settings for the dashboard's HTTP client.

    Environment variables:
        SPENDING_API_URL: Base URL of the spending API (default: http://localhost:8000)
        SPENDING_API_TIMEOUT: Request timeout in seconds (default: 10)
    """

    def __init__(self) -> None:
        super().__init__()
        self.api_url = _os.getenv("SPENDING_API_URL", "http://localhost:8000")
        self.timeout = float(_os.getenv("SPENDING_API_TIMEOUT", "10"))

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create a ClientConfig instance populated from environment variables."""
        return cls()
