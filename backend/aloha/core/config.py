"""
Centralized configuration management using Pydantic Settings.

This module provides type-safe configuration management with validation,
loading settings from environment variables and .env files.
"""

import json
from typing import Annotated, List

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class RouteSettings(BaseModel):
    """
    Collection path segments mounted under the API prefix.

    Each segment is used both for router mounting and for rendering
    pagination links, so the two can never disagree.
    """

    users: str = "users"
    user_groups: str = "user_groups"
    permissions: str = "permissions"
    group_permissions: str = "group_permissions"
    user_permissions: str = "user_permissions"
    contents: str = "contents"
    auth: str = "auth"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Nested route segments use the ``__`` delimiter, e.g.
    ``ROUTES__USERS=members``.
    """

    # API Configuration
    project_name: str = Field(
        default="Aloha Admin",
        description="Project name displayed in API docs"
    )
    api_prefix: str = Field(
        default="/api",
        description="Prefix for all API routes"
    )
    environment: str = Field(
        default="local",
        description="Deployment environment (local or production)"
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/aloha.db",
        description="Database connection URL (SQLite locally, PostgreSQL in production)"
    )
    db_pool_size: int = Field(
        default=5,
        ge=1,
        description="Number of pooled connections kept open (non-SQLite only)"
    )
    db_max_overflow: int = Field(
        default=10,
        ge=0,
        description="Connections allowed beyond pool_size under load"
    )
    db_pool_timeout: float = Field(
        default=2.0,
        gt=0,
        description="Seconds to wait for a pooled connection before failing"
    )
    db_create_all: bool = Field(
        default=False,
        description="Create missing tables on startup (local development only)"
    )

    # Link rendering
    base_url: str = Field(
        default="http://127.0.0.1:8000",
        description="Public origin used to render pagination links"
    )
    routes: RouteSettings = Field(default_factory=RouteSettings)

    # Session store
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis URL for the session store"
    )
    session_cookie_name: str = Field(default="aloha_session")
    session_ttl_seconds: int = Field(
        default=60 * 60 * 24,
        gt=0,
        description="Lifetime of a login session in seconds"
    )
    session_cookie_secure: bool = Field(
        default=False,
        description="Only send the session cookie over HTTPS"
    )

    # CORS Configuration
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins (frontend URLs)"
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Only ``local`` and ``production`` are supported environments."""
        value = v.strip().lower()
        if value not in {"local", "production"}:
            raise ValueError(
                f"{v} is not a supported environment. "
                "Use either `local` or `production`"
            )
        return value

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | List[str]) -> List[str]:
        """
        Parse cors_origins from JSON string or list.

        Supports comma-separated origins for easier .env configuration.
        """
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """
        Validate database URL format.

        Supports SQLite (local, tests) and PostgreSQL (production).
        """
        if not v or v.strip() == "":
            raise ValueError("DATABASE_URL is required and cannot be empty")

        valid_schemes = ["sqlite", "sqlite+aiosqlite", "postgresql", "postgresql+asyncpg"]
        if not any(v.startswith(scheme + "://") for scheme in valid_schemes):
            raise ValueError(
                f"DATABASE_URL must start with one of: {', '.join(valid_schemes)}. "
                f"Got: {v[:20]}..."
            )
        return v

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Links are rendered by joining onto base_url, so drop a trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("BASE_URL must be an absolute http(s) URL")
        return v.rstrip("/")

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def is_sqlite_memory(self) -> bool:
        """True for in-memory SQLite, which only exists inside one connection."""
        if not self.is_sqlite:
            return False
        path = self.database_url.split("://", 1)[-1]
        return path in ("", "/") or ":memory:" in path or "mode=memory" in path

    def collection_path(self, name: str) -> str:
        """
        Mount path of a collection, e.g. ``/api/users``.

        Args:
            name: Attribute name on RouteSettings (e.g. "user_groups")
        """
        segment = getattr(self.routes, name).strip("/")
        return f"{self.api_prefix.rstrip('/')}/{segment}"

    def collection_url(self, name: str) -> str:
        """
        Absolute URL of a collection, used as the base of pagination links.

        Example:
            >>> settings.collection_url("users")
            'http://127.0.0.1:8000/api/users'
        """
        return f"{self.base_url}{self.collection_path(name)}"


# Global settings instance, read by the application wiring.
settings = Settings()
