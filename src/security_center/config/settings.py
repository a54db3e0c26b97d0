"""
Configuration management for the security center service.

All settings are read from the environment (prefix ``SECURITY_CENTER_``) or a
``.env`` file. Collaborators such as the IDP adapter and the cache backend are
selected from these values once, at application startup.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..__version__ import __version__


class SecurityCenterSettings(BaseSettings):
    """Application settings for the security center."""

    model_config = SettingsConfigDict(
        env_prefix="SECURITY_CENTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Core Application Settings
    app_name: str = Field(default="security-center", description="Application name")
    app_version: str = Field(default=__version__, description="Application version")
    environment: str = Field(default="development", description="Deployment environment")
    debug: bool = Field(default=False, description="Debug mode")
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8085, ge=1, le=65535, description="Bind port")

    # Session Configuration
    session_timeout_minutes: int = Field(default=30, ge=1, description="Session TTL in minutes")
    session_cache_prefix: str = Field(default="security_center:sessions", description="Session key namespace")
    session_cache_fail_open: bool = Field(
        default=True,
        description="Treat cache failures as a miss instead of failing the request"
    )
    session_signing_key: SecretStr = Field(
        default=SecretStr("change-me-in-production-session-signing-key"),
        description="HMAC key used to sign session identifiers"
    )
    session_require_signed_ids: bool = Field(
        default=True,
        description="Only rebuild sessions for identifiers carrying a valid signature"
    )

    # Identity Mapping
    identity_email_case_sensitive: bool = Field(default=True, description="Exact-case email matching")
    identity_page_size: int = Field(default=100, ge=1, le=1000, description="Party page size for email scan")

    # Cache Configuration
    cache_backend: str = Field(default="memory", description="Cache backend: memory or redis")
    redis_url: str = Field(default="redis://localhost:6379", description="Redis connection URL")
    redis_password: Optional[SecretStr] = Field(default=None, description="Redis password")
    redis_db: int = Field(default=0, ge=0, le=15, description="Redis database number")
    memory_max_size: int = Field(default=10000, ge=1, description="Max in-memory cache entries")

    # Identity Provider
    idp_provider: str = Field(default="keycloak", description="Identity provider adapter")
    keycloak_server_url: str = Field(default="http://localhost:8080", description="Keycloak server URL")
    keycloak_realm: str = Field(default="firefly", description="Keycloak realm")
    keycloak_client_id: str = Field(default="security-center", description="Keycloak client id")
    keycloak_client_secret: Optional[SecretStr] = Field(default=None, description="Keycloak client secret")
    keycloak_verify_ssl: bool = Field(default=True, description="Verify Keycloak TLS certificates")
    keycloak_admin_username: Optional[str] = Field(default=None, description="Keycloak admin username")
    keycloak_admin_password: Optional[SecretStr] = Field(default=None, description="Keycloak admin password")

    # Downstream Services
    customer_service_url: str = Field(default="http://localhost:8081", description="Customer registry base URL")
    contract_service_url: str = Field(default="http://localhost:8082", description="Contract registry base URL")
    product_service_url: str = Field(default="http://localhost:8083", description="Product catalog base URL")
    reference_data_service_url: str = Field(
        default="http://localhost:8084",
        description="Reference data (roles and scopes) base URL"
    )
    downstream_timeout_seconds: float = Field(default=10.0, gt=0, description="Downstream call timeout")

    @field_validator("cache_backend", "idp_provider")
    @classmethod
    def normalize_choice(cls, v: str) -> str:
        """Normalize selector values."""
        return v.strip().lower()

    @property
    def session_ttl_seconds(self) -> int:
        """Session TTL in seconds."""
        return self.session_timeout_minutes * 60

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> SecurityCenterSettings:
    """Get cached settings instance."""
    return SecurityCenterSettings()
