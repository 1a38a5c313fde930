from typing import Optional, List
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.core.constants import (
    Environment,
    LockProviderType,
    QuotaEnforcementMode,
    StorageFailurePolicy,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment Profile
    environment: Environment = Environment.LOCAL

    # API Settings
    app_name: str = "places-metering"
    api_version: str = "0.1.0"
    debug: bool = False
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Database Components
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "places"
    db_use_nullpool: bool = False
    db_pool_size: int = 10
    db_pool_overflow: int = 5
    database_url_override: Optional[str] = None  # e.g. sqlite+aiosqlite:///./dev.db

    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        if self.database_url_override:
            return self.database_url_override
        return f"postgresql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_db: int = 0

    @property
    def redis_connection_url(self) -> str:
        """Construct Redis URL from components."""
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
        else:
            return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

    # OpenTelemetry
    otel_service_name: str = "places-metering-api"
    otel_service_version: str = "0.1.0"

    # Axiom (spans are only exported when a token is configured)
    axiom_token: str = ""
    axiom_dataset: str = ""

    # Identity (JWT issued by the external identity service)
    auth_jwt_secret: str = "local-development-secret-please-change-me"
    auth_jwt_algorithm: str = "HS256"
    auth_jwt_audience: Optional[str] = None

    # Metering
    metering_timezone: str = "UTC"
    metering_week_start_day: int = 0  # 0=Monday ... 6=Sunday
    default_tier_id: str = "starter"
    quota_enforcement_mode: QuotaEnforcementMode = (
        QuotaEnforcementMode.BOUNDED_OVERSHOOT
    )
    quota_storage_failure_policy: StorageFailurePolicy = StorageFailurePolicy.FAIL_OPEN
    quota_lock_ttl_seconds: int = 30
    quota_lock_wait_seconds: float = 5.0

    # Locking
    lock_provider: LockProviderType = LockProviderType.REDIS

    # Places search
    places_provider: str = "example"
    search_timeout_seconds: float = 10.0
    search_max_results: int = 100

    # Rate limiting
    rate_limit_default: List[str] = ["10/second", "300/minute"]

    @property
    def rate_limit_storage_uri(self) -> str:
        """Auto-select rate limit storage based on environment."""
        if self.environment == Environment.LOCAL:
            return "memory://"
        return self.redis_connection_url

    @property
    def cors_allowed_origins(self) -> List[str]:
        """Auto-select CORS origins based on environment."""
        if self.environment == Environment.LOCAL:
            return [
                "http://localhost:3000",
                "http://localhost:3001",
            ]
        return [
            "https://app.placesmeter.com",
        ]


settings = Settings()
