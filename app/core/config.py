from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator
from urllib.parse import quote_plus
from enum import Enum


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    # Environment Configuration
    ENVIRONMENT: Environment = Environment.DEVELOPMENT

    # Project Information
    PROJECT_NAME: str = "MedTrack"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"

    # Server settings
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    # Database
    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    # Security
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # OpenAI (refill suggestions)
    OPENAI_API_KEY: Optional[str] = None
    DEFAULT_AI_MODEL: str = "gpt-4o-mini"
    REFILL_SUGGESTION_MODEL: Optional[str] = None
    REFILL_SUGGESTION_TEMPERATURE: float = 0.2
    REFILL_SUGGESTION_TIMEOUT_SECONDS: float = 30.0

    # Timezone used for reminder due checks when the profile has none
    DEFAULT_TIMEZONE: str = "UTC"

    # Inventory: remaining/total at or below this ratio is flagged low stock
    LOW_STOCK_THRESHOLD: float = 0.2

    # CORS (comma-separated origins)
    CORS_ORIGINS: str = ""

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("LOW_STOCK_THRESHOLD")
    @classmethod
    def threshold_is_ratio(cls, v: float) -> float:
        if not 0 <= v <= 1:
            raise ValueError("LOW_STOCK_THRESHOLD must be between 0 and 1")
        return v

    @model_validator(mode="after")
    def _finalize_and_validate(self) -> "Settings":
        # Derive SQLALCHEMY_DATABASE_URI if not provided
        if not self.SQLALCHEMY_DATABASE_URI:
            user = self.POSTGRES_USER
            server = self.POSTGRES_SERVER
            db = self.POSTGRES_DB
            if user and server and db:
                safe_user = quote_plus(user)
                if self.POSTGRES_PASSWORD:
                    safe_password = quote_plus(self.POSTGRES_PASSWORD)
                    self.SQLALCHEMY_DATABASE_URI = (
                        f"postgresql://{safe_user}:{safe_password}@{server}:{self.POSTGRES_PORT}/{db}"
                    )
                else:
                    self.SQLALCHEMY_DATABASE_URI = (
                        f"postgresql://{safe_user}@{server}:{self.POSTGRES_PORT}/{db}"
                    )
            else:
                # Local development fallback
                self.SQLALCHEMY_DATABASE_URI = "sqlite:///./medtrack.db"

        if self.is_production and self.SECRET_KEY == "change-me":
            raise ValueError("SECRET_KEY must be set in production")
        return self

    @property
    def refill_suggestion_model(self) -> str:
        return self.REFILL_SUGGESTION_MODEL or self.DEFAULT_AI_MODEL

    # Environment-specific properties
    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PRODUCTION

    @property
    def cors_origins_development(self) -> List[str]:
        return [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:9002",
        ]

    @property
    def allowed_cors_origins(self) -> List[str]:
        origins = [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
        if origins:
            return origins
        if self.is_production:
            return []
        return self.cors_origins_development

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")


settings = Settings()
