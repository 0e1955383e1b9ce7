"""Configuration settings for the exchange marketplace"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings"""

    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "SecondLife Exchange"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "production"

    # Database Settings
    POSTGRES_USER: str = "secondlife"
    POSTGRES_PASSWORD: str = "secondlife_pass"
    POSTGRES_HOST: str = "postgres"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "secondlife_exchange"
    DATABASE_URL_OVERRIDE: Optional[str] = None

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Auth Settings
    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15

    # Rate Limiting
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    RATE_LIMIT_DEFAULT: str = "100/minute"
    RECOMMENDATIONS_RATE_LIMIT: str = "10/minute"

    # Matching weights
    MATCH_CATEGORY_WEIGHT: float = 30.0
    MATCH_CONDITION_WEIGHT: float = 20.0
    MATCH_TAG_WEIGHT: float = 5.0  # Per matching tag
    MATCH_TAG_MAX: float = 10.0
    MATCH_POPULARITY_MAX: float = 20.0
    MATCH_POPULARITY_CEILING: float = 100.0  # popularity_score giving the full bonus
    MATCH_RECENCY_MAX: float = 10.0
    MATCH_RECENCY_DAYS: int = 30
    MATCH_RARITY_MAX: float = 10.0
    MATCH_LOCATION_WEIGHT: float = 10.0
    MATCH_HISTORY_KEYWORD_WEIGHT: float = 5.0
    MATCH_HISTORY_MAX: float = 20.0

    # Matching limits
    MATCH_MAX_PER_OWNER: int = 2
    MATCH_MAX_PER_CATEGORY: int = 3

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
