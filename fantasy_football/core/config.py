"""Configurações da aplicação"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from functools import cached_property


class Settings(BaseSettings):
    """Configurações da aplicação"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="allow"
    )

    # App
    APP_NAME: str = "Fantasy Football Market API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development ou production

    # API
    API_V1_PREFIX: str = "/api/v1"
    CORS_ORIGINS: str = (
        "http://localhost:3000,http://localhost:5173,"
        "http://127.0.0.1:3000,http://127.0.0.1:5173"
    )

    @cached_property
    def is_production(self) -> bool:
        """Verifica se está em modo produção"""
        return self.ENVIRONMENT.lower() == "production"

    @cached_property
    def cors_origins_list(self) -> list[str]:
        """Retorna lista de origens CORS"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    # Database
    DATABASE_URL: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "fantasy_football"

    @cached_property
    def database_url(self) -> str:
        """Retorna URL completa do banco de dados"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    # Redis Cache
    CACHE_ENABLED: bool = True
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: Optional[str] = None
    CACHE_TTL: int = 120
    CACHE_PREFIX: str = "ffm"

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    AUTH_RATE_LIMIT: str = "20/minute"

    # Security
    SECRET_KEY: str = "dev-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30
    BCRYPT_ROUNDS: int = 12

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    # Regras do jogo
    TEAM_COMBINATION: list[dict] = [
        {"role": "GOALKEEPER", "count": 3},
        {"role": "DEFENDER", "count": 6},
        {"role": "MIDFIELDER", "count": 6},
        {"role": "ATTACKER", "count": 5},
    ]
    DEFAULT_COUNTRIES: list[str] = [
        "india", "england", "brazil", "argentina", "germany",
        "france", "spain", "portugal", "italy", "netherlands",
    ]
    PLAYER_BASE_MARKET_VALUE: int = 1_000_000
    PLAYER_MIN_MARKET_VALUE: int = 1_000_000
    PLAYER_MIN_AGE: int = 18
    PLAYER_MAX_AGE: int = 40
    TEAM_STARTING_BALANCE: int = 5_000_000
    TEAM_PLACEHOLDER_TOTAL_COST: int = 20_000_000
    TEAM_MIN_BALANCE: int = 100_000
    PLAYER_INCREMENT_PERCENTAGE_MIN: int = 10
    PLAYER_INCREMENT_PERCENTAGE_MAX: int = 100


settings = Settings()
