"""Application settings loaded from the environment."""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # General
    environment: str = Field("development", alias="ENVIRONMENT")
    api_host: str = Field("0.0.0.0", alias="API_HOST")
    api_port: int = Field(7777, alias="API_PORT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")

    # Service metadata
    service_name: str = Field("DevConnect API", alias="SERVICE_NAME")
    service_version: str = Field("1.0.0", alias="SERVICE_VERSION")

    # JWT
    jwt_secret: str = Field("devconnect-dev-secret", alias="JWT_SECRET")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    jwt_expires_in: int = Field(8 * 3600, alias="JWT_EXPIRES_IN")
    cookie_name: str = Field("token", alias="COOKIE_NAME")

    # Passwords
    bcrypt_rounds: int = Field(10, alias="BCRYPT_ROUNDS")

    # Storage
    database_backend: str = Field("memory", alias="DATABASE_BACKEND")
    mongo_uri: str = Field("mongodb://localhost:27017", alias="MONGO_URI")
    mongo_db_name: str = Field("devconnect", alias="MONGO_DB_NAME")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


settings = Settings()
