"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./pawn_calculator.db"

    # Weight config document
    app_id: str = "pawn-calculator-default"

    # Service
    service_name: str = "pawn-calculator"
    log_level: str = "INFO"

    # Admin credentials; hash format is pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>
    # An empty hash disables the admin endpoints
    admin_username: str = "admin"
    admin_password_hash: str = ""


settings = Settings()
