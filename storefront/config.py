"""
storefront/config.py - Application configuration.

Settings are loaded from the environment (prefix STOREFRONT_) or a .env file.
Other modules import `settings` from here.
"""
from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""
    default_address: str = Field("ADDRESS_NOT_SET", description="Placeholder address for new users")
    default_wallet_money: Decimal = Field(Decimal("500"), ge=0, description="Wallet balance for new users")
    password_hash_rounds: int = Field(10, ge=4, le=31, description="bcrypt cost factor")

    environment: str = "development"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="STOREFRONT_", env_file=".env", case_sensitive=False)


settings = Settings()
