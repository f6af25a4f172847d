"""Storefront Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Storefront"
    environment: str = "development"
    debug: bool = True

    # Commerce service (cart, products, categories)
    commerce_base_url: str = "http://localhost:8010"
    access_token: Optional[str] = None

    # Timeouts (seconds)
    request_timeout: float = 30.0
    cart_request_timeout: float = 15.0

    # Fall back to the demo cart when the backend is unreachable.
    # Unset means "only in development".
    mock_cart_fallback: Optional[bool] = None

    # Mock commerce service
    host: str = "0.0.0.0"
    port: int = 8010

    class Config:
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def use_mock_cart(self) -> bool:
        """Whether a failed cart fetch should show the demo cart"""
        if self.mock_cart_fallback is not None:
            return self.mock_cart_fallback
        return self.is_development


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
