"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Integration Configuration Models
# =====================================================================


class StripeConfig(BaseModel):
    """Stripe API configuration."""

    secret_key: Optional[str] = Field(
        default=None, alias="STRIPE_SECRET_KEY", description="Stripe secret API key (sk_...)"
    )
    webhook_secret: Optional[str] = Field(
        default=None, alias="STRIPE_WEBHOOK_SECRET", description="Signing secret of the Stripe webhook endpoint (whsec_...)"
    )
    currency: str = Field(default="usd", alias="STRIPE_CURRENCY", description="Default currency for payment intents")

    model_config = {"populate_by_name": True}

    @property
    def is_configured(self) -> bool:
        return bool(self.secret_key)


class EmailConfig(BaseModel):
    """Resend email API configuration."""

    api_key: Optional[str] = Field(default=None, alias="RESEND_API_KEY", description="Resend API key")
    base_url: str = Field(default="https://api.resend.com", alias="RESEND_API_URL", description="Resend API base URL")
    from_email: str = Field(
        default="onboarding@resend.dev", alias="FROM_EMAIL", description="Sender address for outgoing email"
    )
    timeout: float = Field(default=10.0, alias="EMAIL_TIMEOUT_SECONDS", description="HTTP timeout for email delivery")

    model_config = {"populate_by_name": True}


class ContentConfig(BaseModel):
    """Blog content generation configuration."""

    model: Optional[str] = Field(
        default=None,
        alias="BLOG_AI_MODEL",
        description="pydantic_ai model name for blog copy (e.g. 'openai:gpt-4o'); unset uses template content",
    )
    author: str = Field(default="CELESTIAL Team", alias="BLOG_AUTHOR", description="Author of generated posts")

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Storefront server host address to bind to",
        alias="CELESTIAL_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="Storefront server port number",
        alias="CELESTIAL_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="CELESTIAL_LOG_LEVEL",
    )
    site_url: str = Field(
        default="http://localhost:8000",
        description="Public base URL used in sitemaps, emails and structured data",
        alias="SITE_URL",
    )
    admin_api_key: Optional[str] = Field(
        default=None,
        description="Bearer token required by the admin API",
        alias="ADMIN_API_KEY",
    )
    admin_email: str = Field(
        default="admin@celestialcrystals.com",
        description="Store inbox for contact form messages and inventory alerts",
        alias="ADMIN_EMAIL",
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./celestial.db",
        description="Async database connection URL",
        alias="DATABASE_URL",
    )
    seed_catalog_on_startup: bool = Field(
        default=True,
        description="Create tables and sync the crystal catalog into the database at startup",
        alias="SEED_CATALOG_ON_STARTUP",
    )
    initial_stock_quantity: int = Field(
        default=25,
        ge=0,
        description="Stock given to crystals inserted by the catalog sync",
        alias="INITIAL_STOCK_QUANTITY",
    )

    # =====================================================================
    # Integrations (flat fields, grouped through the properties below)
    # =====================================================================
    stripe_secret_key: Optional[str] = Field(default=None, alias="STRIPE_SECRET_KEY")
    stripe_webhook_secret: Optional[str] = Field(default=None, alias="STRIPE_WEBHOOK_SECRET")
    stripe_currency: str = Field(default="usd", alias="STRIPE_CURRENCY")

    resend_api_key: Optional[str] = Field(default=None, alias="RESEND_API_KEY")
    resend_api_url: str = Field(default="https://api.resend.com", alias="RESEND_API_URL")
    from_email: str = Field(default="onboarding@resend.dev", alias="FROM_EMAIL")
    email_timeout_seconds: float = Field(default=10.0, alias="EMAIL_TIMEOUT_SECONDS")

    blog_ai_model: Optional[str] = Field(default=None, alias="BLOG_AI_MODEL")
    blog_author: str = Field(default="CELESTIAL Team", alias="BLOG_AUTHOR")

    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(default=["*"], alias="CORS_ALLOW_METHODS")
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def stripe(self) -> StripeConfig:
        """Get Stripe configuration from environment variables."""
        return StripeConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def email(self) -> EmailConfig:
        """Get email configuration from environment variables."""
        return EmailConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def content(self) -> ContentConfig:
        """Get blog content configuration from environment variables."""
        return ContentConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()


def get_settings() -> Settings:
    """Dependency returning the process-wide settings instance."""
    return settings
