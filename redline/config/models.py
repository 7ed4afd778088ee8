"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    url: Optional[str] = Field(None, description="Full connection string (overrides the parts below)")
    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("redline_db", description="Database name")
    user: str = Field("postgres", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field("DB_PASSWORD", description="Environment variable for password")
    min_pool_size: int = Field(1, ge=1, description="Minimum pooled connections")
    max_pool_size: int = Field(10, ge=1, description="Maximum pooled connections")

    @property
    def connection_string(self) -> str:
        """Get psycopg connection string."""
        if self.url:
            return self.url
        password = self.password or ""
        return f"postgresql://{self.user}:{password}@{self.host}:{self.port}/{self.database}"


class ScrapingConfig(BaseModel):
    """Scraper request and pacing settings."""

    request_timeout_ms: int = Field(10000, ge=1, description="Timeout for each HTTP request")
    delay_ms: int = Field(2000, ge=0, description="Politeness delay before each article request")
    listing_delay_ms: int = Field(1000, ge=0, description="Delay between listing page requests")
    max_retries: int = Field(3, ge=1, le=10, description="Attempts per request before giving up")
    retry_backoff_ms: int = Field(1000, ge=0, description="Backoff unit, multiplied by the attempt number")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header sent with requests")
    default_limit: int = Field(10, ge=1, le=500, description="Default number of URLs per run")


class ProviderConfig(BaseModel):
    """Credentials and model for a single AI provider."""

    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    api_key_env: Optional[str] = Field(None, description="Environment variable for API key")
    model: str = Field(..., description="Model name")
    base_url: Optional[str] = Field(None, description="Custom base URL (OpenAI-compatible endpoints)")


class AIConfig(BaseModel):
    """AI enrichment configuration."""

    gemini: ProviderConfig = Field(
        default_factory=lambda: ProviderConfig(api_key_env="GEMINI_API_KEY", model="gemini-1.5-flash")
    )
    openai: ProviderConfig = Field(
        default_factory=lambda: ProviderConfig(api_key_env="OPENAI_API_KEY", model="gpt-4o-mini")
    )
    classification_batch_size: int = Field(5, ge=1, description="Articles classified concurrently per group")
    classification_delay_ms: int = Field(1000, ge=0, description="Delay between classification groups")
    classification_max_tokens: int = Field(500, ge=50, description="Max output tokens for classification")
    location_batch_size: int = Field(1, ge=1, description="Articles per location extraction group")
    location_delay_ms: int = Field(2000, ge=0, description="Delay between location extraction groups")
    location_max_tokens: int = Field(2000, ge=100, description="Max output tokens for location extraction")
    max_content_chars: int = Field(8000, ge=500, description="Article content truncation for prompts")
    min_content_length: int = Field(100, ge=0, description="Skip articles shorter than this")


class ConfigModel(BaseModel):
    """Main configuration model."""

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    scraping: ScrapingConfig = Field(default_factory=ScrapingConfig)
    ai: AIConfig = Field(default_factory=AIConfig)


class SourceConfig(BaseModel):
    """Source configuration from sources.yaml."""

    name: str = Field(..., description="Source name")
    base_url: str = Field(..., description="Outlet homepage")
    adapter: str = Field(..., description="Scraper adapter key")
    language: str = Field("en", description="Article language code")
    enabled: bool = Field(True, description="Whether source is enabled")
