"""Configuration loader."""

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import ValidationError

from .models import AIConfig, ConfigModel, PostgresConfig, ProviderConfig, SourceConfig


def default_config_path() -> Path:
    """Location of config.yaml, overridable with REDLINE_CONFIG."""
    override = os.environ.get("REDLINE_CONFIG")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "redline" / "config.yaml"


class Config:
    """Configuration manager."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = default_config_path()
        self.config_path = config_path
        self.environ = environ if environ is not None else os.environ
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config, falling back to defaults when no file exists."""
        if self._config is None:
            if self.config_path.exists():
                base = load_config(self.config_path)
            else:
                base = ConfigModel()
            self._config = apply_env_overrides(base, self.environ)
        return self._config

    @property
    def sources_path(self) -> Path:
        """Get sources.yaml path (next to config.yaml)."""
        return self.config_path.parent / "sources.yaml"

    def get_db_config(self) -> PostgresConfig:
        """Get database configuration with the password resolved."""
        db_config = self.config.postgres.model_copy()

        if db_config.password_env and not db_config.password:
            password = self.environ.get(db_config.password_env)
            if password:
                db_config.password = password

        return db_config

    def get_ai_config(self) -> AIConfig:
        """Get AI configuration with API keys resolved from the environment."""
        ai_config = self.config.ai.model_copy(deep=True)
        for provider in (ai_config.gemini, ai_config.openai):
            _resolve_api_key(provider, self.environ)
        return ai_config


def _resolve_api_key(provider: ProviderConfig, environ: Mapping[str, str]) -> None:
    if provider.api_key_env:
        api_key = environ.get(provider.api_key_env)
        if api_key:
            provider.api_key = api_key


def _env_int(environ: Mapping[str, str], name: str) -> Optional[int]:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}")


def apply_env_overrides(config: ConfigModel, environ: Mapping[str, str]) -> ConfigModel:
    """Overlay environment variables on a loaded config."""
    data: Dict[str, Any] = config.model_dump()
    postgres = data["postgres"]
    scraping = data["scraping"]
    ai = data["ai"]

    if environ.get("DATABASE_URL"):
        postgres["url"] = environ["DATABASE_URL"]
    for env_name, key in (("DB_HOST", "host"), ("DB_NAME", "database"), ("DB_USER", "user")):
        if environ.get(env_name):
            postgres[key] = environ[env_name]
    db_port = _env_int(environ, "DB_PORT")
    if db_port is not None:
        postgres["port"] = db_port

    for env_name, key in (
        ("REQUEST_TIMEOUT_MS", "request_timeout_ms"),
        ("SCRAPING_DELAY_MS", "delay_ms"),
        ("MAX_RETRIES", "max_retries"),
    ):
        value = _env_int(environ, env_name)
        if value is not None:
            scraping[key] = value
    if environ.get("USER_AGENT"):
        scraping["user_agent"] = environ["USER_AGENT"]

    if environ.get("GEMINI_MODEL"):
        ai["gemini"]["model"] = environ["GEMINI_MODEL"]
    if environ.get("OPENAI_MODEL"):
        ai["openai"]["model"] = environ["OPENAI_MODEL"]

    batch_size = _env_int(environ, "AI_BATCH_SIZE")
    if batch_size is not None:
        ai["classification_batch_size"] = batch_size
    batch_delay = _env_int(environ, "AI_BATCH_DELAY_MS")
    if batch_delay is not None:
        ai["classification_delay_ms"] = batch_delay
    max_tokens = _env_int(environ, "OPENAI_MAX_TOKENS")
    if max_tokens is not None:
        ai["location_max_tokens"] = max_tokens

    try:
        return ConfigModel(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration from environment: {e}")


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def load_sources(sources_path: Path) -> List[SourceConfig]:
    """Load sources from YAML file."""
    if not sources_path.exists():
        raise FileNotFoundError(f"Sources file not found: {sources_path}")

    try:
        with open(sources_path) as f:
            sources_data = yaml.safe_load(f)

        if sources_data is None or "sources" not in sources_data:
            return []

        sources = []
        for source_data in sources_data["sources"]:
            try:
                sources.append(SourceConfig(**source_data))
            except ValidationError as e:
                print(f"Skipping invalid source {source_data.get('name', 'unknown')}: {e}")

        return sources
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in sources file: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)


def save_sources(sources: List[SourceConfig], sources_path: Path) -> None:
    """Save sources to YAML file."""
    sources_path.parent.mkdir(parents=True, exist_ok=True)

    sources_data = {"sources": [s.model_dump() for s in sources]}

    with open(sources_path, "w") as f:
        yaml.dump(sources_data, f, default_flow_style=False, sort_keys=False)
