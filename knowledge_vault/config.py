"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ServiceConfig: Remote AI function endpoint and credentials
- TaggingConfig: Local tag extraction settings
- SummaryConfig: Automatic summarization on capture
- StoreConfig: Knowledge store location
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
import os
from typing import Any

import yaml


@dataclass
class ServiceConfig:
    """Configuration for the remote AI processing function.

    Attributes:
        base_url: Project base URL (e.g., "https://xyz.supabase.co")
        function_path: Path of the AI function below base_url
        api_key: Optional inline bearer token (overrides env vars)
        api_key_env: Environment variable holding the bearer token
        fallback_api_key_env: Secondary environment variable for the token
        base_url_env: Environment variable holding the base URL
        timeout_seconds: Transport timeout applied by the HTTP client
        trust_env: Whether to respect system proxy settings
    """

    base_url: str = ""
    function_path: str = "/functions/v1/ai-process"
    api_key: str | None = None
    api_key_env: str = "KNOWLEDGE_VAULT_API_KEY"
    fallback_api_key_env: str = "KNOWLEDGE_VAULT_ANON_KEY"
    base_url_env: str = "KNOWLEDGE_VAULT_URL"
    timeout_seconds: float = 30.0
    trust_env: bool = True

    @property
    def endpoint(self) -> str:
        base = get_base_url(self).rstrip("/")
        path = self.function_path if self.function_path.startswith("/") else f"/{self.function_path}"
        return f"{base}{path}"


@dataclass
class TaggingConfig:
    """Configuration for local tag extraction.

    Attributes:
        max_tags: Maximum number of locally extracted tags
    """

    max_tags: int = 6


@dataclass
class SummaryConfig:
    """Configuration for summaries generated while capturing items.

    Attributes:
        auto_summarize: Request a summary for new items without one
        min_content_chars: Content must be longer than this to be summarized
    """

    auto_summarize: bool = True
    min_content_chars: int = 100


@dataclass
class StoreConfig:
    """Configuration for the knowledge store.

    Attributes:
        path: JSON file holding all knowledge items
    """

    path: str = "knowledge.json"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "knowledge_vault.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    service: ServiceConfig = field(default_factory=ServiceConfig)
    tagging: TaggingConfig = field(default_factory=TaggingConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_SECTIONS: dict[str, type] = {
    "service": ServiceConfig,
    "tagging": TaggingConfig,
    "summary": SummaryConfig,
    "store": StoreConfig,
    "logging": LoggingConfig,
}


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict):
            known = data[key].keys()
            data[key].update({k: v for k, v in value.items() if k in known})
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    data: dict[str, Any] = {}
    for name in _SECTIONS:
        section = getattr(cfg, name)
        data[name] = {f.name: getattr(section, f.name) for f in fields(section)}
    return data


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(**{name: cls(**data[name]) for name, cls in _SECTIONS.items()})


def get_api_key(cfg: ServiceConfig) -> str | None:
    """Get the bearer token from inline config or environment variables."""
    if cfg.api_key:
        return cfg.api_key
    return os.getenv(cfg.api_key_env) or os.getenv(cfg.fallback_api_key_env)


def get_base_url(cfg: ServiceConfig) -> str:
    """Get the service base URL from inline config or environment variable."""
    if cfg.base_url:
        return cfg.base_url
    return os.getenv(cfg.base_url_env, "")


def is_service_configured(cfg: ServiceConfig) -> bool:
    return bool(get_base_url(cfg) and get_api_key(cfg))
