"""YAML config loading and validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from recruiting_db.errors import ConfigMissing

BACKENDS = ("rest", "sql")


@dataclass
class StoreConfig:
    backend: str = "rest"  # "rest" or "sql"
    url: str = ""
    anon_key: str = ""
    table: str = "profiles"
    database_url: str = ""
    timeout: int = 30


@dataclass
class IngestConfig:
    function_path: str = "/functions/v1/ingest"
    timeout: int = 60


@dataclass
class WebConfig:
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class AppConfig:
    store: StoreConfig = field(default_factory=StoreConfig)
    ingest: IngestConfig = field(default_factory=IngestConfig)
    web: WebConfig = field(default_factory=WebConfig)
    log_dir: str = "logs"
    log_level: str = "INFO"


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load configuration from an optional YAML file plus environment overrides."""
    config_path = config_path or os.environ.get("RECRUITING_DB_CONFIG")
    raw = {}
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                "Copy config.example.yaml to config.yaml and fill in your settings."
            )
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    config = AppConfig()

    # Store (env vars take precedence)
    store_raw = raw.get("store", {})
    config.store = StoreConfig(
        backend=os.environ.get("RECRUITING_DB_BACKEND", store_raw.get("backend", "rest")),
        url=os.environ.get("SUPABASE_URL", store_raw.get("url", "")),
        anon_key=os.environ.get("SUPABASE_ANON_KEY", store_raw.get("anon_key", "")),
        table=store_raw.get("table", "profiles"),
        database_url=os.environ.get("DATABASE_URL", store_raw.get("database_url", "")),
        timeout=store_raw.get("timeout", 30),
    )

    # Ingest
    ingest_raw = raw.get("ingest", {})
    config.ingest = IngestConfig(
        function_path=ingest_raw.get("function_path", "/functions/v1/ingest"),
        timeout=ingest_raw.get("timeout", 60),
    )

    # Web
    web_raw = raw.get("web", {})
    config.web = WebConfig(
        host=web_raw.get("host", "127.0.0.1"),
        port=web_raw.get("port", 8000),
    )

    config.log_dir = raw.get("log_dir", "logs")
    config.log_level = os.environ.get("RECRUITING_DB_LOG_LEVEL", raw.get("log_level", "INFO"))

    return config


def validate_config(config: AppConfig) -> list[str]:
    """Return list of validation warnings (empty = OK)."""
    warnings = []

    if config.store.backend not in BACKENDS:
        warnings.append(f"Unknown store backend '{config.store.backend}' (expected one of: {', '.join(BACKENDS)})")

    if not config.store.url or not config.store.anon_key:
        if config.store.backend == "rest":
            warnings.append("Supabase URL or anon key not configured - profile list will be empty")
        warnings.append("Supabase URL or anon key not configured - ingestion requests will fail")

    if config.store.backend == "sql" and not config.store.database_url:
        warnings.append("SQL backend selected but no database URL configured - profile list will be empty")

    return warnings


def require_store_credentials(config: AppConfig) -> None:
    """Raise ConfigMissing unless the store URL and access key are both set."""
    missing = []
    if not config.store.url:
        missing.append("SUPABASE_URL")
    if not config.store.anon_key:
        missing.append("SUPABASE_ANON_KEY")
    if missing:
        raise ConfigMissing(f"Missing Supabase configuration: {', '.join(missing)}")
