"""Configuration loading and provider composition."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from jsonschema import ValidationError, validate

from .advisory import (
    AdvisoryProvider,
    CachedAdvisoryProvider,
    GeminiAdvisoryProvider,
    SqlAdvisoryStore,
    StaticAdvisoryProvider,
)
from .advisory.gemini import DEFAULT_MODEL, DEFAULT_TIMEOUT_SECONDS
from .catalog import build_catalog
from .db import DEFAULT_DATABASE_URL, init_db, make_engine, make_session_factory
from .interval import ServiceInterval

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).parent / "schemas"
DEFAULT_CONFIG_PATH = Path("carservice.yaml")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigError(ValueError):
    """The configuration file or environment is invalid."""


@dataclass
class Config:
    ai_enabled: bool = False
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_MODEL
    gemini_timeout: float = DEFAULT_TIMEOUT_SECONDS
    database_url: str = DEFAULT_DATABASE_URL
    intervals: List[ServiceInterval] = field(default_factory=build_catalog)


def load_schema(name: str) -> dict:
    """Load a packaged JSON schema (stored as YAML)."""
    with open(SCHEMA_DIR / f"{name}.yaml") as f:
        return yaml.safe_load(f)


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got '{value}'")


def _read_file(path: Path) -> Dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parse error in {path}: {e}") from e
    try:
        validate(instance=data, schema=load_schema("config"))
    except ValidationError as e:
        where = ".".join(str(p) for p in e.path)
        raise ConfigError(
            f"Invalid config {path}: {e.message}" + (f" (at {where})" if where else "")
        ) from e
    return data


def load_config(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Config:
    """
    Load configuration from YAML, then apply environment overrides.

    The file is taken from `path`, else $CARSERVICE_CONFIG, else
    ./carservice.yaml when it exists. Without a file the defaults apply
    (offline advice, local SQLite database).
    """
    env = os.environ if environ is None else environ

    if path is None and env.get("CARSERVICE_CONFIG"):
        path = env["CARSERVICE_CONFIG"]
    if path is None and DEFAULT_CONFIG_PATH.exists():
        path = DEFAULT_CONFIG_PATH

    data: Dict[str, Any] = {}
    if path is not None:
        data = _read_file(Path(path))
        logger.info("Loaded config from %s", path)

    ai = data.get("ai") or {}
    gemini = ai.get("gemini") or {}
    config = Config(
        ai_enabled=ai.get("enabled", False),
        gemini_api_key=gemini.get("apiKey"),
        gemini_model=gemini.get("model", DEFAULT_MODEL),
        gemini_timeout=gemini.get("timeoutSeconds", DEFAULT_TIMEOUT_SECONDS),
        database_url=(data.get("database") or {}).get("url", DEFAULT_DATABASE_URL),
        intervals=build_catalog(data.get("intervals")),
    )

    if env.get("CARSERVICE_AI_ENABLED"):
        config.ai_enabled = _parse_bool("CARSERVICE_AI_ENABLED", env["CARSERVICE_AI_ENABLED"])
    if env.get("GEMINI_API_KEY"):
        config.gemini_api_key = env["GEMINI_API_KEY"]
    if env.get("GEMINI_MODEL"):
        config.gemini_model = env["GEMINI_MODEL"]
    if env.get("CARSERVICE_DATABASE_URL"):
        config.database_url = env["CARSERVICE_DATABASE_URL"]

    if config.ai_enabled and not config.gemini_api_key:
        raise ConfigError("AI advice is enabled but no Gemini API key is configured (GEMINI_API_KEY)")
    return config


def build_provider(config: Config) -> AdvisoryProvider:
    """
    Compose the advisory provider for a configuration.

    AI disabled: the offline static provider. AI enabled: Gemini wrapped
    in the persisted cache.
    """
    if not config.ai_enabled:
        logger.info("AI advice disabled, using static provider")
        return StaticAdvisoryProvider()

    engine = make_engine(config.database_url)
    init_db(engine)
    store = SqlAdvisoryStore(make_session_factory(engine))
    gemini = GeminiAdvisoryProvider(
        config.gemini_api_key,
        model=config.gemini_model,
        timeout=config.gemini_timeout,
    )
    logger.info("AI advice enabled, model=%s, cache=%s", gemini.model, engine.url)
    return CachedAdvisoryProvider(store, gemini)
