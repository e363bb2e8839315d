"""Configuration loading from CLI args, env vars, and optional YAML file."""

import logging
import os
from dataclasses import dataclass, field

import yaml

logger = logging.getLogger(__name__)

DEFAULT_HOSTS = ["https://localhost:9200"]
DEFAULT_INDEX = "filebeat-7.12.1-2021.07.14-000001"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    pass


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


def _parse_hosts(value) -> list[str]:
    if isinstance(value, str):
        return [h.strip() for h in value.split(",") if h.strip()]
    return [str(h) for h in value]


@dataclass(frozen=True)
class SearchConfig:
    hosts: list[str] = field(default_factory=lambda: list(DEFAULT_HOSTS))
    index: str = DEFAULT_INDEX
    username: str | None = None
    password: str | None = None
    ca_certs: str | None = None
    verify_certs: bool = True
    request_timeout: float = 30.0
    color: bool = True
    log_level: str = "WARNING"
    show_summary: bool = True


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    logger.info("Loaded YAML config from %s", path)
    return data


def _pick(cli_value, env_name: str, yaml_value, default):
    """CLI flag > environment variable > YAML > default."""
    if cli_value is not None:
        return cli_value
    env_value = os.environ.get(env_name)
    if env_value is not None:
        return env_value
    if yaml_value is not None:
        return yaml_value
    return default


def load_config(cli_args, yaml_data: dict) -> SearchConfig:
    """Build SearchConfig from CLI args, env vars, and parsed YAML data."""
    es = yaml_data.get("elasticsearch") or {}
    search = yaml_data.get("search") or {}
    output = yaml_data.get("output") or {}

    hosts = _pick(getattr(cli_args, "hosts", None), "ES_HOSTS",
                  es.get("hosts"), DEFAULT_HOSTS)
    index = _pick(getattr(cli_args, "index", None), "ES_INDEX",
                  search.get("index"), DEFAULT_INDEX)
    timeout = _pick(None, "ES_REQUEST_TIMEOUT",
                    es.get("request_timeout"), SearchConfig.request_timeout)

    color = output.get("color", SearchConfig.color)
    if getattr(cli_args, "no_color", False):
        color = False
    show_summary = output.get("show_summary", SearchConfig.show_summary)
    if getattr(cli_args, "no_summary", False):
        show_summary = False

    log_level = _pick(None, "LOG_LEVEL", output.get("log_level"), SearchConfig.log_level)
    if getattr(cli_args, "verbose", False):
        log_level = "DEBUG"

    try:
        request_timeout = float(timeout)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"request_timeout must be a number, got {timeout!r}") from e

    log_level = str(log_level).upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"unknown log level {log_level!r}")

    hosts = _parse_hosts(hosts)
    if not hosts:
        raise ConfigError("at least one Elasticsearch host is required")
    if not index:
        raise ConfigError("a target index is required")

    return SearchConfig(
        hosts=hosts,
        index=str(index),
        username=_pick(None, "ES_USERNAME", es.get("username"), None),
        password=_pick(None, "ES_PASSWORD", es.get("password"), None),
        ca_certs=_pick(None, "ES_CA_CERTS", es.get("ca_certs"), None),
        verify_certs=_parse_bool(_pick(None, "ES_VERIFY_CERTS",
                                       es.get("verify_certs"), True)),
        request_timeout=request_timeout,
        color=_parse_bool(color),
        log_level=log_level,
        show_summary=_parse_bool(show_summary),
    )
