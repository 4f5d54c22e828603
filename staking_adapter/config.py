"""
Configuration management for Staking Adapter

Loads settings from environment variables and .env file.
Per-chain provider configuration lives in a JSON file keyed by chain id.
Includes logging configuration with file output and correlation ID support.
"""

import json
import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError


def _load_env_file():
    """Load .env file from project root"""
    current = Path(__file__).parent.parent  # staking_adapter package parent
    env_file = current / ".env"

    if env_file.exists():
        load_dotenv(env_file)


# Load .env on module import
_load_env_file()


def _get_env(key: str, default: Optional[str] = "") -> Optional[str]:
    """Get environment variable with default"""
    value = os.getenv(key)
    if value is None:
        return default
    return value


def _get_env_float(key: str, default: float) -> float:
    """Get environment variable as float"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid float value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_int(key: str, default: int) -> int:
    """Get environment variable as int"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid int value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as bool"""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


@dataclass
class HttpConfig:
    """Outbound HTTP / RPC settings shared by all chain adapters"""
    # Every outbound call is bounded by this timeout
    timeout_seconds: float = field(default_factory=lambda: _get_env_float("STAKING_HTTP_TIMEOUT", 30.0))
    user_agent: str = field(default_factory=lambda: _get_env("STAKING_USER_AGENT", "staking-adapter"))


@dataclass
class ProvidersConfig:
    """Location of the per-chain provider configuration file"""
    config_file: str = field(
        default_factory=lambda: _get_env("STAKING_PROVIDERS_FILE", "config/providers.json")
    )


@dataclass
class LoggingConfig:
    """
    Logging configuration with optional file output.

    Environment variables:
        LOG_FILE: Path to log file (empty disables file logging)
        LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
        LOG_FORMAT: Custom log format string
        LOG_CONSOLE: Enable console output (default: true)
        LOG_MAX_BYTES: Max log file size before rotation (default: 10MB)
        LOG_BACKUP_COUNT: Number of backup files to keep (default: 5)
    """
    log_file: str = field(default_factory=lambda: _get_env("LOG_FILE", ""))
    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: _get_env(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    console_output: bool = field(default_factory=lambda: _get_env_bool("LOG_CONSOLE", True))
    max_bytes: int = field(default_factory=lambda: _get_env_int("LOG_MAX_BYTES", 10 * 1024 * 1024))  # 10MB
    backup_count: int = field(default_factory=lambda: _get_env_int("LOG_BACKUP_COUNT", 5))

    @property
    def level(self) -> int:
        """Get numeric log level"""
        return getattr(logging, self.log_level.upper(), logging.INFO)


@dataclass
class Config:
    """
    Main configuration container

    Usage:
        from staking_adapter.config import config

        print(config.http.timeout_seconds)
    """
    http: HttpConfig = field(default_factory=HttpConfig)
    providers: ProvidersConfig = field(default_factory=ProvidersConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global config instance
config = Config()


def load_provider_configs(path: Optional[str] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load the chain id -> provider config mapping from JSON

    Args:
        path: JSON file path (defaults to config.providers.config_file)

    Returns:
        Mapping of chain id to that chain's provider config

    Raises:
        ConfigurationError: If the file is missing or not a JSON object of objects

    Example file:
        {
            "mantra-dukong-1": {"rpcUrl": "https://rpc.dukong.mantrachain.io"},
            "stacks": {
                "nodeUrl": "https://api.mainnet.hiro.so",
                "pool": {"address": "SP000000000000000000002Q6VF78", "name": "pox-4"}
            }
        }
    """
    file_path = Path(path or config.providers.config_file)
    if not file_path.exists():
        raise ConfigurationError.missing(f"provider config file {file_path}")

    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError.invalid(str(file_path), f"invalid JSON: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError.invalid(str(file_path), "top level must be an object")
    for chain_id, chain_config in data.items():
        if not isinstance(chain_config, dict):
            raise ConfigurationError.invalid(chain_id, "chain config must be an object")
    return data


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "staking_adapter",
) -> logging.Logger:
    """
    Set up logging based on configuration.

    Creates handlers for file and/or console output with optional rotation.
    The log file directory is created automatically if it doesn't exist.

    Args:
        log_config: Logging configuration (uses global config if None)
        logger_name: Name of the logger to configure (default: staking_adapter)

    Returns:
        Configured logger instance
    """
    if log_config is None:
        log_config = config.logging

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)

    # Close before removing to release file handles on reload
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(log_config.log_format)

    handlers: List[logging.Handler] = []

    if log_config.log_file:
        from logging.handlers import RotatingFileHandler

        log_path = Path(log_config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_config.log_file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding='utf-8',
        )
        file_handler.setLevel(log_config.level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if log_config.console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_config.level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    for handler in handlers:
        logger.addHandler(handler)

    if log_config.log_file:
        logger.info(f"Logging initialized: file={log_config.log_file}, level={log_config.log_level}")

    return logger
