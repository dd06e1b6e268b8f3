"""Configuration management for Rate Weather."""
import os
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from dotenv import load_dotenv
from rate_weather.utils.errors import ConfigurationError
from rate_weather.utils.logging import setup_logging
from rate_weather.utils.paths import find_project_root
import logging

logger = logging.getLogger(__name__)


def resolve_config_path(config_path: str = "config.yaml") -> Path:
    """Resolve the YAML config location (env override, then cwd, then project root)."""
    env_cfg = os.getenv("RATE_WEATHER_CONFIG")
    cfg_path = Path(env_cfg).expanduser() if env_cfg else Path(config_path)
    if not cfg_path.exists() and not cfg_path.is_absolute():
        candidate = find_project_root() / cfg_path
        if candidate.exists():
            cfg_path = candidate
    return cfg_path


class Config:
    """Application configuration."""

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load configuration from YAML and environment."""
        load_dotenv()

        if not self.config_path.exists():
            raise ConfigurationError(f"Config file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            try:
                self._config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}")

        if not self._config:
            raise ConfigurationError(f"Empty configuration file: {self.config_path}")

        self._validate()

        log_config = self._config.get('logging') or {}
        setup_logging(
            level=os.getenv('LOG_LEVEL', log_config.get('level', 'INFO')),
            log_file=log_config.get('file'),
            format_type=log_config.get('format', 'json'),
            enabled=log_config.get('enabled', True)
        )

        logger.info("Configuration loaded successfully")

    def _validate(self) -> None:
        """Validate required configuration sections."""
        if not isinstance(self._config, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {self.config_path}")

        for section in ['app', 'api']:
            if section not in self._config:
                raise ConfigurationError(f"Missing required config section: {section}")

        backend = self.get('cache.backend', 'memory')
        if backend not in ('memory', 'sql'):
            raise ConfigurationError(f"Unknown cache.backend: {backend}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-separated key.

        Args:
            key: Dot-separated key (e.g., "api.frankfurter.base_url")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def app_name(self) -> str:
        return self.get('app.name', 'Rate Weather')

    @property
    def app_version(self) -> str:
        return self.get('app.version', '0.1.0')

    @property
    def debug(self) -> bool:
        return self.get('app.debug', False)

    @property
    def database_path(self) -> str:
        return self.get('database.path', 'data/rate_weather.db')

    @property
    def cache_backend(self) -> str:
        return self.get('cache.backend', 'memory')

    @property
    def cache_freshness_seconds(self) -> float:
        """Maximum age of a cached value before it is refetched."""
        return float(self.get('cache.freshness_seconds', 600))

    @property
    def cache_key_prefix(self) -> str:
        return self.get('cache.key_prefix', 'rate_weather')

    @property
    def quote_currency(self) -> str:
        return self.get('rates.quote_currency', 'EUR')

    @property
    def history_days(self) -> int:
        return int(self.get('rates.history_days', 30))


# Global config instance
_config: Optional[Config] = None


def load_config(config_path: str = "config.yaml") -> Config:
    """Load and return global configuration instance."""
    global _config
    if _config is None:
        _config = Config(str(resolve_config_path(config_path)))
    return _config


def get_config() -> Config:
    """Get global configuration instance."""
    if _config is None:
        raise ConfigurationError("Configuration not loaded. Call load_config() first.")
    return _config


def reset_config() -> None:
    """Forget the global configuration (used by tests)."""
    global _config
    _config = None
