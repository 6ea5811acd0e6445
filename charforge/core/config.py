"""
Configuration management for charforge.

Loads settings from environment variables (and an optional .env file)
with defaults suitable for local development.
"""

import os
from pathlib import Path
from typing import Optional
import logging

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

SUPPORTED_EDITIONS = ('2014', '2024')


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


class Config:
    """
    Centralized configuration for charforge.

    Example:
        config = Config()
        print(config.rules_api_url)     # https://www.dnd5eapi.co/api
        print(config.caster_cache_ttl)  # 3600.0
    """

    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            env_file: Optional path to .env file. If None, auto-discovers .env
                     in the project root or skips if not found.
        """
        if env_file:
            load_dotenv(env_file)
            logger.info(f"Loaded configuration from {env_file}")
        else:
            project_root = Path(__file__).parent.parent.parent
            env_path = project_root / '.env'
            if env_path.exists():
                load_dotenv(env_path)
                logger.info(f"Loaded configuration from {env_path}")
            else:
                logger.debug("No .env file found, using environment variables and defaults")

        # === Server Settings ===
        self.host = os.getenv('HOST', '0.0.0.0')
        self.port = int(os.getenv('PORT', '5000'))
        self.debug = _env_bool('DEBUG', 'False')

        # === Logging ===
        self.log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
        self.log_file = os.getenv('LOG_FILE', None)

        # === Rules ===
        self.default_edition = os.getenv('DEFAULT_EDITION', '2014')

        # === Rules content service (optional enrichment) ===
        self.rules_api_url = os.getenv('RULES_API_URL', 'https://www.dnd5eapi.co/api').rstrip('/')
        self.rules_api_timeout = float(os.getenv('RULES_API_TIMEOUT', '5.0'))
        self.rules_api_enabled = _env_bool('RULES_API_ENABLED', 'True')
        self.caster_cache_ttl = float(os.getenv('CASTER_CACHE_TTL', '3600'))
        self.caster_cache_size = int(os.getenv('CASTER_CACHE_SIZE', '256'))

    def validate(self) -> bool:
        """
        Validate configuration and log warnings for bad values.

        Returns:
            True if config is valid, False if a value is unusable
        """
        valid = True

        if self.default_edition not in SUPPORTED_EDITIONS:
            logger.error(
                f"Invalid DEFAULT_EDITION: {self.default_edition}. "
                f"Must be one of {', '.join(SUPPORTED_EDITIONS)}"
            )
            valid = False

        if self.log_level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            logger.error(f"Invalid LOG_LEVEL: {self.log_level}")
            valid = False

        if self.rules_api_timeout <= 0:
            logger.warning("RULES_API_TIMEOUT must be positive; remote caster lookups will fail fast")

        if self.caster_cache_ttl <= 0:
            logger.warning("CASTER_CACHE_TTL is not positive; remote caster lookups will never be cached")

        if not self.rules_api_enabled:
            logger.info("Rules content service disabled, using built-in caster tables only")

        return valid

    def __repr__(self) -> str:
        return (
            f"Config("
            f"default_edition={self.default_edition}, "
            f"rules_api_url={self.rules_api_url}, "
            f"rules_api_enabled={self.rules_api_enabled}, "
            f"host={self.host}, "
            f"port={self.port}, "
            f"debug={self.debug})"
        )


# Global config instance (lazy-loaded)
_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global config instance (singleton pattern).

    Example:
        from charforge.core.config import get_config
        config = get_config()
        print(config.default_edition)
    """
    global _config
    if _config is None:
        _config = Config()
        _config.validate()
    return _config


__all__ = ['Config', 'get_config', 'SUPPORTED_EDITIONS']
