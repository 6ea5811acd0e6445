"""
Unit tests for configuration and logging setup.
"""

import logging

from charforge.core.config import Config
from charforge.core.logging_config import ColoredFormatter, setup_logging


class TestConfig:
    """Test environment-driven configuration."""

    def test_defaults(self, config):
        assert config.host == '0.0.0.0'
        assert config.port == 5000
        assert config.debug is False
        assert config.log_level == 'INFO'
        assert config.default_edition == '2014'
        assert config.rules_api_url == 'https://www.dnd5eapi.co/api'
        assert config.rules_api_timeout == 5.0
        assert config.rules_api_enabled is True
        assert config.caster_cache_ttl == 3600
        assert config.caster_cache_size == 256
        assert config.validate() is True

    def test_environment_overrides(self, config, monkeypatch):
        monkeypatch.setenv('PORT', '8080')
        monkeypatch.setenv('DEBUG', 'yes')
        monkeypatch.setenv('DEFAULT_EDITION', '2024')
        monkeypatch.setenv('RULES_API_URL', 'http://localhost:3000/api/')
        monkeypatch.setenv('RULES_API_ENABLED', 'false')
        monkeypatch.setenv('CASTER_CACHE_TTL', '60')

        config = Config()

        assert config.port == 8080
        assert config.debug is True
        assert config.default_edition == '2024'
        assert config.rules_api_url == 'http://localhost:3000/api'
        assert config.rules_api_enabled is False
        assert config.caster_cache_ttl == 60

    def test_env_file(self, config, tmp_path, monkeypatch):
        env_file = tmp_path / '.env'
        env_file.write_text('DEFAULT_EDITION=2024\nCASTER_CACHE_SIZE=16\n')
        # load_dotenv writes os.environ directly; register the names so teardown removes them
        for name in ('DEFAULT_EDITION', 'CASTER_CACHE_SIZE'):
            monkeypatch.setenv(name, '')
            monkeypatch.delenv(name)

        config = Config(env_file=str(env_file))

        assert config.default_edition == '2024'
        assert config.caster_cache_size == 16

    def test_validate_rejects_bad_values(self, config):
        config.default_edition = '3.5'
        assert config.validate() is False

        config.default_edition = '2014'
        config.log_level = 'LOUD'
        assert config.validate() is False

    def test_repr(self, config):
        assert 'default_edition=2014' in repr(config)


class TestLogging:
    """Test logging setup."""

    def test_setup_logging_level(self):
        root = logging.getLogger()
        saved_level, saved_handlers = root.level, list(root.handlers)
        try:
            logger = setup_logging(level='WARNING', use_colors=False)

            assert logger.level == logging.WARNING
            assert len(logger.handlers) == 1
            assert logging.getLogger('httpx').level == logging.WARNING
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_colored_formatter_restores_levelname(self):
        formatter = ColoredFormatter('%(levelname)s %(message)s')
        record = logging.LogRecord('charforge', logging.WARNING, __file__, 1, 'careful', None, None)

        output = formatter.format(record)

        assert 'careful' in output
        assert record.levelname == 'WARNING'
