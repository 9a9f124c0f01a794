"""Unit tests for configuration loading."""

import logging

import pytest
import yaml

from src.utils.config_loader import ConfigLoader, load_config
from src.utils.logger import setup_logger


class TestConfigLoader:
    """Test cases for ConfigLoader class."""

    def test_load(self, config_file):
        """Test loading a valid configuration."""
        config = load_config(str(config_file))

        assert config['loader']['access'] == 'random'
        assert config['logging']['console_output'] is False

    def test_missing_file(self, tmp_path):
        """Test that a missing file without example raises."""
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / 'nope.yaml'))

    def test_example_fallback(self, tmp_path, sample_config):
        """Test falling back to the .example file."""
        example = tmp_path / 'config.yaml.example'
        example.write_text(yaml.safe_dump(sample_config), encoding='utf-8')

        loader = ConfigLoader(str(tmp_path / 'config.yaml'))
        config = loader.load()

        assert loader.config_path == example
        assert config['loader']['bmp_fallback'] is True

    def test_env_substitution(self, tmp_path, monkeypatch):
        """Test ${VAR} and ${VAR:default} substitution."""
        monkeypatch.setenv('TEST_VIPS_ACCESS', 'sequential')
        monkeypatch.delenv('TEST_VIPS_LEVEL', raising=False)

        path = tmp_path / 'config.yaml'
        path.write_text(
            "loader:\n"
            "  access: ${TEST_VIPS_ACCESS}\n"
            "logging:\n"
            "  level: ${TEST_VIPS_LEVEL:WARNING}\n",
            encoding='utf-8'
        )

        config = load_config(str(path))
        assert config['loader']['access'] == 'sequential'
        assert config['logging']['level'] == 'WARNING'

    def test_missing_section(self, tmp_path):
        """Test that a missing required section raises ValueError."""
        path = tmp_path / 'config.yaml'
        path.write_text("loader:\n  access: random\n", encoding='utf-8')

        with pytest.raises(ValueError, match='logging'):
            load_config(str(path))

    def test_invalid_access(self, tmp_path, sample_config):
        """Test that an unknown access mode raises ValueError."""
        sample_config['loader']['access'] = 'backwards'
        path = tmp_path / 'config.yaml'
        path.write_text(yaml.safe_dump(sample_config), encoding='utf-8')

        with pytest.raises(ValueError, match='access'):
            load_config(str(path))

    def test_invalid_log_level(self, tmp_path, sample_config):
        """Test that an unknown log level raises ValueError."""
        sample_config['logging']['level'] = 'LOUD'
        path = tmp_path / 'config.yaml'
        path.write_text(yaml.safe_dump(sample_config), encoding='utf-8')

        with pytest.raises(ValueError, match='log level'):
            load_config(str(path))

    def test_shipped_example_is_valid(self, monkeypatch):
        """Test that the example configuration in the repo loads."""
        from pathlib import Path

        monkeypatch.delenv('VIPS_HEADER_ACCESS', raising=False)
        monkeypatch.delenv('VIPS_HEADER_LOG_LEVEL', raising=False)
        example = Path(__file__).parents[2] / 'config' / 'config.yaml.example'
        config = load_config(str(example))

        assert config['loader']['access'] == 'random'
        assert config['logging']['level'] == 'INFO'


class TestSetupLogger:
    """Test cases for logger setup."""

    def test_file_handler(self, sample_config):
        """Test that logging writes to the configured file."""
        logger = setup_logger(sample_config)
        logging.getLogger('src.test').info("hello from test")

        for handler in logger.handlers:
            handler.flush()

        log_file = sample_config['logging']['file']
        with open(log_file, encoding='utf-8') as f:
            assert 'hello from test' in f.read()
        assert logger.level == logging.DEBUG

    def test_no_file(self, sample_config):
        """Test that an empty file setting disables file logging."""
        sample_config['logging']['file'] = ''
        logger = setup_logger(sample_config)

        assert logger.handlers == []
