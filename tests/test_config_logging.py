"""Tests for config and logging."""

import json
import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from gestao_docs.config import GestaoConfig, ImportConfig, StorageConfig
from gestao_docs.exceptions import ConfigurationError
from gestao_docs.logging import JsonFormatter, get_logger, setup_logging

ENV_VARS = [
    "GESTAO_DATA_DIR",
    "GESTAO_PRETTY_JSON",
    "GESTAO_HEADER_ROW",
    "CASAS_HEADER_ROW",
    "GESTAO_VISTA_HEADER_ROW",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


def _clean_env() -> dict[str, str]:
    return {k: v for k, v in os.environ.items() if k not in ENV_VARS}


class TestStorageConfig:
    """Tests for StorageConfig."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = StorageConfig()

        assert config.data_dir == Path("data")
        assert config.pretty_json is False


class TestImportConfig:
    """Tests for ImportConfig."""

    def test_default_values(self) -> None:
        """Test default header rows of each export."""
        config = ImportConfig()

        assert config.gestao_header_row == 14
        assert config.casas_header_row == 15
        assert config.gestao_vista_header_row == 10


class TestGestaoConfig:
    """Tests for GestaoConfig."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = GestaoConfig()

        assert isinstance(config.storage, StorageConfig)
        assert isinstance(config.imports, ImportConfig)
        assert config.log_level == "INFO"
        assert config.log_format == "standard"

    def test_from_env_default(self) -> None:
        """Test creating config from environment with defaults."""
        with patch.dict(os.environ, _clean_env(), clear=True):
            config = GestaoConfig.from_env()

        assert config.storage.data_dir == Path("data")
        assert config.storage.pretty_json is False
        assert config.imports.gestao_header_row == 14
        assert config.log_level == "INFO"

    def test_from_env_custom(self) -> None:
        """Test creating config from custom environment variables."""
        env = {
            "GESTAO_DATA_DIR": "/srv/gestao",
            "GESTAO_PRETTY_JSON": "true",
            "GESTAO_HEADER_ROW": "0",
            "CASAS_HEADER_ROW": "3",
            "GESTAO_VISTA_HEADER_ROW": "5",
            "LOG_LEVEL": "DEBUG",
            "LOG_FORMAT": "json",
        }
        with patch.dict(os.environ, env):
            config = GestaoConfig.from_env()

        assert config.storage.data_dir == Path("/srv/gestao")
        assert config.storage.pretty_json is True
        assert config.imports.gestao_header_row == 0
        assert config.imports.casas_header_row == 3
        assert config.imports.gestao_vista_header_row == 5
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    @pytest.mark.parametrize("value", ["abc", "-1"])
    def test_from_env_invalid_header_row(self, value: str) -> None:
        """Test invalid header rows raise ConfigurationError."""
        with patch.dict(os.environ, {"GESTAO_HEADER_ROW": value}):
            with pytest.raises(ConfigurationError, match="GESTAO_HEADER_ROW"):
                GestaoConfig.from_env()


class TestLogging:
    """Tests for logging setup."""

    def test_setup_standard(self) -> None:
        """Test standard formatter setup."""
        setup_logging(level="DEBUG")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("openpyxl").level == logging.WARNING

    def test_setup_json(self) -> None:
        """Test JSON formatter setup."""
        setup_logging(level="INFO", format_type="json")

        root = logging.getLogger()
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_invalid_level_defaults_to_info(self) -> None:
        """Test unknown level names fall back to INFO."""
        setup_logging(level="NOPE")

        assert logging.getLogger().level == logging.INFO

    def test_json_formatter(self) -> None:
        """Test JSON output keeps accents."""
        record = logging.LogRecord(
            name="gestao_docs.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Casa %s importada",
            args=("JARDIM AMÉRICA",),
            exc_info=None,
        )

        output = JsonFormatter().format(record)
        data = json.loads(output)

        assert data["level"] == "INFO"
        assert data["logger"] == "gestao_docs.test"
        assert data["message"] == "Casa JARDIM AMÉRICA importada"
        assert "AMÉRICA" in output
        assert "timestamp" in data

    def test_json_formatter_exception(self) -> None:
        """Test exception info is included."""
        try:
            raise ValueError("boom")
        except ValueError:
            import sys

            exc_info = sys.exc_info()

        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, exc_info)
        data = json.loads(JsonFormatter().format(record))

        assert "ValueError: boom" in data["exception"]

    def test_get_logger(self) -> None:
        """Test get_logger returns a named logger."""
        logger = get_logger("gestao_docs.sample")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "gestao_docs.sample"
