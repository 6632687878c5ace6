"""Configuration management for gestao-docs."""

from dataclasses import dataclass, field
from pathlib import Path

from gestao_docs.exceptions import ConfigurationError


@dataclass
class StorageConfig:
    """Local storage configuration."""

    data_dir: Path = field(default_factory=lambda: Path("data"))
    pretty_json: bool = False


@dataclass
class ImportConfig:
    """Spreadsheet layout configuration.

    Header rows are the number of rows skipped before the header row of
    each export (the management sheet header sits on row 15).
    """

    gestao_header_row: int = 14
    casas_header_row: int = 15
    gestao_vista_header_row: int = 10


@dataclass
class GestaoConfig:
    """Main configuration for gestao-docs."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    imports: ImportConfig = field(default_factory=ImportConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "GestaoConfig":
        """Create config from environment variables."""
        import os

        storage = StorageConfig(
            data_dir=Path(os.getenv("GESTAO_DATA_DIR", "data")),
            pretty_json=os.getenv("GESTAO_PRETTY_JSON", "false").lower() == "true",
        )

        imports = ImportConfig(
            gestao_header_row=_env_int("GESTAO_HEADER_ROW", 14),
            casas_header_row=_env_int("CASAS_HEADER_ROW", 15),
            gestao_vista_header_row=_env_int("GESTAO_VISTA_HEADER_ROW", 10),
        )

        return cls(
            storage=storage,
            imports=imports,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _env_int(name: str, default: int) -> int:
    """Read a non-negative integer from the environment."""
    import os

    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
    if value < 0:
        raise ConfigurationError(f"{name} must be non-negative, got {value}")
    return value
