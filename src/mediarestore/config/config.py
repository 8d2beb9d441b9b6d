"""Configuration management for mediarestore."""

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar, Final

from mediarestore.config.file_ops import write_text_file
from mediarestore.config.paths import default_config_path
from mediarestore.platform.logging import logger

VALIDITY_THRESHOLD_DEFAULT: Final[float] = 0.6
SEARCH_MAX_DEPTH_DEFAULT: Final[int] = 3
BATCH_SIZE_DEFAULT: Final[int] = 3
PROBE_TIMEOUT_SECONDS_DEFAULT: Final[float] = 10.0
TIMESTAMP_TOLERANCE_MS_DEFAULT: Final[int] = 2000


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion."""
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration."""

    # Log file path
    log_file: Path | None = _path_field()

    # Integrity validation
    validity_threshold: float = VALIDITY_THRESHOLD_DEFAULT
    timestamp_tolerance_ms: int = TIMESTAMP_TOLERANCE_MS_DEFAULT

    # Candidate search and batching
    search_max_depth: int = SEARCH_MAX_DEPTH_DEFAULT
    batch_size: int = BATCH_SIZE_DEFAULT

    # Filesystem probe
    probe_timeout_seconds: float = PROBE_TIMEOUT_SECONDS_DEFAULT

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value else None)

    def save(self, target: Path | None = None) -> None:
        """Save configuration to file."""
        config_dict = asdict(self)
        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        destination = target or default_config_path()
        try:
            write_text_file(destination, self._render_toml(config_dict))
            logger.info("Configuration saved to %s", destination)
        except Exception as e:
            logger.error("Failed to save configuration: %s", e)
            raise

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []
        lines.append("# mediarestore Configuration File")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/mediarestore.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Minimum confidence (0.0-1.0) for a file to count as a match")
        lines.append(f"validity_threshold = {self._format_toml_value(config['validity_threshold'])}")
        lines.append("")

        lines.append("# Modification times within this many milliseconds are treated as equal")
        lines.append(
            f"timestamp_tolerance_ms = {self._format_toml_value(config['timestamp_tolerance_ms'])}"
        )
        lines.append("")

        lines.append("# How many directory levels to descend when searching for moved files")
        lines.append(f"search_max_depth = {self._format_toml_value(config['search_max_depth'])}")
        lines.append("")

        lines.append("# How many references are checked concurrently")
        lines.append(f"batch_size = {self._format_toml_value(config['batch_size'])}")
        lines.append("")

        lines.append("# Seconds before a single filesystem call is abandoned")
        lines.append(
            f"probe_timeout_seconds = {self._format_toml_value(config['probe_timeout_seconds'])}"
        )
        lines.append("")
        return "\n".join(lines)

    @staticmethod
    def _format_toml_value(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from the default location.

        Returns:
            Config: Loaded configuration object.
        """
        if cls._instance is not None:
            return cls._instance

        config_file = default_config_path()

        if config_file.exists():
            try:
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.error("Failed to load configuration: %s", e)
                raise

            known = {f.name for f in fields(cls)}
            unknown = sorted(set(config_dict) - known)
            if unknown:
                logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
            instance = cls(**{k: v for k, v in config_dict.items() if k in known})
            logger.debug("Configuration loaded from %s", config_file)
        else:
            instance = cls()
            try:
                instance.save(config_file)
            except OSError:
                logger.warning("Running with defaults; could not create %s", config_file)

        cls._instance = instance
        cls._loaded_from = config_file
        return instance


config = Config.load()
