"""Configuration management for CMYM."""

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from cmym.config.file_ops import write_text_file
from cmym.config.paths import default_config_path
from cmym.platform.logging import logger

GAIN_EXECUTABLE_DEFAULT = "aacgain"
COVER_ART_SEARCH_URL_DEFAULT = "https://itunes.apple.com/search"
COVER_ART_TIMEOUT_DEFAULT = 10.0
RENAME_TEMPLATE_DEFAULT = "{album_artist}/{album}/{track:02d} {title}{ext}"


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion."""
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration."""

    # Log file path
    log_file: Path | None = _path_field()

    # External loudness analysis
    gain_executable: str = GAIN_EXECUTABLE_DEFAULT
    gain_workers: int = 0

    # Cover art lookup
    cover_art_remote: bool = True
    cover_art_search_url: str = COVER_ART_SEARCH_URL_DEFAULT
    cover_art_timeout: float = COVER_ART_TIMEOUT_DEFAULT

    # Write-back rename phase
    rename_template: str = RENAME_TEMPLATE_DEFAULT

    # Singleton instance
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

    def save(self) -> None:
        """Save configuration to file."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        try:
            target = default_config_path()
            write_text_file(target, self._render_toml(config_dict))
            logger.info("Configuration saved to %s", target)
        except Exception as e:
            logger.error("Failed to save configuration: %s", e)
            raise

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# CMYM Configuration File")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/cmym.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Loudness analysis executable and worker count (0 = one per core)")
        lines.append(f"gain_executable = {self._format_toml_value(config['gain_executable'])}")
        lines.append(f"gain_workers = {self._format_toml_value(config['gain_workers'])}")
        lines.append("")

        lines.append("# Remote cover art search (set to false to work offline)")
        lines.append(f"cover_art_remote = {self._format_toml_value(config['cover_art_remote'])}")
        lines.append(
            f"cover_art_search_url = {self._format_toml_value(config['cover_art_search_url'])}"
        )
        lines.append(f"cover_art_timeout = {self._format_toml_value(config['cover_art_timeout'])}")
        lines.append("")

        lines.append("# Destination template used by the rename phase")
        lines.append(f"rename_template = {self._format_toml_value(config['rename_template'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            return f'"{str(value)}"'
        return str(value)

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file, creating a default one when missing."""
        if cls._instance is not None:
            return cls._instance

        config_file = default_config_path()

        try:
            if config_file.exists():
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)

                known = {f.name for f in fields(cls)}
                unknown = sorted(set(config_dict) - known)
                if unknown:
                    logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
                config_dict = {key: value for key, value in config_dict.items() if key in known}

                logger.debug("Configuration loaded from %s", config_file)
                instance = cls(**config_dict)
                cls._instance = instance
                cls._loaded_from = config_file
                return instance

            config = cls()
            config.save()
            logger.info("Created default configuration at %s", config_file)
            cls._instance = config
            cls._loaded_from = config_file
            return config

        except Exception as e:
            logger.error("Failed to load configuration: %s", e)
            raise


# Global configuration instance
config = Config.load()
