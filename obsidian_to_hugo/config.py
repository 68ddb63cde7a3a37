"""Converter configuration and construction."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from obsidian_to_hugo.core.models import ConfigError, ConvertContext
from obsidian_to_hugo.core.timestamps import git_last_modified
from obsidian_to_hugo.core.walker import VaultConverter
from obsidian_to_hugo.transforms import default_content_processors, default_frontmatter_processors


@dataclass
class ConverterConfig:
    """Settings for a conversion run.

    Can be loaded from a YAML file; command line flags override it.
    """
    vault_path: Optional[Path] = None
    content_path: Optional[Path] = None
    clear_output_dir: bool = False
    max_workers: Optional[int] = None
    git_dates: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConverterConfig":
        """Build a config from a plain mapping.

        Raises:
            ConfigError: On unknown keys or values of the wrong type
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        config = cls()
        for key in ('vault_path', 'content_path'):
            if data.get(key) is not None:
                setattr(config, key, Path(str(data[key])).expanduser())

        for key in ('clear_output_dir', 'git_dates'):
            if key in data:
                if not isinstance(data[key], bool):
                    raise ConfigError(f"{key} must be true or false")
                setattr(config, key, data[key])

        max_workers = data.get('max_workers')
        if max_workers is not None:
            if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
                raise ConfigError("max_workers must be a positive integer")
            config.max_workers = max_workers

        return config

    def validate(self) -> None:
        """Check that both required paths are set.

        Raises:
            ConfigError: If the vault or content path is missing
        """
        if self.vault_path is None:
            raise ConfigError("Obsidian vault path is required")
        if self.content_path is None:
            raise ConfigError("Hugo content path is required")


def load_config(path: Path) -> ConverterConfig:
    """Load a ConverterConfig from a YAML file.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping
    """
    try:
        data = yaml.safe_load(Path(path).read_text(encoding='utf-8'))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    return ConverterConfig.from_dict(data)


def create_converter_from_config(config: ConverterConfig) -> VaultConverter:
    """Create a VaultConverter wired with the default processors.

    Raises:
        ConfigError: If a required path is missing
    """
    config.validate()

    context = ConvertContext(
        vault_dir=config.vault_path,
        output_dir=config.content_path,
        frontmatter_processors=default_frontmatter_processors(),
        content_processors=default_content_processors(),
        timestamp_lookup=git_last_modified if config.git_dates else None,
        clear_output_dir=config.clear_output_dir,
        max_workers=config.max_workers,
    )
    return VaultConverter(context)
