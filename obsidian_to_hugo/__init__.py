"""
obsidian-to-hugo - Convert an Obsidian vault into Hugo content

Mirrors a vault's directory tree into a Hugo content directory with:
- Wikilink conversion to Hugo ref shortcodes
- Front matter normalization (title, slug and date fallbacks)
- Verbatim copying of everything that is not a note
"""

__version__ = "0.1.0"

from obsidian_to_hugo.core.models import (
    ConfigError,
    ConvertContext,
    ConvertResult,
    FileError,
    FrontMatter,
    FrontMatterError,
    NoteFile,
)
from obsidian_to_hugo.core.processor import NoteConverter
from obsidian_to_hugo.core.walker import VaultConverter, convert
from obsidian_to_hugo.config import ConverterConfig, create_converter_from_config, load_config

__all__ = [
    "ConfigError",
    "ConvertContext",
    "ConvertResult",
    "FileError",
    "FrontMatter",
    "FrontMatterError",
    "NoteFile",
    "NoteConverter",
    "VaultConverter",
    "convert",
    "ConverterConfig",
    "create_converter_from_config",
    "load_config",
]
