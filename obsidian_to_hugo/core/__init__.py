"""Core components for obsidian-to-hugo."""

from obsidian_to_hugo.core.models import (
    ConfigError,
    ConvertContext,
    ConvertResult,
    FileError,
    FrontMatter,
    FrontMatterError,
    NoteFile,
)
from obsidian_to_hugo.core.processor import NoteConverter, render_frontmatter, split_frontmatter
from obsidian_to_hugo.core.timestamps import git_last_modified
from obsidian_to_hugo.core.walker import VaultConverter, convert

__all__ = [
    "ConfigError",
    "ConvertContext",
    "ConvertResult",
    "FileError",
    "FrontMatter",
    "FrontMatterError",
    "NoteFile",
    "NoteConverter",
    "render_frontmatter",
    "split_frontmatter",
    "git_last_modified",
    "VaultConverter",
    "convert",
]
