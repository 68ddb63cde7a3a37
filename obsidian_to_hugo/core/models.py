"""Data models for obsidian-to-hugo."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

# Returns the last-modified time of a path, or None when unknown.
TimestampLookup = Callable[[Path], Optional[datetime]]

FrontMatterProcessor = Callable[["ConvertContext", "NoteFile", "FrontMatter"], None]
ContentProcessor = Callable[["ConvertContext", "NoteFile", str], str]


class FrontMatterError(ValueError):
    """Raised when a note's front matter block cannot be parsed."""


class ConfigError(ValueError):
    """Raised for invalid or incomplete converter configuration."""


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [_as_str(item) for item in value if item is not None]
    if isinstance(value, (str, int, float)):
        return [str(value)]
    raise FrontMatterError(f"Expected a list of strings, got {type(value).__name__}")


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, dict)):
        raise FrontMatterError(f"Expected a string, got {type(value).__name__}")
    return str(value)


# YAML 1.1 boolean spellings
_TRUE_WORDS = {'true', 'yes', 'y', 'on'}
_FALSE_WORDS = {'false', 'no', 'n', 'off'}


def _as_bool(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise FrontMatterError(f"Expected a boolean for draft, got {value!r}")


@dataclass
class FrontMatter:
    """Hugo front matter for a single note.

    Field order is the order fields are written back out.
    """
    title: str = ""
    date: str = ""
    draft: bool = False
    tags: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    slug: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FrontMatter":
        """Build front matter from a parsed YAML mapping.

        Unknown keys are dropped. Tags and categories may be given as a
        single string; null entries in them are skipped.

        Raises:
            FrontMatterError: If a known key holds a value of the wrong shape
        """
        return cls(
            title=_as_str(data.get('title')),
            date=_as_str(data.get('date')),
            draft=_as_bool(data.get('draft')),
            tags=_as_list(data.get('tags')),
            categories=_as_list(data.get('categories')),
            slug=_as_str(data.get('slug')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class NoteFile:
    """A single file being converted.

    Created when the walker reaches a file and discarded once it is written.
    """
    source_path: Path
    dest_path: Path
    contents: bytes = b""

    @property
    def name(self) -> str:
        return self.source_path.name

    @property
    def title(self) -> str:
        """Title candidate from the file name.

        The extension is stripped and '#' removed, since it would otherwise
        end up in a ref target.
        """
        return self.source_path.stem.replace('#', '')


@dataclass
class ConvertContext:
    """Everything a single conversion run needs.

    Passed to every processor. Holds no state shared with other runs.
    """
    vault_dir: Path
    output_dir: Path
    frontmatter_processors: List[FrontMatterProcessor] = field(default_factory=list)
    content_processors: List[ContentProcessor] = field(default_factory=list)
    timestamp_lookup: Optional[TimestampLookup] = None
    clear_output_dir: bool = False
    max_workers: Optional[int] = None

    def __post_init__(self):
        self.vault_dir = Path(self.vault_dir)
        self.output_dir = Path(self.output_dir)


@dataclass
class FileError:
    """An error that stopped a single file from converting."""
    path: Path
    error: str


@dataclass
class ConvertResult:
    """Result of a conversion run."""
    converted: List[Path] = field(default_factory=list)
    copied: List[Path] = field(default_factory=list)
    failures: List[FileError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
