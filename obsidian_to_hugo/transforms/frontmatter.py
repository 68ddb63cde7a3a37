"""Front matter processor factories for obsidian-to-hugo.

Each factory returns a processor (context, file, front_matter) -> None that
fills in one field when it is empty. They depend on each other's output, so
the order they are registered in matters: the slug is derived from the
title, which must already be resolved.
"""

import re
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from obsidian_to_hugo.core.models import ConvertContext, FrontMatter, FrontMatterProcessor, NoteFile

SLUGIFY_PATTERN = re.compile(r'[^a-zA-Z0-9]')


def slugify(title: str) -> str:
    """Derive a URL-safe slug from a title.

    Every character outside [A-Za-z0-9] becomes '-', and the result is
    lowercased. Leading and trailing '-' are trimmed unless nothing would
    be left.

    >>> slugify("My Title!")
    'my-title'
    """
    slug = SLUGIFY_PATTERN.sub('-', title).lower()
    return slug.strip('-') or slug


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as ISO-8601 with a UTC offset.

    Naive datetimes are taken to be local time.
    """
    return moment.astimezone().isoformat(timespec='seconds')


def fallback_title() -> "FrontMatterProcessor":
    """Create a processor that uses the file name when the title is empty."""
    def process(context: "ConvertContext", file: "NoteFile", fm: "FrontMatter") -> None:
        if not fm.title:
            fm.title = file.title
    return process


def fallback_slug() -> "FrontMatterProcessor":
    """Create a processor that slugifies the title when the slug is empty."""
    def process(context: "ConvertContext", file: "NoteFile", fm: "FrontMatter") -> None:
        if not fm.slug:
            fm.slug = slugify(fm.title)
    return process


def fallback_date() -> "FrontMatterProcessor":
    """Create a processor that fills in an empty date.

    Tries, in order:
    1. context.timestamp_lookup for the source file (usually git history)
    2. The source file's modification time
    3. The current time

    The lookup is best-effort: returning None or raising moves on to the
    next source.

    Returns:
        A processor (context, file, front_matter) -> None
    """
    def process(context: "ConvertContext", file: "NoteFile", fm: "FrontMatter") -> None:
        if fm.date:
            return

        moment = None
        if context.timestamp_lookup is not None:
            try:
                moment = context.timestamp_lookup(file.source_path)
            except Exception:
                moment = None

        if moment is None:
            try:
                moment = datetime.fromtimestamp(file.source_path.stat().st_mtime)
            except OSError:
                moment = None

        if moment is None:
            moment = datetime.now()

        fm.date = format_timestamp(moment)
    return process
