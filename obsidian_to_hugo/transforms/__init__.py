"""Processor factories for obsidian-to-hugo."""

from typing import List

from obsidian_to_hugo.transforms.frontmatter import fallback_date, fallback_slug, fallback_title
from obsidian_to_hugo.transforms.links import wikilinks


def default_frontmatter_processors() -> List:
    """Title, then slug (derived from the title), then date."""
    return [fallback_title(), fallback_slug(), fallback_date()]


def default_content_processors() -> List:
    return [wikilinks()]
