"""Wikilink rewriting for Hugo.

Obsidian links look like [[Note]] or [[Note#Heading]]. Hugo wants a
markdown link whose target is a ref shortcode.
"""

import re
from typing import Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from obsidian_to_hugo.core.models import ContentProcessor, ConvertContext, NoteFile

LinkFormat = Callable[[str, str], str]

WIKILINK_PATTERN = re.compile(r'\[\[(.*?)\]\]')


def hugo_ref() -> LinkFormat:
    """Create a link format producing Hugo ref shortcodes.

    Returns:
        A function (text, target) -> '[text]({{< ref "target" >}})'
    """
    def link(text: str, target: str) -> str:
        return f'[{text}]({{{{< ref "{target}" >}}}})'
    return link


def heading_anchor(heading: str) -> str:
    """Turn a heading into the anchor Hugo generates for it."""
    return heading.replace(' ', '-').lower()


def rewrite_wikilinks(text: str, link_format: Optional[LinkFormat] = None) -> str:
    """Rewrite every wikilink in text.

    Only the first '#' splits page from heading; anything after it,
    including further '#', belongs to the heading.

    Args:
        text: Note body
        link_format: Formats (display text, target). Defaults to hugo_ref()

    Returns:
        Text with all wikilinks replaced
    """
    link_format = link_format or hugo_ref()

    def replace_link(match: re.Match) -> str:
        target = match.group(1)
        if '#' in target:
            page, heading = target.split('#', 1)
            return link_format(page, f"{page}#{heading_anchor(heading)}")
        return link_format(target, target)

    return WIKILINK_PATTERN.sub(replace_link, text)


def wikilinks(link_format: Optional[LinkFormat] = None) -> "ContentProcessor":
    """Create a content processor that rewrites wikilinks.

    Args:
        link_format: Link format to use (default: hugo_ref())

    Returns:
        A processor (context, file, body) -> body
    """
    link_format = link_format or hugo_ref()

    def process(context: "ConvertContext", file: "NoteFile", body: str) -> str:
        return rewrite_wikilinks(body, link_format)
    return process
