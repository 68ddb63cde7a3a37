"""Per-note conversion: front matter normalization and content rewriting."""

import re
from typing import Any, Dict, Tuple

import yaml

from obsidian_to_hugo.core.models import ConvertContext, FrontMatter, FrontMatterError, NoteFile

# Leading '---' block, closed by the next line that is exactly '---'
FRONTMATTER_PATTERN = re.compile(
    r'\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)',
    re.DOTALL | re.MULTILINE,
)


# Scalars resolved to these tags would lose the text they were written as
_TEXT_TAGS = {
    'tag:yaml.org,2002:bool',
    'tag:yaml.org,2002:int',
    'tag:yaml.org,2002:float',
    'tag:yaml.org,2002:timestamp',
}


class _FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that keeps every non-null scalar as the text it was written as.

    `title: On` stays "On" and `slug: 0x10` stays "0x10". Booleans such as
    draft are interpreted by FrontMatter.from_dict.
    """


_FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _TEXT_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def split_frontmatter(text: str) -> Tuple[Dict[str, Any], str]:
    """Split a note into its front matter mapping and body.

    Args:
        text: Full note contents

    Returns:
        Tuple of (frontmatter dict, body). A note without front matter
        yields an empty dict and the unchanged text.

    Raises:
        FrontMatterError: If the block is not valid YAML or not a mapping
    """
    match = FRONTMATTER_PATTERN.match(text)
    if match is None:
        return {}, text

    try:
        data = yaml.load(match.group(1), Loader=_FrontMatterLoader)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid YAML in front matter: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping, got {type(data).__name__}"
        )

    return data, text[match.end():]


def render_frontmatter(front_matter: FrontMatter, body: str) -> str:
    """Build the final note text with a YAML front matter block.

    The block is always written, even when nothing was filled in.
    """
    frontmatter_str = yaml.dump(
        front_matter.to_dict(),
        Dumper=yaml.SafeDumper,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )
    return f"---\n{frontmatter_str}---\n{body}"


class NoteConverter:
    """Converts a single Obsidian note for Hugo.

    Runs the context's front matter processors over the parsed front
    matter, then its content processors over the body, each list in
    registration order.
    """

    def __init__(self, context: ConvertContext):
        self.context = context

    def parse(self, file: NoteFile) -> Tuple[FrontMatter, str]:
        """Decode a note and split it into front matter and body.

        Raises:
            UnicodeDecodeError: If the note is not UTF-8
            FrontMatterError: If the front matter is malformed
        """
        text = file.contents.decode('utf-8')
        data, body = split_frontmatter(text)
        return FrontMatter.from_dict(data), body

    def process(self, file: NoteFile) -> str:
        """Convert a note's contents.

        Args:
            file: Note with its raw contents loaded

        Returns:
            Rewritten note text
        """
        front_matter, body = self.parse(file)

        for fm_processor in self.context.frontmatter_processors:
            fm_processor(self.context, file, front_matter)

        for content_processor in self.context.content_processors:
            body = content_processor(self.context, file, body)

        return render_frontmatter(front_matter, body)
