"""
Front matter splitter

Separates a leading YAML block delimited by '---' lines from the markdown
body that follows it:

    ---
    modrinth:
      description: A short summary
    ---
    # My Mod
    ...

The YAML itself is parsed with PyYAML; this module only locates the block.
"""

import re
from typing import Any

import yaml

from ..models.document import FrontMatter
from .errors import AutodescError, ErrorKind


# Opening '---' must be the very first line; closing is '---' or '...'
FRONTMATTER_PATTERN = re.compile(
    r'\A\ufeff?---[ \t]*\r?\n(?P<yaml>.*?)(?:\r?\n)?^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)',
    re.DOTALL | re.MULTILINE,
)


def frontmatter_split(text: str) -> FrontMatter:
    """
    Split a document into its front matter mapping and trimmed body.

    Args:
        text: Raw document text

    Returns:
        FrontMatter with parsed config ({} when there is no block) and body

    Raises:
        AutodescError: STRUCTURAL if the block is not valid YAML or not a mapping

    Example:
        >>> frontmatter_split("---\\na: 1\\n---\\nbody\\n").config
        {'a': 1}
        >>> frontmatter_split("  just text  ").body
        'just text'
    """
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return FrontMatter(config={}, body=text.lstrip('\ufeff').strip())

    try:
        config: Any = yaml.safe_load(match.group('yaml'))
    except yaml.YAMLError as e:
        raise AutodescError(ErrorKind.STRUCTURAL, f"Failed to parse front matter: {e}")

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise AutodescError(
            ErrorKind.STRUCTURAL,
            f"Front matter must be a mapping, got {type(config).__name__}",
        )

    return FrontMatter(config=config, body=text[match.end():].strip())
