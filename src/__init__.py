"""
autodesc - Publish a README as a Modrinth project description

Reads a README, strips its front matter and excluded sections, optionally
rewrites relative image links, and PATCHes the result onto a Modrinth project.
"""

__version__ = "1.0.0"

from .lib import (
    AutodescError,
    ErrorKind,
    SectionExcluder,
    LinkRewriter,
    DescriptionPublisher,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "AutodescError",
    "ErrorKind",
    "SectionExcluder",
    "LinkRewriter",
    "DescriptionPublisher",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
