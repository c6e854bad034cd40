"""
autodesc - Publish a README as a Modrinth project description

Content-transformation pipeline and the Modrinth publisher.
"""

from .errors import AutodescError, ErrorKind
from .frontmatter import frontmatter_split
from .excluder import SectionExcluder, excludedSections_remove
from .links import LinkRewriter, branch_resolve, rawBase_make
from .publisher import DescriptionPublisher, payload_build, slug_extract
from .log import LOG, state_connectToLogger

__all__ = [
    "AutodescError",
    "ErrorKind",
    "frontmatter_split",
    "SectionExcluder",
    "excludedSections_remove",
    "LinkRewriter",
    "branch_resolve",
    "rawBase_make",
    "DescriptionPublisher",
    "payload_build",
    "slug_extract",
    "LOG",
    "state_connectToLogger",
]
