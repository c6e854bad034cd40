"""
Relative image link rewriter

Images referenced relatively in a README (![logo](assets/logo.png)) resolve
fine on GitHub but break once the text is published elsewhere. This module
rewrites them to absolute raw-file URLs:

    ![logo](assets/logo.png)
    → ![logo](https://raw.githubusercontent.com/owner/repo/main/assets/logo.png)

Rewriting is opt-in: without a base URL the body passes through unchanged.
The branch that goes into the base URL is picked by branch_resolve().
"""

import re
import posixpath
from urllib.parse import quote
from typing import Callable, List, Optional

from ..models.document import ImageReference, RepoCoordinate
from .log import LOG, LOG_warning


IMAGE_PATTERN = re.compile(
    r'!\[(?P<alt>[^\]]*)\]\((?P<path>[^)\s]+)(?P<title>\s+"[^"]*")?\)'
)

# Maps a repository to its default branch, or None when unknown
DefaultBranchLookup = Callable[[RepoCoordinate], Optional[str]]


def rawBase_make(coordinate: RepoCoordinate, branch: str, raw_host: str = "raw.githubusercontent.com") -> str:
    """
    Build the raw URL base for a repository ref.

    The branch is percent-encoded as a single path segment, so slashes in
    branch names survive (feature/x → feature%2Fx).

    Example:
        >>> rawBase_make(RepoCoordinate("o", "r"), "main")
        'https://raw.githubusercontent.com/o/r/main/'
    """
    return f"https://{raw_host}/{coordinate.owner}/{coordinate.repo}/{quote(branch, safe='')}/"


def branch_resolve(
    ref: str,
    head_ref: str,
    coordinate: RepoCoordinate,
    default_branch_lookup: Optional[DefaultBranchLookup],
    fallback: str = "main",
) -> str:
    """
    Pick the branch (or tag) whose files the rewritten links should point at.

    Args:
        ref: Triggering ref (GITHUB_REF), e.g. "refs/heads/main"
        head_ref: Source branch of a pull request (GITHUB_HEAD_REF)
        coordinate: Repository the README lives in
        default_branch_lookup: Callable returning the repository's default
                               branch; None when no credential is available
        fallback: Name used when the default branch cannot be determined

    Returns:
        Branch or tag name

    Classification:
        refs/pull/<n>/merge → head_ref
        refs/heads/<name>   → name
        refs/tags/<name>    → name
        anything else       → default branch (lookup), else fallback
    """
    if ref.startswith("refs/pull/") and head_ref:
        LOG(f"Pull request ref {ref}, using source branch {head_ref}", level=2)
        return head_ref

    for prefix in ("refs/heads/", "refs/tags/"):
        if ref.startswith(prefix) and len(ref) > len(prefix):
            return ref[len(prefix):]

    if default_branch_lookup is None:
        LOG_warning(
            f"No token available to look up the default branch of {coordinate}; "
            f"assuming '{fallback}'. This may be incorrect, set the `branch` input to be sure."
        )
        return fallback

    default_branch = default_branch_lookup(coordinate)
    if not default_branch:
        LOG_warning(
            f"Could not determine the default branch of {coordinate}; "
            f"assuming '{fallback}'. This may be incorrect."
        )
        return fallback

    LOG(f"Using default branch {default_branch} of {coordinate}", level=2)
    return default_branch


class LinkRewriter:
    """
    Rewrites relative markdown image paths against a raw URL base

    Handles:
    - Relative paths, resolved from the README's own directory
    - Root-relative paths (/img.png → repository root)
    - '.' and '..' segments ('..' never escapes the repository root)
    - Query strings and fragments, kept verbatim
    - Optional titles (![a](p "title"))
    """

    def __init__(self, base_url: str, document_dir: str = ""):
        """
        Args:
            base_url: Raw URL base ending in '/', see rawBase_make()
            document_dir: Directory of the README relative to the repository
                          root, POSIX separators ("" for the root)
        """
        self.base_url = base_url if base_url.endswith('/') else base_url + '/'
        self.document_dir = document_dir

    def references_find(self, text: str) -> List[ImageReference]:
        """Return every ![alt](path) reference in document order"""
        return [
            ImageReference(
                alt=match.group('alt'),
                path=match.group('path'),
                start=match.start('path'),
                end=match.end('path'),
            )
            for match in IMAGE_PATTERN.finditer(text)
        ]

    def path_resolve(self, path: str) -> str:
        """
        Resolve a relative path to a repository-root-relative path.

        Example:
            >>> LinkRewriter("https://x/", "docs/guide").path_resolve("../img/a.png")
            'docs/img/a.png'
        """
        suffix = ''
        cut = min((i for i in (path.find('?'), path.find('#')) if i >= 0), default=-1)
        if cut >= 0:
            path, suffix = path[:cut], path[cut:]

        joined = posixpath.join('/', self.document_dir, path)
        resolved = posixpath.normpath(joined).lstrip('/')
        return resolved + suffix

    def links_rewrite(self, text: str) -> str:
        """
        Replace the path of every relative image reference with an absolute URL.

        Absolute references (http:// or https://) and alt text are untouched.
        """
        pieces: List[str] = []
        cursor = 0
        rewritten = 0

        for reference in self.references_find(text):
            if reference.is_absolute:
                continue
            url = self.base_url + self.path_resolve(reference.path)
            LOG(f"Rewriting image {reference.path} → {url}", level=1)
            pieces.append(text[cursor:reference.start])
            pieces.append(url)
            cursor = reference.end
            rewritten += 1

        pieces.append(text[cursor:])
        LOG(f"Rewrote {rewritten} relative image links", level=2)
        return ''.join(pieces)


def links_rewriteIfEnabled(text: str, base_url: str, document_dir: str = "") -> str:
    """
    Rewrite relative image links when a base URL is available.

    An empty base_url means rewriting is disabled and text is returned as-is.
    """
    if not base_url:
        return text
    return LinkRewriter(base_url, document_dir).links_rewrite(text)
