"""
Document source loading

Reads the README either from the checked-out workspace or from an
http(s) URL.
"""

from pathlib import Path, PurePosixPath
from typing import Optional

import httpx

from .errors import AutodescError, ErrorKind
from .log import LOG


def location_isUrl(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def document_read(location: str, client: httpx.Client, workdir: Optional[Path] = None) -> str:
    """
    Read the document text.

    Args:
        location: Local path (relative to workdir) or http(s) URL
        client: httpx client used for URL locations
        workdir: Directory relative paths are resolved from (default: cwd)

    Raises:
        AutodescError: IO with path set, so hints can name it
    """
    if location_isUrl(location):
        LOG(f"Fetching {location}", level=2)
        try:
            response = client.get(location, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise AutodescError(ErrorKind.IO, f"Failed to fetch {location}: {e}", path=location)
        return response.text

    path = Path(location)
    if workdir is not None and not path.is_absolute():
        path = workdir / path

    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise AutodescError(ErrorKind.IO, f"Failed to read {path}: {e}", path=location)
    except UnicodeDecodeError as e:
        raise AutodescError(ErrorKind.IO, f"{path} is not valid UTF-8: {e}", path=location)


def documentDir_relative(location: str, workdir: Optional[Path] = None) -> str:
    """
    Directory of a local document relative to the repository root, POSIX style.

    Example:
        >>> documentDir_relative("docs/README.md")
        'docs'
        >>> documentDir_relative("README.md")
        ''
    """
    path = Path(location)
    if path.is_absolute() and workdir is not None:
        try:
            path = path.relative_to(workdir)
        except ValueError:
            LOG(f"{location} is outside {workdir}, resolving links from the repository root", level=2)
            return ""
    elif path.is_absolute():
        return ""

    parent = PurePosixPath(path.as_posix()).parent
    return "" if str(parent) == "." else str(parent)
