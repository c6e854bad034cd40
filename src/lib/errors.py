"""
Error taxonomy for autodesc

Every failure the pipeline can report is an AutodescError tagged with an
ErrorKind. The CLI turns it into one consolidated message plus an ordered
list of troubleshooting hints.
"""

from enum import Enum
from typing import List, Optional


class ErrorKind(Enum):
    """Categories of run failures"""
    STRUCTURAL = "structural"   # malformed front matter or exclusion markers
    IO = "io"                   # document unreadable, transport failure
    AUTH = "auth"               # rejected credentials
    API = "api"                 # any other error reported by a remote API


class AutodescError(Exception):
    """
    Raised when a pipeline stage cannot complete

    Attributes:
        kind: ErrorKind classifying the failure
        message: Human-readable description
        raw: Optional raw diagnostic payload (e.g., the API response body)
        path: Document location involved in the failure, if any
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        raw: Optional[str] = None,
        path: Optional[str] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.raw = raw
        self.path = path

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"AutodescError(kind={self.kind.name}, message={self.message!r})"


def hints_make(error: Exception, issues_url: str) -> List[str]:
    """
    Build the ordered troubleshooting hints for a failure.

    Args:
        error: The exception that ended the run
        issues_url: Issue tracker shown as the last resort

    Returns:
        Hint lines, most specific first
    """
    hints: List[str] = []

    if isinstance(error, AutodescError):
        if error.kind is ErrorKind.IO and error.path and not error.path.startswith(("http://", "https://")):
            hints.append("Did you add `uses: actions/checkout@v4` to your workflow?")
            hints.append(f"Did you use the correct path in the config? Path specified: {error.path}")
        elif error.kind is ErrorKind.AUTH:
            hints.append("Is the token a personal access token with the PROJECT_WRITE scope?")
        elif error.kind is ErrorKind.STRUCTURAL:
            hints.append("Check the front matter YAML and that every exclusion START marker has a matching END marker.")

    hints.append(
        "If you are unable to find a solution, or you believe that this is a bug, "
        f"you may file an issue at {issues_url}"
    )
    return hints


def failure_message(error: Exception, hints: List[str]) -> str:
    """
    Consolidate an error and its hints into the single failure message.

    Example:
        >>> failure_message(Exception("boom"), ["try again"])
        'Action failed with error: boom.\\n\\ttry again'
    """
    help_text = "\n".join(f"\t{line}" for line in hints)
    return f"Action failed with error: {error}.\n{help_text}".strip()
