"""
Document data models

Type-safe structures passed between the content-transformation stages:
front matter separation, excluded-section removal and link rewriting.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict


class MarkerKind(Enum):
    """Which side of an excluded region a marker delimits"""
    START = "start"
    END = "end"


@dataclass
class FrontMatter:
    """
    Result of separating a leading metadata block from a document

    Attributes:
        config: Parsed YAML mapping ({} when the document has no front matter)
        body: Remaining document text, trimmed of surrounding whitespace

    Example:
        For source "---\\nmodrinth:\\n  title: X\\n---\\n# Hello\\n":
        FrontMatter(config={"modrinth": {"title": "X"}}, body="# Hello")
    """
    config: Dict[str, Any] = field(default_factory=dict)
    body: str = ""

    def section(self, name: str) -> Dict[str, Any]:
        """
        Return a copy of the named sub-block, or {} when absent or not a mapping.

        Args:
            name: Top-level key (e.g., "modrinth")
        """
        value = self.config.get(name)
        if isinstance(value, dict):
            return dict(value)
        return {}


@dataclass
class TagMarker:
    """
    An exclusion marker found while scanning body text

    Attributes:
        kind: START or END
        start: Offset of the first character of the marker comment
        end: Offset one past the last character of the marker comment
    """
    kind: MarkerKind
    start: int
    end: int


@dataclass
class ExcludedRegion:
    """
    Half-open span [start, end) removed from the body, delimiters included
    """
    start: int
    end: int


@dataclass
class ImageReference:
    """
    A markdown image reference ![alt](path)

    Attributes:
        alt: Alternative text, never modified
        path: Link target as written in the source
        start: Offset of the path's first character
        end: Offset one past the path's last character
    """
    alt: str
    path: str
    start: int
    end: int

    @property
    def is_absolute(self) -> bool:
        return self.path.startswith(("http://", "https://"))


@dataclass(frozen=True)
class RepoCoordinate:
    """
    Repository owner and name, as in GITHUB_REPOSITORY ("owner/repo")
    """
    owner: str
    repo: str

    @classmethod
    def parse(cls, value: str) -> "RepoCoordinate":
        """
        Build a coordinate from "owner/repo".

        Raises:
            ValueError: If value is not exactly two non-empty segments
        """
        parts = value.strip().strip("/").split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError(f"Expected 'owner/repo', got '{value}'")
        return cls(owner=parts[0], repo=parts[1])

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}"
