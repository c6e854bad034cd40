"""
Models package for autodesc

Contains data structures and type definitions for the publishing pipeline.
"""

from .state import ProgramState, pipeline
from .document import (
    FrontMatter,
    MarkerKind,
    TagMarker,
    ExcludedRegion,
    ImageReference,
    RepoCoordinate,
)

__all__ = [
    "ProgramState",
    "pipeline",
    "FrontMatter",
    "MarkerKind",
    "TagMarker",
    "ExcludedRegion",
    "ImageReference",
    "RepoCoordinate",
]
