"""
Excluded-section remover

Deletes regions of a README that should not be published, delimited by
HTML comment markers:

    Visible everywhere.
    <!-- MODRINTH_EXCLUDE_START -->
    Only on GitHub.
    <!-- MODRINTH_EXCLUDE_END -->

The remover operates in two phases:
1. Validation: scan all markers in document order and check nesting with a
   depth counter. Any END without an open START, or any START left open at
   the end of the scan, is a structural error. Nothing is removed.
2. Removal: cut every outermost START...END span (delimiters included).
   Nested markers are consumed by the enclosing span, so regions never
   overlap and no marker survives in the output.

Example:
    >>> SectionExcluder("a<!-- MODRINTH_EXCLUDE_START -->b<!-- MODRINTH_EXCLUDE_END -->c").sections_remove()
    'ac'
"""

from typing import List, Optional

from ..config import appsettings, AppSettings
from ..models.document import ExcludedRegion, MarkerKind, TagMarker
from .errors import AutodescError, ErrorKind
from .log import LOG


class SectionExcluder:
    """
    Validating remover for MODRINTH_EXCLUDE_START / MODRINTH_EXCLUDE_END spans
    """

    def __init__(self, text: str, settings: Optional[AppSettings] = None):
        """
        Initialize remover with body text

        Args:
            text: Markdown body (front matter already removed)
            settings: Provides the marker tokens; defaults to appsettings
        """
        self.text = text
        self.settings = settings or appsettings
        self.pattern = self.settings.markerPattern_make()

    def position_describe(self, offset: int) -> str:
        """Render a character offset as 'line L, column C' (both 1-based)"""
        line = self.text.count('\n', 0, offset) + 1
        column = offset - (self.text.rfind('\n', 0, offset) + 1) + 1
        return f"line {line}, column {column}"

    def markers_scan(self) -> List[TagMarker]:
        """
        Find every exclusion marker in document order.

        Returns:
            List of TagMarker, ordered by position
        """
        markers: List[TagMarker] = []
        for match in self.pattern.finditer(self.text):
            kind = MarkerKind.START if match.group('start') else MarkerKind.END
            markers.append(TagMarker(kind=kind, start=match.start(), end=match.end()))
        LOG(f"Found {len(markers)} exclusion markers", level=3)
        return markers

    def markers_validate(self, markers: List[TagMarker]) -> None:
        """
        Check that markers form a well-nested sequence.

        Args:
            markers: Markers as returned by markers_scan()

        Raises:
            AutodescError: STRUCTURAL on an END with no open START, or on
                           a START that is never closed
        """
        depth = 0
        open_starts: List[TagMarker] = []

        for marker in markers:
            if marker.kind is MarkerKind.START:
                depth += 1
                open_starts.append(marker)
                continue

            depth -= 1
            if depth < 0:
                raise AutodescError(
                    ErrorKind.STRUCTURAL,
                    f"Found {self.settings.exclude_end_token} without a preceding "
                    f"{self.settings.exclude_start_token} at {self.position_describe(marker.start)}",
                )
            open_starts.pop()

        if depth != 0:
            unmatched = open_starts[0]
            raise AutodescError(
                ErrorKind.STRUCTURAL,
                f"Unmatched {self.settings.exclude_start_token} marker at "
                f"{self.position_describe(unmatched.start)} "
                f"({depth} left open at end of document)",
            )

    def regions_find(self, markers: List[TagMarker]) -> List[ExcludedRegion]:
        """
        Pair validated markers into outermost excluded regions.

        Inner START/END pairs are swallowed by the region that encloses them.

        Args:
            markers: Well-nested markers (see markers_validate)

        Returns:
            Non-overlapping regions in document order
        """
        regions: List[ExcludedRegion] = []
        depth = 0
        region_start = 0

        for marker in markers:
            if marker.kind is MarkerKind.START:
                if depth == 0:
                    region_start = marker.start
                depth += 1
            else:
                depth -= 1
                if depth == 0:
                    regions.append(ExcludedRegion(start=region_start, end=marker.end))

        return regions

    def sections_remove(self) -> str:
        """
        Validate markers, then remove every excluded region.

        Returns:
            Body text with regions removed; everything outside the
            regions is preserved verbatim

        Raises:
            AutodescError: STRUCTURAL if markers are unbalanced
        """
        markers = self.markers_scan()
        self.markers_validate(markers)
        regions = self.regions_find(markers)

        if not regions:
            return self.text

        pieces: List[str] = []
        cursor = 0
        for region in regions:
            pieces.append(self.text[cursor:region.start])
            cursor = region.end
        pieces.append(self.text[cursor:])

        removed = sum(region.end - region.start for region in regions)
        LOG(f"Removed {len(regions)} excluded sections ({removed} characters)", level=2)
        return ''.join(pieces)


def excludedSections_remove(text: str, settings: Optional[AppSettings] = None) -> str:
    """
    Convenience wrapper: SectionExcluder(text, settings).sections_remove()
    """
    return SectionExcluder(text, settings).sections_remove()
