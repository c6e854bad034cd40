"""
Excluded-section remover tests

Tests marker scanning, nesting validation and outermost-span removal.
"""

import pytest

from autodesc.config import AppSettings
from autodesc.lib.excluder import SectionExcluder, excludedSections_remove
from autodesc.lib.errors import AutodescError, ErrorKind
from autodesc.models.document import MarkerKind

START = "<!-- MODRINTH_EXCLUDE_START -->"
END = "<!-- MODRINTH_EXCLUDE_END -->"


class TestRemoval:
    """Well-nested markers"""

    def test_no_markers(self):
        """Text without markers is returned unchanged"""
        text = "# Title\n\nNothing to exclude."
        assert excludedSections_remove(text) == text

    def test_single_region(self):
        """Region removed together with its delimiters"""
        text = f"before\n{START}\nhidden\n{END}\nafter"
        assert excludedSections_remove(text) == "before\n\nafter"

    def test_multiple_regions(self):
        """Each region removed, text between preserved verbatim"""
        text = f"a{START}x{END}  b  {START}y{END}c"
        assert excludedSections_remove(text) == "a  b  c"

    def test_outside_text_preserved_exactly(self):
        """Whitespace and markup outside regions survive byte-for-byte"""
        text = f"  <b>keep</b>\t\n{START}drop{END}\r\n  trailing  "
        assert excludedSections_remove(text) == "  <b>keep</b>\t\n\r\n  trailing  "

    def test_whitespace_inside_comment(self):
        """Markers tolerate extra whitespace inside the comment"""
        text = "a<!--MODRINTH_EXCLUDE_START-->b<!--   MODRINTH_EXCLUDE_END\n-->c"
        assert excludedSections_remove(text) == "ac"

    def test_nested_removes_outermost(self):
        """Nested markers are consumed by the enclosing region"""
        text = f"a{START}b{START}c{END}d{END}e"
        result = excludedSections_remove(text)

        assert result == "ae"
        assert "MODRINTH_EXCLUDE" not in result

    def test_custom_tokens(self):
        """Marker tokens come from settings"""
        settings = AppSettings(exclude_start_token="GH_ONLY_START", exclude_end_token="GH_ONLY_END")
        text = "a<!-- GH_ONLY_START -->b<!-- GH_ONLY_END -->c"
        assert excludedSections_remove(text, settings) == "ac"


class TestScanning:
    """Marker discovery"""

    def test_markers_in_order(self):
        text = f"{START}x{START}y{END}{END}"
        markers = SectionExcluder(text).markers_scan()

        kinds = [m.kind for m in markers]
        assert kinds == [MarkerKind.START, MarkerKind.START, MarkerKind.END, MarkerKind.END]
        assert markers[0].start == 0
        assert markers[0].end == len(START)

    def test_regions_are_outermost(self):
        text = f"{START}x{START}y{END}{END}z{START}{END}"
        excluder = SectionExcluder(text)
        regions = excluder.regions_find(excluder.markers_scan())

        assert len(regions) == 2
        assert text[regions[0].start:regions[0].end] == f"{START}x{START}y{END}{END}"
        assert text[regions[1].start:regions[1].end] == f"{START}{END}"


class TestValidation:
    """Malformed markers fail before anything is removed"""

    def test_end_before_start(self):
        """END preceding its START is a structural error"""
        text = f"a{END}b{START}c"
        with pytest.raises(AutodescError) as excinfo:
            excludedSections_remove(text)

        assert excinfo.value.kind is ErrorKind.STRUCTURAL
        assert "without a preceding" in excinfo.value.message

    def test_unmatched_start(self):
        text = f"a{START}b{START}c{END}"
        with pytest.raises(AutodescError, match="Unmatched MODRINTH_EXCLUDE_START"):
            excludedSections_remove(text)

    def test_unmatched_end(self):
        text = f"a{START}b{END}c{END}"
        with pytest.raises(AutodescError, match="without a preceding"):
            excludedSections_remove(text)

    def test_error_names_position(self):
        """The offending marker is located by line and column"""
        text = f"line one\n  {END}"
        with pytest.raises(AutodescError, match="line 2, column 3"):
            excludedSections_remove(text)

    def test_source_text_untouched_on_error(self):
        """A failed removal leaves the excluder's text as it was"""
        text = f"keep{START}"
        excluder = SectionExcluder(text)
        with pytest.raises(AutodescError):
            excluder.sections_remove()
        assert excluder.text == text
