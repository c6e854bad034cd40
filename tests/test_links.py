"""
Link rewriter tests

Tests raw URL construction, path resolution, image rewriting and
branch resolution.
"""

import pytest

from autodesc.lib.links import (
    LinkRewriter,
    branch_resolve,
    links_rewriteIfEnabled,
    rawBase_make,
)
from autodesc.models.document import RepoCoordinate

BASE = "https://raw.githubusercontent.com/o/r/main/"
REPO = RepoCoordinate("o", "r")


class TestRawBase:
    """Raw URL base construction"""

    def test_simple_branch(self):
        assert rawBase_make(REPO, "main") == BASE

    def test_branch_with_slash_is_encoded(self):
        assert rawBase_make(REPO, "feature/x") == "https://raw.githubusercontent.com/o/r/feature%2Fx/"

    def test_custom_host(self):
        assert rawBase_make(REPO, "dev", "raw.example.com") == "https://raw.example.com/o/r/dev/"


class TestRewriting:
    """Rewriting of markdown image references"""

    def test_relative_in_subdirectory(self):
        """Relative path is resolved from the document's directory"""
        rewriter = LinkRewriter(BASE, "docs")
        result = rewriter.links_rewrite("![x](img.png)")
        assert result == "![x](https://raw.githubusercontent.com/o/r/main/docs/img.png)"

    def test_relative_at_root(self):
        result = LinkRewriter(BASE).links_rewrite("![logo](assets/logo.png)")
        assert result == f"![logo]({BASE}assets/logo.png)"

    def test_absolute_untouched(self):
        text = "![x](https://example.com/a.png) and ![y](http://example.com/b.png)"
        assert LinkRewriter(BASE, "docs").links_rewrite(text) == text

    def test_alt_text_untouched(self):
        result = LinkRewriter(BASE).links_rewrite("![Some alt text](a.png)")
        assert result == f"![Some alt text]({BASE}a.png)"

    def test_dot_segments(self):
        rewriter = LinkRewriter(BASE, "docs/guide")
        assert rewriter.path_resolve("./a.png") == "docs/guide/a.png"
        assert rewriter.path_resolve("../img/a.png") == "docs/img/a.png"

    def test_parent_beyond_root_clamped(self):
        assert LinkRewriter(BASE, "docs").path_resolve("../../../a.png") == "a.png"

    def test_root_relative(self):
        assert LinkRewriter(BASE, "docs").path_resolve("/media/a.png") == "media/a.png"

    def test_query_and_fragment_kept(self):
        rewriter = LinkRewriter(BASE, "docs")
        assert rewriter.path_resolve("../a.svg?raw=true") == "a.svg?raw=true"
        assert rewriter.path_resolve("a.svg#dark") == "docs/a.svg#dark"

    def test_title_preserved(self):
        result = LinkRewriter(BASE).links_rewrite('![x](a.png "A title")')
        assert result == f'![x]({BASE}a.png "A title")'

    def test_mixed_references(self):
        text = "Intro ![a](a.png) mid ![b](https://x.io/b.png) end ![c](../c.png)"
        result = LinkRewriter(BASE, "docs").links_rewrite(text)
        assert result == (
            f"Intro ![a]({BASE}docs/a.png) mid ![b](https://x.io/b.png) end ![c]({BASE}c.png)"
        )

    def test_plain_links_untouched(self):
        """Only images are rewritten"""
        text = "[docs](docs/index.md)"
        assert LinkRewriter(BASE).links_rewrite(text) == text

    def test_base_without_trailing_slash(self):
        rewriter = LinkRewriter(BASE.rstrip("/"))
        assert rewriter.links_rewrite("![x](a.png)") == f"![x]({BASE}a.png)"

    def test_find_references(self):
        refs = LinkRewriter(BASE).references_find("![a](x.png) ![b](https://y/z.png)")
        assert [r.alt for r in refs] == ["a", "b"]
        assert [r.is_absolute for r in refs] == [False, True]


class TestOptIn:
    """Rewriting only runs with a base URL"""

    def test_empty_base_passes_through(self):
        text = "![x](img.png)"
        assert links_rewriteIfEnabled(text, "", "docs") == text

    def test_base_rewrites(self):
        assert links_rewriteIfEnabled("![x](img.png)", BASE, "docs") == f"![x]({BASE}docs/img.png)"


class TestBranchResolve:
    """Ref classification and default-branch fallback"""

    def never_called(self, coordinate):
        raise AssertionError("lookup should not be used")

    def test_branch_push(self):
        assert branch_resolve("refs/heads/dev", "", REPO, self.never_called) == "dev"

    def test_branch_with_slash(self):
        assert branch_resolve("refs/heads/feature/x", "", REPO, self.never_called) == "feature/x"

    def test_tag(self):
        assert branch_resolve("refs/tags/v1.2.0", "", REPO, self.never_called) == "v1.2.0"

    def test_pull_request(self):
        assert branch_resolve("refs/pull/3/merge", "my-feature", REPO, self.never_called) == "my-feature"

    def test_unknown_ref_uses_lookup(self):
        seen = []

        def lookup(coordinate):
            seen.append(coordinate)
            return "trunk"

        assert branch_resolve("refs/remotes/origin/HEAD", "", REPO, lookup) == "trunk"
        assert seen == [REPO]

    def test_no_lookup_falls_back_with_warning(self, capsys):
        result = branch_resolve("refs/remotes/origin/HEAD", "", REPO, None, fallback="main")

        assert result == "main"
        assert "::warning::" in capsys.readouterr().out

    def test_lookup_without_answer_falls_back(self, capsys):
        assert branch_resolve("refs/unknown", "", REPO, lambda c: None, fallback="master") == "master"
        assert "::warning::" in capsys.readouterr().out


class TestRepoCoordinate:
    """Parsing of owner/repo"""

    def test_parse(self):
        assert RepoCoordinate.parse("owner/repo") == RepoCoordinate("owner", "repo")
        assert str(RepoCoordinate.parse("owner/repo")) == "owner/repo"

    @pytest.mark.parametrize("value", ["", "owner", "a/b/c", "/repo"])
    def test_parse_invalid(self, value):
        with pytest.raises(ValueError):
            RepoCoordinate.parse(value)
