"""
GitHub default-branch lookup tests
"""

import httpx
import pytest

from autodesc.lib.errors import AutodescError, ErrorKind
from autodesc.lib.github import GitHubBranchLookup
from autodesc.models.document import RepoCoordinate


def lookup_make(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return GitHubBranchLookup("ghs_token", client)


class TestLookup:

    def test_default_branch(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["authorization"]
            return httpx.Response(200, json={"default_branch": "trunk"})

        assert lookup_make(handler)(RepoCoordinate("o", "r")) == "trunk"
        assert seen["url"] == "https://api.github.com/repos/o/r"
        assert seen["auth"] == "Bearer ghs_token"

    def test_missing_field(self):
        lookup = lookup_make(lambda r: httpx.Response(200, json={}))
        assert lookup(RepoCoordinate("o", "r")) is None

    def test_rejected_token(self):
        lookup = lookup_make(lambda r: httpx.Response(401, json={"message": "Bad credentials"}))
        with pytest.raises(AutodescError) as excinfo:
            lookup(RepoCoordinate("o", "r"))
        assert excinfo.value.kind is ErrorKind.AUTH

    def test_not_found(self):
        lookup = lookup_make(lambda r: httpx.Response(404, json={"message": "Not Found"}))
        with pytest.raises(AutodescError) as excinfo:
            lookup(RepoCoordinate("o", "r"))
        assert excinfo.value.kind is ErrorKind.API

    def test_non_json_body(self):
        lookup = lookup_make(lambda r: httpx.Response(200, text="<html>maintenance</html>"))
        with pytest.raises(AutodescError) as excinfo:
            lookup(RepoCoordinate("o", "r"))
        assert excinfo.value.kind is ErrorKind.API
        assert excinfo.value.raw == "<html>maintenance</html>"

    def test_json_not_object(self):
        lookup = lookup_make(lambda r: httpx.Response(200, json=["main"]))
        with pytest.raises(AutodescError) as excinfo:
            lookup(RepoCoordinate("o", "r"))
        assert excinfo.value.kind is ErrorKind.API
