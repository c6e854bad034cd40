"""
GitHub default-branch lookup

The production DefaultBranchLookup used by branch_resolve() when the
triggering ref names neither a branch nor a tag. Needs a token.
"""

from typing import Optional

import httpx

from ..models.document import RepoCoordinate
from .errors import AutodescError, ErrorKind
from .log import LOG


class GitHubBranchLookup:
    """
    Callable returning a repository's default branch via the GitHub REST API

    Example:
        lookup = GitHubBranchLookup(token, client=client)
        lookup(RepoCoordinate("owner", "repo"))  # → "main"
    """

    def __init__(
        self,
        token: str,
        client: httpx.Client,
        api_url: str = "https://api.github.com",
    ):
        self.token = token
        self.client = client
        self.api_url = api_url.rstrip('/')

    def __call__(self, coordinate: RepoCoordinate) -> Optional[str]:
        """
        Fetch the default branch of coordinate.

        Raises:
            AutodescError: AUTH on 401/403, API on any other failed response,
                           IO when the request cannot be sent
        """
        url = f"{self.api_url}/repos/{coordinate.owner}/{coordinate.repo}"
        LOG(f"Looking up default branch: GET {url}", level=2)

        try:
            response = self.client.get(
                url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Accept": "application/vnd.github+json",
                },
            )
        except httpx.HTTPError as e:
            raise AutodescError(ErrorKind.IO, f"Failed to reach GitHub API: {e}")

        if response.status_code in (401, 403):
            raise AutodescError(
                ErrorKind.AUTH,
                "GitHub rejected the repository token while looking up the default branch",
                raw=response.text,
            )
        if response.is_error:
            raise AutodescError(
                ErrorKind.API,
                f"GitHub API returned {response.status_code} for {coordinate}",
                raw=response.text,
            )

        try:
            repository = response.json()
        except ValueError:
            repository = None
        if not isinstance(repository, dict):
            raise AutodescError(
                ErrorKind.API,
                f"GitHub API returned an unexpected repository document for {coordinate}",
                raw=response.text,
            )

        return repository.get("default_branch") or None
