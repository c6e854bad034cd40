"""
Description publisher

Submits the transformed README as a Modrinth project body.

See: https://docs.modrinth.com/#tag/projects/operation/modifyProject

The API answers a successful PATCH with 204 and an empty body. Anything
else in the body is an error description, which is pretty-printed into the
failure message. 401 means the token was rejected and is reported on its own.
"""

import json
from datetime import date, datetime, time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

import httpx

from .errors import AutodescError, ErrorKind
from .log import LOG, LOG_warning


UNSET = "__unset"


def slug_extract(value: str) -> str:
    """
    Reduce a project URL to its slug (the trailing path segment).

    Example:
        >>> slug_extract("https://modrinth.com/mod/example")
        'example'
        >>> slug_extract("https://modrinth.com/mod/example?tab=versions")
        'example'
        >>> slug_extract("example")
        'example'
    """
    value = value.strip()
    if value.startswith(("http://", "https://")):
        value = urlsplit(value).path
    return value.rstrip('/').rsplit('/', 1)[-1]


def userAgent_make(project_name: str, slug: str, suffix: str) -> str:
    """
    Build the User-Agent header value.

    Example:
        >>> userAgent_make("__unset", "example", "me/tool")
        'example via me/tool'
        >>> userAgent_make("My Mod", "example", "me/tool")
        'My Mod (example) via me/tool'
    """
    if not project_name or project_name == UNSET:
        label = slug
    else:
        label = f"{project_name} ({slug})"
    return f"{label} via {suffix}"


def payload_build(section: Dict[str, Any], body: str) -> Dict[str, Any]:
    """
    Assemble the PATCH payload from the front matter sub-block.

    The computed body always wins over a 'body' key in the input.

    Args:
        section: Project fields from front matter (not modified)
        body: Final transformed description

    Returns:
        New mapping with 'body' set
    """
    payload = dict(section)
    if "body" in payload:
        # 'description' is the short summary, 'body' is the markdown description
        LOG_warning(
            "Ignoring `modrinth.body` in the front matter. This field should not be set. "
            "Use `modrinth.description` to set the short description instead."
        )
    payload["body"] = body
    return payload


def value_serialize(value: Any) -> str:
    """
    json.dumps default= hook: YAML timestamps become ISO 8601 strings.

    Raises:
        TypeError: For any other type, as json.dumps expects
    """
    if isinstance(value, (date, datetime, time)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def payload_serialize(payload: Dict[str, Any], indent: Optional[int] = None) -> str:
    """
    Serialize a payload to JSON, rendering front matter dates as ISO strings.

    Example:
        >>> payload_serialize({"published": date(2024, 1, 1)})
        '{"published": "2024-01-01"}'
    """
    return json.dumps(payload, indent=indent, default=value_serialize)


class DescriptionPublisher:
    """
    Performs the single project update call and classifies the response
    """

    def __init__(
        self,
        token: str,
        user_agent: str,
        client: httpx.Client,
        api_url: str = "https://api.modrinth.com/v2",
    ):
        """
        Args:
            token: Modrinth personal access token (sent as-is in Authorization)
            user_agent: Value for the User-Agent header, see userAgent_make()
            client: httpx client carrying timeouts and transport
            api_url: API base URL without trailing slash
        """
        self.token = token
        self.user_agent = user_agent
        self.client = client
        self.api_url = api_url.rstrip('/')

    def url_make(self, slug: str) -> str:
        return f"{self.api_url}/project/{slug}"

    def headers_make(self) -> Dict[str, str]:
        return {
            "Authorization": self.token,
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }

    def description_publish(self, slug: str, payload: Dict[str, Any]) -> None:
        """
        PATCH the project and raise on any failure.

        Args:
            slug: Target project slug or id
            payload: JSON-serialisable project fields, including 'body'

        Raises:
            AutodescError: AUTH on 401, API on an error body or status,
                           IO when the request cannot be sent
        """
        url = self.url_make(slug)
        LOG("Sending request to Modrinth...", level=1)
        LOG(f"PATCH {url} ({len(payload.get('body', ''))} characters of body)", level=2)

        try:
            response = self.client.patch(
                url,
                content=payload_serialize(payload),
                headers=self.headers_make(),
            )
        except httpx.HTTPError as e:
            raise AutodescError(ErrorKind.IO, f"Failed to reach Modrinth API: {e}")

        LOG(f"Modrinth responded {response.status_code}", level=2)
        response_classify(response)
        LOG("Updated description successfully!", level=1)


def response_classify(response: httpx.Response) -> None:
    """
    Turn a Modrinth response into success (return) or an AutodescError.

    Order matters: 401 is checked before the body is interpreted so a
    rejected token is never reported as a generic API error.
    """
    if response.status_code == 401:
        raise AutodescError(
            ErrorKind.AUTH,
            "Unauthorised access to API. Did you set the access token properly?",
            raw=response.text,
        )

    text = response.text
    if text.strip():
        try:
            detail = json.dumps(json.loads(text), indent=4)
        except ValueError:
            detail = text
        raise AutodescError(ErrorKind.API, f"API Error: {detail}", raw=text)

    if response.is_error:
        raise AutodescError(
            ErrorKind.API,
            f"API Error: Modrinth returned status {response.status_code} with an empty body",
        )
