#!/usr/bin/env python3
"""
autodesc - Publish a README as a Modrinth project description

Runs as a GitHub Actions step (inputs arrive as INPUT_* environment
variables) or directly from a shell (the same inputs as CLI flags).

Pipeline:
    - env_check: Validate inputs, resolve slug and User-Agent
    - document_load: Read the README from the workspace or a URL
    - frontmatter_extract: Split YAML front matter from the markdown body
    - sections_exclude: Remove MODRINTH_EXCLUDE_START/END sections
    - links_resolve: Optionally rewrite relative image links to raw URLs
    - payload_assemble: Build the project fields with the computed body
    - description_submit: PATCH the project on Modrinth
    - results_report: Summarize the run

Usage:
    autodesc --auth-token $MODRINTH_TOKEN --slug https://modrinth.com/mod/example

Examples:
    # Publish docs/README.md, rewriting image links against the current ref
    autodesc --slug example --readme docs/README.md --rewrite-links

    # See what would be sent
    autodesc --slug example --dry-run -vv
"""

import os
import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import List, Optional

from . import __version__
from .config import AppSettings, GitHubContext
from .lib.log import LOG, LOG_error, LOG_warning, output_set, state_connectToLogger
from .lib.errors import AutodescError, ErrorKind, failure_message, hints_make
from .lib.frontmatter import frontmatter_split
from .lib.excluder import excludedSections_remove
from .lib.links import branch_resolve, links_rewriteIfEnabled, rawBase_make
from .lib.github import GitHubBranchLookup
from .lib.publisher import (
    DescriptionPublisher,
    payload_build,
    payload_serialize,
    slug_extract,
    userAgent_make,
)
from .lib.source import document_read, documentDir_relative, location_isUrl
from .lib.http_client import client_build
from .models import ProgramState, RepoCoordinate, pipeline


TRUTHY = {"1", "true", "yes", "on"}


def actionInput_get(name: str, default: str = "") -> str:
    """
    Read a GitHub Actions input from the environment.

    The runner exports input 'auth-token' as INPUT_AUTH-TOKEN.
    """
    value = os.environ.get(f"INPUT_{name.replace(' ', '_').upper()}", "")
    return value.strip() or default


def parser_make() -> ArgumentParser:
    """
    Build the CLI parser.

    Defaults are taken from INPUT_* at call time so the same entry point
    serves both the action runner and local use.
    """
    parser = ArgumentParser(
        description="autodesc - publish a README as a Modrinth project description",
        formatter_class=ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--auth-token", dest="authToken", default=actionInput_get("auth-token"),
        help="Modrinth personal access token with PROJECT_WRITE scope",
    )
    parser.add_argument(
        "--slug", dest="slug", default=actionInput_get("slug"),
        help="Project slug, id or full project URL",
    )
    parser.add_argument(
        "--project-name", dest="projectName", default=actionInput_get("project-name", "__unset"),
        help="Project name shown in the User-Agent",
    )
    parser.add_argument(
        "--readme", dest="readme", default=actionInput_get("readme", "README.md"),
        help="README path (relative to the workspace) or http(s) URL",
    )
    parser.add_argument(
        "--token", dest="token", default=actionInput_get("token"),
        help="GitHub token used to look up the default branch",
    )
    parser.add_argument(
        "--branch", dest="branch", default=actionInput_get("branch"),
        help="Branch used for rewritten image links (overrides ref detection)",
    )
    parser.add_argument(
        "--rewrite-links", dest="rewriteLinks", action="store_true",
        default=actionInput_get("rewrite-links", "false").lower() in TRUTHY,
        help="Rewrite relative image links to raw.githubusercontent.com URLs",
    )
    parser.add_argument(
        "--dry-run", dest="dryRun", action="store_true",
        default=actionInput_get("dry-run", "false").lower() in TRUTHY,
        help="Print the payload instead of sending it",
    )
    parser.add_argument(
        "-v",
        "--verbosity",
        action="count",
        default=1,
        help="Increase output verbosity (can be repeated: -v, -vv)",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate inputs and prepare everything later stages need.

    Returns:
        ProgramState with added fields:
            - slugResolved: Slug extracted from the slug input
            - userAgent: User-Agent header value
            - envOK: True if inputs are usable

    Raises:
        AutodescError: API if the slug is missing, AUTH if the token is
                       missing on a real run
    """
    state = inputstate.copy()

    LOG("Checking inputs...", level=2)

    state.slugResolved = slug_extract(state.slug)
    if not state.slugResolved:
        raise AutodescError(ErrorKind.API, "No project slug given. Set the `slug` input")

    if not state.authToken and not state.dryRun:
        raise AutodescError(ErrorKind.AUTH, "No Modrinth token given. Set the `auth-token` input")

    state.userAgent = userAgent_make(state.projectName, state.slugResolved, state.settings.user_agent_suffix)
    LOG(f"Project: {state.slugResolved}", level=2)
    LOG(f"User-Agent: {state.userAgent}", level=3)

    state.envOK = True
    return state


def document_load(inputstate: ProgramState) -> ProgramState:
    """
    Read the README.

    Returns:
        ProgramState with added field:
            - documentText: Raw README text
    """
    state = inputstate.copy()

    LOG(f"Loading {state.readme}.", level=1)
    state.documentText = document_read(state.readme, state.client, state.workdir)
    LOG(f"Read {len(state.documentText)} characters", level=2)
    return state


def frontmatter_extract(inputstate: ProgramState) -> ProgramState:
    """
    Separate front matter from the body.

    Returns:
        ProgramState with added field:
            - frontMatter: FrontMatter(config, body)
    """
    state = inputstate.copy()

    state.frontMatter = frontmatter_split(state.documentText)
    keys = ", ".join(state.frontMatter.section(state.settings.metadata_key)) or "none"
    LOG(f"Front matter fields under `{state.settings.metadata_key}`: {keys}", level=2)
    return state


def sections_exclude(inputstate: ProgramState) -> ProgramState:
    """
    Remove excluded sections from the body.

    Returns:
        ProgramState with added field:
            - cleanedBody: Body without excluded sections
    """
    state = inputstate.copy()

    state.cleanedBody = excludedSections_remove(state.frontMatter.body, state.settings)
    return state


def links_resolve(inputstate: ProgramState) -> ProgramState:
    """
    Rewrite relative image links when enabled.

    Returns:
        ProgramState with added fields:
            - rawUrl: Raw URL base ("" when rewriting did not run)
            - finalBody: Body to publish
    """
    state = inputstate.copy()
    state.finalBody = state.cleanedBody

    if not state.rewriteLinks:
        LOG("Link rewriting disabled", level=2)
        return state

    if location_isUrl(state.readme):
        LOG_warning("Cannot rewrite relative links for a README loaded from a URL; leaving links unchanged.")
        return state

    try:
        coordinate = RepoCoordinate.parse(state.github.repository)
    except ValueError:
        LOG_warning("GITHUB_REPOSITORY is not set; leaving relative links unchanged.")
        return state

    if not state.branch and not state.github.ref:
        LOG_warning("No branch input and no triggering ref; leaving relative links unchanged.")
        return state

    branch = state.branch
    if not branch:
        lookup = None
        if state.token:
            lookup = GitHubBranchLookup(state.token, state.client, state.settings.github_api_url)
        branch = branch_resolve(
            state.github.ref,
            state.github.head_ref,
            coordinate,
            lookup,
            fallback=state.settings.fallback_branch,
        )
    state.rawUrl = rawBase_make(coordinate, branch, state.settings.raw_host)
    LOG(f"Raw URL base: {state.rawUrl}", level=1)
    output_set("raw-url", state.rawUrl, state.github.output)

    document_dir = documentDir_relative(state.readme, state.workdir)
    state.finalBody = links_rewriteIfEnabled(state.cleanedBody, state.rawUrl, document_dir)
    return state


def payload_assemble(inputstate: ProgramState) -> ProgramState:
    """
    Build the PATCH payload.

    Returns:
        ProgramState with added field:
            - payload: Front matter project fields with 'body' overwritten
    """
    state = inputstate.copy()

    section = state.frontMatter.section(state.settings.metadata_key)
    state.payload = payload_build(section, state.finalBody)
    return state


def description_submit(inputstate: ProgramState) -> ProgramState:
    """
    Send the payload, or print it on a dry run.

    Returns:
        ProgramState with added field:
            - published: True once Modrinth accepted the update
    """
    state = inputstate.copy()

    if state.dryRun:
        LOG("Dry run: not sending request", level=1)
        print(payload_serialize(state.payload, indent=4))
        return state

    publisher = DescriptionPublisher(
        token=state.authToken,
        user_agent=state.userAgent,
        client=state.client,
        api_url=state.settings.api_url,
    )
    publisher.description_publish(state.slugResolved, state.payload)
    state.published = True
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Summarize the run (terminal pipeline stage).
    """
    state: ProgramState = inputstate.copy()

    LOG(f"  Project: {state.slugResolved}", level=2)
    LOG(f"  Body:    {len(state.finalBody)} characters", level=2)
    if state.rawUrl:
        LOG(f"  Raw URL: {state.rawUrl}", level=2)
    if state.published:
        LOG(f"✓ Description of {state.slugResolved} is up to date", level=1)
    return state


STAGES = (
    env_check,
    document_load,
    frontmatter_extract,
    sections_exclude,
    links_resolve,
    payload_assemble,
    description_submit,
    results_report,
)


def run(inputstate: ProgramState) -> ProgramState:
    """
    Execute the full pipeline.

    An injected client is used as-is; otherwise one is opened for the run
    and closed when the pipeline ends.
    """
    state_connectToLogger(inputstate)
    if inputstate.client is not None:
        return pipeline(inputstate, *STAGES)

    state = inputstate.copy()
    with client_build(state.settings, state.settings.user_agent_suffix) as client:
        state.client = client
        return pipeline(state, *STAGES)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Args:
        argv: CLI arguments (default: sys.argv[1:])

    Returns:
        Process exit status (0 on success, 1 on failure)
    """
    options: Namespace = parser_make().parse_args(argv)
    github = GitHubContext()
    workdir = Path(github.workspace) if github.workspace else Path.cwd()

    state: ProgramState = ProgramState.state_createFromNamespace(
        options,
        settings=AppSettings(),
        github=github,
        workdir=workdir,
    )

    try:
        run(state)
    except AutodescError as e:
        if e.kind is ErrorKind.AUTH and e.raw:
            LOG_error(e.raw)
        LOG_error(failure_message(e, hints_make(e, state.settings.issues_url)))
        return 1
    except Exception as e:
        LOG_error(failure_message(e, hints_make(e, state.settings.issues_url)))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
