"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Callable, Dict, Optional, Type, TypeVar, TYPE_CHECKING
from dataclasses import dataclass, field

from ..config import AppSettings, GitHubContext
from .document import FrontMatter

# Forward reference for type hint - avoid importing httpx at model level
if TYPE_CHECKING:
    import httpx


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the publishing pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the run progresses. It is built once
    at the CLI boundary; no stage reads the environment on its own.

    Pipeline stages and their state additions:
        - Initial: CLI inputs, settings, github, workdir
        - env_check: slugResolved, userAgent, client, envOK
        - document_load: documentText
        - frontmatter_extract: frontMatter
        - sections_exclude: cleanedBody
        - links_resolve: rawUrl, finalBody
        - payload_assemble: payload
        - description_submit: published
        - results_report: (no additions, terminal stage)

    Attributes:
        authToken: Modrinth personal access token
        slug: Project slug, id or full project URL
        projectName: Label for the User-Agent ("__unset" for none)
        readme: README path (relative to workdir) or http(s) URL
        token: Optional GitHub token for default-branch lookups
        branch: Optional explicit branch for rewritten links
        rewriteLinks: Rewrite relative image links to raw URLs
        dryRun: Run every transform but print the payload instead of sending it
        verbosity: Logging verbosity level (1-3)
    """

    # CLI arguments
    authToken: str = field(default="")
    slug: str = field(default="")
    projectName: str = field(default="__unset")
    readme: str = field(default="README.md")
    token: str = field(default="")
    branch: str = field(default="")
    rewriteLinks: bool = field(default=False)
    dryRun: bool = field(default=False)
    verbosity: int = field(default=1)

    # Configuration
    settings: AppSettings = field(default_factory=AppSettings)
    github: GitHubContext = field(default_factory=GitHubContext)
    workdir: Path = field(default_factory=Path.cwd)
    client: Optional["httpx.Client"] = field(default=None)

    # Pipeline state
    envOK: bool = field(default=False)
    slugResolved: str = field(default="")
    userAgent: str = field(default="")
    documentText: str = field(default="")
    frontMatter: FrontMatter = field(default_factory=FrontMatter)
    cleanedBody: str = field(default="")
    rawUrl: str = field(default="")
    finalBody: str = field(default="")
    payload: Optional[Dict[str, Any]] = field(default=None)
    published: bool = field(default=False)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, **extra: Any
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace.

        Args:
            options: Parsed CLI arguments
            **extra: Explicit overrides (settings, github, workdir, client)

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}
        merged_args = {**filtered_options, **extra}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            document_load,
            description_submit,
        )

    This is equivalent to:
        description_submit(document_load(env_check(initial_state)))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
