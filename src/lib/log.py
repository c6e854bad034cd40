"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the current ProgramState's
verbosity level without requiring explicit state passing, plus helpers that
speak the GitHub Actions workflow-command protocol on stdout.

Features:
- Context-aware logging tied to ProgramState verbosity
- Rich formatting with timestamps, colors, and metadata
- ::warning:: / ::error:: annotations surfaced in the Actions UI
- Step outputs appended to $GITHUB_OUTPUT

Usage:
    from lib.log import LOG, LOG_warning, state_connectToLogger

    # At start of pipeline:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("This message appears if verbosity >= 1", level=1)
    LOG("Debug details appear if verbosity >= 2", level=2)
    LOG_warning("Always shown, annotated in the workflow run")
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# Configure loguru with autodesc-specific format
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <7}</level> │ "
    "<cyan>{function: <22}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Call this once before running the pipeline to make the state's
    verbosity setting available to LOG() calls throughout that context.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Verbosity levels:
        1 = Normal output (default)
        2 = Verbose (-v)
        3 = Debug (-vv or higher)
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).info(message, **kwargs)


def command_escape(message: str) -> str:
    """Escape a workflow-command payload (%, CR and LF must be encoded)"""
    return message.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')


def LOG_warning(message: str) -> None:
    """
    Emit a warning regardless of verbosity.

    The warning goes to loguru and is also printed as a ::warning:: command
    so it shows up as an annotation on the workflow run.
    """
    logger.opt(depth=1).warning(message)
    print(f"::warning::{command_escape(message)}", flush=True)


def LOG_error(message: str) -> None:
    """Emit an error regardless of verbosity (loguru + ::error:: command)"""
    logger.opt(depth=1).error(message)
    print(f"::error::{command_escape(message)}", flush=True)


def output_set(name: str, value: str, output_file: Optional[str] = None) -> None:
    """
    Expose a step output to later workflow steps.

    Args:
        name: Output name (e.g., "raw-url")
        value: Single-line output value
        output_file: Path from $GITHUB_OUTPUT; when None the value is only logged
    """
    if output_file:
        with open(output_file, 'a', encoding='utf-8') as f:
            f.write(f"{name}={value}\n")
    LOG(f"Output {name}={value}", level=2)
