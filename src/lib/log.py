"""
Centralized logging using Loguru with context-aware verbosity.

LOG() checks the verbosity of whichever ProgramState (or any object with a
``verbosity`` attribute) is connected to the current context, so the
renderer and its processors can log without being handed a state.

Usage:
    from fancymark.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Rendering 12 lines", level=2)
    LOG("bold: 1 span(s) tagged", level=3)

With nothing connected, LOG() is silent; library callers that never build
a ProgramState get no output.
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <22}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a state object to the logging context.

    Args:
        state: Object exposing an integer ``verbosity`` attribute
               (ProgramState, or a Renderer running outside the CLI)
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the connected state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Example:
        LOG("Wrote notes.rt", level=1)
        LOG("Built 12 processors", level=2)
        LOG("italics: 2 span(s) tagged in '<i>a</i> <i>b</i>'", level=3)
    """
    state = _program_state.get()

    if state is not None and getattr(state, 'verbosity', 0) >= level:
        logger.opt(depth=1).debug(message, **kwargs)
