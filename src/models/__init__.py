"""
Models package for fancymark

Contains data structures for the line buffers, style descriptors and the
CLI pipeline state.
"""

from .state import ProgramState, pipeline
from .line import MarkdownLine
from .styles import EngineKind, StyleDescriptor, TagSpan, TARGET_PLACEHOLDER

__all__ = [
    "ProgramState",
    "pipeline",
    "MarkdownLine",
    "EngineKind",
    "StyleDescriptor",
    "TagSpan",
    "TARGET_PLACEHOLDER",
]
