"""
fancymark - Markdown to rich-text tag renderer

Rewrites a lightweight markdown dialect into TextMeshPro-style (or HTML)
rich-text tags, one line buffer at a time.
"""

__version__ = "1.0.0"

from .renderer import Renderer, markdown_toRichText
from .engine import TagProcessor
from .search import MarkupInvariantError, index_findUnescaped, text_replaceFirst
from .log import LOG, state_connectToLogger

__all__ = [
    "Renderer",
    "markdown_toRichText",
    "TagProcessor",
    "MarkupInvariantError",
    "index_findUnescaped",
    "text_replaceFirst",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
