"""
fancymark - Markdown to rich-text tag renderer

Converts a lightweight markdown dialect into TextMeshPro-style rich text
(or HTML) by pairing indicators and rewriting them in place.
"""

__version__ = "1.0.0"

from .lib import Renderer, markdown_toRichText, MarkupInvariantError, LOG, state_connectToLogger
from .config import RenderingSettings, renderingSettings_resolve, SettingsError

__all__ = [
    "Renderer",
    "markdown_toRichText",
    "MarkupInvariantError",
    "RenderingSettings",
    "renderingSettings_resolve",
    "SettingsError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
