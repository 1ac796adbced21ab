"""
Renderer: markdown document to rich-text document

Splits the source into MarkdownLine buffers, runs the processor pipeline
over all of them, and joins the finished lines back together.

Processors run strictly in order and each one sees the output of all
earlier ones. Lines never share state, so a processor's effect on one
line does not depend on any other line (setext headers, which pair a
line with its underline, are the single exception and live entirely
inside HeaderProcessor).

Example:
    >>> Renderer().render("**Hello** *world*")
    '<b>Hello</b> <i>world</i>\\n'
"""

from typing import List, Optional

from ..config.settings import RenderingSettings
from ..models.line import MarkdownLine
from .log import LOG
from .processors import processors_build


class Renderer:
    """
    Converts markdown source to rich text using a fixed processor pipeline

    Settings are resolved into processors once, at construction; a
    Renderer can then be reused for any number of documents.
    """

    def __init__(self, settings: Optional[RenderingSettings] = None) -> None:
        """
        Initialize renderer

        Args:
            settings: Rendering settings; defaults to RenderingSettings()
                      (the textmeshpro preset plus any FANCYMARK_RENDER_ env)
        """
        if settings is None:
            settings = RenderingSettings()
        self.settings = settings
        self.processors = processors_build(settings)

    def lines_split(self, source: str) -> List[MarkdownLine]:
        """One MarkdownLine per source line; a trailing newline adds no line"""
        return [MarkdownLine(text) for text in source.splitlines()]

    def lines_process(self, lines: List[MarkdownLine]) -> int:
        """
        Run every processor, in order, over all lines

        Returns:
            Total number of rewrites applied
        """
        rewrites = 0
        for processor in self.processors:
            applied = processor.process(lines)
            if applied:
                LOG(f"{processor.name}: {applied} rewrite(s)", level=2)
            rewrites += applied
        return rewrites

    def lines_assemble(self, lines: List[MarkdownLine]) -> str:
        """Join finished lines, each followed by the line separator"""
        separator = self.settings.line_separator
        return ''.join(
            line.finish() + separator for line in lines if not line.dropFromOutput
        )

    def render(self, source: Optional[str]) -> str:
        """
        Render a markdown document

        Args:
            source: Markdown text; None or "" renders to ""

        Returns:
            Rich-text document
        """
        if not source:
            return ""

        lines = self.lines_split(source)
        LOG(f"Rendering {len(lines)} line(s)", level=2)
        rewrites = self.lines_process(lines)
        LOG(f"Applied {rewrites} rewrite(s)", level=2)
        return self.lines_assemble(lines)


def markdown_toRichText(source: Optional[str], settings: Optional[RenderingSettings] = None) -> str:
    """
    Convert markdown source to rich text in one call

    Args:
        source: Markdown text
        settings: Optional rendering settings

    Returns:
        Rich-text document, one separator-terminated line per kept source line
    """
    return Renderer(settings).render(source)
