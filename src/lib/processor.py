"""
Base class for line processors

A processor runs once over every line of a document, skipping lines an
earlier processor has closed to further processing.
"""

from typing import Sequence

from ..models.line import MarkdownLine


class LineProcessor:
    """
    One stage of the rendering pipeline

    Subclasses implement line_process(); process() applies it to every
    line that is still open for processing.
    """

    name: str = "processor"

    def process(self, lines: Sequence[MarkdownLine]) -> int:
        """
        Run this processor over a document

        Args:
            lines: All lines of the document, in order

        Returns:
            Number of rewrites applied across all lines
        """
        rewrites = 0
        for line in lines:
            if line.skipFurtherProcessing:
                continue
            rewrites += self.line_process(line)
        return rewrites

    def line_process(self, line: MarkdownLine) -> int:
        """Rewrite a single line in place, returning the number of rewrites"""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name='{self.name}')"
