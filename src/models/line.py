"""
Line buffer model

One MarkdownLine per source line. Processors mutate the buffer in
pipeline order and use the two flags to coordinate with each other.
"""

from dataclasses import dataclass, field

from ..lib.search import (
    ESCAPE_CHARACTER,
    escapes_consume,
    index_findUnescaped,
    index_findUnescapedWhitespace,
    text_replaceFirst,
)


@dataclass
class MarkdownLine:
    r"""
    Mutable buffer for a single line of markdown source

    Attributes:
        buffer: Current text of the line, rewritten by each processor
        skipFurtherProcessing: Later processors must leave this line alone
        dropFromOutput: Line is left out when the document is assembled

    Example:
        >>> line = MarkdownLine(r"\**not bold**")
        >>> line.unescapedIndex_find("**", 0)
        11
        >>> line.finish()
        '**not bold**'
    """
    buffer: str = ""
    skipFurtherProcessing: bool = field(default=False)
    dropFromOutput: bool = field(default=False)

    escapeCharacter = ESCAPE_CHARACTER

    def __len__(self) -> int:
        return len(self.buffer)

    def __getitem__(self, index: int) -> str:
        return self.buffer[index]

    def unescapedIndex_find(self, needle: str, start: int = 0) -> int:
        """Index of the next unescaped needle at or after start, or -1"""
        return index_findUnescaped(self.buffer, needle, start, self.escapeCharacter)

    def unescapedWhitespace_find(self, start: int = 0) -> int:
        """Index of the next unescaped whitespace at or after start, or -1"""
        return index_findUnescapedWhitespace(self.buffer, start, self.escapeCharacter)

    def target_replaceFirst(self, target: str, replacement: str, fromIndex: int = 0) -> int:
        """
        Replace the first unescaped target at or after fromIndex

        Args:
            target: Literal text to replace
            replacement: Text spliced in its place
            fromIndex: Position the search starts at

        Returns:
            Index in the mutated buffer where replacement begins

        Raises:
            MarkupInvariantError: target is not in the buffer
        """
        self.buffer, start = text_replaceFirst(self.buffer, target, replacement, fromIndex)
        return start

    def text_append(self, text: str) -> int:
        """Append text to the buffer and return the index it starts at"""
        start = len(self.buffer)
        self.buffer += text
        return start

    def finish(self) -> str:
        """Final text of the line with escape characters consumed"""
        return escapes_consume(self.buffer, self.escapeCharacter)
