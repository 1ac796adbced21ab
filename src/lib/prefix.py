"""
Prefix-based line processors

Headers and list markers are decided by how a line starts, so they need
no indicator pairing. A line that starts with an escape character never
matches, which lets authors write a literal "\\# not a header".
"""

import re
from typing import Sequence

from ..config.settings import HeaderOptions, ListOptions
from ..models.line import MarkdownLine
from .log import LOG
from .processor import LineProcessor


class HeaderProcessor(LineProcessor):
    """
    ATX headers ("## Title") and setext headers ("Title" over "=====")

    A setext underline consumes itself: the underline line is dropped
    from the output and closed to later processors.
    """

    name = "headers"

    SETEXT_UNDERLINE = re.compile(r"^ {0,3}(=+|-+)\s*$")

    def __init__(self, options: HeaderOptions) -> None:
        self.options = options
        marker = re.escape(options.indicator)
        self.atx_pattern = re.compile(rf"^ {{0,3}}({marker}{{1,6}})\s+(.*?)\s*$")

    def tags_make(self, level: int) -> tuple:
        size = self.options.sizes[level - 1]
        open_tag = self.options.open_tag.replace("{level}", str(level)).replace("{size}", size)
        close_tag = self.options.close_tag.replace("{level}", str(level)).replace("{size}", size)
        return open_tag, close_tag

    def header_apply(self, line: MarkdownLine, level: int, text: str) -> None:
        open_tag, close_tag = self.tags_make(level)
        line.buffer = f"{open_tag}{text}{close_tag}"

    def process(self, lines: Sequence[MarkdownLine]) -> int:
        rewrites = 0
        headers = set()
        for index, line in enumerate(lines):
            if line.skipFurtherProcessing:
                continue

            previous = index - 1
            if previous >= 0 and previous not in headers and self.setext_apply(lines[previous], line):
                rewrites += 1
                continue

            if self.line_process(line):
                headers.add(index)
                rewrites += 1
        return rewrites

    def setext_apply(self, previous: MarkdownLine, line: MarkdownLine) -> bool:
        """Turn previous into a header if line underlines it"""
        match = self.SETEXT_UNDERLINE.match(line.buffer)
        if not match or len(match.group(1)) < 2:
            return False
        if previous.skipFurtherProcessing or previous.dropFromOutput:
            return False
        if not previous.buffer.strip():
            return False

        level = 1 if match.group(1)[0] == "=" else 2
        self.header_apply(previous, level, previous.buffer.strip())
        line.dropFromOutput = True
        line.skipFurtherProcessing = True
        LOG(f"setext header (level {level}): {previous.buffer!r}", level=3)
        return True

    def line_process(self, line: MarkdownLine) -> int:
        match = self.atx_pattern.match(line.buffer)
        if not match:
            return 0
        level = len(match.group(1))
        self.header_apply(line, level, match.group(2))
        LOG(f"header (level {level}): {line.buffer!r}", level=3)
        return 1


class UnorderedListProcessor(LineProcessor):
    """Replaces "- item", "* item" and "+ item" markers with a bullet"""

    name = "unordered lists"

    MARKER = re.compile(r"^(\s*)[-*+]\s+(?=\S)")

    def __init__(self, options: ListOptions) -> None:
        self.options = options

    def line_process(self, line: MarkdownLine) -> int:
        match = self.MARKER.match(line.buffer)
        if not match:
            return 0
        line.buffer = match.group(1) + self.options.unordered_prefix + line.buffer[match.end():]
        return 1


class OrderedListProcessor(LineProcessor):
    """Replaces "1. item" and "1) item" markers with the ordered prefix"""

    name = "ordered lists"

    MARKER = re.compile(r"^(\s*)(\d{1,9})[.)]\s+(?=\S)")

    def __init__(self, options: ListOptions) -> None:
        self.options = options

    def line_process(self, line: MarkdownLine) -> int:
        match = self.MARKER.match(line.buffer)
        if not match:
            return 0
        prefix = self.options.ordered_prefix.replace("{number}", match.group(2))
        line.buffer = match.group(1) + prefix + line.buffer[match.end():]
        return 1
