"""
Prefix processor tests

Tests headers (ATX and setext) and list markers, including the
skipFurtherProcessing / dropFromOutput flags setext underlines set.
"""

import pytest

from fancymark.config.settings import HeaderOptions, ListOptions
from fancymark.lib.prefix import HeaderProcessor, OrderedListProcessor, UnorderedListProcessor
from fancymark.models import MarkdownLine


def lines_make(*texts: str):
    return [MarkdownLine(text) for text in texts]


class TestAtxHeaders:
    """Test '#'-prefixed headers"""

    def setup_method(self):
        self.processor = HeaderProcessor(HeaderOptions())

    def test_level_one(self):
        lines = lines_make("# Title")
        self.processor.process(lines)
        assert lines[0].buffer == "<size=2em><b>Title</b></size>"

    def test_level_three(self):
        lines = lines_make("### Third")
        self.processor.process(lines)
        assert lines[0].buffer == "<size=1.5em><b>Third</b></size>"

    def test_trailing_whitespace_trimmed(self):
        lines = lines_make("## Two   ")
        self.processor.process(lines)
        assert lines[0].buffer == "<size=1.75em><b>Two</b></size>"

    @pytest.mark.parametrize("text", ["#hashtag", "####### seven", r"\# escaped", "text # not"])
    def test_not_headers(self, text):
        lines = lines_make(text)
        assert self.processor.process(lines) == 0
        assert lines[0].buffer == text

    def test_level_placeholder(self):
        processor = HeaderProcessor(HeaderOptions(open_tag="<h{level}>", close_tag="</h{level}>"))
        lines = lines_make("#### Four")
        processor.process(lines)
        assert lines[0].buffer == "<h4>Four</h4>"


class TestSetextHeaders:
    """Test underlined headers"""

    def setup_method(self):
        self.processor = HeaderProcessor(HeaderOptions())

    def test_equals_underline(self):
        lines = lines_make("Title", "=====")
        assert self.processor.process(lines) == 1
        assert lines[0].buffer == "<size=2em><b>Title</b></size>"
        assert lines[1].dropFromOutput is True
        assert lines[1].skipFurtherProcessing is True

    def test_dash_underline(self):
        lines = lines_make("Subtitle", "---")
        self.processor.process(lines)
        assert lines[0].buffer == "<size=1.75em><b>Subtitle</b></size>"
        assert lines[1].dropFromOutput is True

    def test_underline_after_blank_line(self):
        """An underline with nothing above it is left alone"""
        lines = lines_make("", "===")
        assert self.processor.process(lines) == 0
        assert lines[1].dropFromOutput is False

    def test_underline_at_start(self):
        lines = lines_make("===")
        assert self.processor.process(lines) == 0

    def test_underline_after_atx_header(self):
        """An ATX header is not turned into a header twice"""
        lines = lines_make("# Title", "===")
        assert self.processor.process(lines) == 1
        assert lines[0].buffer == "<size=2em><b>Title</b></size>"
        assert lines[1].dropFromOutput is False

    def test_single_character_underline(self):
        lines = lines_make("Title", "=")
        assert self.processor.process(lines) == 0

    def test_skipped_previous_line(self):
        lines = lines_make("Title", "===")
        lines[0].skipFurtherProcessing = True
        assert self.processor.process(lines) == 0


class TestLists:
    """Test unordered and ordered list markers"""

    def test_unordered_markers(self):
        processor = UnorderedListProcessor(ListOptions())
        lines = lines_make("- dash", "* star", "+ plus")
        assert processor.process(lines) == 3
        assert [line.buffer for line in lines] == ["  • dash", "  • star", "  • plus"]

    def test_unordered_indentation_kept(self):
        processor = UnorderedListProcessor(ListOptions())
        lines = lines_make("    - nested")
        processor.process(lines)
        assert lines[0].buffer == "      • nested"

    @pytest.mark.parametrize("text", ["**bold**", "-dash", "---", "- ", "*italic*"])
    def test_not_unordered(self, text):
        processor = UnorderedListProcessor(ListOptions())
        lines = lines_make(text)
        assert processor.process(lines) == 0
        assert lines[0].buffer == text

    def test_ordered(self):
        processor = OrderedListProcessor(ListOptions())
        lines = lines_make("1. first", "2) second", "10. tenth")
        processor.process(lines)
        assert [line.buffer for line in lines] == ["  1. first", "  2. second", "  10. tenth"]

    def test_ordered_custom_prefix(self):
        processor = OrderedListProcessor(ListOptions(ordered_prefix="<indent=5%>{number}) "))
        lines = lines_make("3. third")
        processor.process(lines)
        assert lines[0].buffer == "<indent=5%>3) third"

    @pytest.mark.parametrize("text", ["1.5 million", "1.", "v1. beta"])
    def test_not_ordered(self, text):
        processor = OrderedListProcessor(ListOptions())
        lines = lines_make(text)
        assert processor.process(lines) == 0
        assert lines[0].buffer == text
