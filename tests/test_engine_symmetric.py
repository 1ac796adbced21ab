"""
Symmetric tag engine tests

Tests pairing of two occurrences of the same indicator:
1. Basic pairing and repeated spans on one line
2. The rejection rules (empty, chained, whitespace-edged, fill-only)
3. Escaping
4. Skipped lines
"""

import pytest

from fancymark.lib.engine import TagProcessor
from fancymark.models import EngineKind, MarkdownLine, StyleDescriptor


BOLD = StyleDescriptor("bold", EngineKind.SYMMETRIC, "**", "<b>", "</b>")
ITALICS = StyleDescriptor("italics", EngineKind.SYMMETRIC, "*", "<i>", "</i>")
STRIKE = StyleDescriptor("strikethrough", EngineKind.SYMMETRIC, "~~", "<s>", "</s>", ignore_fill="~")


def tagged(style: StyleDescriptor, text: str) -> str:
    """Run one style over one line and return the raw buffer"""
    line = MarkdownLine(text)
    TagProcessor(style).line_process(line)
    return line.buffer


class TestPairing:
    """Test spans that should be tagged"""

    def test_bold(self):
        assert tagged(BOLD, "**x**") == "<b>x</b>"

    def test_italics(self):
        assert tagged(ITALICS, "*word*") == "<i>word</i>"

    def test_inside_sentence(self):
        assert tagged(BOLD, "a **big** deal") == "a <b>big</b> deal"

    def test_two_spans(self):
        """Scanning resumes after the first close tag"""
        assert tagged(BOLD, "**a** and **b**") == "<b>a</b> and <b>b</b>"

    def test_inner_spaces_allowed(self):
        """Whitespace is only rejected at the content edges"""
        assert tagged(ITALICS, "*two words*") == "<i>two words</i>"

    def test_strikethrough(self):
        assert tagged(STRIKE, "~~gone~~") == "<s>gone</s>"

    def test_rewrite_count(self):
        line = MarkdownLine("*a* *b* *")
        assert TagProcessor(ITALICS).line_process(line) == 2
        assert line.buffer == "<i>a</i> <i>b</i> *"


class TestRejectionRules:
    """Test spans that must stay literal"""

    def test_empty_content(self):
        """'****' shows four asterisks instead of vanishing"""
        assert tagged(BOLD, "****") == "****"

    def test_empty_italics(self):
        assert tagged(ITALICS, "a ** b") == "a ** b"

    def test_chained_indicators_use_trailing_pair(self):
        """'*****x***' bolds x using the last indicator of the leading run"""
        assert tagged(BOLD, "*****x***") == "***<b>x</b>*"

    def test_three_asterisks_bold(self):
        assert tagged(BOLD, "***x***") == "*<b>x</b>*"

    def test_leading_whitespace(self):
        """'* x*' is not italicized"""
        assert tagged(ITALICS, "* x*") == "* x*"

    def test_trailing_whitespace(self):
        """'*x *' is not italicized"""
        assert tagged(ITALICS, "*x *") == "*x *"

    def test_spaced_bold(self):
        assert tagged(BOLD, "a ** b ** c") == "a ** b ** c"

    def test_fill_only(self):
        """'~~~~~' is five tildes, not one crossed-out tilde"""
        assert tagged(STRIKE, "~~~~~") == "~~~~~"

    def test_fill_and_escape_only(self):
        r"""Content made of escapes and fill characters is not taggable"""
        line = MarkdownLine(r"~~\~~~")
        TagProcessor(STRIKE).line_process(line)
        assert line.buffer == r"~~\~~~"
        assert line.finish() == "~~~~~"

    def test_escape_only(self):
        r"""Content made only of escape characters is not taggable"""
        assert tagged(ITALICS, r"*\\*") == r"*\\*"

    def test_unmatched(self):
        assert tagged(BOLD, "**open only") == "**open only"

    def test_too_short(self):
        """Lines shorter than two indicators are never scanned"""
        assert tagged(BOLD, "**") == "**"

    def test_rejected_span_does_not_block_later_span(self):
        assert tagged(ITALICS, "* x* *y*") == "* x* <i>y</i>"


class TestEscaping:
    """Test escape handling around indicators"""

    def test_escaped_open(self):
        r"""\**x** has no unescaped opening pair before the last **"""
        line = MarkdownLine(r"\**x**")
        TagProcessor(BOLD).line_process(line)
        assert line.buffer == r"\**x**"
        assert line.finish() == "**x**"

    def test_escaped_both(self):
        line = MarkdownLine(r"\*literal\*")
        TagProcessor(ITALICS).line_process(line)
        assert line.finish() == "*literal*"

    def test_doubled_escape_still_tags(self):
        r"""\\**x** keeps one literal backslash and bolds x"""
        line = MarkdownLine(r"\\**x**")
        TagProcessor(BOLD).line_process(line)
        assert line.buffer == r"\\<b>x</b>"
        assert line.finish() == r"\<b>x</b>"


class TestLineFlags:
    """Test that processors honor skipFurtherProcessing"""

    def test_skipped_line_untouched(self):
        lines = [MarkdownLine("**a**"), MarkdownLine("**b**", skipFurtherProcessing=True)]
        assert TagProcessor(BOLD).process(lines) == 1
        assert lines[0].buffer == "<b>a</b>"
        assert lines[1].buffer == "**b**"

    @pytest.mark.parametrize("text", ["", "no markup here", "x"])
    def test_no_indicators(self, text):
        assert tagged(BOLD, text) == text
