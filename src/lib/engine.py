"""
Tag engine for indicator-delimited inline styles

A single scanning algorithm serves every inline style. What differs
between styles is only how the end of the wrapped text is found, which
is delegated to a span-locating strategy chosen by the style's kind:

- SYMMETRIC: the same indicator closes the span (**bold**)
- ASYMMETRIC: whitespace or end of line closes a single word (^word),
  or ")" closes a parenthetical (^(two words))
- LINK: "](" ends the label and ")" ends the destination ([label](url))

The scan keeps a cursor into the line. Each round finds the next
indicator, asks the strategy for a candidate span, and checks the span
against a small set of rules. A rejected span leaves the indicator as
literal text and moves the cursor one character past it; an accepted
span is rewritten and the cursor moves past the inserted close tag.
Nothing raises on malformed markup.

Example:
    >>> from fancymark.models import MarkdownLine, StyleDescriptor, EngineKind
    >>> bold = StyleDescriptor("bold", EngineKind.SYMMETRIC, "**", "<b>", "</b>")
    >>> line = MarkdownLine("**a** and ****")
    >>> TagProcessor(bold).line_process(line)
    1
    >>> line.buffer
    '<b>a</b> and ****'
"""

from typing import Callable, Dict, Optional

from ..models.line import MarkdownLine
from ..models.styles import EngineKind, StyleDescriptor, TagSpan
from .log import LOG
from .processor import LineProcessor
from .search import text_escape


PAREN_OPEN = "("
PAREN_CLOSE = ")"
LINK_SEPARATOR = "]("
LINK_LABEL_CLOSE = "]"


SpanLocator = Callable[[MarkdownLine, StyleDescriptor, int], Optional[TagSpan]]


def symmetricSpan_locate(
    line: MarkdownLine, style: StyleDescriptor, openIndex: int
) -> Optional[TagSpan]:
    """
    Pair the indicator at openIndex with the next indicator after it

    The close may directly abut the open; that case is rejected later
    as empty content.

    Returns:
        Candidate span, or None when no closing indicator remains
    """
    contentStart = openIndex + len(style.indicator)
    closeIndex = line.unescapedIndex_find(style.indicator, contentStart)
    if closeIndex < 0:
        return None
    return TagSpan(
        open_start=openIndex,
        open_end=contentStart,
        close_start=closeIndex,
        close_end=closeIndex + len(style.indicator),
    )


def asymmetricSpan_locate(
    line: MarkdownLine, style: StyleDescriptor, openIndex: int
) -> Optional[TagSpan]:
    """
    Pair the indicator at openIndex with a word or parenthetical terminator

    "^(a b)" is parenthetical and ends at the next unescaped ")".
    Anything else is a single word ending at the next unescaped
    whitespace, or at the end of the line.

    Returns:
        Candidate span, or None when the line offers no terminator
    """
    contentStart = openIndex + len(style.indicator)
    if contentStart >= len(line):
        return None

    if line[contentStart] == PAREN_OPEN:
        contentStart += 1
        closeIndex = line.unescapedIndex_find(PAREN_CLOSE, contentStart)
        if closeIndex < 0:
            return None
        return TagSpan(
            open_start=openIndex,
            open_end=contentStart,
            close_start=closeIndex,
            close_end=closeIndex + 1,
            target=line.buffer[contentStart:closeIndex],
            whitespace_edges=False,
        )

    closeIndex = line.unescapedWhitespace_find(contentStart)
    if closeIndex < 0:
        closeIndex = len(line)
        trailer = ""
        closeEnd = closeIndex
    else:
        trailer = line[closeIndex]
        closeEnd = closeIndex + 1

    target = line.buffer[contentStart:closeIndex]
    if style.keep_indicator:
        target = style.indicator + target
    return TagSpan(
        open_start=openIndex,
        open_end=contentStart,
        close_start=closeIndex,
        close_end=closeEnd,
        target=target,
        trailer=trailer,
    )


def linkSpan_locate(
    line: MarkdownLine, style: StyleDescriptor, openIndex: int
) -> Optional[TagSpan]:
    """
    Pair "[" at openIndex with the "](destination)" that follows the label

    Returns:
        Candidate span, or None when the label or destination never closes
    """
    labelStart = openIndex + len(style.indicator)
    labelEnd = line.unescapedIndex_find(LINK_SEPARATOR, labelStart)
    if labelEnd < 0:
        return None
    destinationStart = labelEnd + len(LINK_SEPARATOR)
    destinationEnd = line.unescapedIndex_find(PAREN_CLOSE, destinationStart)
    if destinationEnd < 0:
        return None

    span = TagSpan(
        open_start=openIndex,
        open_end=labelStart,
        close_start=labelEnd,
        close_end=destinationEnd + 1,
        target=line.buffer[destinationStart:destinationEnd].strip(),
    )
    # "[a] and [b](url)" must not link "a] and [b"
    if line.unescapedIndex_find(LINK_LABEL_CLOSE, labelStart) != labelEnd:
        span.malformed = True
    return span


SPAN_LOCATORS: Dict[EngineKind, SpanLocator] = {
    EngineKind.SYMMETRIC: symmetricSpan_locate,
    EngineKind.ASYMMETRIC: asymmetricSpan_locate,
    EngineKind.LINK: linkSpan_locate,
}


def span_isTaggable(line: MarkdownLine, style: StyleDescriptor, span: TagSpan) -> bool:
    """
    Check a candidate span against the rules every style shares

    A span is rejected when:
    - it is malformed or has no content ("****" stays four asterisks)
    - its content starts with the indicator's first character; the last
      indicator of a run always wins, so "*****x***" bolds only "x".
      Indicators mixing characters ("https://") only reject a content
      that starts with the whole indicator
    - its content starts or ends with whitespace ("* x*" is not italic);
      parenthetical spans are exempt
    - its content is nothing but fill or escape characters ("~~~~~")
    - the style must start a word and the indicator does not
    - it is a link without a destination

    Returns:
        True if the span may be rewritten into tags
    """
    if span.malformed or span.content_empty:
        return False

    buffer = line.buffer
    if style.word_start_only and span.open_start > 0 and not buffer[span.open_start - 1].isspace():
        return False

    first = buffer[span.open_end]
    last = buffer[span.close_start - 1]

    if style.indicator_isRun:
        if first == style.indicator[0]:
            return False
    elif buffer.startswith(style.indicator, span.open_end):
        return False

    if span.whitespace_edges and (first.isspace() or last.isspace()):
        return False

    if all(
        style.content_isFiller(character, line.escapeCharacter)
        for character in buffer[span.open_end:span.close_start]
    ):
        return False

    if style.kind is EngineKind.LINK and not span.target:
        return False

    return True


def span_apply(line: MarkdownLine, style: StyleDescriptor, span: TagSpan) -> int:
    """
    Rewrite an accepted span into open and close tags

    The open text is replaced first, which shifts every later index by
    the difference in length; the close text is then replaced at its
    shifted position. Verbatim content gets its indicator characters
    escaped in between, which shifts the close text again.

    Returns:
        Cursor position just past the inserted close tag
    """
    openText = line.buffer[span.open_start:span.open_end]
    content = line.buffer[span.open_end:span.close_start]
    closeText = line.buffer[span.close_start:span.close_end]

    openTag = style.openTag_render(span.target, line.escapeCharacter)
    if style.keep_indicator:
        openTag += style.indicator
    closeTag = style.close_tag + span.trailer

    line.target_replaceFirst(openText, openTag, span.open_start)
    shift = len(openTag) - len(openText)

    if style.content_verbatim:
        protected = text_escape(content, style.protected, line.escapeCharacter)
        if protected != content:
            line.target_replaceFirst(content, protected, span.open_end + shift)
            shift += len(protected) - len(content)

    if closeText:
        closeStart = line.target_replaceFirst(closeText, closeTag, span.close_start + shift)
    else:
        closeStart = line.text_append(closeTag)

    return closeStart + len(style.close_tag)


class TagProcessor(LineProcessor):
    """
    Line processor bound to one inline style

    Args:
        style: Resolved style descriptor; its kind selects the span strategy

    Example:
        >>> sup = StyleDescriptor("superscript", EngineKind.ASYMMETRIC, "^", "<sup>", "</sup>")
        >>> line = MarkdownLine("x^2 and e^(i pi)")
        >>> TagProcessor(sup).line_process(line)
        2
        >>> line.buffer
        'x<sup>2</sup> and e<sup>i pi</sup>'
    """

    def __init__(self, style: StyleDescriptor) -> None:
        self.style = style
        self.name = style.name
        self.span_locate: SpanLocator = SPAN_LOCATORS[style.kind]
        if style.kind is EngineKind.SYMMETRIC:
            self.minimumRemaining = len(style.indicator) * 2
        else:
            self.minimumRemaining = len(style.indicator)

    def line_process(self, line: MarkdownLine) -> int:
        """
        Single left-to-right pass over one line

        Returns:
            Number of spans rewritten into tags
        """
        style = self.style
        rewrites = 0
        index = 0

        while index < len(line) - self.minimumRemaining:
            openIndex = line.unescapedIndex_find(style.indicator, index)
            if openIndex < 0:
                break

            span = self.span_locate(line, style, openIndex)
            if span is None:
                break

            if not span_isTaggable(line, style, span):
                index = openIndex + 1
                continue

            index = span_apply(line, style, span)
            rewrites += 1

        if rewrites:
            LOG(f"{self.name}: {rewrites} span(s) tagged in {line.buffer!r}", level=3)
        return rewrites
