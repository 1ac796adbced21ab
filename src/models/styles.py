"""
Style descriptor models

Describes each inline style as plain data: which indicator marks it,
which tags it becomes, and which engine strategy pairs it. The tag
engine is parameterized entirely by these values.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Optional

from ..lib.search import ESCAPE_CHARACTER, text_escape


TARGET_PLACEHOLDER = "{target}"


class EngineKind(Enum):
    """
    How a style locates the end of the text it wraps
    """
    SYMMETRIC = "symmetric"      # **bold**, ~~strike~~
    ASYMMETRIC = "asymmetric"    # ^word, ^(some words), https://host/path
    LINK = "link"                # [label](destination)


@dataclass(frozen=True)
class StyleDescriptor:
    """
    Resolved configuration for one inline style

    Attributes:
        name: Style name, used for logging (e.g., "bold")
        kind: Engine strategy used to pair the indicator
        indicator: Literal markdown token (e.g., "**")
        open_tag: Rich-text open tag; may contain {target}
        close_tag: Rich-text close tag
        ignore_fill: Character that never counts as taggable content
        keep_indicator: Emit the indicator inside the tags instead of
                        dropping it (autolinks keep "https://")
        word_start_only: Indicator only matches at the start of a word
        content_verbatim: Wrapped text is shown as written and closed to
                          later styles (autolinks)
        protected: Indicator characters escaped in a {target} and in
                   verbatim content, so later styles never re-scan them

    Example:
        StyleDescriptor(name="bold", kind=EngineKind.SYMMETRIC,
                        indicator="**", open_tag="<b>", close_tag="</b>")
    """
    name: str
    kind: EngineKind
    indicator: str
    open_tag: str
    close_tag: str
    ignore_fill: Optional[str] = None
    keep_indicator: bool = False
    word_start_only: bool = False
    content_verbatim: bool = False
    protected: str = ""

    @property
    def indicator_isRun(self) -> bool:
        """Indicator repeats a single character ("*", "**", "~~")"""
        return len(set(self.indicator)) == 1

    def openTag_render(self, target: str = "", escape: str = ESCAPE_CHARACTER) -> str:
        """Open tag with {target} filled in and its indicator characters escaped"""
        return self.open_tag.replace(TARGET_PLACEHOLDER, text_escape(target, self.protected, escape))

    def content_isFiller(self, character: str, escape: str) -> bool:
        """Whether a content character is fill or escape only"""
        return character == escape or (
            self.ignore_fill is not None and character == self.ignore_fill
        )


@dataclass
class TagSpan:
    """
    One candidate indicator pairing found in a line

    Positions are indices into the line buffer at the time the span was
    located. Content is buffer[open_end:close_start].

    Attributes:
        open_start: Start of the open indicator
        open_end: End of the open text (indicator, plus "(" when parenthetical)
        close_start: Start of the closing text
        close_end: End of the closing text (equals close_start at end of line)
        target: Destination handed to the open tag's {target}
        trailer: Terminator re-emitted after the close tag
        whitespace_edges: Whether content may not begin or end with whitespace
        malformed: Span is structurally unusable (a link label holding "]")
    """
    open_start: int
    open_end: int
    close_start: int
    close_end: int
    target: str = field(default="")
    trailer: str = field(default="")
    whitespace_edges: bool = field(default=True)
    malformed: bool = field(default=False)

    @property
    def content_empty(self) -> bool:
        return self.open_end >= self.close_start
