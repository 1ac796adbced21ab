r"""
Escape-aware search and tracked replace

The two string primitives every tag engine is built from:

1. index_findUnescaped(): locate the next occurrence of a literal needle,
   skipping any occurrence the author has escaped with a backslash
2. text_replaceFirst(): splice a replacement over the first unescaped
   occurrence of a target and report where the replacement now starts

An occurrence at position i is escaped when an odd number of escape
characters sit directly before i. Doubled escapes are literal, so "\\**"
still matches "**" at position 2.

Example:
    >>> index_findUnescaped(r"\*a*", "*", 0)
    3
    >>> text_replaceFirst("**x**", "**", "<b>", 0)
    ('<b>x**', 0)
"""

from typing import Tuple


ESCAPE_CHARACTER = "\\"


class MarkupInvariantError(Exception):
    """Raised when a tracked replace is asked to replace text that is not there"""
    pass


def position_isEscaped(text: str, index: int, escape: str = ESCAPE_CHARACTER) -> bool:
    """
    Check whether the character at index is escaped

    Counts the run of escape characters directly before index; an odd
    run means the last one is live and suppresses this position.

    Args:
        text: Text being scanned
        index: Position to test
        escape: Escape character

    Returns:
        True if the position is escaped
    """
    run = 0
    i = index - 1
    while i >= 0 and text[i] == escape:
        run += 1
        i -= 1
    return run % 2 == 1


def index_findUnescaped(
    haystack: str, needle: str, start: int = 0, escape: str = ESCAPE_CHARACTER
) -> int:
    """
    Find the next unescaped occurrence of needle at or after start

    Args:
        haystack: Text to search
        needle: Literal substring to find (never empty)
        start: First position a match may begin at
        escape: Escape character

    Returns:
        Index of the match, or -1 if there is none
    """
    index = haystack.find(needle, max(start, 0))
    while index > -1:
        if not position_isEscaped(haystack, index, escape):
            return index
        index = haystack.find(needle, index + 1)
    return -1


def index_findUnescapedWhitespace(
    haystack: str, start: int = 0, escape: str = ESCAPE_CHARACTER
) -> int:
    """
    Find the next unescaped whitespace character at or after start

    Returns:
        Index of the whitespace character, or -1 if there is none
    """
    for index in range(max(start, 0), len(haystack)):
        if haystack[index].isspace() and not position_isEscaped(haystack, index, escape):
            return index
    return -1


def text_replaceFirst(
    text: str, target: str, replacement: str, fromIndex: int = 0
) -> Tuple[str, int]:
    """
    Replace the first unescaped occurrence of target at or after fromIndex

    Args:
        text: Text to splice
        target: Literal text to replace
        replacement: Text to insert in its place
        fromIndex: Position the search starts at

    Returns:
        Tuple of (new text, index where replacement begins in the new text)

    Raises:
        MarkupInvariantError: target does not occur at or after fromIndex
    """
    index = index_findUnescaped(text, target, fromIndex)
    if index < 0:
        raise MarkupInvariantError(
            f"Cannot replace {target!r}: no unescaped occurrence at or after {fromIndex}"
        )
    return text[:index] + replacement + text[index + len(target):], index


def text_escape(text: str, characters: str, escape: str = ESCAPE_CHARACTER) -> str:
    r"""
    Put an escape character in front of every listed character

    Escape characters already in the text are doubled, so escapes_consume()
    gives the original text back.

    Example:
        >>> text_escape("x.org/~me", "~^")
        'x.org/\\~me'
    """
    if not characters:
        return text
    return ''.join(
        escape + character if character == escape or character in characters else character
        for character in text
    )


def escapes_consume(text: str, escape: str = ESCAPE_CHARACTER) -> str:
    r"""
    Strip escape characters, keeping the characters they protect

    "\*" becomes "*", "\\" becomes "\", and a lone trailing escape
    character is kept as written.
    """
    if escape not in text:
        return text

    result = []
    pos = 0
    while pos < len(text):
        if text[pos] == escape and pos + 1 < len(text):
            result.append(text[pos + 1])
            pos += 2
        else:
            result.append(text[pos])
            pos += 1
    return ''.join(result)
