"""
Editor text helpers: which text the caret or selection points at.
"""

import re

_WORD = re.compile(r"\w+(?:['’-]\w+)*")


def word_at_caret(text: str, position: int) -> str:
    """
    Return the word containing the caret, or the word it sits right after.

    Returns an empty string when the caret is on whitespace or punctuation.
    """
    if not text:
        return ""
    position = max(0, min(position, len(text)))
    for match in _WORD.finditer(text):
        if match.start() > position:
            break
        if match.start() <= position <= match.end():
            return match.group()
    return ""


def selection_of_interest(text: str, dot: int, mark: int, max_length: int = 20) -> str:
    """
    Text to look up for a caret event.

    With no selection (``dot == mark``) this is the word at the caret;
    otherwise the selected text, cut to ``max_length`` characters.
    """
    if dot == mark:
        return word_at_caret(text, dot)
    start, end = sorted((dot, mark))
    return text[start:end][:max_length]
