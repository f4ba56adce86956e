"""
Grammar Checker for WordWhittler
================================
Checker wrapper around the LanguageTool client used by the editor: runs
over the whole document and answers the tooltip and error-list questions.
"""

from typing import List, Optional, Sequence

from ..base import CheckerBase
from .client import LanguageToolClient, GrammarMatch


def region(text: str, match: GrammarMatch) -> str:
    """The flagged span of ``text``."""
    return text[match.start:match.end]


def describe(text: str, match: GrammarMatch) -> str:
    """Error-list label: the flagged text followed by the message."""
    return f"{region(text, match).strip()}: {match.message}"


def match_at(matches: Sequence[GrammarMatch], position: int) -> Optional[GrammarMatch]:
    """First match whose span includes ``position`` (bounds inclusive)."""
    for match in matches:
        if match.contains(position):
            return match
    return None


class GrammarChecker(CheckerBase):
    """
    Grammar and style checking using LanguageTool.

    The client is created on the first check so the Java server only
    starts when the editor actually has text to check.
    """

    CHECKER_NAME = "Grammar"
    CHECKER_VERSION = "1.0.0"

    def __init__(self, enabled: bool = True, client: Optional[LanguageToolClient] = None):
        super().__init__(enabled)
        self._client = client

    def _initialize(self) -> bool:
        if self._client is None:
            from . import get_client
            self._client = get_client()
        if not self._client.is_available:
            self._init_error = self._client.error
            return False
        return True

    def _check_impl(self, text: str) -> List[GrammarMatch]:
        if not text.strip():
            return []
        return self._client.check(text)

    @staticmethod
    def match_at(matches: Sequence[GrammarMatch], position: int) -> Optional[GrammarMatch]:
        return match_at(matches, position)

    @staticmethod
    def describe(text: str, match: GrammarMatch) -> str:
        return describe(text, match)

    def tooltip(self, text: str, matches: Sequence[GrammarMatch], position: int) -> Optional[str]:
        """Message to show when hovering over ``position``, if any."""
        match = match_at(matches, position)
        return match.message if match is not None else None
