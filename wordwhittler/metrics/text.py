"""
Text Metrics for WordWhittler
=============================
Counts shown in the editor's info table: characters, words, and the
length of the text as a tweet.
"""

import re
from typing import List, Optional
from dataclasses import dataclass

TWEET_LIMIT = 280
URL_WEIGHT = 23

_WORD_SEPARATORS = re.compile(r"\r?\n|\r| ")
_NUMERIC = re.compile(r"-?\d+(\.\d+)?")


def is_numeric(value: str) -> bool:
    return _NUMERIC.fullmatch(value) is not None


def is_url(token: str) -> bool:
    # TODO: recognise bare domains the way Twitter's link detection does
    return token.startswith('http://') or token.startswith('https://')


def character_count(text: str) -> int:
    return len(text)


def word_count(text: str) -> int:
    """Tokens between spaces and line breaks that are not blank."""
    return sum(1 for token in _WORD_SEPARATORS.split(text) if token.strip())


def tweet_length(text: str, url_weight: int = URL_WEIGHT) -> int:
    """
    Length of ``text`` as counted for a tweet.

    Spaces count as one character each and every link counts as
    ``url_weight`` characters whatever its real length.
    See https://developer.twitter.com/en/docs/counting-characters
    """
    total = 0
    for token in text.split(' '):
        total += url_weight if is_url(token) else len(token)
    # split() drops the separators themselves
    return total + text.count(' ')


def tweet_remaining(text: str, limit: int = TWEET_LIMIT, url_weight: int = URL_WEIGHT) -> int:
    return limit - tweet_length(text, url_weight)


@dataclass(frozen=True)
class InfoRow:
    """One name/value row of the info table."""
    name: str
    value: str

    @property
    def danger(self) -> bool:
        """Negative numbers are painted as warnings."""
        return is_numeric(self.value) and self.value.startswith('-')

    def to_dict(self):
        return {'name': self.name, 'value': self.value, 'danger': self.danger}


def info_rows(text: str, tweet_limit: int = TWEET_LIMIT, url_weight: int = URL_WEIGHT,
              readability: Optional[bool] = None) -> List[InfoRow]:
    """
    Rows of the info table for ``text``.

    Readability rows are added when textstat is available and ``readability``
    (default: the metrics configuration) allows it.
    """
    length = tweet_length(text, url_weight)
    rows = [
        InfoRow('Characters', str(character_count(text))),
        InfoRow('Words', str(word_count(text))),
        InfoRow('Twitter Characters', str(length)),
        InfoRow('Twitter Characters Remaining', str(tweet_limit - length)),
    ]

    if readability is None:
        from ..config import get_config
        readability = get_config().metrics.readability

    if readability:
        from . import get_calculator
        calculator = get_calculator()
        if calculator.is_available:
            report = calculator.analyze(text)
            if report.word_count:
                rows.append(InfoRow('Reading Ease', f"{report.flesch_reading_ease:g}"))
                rows.append(InfoRow('Grade Level', report.grade_level))

    return rows
