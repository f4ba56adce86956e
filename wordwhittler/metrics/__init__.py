"""
Text Metrics for WordWhittler
=============================
Character, word and tweet-length counts plus textstat readability scores.

Requires: pip install textstat (readability rows only)
"""

__version__ = "1.0.0"

from .text import (
    InfoRow, character_count, word_count, tweet_length, tweet_remaining,
    info_rows, is_numeric, is_url, TWEET_LIMIT, URL_WEIGHT,
)

# Lazy imports
_calculator = None


def get_calculator():
    """Get the shared ReadabilityCalculator instance (lazy loaded)."""
    global _calculator
    if _calculator is None:
        from .readability import ReadabilityCalculator
        _calculator = ReadabilityCalculator()
    return _calculator


def is_available() -> bool:
    """Check if readability scoring is available."""
    try:
        return get_calculator().is_available
    except Exception:
        return False


def get_status() -> dict:
    """Get metrics integration status."""
    try:
        status = get_calculator().get_status()
    except Exception as e:
        status = {'available': False, 'error': str(e)}
    # Counts never depend on textstat
    status['counts'] = True
    return status


def compute(text: str):
    """Info table rows for ``text`` using the metrics configuration."""
    from ..config import get_config
    config = get_config().metrics
    return info_rows(text, tweet_limit=config.tweet_limit, url_weight=config.url_weight,
                     readability=config.readability)
