"""
LanguageTool Integration for WordWhittler
=========================================
Grammar and style checking of the editor text.

Requires: pip install language-tool-python
Note: First run downloads the LanguageTool server (~200MB) unless a
remote server is configured.
"""

import threading

__version__ = "1.0.0"

from .client import (
    LanguageToolClient, GrammarMatch, HIGHLIGHT_COLORS, clean_message, highlight_for,
)
from .checker import GrammarChecker, describe, match_at, region

# Lazy shared client - one server per process
_client = None
_lock = threading.Lock()


def get_client() -> LanguageToolClient:
    """Get the shared LanguageToolClient instance (lazy loaded)."""
    global _client
    if _client is None:
        with _lock:
            if _client is None:
                from ..config import get_config
                config = get_config().languagetool
                _client = LanguageToolClient(
                    language=config.language,
                    remote_server=config.remote_server,
                    disabled_rules=config.disabled_rules,
                    cache_size=config.cache_size,
                )
    return _client


def set_client(client: LanguageToolClient):
    """Replace the shared client (hosts and tests)."""
    global _client
    _client = client


def is_available() -> bool:
    """Check if LanguageTool is available."""
    try:
        return get_client().is_available
    except Exception:
        return False


def get_status() -> dict:
    """Get LanguageTool integration status."""
    try:
        return get_client().get_status()
    except Exception as e:
        return {
            'available': False,
            'error': str(e),
            'language': None,
        }


def get_checker() -> GrammarChecker:
    """Create a grammar checker honoring the configuration switch."""
    from ..config import is_enabled
    return GrammarChecker(enabled=is_enabled('languagetool'))
