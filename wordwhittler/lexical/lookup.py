"""
Lexical lookup: every dictionary entry whose headword is the given string.
"""

from typing import List

from ..config_logging import MalformedInputError
from .models import LexicalEntry, PartOfSpeech
from .store import LexicalStore


def lookup(store: LexicalStore, surface: str) -> List[LexicalEntry]:
    """
    Look ``surface`` up once per part of speech.

    Args:
        store: Lexical store to query
        surface: Text to match; trimming is the caller's job

    Returns:
        Distinct entries sorted by lemma, then part-of-speech order.
        Empty when nothing matches.

    Raises:
        MalformedInputError: ``surface`` is None, not a string, or empty
        StoreAccessError: the store failed to answer
    """
    if not isinstance(surface, str) or not surface:
        raise MalformedInputError("Lookup requires a non-empty string", field='surface')

    found = {}
    for pos in PartOfSpeech:
        entry = store.lookup_entry(pos, surface)
        if entry is not None and entry not in found:
            found[entry] = None

    return sorted(found, key=lambda e: (e.lemma, e.pos.order))
