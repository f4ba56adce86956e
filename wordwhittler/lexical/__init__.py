"""
Lexical Lookup for WordWhittler
===============================
Dictionary and thesaurus lookup for the word under the caret.

Features:
- Exact headword lookup across parts of speech
- Synonym, antonym, hypernym, category and category-member groups
- Whole-vocabulary phrase reduction

Requires: pip install nltk (for the WordNet store)
Data: python -c "import nltk; nltk.download('wordnet')"
"""

import threading
from pathlib import Path

__version__ = "1.0.0"

from .models import (
    PartOfSpeech, RelationKind, Word, Sense, LexicalEntry, RelationGroup,
    EntryNode, LookupTree, POINTER_KINDS,
)
from .store import LexicalStore, MemoryStore
from .lookup import lookup
from .relations import expand, build_tree, root_words, full_definition
from .phrases import PhraseReduction, reduce_all
from .panel import LookupPanel

# Lazy shared store
_store = None
_lock = threading.Lock()


def get_store() -> LexicalStore:
    """Get the shared lexical store chosen by configuration (lazy loaded)."""
    global _store
    if _store is None:
        with _lock:
            if _store is None:
                _store = _create_store()
    return _store


def _create_store() -> LexicalStore:
    from ..config import get_config
    config = get_config().lexicon
    if config.source and config.source != 'wordnet':
        return MemoryStore.load(Path(config.source).expanduser())
    from .wordnet import WordNetStore
    return WordNetStore(data_dir=config.data_dir, download=config.download)


def set_store(store: LexicalStore):
    """Replace the shared store (hosts and tests)."""
    global _store
    _store = store


def is_available() -> bool:
    """Check if lexical lookup is available."""
    try:
        store = get_store()
    except Exception:
        return False
    return getattr(store, 'is_available', True)


def get_status() -> dict:
    """Get lexical store status."""
    try:
        store = get_store()
    except Exception as e:
        return {'available': False, 'error': str(e)}
    if hasattr(store, 'get_status'):
        return store.get_status()
    return {
        'available': True,
        'error': None,
        'backend': type(store).__name__,
        'senses': len(store) if hasattr(store, '__len__') else None,
    }


def get_panel(max_selection: int = None) -> LookupPanel:
    """Create a lookup panel on the shared store."""
    from ..config import get_config
    config = get_config().panel
    if max_selection is None:
        max_selection = config.max_selection
    store = get_store()
    # The reduction scans the whole vocabulary, so it only runs when asked for
    reduction = reduce_all(store) if config.suppress_redundant_synonyms else None
    return LookupPanel(store, max_selection=max_selection, reduction=reduction)
