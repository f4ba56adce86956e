"""
Lookup Panel
============
State behind the dictionary side panel of the editor: the word of interest,
its entries, the relation tree, and the definition of the selected word.

A store failure is shown as an error on the panel; it never ends the
editing session.
"""

from typing import List, Optional, Tuple

from ..config_logging import get_logger, StoreAccessError
from ..selection import selection_of_interest
from .lookup import lookup
from .models import LexicalEntry, LookupTree, Word
from .phrases import PhraseReduction
from .relations import build_tree, full_definition, root_words
from .store import LexicalStore

logger = get_logger('wordwhittler.panel')


class LookupPanel:
    """Rebuilds the lookup tree every time the word of interest changes."""

    def __init__(self, store: LexicalStore, max_selection: int = 20,
                 reduction: Optional[PhraseReduction] = None):
        self.store = store
        self.max_selection = max_selection
        self.reduction = reduction
        self.selected_region: str = ""
        self.entries: List[LexicalEntry] = []
        self.tree: LookupTree = LookupTree()
        self.error: Optional[str] = None

    def clear(self):
        self.entries = []
        self.tree = LookupTree(surface=self.selected_region)
        self.error = None

    def set_word_of_interest(self, surface: str) -> LookupTree:
        """
        Look ``surface`` up and rebuild the tree.

        Blank text clears the panel without touching the store.
        """
        self.selected_region = surface or ""
        self.clear()

        word = self.selected_region.strip()
        if not word:
            return self.tree

        try:
            self.entries = lookup(self.store, word)
            self.tree = build_tree(self.store, word, self.entries, self.reduction)
        except StoreAccessError as e:
            logger.exception(f"Lookup failed for {word!r}: {e.message}", surface=word)
            self.entries = []
            self.tree = LookupTree(surface=word)
            self.error = e.message

        return self.tree

    def update_from_caret(self, text: str, dot: int, mark: int) -> LookupTree:
        """Derive the word of interest from the caret or selection."""
        return self.set_word_of_interest(
            selection_of_interest(text, dot, mark, self.max_selection)
        )

    def definition_for(self, word: Optional[Word]) -> str:
        return word.gloss if word is not None else ""

    def full_definition(self) -> str:
        return full_definition(self.entries)

    def root_words(self) -> str:
        return root_words(self.entries)

    def info_rows(self) -> List[Tuple[str, str]]:
        return [
            ('selection', self.selected_region),
            ('root(s)', self.root_words()),
        ]

    def to_dict(self):
        return {
            'selection': self.selected_region,
            'roots': self.root_words(),
            'tree': self.tree.to_dict(),
            'definition': self.full_definition(),
            'error': self.error,
        }
