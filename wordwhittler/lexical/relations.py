"""
Relation Expander
=================
Turns a dictionary entry into its relation groups (synonyms, antonyms,
hypernyms, categories, category members) and assembles the lookup tree
shown for the word of interest.
"""

from typing import Iterable, List, Optional, Sequence

from .models import (
    POINTER_KINDS, EntryNode, LexicalEntry, LookupTree, RelationGroup,
    RelationKind, Word,
)
from .phrases import PhraseReduction
from .store import LexicalStore, normalize_lemma


def _sorted_words(words: Iterable[Word]) -> tuple:
    unique = {}
    for word in words:
        unique.setdefault(word, word)
    return tuple(sorted(unique, key=lambda w: (w.lemma, w.key)))


def synonyms(entry: LexicalEntry, reduction: Optional[PhraseReduction] = None) -> tuple:
    """
    Words sharing a sense with ``entry``, without the entry's own words.

    With a ``reduction``, single words already covered by a reduced phrase of
    the same sense are dropped too.
    """
    words = []
    for sense in entry.senses:
        for word in sense.words:
            if normalize_lemma(word.lemma) == entry.lemma.lower():
                continue
            if reduction is not None and reduction.suppresses(word):
                continue
            words.append(word)
    return _sorted_words(words)


def targets(store: LexicalStore, entry: LexicalEntry, kind: RelationKind) -> tuple:
    """Words of every sense reached from ``entry`` through ``kind``."""
    words = []
    for sense in entry.senses:
        for target in store.relation_targets(sense, kind):
            words.extend(target.words)
    return _sorted_words(words)


def expand(store: LexicalStore, entry: LexicalEntry,
           reduction: Optional[PhraseReduction] = None) -> List[RelationGroup]:
    """
    Relation groups for ``entry`` in display order, empty groups omitted.

    Store failures propagate; a sense is never skipped because its relation
    query failed.
    """
    groups = []

    synonym_words = synonyms(entry, reduction)
    if synonym_words:
        groups.append(RelationGroup(RelationKind.SYNONYM, synonym_words))

    for kind in POINTER_KINDS:
        words = targets(store, entry, kind)
        if words:
            groups.append(RelationGroup(kind, words))

    return groups


def build_tree(store: LexicalStore, surface: str, entries: Sequence[LexicalEntry],
               reduction: Optional[PhraseReduction] = None) -> LookupTree:
    ordered = sorted(entries, key=lambda e: (e.lemma.casefold(), e.lemma, e.pos.order))
    nodes = tuple(
        EntryNode(entry=entry, groups=tuple(expand(store, entry, reduction)))
        for entry in ordered
    )
    return LookupTree(surface=surface, entries=nodes)


def root_words(entries: Iterable[LexicalEntry]) -> str:
    """Distinct headwords of the lookup result, comma separated."""
    lemmas = []
    for entry in entries:
        if entry.lemma not in lemmas:
            lemmas.append(entry.lemma)
    return ', '.join(lemmas)


def full_definition(entries: Iterable[LexicalEntry]) -> str:
    """Every sense gloss, numbered and grouped under its part of speech."""
    blocks = []
    for entry in entries:
        lines = [entry.pos.label]
        for i, sense in enumerate(entry.senses, start=1):
            lines.append(f"{i} {sense.gloss}")
        blocks.append('\n'.join(lines))
    return '\n\n'.join(blocks).strip()
