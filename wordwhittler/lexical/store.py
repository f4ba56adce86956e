"""
Lexical Store Interface
=======================
The three queries the lookup, relation and phrase components need from a
dictionary backend, and a dict-backed implementation for custom lexicons.

Any query may raise StoreAccessError; callers treat it as fatal.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from ..config_logging import StoreAccessError
from .models import LexicalEntry, PartOfSpeech, RelationKind, Sense, Word


class LexicalStore(ABC):
    """Abstract read-only dictionary backend."""

    @abstractmethod
    def lookup_entry(self, pos: PartOfSpeech, lemma: str) -> Optional[LexicalEntry]:
        """Return the entry whose index lemma matches ``lemma`` exactly, or None."""

    @abstractmethod
    def all_entries(self, pos: PartOfSpeech) -> Iterable[LexicalEntry]:
        """Iterate every entry for ``pos``."""

    @abstractmethod
    def relation_targets(self, sense: Sense, kind: RelationKind) -> List[Sense]:
        """Return the senses ``sense`` points to through ``kind``."""


def normalize_lemma(lemma: str) -> str:
    """Index form used by the stores: lowercase, single spaces."""
    return ' '.join(lemma.replace('_', ' ').split()).lower()


class MemoryStore(LexicalStore):
    """
    Dictionary held in memory.

    Senses are added with their synonym sets; entries are derived from the
    words so that every lemma gets one entry per part of speech, with its
    senses in insertion order.

    JSON layout accepted by ``from_dict``/``load``::

        {"senses": [{"id": "bank.n.01", "pos": "n", "gloss": "...",
                     "words": ["bank", "depository financial institution"],
                     "relations": {"hypernym": ["institution.n.01"]}}]}
    """

    def __init__(self):
        self._senses: Dict[str, Sense] = {}
        self._index: Dict[PartOfSpeech, Dict[str, List[str]]] = {pos: {} for pos in PartOfSpeech}
        self._relations: Dict[str, Dict[RelationKind, List[str]]] = {}
        self._entries: Dict[tuple, LexicalEntry] = {}

    def add_sense(self, pos: PartOfSpeech, sense_id: str, gloss: str,
                  lemmas: Sequence[str]) -> Sense:
        if sense_id in self._senses:
            raise ValueError(f"Duplicate sense id: {sense_id}")
        words = tuple(
            Word(key=f"{sense_id}.{lemma}", lemma=lemma, pos=pos,
                 sense_id=sense_id, gloss=gloss)
            for lemma in lemmas
        )
        sense = Sense(id=sense_id, pos=pos, gloss=gloss, words=words)
        self._senses[sense_id] = sense
        for word in words:
            index_lemma = normalize_lemma(word.lemma)
            sense_ids = self._index[pos].setdefault(index_lemma, [])
            if sense_id not in sense_ids:
                sense_ids.append(sense_id)
            self._entries.pop((pos, index_lemma), None)
        return sense

    def add_relation(self, source_id: str, kind: RelationKind, target_id: str):
        if not kind.is_pointer:
            raise ValueError("Synonyms come from shared senses, not from relations")
        targets = self._relations.setdefault(source_id, {}).setdefault(kind, [])
        if target_id not in targets:
            targets.append(target_id)

    def sense(self, sense_id: str) -> Sense:
        try:
            return self._senses[sense_id]
        except KeyError:
            raise StoreAccessError(f"Unknown sense: {sense_id}", operation='sense') from None

    def lookup_entry(self, pos: PartOfSpeech, lemma: str) -> Optional[LexicalEntry]:
        index_lemma = normalize_lemma(lemma)
        if index_lemma not in self._index[pos]:
            return None
        key = (pos, index_lemma)
        entry = self._entries.get(key)
        if entry is None:
            senses = tuple(self._senses[sid] for sid in self._index[pos][index_lemma])
            entry = LexicalEntry(lemma=index_lemma, pos=pos, senses=senses)
            self._entries[key] = entry
        return entry

    def all_entries(self, pos: PartOfSpeech) -> Iterable[LexicalEntry]:
        for lemma in list(self._index[pos]):
            yield self.lookup_entry(pos, lemma)

    def relation_targets(self, sense: Sense, kind: RelationKind) -> List[Sense]:
        if sense.id not in self._senses:
            raise StoreAccessError(f"Unknown sense: {sense.id}", operation='relation_targets')
        target_ids = self._relations.get(sense.id, {}).get(kind, [])
        return [self.sense(target_id) for target_id in target_ids]

    @classmethod
    def from_dict(cls, data: Dict) -> 'MemoryStore':
        store = cls()
        pending = []
        for item in data.get('senses', []):
            pos = PartOfSpeech.from_code(item.get('pos', 'n'))
            store.add_sense(pos, item['id'], item.get('gloss', ''), item.get('words', []))
            for kind_name, target_ids in item.get('relations', {}).items():
                kind = RelationKind[kind_name.upper().replace(' ', '_')]
                pending.extend((item['id'], kind, t) for t in target_ids)
        for source_id, kind, target_id in pending:
            store.add_relation(source_id, kind, target_id)
        return store

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'MemoryStore':
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreAccessError(f"Could not read lexicon {path}: {e}", operation='load') from e
        try:
            return cls.from_dict(data)
        except (KeyError, ValueError) as e:
            raise StoreAccessError(f"Malformed lexicon {path}: {e}", operation='load') from e

    def __len__(self) -> int:
        return len(self._senses)
