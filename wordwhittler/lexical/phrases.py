"""
Phrase Reducer
==============
Finds multiword synonyms that make a single-word synonym of the same sense
redundant: "bucket" need not stand alone next to "kick the bucket".

The reduction is a whole-vocabulary pass meant to run once per session.
"""

from collections.abc import Mapping
from typing import Dict, FrozenSet, Iterator, List, Optional, Set, Tuple

from ..config_logging import get_logger
from .models import PartOfSpeech, Sense, Word
from .store import LexicalStore

logger = get_logger('wordwhittler.phrases')


def normalize_token(token: str) -> str:
    """Drop everything but letters and lowercase what remains."""
    return "".join(c for c in token if c.isalpha()).lower()


def phrase_tokens(lemma: str) -> FrozenSet[str]:
    return frozenset(normalize_token(part) for part in lemma.split(' '))


def has_uppercase(lemma: str) -> bool:
    return any(c.isupper() for c in lemma)


def partition_words(sense: Sense):
    """
    Split a sense's words into (multiword, single) lists.

    Words with an uppercase letter are proper-noun-like and left out of both.
    """
    multiword: List[Word] = []
    single: List[Word] = []
    for word in sense.words:
        if has_uppercase(word.lemma):
            continue
        if ' ' in word.lemma:
            multiword.append(word)
        else:
            single.append(word)
    return multiword, single


def _reduce(sense: Sense) -> Tuple[Dict[str, int], Set[Word]]:
    multiword, single = partition_words(sense)
    if not multiword:
        return {}, set()

    tokens = {word: phrase_tokens(word.lemma) for word in multiword}
    subsumed: Set[Word] = set()
    for word in single:
        normalized = normalize_token(word.lemma)
        if normalized and any(normalized in t for t in tokens.values()):
            subsumed.add(word)

    remaining = [w for w in single if w not in subsumed]
    if not remaining:
        return {}, set()

    overlap = {
        word.lemma: sum(1 for s in subsumed if normalize_token(s.lemma) in tokens[word])
        for word in multiword
    }
    return overlap, subsumed


def reduce_sense(sense: Sense) -> Dict[str, int]:
    """
    Reduce one sense.

    Returns:
        Phrase lemma -> number of the sense's single words it subsumes, for
        every multiword lemma of the sense; empty when the sense contributes
        nothing (no phrase, or no single word left standing).
    """
    return _reduce(sense)[0]


def subsumed_words(sense: Sense) -> Set[Word]:
    """Single words of a qualifying sense that one of its phrases contains."""
    return _reduce(sense)[1]


class PhraseReduction(Mapping):
    """
    Read-only mapping from phrase to the sense it was reduced to.

    ``subsumed`` holds, per sense id, the keys of the single words made
    redundant by that sense's phrases. It covers every qualifying sense,
    including senses that lost a shared phrase to another sense.
    """

    def __init__(self, phrases: Dict[str, Sense],
                 subsumed: Optional[Dict[str, FrozenSet[str]]] = None):
        self._phrases = dict(phrases)
        self._subsumed = dict(subsumed or {})
        self._by_sense: Dict[str, List[str]] = {}
        for phrase, sense in self._phrases.items():
            self._by_sense.setdefault(sense.id, []).append(phrase)

    def __getitem__(self, phrase: str) -> Sense:
        return self._phrases[phrase]

    def __iter__(self) -> Iterator[str]:
        return iter(self._phrases)

    def __len__(self) -> int:
        return len(self._phrases)

    def phrases_for(self, sense: Sense) -> List[str]:
        return sorted(self._by_sense.get(sense.id, []))

    def suppresses(self, word: Word) -> bool:
        """True if ``word`` is a token of a phrase in its own qualifying sense."""
        return word.key in self._subsumed.get(word.sense_id, frozenset())

    def to_dict(self) -> Dict[str, str]:
        return {phrase: sense.id for phrase, sense in sorted(self._phrases.items())}


def reduce_all(store: LexicalStore) -> PhraseReduction:
    """
    Run the phrase reduction over every entry of ``store``.

    Entries are visited in part-of-speech then lemma order and each sense
    once. When a phrase occurs in several qualifying senses, a later sense
    only replaces the earlier one if it subsumes strictly more of the phrase's
    constituents.
    """
    phrases: Dict[str, Sense] = {}
    overlap: Dict[str, int] = {}
    subsumed: Dict[str, FrozenSet[str]] = {}
    seen_entries = set()
    seen_senses = set()

    with logger.log_operation('phrase reduction'):
        for pos in PartOfSpeech:
            for entry in sorted(store.all_entries(pos), key=lambda e: e.lemma):
                if entry in seen_entries:
                    continue
                seen_entries.add(entry)
                for sense in entry.senses:
                    if sense in seen_senses:
                        continue
                    seen_senses.add(sense)
                    counts, covered = _reduce(sense)
                    if covered:
                        subsumed[sense.id] = frozenset(w.key for w in covered)
                    for phrase, count in counts.items():
                        if phrase not in phrases or count > overlap[phrase]:
                            phrases[phrase] = sense
                            overlap[phrase] = count

        logger.info("Phrase reduction finished", entry_count=len(seen_entries),
                    sense_count=len(seen_senses), phrase_count=len(phrases),
                    suppressed_count=sum(len(keys) for keys in subsumed.values()))

    return PhraseReduction(phrases, subsumed)
