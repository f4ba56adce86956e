"""
Lexical Data Model
==================
Value types for dictionary entries, senses and the words that lexicalize
them, plus the presentation-only lookup tree built from them.

Words compare by store identity (``key``), never by lemma alone: two words
spelled the same in different senses are different words.
"""

from enum import Enum
from typing import Tuple, Dict, Any, Iterator, Optional
from dataclasses import dataclass, field


class PartOfSpeech(Enum):
    """Grammatical categories, in lookup order."""
    NOUN = ('n', 'noun')
    VERB = ('v', 'verb')
    ADJECTIVE = ('a', 'adjective')
    ADVERB = ('r', 'adverb')

    def __init__(self, code: str, label: str):
        self.code = code
        self.label = label

    @property
    def order(self) -> int:
        return _POS_ORDER[self]

    @classmethod
    def from_code(cls, code: str) -> 'PartOfSpeech':
        """Map a WordNet POS code to a part of speech (satellites are adjectives)."""
        if code == 's':
            code = 'a'
        for pos in cls:
            if pos.code == code:
                return pos
        raise ValueError(f"Unknown part-of-speech code: {code!r}")


_POS_ORDER = {pos: index for index, pos in enumerate(PartOfSpeech)}


class RelationKind(Enum):
    """Relation groups shown for an entry, in display order."""
    SYNONYM = 'synonyms'
    ANTONYM = 'antonyms'
    HYPERNYM = 'hypernyms'
    CATEGORY = 'categories'
    CATEGORY_MEMBER = 'category members'

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_pointer(self) -> bool:
        """True for kinds answered by the store's pointer query."""
        return self is not RelationKind.SYNONYM


# Store-backed kinds in display order; SYNONYM comes from shared senses.
POINTER_KINDS: Tuple[RelationKind, ...] = (
    RelationKind.ANTONYM,
    RelationKind.HYPERNYM,
    RelationKind.CATEGORY,
    RelationKind.CATEGORY_MEMBER,
)


@dataclass(frozen=True)
class Word:
    """One lexicalization of one sense."""
    key: str
    lemma: str = field(compare=False)
    pos: PartOfSpeech = field(compare=False)
    sense_id: str = field(compare=False)
    gloss: str = field(default="", compare=False, repr=False)

    @property
    def is_phrase(self) -> bool:
        return ' ' in self.lemma

    @property
    def label(self) -> str:
        return f"{self.lemma} ({self.pos.label})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'key': self.key,
            'lemma': self.lemma,
            'pos': self.pos.label,
            'sense_id': self.sense_id,
            'gloss': self.gloss,
        }


@dataclass(frozen=True)
class Sense:
    """One meaning: a gloss and its synonym set."""
    id: str
    pos: PartOfSpeech = field(compare=False)
    gloss: str = field(default="", compare=False)
    words: Tuple[Word, ...] = field(default=(), compare=False, repr=False)


@dataclass(frozen=True)
class LexicalEntry:
    """A headword for one part of speech and its ordered senses."""
    lemma: str
    pos: PartOfSpeech
    senses: Tuple[Sense, ...] = field(default=(), compare=False, repr=False)

    @property
    def label(self) -> str:
        return f"{self.lemma} ({self.pos.label})"


@dataclass(frozen=True)
class RelationGroup:
    """Targets of one relation kind for an entry."""
    kind: RelationKind
    targets: Tuple[Word, ...]

    @property
    def label(self) -> str:
        return self.kind.label

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.name.lower(),
            'label': self.label,
            'targets': [w.to_dict() for w in self.targets],
        }


@dataclass(frozen=True)
class EntryNode:
    """An entry and its relation groups as shown in the lookup tree."""
    entry: LexicalEntry
    groups: Tuple[RelationGroup, ...]

    @property
    def label(self) -> str:
        return self.entry.label

    def to_dict(self) -> Dict[str, Any]:
        return {
            'lemma': self.entry.lemma,
            'pos': self.entry.pos.label,
            'label': self.label,
            'groups': [g.to_dict() for g in self.groups],
        }


@dataclass(frozen=True)
class LookupTree:
    """
    Root of the lookup tree for the current word of interest.

    Holds nothing that cannot be recomputed from the lookup result.
    """
    surface: str = ""
    entries: Tuple[EntryNode, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def words(self) -> Iterator[Word]:
        """Leaves in display order."""
        for node in self.entries:
            for group in node.groups:
                yield from group.targets

    def first_word(self) -> Optional[Word]:
        return next(self.words(), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'surface': self.surface,
            'entries': [n.to_dict() for n in self.entries],
        }
