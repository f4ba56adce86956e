"""
WordNet Lexical Store for WordWhittler
======================================
Serves dictionary entries, synonym sets and pointer relations from the
Princeton WordNet corpus through NLTK.

Features:
- Exact index lookup per part of speech (no morphological fallback)
- Antonym, hypernym, topic-domain and domain-member pointers
- Whole-vocabulary iteration for the phrase reducer

Requires: pip install nltk
Data: python -c "import nltk; nltk.download('wordnet')"
"""

from typing import List, Dict, Any, Iterable, Optional

from ..base import IntegrationBase
from ..config_logging import get_logger, StoreAccessError
from .models import LexicalEntry, PartOfSpeech, RelationKind, Sense, Word
from .store import LexicalStore, normalize_lemma

logger = get_logger('wordwhittler.wordnet')


class WordNetStore(IntegrationBase, LexicalStore):
    """
    WordNet-backed lexical store.

    WordNet keeps the headword inside its own synset, so synonym groups built
    from these senses must leave the entry's own lemma out.
    """

    INTEGRATION_NAME = "WordNet"
    INTEGRATION_VERSION = "1.0.0"

    def __init__(self, data_dir: Optional[str] = None, download: bool = True):
        """
        Initialize the store.

        Args:
            data_dir: Extra NLTK data directory to search (and download into)
            download: Fetch the corpus when it is not installed
        """
        super().__init__()
        self._wn = None
        self._data_dir = data_dir
        self._download = download
        self._initialize()

    def _initialize(self):
        """Load the WordNet corpus reader."""
        try:
            import nltk
            from nltk.corpus import wordnet as wn

            if self._data_dir and self._data_dir not in nltk.data.path:
                nltk.data.path.insert(0, self._data_dir)

            try:
                wn.ensure_loaded()
            except LookupError:
                if not self._download:
                    raise
                logger.info("WordNet corpus missing, downloading", data_dir=self._data_dir)
                nltk.download('wordnet', download_dir=self._data_dir, quiet=True)
                wn.ensure_loaded()

            self._wn = wn
            self._available = True

        except ImportError as e:
            self._error = f"nltk not installed: {e}"
            self._available = False
            logger.warning(self._error)
        except Exception as e:
            self._error = f"Failed to initialize WordNet: {e}"
            self._available = False
            logger.warning(self._error)

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the WordNet integration."""
        status = {
            'available': self.is_available,
            'error': self._error,
            'features': ['lookup', 'synonyms', 'antonyms', 'hypernyms', 'categories']
            if self.is_available else []
        }
        if self.is_available:
            try:
                status['version'] = self._wn.get_version()
            except Exception:
                status['version'] = 'unknown'
        return status

    def _reader(self):
        if not self.is_available:
            raise StoreAccessError(self._error or "WordNet is not available", operation='load')
        return self._wn

    # ------------------------------------------------------------------
    # Conversion from NLTK objects

    @staticmethod
    def _word(lemma, synset) -> Word:
        return Word(
            key=f"{synset.name()}.{lemma.name()}",
            lemma=lemma.name().replace('_', ' '),
            pos=PartOfSpeech.from_code(synset.pos()),
            sense_id=synset.name(),
            gloss=synset.definition(),
        )

    def _sense(self, synset) -> Sense:
        return Sense(
            id=synset.name(),
            pos=PartOfSpeech.from_code(synset.pos()),
            gloss=synset.definition(),
            words=tuple(self._word(lemma, synset) for lemma in synset.lemmas()),
        )

    # ------------------------------------------------------------------
    # LexicalStore

    def lookup_entry(self, pos: PartOfSpeech, lemma: str) -> Optional[LexicalEntry]:
        wn = self._reader()
        index_lemma = normalize_lemma(lemma)
        try:
            # wn.lemmas() keeps only lemmas spelled exactly like the query
            lemmas = wn.lemmas(index_lemma.replace(' ', '_'), pos=pos.code)
            synsets = []
            for lemma_obj in lemmas:
                synset = lemma_obj.synset()
                if synset not in synsets:
                    synsets.append(synset)
            senses = tuple(self._sense(s) for s in synsets)
        except Exception as e:
            raise StoreAccessError(f"WordNet lookup failed: {e}", operation='lookup_entry',
                                   lemma=lemma, pos=pos.label) from e

        if not senses:
            return None
        return LexicalEntry(lemma=index_lemma, pos=pos, senses=senses)

    def all_entries(self, pos: PartOfSpeech) -> Iterable[LexicalEntry]:
        wn = self._reader()
        try:
            names = sorted(wn.all_lemma_names(pos=pos.code))
        except Exception as e:
            raise StoreAccessError(f"WordNet index scan failed: {e}", operation='all_entries',
                                   pos=pos.label) from e
        for name in names:
            entry = self.lookup_entry(pos, name)
            if entry is not None:
                yield entry

    def relation_targets(self, sense: Sense, kind: RelationKind) -> List[Sense]:
        if not kind.is_pointer:
            raise ValueError(f"Not a pointer relation: {kind}")
        wn = self._reader()
        try:
            synset = wn.synset(sense.id)
            if kind is RelationKind.ANTONYM:
                targets = [ant.synset() for lemma in synset.lemmas() for ant in lemma.antonyms()]
            elif kind is RelationKind.HYPERNYM:
                targets = synset.hypernyms()
            elif kind is RelationKind.CATEGORY:
                targets = synset.topic_domains()
            else:
                targets = synset.in_topic_domains()
        except Exception as e:
            raise StoreAccessError(f"WordNet relation query failed: {e}",
                                   operation='relation_targets', sense=sense.id,
                                   kind=kind.name) from e

        seen = []
        for target in targets:
            if target not in seen:
                seen.append(target)
        return [self._sense(t) for t in seen]
