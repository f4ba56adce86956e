"""
Shared fixtures: small in-memory lexicons and a clean configuration per test.
"""

import os

import pytest

from wordwhittler import config
from wordwhittler.lexical import MemoryStore, PartOfSpeech, RelationKind

NOUN = PartOfSpeech.NOUN
VERB = PartOfSpeech.VERB
ADJ = PartOfSpeech.ADJECTIVE


@pytest.fixture(autouse=True)
def clean_config(monkeypatch, tmp_path):
    """Defaults only: no config file, no WW_* overrides, no shared singletons."""
    for name in list(os.environ):
        if name.startswith('WW_'):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('WW_CONFIG_FILE', str(tmp_path / 'wordwhittler_config.json'))
    monkeypatch.setattr(config, '_config', None)

    import wordwhittler.lexical as lexical
    import wordwhittler.languagetool as languagetool
    monkeypatch.setattr(lexical, '_store', None)
    monkeypatch.setattr(languagetool, '_client', None)
    yield


@pytest.fixture
def bank_store() -> MemoryStore:
    """
    "bank" as a noun with two senses, plus the senses its pointers reach.

    bank.n.01 is the financial sense, bank.n.02 the river sense.
    """
    store = MemoryStore()
    store.add_sense(NOUN, 'bank.n.01', 'a financial institution that accepts deposits',
                    ['bank', 'depository financial institution'])
    store.add_sense(NOUN, 'bank.n.02', 'sloping land beside a body of water',
                    ['bank', 'riverbank', 'sloping land'])
    store.add_sense(NOUN, 'financial_institution.n.01', 'an institution that deals in money',
                    ['financial institution', 'financial organization'])
    store.add_sense(NOUN, 'slope.n.01', 'an elevated geological formation',
                    ['slope', 'incline', 'side'])
    store.add_sense(NOUN, 'finance.n.01', 'the commercial activity of providing funds',
                    ['finance'])

    store.add_relation('bank.n.01', RelationKind.HYPERNYM, 'financial_institution.n.01')
    store.add_relation('bank.n.02', RelationKind.HYPERNYM, 'slope.n.01')
    store.add_relation('bank.n.01', RelationKind.CATEGORY, 'finance.n.01')
    store.add_relation('finance.n.01', RelationKind.CATEGORY_MEMBER, 'bank.n.01')
    return store


@pytest.fixture
def lexicon(bank_store) -> MemoryStore:
    """The bank lexicon plus multi-part-of-speech and antonym entries."""
    store = bank_store
    store.add_sense(NOUN, 'light.n.01', 'electromagnetic radiation that can be seen',
                    ['light', 'visible light', 'visible radiation'])
    store.add_sense(ADJ, 'light.a.01', 'of comparatively little physical weight',
                    ['light'])
    store.add_sense(ADJ, 'heavy.a.01', 'of comparatively great physical weight',
                    ['heavy'])
    store.add_relation('light.a.01', RelationKind.ANTONYM, 'heavy.a.01')
    store.add_relation('heavy.a.01', RelationKind.ANTONYM, 'light.a.01')

    store.add_sense(VERB, 'die.v.01', 'pass from physical life',
                    ['die', 'decease', 'kick the bucket', 'bucket', 'perish'])
    store.add_sense(NOUN, 'washington.n.01', 'the capital of the United States',
                    ['Washington', 'Washington D.C.', 'capital'])
    return store


@pytest.fixture
def lexicon_data() -> dict:
    """JSON form of a small lexicon, as MemoryStore.load reads it."""
    return {
        'senses': [
            {'id': 'good.a.01', 'pos': 'a', 'gloss': 'having desirable qualities',
             'words': ['good'], 'relations': {'antonym': ['bad.a.01']}},
            {'id': 'bad.a.01', 'pos': 's', 'gloss': 'having undesirable qualities',
             'words': ['bad', 'big'], 'relations': {'antonym': ['good.a.01']}},
            {'id': 'run.v.01', 'pos': 'v', 'gloss': 'move fast by using the legs',
             'words': ['run'], 'relations': {'hypernym': ['travel.v.01']}},
            {'id': 'travel.v.01', 'pos': 'v', 'gloss': 'change location',
             'words': ['travel', 'go', 'move']},
        ]
    }
