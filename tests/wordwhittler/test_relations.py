"""
Tests for the Relation Expander
===============================
Relation groups, the lookup tree, root words and the full definition.
"""

import pytest

from wordwhittler.config_logging import StoreAccessError
from wordwhittler.lexical import (
    LexicalStore, MemoryStore, PartOfSpeech, RelationKind, build_tree, expand,
    full_definition, lookup, reduce_all, root_words,
)
from wordwhittler.lexical.relations import synonyms, targets

NOUN = PartOfSpeech.NOUN

GROUP_ORDER = [
    RelationKind.SYNONYM, RelationKind.ANTONYM, RelationKind.HYPERNYM,
    RelationKind.CATEGORY, RelationKind.CATEGORY_MEMBER,
]


class ReversedStore(LexicalStore):
    """Wraps a store and answers every listing query in reverse order."""

    def __init__(self, inner):
        self.inner = inner

    def lookup_entry(self, pos, lemma):
        return self.inner.lookup_entry(pos, lemma)

    def all_entries(self, pos):
        return list(reversed(list(self.inner.all_entries(pos))))

    def relation_targets(self, sense, kind):
        return list(reversed(self.inner.relation_targets(sense, kind)))


@pytest.fixture
def everything_store() -> MemoryStore:
    """One sense with every relation kind populated."""
    store = MemoryStore()
    store.add_sense(NOUN, 'hot.n.01', 'high temperature', ['hot', 'heat', 'warmth'])
    store.add_sense(NOUN, 'cold.n.01', 'low temperature', ['cold', 'coldness'])
    store.add_sense(NOUN, 'temperature.n.01', 'degree of warmth', ['temperature'])
    store.add_sense(NOUN, 'physics.n.01', 'the science of matter', ['physics'])
    store.add_sense(NOUN, 'thermal.n.01', 'a rising current of warm air', ['thermal'])
    store.add_relation('hot.n.01', RelationKind.CATEGORY_MEMBER, 'thermal.n.01')
    store.add_relation('hot.n.01', RelationKind.CATEGORY, 'physics.n.01')
    store.add_relation('hot.n.01', RelationKind.HYPERNYM, 'temperature.n.01')
    store.add_relation('hot.n.01', RelationKind.ANTONYM, 'cold.n.01')
    return store


class TestExpand:
    """Tests for expand()."""

    def test_bank_synonyms_exclude_self(self, bank_store):
        """Test the two-sense bank scenario: the headword is left out."""
        entry, = lookup(bank_store, 'bank')
        groups = expand(bank_store, entry)
        assert groups[0].kind is RelationKind.SYNONYM
        lemmas = [w.lemma for w in groups[0].targets]
        assert lemmas == ['depository financial institution', 'riverbank', 'sloping land']
        assert 'bank' not in lemmas

    def test_synonyms_keep_sense(self, bank_store):
        """Test that each synonym still knows which sense it came from."""
        entry, = lookup(bank_store, 'bank')
        by_lemma = {w.lemma: w.sense_id for w in synonyms(entry)}
        assert by_lemma['depository financial institution'] == 'bank.n.01'
        assert by_lemma['riverbank'] == 'bank.n.02'

    def test_bank_group_order(self, bank_store):
        """Test the groups present for bank."""
        entry, = lookup(bank_store, 'bank')
        kinds = [g.kind for g in expand(bank_store, entry)]
        assert kinds == [RelationKind.SYNONYM, RelationKind.HYPERNYM, RelationKind.CATEGORY]

    def test_hypernyms_across_senses(self, bank_store):
        """Test that pointer targets of every sense are merged and sorted."""
        entry, = lookup(bank_store, 'bank')
        hypernyms = [w.lemma for w in targets(bank_store, entry, RelationKind.HYPERNYM)]
        assert hypernyms == [
            'financial institution', 'financial organization', 'incline', 'side', 'slope',
        ]

    def test_full_group_order(self, everything_store):
        """Test display order when every group is populated."""
        entry, = lookup(everything_store, 'hot')
        assert [g.kind for g in expand(everything_store, entry)] == GROUP_ORDER

    def test_order_independent_of_store(self, everything_store):
        """Test that store iteration order does not change the groups."""
        wrapped = ReversedStore(everything_store)
        entry, = lookup(wrapped, 'hot')
        assert expand(wrapped, entry) == expand(everything_store, entry)

    def test_no_empty_groups(self, lexicon):
        """Test that no entry of the lexicon gets an empty group."""
        for pos in PartOfSpeech:
            for entry in lexicon.all_entries(pos):
                for group in expand(lexicon, entry):
                    assert group.targets

    def test_entry_without_synonyms(self, lexicon):
        """Test that an entry whose only word is itself gets no synonym group."""
        entry, = lookup(lexicon, 'finance')
        assert [g.kind for g in expand(lexicon, entry)] == [RelationKind.CATEGORY_MEMBER]

    def test_antonyms(self, lexicon):
        """Test antonym expansion."""
        noun, adjective = lookup(lexicon, 'light')
        groups = {g.kind: g for g in expand(lexicon, adjective)}
        assert [w.lemma for w in groups[RelationKind.ANTONYM].targets] == ['heavy']
        assert RelationKind.SYNONYM not in groups

    def test_duplicate_targets_once(self):
        """Test that a target reached from two senses appears once."""
        store = MemoryStore()
        store.add_sense(NOUN, 'dog.n.01', 'a domesticated canid', ['dog', 'domestic dog'])
        store.add_sense(NOUN, 'dog.n.02', 'a dull unattractive person', ['dog'])
        store.add_sense(NOUN, 'animal.n.01', 'a living organism', ['animal', 'beast'])
        store.add_relation('dog.n.01', RelationKind.HYPERNYM, 'animal.n.01')
        store.add_relation('dog.n.02', RelationKind.HYPERNYM, 'animal.n.01')
        entry, = lookup(store, 'dog')
        group = targets(store, entry, RelationKind.HYPERNYM)
        assert [w.lemma for w in group] == ['animal', 'beast']

    def test_same_lemma_different_senses_kept(self):
        """Test that equal spellings from different senses are not merged."""
        store = MemoryStore()
        store.add_sense(NOUN, 'trunk.n.01', 'the main stem of a tree', ['trunk', 'bole'])
        store.add_sense(NOUN, 'trunk.n.02', 'luggage', ['trunk', 'bole'])
        entry, = lookup(store, 'trunk')
        words = synonyms(entry)
        assert [w.lemma for w in words] == ['bole', 'bole']
        assert len({w.key for w in words}) == 2

    def test_reduction_suppresses_covered_words(self, lexicon):
        """Test that a reduction drops single words covered by a phrase."""
        entry, = lookup(lexicon, 'die')
        plain = [w.lemma for w in synonyms(entry)]
        reduced = [w.lemma for w in synonyms(entry, reduce_all(lexicon))]
        assert 'bucket' in plain
        assert 'bucket' not in reduced
        assert 'kick the bucket' in reduced

    def test_store_failure_propagates(self, bank_store):
        """Test that a failing pointer query is not skipped."""
        class FailingStore(ReversedStore):
            def relation_targets(self, sense, kind):
                raise StoreAccessError("disk error", operation='relation_targets')

        wrapped = FailingStore(bank_store)
        entry, = lookup(wrapped, 'bank')
        with pytest.raises(StoreAccessError):
            expand(wrapped, entry)


class TestBuildTree:
    """Tests for the lookup tree."""

    def test_tree_structure(self, lexicon):
        """Test entry nodes, group labels and leaf order."""
        entries = lookup(lexicon, 'light')
        tree = build_tree(lexicon, 'light', entries)
        assert tree.surface == 'light'
        assert [n.label for n in tree.entries] == ['light (noun)', 'light (adjective)']
        assert tree.entries[1].groups[0].label == 'antonyms'
        assert tree.first_word().lemma == 'visible light'

    def test_empty_tree(self, lexicon):
        """Test the tree for a word with no entries."""
        tree = build_tree(lexicon, 'zyzzyva', [])
        assert tree.is_empty
        assert tree.first_word() is None
        assert tree.to_dict() == {'surface': 'zyzzyva', 'entries': []}

    def test_to_dict(self, bank_store):
        """Test the serialized tree."""
        tree = build_tree(bank_store, 'bank', lookup(bank_store, 'bank'))
        data = tree.to_dict()
        node = data['entries'][0]
        assert node['label'] == 'bank (noun)'
        assert [g['kind'] for g in node['groups']] == ['synonym', 'hypernym', 'category']
        assert node['groups'][0]['targets'][0]['sense_id'] == 'bank.n.01'


class TestDefinitions:
    """Tests for root_words() and full_definition()."""

    def test_root_words_distinct(self, lexicon):
        """Test that a lemma shared by two parts of speech is listed once."""
        assert root_words(lookup(lexicon, 'light')) == 'light'
        assert root_words([]) == ''

    def test_full_definition(self, bank_store):
        """Test numbered glosses under the part of speech."""
        text = full_definition(lookup(bank_store, 'bank'))
        assert text == (
            "noun\n"
            "1 a financial institution that accepts deposits\n"
            "2 sloping land beside a body of water"
        )

    def test_full_definition_blocks(self, lexicon):
        """Test one block per entry, separated by a blank line."""
        blocks = full_definition(lookup(lexicon, 'light')).split('\n\n')
        assert [b.splitlines()[0] for b in blocks] == ['noun', 'adjective']
