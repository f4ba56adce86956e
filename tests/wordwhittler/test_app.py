"""
Tests for the HTTP API
======================
Flask test client over an in-memory lexicon and a stand-in grammar checker.
"""

from types import SimpleNamespace

import pytest

from wordwhittler import config
from wordwhittler.app import create_app
from wordwhittler.languagetool import GrammarChecker, LanguageToolClient
from wordwhittler.lexical import LexicalStore
from wordwhittler.config_logging import StoreAccessError


class StubTool:
    def check(self, text):
        index = text.find('teh')
        if index < 0:
            return []
        return [SimpleNamespace(
            ruleId='MORFOLOGIK_RULE_EN_US', message='Possible spelling mistake found.',
            offset=index, errorLength=3, category='TYPOS', ruleIssueType='misspelling',
            replacements=['the'], context=text,
        )]


class DownStore(LexicalStore):
    def lookup_entry(self, pos, lemma):
        raise StoreAccessError("store offline", operation='lookup_entry')

    def all_entries(self, pos):
        raise StoreAccessError("store offline", operation='all_entries')

    def relation_targets(self, sense, kind):
        raise StoreAccessError("store offline", operation='relation_targets')


@pytest.fixture
def checker() -> GrammarChecker:
    return GrammarChecker(client=LanguageToolClient(tool=StubTool()))


@pytest.fixture
def client(lexicon, checker):
    app = create_app(store=lexicon, checker=checker)
    app.config['TESTING'] = True
    return app.test_client()


class TestStatus:
    """Tests for GET /api/status."""

    def test_status(self, client):
        """Test the integration summary."""
        response = client.get('/api/status')
        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['lexicon']['backend'] == 'MemoryStore'
        assert data['languagetool']['enabled'] is True
        assert data['metrics']['counts'] is True


class TestLookup:
    """Tests for GET /api/lookup."""

    def test_lookup(self, client):
        """Test a successful lookup."""
        response = client.get('/api/lookup?q=bank')
        assert response.status_code == 200
        data = response.get_json()
        assert data['roots'] == 'bank'
        groups = data['tree']['entries'][0]['groups']
        assert groups[0]['kind'] == 'synonym'
        assert [t['lemma'] for t in groups[0]['targets']] == [
            'depository financial institution', 'riverbank', 'sloping land',
        ]

    def test_no_match(self, client):
        """Test a word without entries."""
        data = client.get('/api/lookup?q=zyzzyva').get_json()
        assert data['success'] is True
        assert data['tree']['entries'] == []

    @pytest.mark.parametrize('query', ['', '?q='])
    def test_missing_query(self, client, query):
        """Test that a missing word is rejected."""
        response = client.get(f'/api/lookup{query}')
        assert response.status_code == 400
        body = response.get_json()
        assert body['success'] is False
        assert body['error']['code'] == 'MALFORMED_INPUT'
        assert body['error']['correlation_id']

    def test_suppress_redundant_synonyms(self, client):
        """Test that the configured reduction hides covered words."""
        config.set('panel.suppress_redundant_synonyms', True)
        data = client.get('/api/lookup?q=die').get_json()
        lemmas = [t['lemma'] for t in data['tree']['entries'][0]['groups'][0]['targets']]
        assert 'bucket' not in lemmas
        assert 'kick the bucket' in lemmas

    def test_lexicon_disabled(self, client):
        """Test the configuration switch."""
        config.set('lexicon.enabled', False)
        response = client.get('/api/lookup?q=bank')
        assert response.status_code == 503
        assert response.get_json()['error']['code'] == 'SERVICE_UNAVAILABLE'

    def test_store_failure(self, checker):
        """Test that a failing store becomes a 503."""
        client = create_app(store=DownStore(), checker=checker).test_client()
        response = client.get('/api/lookup?q=bank')
        assert response.status_code == 503
        assert response.get_json()['error']['code'] == 'STORE_ACCESS_ERROR'


class TestCheck:
    """Tests for POST /api/check."""

    def test_check(self, client):
        """Test grammar matches and labels."""
        response = client.post('/api/check', json={'text': 'This is teh end.'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['matches'][0]['highlight'] == 'unknown_word'
        assert data['labels'] == ['teh: Possible spelling mistake found.']

    def test_clean_text(self, client):
        """Test text without problems."""
        data = client.post('/api/check', json={'text': 'All good here.'}).get_json()
        assert data['matches'] == []

    @pytest.mark.parametrize('body', [{}, {'text': 42}])
    def test_bad_body(self, client, body):
        """Test that the text field is required."""
        response = client.post('/api/check', json=body)
        assert response.status_code == 400
        assert response.get_json()['error']['code'] == 'VALIDATION_ERROR'


class TestMetrics:
    """Tests for POST /api/metrics."""

    def test_metrics(self, client):
        """Test the info table rows."""
        config.set('metrics.readability', False)
        response = client.post('/api/metrics', json={'text': 'hello world'})
        assert response.status_code == 200
        rows = {r['name']: r for r in response.get_json()['rows']}
        assert rows['Words']['value'] == '2'
        assert rows['Twitter Characters Remaining']['value'] == '269'
        assert rows['Twitter Characters Remaining']['danger'] is False

    def test_metrics_disabled(self, client):
        """Test the configuration switch."""
        config.set('metrics.enabled', False)
        response = client.post('/api/metrics', json={'text': 'hello'})
        assert response.status_code == 503


class TestPhrases:
    """Tests for GET /api/phrases."""

    def test_phrases(self, client):
        """Test the reduction mapping."""
        data = client.get('/api/phrases').get_json()
        assert data['phrases']['kick the bucket'] == 'die.v.01'
        assert data['count'] == len(data['phrases'])

    def test_limit(self, client):
        """Test limiting the output."""
        data = client.get('/api/phrases?limit=1').get_json()
        assert len(data['phrases']) == 1
        assert data['count'] > 1

    def test_negative_limit(self, client):
        """Test that negative limits are rejected."""
        response = client.get('/api/phrases?limit=-1')
        assert response.status_code == 400

    def test_computed_once(self, lexicon, checker, monkeypatch):
        """Test that the reduction is cached per app."""
        import wordwhittler.lexical as lexical
        calls = []
        real = lexical.reduce_all

        def counting(store):
            calls.append(store)
            return real(store)

        monkeypatch.setattr(lexical, 'reduce_all', counting)
        client = create_app(store=lexicon, checker=checker).test_client()
        client.get('/api/phrases')
        client.get('/api/phrases?limit=2')
        assert len(calls) == 1
