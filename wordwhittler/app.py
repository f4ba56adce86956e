"""
WordWhittler HTTP API
=====================
Flask surface for an editor front end: lookup tree for the word of interest,
grammar matches, the info table and the phrase reduction.

Run: wordwhittler serve  (or flask --app wordwhittler.app:create_app run)
"""

from flask import Blueprint, Flask, current_app, g, jsonify, request

from . import __version__
from .config import get_config, is_enabled
from .config_logging import (
    StructuredLogger, WhittlerError, MalformedInputError, StoreAccessError,
    ValidationError, get_logger, handle_errors,
)

logger = get_logger('wordwhittler.app')

api = Blueprint('api', __name__, url_prefix='/api')


# =============================================================================
# SHARED STATE
# =============================================================================

def _state() -> dict:
    return current_app.extensions['wordwhittler']


def _get_store():
    state = _state()
    if state['store'] is None:
        from .lexical import get_store
        state['store'] = get_store()
    return state['store']


def _get_checker():
    state = _state()
    if state['checker'] is None:
        from .languagetool import get_checker
        state['checker'] = get_checker()
    return state['checker']


def _get_reduction():
    """Phrase reduction of the whole store, computed once per app."""
    state = _state()
    if state['reduction'] is None:
        from .lexical import reduce_all
        state['reduction'] = reduce_all(_get_store())
    return state['reduction']


def _require_enabled(section: str):
    if not is_enabled(section):
        raise WhittlerError(f"{section} is disabled", code="SERVICE_UNAVAILABLE",
                            status_code=503, details={'section': section})


def _text_from_request() -> str:
    data = request.get_json(silent=True) or {}
    text = data.get('text')
    if not isinstance(text, str):
        raise ValidationError("Request body must contain a 'text' string", field='text')
    return text


# =============================================================================
# ROUTES
# =============================================================================

@api.before_request
def assign_correlation_id():
    g.correlation_id = StructuredLogger.new_correlation_id()


@api.route('/status', methods=['GET'])
@handle_errors(logger)
def status():
    """Availability of the lexical store, grammar checker and readability."""
    from . import metrics

    store = _state()['store']
    if store is None:
        from . import lexical
        lexicon = lexical.get_status() if is_enabled('lexicon') else {'available': False}
    elif hasattr(store, 'get_status'):
        lexicon = store.get_status()
    else:
        lexicon = {'available': True, 'backend': type(store).__name__}

    checker = _state()['checker']
    if checker is None:
        grammar = {'enabled': is_enabled('languagetool'), 'initialized': False}
    else:
        grammar = checker.get_status()

    return jsonify({
        'success': True,
        'version': __version__,
        'lexicon': lexicon,
        'languagetool': grammar,
        'metrics': metrics.get_status(),
    })


@api.route('/lookup', methods=['GET'])
@handle_errors(logger)
def lookup_word():
    """Lookup tree, roots and full definition for ``q``."""
    from .lexical import LookupPanel

    _require_enabled('lexicon')
    surface = request.args.get('q')
    if not surface:
        raise MalformedInputError("Query parameter 'q' is required", field='q')

    panel_config = get_config().panel
    reduction = _get_reduction() if panel_config.suppress_redundant_synonyms else None
    panel = LookupPanel(_get_store(), max_selection=panel_config.max_selection,
                        reduction=reduction)
    panel.set_word_of_interest(surface)
    if panel.error:
        raise StoreAccessError(panel.error, operation='lookup')

    return jsonify({'success': True, **panel.to_dict()})


@api.route('/check', methods=['POST'])
@handle_errors(logger)
def check_text():
    """Grammar matches for the posted text, with error-list labels."""
    from .languagetool import describe

    text = _text_from_request()
    result = _get_checker().check(text)

    response = result.to_dict()
    response['labels'] = [describe(text, m) for m in result.matches]
    return jsonify(response)


@api.route('/metrics', methods=['POST'])
@handle_errors(logger)
def text_metrics():
    """Info table rows for the posted text."""
    from .metrics import compute

    _require_enabled('metrics')
    text = _text_from_request()
    return jsonify({
        'success': True,
        'rows': [row.to_dict() for row in compute(text)],
    })


@api.route('/phrases', methods=['GET'])
@handle_errors(logger)
def phrases():
    """Phrases kept by the reduction, mapped to their sense ids."""
    _require_enabled('lexicon')
    limit = request.args.get('limit', type=int)
    if limit is not None and limit < 0:
        raise ValidationError("limit must not be negative", field='limit')

    mapping = _get_reduction().to_dict()
    items = list(mapping.items())
    if limit is not None:
        items = items[:limit]

    return jsonify({
        'success': True,
        'count': len(mapping),
        'phrases': dict(items),
    })


def _render_error(error: WhittlerError):
    body = error.to_dict()
    body['error']['correlation_id'] = getattr(g, 'correlation_id', 'unknown')
    return jsonify(body), error.status_code


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(store=None, checker=None) -> Flask:
    """
    Build the Flask application.

    Args:
        store: Lexical store to serve (default: the configured shared store)
        checker: Grammar checker (default: one built from configuration)
    """
    app = Flask(__name__)
    app.json.sort_keys = False
    app.extensions['wordwhittler'] = {
        'store': store,
        'checker': checker,
        'reduction': None,
    }
    app.register_blueprint(api)
    app.register_error_handler(WhittlerError, _render_error)

    logger.info("WordWhittler API ready", version=__version__,
                store=type(store).__name__ if store is not None else 'configured')
    return app
