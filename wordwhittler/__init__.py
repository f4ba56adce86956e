"""
WordWhittler
============
Version: 1.0.0

Writing aid for a plain-text editor:
- Lexical: dictionary and thesaurus lookup for the word of interest (WordNet)
- LanguageTool: continuous grammar and style checking
- Metrics: character, word, tweet-length and readability counts

Uses lazy loading - integrations only import when accessed.
"""

__version__ = "1.0.0"

_MODULES = {
    'lexical': 'wordwhittler.lexical',
    'languagetool': 'wordwhittler.languagetool',
    'metrics': 'wordwhittler.metrics',
}

# Configuration section that switches each module on or off
_SECTIONS = {
    'lexical': 'lexicon',
    'languagetool': 'languagetool',
    'metrics': 'metrics',
}

_loaded_modules = {}


def __getattr__(name):
    """Lazy load submodules on first access."""
    if name in _MODULES:
        if name not in _loaded_modules:
            import importlib
            try:
                _loaded_modules[name] = importlib.import_module(_MODULES[name])
            except ImportError as e:
                raise ImportError(
                    f"WordWhittler module '{name}' not available. "
                    f"Install dependencies with: pip install wordwhittler"
                ) from e
        return _loaded_modules[name]
    raise AttributeError(f"module 'wordwhittler' has no attribute '{name}'")


def __dir__():
    """List available submodules."""
    return list(_MODULES.keys()) + ['config', 'base', 'get_status']


def get_status():
    """
    Get status of all integrations.

    Returns dict with the enabled switch and integration status of each module.
    """
    from . import config
    status = {
        'version': __version__,
        'modules': {}
    }

    for name in _MODULES:
        enabled = config.is_enabled(_SECTIONS[name])
        module_status = {
            'enabled': enabled,
            'available': False,
            'version': None,
            'error': None
        }

        if enabled:
            try:
                mod = __getattr__(name)
                module_status['version'] = getattr(mod, '__version__', 'unknown')
                detail = mod.get_status()
                module_status['available'] = bool(detail.get('available'))
                module_status['error'] = detail.get('error')
            except ImportError as e:
                module_status['error'] = str(e)

        status['modules'][name] = module_status

    return status
