"""
WordWhittler Configuration Module
=================================
Centralized configuration for the lexicon, grammar checker, metrics and
lookup panel.

Configuration can be set via:
1. Environment variables (WW_LANGUAGETOOL_ENABLED=false)
2. Config file (wordwhittler_config.json, or the path in WW_CONFIG_FILE)
3. Direct API calls (config.set('panel.max_selection', 40))
"""

import os
import json
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field, asdict

from .config_logging import get_logger

logger = get_logger('wordwhittler.config')

# Default configuration path
CONFIG_FILE = Path(__file__).parent.parent / "wordwhittler_config.json"


def _config_file() -> Path:
    override = os.environ.get('WW_CONFIG_FILE')
    return Path(override) if override else CONFIG_FILE


@dataclass
class LexiconConfig:
    """Lexical store configuration."""
    enabled: bool = True
    source: str = "wordnet"  # "wordnet" or a path to a JSON lexicon
    data_dir: Optional[str] = None  # extra NLTK data directory
    download: bool = True  # fetch the WordNet corpus when missing


@dataclass
class LanguageToolConfig:
    """LanguageTool configuration."""
    enabled: bool = True
    language: str = "en-US"
    remote_server: Optional[str] = None
    disabled_rules: list = field(default_factory=lambda: [
        "WHITESPACE_RULE",    # Too noisy while typing
    ])
    cache_size: int = 1000


@dataclass
class MetricsConfig:
    """Text metrics configuration."""
    enabled: bool = True
    tweet_limit: int = 280
    url_weight: int = 23  # every http(s) link counts as this many characters
    readability: bool = True


@dataclass
class PanelConfig:
    """Lookup panel configuration."""
    max_selection: int = 20
    suppress_redundant_synonyms: bool = False


@dataclass
class WhittlerConfig:
    """Master configuration."""
    lexicon: LexiconConfig = field(default_factory=LexiconConfig)
    languagetool: LanguageToolConfig = field(default_factory=LanguageToolConfig)
    metrics: MetricsConfig = field(default_factory=MetricsConfig)
    panel: PanelConfig = field(default_factory=PanelConfig)


# Global configuration instance
_config: Optional[WhittlerConfig] = None


def get_config() -> WhittlerConfig:
    """Get the global configuration."""
    global _config
    if _config is None:
        _config = _load_config()
    return _config


def _load_config() -> WhittlerConfig:
    """Load configuration from file and environment."""
    config = WhittlerConfig()

    path = _config_file()
    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
            _apply_dict_to_config(config, file_config)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Could not load config file: {e}", path=str(path))

    _apply_env_to_config(config)

    return config


def _apply_dict_to_config(config: WhittlerConfig, data: Dict[str, Any]):
    """Apply dictionary values to config object."""
    for section_name, section_data in data.items():
        if hasattr(config, section_name) and isinstance(section_data, dict):
            section = getattr(config, section_name)
            for key, value in section_data.items():
                if hasattr(section, key):
                    setattr(section, key, value)


def _apply_env_to_config(config: WhittlerConfig):
    """Apply environment variables to config."""
    env_mappings = {
        'WW_LEXICON_ENABLED': ('lexicon', 'enabled', _parse_bool),
        'WW_LEXICON_SOURCE': ('lexicon', 'source', str),
        'WW_LEXICON_DATA_DIR': ('lexicon', 'data_dir', str),
        'WW_LEXICON_DOWNLOAD': ('lexicon', 'download', _parse_bool),
        'WW_LANGUAGETOOL_ENABLED': ('languagetool', 'enabled', _parse_bool),
        'WW_LANGUAGETOOL_LANGUAGE': ('languagetool', 'language', str),
        'WW_LANGUAGETOOL_SERVER': ('languagetool', 'remote_server', str),
        'WW_METRICS_ENABLED': ('metrics', 'enabled', _parse_bool),
        'WW_METRICS_TWEET_LIMIT': ('metrics', 'tweet_limit', int),
        'WW_METRICS_URL_WEIGHT': ('metrics', 'url_weight', int),
        'WW_METRICS_READABILITY': ('metrics', 'readability', _parse_bool),
        'WW_PANEL_MAX_SELECTION': ('panel', 'max_selection', int),
        'WW_PANEL_SUPPRESS_REDUNDANT_SYNONYMS': ('panel', 'suppress_redundant_synonyms', _parse_bool),
    }

    for env_var, (section, key, converter) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            try:
                section_obj = getattr(config, section)
                setattr(section_obj, key, converter(value))
            except (ValueError, AttributeError) as e:
                logger.warning(f"Invalid env var {env_var}={value}: {e}")


def _parse_bool(value: str) -> bool:
    """Parse boolean from string."""
    return value.lower() in ('true', '1', 'yes', 'on')


def is_enabled(module_name: str) -> bool:
    """Check if a module is enabled."""
    config = get_config()
    if hasattr(config, module_name):
        section = getattr(config, module_name)
        return getattr(section, 'enabled', False)
    return False


def get(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by dot-notation key.

    Example: get('languagetool.language') -> 'en-US'
    """
    obj = get_config()
    for part in key.split('.'):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            return default

    return obj


def set(key: str, value: Any):
    """
    Set a configuration value by dot-notation key.

    Example: set('metrics.readability', False)
    """
    config = get_config()
    parts = key.split('.')

    if len(parts) != 2:
        raise ValueError(f"Key must be in format 'section.key': {key}")

    section_name, attr_name = parts

    if not hasattr(config, section_name):
        raise ValueError(f"Unknown config section: {section_name}")
    section = getattr(config, section_name)
    if not hasattr(section, attr_name):
        raise ValueError(f"Unknown config key: {attr_name}")
    setattr(section, attr_name, value)


def save_config(path: Optional[Path] = None):
    """Save current configuration to file."""
    path = path or _config_file()
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(asdict(get_config()), f, indent=2)


def reset_config():
    """Reset configuration to defaults."""
    global _config
    _config = WhittlerConfig()


def disable_all():
    """Disable every integration (useful for testing)."""
    config = get_config()
    config.lexicon.enabled = False
    config.languagetool.enabled = False
    config.metrics.enabled = False
