"""
LanguageTool Client for WordWhittler
====================================
Wraps language_tool_python for continuous grammar and style checking of the
editor text.

Features:
- Local Java server or a remote LanguageTool server
- Rule filtering from configuration
- Highlight kind per match (hint / unknown word / other)
- Suggestion markup rendered as quotes

Requires: pip install language-tool-python
"""

from typing import List, Dict, Any, Optional, Iterable
from dataclasses import dataclass, field

from ..base import IntegrationBase
from ..config_logging import get_logger

logger = get_logger('wordwhittler.languagetool')

HINT = 'hint'
UNKNOWN_WORD = 'unknown_word'
OTHER = 'other'

# Paint color for each highlight kind
HIGHLIGHT_COLORS = {
    HINT: 'lightgray',
    UNKNOWN_WORD: 'red',
    OTHER: 'yellow',
}

# LanguageTool issue types painted as hints rather than errors
HINT_ISSUE_TYPES = {'style', 'register', 'typographical', 'whitespace', 'locale-violation'}


def clean_message(message: str) -> str:
    """Render <suggestion> markup as single quotes."""
    return message.replace('<suggestion>', "'").replace('</suggestion>', "'")


def highlight_for(issue_type: str) -> str:
    issue_type = (issue_type or '').lower()
    if issue_type == 'misspelling':
        return UNKNOWN_WORD
    if issue_type in HINT_ISSUE_TYPES:
        return HINT
    return OTHER


@dataclass
class GrammarMatch:
    """A span of the text flagged by LanguageTool."""
    message: str
    offset: int
    length: int
    rule_id: str = ""
    category: str = "MISC"
    issue_type: str = ""
    replacements: List[str] = field(default_factory=list)
    context: str = ""

    # Severity mapping from LanguageTool categories
    SEVERITY_MAP = {
        'GRAMMAR': 'High',
        'TYPOS': 'High',
        'PUNCTUATION': 'Medium',
        'CASING': 'Medium',
        'SEMANTICS': 'Medium',
        'STYLE': 'Low',
        'TYPOGRAPHY': 'Low',
        'COLLOCATIONS': 'Low',
        'REDUNDANCY': 'Low',
        'MISC': 'Low',
    }

    @property
    def start(self) -> int:
        return self.offset

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def severity(self) -> str:
        return self.SEVERITY_MAP.get(self.category, 'Low')

    @property
    def highlight(self) -> str:
        return highlight_for(self.issue_type)

    def contains(self, position: int) -> bool:
        return self.start <= position <= self.end

    def to_dict(self) -> Dict[str, Any]:
        return {
            'message': self.message,
            'start': self.start,
            'end': self.end,
            'rule_id': self.rule_id,
            'category': self.category,
            'issue_type': self.issue_type,
            'severity': self.severity,
            'highlight': self.highlight,
            'color': HIGHLIGHT_COLORS[self.highlight],
            'replacements': self.replacements,
            'context': self.context,
        }


def _attr(match, *names, default=None):
    # First name is the one that applies to the oldest supported release.
    # language_tool_python 2.7 and 2.8 expose ruleId, errorLength and ruleIssueType;
    # 2.9 and later expose rule_id, error_length and rule_issue_type.
    # message, offset, replacements, category and context are spelled the same in both.
    for name in names:
        if hasattr(match, name):
            return getattr(match, name)
    return default


class LanguageToolClient(IntegrationBase):
    """
    LanguageTool integration for grammar checking.

    Runs a local Java server unless ``remote_server`` is given.
    """

    INTEGRATION_NAME = "LanguageTool"
    INTEGRATION_VERSION = "1.0.0"

    def __init__(self, language: str = 'en-US', remote_server: Optional[str] = None,
                 disabled_rules: Iterable[str] = (), cache_size: int = 1000, tool=None):
        """
        Initialize LanguageTool client.

        Args:
            language: Language code (default: 'en-US')
            remote_server: URL of a LanguageTool server to use instead of a local one
            disabled_rules: Rule IDs whose matches are dropped
            cache_size: Local server result cache size
            tool: Already constructed checker object (skips server start-up)
        """
        super().__init__()
        self.language = language
        self.remote_server = remote_server
        self.skip_rules = set(disabled_rules)
        self._cache_size = cache_size
        self._tool = tool
        if tool is None:
            self._init_tool()
        else:
            self._available = True

    def _init_tool(self):
        """Initialize LanguageTool (starts a local Java server when needed)."""
        try:
            import language_tool_python

            if self.remote_server:
                self._tool = language_tool_python.LanguageTool(
                    self.language, remote_server=self.remote_server
                )
            else:
                self._tool = language_tool_python.LanguageTool(
                    self.language,
                    config={'cacheSize': self._cache_size, 'pipelineCaching': True}
                )
            self._available = True
            logger.info("LanguageTool ready", language=self.language,
                        remote_server=self.remote_server)

        except ImportError as e:
            self._error = f"language-tool-python not installed: {e}"
            self._available = False
            logger.warning(self._error)

        except Exception as e:
            self._error = f"LanguageTool initialization failed: {e}"
            self._available = False
            logger.warning(self._error)

    @property
    def is_available(self) -> bool:
        """Check if LanguageTool is available."""
        return self._available and self._tool is not None

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the LanguageTool integration."""
        return {
            'available': self.is_available,
            'language': self.language if self.is_available else None,
            'remote_server': self.remote_server,
            'disabled_rules': sorted(self.skip_rules),
            'error': self._error,
        }

    def check(self, text: str) -> List[GrammarMatch]:
        """
        Check text for grammar issues.

        Args:
            text: Full editor text

        Returns:
            GrammarMatch objects in text order
        """
        if not self.is_available or not text:
            return []

        matches = self._tool.check(text)

        issues = []
        for match in matches:
            rule_id = _attr(match, 'ruleId', 'rule_id', default='')
            if rule_id in self.skip_rules:
                continue

            replacements = _attr(match, 'replacements', default=None) or []
            issues.append(GrammarMatch(
                message=clean_message(_attr(match, 'message', default='')),
                offset=_attr(match, 'offset', default=0),
                length=_attr(match, 'errorLength', 'error_length', default=0),
                rule_id=rule_id,
                category=_attr(match, 'category', default='MISC') or 'MISC',
                issue_type=_attr(match, 'ruleIssueType', 'rule_issue_type', default='') or '',
                replacements=list(replacements)[:5],
                context=_attr(match, 'context', default='') or '',
            ))

        issues.sort(key=lambda m: (m.start, m.end))
        return issues

    def disable_rule(self, rule_id: str):
        """Disable a specific rule."""
        self.skip_rules.add(rule_id)

    def enable_rule(self, rule_id: str):
        """Enable a previously disabled rule."""
        self.skip_rules.discard(rule_id)

    def close(self):
        """Shut down the LanguageTool server."""
        if self._tool is not None and hasattr(self._tool, 'close'):
            try:
                self._tool.close()
            except Exception as e:
                logger.warning(f"LanguageTool shutdown failed: {e}")
        self._tool = None
        self._available = False
