"""
WordWhittler Base Classes
=========================
Base classes shared by the integrations that wrap external libraries
(WordNet, LanguageTool, textstat) and by the checkers built on them.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field
import time

__version__ = "1.0.0"


@dataclass
class CheckResult:
    """Result of running a checker over the editor text."""
    matches: List[Any] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)
    processing_time_ms: float = 0.0
    checker_name: str = ""
    success: bool = True
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            'matches': [m.to_dict() for m in self.matches],
            'metrics': self.metrics,
            'processing_time_ms': self.processing_time_ms,
            'checker_name': self.checker_name,
            'success': self.success,
            'error': self.error,
        }


class CheckerBase(ABC):
    """
    Abstract base class for checkers run over the whole document.

    Initialization is lazy and a failing checker reports its error in the
    result instead of raising, so one broken integration never takes the
    editor session down.
    """

    CHECKER_NAME: str = "Checker"
    CHECKER_VERSION: str = "1.0.0"

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._initialized = False
        self._init_error: Optional[str] = None

    @abstractmethod
    def _initialize(self) -> bool:
        """
        Initialize the checker (load models, connect to services, etc.).

        Returns True if initialization succeeded.
        Called lazily on first check.
        """

    @abstractmethod
    def _check_impl(self, text: str) -> List[Any]:
        """Return the matches found in ``text``."""

    def check(self, text: str) -> CheckResult:
        """
        Run the checker on the document text.

        Handles initialization, timing, and error handling.
        """
        start_time = time.time()

        result = CheckResult(checker_name=self.CHECKER_NAME)

        if not self.enabled:
            result.metrics['skipped'] = 'disabled'
            return result

        if not self._initialized:
            try:
                self._initialized = self._initialize()
            except Exception as e:
                self._init_error = str(e)
                result.success = False
                result.error = f"Initialization failed: {e}"
                return result

        if not self._initialized:
            result.success = False
            result.error = self._init_error or "Initialization failed"
            return result

        try:
            matches = self._check_impl(text)
            result.matches = matches
            result.metrics['match_count'] = len(matches)
        except Exception as e:
            result.success = False
            result.error = f"Check failed: {e}"

        result.processing_time_ms = (time.time() - start_time) * 1000
        return result

    def get_status(self) -> Dict[str, Any]:
        """Get the checker's enabled and initialization state."""
        return {
            'enabled': self.enabled,
            'initialized': self._initialized,
            'error': self._init_error,
        }


class IntegrationBase(ABC):
    """
    Abstract base class for integrations with external libraries.
    """

    INTEGRATION_NAME: str = "Integration"
    INTEGRATION_VERSION: str = "1.0.0"

    def __init__(self):
        self._available = False
        self._error: Optional[str] = None

    @property
    def is_available(self) -> bool:
        """Check if the integration is available and working."""
        return self._available

    @property
    def error(self) -> Optional[str]:
        """Get initialization error if any."""
        return self._error

    @abstractmethod
    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the integration."""
