"""
Readability Calculator for WordWhittler
=======================================
Readability scores for the info table, using textstat.

Requires: pip install textstat
"""

from typing import Dict, Any
from dataclasses import dataclass

from ..base import IntegrationBase
from ..config_logging import get_logger

logger = get_logger('wordwhittler.readability')


@dataclass
class ReadabilityReport:
    """Readability scores for one text."""
    flesch_reading_ease: float = 0.0
    flesch_kincaid_grade: float = 0.0
    gunning_fog: float = 0.0
    coleman_liau: float = 0.0
    automated_readability: float = 0.0
    consensus_grade: float = 0.0
    reading_time_minutes: float = 0.0
    word_count: int = 0
    sentence_count: int = 0
    grade_level: str = ""
    difficulty_rating: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            'flesch_reading_ease': self.flesch_reading_ease,
            'flesch_kincaid_grade': self.flesch_kincaid_grade,
            'gunning_fog': self.gunning_fog,
            'coleman_liau': self.coleman_liau,
            'automated_readability': self.automated_readability,
            'consensus_grade': self.consensus_grade,
            'reading_time_minutes': self.reading_time_minutes,
            'word_count': self.word_count,
            'sentence_count': self.sentence_count,
            'grade_level': self.grade_level,
            'difficulty_rating': self.difficulty_rating,
        }


class ReadabilityCalculator(IntegrationBase):
    """Readability analysis using textstat."""

    INTEGRATION_NAME = "Textstat"
    INTEGRATION_VERSION = "1.0.0"

    # Grade level descriptions
    GRADE_LEVELS = {
        (0, 6): "Elementary",
        (6, 9): "Middle School",
        (9, 13): "High School",
        (13, 17): "College",
        (17, 100): "Professional",
    }

    # Flesch Reading Ease interpretations
    DIFFICULTY_RATINGS = {
        (90, 1000): "Very Easy",
        (80, 90): "Easy",
        (70, 80): "Fairly Easy",
        (60, 70): "Standard",
        (50, 60): "Fairly Difficult",
        (30, 50): "Difficult",
        (-1000, 30): "Very Difficult",
    }

    WORDS_PER_MINUTE = 200.0

    def __init__(self):
        super().__init__()
        self._textstat = None
        self._initialize()

    def _initialize(self):
        """Initialize textstat library."""
        try:
            import textstat
            self._textstat = textstat
            self._available = True
        except ImportError as e:
            self._error = f"textstat not installed: {e}"
            self._available = False
            logger.warning(self._error)

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the textstat integration."""
        return {
            'available': self.is_available,
            'error': self._error,
        }

    def analyze(self, text: str) -> ReadabilityReport:
        """
        Score ``text``.

        Texts without a single word yield an empty report.
        """
        if not self.is_available or not text or not text.strip():
            return ReadabilityReport()

        ts = self._textstat
        word_count = ts.lexicon_count(text, removepunct=True)
        if not word_count:
            return ReadabilityReport()

        flesch_ease = ts.flesch_reading_ease(text)
        flesch_grade = ts.flesch_kincaid_grade(text)
        gunning = ts.gunning_fog(text)
        coleman = ts.coleman_liau_index(text)
        ari = ts.automated_readability_index(text)

        grades = [g for g in [flesch_grade, gunning, coleman, ari] if g > 0]
        consensus = sum(grades) / len(grades) if grades else 0

        return ReadabilityReport(
            flesch_reading_ease=round(flesch_ease, 1),
            flesch_kincaid_grade=round(flesch_grade, 1),
            gunning_fog=round(gunning, 1),
            coleman_liau=round(coleman, 1),
            automated_readability=round(ari, 1),
            consensus_grade=round(consensus, 1),
            reading_time_minutes=round(word_count / self.WORDS_PER_MINUTE, 1),
            word_count=word_count,
            sentence_count=ts.sentence_count(text),
            grade_level=self._lookup(self.GRADE_LEVELS, consensus),
            difficulty_rating=self._lookup(self.DIFFICULTY_RATINGS, flesch_ease),
        )

    @staticmethod
    def _lookup(table: Dict[tuple, str], score: float) -> str:
        for (low, high), label in table.items():
            if low <= score < high:
                return label
        return "Unknown"
