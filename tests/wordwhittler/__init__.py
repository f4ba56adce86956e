"""
WordWhittler Tests Package
==========================
Test suite for lexical lookup, phrase reduction, grammar checking, text
metrics and the host surfaces.

Run all tests: python3 -m pytest tests/wordwhittler/ -v
Run specific: python3 -m pytest tests/wordwhittler/test_phrases.py -v
"""

__version__ = "1.0.0"
