"""
Test suite for seebinum

Contains:
- tests/unit/          : Unit tests for conversions, arithmetic, parsing and CLI output
"""
