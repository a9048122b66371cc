"""
Test suite for qfixed

Contains:
- tests/unit/          : Unit tests for individual modules
"""
