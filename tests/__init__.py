"""
Test suite for fixpoint

Contains:
- tests/unit/          : Unit tests for individual modules
"""
