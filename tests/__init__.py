"""
Test suite for longreal

Contains:
- tests/unit/          : Unit tests for individual modules
"""
