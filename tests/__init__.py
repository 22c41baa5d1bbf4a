"""
Test suite for the equation resolver core

Contains:
- tests/unit/          : Unit tests for individual modules and the resolve driver
"""
