"""
Test suite for bigmath

Contains:
- tests/unit/          : Unit tests for calculators, value types, contracts, bulk operator
"""
