"""
Test suite for simple-swap-amm

Contains:
- tests/unit/          : Unit tests for math, contracts, pool components and engine
"""
