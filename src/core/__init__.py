"""
Core domain models, mathematical primitives, and invariants.

This module contains the foundational building blocks of the pool engine
that are independent of asset implementations and the hosting application.
"""
