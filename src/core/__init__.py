"""
Core domain models and mathematical primitives of the equation resolver.

Immutable result trees, unit bookkeeping, matrix operations and the JSON
contract, independent of parsing and rendering.
"""
