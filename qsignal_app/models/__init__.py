"""
Result models module.

Immutable structures returned to the host integration layer.
"""
