"""
Shared enums, errors and the randomness source for the SCM simulator.
"""

__all__ = []
