"""Core business logic layer.

Subpackages:
- shopping: store package sizes, price estimates, list building and cost reconciliation
"""
__all__ = ["shopping"]
