"""Core business logic layer.

Subpackages:
- planning: local and AI meal suggestions, plan generation flow
- reporting: daily nutrition totals against goals
"""
__all__ = ["planning", "reporting"]
