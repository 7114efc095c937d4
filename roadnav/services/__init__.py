"""Services layer - Application orchestration.

Available services:
- NavigationService: Load a map, then export, list or route on it
"""

from .navigation import NavigationService

__all__ = ["NavigationService"]
