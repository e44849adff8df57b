"""Adapters for external services"""

from adapters import gemini_adapter

__all__ = ["gemini_adapter"]
