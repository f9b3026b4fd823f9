"""
Application Ports

Interfaces between the application services and the adapters.
"""

from .verse_repository import IVerseRepository

__all__ = [
    "IVerseRepository",
]
