"""
Database models for the notes API.

Models included:
    - User: account with username/password authentication
    - Note: personal note owned by exactly one user
"""

from .base import BaseModel
from .note import Note
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
]
