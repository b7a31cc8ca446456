"""
Tunga Notes Backend - personal note-taking REST API

Authenticated users create, read, update and delete their own notes.
"""

__version__ = "1.0.0"
