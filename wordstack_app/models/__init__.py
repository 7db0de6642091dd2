"""Database models package for WordStack."""

from ..core.extensions import db

from .user import User
from .dictionary import Example, Sense, Word
from .flashcard import Flashcard
from .notebook import Notebook, NotebookWord
from .article import GeneratedArticle

__all__ = [
    'db',
    'User',
    'Word',
    'Sense',
    'Example',
    'Flashcard',
    'Notebook',
    'NotebookWord',
    'GeneratedArticle',
]
