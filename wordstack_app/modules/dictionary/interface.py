"""Public API of the dictionary module for other modules."""
from typing import Any, Dict

from ...core.extensions import db
from ...models import Word
from .services.dictionary_service import DictionaryService


def get_word_detail(spelling: str) -> Dict[str, Any]:
    return DictionaryService.get_word_detail(spelling)


def get_word_by_id(word_id: int):
    return db.session.get(Word, word_id)


def normalize_spelling(spelling: str) -> str:
    return DictionaryService.normalize_spelling(spelling)
