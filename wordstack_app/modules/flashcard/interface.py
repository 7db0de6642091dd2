"""Public API of the flashcard module."""
from .engine.scheduler import SchedulerEngine
from .schemas import ReviewOutcome, ReviewResult
from .services.flashcard_service import FlashcardService


def create_flashcard(user_id, word_id, source='search', notebook_id=None):
    return FlashcardService.create_flashcard(user_id, word_id, source=source, notebook_id=notebook_id)


def review_flashcard(user_id, flashcard_id, result, now=None) -> ReviewResult:
    return FlashcardService.review_flashcard(user_id, flashcard_id, result, now=now)


def list_due_flashcards(user_id, mode='recent', notebook_id=None, limit=None, now=None):
    return FlashcardService.list_due_flashcards(user_id, mode=mode, notebook_id=notebook_id, limit=limit, now=now)


__all__ = [
    'SchedulerEngine',
    'ReviewOutcome',
    'ReviewResult',
    'create_flashcard',
    'review_flashcard',
    'list_due_flashcards',
]
