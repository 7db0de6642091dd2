from .flashcard_service import FlashcardService, serialize_flashcard

__all__ = ['FlashcardService', 'serialize_flashcard']
